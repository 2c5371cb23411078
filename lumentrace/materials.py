"""
Materials system.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
- Dielectric (glass, water - with refraction)

Materials are immutable once built and may be shared by any number of shapes.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
import math

import numpy as np

from .vec3 import Vec3, Color
from .ray import Ray

if TYPE_CHECKING:
    from .shapes import HitRecord


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    attenuation: Color
    scattered_ray: Ray


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            hit: The intersection being shaded
            rng: Random source of the current render

        Returns:
            ScatterResult if ray scatters, None if absorbed
        """
        pass


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: The base color (RGB, each component 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        scatter_direction = hit.normal + Vec3.random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = hit.normal

        return ScatterResult(
            attenuation=self.albedo,
            scattered_ray=Ray(hit.point, scatter_direction)
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Blur of the reflection (0 = mirror, 1 = very rough),
                values above 1 are clamped to 1

        Raises:
            ValueError: If fuzz is negative
        """
        if not fuzz >= 0:
            raise ValueError(f"Metal fuzz must not be negative, got {fuzz}")
        self.albedo = albedo
        self.fuzz = min(fuzz, 1.0)

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        reflected = ray_in.direction.normalize().reflect(hit.normal)

        # Reflections into the surface are absorbed
        if reflected.dot(hit.normal) <= 0:
            return None

        direction = reflected
        if self.fuzz > 0:
            direction = reflected + Vec3.random_in_unit_sphere(rng) * self.fuzz

        return ScatterResult(
            attenuation=self.albedo,
            scattered_ray=Ray(hit.point, direction)
        )

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class Dielectric(Material):
    """Dielectric (glass-like) material with refraction."""

    def __init__(self, ir: float = 1.5):
        """Create a dielectric material.

        Args:
            ir: Index of refraction (1.0 = air, 1.5 = glass, 2.4 = diamond)

        Raises:
            ValueError: If the index is not positive
        """
        if not ir > 0:
            raise ValueError(f"Index of refraction must be positive, got {ir}")
        self.ir = ir

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        # Entering the surface from outside or leaving it from inside
        refraction_ratio = 1.0 / self.ir if hit.front_face else self.ir

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(hit.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = refraction_ratio * sin_theta > 1.0

        if cannot_refract or rng.random() < self.reflectance(cos_theta, refraction_ratio):
            direction = unit_direction.reflect(hit.normal)
        else:
            direction = unit_direction.refract(hit.normal, refraction_ratio)

        return ScatterResult(
            attenuation=Color(1.0, 1.0, 1.0),
            scattered_ray=Ray(hit.point, direction)
        )

    @staticmethod
    def reflectance(cosine: float, ref_idx: float) -> float:
        """Schlick's approximation for reflectance."""
        r0 = (1 - ref_idx) / (1 + ref_idx)
        r0 = r0 * r0
        return r0 + (1 - r0) * pow(1 - cosine, 5)

    def __repr__(self) -> str:
        return f"Dielectric(ir={self.ir})"
