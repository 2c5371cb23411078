"""
Renderer module - the heart of the ray tracer.

Implements:
- Path tracing with a fixed bounce budget
- Random jittered multi-sampling per pixel
- Gamma-corrected RGBA8 output into a Framebuffer

Every render draws from a single numpy Generator seeded from the settings,
so a fixed seed reproduces the image exactly.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Optional, Callable
import numpy as np

from .vec3 import Color
from .ray import Ray
from .camera import Camera
from .shapes import Hittable
from .framebuffer import Framebuffer, color_to_rgba

logger = logging.getLogger(__name__)

# Hits closer than this are the surface the ray just left
T_MIN = 0.001

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 1280
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel: int = 100
    max_depth: int = 50
    seed: Optional[int] = None

    def __post_init__(self):
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.width < 2 or self.height < 2:
            raise ValueError(
                f"Image must be at least 2x2 pixels, got {self.width}x{self.height}"
            )
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")

    @property
    def height(self) -> int:
        """Image height derived from width and aspect ratio."""
        return int(self.width / self.aspect_ratio)


def sky_color(ray: Ray) -> Color:
    """Background seen by rays that escape the scene.

    A vertical blend from white at the horizon to sky blue straight up (+Z).
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.z + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


class Renderer:
    """Single-threaded path tracing renderer."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Hittable, camera: Camera) -> Framebuffer:
        """Render the scene into a new framebuffer.

        Args:
            scene: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            The finished RGBA8 framebuffer
        """
        width = self.settings.width
        height = self.settings.height
        samples = self.settings.samples_per_pixel
        rng = np.random.default_rng(self.settings.seed)

        logger.info(
            "Rendering %dx%d, %d samples/pixel, max depth %d",
            width, height, samples, self.settings.max_depth
        )
        start = time.perf_counter()

        framebuffer = Framebuffer(width, height)
        for y in range(height):
            for x in range(width):
                pixel_color = self.sample_pixel(x, y, scene, camera, rng)
                framebuffer.set_pixel(x, y, *color_to_rgba(pixel_color, samples))

            if self._progress_callback:
                self._progress_callback((y + 1) / height)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return framebuffer

    def sample_pixel(
        self,
        x: int,
        y: int,
        scene: Hittable,
        camera: Camera,
        rng: np.random.Generator
    ) -> Color:
        """Sum the color samples for one pixel.

        Args:
            x: Column, 0 = left
            y: Row in camera space, 0 = bottom
            scene: The scene to trace against
            camera: The camera generating primary rays
            rng: Random source for jitter and scattering

        Returns:
            The sum (not the mean) of samples_per_pixel colors
        """
        width = self.settings.width
        height = self.settings.height
        max_depth = self.settings.max_depth

        pixel_color = Color(0, 0, 0)
        for _ in range(self.settings.samples_per_pixel):
            u = (x + rng.random()) / (width - 1)
            v = (y + rng.random()) / (height - 1)
            ray = camera.get_ray(u, v)
            pixel_color = pixel_color + self.ray_color(ray, scene, max_depth, rng)

        return pixel_color

    def ray_color(
        self,
        ray: Ray,
        scene: Hittable,
        depth: int,
        rng: np.random.Generator
    ) -> Color:
        """Compute the color carried back along a ray.

        The path is followed iteratively: each bounce multiplies the running
        attenuation, and the path ends at the sky, at an absorbing surface,
        or when `depth` bounces have been spent.

        Args:
            ray: The ray to trace
            scene: The scene to trace against
            depth: Maximum number of scene intersections along the path
            rng: Random source for the materials

        Returns:
            The computed color for this ray
        """
        attenuation = WHITE

        for _ in range(depth):
            hit_record = scene.hit(ray, T_MIN, float('inf'))

            if hit_record is None:
                return attenuation * sky_color(ray)

            if hit_record.material is None:
                return BLACK

            scatter_result = hit_record.material.scatter(ray, hit_record, rng)
            if scatter_result is None:
                return BLACK

            attenuation = attenuation * scatter_result.attenuation
            ray = scatter_result.scattered_ray

        # Bounce budget exhausted
        return BLACK
