"""
Camera module for generating primary rays.

Supports:
- Perspective projection
- Configurable vertical field of view
- Arbitrary positioning via look-at

World up defaults to +Z, matching the sky gradient in the renderer.
"""

from __future__ import annotations
import math
from .vec3 import Vec3, Point3
from .ray import Ray


class CameraError(ValueError):
    """Camera parameters that would produce a degenerate view."""
    pass


class Camera:
    """A pinhole camera with perspective projection."""

    def __init__(
        self,
        look_from: Point3,
        look_at: Point3,
        vup: Vec3 = Vec3(0, 0, 1),
        vfov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0
    ):
        """Create a camera.

        Args:
            look_from: Camera position in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 0, 1))
            vfov: Vertical field of view in degrees
            aspect_ratio: Width / Height ratio

        Raises:
            CameraError: If the parameters do not define a usable view
        """
        if not 0.0 < vfov < 180.0:
            raise CameraError(f"Vertical field of view must be in (0, 180) degrees, got {vfov}")
        if aspect_ratio <= 0:
            raise CameraError(f"Aspect ratio must be positive, got {aspect_ratio}")

        view = look_from - look_at
        if view.near_zero():
            raise CameraError("Camera position and look-at target must differ")
        if vup.cross(view).near_zero():
            raise CameraError("Up vector must not be parallel to the view direction")

        theta = math.radians(vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Compute orthonormal camera basis
        self.w = view.normalize()               # Points backward from camera
        self.u = vup.cross(self.w).normalize()  # Points right
        self.v = self.w.cross(self.u)           # Points up

        self.origin = look_from
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.horizontal = self.u * viewport_width
        self.vertical = self.v * viewport_height
        self.lower_left_corner = (
            self.origin
            - self.horizontal / 2
            - self.vertical / 2
            - self.w
        )

    def get_ray(self, s: float, t: float) -> Ray:
        """Generate a ray for the given coordinates on the image plane.

        Args:
            s: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            t: Vertical coordinate [0, 1] (0 = bottom, 1 = top)

        Returns:
            A ray from the camera through the specified point
        """
        direction = (
            self.lower_left_corner
            + self.horizontal * s
            + self.vertical * t
            - self.origin
        )
        return Ray(self.origin, direction)

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, looking_at={self.lower_left_corner + self.horizontal/2 + self.vertical/2})"
