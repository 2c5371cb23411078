"""
Built-in scenes.

The world is Z-up; the default camera sits at the origin looking down -X,
so +Y is to the right of the image.
"""

from __future__ import annotations

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere, HittableList
from .materials import Lambertian, Metal, Dielectric


def create_single_sphere_scene() -> HittableList:
    """One diffuse sphere straight ahead of the default camera."""
    world = HittableList()
    world.add(Sphere(Point3(-1, 0, 0), 0.5, Lambertian(Color(0.7, 0.3, 0.3))))
    return world


def create_demo_scene() -> HittableList:
    """Ground plus three spheres: hollow glass, diffuse and fuzzy metal."""
    world = HittableList()

    ground = Lambertian(Color(0.8, 0.8, 0.0))
    center = Lambertian(Color(0.1, 0.2, 0.5))
    glass = Dielectric(1.5)
    metal = Metal(Color(0.8, 0.6, 0.2), 0.1)

    # Ground is a huge sphere below the others
    world.add(Sphere(Point3(-1, 0, -100.5), 100, ground))
    world.add(Sphere(Point3(-1, 0, 0), 0.5, center))

    # Hollow glass: the inner, negative-radius sphere shares the material
    world.add(Sphere(Point3(-1, -1, 0), 0.5, glass))
    world.add(Sphere(Point3(-1, -1, 0), -0.4, glass))

    world.add(Sphere(Point3(-1, 1, 0), 0.5, metal))

    return world


def create_default_camera(aspect_ratio: float = 16.0 / 9.0, vfov: float = 90.0) -> Camera:
    """Camera at the origin looking down -X with +Z up."""
    return Camera(
        look_from=Point3(0, 0, 0),
        look_at=Point3(-1, 0, 0),
        vup=Vec3(0, 0, 1),
        vfov=vfov,
        aspect_ratio=aspect_ratio
    )


SCENES = {
    'single': create_single_sphere_scene,
    'demo': create_demo_scene,
}
