"""
lumentrace - A Python Path Tracing Renderer

A small recursive path tracer with:
- Spheres (including hollow, negative-radius shells)
- Lambertian, metal and dielectric materials
- Look-at perspective camera
- Jittered multi-sampling with gamma-corrected RGBA8 PNG output
- Seeded, reproducible renders
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .shapes import Sphere, HittableList, HitRecord, Hittable
from .materials import Material, ScatterResult, Lambertian, Metal, Dielectric
from .camera import Camera, CameraError
from .framebuffer import Framebuffer, ImageWriteError, pack_rgba, unpack_rgba, color_to_rgba
from .renderer import Renderer, RenderSettings, sky_color
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
from .scenes import SCENES, create_single_sphere_scene, create_demo_scene, create_default_camera
