"""Tests for Camera class."""

import pytest
import math
from lumentrace.vec3 import Vec3, Point3
from lumentrace.camera import Camera, CameraError


def z_up_camera(**kwargs):
    params = dict(
        look_from=Point3(0, 0, 0),
        look_at=Point3(-1, 0, 0),
        vup=Vec3(0, 0, 1),
        vfov=90,
        aspect_ratio=1.0
    )
    params.update(kwargs)
    return Camera(**params)


class TestCameraCreation:
    """Test Camera construction."""

    def test_origin(self):
        cam = z_up_camera(look_from=Point3(1, 2, 3))
        assert cam.origin == Point3(1, 2, 3)

    def test_default_up_is_z(self):
        cam = Camera(look_from=Point3(0, 0, 0), look_at=Point3(-1, 0, 0))
        assert cam.v == Vec3(0, 0, 1)

    def test_camera_basis_vectors(self):
        cam = z_up_camera()
        # w points backward, away from the target
        assert cam.w == Vec3(1, 0, 0)
        assert cam.u == Vec3(0, 1, 0)
        assert cam.v == Vec3(0, 0, 1)

    def test_basis_orthonormal(self):
        cam = z_up_camera(look_from=Point3(3, -2, 1.5), look_at=Point3(0, 0.5, 0))
        for axis in (cam.u, cam.v, cam.w):
            assert abs(axis.length() - 1.0) < 1e-9
        assert abs(cam.u.dot(cam.v)) < 1e-9
        assert abs(cam.u.dot(cam.w)) < 1e-9
        assert abs(cam.v.dot(cam.w)) < 1e-9

    def test_viewport_size(self):
        cam = z_up_camera(vfov=90, aspect_ratio=2.0)
        # tan(45°) = 1, so the viewport is 2 high and 4 wide at distance 1
        assert abs(cam.vertical.length() - 2.0) < 1e-9
        assert abs(cam.horizontal.length() - 4.0) < 1e-9

    def test_lower_left_corner(self):
        cam = z_up_camera(vfov=90, aspect_ratio=16 / 9)
        expected = Point3(-1, -16 / 9, -1)
        assert cam.lower_left_corner == expected


class TestCameraValidation:
    """Test degenerate camera parameters are rejected."""

    def test_same_position_and_target(self):
        with pytest.raises(CameraError):
            z_up_camera(look_from=Point3(1, 1, 1), look_at=Point3(1, 1, 1))

    def test_up_parallel_to_view(self):
        with pytest.raises(CameraError):
            z_up_camera(look_from=Point3(0, 0, 5), look_at=Point3(0, 0, 0))

    @pytest.mark.parametrize("vfov", [0, -10, 180, 270])
    def test_bad_field_of_view(self, vfov):
        with pytest.raises(CameraError):
            z_up_camera(vfov=vfov)

    def test_bad_aspect_ratio(self):
        with pytest.raises(CameraError):
            z_up_camera(aspect_ratio=0)

    def test_camera_error_is_value_error(self):
        assert issubclass(CameraError, ValueError)


class TestCameraRays:
    """Test Camera.get_ray() method."""

    def test_center_ray(self):
        ray = z_up_camera().get_ray(0.5, 0.5)
        assert ray.direction == Vec3(-1, 0, 0)

    def test_corner_rays(self):
        cam = z_up_camera()

        bl = cam.get_ray(0, 0)
        assert bl.direction == Vec3(-1, -1, -1)

        tr = cam.get_ray(1, 1)
        assert tr.direction == Vec3(-1, 1, 1)

    def test_ray_origin(self):
        cam = z_up_camera(look_from=Point3(1, 2, 3), look_at=Point3(0, 0, 0))
        for s, t in [(0, 0), (0.3, 0.7), (1, 1)]:
            assert cam.get_ray(s, t).origin == Point3(1, 2, 3)

    def test_center_ray_points_at_target(self):
        cam = z_up_camera(look_from=Point3(4, 1, 2), look_at=Point3(-1, 0.5, 0))
        direction = cam.get_ray(0.5, 0.5).direction.normalize()
        expected = (Point3(-1, 0.5, 0) - Point3(4, 1, 2)).normalize()
        assert direction == expected

    def test_deterministic(self):
        cam = z_up_camera()
        assert cam.get_ray(0.2, 0.9).direction == cam.get_ray(0.2, 0.9).direction

    def test_narrower_fov_narrower_rays(self):
        wide = z_up_camera(vfov=90).get_ray(0.5, 1.0).direction.normalize()
        narrow = z_up_camera(vfov=30).get_ray(0.5, 1.0).direction.normalize()
        forward = Vec3(-1, 0, 0)
        assert narrow.dot(forward) > wide.dot(forward)
