"""
Scene description parser.

Reads a YAML (or JSON) scene description with:
- Camera configuration
- Render settings
- Materials library
- Objects (spheres with materials)

Example scene file:
```yaml
camera:
  look_from: [0, 0, 0]
  look_at: [-1, 0, 0]
  vup: [0, 0, 1]
  vfov: 90

render:
  width: 400
  samples: 50
  max_depth: 20
  seed: 7

materials:
  ground:
    type: lambertian
    albedo: [0.8, 0.8, 0.0]

  glass:
    type: dielectric
    ir: 1.5

objects:
  - type: sphere
    center: [-1, 0, -100.5]
    radius: 100
    material: ground

  - type: sphere
    center: [-1, -1, 0]
    radius: -0.4
    material: glass
```

Named materials are shared: every object naming one gets the same instance.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union

import yaml

from .vec3 import Vec3, Point3, Color
from .camera import Camera, CameraError
from .shapes import Sphere, HittableList
from .materials import Material, Lambertian, Metal, Dielectric
from .renderer import RenderSettings

logger = logging.getLogger(__name__)


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: HittableList = HittableList()
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: Union[str, Path]) -> Tuple[HittableList, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON
                data = yaml.safe_load(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file {filepath} must contain a mapping")

        logger.debug("Loaded scene description from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[HittableList, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)
        """
        data = self._require_mapping(data, 'scene')

        # Parse render settings first, the camera defaults to their aspect ratio
        if 'render' in data:
            self._parse_settings(self._require_mapping(data['render'], 'render'))
        else:
            self.settings = RenderSettings()

        # Parse materials before the objects referencing them
        if 'materials' in data:
            self._parse_materials(self._require_mapping(data['materials'], 'materials'))

        if 'objects' in data:
            objects_data = data['objects']
            if not isinstance(objects_data, list):
                raise SceneParseError(f"Section 'objects' must be a list, got {objects_data!r}")
            self._parse_objects(objects_data)

        self._parse_camera(self._require_mapping(data.get('camera', {}), 'camera'))

        logger.debug(
            "Parsed %d materials and %d objects", len(self.materials), len(self.objects)
        )
        return self.objects, self.camera, self.settings

    @staticmethod
    def _require_mapping(data: Any, section: str) -> Dict[str, Any]:
        """Check that a section of the description is a mapping."""
        if not isinstance(data, dict):
            raise SceneParseError(f"Section '{section}' must be a mapping, got {data!r}")
        return data

    @staticmethod
    def _parse_number(data: Dict[str, Any], key: str, default: Any, kind: type = float) -> Any:
        """Read a scalar entry, converting it with `kind`."""
        value = data.get(key, default)
        if isinstance(value, bool):
            raise SceneParseError(f"Invalid value for '{key}': {value!r}")
        try:
            return kind(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid value for '{key}': {value!r}") from e

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from a list or an x/y/z mapping."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            try:
                return Vec3(float(data[0]), float(data[1]), float(data[2]))
            except (TypeError, ValueError) as e:
                raise SceneParseError(f"Cannot parse Vec3 from: {data}") from e
        elif isinstance(data, dict):
            return Vec3(
                self._parse_number(data, 'x', 0),
                self._parse_number(data, 'y', 0),
                self._parse_number(data, 'z', 0)
            )
        raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from a list, an r/g/b mapping or a hex string."""
        if isinstance(data, dict):
            return Color(
                self._parse_number(data, 'r', 0),
                self._parse_number(data, 'g', 0),
                self._parse_number(data, 'b', 0)
            )
        elif isinstance(data, str):
            hex_color = data[1:] if data.startswith('#') else ''
            if len(hex_color) == 6:
                try:
                    r = int(hex_color[0:2], 16) / 255.0
                    g = int(hex_color[2:4], 16) / 255.0
                    b = int(hex_color[4:6], 16) / 255.0
                except ValueError as e:
                    raise SceneParseError(f"Cannot parse color from string: {data}") from e
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        return self._parse_vec3(data)

    def _parse_material(self, mat_data: Any) -> Material:
        """Build one material from its description."""
        mat_data = self._require_mapping(mat_data, 'material')
        mat_type = str(mat_data.get('type', 'lambertian')).lower()

        try:
            if mat_type == 'lambertian':
                albedo = self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5]))
                return Lambertian(albedo)

            elif mat_type == 'metal':
                albedo = self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8]))
                fuzz = self._parse_number(mat_data, 'fuzz', 0.0)
                return Metal(albedo, fuzz)

            elif mat_type == 'dielectric':
                ir = self._parse_number(mat_data, 'ir', 1.5)
                return Dielectric(ir)
        except ValueError as e:
            raise SceneParseError(f"Invalid {mat_type} material: {e}") from e

        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        for name, mat_data in materials_data.items():
            self.materials[name] = self._parse_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Optional[Material]:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return None
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        for obj_data in objects_data:
            obj_data = self._require_mapping(obj_data, 'objects')
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            material = self._get_material(obj_data.get('material'))

            if obj_type == 'sphere':
                center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
                radius = self._parse_number(obj_data, 'radius', 1.0)
                try:
                    self.objects.add(Sphere(center, radius, material))
                except ValueError as e:
                    raise SceneParseError(str(e)) from e

            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        look_from = self._parse_vec3(camera_data.get('look_from', [0, 0, 0]))
        look_at = self._parse_vec3(camera_data.get('look_at', [-1, 0, 0]))
        vup = self._parse_vec3(camera_data.get('vup', [0, 0, 1]))
        vfov = self._parse_number(camera_data, 'vfov', 90)
        aspect_ratio = self._parse_number(camera_data, 'aspect_ratio', self.settings.aspect_ratio)

        try:
            self.camera = Camera(
                look_from=look_from,
                look_at=look_at,
                vup=vup,
                vfov=vfov,
                aspect_ratio=aspect_ratio
            )
        except CameraError as e:
            raise SceneParseError(f"Invalid camera: {e}") from e

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        width = self._parse_number(settings_data, 'width', 1280, int)
        aspect_ratio = self._parse_number(settings_data, 'aspect_ratio', 16 / 9)
        samples = self._parse_number(settings_data, 'samples', 100, int)
        max_depth = self._parse_number(settings_data, 'max_depth', 50, int)
        seed = None
        if settings_data.get('seed') is not None:
            seed = self._parse_number(settings_data, 'seed', None, int)

        try:
            self.settings = RenderSettings(
                width=width,
                aspect_ratio=aspect_ratio,
                samples_per_pixel=samples,
                max_depth=max_depth,
                seed=seed
            )
        except ValueError as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def load_scene(filepath: Union[str, Path]) -> Tuple[HittableList, Camera, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[HittableList, Camera, RenderSettings]:
    """Convenience function to parse a scene from a dictionary."""
    parser = SceneParser()
    return parser.parse_dict(data)
