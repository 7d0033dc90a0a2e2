"""High level design session: settings in, validated mesh and files out."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from coastercad.geometry_checks import ValidationResult, validate_mesh
from coastercad.io.stl import DEFAULT_NAME, write_stl
from coastercad.io.threemf import ThreeMfOptions, write_3mf
from coastercad.imaging import height_field_from_image
from coastercad.mesh import Mesh
from coastercad.patterns import generate_base_pattern, generate_surface_pattern
from coastercad.profiles import generate_profile
from coastercad.relief import HeightField, Resampler
from coastercad.settings import AdvancedSettings, CoasterSpec, TextElement
from coastercad.solid import SolidMeshBuilder
from coastercad.templates import CoasterTemplate, create_template
from coastercad.templates import load_template as _load_template_file
from coastercad.templates import save_template as _save_template_file
from coastercad.text3d import generate_text

logger = logging.getLogger(__name__)

FILL_FACTOR = 0.7
PLA_DENSITY = 1.24  # g/cm^3


class MeshNotGeneratedError(RuntimeError):
    """Raised when an operation needs a mesh but none has been generated."""


class GenerationCancelled(Exception):
    """Raised when ``cancel_check`` asks generation to stop."""


class CoasterDesigner:
    """Holds the current design and the last generated mesh.

    Each :meth:`generate_mesh` call builds a brand new mesh; nothing is
    shared between designers, so independent designs can be generated
    side by side.
    """

    def __init__(self, spec: Optional[CoasterSpec] = None,
                 advanced: Optional[AdvancedSettings] = None,
                 resampler: Optional[Resampler] = None,
                 cancel_check: Optional[Callable[[], bool]] = None) -> None:
        self.spec = spec if spec is not None else CoasterSpec()
        self.advanced = advanced if advanced is not None else AdvancedSettings()
        self.resampler = resampler
        self.cancel_check = cancel_check
        self.height_field: Optional[HeightField] = None
        self.image_path: Optional[str] = None
        self._mesh: Optional[Mesh] = None

    @property
    def mesh(self) -> Optional[Mesh]:
        return self._mesh

    @property
    def has_mesh(self) -> bool:
        return self._mesh is not None

    @property
    def has_height_field(self) -> bool:
        return self.height_field is not None

    def _require_mesh(self) -> Mesh:
        if self._mesh is None:
            raise MeshNotGeneratedError("No mesh generated. Call generate_mesh first.")
        return self._mesh

    def _checkpoint(self, stage: str) -> None:
        if self.cancel_check is not None and self.cancel_check():
            logger.info("Generation cancelled before %s", stage)
            raise GenerationCancelled(stage)

    # -- inputs ---------------------------------------------------------

    def set_height_field(self, field: Optional[HeightField]) -> None:
        self.height_field = field

    def load_image(self, path, resolution: Optional[int] = 128, invert: bool = False) -> HeightField:
        self.height_field = height_field_from_image(path, resolution=resolution, invert=invert)
        self.image_path = str(path)
        return self.height_field

    def add_text(self, element: TextElement) -> None:
        self.advanced.text_elements.append(element)

    def clear_text(self) -> None:
        self.advanced.text_elements.clear()

    # -- generation -----------------------------------------------------

    def generate_mesh(self) -> Mesh:
        """Run the full pipeline and keep the result as the current mesh."""

        self._checkpoint("solid")
        self.spec.validate()
        profile = generate_profile(self.spec)
        mesh = SolidMeshBuilder(self.resampler).build(self.spec, self.height_field, profile)
        logger.debug("Solid body: %d triangles", mesh.triangle_count)

        self._checkpoint("base pattern")
        mesh.add_triangles(generate_base_pattern(profile, self.advanced))

        self._checkpoint("surface pattern")
        mesh.add_triangles(generate_surface_pattern(profile, self.advanced, self.spec.total_height))

        for element in self.advanced.text_elements:
            self._checkpoint("text")
            mesh.add_triangles(generate_text(element, self.spec.diameter, self.spec.total_height))

        self._mesh = mesh
        logger.info("Generated %s coaster: %d triangles",
                    self.spec.shape.name.lower(), mesh.triangle_count)
        return mesh

    def validate_mesh(self) -> ValidationResult:
        result = validate_mesh(self._require_mesh())
        for warning in result.warnings:
            logger.warning(warning)
        return result

    # -- output ---------------------------------------------------------

    def export_stl(self, path_or_file, *, binary: bool = True, name: str = DEFAULT_NAME,
                   include_statistics: bool = False) -> None:
        write_stl(self._require_mesh(), path_or_file, binary=binary, name=name,
                  include_statistics=include_statistics)
        if isinstance(path_or_file, (str, Path)):
            logger.info("Wrote STL %s", path_or_file)

    def export_3mf(self, path_or_file, options: Optional[ThreeMfOptions] = None) -> None:
        write_3mf(self._require_mesh(), path_or_file, options)
        if isinstance(path_or_file, (str, Path)):
            logger.info("Wrote 3MF %s", path_or_file)

    def generate_and_export(self, path, *, binary: bool = True, name: str = DEFAULT_NAME,
                            include_statistics: bool = False) -> ValidationResult:
        """Generate, validate and write STL only when the mesh is valid."""

        self.generate_mesh()
        result = self.validate_mesh()
        if result.is_valid:
            self.export_stl(path, binary=binary, name=name, include_statistics=include_statistics)
        else:
            logger.error("Mesh invalid, not exporting %s: %s", path, "; ".join(result.errors))
        return result

    def estimate_filament_usage(self) -> float:
        """Rough PLA mass in grams from the bounding box volume."""

        lo, hi = self._require_mesh().bounding_box()
        size = hi - lo
        volume_cm3 = size.x * size.y * size.z * FILL_FACTOR / 1000.0
        return volume_cm3 * PLA_DENSITY

    # -- templates ------------------------------------------------------

    def apply_template(self, template: CoasterTemplate) -> None:
        self.spec = template.settings.copy()
        self.advanced = AdvancedSettings.from_dict(template.advanced.to_dict())
        self._mesh = None
        if template.image_path:
            if Path(template.image_path).exists():
                self.load_image(template.image_path)
            else:
                logger.warning("Template image %s not found, ignoring", template.image_path)

    def load_template(self, path) -> CoasterTemplate:
        template = _load_template_file(path)
        self.apply_template(template)
        return template

    def save_template(self, name: str, path=None, description: str = "",
                      author: str = "") -> CoasterTemplate:
        """Capture the current design; also write it to ``path`` when given."""

        template = create_template(name, self.spec, AdvancedSettings.from_dict(self.advanced.to_dict()),
                                   self.image_path)
        template.description = description
        template.author = author
        if path is not None:
            _save_template_file(template, path)
        return template

    def reset(self) -> None:
        self.spec = CoasterSpec()
        self.advanced = AdvancedSettings()
        self.height_field = None
        self.image_path = None
        self._mesh = None


__all__ = [
    'CoasterDesigner',
    'MeshNotGeneratedError',
    'GenerationCancelled',
    'FILL_FACTOR',
    'PLA_DENSITY',
]
