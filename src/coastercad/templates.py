"""Saved coaster designs.

A template bundles a :class:`CoasterSpec`, its :class:`AdvancedSettings`
and some descriptive fields, and is stored as a YAML document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from coastercad.settings import AdvancedSettings, CoasterSpec, EdgeStyle, ShapeKind, SurfacePattern

logger = logging.getLogger(__name__)

TEMPLATE_VERSION = "1.0"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='seconds')


@dataclass
class CoasterTemplate:
    name: str = ""
    description: str = ""
    author: str = ""
    tags: List[str] = field(default_factory=list)
    settings: CoasterSpec = field(default_factory=CoasterSpec)
    advanced: AdvancedSettings = field(default_factory=AdvancedSettings)
    image_path: Optional[str] = None
    version: str = TEMPLATE_VERSION
    created_at: str = field(default_factory=_now)
    modified_at: str = field(default_factory=_now)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'version': self.version,
            'name': self.name,
            'description': self.description,
            'author': self.author,
            'created_at': self.created_at,
            'modified_at': self.modified_at,
            'tags': list(self.tags),
            'settings': self.settings.to_dict(),
            'advanced': self.advanced.to_dict(),
        }
        if self.image_path is not None:
            data['image_path'] = self.image_path
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CoasterTemplate":
        return cls(
            name=str(data.get('name') or ''),
            description=str(data.get('description') or ''),
            author=str(data.get('author') or ''),
            tags=[str(t) for t in data.get('tags') or []],
            settings=CoasterSpec.from_dict(data.get('settings') or {}),
            advanced=AdvancedSettings.from_dict(data.get('advanced') or {}),
            image_path=data.get('image_path'),
            version=str(data.get('version') or TEMPLATE_VERSION),
            created_at=str(data.get('created_at') or _now()),
            modified_at=str(data.get('modified_at') or _now()),
        )


def dumps_template(template: CoasterTemplate) -> str:
    return yaml.safe_dump(template.to_dict(), sort_keys=False)


def loads_template(text: str) -> CoasterTemplate:
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError("template document must be a mapping")
    return CoasterTemplate.from_dict(data)


def save_template(template: CoasterTemplate, path) -> Path:
    """Write ``template`` to ``path``, stamping ``modified_at``."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    template.modified_at = _now()
    with target.open('w', encoding='utf-8') as fp:
        yaml.safe_dump(template.to_dict(), fp, sort_keys=False)
    logger.info("Saved template %r to %s", template.name, target)
    return target


def load_template(path) -> CoasterTemplate:
    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(f"template not found: {source}")
    with source.open('r', encoding='utf-8') as fp:
        template = loads_template(fp.read())
    logger.info("Loaded template %r from %s", template.name, source)
    return template


def validate_template(template: CoasterTemplate) -> List[str]:
    """Return human readable problems; an empty list means usable."""

    errors: List[str] = []
    s = template.settings
    if not template.name or not template.name.strip():
        errors.append("Template name is required.")
    if not 70 <= s.diameter <= 150:
        errors.append("Diameter must be between 70mm and 150mm.")
    if not 2 <= s.base_thickness <= 8:
        errors.append("Base thickness must be between 2mm and 8mm.")
    if not 3 <= s.total_height <= 15:
        errors.append("Total height must be between 3mm and 15mm.")
    return errors


def create_template(name: str, settings: CoasterSpec,
                    advanced: Optional[AdvancedSettings] = None,
                    image_path: Optional[str] = None) -> CoasterTemplate:
    return CoasterTemplate(name=name, settings=settings.copy(),
                           advanced=advanced or AdvancedSettings(), image_path=image_path)


def _builtins() -> List[CoasterTemplate]:
    return [
        CoasterTemplate(
            name="Minimalist",
            description="Clean, simple circular coaster",
            author="coastercad",
            tags=["simple", "modern", "circle"],
            settings=CoasterSpec(shape=ShapeKind.CIRCLE, diameter=90.0, base_thickness=4.0,
                                 total_height=5.0, edge_style=EdgeStyle.FLAT),
        ),
        CoasterTemplate(
            name="Hexagonal Modern",
            description="Modern hexagonal coaster with beveled edges",
            author="coastercad",
            tags=["hexagon", "modern", "beveled"],
            settings=CoasterSpec(shape=ShapeKind.HEXAGON, diameter=100.0, base_thickness=4.0,
                                 total_height=6.0, edge_style=EdgeStyle.BEVELED, bevel_angle=45.0),
        ),
        CoasterTemplate(
            name="Rounded Square",
            description="Square coaster with rounded corners",
            author="coastercad",
            tags=["square", "rounded", "classic"],
            settings=CoasterSpec(shape=ShapeKind.ROUNDED_SQUARE, diameter=100.0, base_thickness=4.0,
                                 total_height=6.0, edge_style=EdgeStyle.ROUNDED, corner_radius=12.0),
        ),
        CoasterTemplate(
            name="Functional Grip",
            description="Coaster with non-slip bottom and raised rim",
            author="coastercad",
            tags=["functional", "grip", "rim"],
            settings=CoasterSpec(shape=ShapeKind.CIRCLE, diameter=100.0, base_thickness=4.0,
                                 total_height=8.0, edge_style=EdgeStyle.RAISED_RIM,
                                 add_non_slip_bottom=True),
            advanced=AdvancedSettings(surface_pattern=SurfacePattern.DRAINAGE_GROOVES,
                                      drainage_groove_count=4),
        ),
        CoasterTemplate(
            name="Octagonal Classic",
            description="Classic octagonal coaster",
            author="coastercad",
            tags=["octagon", "classic", "elegant"],
            settings=CoasterSpec(shape=ShapeKind.OCTAGON, diameter=95.0, base_thickness=4.0,
                                 total_height=5.0, edge_style=EdgeStyle.FLAT),
        ),
    ]


def builtin_templates() -> List[CoasterTemplate]:
    """Fresh copies of the shipped presets."""

    return _builtins()


def builtin_template(name: str) -> Optional[CoasterTemplate]:
    """Look up a preset by name, ignoring case."""

    wanted = name.strip().lower()
    for template in _builtins():
        if template.name.lower() == wanted:
            return template
    return None


__all__ = [
    'TEMPLATE_VERSION',
    'CoasterTemplate',
    'dumps_template',
    'loads_template',
    'save_template',
    'load_template',
    'validate_template',
    'create_template',
    'builtin_templates',
    'builtin_template',
]
