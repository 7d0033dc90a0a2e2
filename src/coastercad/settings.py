"""Parameter records describing a coaster design.

:class:`CoasterSpec` carries the basic solid (shape, size, edge
treatment, relief).  :class:`AdvancedSettings` carries the optional
pattern and text features layered on top.  Both convert to and from
plain dictionaries so templates can be stored as YAML.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Type, TypeVar

E = TypeVar('E', bound=Enum)


class ShapeKind(Enum):
    CIRCLE = 'circle'
    SQUARE = 'square'
    HEXAGON = 'hexagon'
    OCTAGON = 'octagon'
    ROUNDED_SQUARE = 'rounded_square'
    CUSTOM_POLYGON = 'custom_polygon'


class EdgeStyle(Enum):
    FLAT = 'flat'
    BEVELED = 'beveled'
    ROUNDED = 'rounded'
    RAISED_RIM = 'raised_rim'


class BasePattern(Enum):
    SOLID = 'solid'
    HONEYCOMB = 'honeycomb'
    GRID = 'grid'
    CONCENTRIC_CIRCLES = 'concentric_circles'
    DOTS = 'dots'


class SurfacePattern(Enum):
    NONE = 'none'
    DRAINAGE_GROOVES = 'drainage_grooves'


class TextAlignment(Enum):
    CENTER = 'center'
    TOP_CENTER = 'top_center'
    BOTTOM_CENTER = 'bottom_center'


def parse_enum(enum_type: Type[E], value: Any) -> E:
    """Accept an enum member, its name or its value (case-insensitive)."""

    if isinstance(value, enum_type):
        return value
    text = str(value).strip()
    for member in enum_type:
        if text.upper() == member.name or text.lower() == member.value:
            return member
    # also accept CapWords spellings such as "RoundedSquare"
    squashed = text.replace('_', '').replace('-', '').lower()
    for member in enum_type:
        if squashed == member.name.replace('_', '').lower():
            return member
    raise ValueError(f"{value!r} is not a valid {enum_type.__name__}")


def _clamp(value, lo, hi, default):
    """Clamp in float space; NaN falls back to ``default``, infinities to a bound."""

    value = float(value)
    if math.isnan(value):
        value = default
    return max(lo, min(hi, value))


def _to_dict(obj) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if isinstance(value, Enum):
            value = value.name
        data[f.name] = value
    return data


def _from_dict(cls, data: Dict[str, Any], enums: Dict[str, Type[Enum]]):
    known = {f.name for f in fields(cls)}
    kwargs = {}
    for key, value in (data or {}).items():
        if key not in known:
            continue
        if key in enums:
            value = parse_enum(enums[key], value)
        kwargs[key] = value
    return cls(**kwargs)


@dataclass
class CoasterSpec:
    """Basic coaster parameters, lengths in millimetres."""

    shape: ShapeKind = ShapeKind.CIRCLE
    diameter: float = 100.0
    base_thickness: float = 4.0
    total_height: float = 6.0
    edge_style: EdgeStyle = EdgeStyle.FLAT
    bevel_angle: float = 45.0
    corner_radius: float = 10.0
    polygon_sides: int = 6
    relief_depth: float = 1.5
    invert_relief: bool = False
    add_non_slip_bottom: bool = False
    curve_resolution: int = 16

    def validate(self) -> "CoasterSpec":
        """Clamp every field into its legal range.

        Never raises.  ``total_height`` is finally raised to at least
        ``base_thickness + 0.5`` so a relief always has room.
        """

        self.shape = parse_enum(ShapeKind, self.shape)
        self.edge_style = parse_enum(EdgeStyle, self.edge_style)
        self.diameter = float(_clamp(self.diameter, 70.0, 150.0, 100.0))
        self.base_thickness = float(_clamp(self.base_thickness, 2.0, 8.0, 4.0))
        self.total_height = float(_clamp(self.total_height, 3.0, 15.0, 6.0))
        self.corner_radius = float(_clamp(self.corner_radius, 1.0, self.diameter / 4.0, 10.0))
        self.polygon_sides = int(_clamp(self.polygon_sides, 3, 12, 6))
        self.relief_depth = float(_clamp(self.relief_depth, 0.5, 5.0, 1.5))
        self.bevel_angle = float(_clamp(self.bevel_angle, 15.0, 75.0, 45.0))
        self.curve_resolution = int(_clamp(self.curve_resolution, 8, 64, 16))

        if self.total_height < self.base_thickness + 0.5:
            self.total_height = self.base_thickness + 0.5
        return self

    def copy(self) -> "CoasterSpec":
        return CoasterSpec(**{f.name: getattr(self, f.name) for f in fields(self)})

    def to_dict(self) -> Dict[str, Any]:
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CoasterSpec":
        return _from_dict(cls, data, {'shape': ShapeKind, 'edge_style': EdgeStyle})


@dataclass
class TextElement:
    """A line of bitmap text embossed onto (or debossed into) the top face."""

    text: str = ''
    font_size: float = 8.0
    depth: float = 1.0
    embossed: bool = True
    alignment: TextAlignment = TextAlignment.CENTER
    offset_x: float = 0.0
    offset_y: float = 0.0
    rotation: float = 0.0
    letter_spacing: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextElement":
        return _from_dict(cls, data, {'alignment': TextAlignment})


@dataclass
class AdvancedSettings:
    base_pattern: BasePattern = BasePattern.SOLID
    surface_pattern: SurfacePattern = SurfacePattern.NONE
    text_elements: List[TextElement] = field(default_factory=list)
    drainage_groove_count: int = 3
    drainage_groove_depth: float = 0.5
    groove_width: float = 1.0
    honeycomb_cell_size: float = 5.0
    grid_spacing: float = 5.0
    base_pattern_depth: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        data = _to_dict(self)
        data['text_elements'] = [t.to_dict() for t in self.text_elements]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdvancedSettings":
        data = dict(data or {})
        texts = [TextElement.from_dict(t) for t in data.pop('text_elements', None) or []]
        result = _from_dict(cls, data, {'base_pattern': BasePattern,
                                        'surface_pattern': SurfacePattern})
        result.text_elements = texts
        return result


__all__ = [
    'ShapeKind',
    'EdgeStyle',
    'BasePattern',
    'SurfacePattern',
    'TextAlignment',
    'CoasterSpec',
    'TextElement',
    'AdvancedSettings',
    'parse_enum',
]
