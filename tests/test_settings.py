import pytest

from coastercad.settings import (
    AdvancedSettings,
    BasePattern,
    CoasterSpec,
    EdgeStyle,
    ShapeKind,
    SurfacePattern,
    TextAlignment,
    TextElement,
    parse_enum,
)


class TestCoasterSpecValidate:
    """Clamping of out of range parameters."""

    def test_defaults_are_already_valid(self):
        spec = CoasterSpec()
        before = spec.to_dict()
        spec.validate()
        assert spec.to_dict() == before

    def test_fields_are_clamped(self):
        spec = CoasterSpec(diameter=200, base_thickness=1, total_height=20,
                           polygon_sides=40, relief_depth=9, bevel_angle=5,
                           curve_resolution=2).validate()
        assert spec.diameter == 150.0
        assert spec.base_thickness == 2.0
        assert spec.total_height == 15.0
        assert spec.polygon_sides == 12
        assert spec.relief_depth == 5.0
        assert spec.bevel_angle == 15.0
        assert spec.curve_resolution == 8

    def test_corner_radius_uses_clamped_diameter(self):
        spec = CoasterSpec(diameter=200, corner_radius=100).validate()
        assert spec.corner_radius == pytest.approx(150.0 / 4.0)

    def test_total_height_leaves_room_above_base(self):
        spec = CoasterSpec(base_thickness=8, total_height=3).validate()
        assert spec.total_height == pytest.approx(8.5)

    def test_validate_never_raises_on_odd_values(self):
        spec = CoasterSpec(diameter=-5, polygon_sides=0, corner_radius=0).validate()
        assert spec.diameter == 70.0
        assert spec.polygon_sides == 3
        assert spec.corner_radius == 1.0

    def test_non_finite_values_are_corrected(self):
        spec = CoasterSpec(curve_resolution=float("inf"), polygon_sides=float("nan"),
                           diameter=float("nan"), bevel_angle=float("-inf")).validate()
        assert spec.curve_resolution == 64
        assert spec.polygon_sides == 6
        assert spec.diameter == 100.0
        assert spec.bevel_angle == 15.0


def test_spec_dict_round_trip_uses_enum_names():
    spec = CoasterSpec(shape=ShapeKind.ROUNDED_SQUARE, edge_style=EdgeStyle.RAISED_RIM,
                       diameter=120.0)
    data = spec.to_dict()
    assert data['shape'] == 'ROUNDED_SQUARE'
    assert data['edge_style'] == 'RAISED_RIM'
    assert CoasterSpec.from_dict(data) == spec


def test_spec_from_dict_ignores_unknown_keys():
    spec = CoasterSpec.from_dict({'diameter': 80.0, 'colour': 'red'})
    assert spec.diameter == 80.0


def test_copy_is_independent():
    spec = CoasterSpec()
    other = spec.copy()
    other.diameter = 90.0
    assert spec.diameter == 100.0


def test_advanced_settings_round_trip_with_text():
    adv = AdvancedSettings(base_pattern=BasePattern.HONEYCOMB,
                           surface_pattern=SurfacePattern.DRAINAGE_GROOVES,
                           text_elements=[TextElement(text="HI", alignment=TextAlignment.TOP_CENTER)])
    restored = AdvancedSettings.from_dict(adv.to_dict())
    assert restored == adv
    assert restored.text_elements[0].alignment is TextAlignment.TOP_CENTER


@pytest.mark.parametrize("value,expected", [
    (ShapeKind.HEXAGON, ShapeKind.HEXAGON),
    ("HEXAGON", ShapeKind.HEXAGON),
    ("hexagon", ShapeKind.HEXAGON),
    ("rounded_square", ShapeKind.ROUNDED_SQUARE),
    ("RoundedSquare", ShapeKind.ROUNDED_SQUARE),
    ("custom-polygon", ShapeKind.CUSTOM_POLYGON),
])
def test_parse_enum_spellings(value, expected):
    assert parse_enum(ShapeKind, value) is expected


def test_parse_enum_rejects_unknown():
    with pytest.raises(ValueError):
        parse_enum(EdgeStyle, "wavy")
