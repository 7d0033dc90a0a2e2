import math

import pytest

from coastercad.geom_util import point_in_profile
from coastercad.profiles import generate_profile
from coastercad.relief import HeightField, ReliefSurfaceBuilder
from coastercad.settings import CoasterSpec, EdgeStyle, ShapeKind
from coastercad.solid import SolidMeshBuilder, build_solid


def _extent(mesh):
    lo, hi = mesh.bounding_box()
    return hi - lo


def test_flat_circle_triangle_count():
    mesh = build_solid(CoasterSpec())
    # 64 profile points: base fan, top fan and two triangles per wall
    assert mesh.triangle_count == 64 + 64 + 128


@pytest.mark.parametrize("shape", [
    ShapeKind.CIRCLE,
    ShapeKind.SQUARE,
    ShapeKind.OCTAGON,
    ShapeKind.ROUNDED_SQUARE,
])
def test_extents_match_parameters(shape):
    spec = CoasterSpec(shape=shape, diameter=100.0, base_thickness=4.0, total_height=6.0)
    size = _extent(build_solid(spec))
    assert size.z == pytest.approx(6.0, abs=0.1)
    assert size.x == pytest.approx(100.0, rel=0.05)
    assert size.y == pytest.approx(100.0, rel=0.05)


def test_hexagon_is_point_up():
    size = _extent(build_solid(CoasterSpec(shape=ShapeKind.HEXAGON, diameter=100.0)))
    assert size.y == pytest.approx(100.0, rel=1e-4)
    assert size.x == pytest.approx(50.0 * math.sqrt(3.0), rel=1e-4)


def test_cap_normals_face_out():
    mesh = build_solid(CoasterSpec())
    bottom = mesh.triangles[:64]
    top = mesh.triangles[64:128]
    assert all(t.normal.z == pytest.approx(-1.0) for t in bottom)
    assert all(t.normal.z == pytest.approx(1.0) for t in top)


def test_side_wall_normals_point_away_from_axis():
    mesh = build_solid(CoasterSpec())
    for tri in mesh.triangles[128:]:
        cx = (tri.v1.x + tri.v2.x + tri.v3.x) / 3.0
        cy = (tri.v1.y + tri.v2.y + tri.v3.y) / 3.0
        assert tri.normal.x * cx + tri.normal.y * cy > 0


@pytest.mark.parametrize("style", [EdgeStyle.BEVELED, EdgeStyle.ROUNDED])
def test_beveled_and_rounded_leave_body_unchanged(style):
    flat = build_solid(CoasterSpec())
    styled = build_solid(CoasterSpec(edge_style=style))
    assert styled.triangle_count == flat.triangle_count


class TestRaisedRim:
    """Sloped ring from an inset outline up to the outer edge."""

    def test_adds_two_triangles_per_edge(self):
        mesh = build_solid(CoasterSpec(edge_style=EdgeStyle.RAISED_RIM))
        assert mesh.triangle_count == 256 + 128

    def test_rim_height_is_capped_at_two(self):
        mesh = build_solid(CoasterSpec(edge_style=EdgeStyle.RAISED_RIM,
                                       base_thickness=4.0, total_height=10.0))
        assert mesh.bounding_box()[1].z == pytest.approx(12.0)

    def test_rim_height_limited_by_headroom(self):
        mesh = build_solid(CoasterSpec(edge_style=EdgeStyle.RAISED_RIM,
                                       base_thickness=4.0, total_height=5.0))
        assert mesh.bounding_box()[1].z == pytest.approx(6.0)

    def test_inner_edge_is_inside_outline(self):
        spec = CoasterSpec(edge_style=EdgeStyle.RAISED_RIM)
        profile = generate_profile(spec)
        mesh = build_solid(spec)
        rim = mesh.triangles[256:]
        inner = rim[0].v1
        assert inner.z == pytest.approx(spec.total_height)
        assert point_in_profile(inner.x, inner.y, profile)
        assert math.hypot(inner.x, inner.y) == pytest.approx(48.0, abs=0.05)


def test_non_slip_stubs_hang_below_base():
    plain = build_solid(CoasterSpec())
    mesh = build_solid(CoasterSpec(add_non_slip_bottom=True))
    # 5 x 5 grid of 8-sided stubs fits in a 100 mm disc
    assert mesh.triangle_count - plain.triangle_count == 25 * 16
    assert mesh.bounding_box()[0].z == pytest.approx(-0.5)


def test_builder_validates_spec_in_place():
    spec = CoasterSpec(diameter=500.0)
    build_solid(spec)
    assert spec.diameter == 150.0


def test_each_build_returns_new_mesh():
    builder = SolidMeshBuilder()
    spec = CoasterSpec()
    first = builder.build(spec)
    second = builder.build(spec)
    assert first is not second
    assert first.triangle_count == second.triangle_count


class TestReliefTop:
    """Height field replacing the flat top cap."""

    def test_relief_replaces_top_cap(self):
        spec = CoasterSpec()
        field = HeightField.flat(8, 8, 0.5)
        mesh = build_solid(spec, field)
        relief = ReliefSurfaceBuilder().build(generate_profile(spec), spec, field)
        assert mesh.triangle_count == 64 + len(relief) + 128

    def test_relief_heights_stay_in_band(self):
        spec = CoasterSpec(base_thickness=4.0, total_height=8.0, relief_depth=2.0).validate()
        field = HeightField([[0.0, 0.25, 0.5, 0.75, 1.0]] * 5)
        profile = generate_profile(spec)
        for tri in ReliefSurfaceBuilder().build(profile, spec, field):
            for v in tri.vertices:
                assert 4.0 - 1e-5 <= v.z <= 6.0 + 1e-5
