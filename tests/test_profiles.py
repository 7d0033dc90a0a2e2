import math

import pytest

from coastercad.geom_util import profile_bounds, signed_area
from coastercad.profiles import (
    generate_circle,
    generate_hexagon,
    generate_octagon,
    generate_polygon,
    generate_profile,
    generate_rounded_square,
    generate_square,
)
from coastercad.settings import CoasterSpec, ShapeKind


@pytest.mark.parametrize("segments", [8, 32, 64])
def test_circle_points_lie_on_radius(segments):
    points = generate_circle(50.0, segments)
    assert len(points) == segments
    for x, y in points:
        assert math.hypot(x, y) == pytest.approx(50.0, abs=0.001)
    assert points[0] == (pytest.approx(50.0), pytest.approx(0.0))


def test_square_corners():
    assert generate_square(20.0) == [(-10.0, -10.0), (10.0, -10.0), (10.0, 10.0), (-10.0, 10.0)]


@pytest.mark.parametrize("builder,count", [
    (lambda: generate_square(100.0), 4),
    (lambda: generate_hexagon(50.0), 6),
    (lambda: generate_octagon(50.0), 8),
    (lambda: generate_polygon(50.0, 5), 5),
])
def test_vertex_counts(builder, count):
    assert len(builder()) == count


def test_polygon_starts_on_negative_y_axis():
    x, y = generate_hexagon(50.0)[0]
    assert x == pytest.approx(0.0, abs=1e-9)
    assert y == pytest.approx(-50.0)


def test_rounded_square_point_count_and_extent():
    points = generate_rounded_square(100.0, 10.0, 16)
    assert len(points) == 4 * 17
    min_x, max_x, min_y, max_y = profile_bounds(points)
    assert max_x - min_x == pytest.approx(100.0)
    assert max_y - min_y == pytest.approx(100.0)


def test_rounded_square_radius_is_limited():
    points = generate_rounded_square(10.0, 20.0, 4)
    # r shrinks to half - 1, so corner centres stay 1 unit from the axes
    assert points[0] == (pytest.approx(5.0), pytest.approx(1.0))


@pytest.mark.parametrize("shape", list(ShapeKind))
def test_every_shape_is_counter_clockwise(shape):
    profile = generate_profile(CoasterSpec(shape=shape).validate())
    assert signed_area(profile) > 0


def test_generate_profile_uses_curve_resolution():
    spec = CoasterSpec(shape=ShapeKind.CIRCLE, curve_resolution=16)
    assert len(generate_profile(spec)) == 64
    spec = CoasterSpec(shape=ShapeKind.ROUNDED_SQUARE, curve_resolution=8)
    assert len(generate_profile(spec)) == 36
    spec = CoasterSpec(shape=ShapeKind.CUSTOM_POLYGON, polygon_sides=7)
    assert len(generate_profile(spec)) == 7


@pytest.mark.parametrize("count", [0, -3])
def test_degenerate_segment_counts_give_empty_profiles(count):
    assert generate_circle(50.0, count) == []
    assert generate_polygon(50.0, count) == []
    assert generate_rounded_square(100.0, 10.0, count) == []
