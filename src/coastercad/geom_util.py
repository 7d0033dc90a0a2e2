"""2D helpers for coaster profiles.

A profile is an ordered list of ``(x, y)`` tuples forming an implicitly
closed, counter-clockwise polygon.  The point-in-profile test here is the
single inclusion rule used by the relief builder, the pattern carver and
the non-slip placement.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

Point2D = Tuple[float, float]
Profile = List[Point2D]
Bounds = Tuple[float, float, float, float]


def point_in_profile(x: float, y: float, profile: Sequence[Point2D]) -> bool:
    """Ray casting (even-odd) inclusion test.

    The half-open comparison on ``y`` means points lying exactly on the
    boundary are not guaranteed to count as inside.
    """

    n = len(profile)
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = profile[i]
        xj, yj = profile[j]
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def profile_bounds(profile: Sequence[Point2D]) -> Bounds:
    """Return ``(min_x, max_x, min_y, max_y)``."""

    xs = [p[0] for p in profile]
    ys = [p[1] for p in profile]
    return min(xs), max(xs), min(ys), max(ys)


def profile_bbox_center(profile: Sequence[Point2D]) -> Point2D:
    min_x, max_x, min_y, max_y = profile_bounds(profile)
    return (min_x + max_x) / 2.0, (min_y + max_y) / 2.0


def signed_area(profile: Sequence[Point2D]) -> float:
    """Shoelace area, positive for counter-clockwise loops."""

    total = 0.0
    n = len(profile)
    for i, (x0, y0) in enumerate(profile):
        x1, y1 = profile[(i + 1) % n]
        total += x0 * y1 - x1 * y0
    return total / 2.0


def profile_centroid(profile: Sequence[Point2D]) -> Point2D:
    """Area centroid of the polygon; falls back to the vertex mean."""

    area = signed_area(profile)
    n = len(profile)
    if abs(area) < 1e-12:
        return (sum(p[0] for p in profile) / n, sum(p[1] for p in profile) / n)
    cx = cy = 0.0
    for i, (x0, y0) in enumerate(profile):
        x1, y1 = profile[(i + 1) % n]
        w = x0 * y1 - x1 * y0
        cx += (x0 + x1) * w
        cy += (y0 + y1) * w
    return cx / (6.0 * area), cy / (6.0 * area)


def normalize2(vx: float, vy: float) -> Point2D:
    """Unit vector, or ``(0, 0)`` for a zero-length input."""

    length = math.sqrt(vx * vx + vy * vy)
    if length > 0:
        return vx / length, vy / length
    return 0.0, 0.0


def offset_profile(profile: Sequence[Point2D], offset: float) -> Profile:
    """Move every vertex along its averaged edge normal by ``offset``.

    Edge normals are the left-hand perpendiculars of the edge directions,
    so for a counter-clockwise profile a positive ``offset`` moves inward.
    Zero-length edges contribute a zero normal; a vertex whose averaged
    normal vanishes stays where it is.
    """

    n = len(profile)
    result: Profile = []
    for i in range(n):
        px, py = profile[(i - 1) % n]
        cx, cy = profile[i]
        nx_, ny_ = profile[(i + 1) % n]

        n1 = normalize2(-(cy - py), cx - px)
        n2 = normalize2(-(ny_ - cy), nx_ - cx)
        avg = normalize2(n1[0] + n2[0], n1[1] + n2[1])

        result.append((cx + avg[0] * offset, cy + avg[1] * offset))
    return result


def grid_samples(start: float, stop: float, step: float, inclusive: bool = False) -> List[float]:
    """Values ``start, start + step, ...`` below ``stop``.

    With ``inclusive`` a value equal to ``stop`` is kept as well.
    """

    values: List[float] = []
    if step <= 0:
        return values
    k = 0
    while True:
        v = start + k * step
        if v > stop or (v == stop and not inclusive):
            break
        values.append(v)
        k += 1
    return values


__all__ = [
    'Point2D',
    'Profile',
    'Bounds',
    'point_in_profile',
    'profile_bounds',
    'profile_bbox_center',
    'profile_centroid',
    'signed_area',
    'normalize2',
    'offset_profile',
    'grid_samples',
]
