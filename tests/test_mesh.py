from coastercad.geometry_utils import ZERO, Point3, Triangle
from coastercad.mesh import Mesh


def _unit_square():
    return (Point3(0.0, 0.0, 0.0), Point3(1.0, 0.0, 0.0),
            Point3(1.0, 1.0, 0.0), Point3(0.0, 1.0, 0.0))


def test_add_quad_splits_along_first_diagonal():
    v1, v2, v3, v4 = _unit_square()
    mesh = Mesh()
    mesh.add_quad(v1, v2, v3, v4)

    first, second = mesh.triangles
    assert first.vertices == (v1, v2, v3)
    assert second.vertices == (v1, v3, v4)
    assert first.normal == Point3(0.0, 0.0, 1.0)
    assert second.normal == Point3(0.0, 0.0, 1.0)


def test_add_triangle_accepts_vertices_or_triangle():
    v1, v2, v3, _ = _unit_square()
    mesh = Mesh()
    mesh.add_triangle(v1, v2, v3)
    mesh.add_triangle(Triangle(v1, v3, v2))
    assert mesh.triangle_count == 2
    assert len(mesh) == 2


def test_triangles_view_is_immutable_snapshot():
    v1, v2, v3, _ = _unit_square()
    mesh = Mesh()
    mesh.add_triangle(v1, v2, v3)
    snapshot = mesh.triangles
    mesh.add_triangle(v1, v3, v2)
    assert isinstance(snapshot, tuple)
    assert len(snapshot) == 1


def test_empty_bounding_box_is_origin():
    assert Mesh().bounding_box() == (ZERO, ZERO)


def test_bounding_box_and_translate():
    mesh = Mesh()
    mesh.add_quad(*_unit_square())
    lo, hi = mesh.bounding_box()
    assert lo == Point3(0.0, 0.0, 0.0)
    assert hi == Point3(1.0, 1.0, 0.0)

    moved = mesh.translate(Point3(2.0, 0.0, 1.0))
    lo, hi = moved.bounding_box()
    assert lo == Point3(2.0, 0.0, 1.0)
    assert hi == Point3(3.0, 1.0, 1.0)
    # source untouched
    assert mesh.bounding_box()[0] == Point3(0.0, 0.0, 0.0)


def test_center_at_origin():
    mesh = Mesh()
    mesh.add_quad(*_unit_square())
    lo, hi = mesh.center_at_origin().bounding_box()
    assert lo == Point3(-0.5, -0.5, 0.0)
    assert hi == Point3(0.5, 0.5, 0.0)


def test_merge_appends_in_order():
    a = Mesh()
    a.add_quad(*_unit_square())
    b = Mesh(a.translate(Point3(0.0, 0.0, 1.0)))
    a.merge(b)
    assert a.triangle_count == 4
    assert a.triangles[2].v1 == Point3(0.0, 0.0, 1.0)
