import math

from coastercad.geometry_checks import ValidationResult, validate_mesh
from coastercad.geometry_utils import Point3, Triangle
from coastercad.mesh import Mesh
from coastercad.settings import CoasterSpec
from coastercad.solid import build_solid


def _two_triangles():
    mesh = Mesh()
    mesh.add_quad(Point3(0.0, 0.0, 0.0), Point3(1.0, 0.0, 0.0),
                  Point3(1.0, 1.0, 0.0), Point3(0.0, 1.0, 0.0))
    return mesh


def test_empty_mesh_is_invalid():
    result = validate_mesh(Mesh())
    assert not result.is_valid
    assert not result
    assert result.errors == ["Mesh has no triangles."]
    assert result.triangle_count == 0
    assert result.bounding_box is None
    assert result.size == Point3(0.0, 0.0, 0.0)


def test_simple_mesh_is_valid():
    result = validate_mesh(_two_triangles())
    assert result.is_valid
    assert result.errors == []
    assert result.warnings == []
    assert result.triangle_count == 2
    assert result.size == Point3(1.0, 1.0, 0.0)


def test_degenerate_triangle_is_only_a_warning():
    mesh = _two_triangles()
    p = Point3(5.0, 5.0, 5.0)
    mesh.add_triangle(p, p, Point3(6.0, 5.0, 5.0))
    result = validate_mesh(mesh)
    assert result.is_valid
    assert result.warnings == ["Mesh contains 1 degenerate triangles (zero area)."]


def test_non_finite_normal_is_reported():
    mesh = _two_triangles()
    mesh.add_triangle(Triangle(Point3(0.0, 0.0, 1.0), Point3(1.0, 0.0, 1.0), Point3(0.0, 1.0, 1.0),
                               normal=Point3(math.nan, 0.0, 0.0)))
    result = validate_mesh(mesh)
    assert result.is_valid
    assert "Mesh contains 1 triangles with invalid normals." in result.warnings


def test_generated_coaster_validates():
    result = validate_mesh(build_solid(CoasterSpec()))
    assert result.is_valid
    assert result.warnings == []
    assert result.size.z == 6.0


def test_summary_text():
    result = validate_mesh(_two_triangles())
    text = result.summary()
    assert text.startswith("Validation Result: Valid")
    assert "Triangle Count: 2" in text
    assert "Size: 1.00 x 1.00 x 0.00 mm" in text

    bad = ValidationResult()
    bad.add_error("boom")
    bad.add_warning("careful")
    text = bad.summary()
    assert text.startswith("Validation Result: Invalid")
    assert "  - boom" in text
    assert "  - careful" in text


def test_non_finite_vertices_are_reported():
    mesh = _two_triangles()
    mesh.add_triangle(Point3(math.nan, 0.0, 1.0), Point3(1.0, 0.0, 1.0), Point3(0.0, 1.0, 1.0))
    mesh.add_triangle(Point3(0.0, 0.0, 1.0), Point3(math.inf, 0.0, 1.0), Point3(0.0, 1.0, 1.0))
    result = validate_mesh(mesh)
    assert result.is_valid
    assert "Mesh contains 2 triangles with non-finite coordinates." in result.warnings
    assert "Mesh contains 2 triangles with invalid normals." in result.warnings
