import io
import struct

import pytest

from coastercad.geometry_utils import Point3, Triangle
from coastercad.io import read_stl, stl_bytes, write_stl
from coastercad.io.stl import binary_size, stl_name
from coastercad.mesh import Mesh
from coastercad.settings import CoasterSpec
from coastercad.solid import build_solid


def _sample_mesh() -> Mesh:
    mesh = Mesh()
    mesh.add_quad(Point3(0.0, 0.0, 0.0), Point3(10.0, 0.0, 0.0),
                  Point3(10.0, 10.0, 0.0), Point3(0.0, 10.0, 0.0))
    mesh.add_triangle(Point3(0.0, 0.0, 0.0), Point3(0.0, 10.0, 0.0), Point3(0.0, 0.0, 5.0))
    return mesh


def test_write_stl_binary(tmp_path):
    mesh = _sample_mesh()
    target = tmp_path / "coaster.stl"
    write_stl(mesh, target)

    data = target.read_bytes()
    assert len(data) == 84 + 50 * 3
    assert struct.unpack('<I', data[80:84])[0] == 3
    assert data.startswith(b"coastercad_coaster - Created by coastercad")
    assert data[:80].rstrip(b"\x00").endswith(b"coastercad")


def test_binary_facet_layout():
    mesh = _sample_mesh()
    data = stl_bytes(mesh)
    values = struct.unpack('<12fH', data[84:134])
    assert values[0:3] == (0.0, 0.0, 1.0)
    assert values[3:6] == (0.0, 0.0, 0.0)
    assert values[6:9] == (10.0, 0.0, 0.0)
    assert values[12] == 0


def test_binary_size_helper():
    assert binary_size(0) == 84
    assert binary_size(256) == 84 + 50 * 256
    assert len(stl_bytes(Mesh())) == 84


def test_write_stl_ascii_stream():
    mesh = _sample_mesh()
    buffer = io.StringIO()
    write_stl(mesh, buffer, binary=False, name="x")

    text = buffer.getvalue()
    lines = text.splitlines()
    assert lines[0] == "solid x"
    assert text.strip().endswith("endsolid x")
    assert text.endswith("\n")
    assert sum(1 for line in lines if line.startswith("  facet normal ")) == 3
    assert sum(1 for line in lines if line.startswith("      vertex ")) == 9
    assert lines[1] == "  facet normal 0.000000e+00 0.000000e+00 1.000000e+00"


def test_ascii_statistics_header():
    text = stl_bytes(_sample_mesh(), binary=False, include_statistics=True).decode('ascii')
    lines = text.splitlines()
    assert lines[1] == "; Triangle count: 3"
    assert lines[2].startswith("; Bounding box: (0.00, 0.00, 0.00) to (10.00, 10.00, 5.00)")
    assert lines[3] == "; Size: 10.00 x 10.00 x 5.00 mm"


def test_binary_round_trip():
    mesh = build_solid(CoasterSpec())
    restored = read_stl(stl_bytes(mesh))
    assert restored.triangle_count == mesh.triangle_count
    for original, loaded in zip(mesh, restored):
        assert loaded.vertices == original.vertices
        assert loaded.normal == original.normal


def test_ascii_round_trip_with_statistics(tmp_path):
    mesh = _sample_mesh()
    target = tmp_path / "coaster.stl"
    write_stl(mesh, target, binary=False, include_statistics=True)

    restored = read_stl(target)
    assert restored.triangle_count == 3
    assert restored.triangles[2].v3 == Point3(0.0, 0.0, 5.0)
    assert stl_name(target.read_bytes()) == "coastercad_coaster"


def test_read_keeps_stored_normals():
    mesh = Mesh([Triangle(Point3(0.0, 0.0, 0.0), Point3(1.0, 0.0, 0.0), Point3(0.0, 1.0, 0.0),
                          normal=Point3(0.0, 0.0, -1.0))])
    restored = read_stl(io.BytesIO(stl_bytes(mesh)))
    assert restored.triangles[0].normal == Point3(0.0, 0.0, -1.0)


def test_binary_header_starting_with_solid():
    data = stl_bytes(_sample_mesh(), name="solid_block")
    assert stl_name(data) is None
    assert read_stl(data).triangle_count == 3


@pytest.mark.parametrize("data", [
    b"\x00" * 50,
    b"\x00" * 80 + struct.pack('<I', 2) + b"\x00" * 50,
])
def test_truncated_binary_raises(data):
    with pytest.raises(ValueError):
        read_stl(data)
