"""STL import and export for coaster meshes."""

from __future__ import annotations

import io
import re
import struct
from typing import List, Optional

from coastercad.geometry_utils import Point3, Triangle
from coastercad.mesh import Mesh

_HEADER_SIZE = 80
_COUNT_SIZE = 4
_STRUCT_TRIANGLE = struct.Struct('<12fH')
_STRUCT_COUNT = struct.Struct('<I')

DEFAULT_NAME = 'coastercad_coaster'


def binary_size(triangle_count: int) -> int:
    """Exact byte length of a binary STL holding ``triangle_count`` facets."""

    return _HEADER_SIZE + _COUNT_SIZE + _STRUCT_TRIANGLE.size * triangle_count


def write_stl(mesh: Mesh, path_or_file, *, binary: bool = True, name: str = DEFAULT_NAME,
              include_statistics: bool = False) -> None:
    """Write ``mesh`` to STL.

    ``path_or_file`` can be a filesystem path or an open stream (binary
    for binary STL, text or binary for ASCII).  The mesh is written as
    is; callers check :func:`~coastercad.geometry_checks.validate_mesh`
    first if they care.
    """

    if binary:
        data = _encode_binary(mesh, name)
    else:
        data = _encode_ascii(mesh, name, include_statistics)

    if hasattr(path_or_file, 'write'):
        if isinstance(path_or_file, io.TextIOBase):
            path_or_file.write(data.decode('ascii'))
        else:
            path_or_file.write(data)
    else:
        with open(path_or_file, 'wb') as stream:
            stream.write(data)


def stl_bytes(mesh: Mesh, *, binary: bool = True, name: str = DEFAULT_NAME,
              include_statistics: bool = False) -> bytes:
    if binary:
        return _encode_binary(mesh, name)
    return _encode_ascii(mesh, name, include_statistics)


def _encode_binary(mesh: Mesh, name: str) -> bytes:
    count = mesh.triangle_count
    buffer = bytearray(binary_size(count))

    header = f"{name} - Created by coastercad".encode('ascii', errors='replace')[:_HEADER_SIZE]
    buffer[:len(header)] = header
    _STRUCT_COUNT.pack_into(buffer, _HEADER_SIZE, count)

    offset = _HEADER_SIZE + _COUNT_SIZE
    for tri in mesh:
        _STRUCT_TRIANGLE.pack_into(buffer, offset,
                                   *tri.normal, *tri.v1, *tri.v2, *tri.v3, 0)
        offset += _STRUCT_TRIANGLE.size
    return bytes(buffer)


def _encode_ascii(mesh: Mesh, name: str, include_statistics: bool) -> bytes:
    lines = [f"solid {name}"]

    if include_statistics:
        lo, hi = mesh.bounding_box()
        lines.append(f"; Triangle count: {mesh.triangle_count}")
        lines.append(f"; Bounding box: ({lo.x:.2f}, {lo.y:.2f}, {lo.z:.2f}) to "
                     f"({hi.x:.2f}, {hi.y:.2f}, {hi.z:.2f})")
        lines.append(f"; Size: {hi.x - lo.x:.2f} x {hi.y - lo.y:.2f} x {hi.z - lo.z:.2f} mm")

    for tri in mesh:
        n = tri.normal
        lines.append(f"  facet normal {n.x:.6e} {n.y:.6e} {n.z:.6e}")
        lines.append("    outer loop")
        for v in tri.vertices:
            lines.append(f"      vertex {v.x:.6e} {v.y:.6e} {v.z:.6e}")
        lines.append("    endloop")
        lines.append("  endfacet")

    lines.append(f"endsolid {name}")
    return ("\n".join(lines) + "\n").encode('ascii')


# ---------------------------------------------------------------------------
# STL Import
# ---------------------------------------------------------------------------


def _is_binary_stl(data: bytes) -> bool:
    """Guess the flavour of ``data``.

    ASCII files start with ``solid``, but so do some binary headers, so a
    ``solid`` prefix only counts as ASCII when the size does not match the
    binary layout or facet keywords follow the header.
    """

    if not data.lstrip()[:5].lower() == b'solid':
        return True
    if len(data) < _HEADER_SIZE + _COUNT_SIZE:
        return False
    tri_count = _STRUCT_COUNT.unpack_from(data, _HEADER_SIZE)[0]
    if len(data) != binary_size(tri_count):
        return False
    rest = data[_HEADER_SIZE + _COUNT_SIZE:_HEADER_SIZE + _COUNT_SIZE + 200]
    return not (b'facet' in rest or b'vertex' in rest)


def _parse_binary_stl(data: bytes) -> List[Triangle]:
    if len(data) < _HEADER_SIZE + _COUNT_SIZE:
        raise ValueError("Invalid binary STL: file too small")

    tri_count = _STRUCT_COUNT.unpack_from(data, _HEADER_SIZE)[0]
    if len(data) < binary_size(tri_count):
        raise ValueError(f"Invalid binary STL: header declares {tri_count} triangles "
                         f"but only {len(data)} bytes present")

    triangles = []
    for values in _STRUCT_TRIANGLE.iter_unpack(data[_HEADER_SIZE + _COUNT_SIZE:binary_size(tri_count)]):
        triangles.append(Triangle(Point3(*values[3:6]), Point3(*values[6:9]), Point3(*values[9:12]),
                                  normal=Point3(*values[0:3])))
    return triangles


_NUMBER = r'([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?|[-+]?(?:nan|inf))'
_FACET_PATTERN = re.compile(
    r'facet\s+normal\s+' + r'\s+'.join([_NUMBER] * 3) + r'\s+'
    r'outer\s+loop\s+' +
    r'\s+'.join(r'vertex\s+' + r'\s+'.join([_NUMBER] * 3) for _ in range(3)) + r'\s+'
    r'endloop\s+endfacet',
    re.IGNORECASE,
)


def _parse_ascii_stl(text: str) -> List[Triangle]:
    triangles = []
    for match in _FACET_PATTERN.finditer(text):
        values = [float(g) for g in match.groups()]
        triangles.append(Triangle(Point3(*values[3:6]), Point3(*values[6:9]), Point3(*values[9:12]),
                                  normal=Point3(*values[0:3])))
    return triangles


def read_stl(path_or_file) -> Mesh:
    """Read binary or ASCII STL into a :class:`Mesh`.

    Stored normals are kept as they appear in the file.  Statistics
    comment lines written by :func:`write_stl` are ignored.
    """

    if hasattr(path_or_file, 'read'):
        data = path_or_file.read()
        if isinstance(data, str):
            data = data.encode('utf-8')
    elif isinstance(path_or_file, (bytes, bytearray)):
        data = bytes(path_or_file)
    else:
        with open(path_or_file, 'rb') as f:
            data = f.read()

    if _is_binary_stl(data):
        triangles = _parse_binary_stl(data)
    else:
        triangles = _parse_ascii_stl(data.decode('utf-8', errors='replace'))
    return Mesh(triangles)


def stl_name(data: bytes) -> Optional[str]:
    """Return the solid name of ASCII STL data, or ``None`` for binary."""

    if _is_binary_stl(data):
        return None
    first = data.decode('utf-8', errors='replace').lstrip().splitlines()[0]
    return first[len('solid'):].strip()


__all__ = ['write_stl', 'read_stl', 'stl_bytes', 'stl_name', 'binary_size', 'DEFAULT_NAME']
