"""3MF package export.

The package holds exactly three parts: the content types, the package
relationships and a single ``3D/3dmodel.model`` document with one mesh
object.  Vertices are shared between triangles; two vertices merge when
they fall in the same 1/1000 mm bucket and compare equal within
``epsilon``.
"""

from __future__ import annotations

import io
import zipfile
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from coastercad import __version__
from coastercad.geometry_utils import Point3, quantize
from coastercad.mesh import Mesh

NS_CORE = "http://schemas.microsoft.com/3dmanufacturing/core/2015/02"
NS_MATERIAL = "http://schemas.microsoft.com/3dmanufacturing/material/2015/02"
NS_CONTENT_TYPES = "http://schemas.openxmlformats.org/package/2006/content-types"
NS_RELATIONSHIPS = "http://schemas.openxmlformats.org/package/2006/relationships"
REL_TYPE_MODEL = "http://schemas.microsoft.com/3dmanufacturing/2013/01/3dmodel"

CONTENT_TYPE_RELS = "application/vnd.openxmlformats-package.relationships+xml"
CONTENT_TYPE_MODEL = "application/vnd.ms-package.3dmanufacturing-3dmodel+xml"

PART_CONTENT_TYPES = "[Content_Types].xml"
PART_RELS = "_rels/.rels"
PART_MODEL = "3D/3dmodel.model"
PACKAGE_PARTS = (PART_CONTENT_TYPES, PART_RELS, PART_MODEL)


@dataclass
class ThreeMfOptions:
    model_name: str = "coastercad_coaster"
    description: str = ""
    application: str = "coastercad"
    include_color: bool = False
    primary_color: str = "#808080"


def index_vertices(mesh: Mesh) -> Tuple[List[Point3], List[Tuple[int, int, int]]]:
    """Return the shared vertex list and per-triangle index triples.

    The first occurrence of a coordinate fixes its index.
    """

    vertices: List[Point3] = []
    buckets: Dict[tuple, List[int]] = {}

    def lookup(p: Point3) -> int:
        bucket = buckets.setdefault(quantize(p), [])
        for idx in bucket:
            if vertices[idx] == p:
                return idx
        vertices.append(p)
        bucket.append(len(vertices) - 1)
        return len(vertices) - 1

    faces = [(lookup(t.v1), lookup(t.v2), lookup(t.v3)) for t in mesh]
    return vertices, faces


def _to_xml(root: ET.Element) -> bytes:
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def _content_types_xml() -> bytes:
    root = ET.Element("Types", attrib={"xmlns": NS_CONTENT_TYPES})
    ET.SubElement(root, "Default", attrib={"Extension": "rels", "ContentType": CONTENT_TYPE_RELS})
    ET.SubElement(root, "Default", attrib={"Extension": "model", "ContentType": CONTENT_TYPE_MODEL})
    return _to_xml(root)


def _rels_xml() -> bytes:
    root = ET.Element("Relationships", attrib={"xmlns": NS_RELATIONSHIPS})
    ET.SubElement(root, "Relationship", attrib={
        "Target": "/" + PART_MODEL,
        "Id": "rel0",
        "Type": REL_TYPE_MODEL,
    })
    return _to_xml(root)


def _model_xml(mesh: Mesh, options: ThreeMfOptions) -> bytes:
    attrib = {"unit": "millimeter", "xml:lang": "en-US", "xmlns": NS_CORE}
    if options.include_color:
        attrib["xmlns:m"] = NS_MATERIAL
    root = ET.Element("model", attrib=attrib)

    metadata = (
        ("Title", options.model_name),
        ("Designer", options.application),
        ("Description", options.description),
        ("CreationDate", datetime.now(timezone.utc).strftime("%Y-%m-%d")),
        ("Application", f"{options.application} v{__version__}"),
    )
    for name, value in metadata:
        ET.SubElement(root, "metadata", attrib={"name": name}).text = value

    resources = ET.SubElement(root, "resources")
    if options.include_color:
        materials = ET.SubElement(resources, "m:basematerials", attrib={"id": "1"})
        ET.SubElement(materials, "m:base", attrib={
            "name": "Material",
            "displaycolor": options.primary_color,
        })

    obj_attrib = {"id": "1", "name": options.model_name, "type": "model"}
    if options.include_color:
        obj_attrib["pid"] = "1"
        obj_attrib["pindex"] = "0"
    obj = ET.SubElement(resources, "object", attrib=obj_attrib)

    mesh_elem = ET.SubElement(obj, "mesh")
    vertices, faces = index_vertices(mesh)

    vertices_elem = ET.SubElement(mesh_elem, "vertices")
    for v in vertices:
        ET.SubElement(vertices_elem, "vertex", attrib={
            "x": f"{v.x:.6f}",
            "y": f"{v.y:.6f}",
            "z": f"{v.z:.6f}",
        })

    triangles_elem = ET.SubElement(mesh_elem, "triangles")
    for a, b, c in faces:
        ET.SubElement(triangles_elem, "triangle", attrib={"v1": str(a), "v2": str(b), "v3": str(c)})

    build = ET.SubElement(root, "build")
    ET.SubElement(build, "item", attrib={"objectid": "1"})

    return _to_xml(root)


def write_3mf(mesh: Mesh, path_or_file, options: Optional[ThreeMfOptions] = None) -> None:
    """Write ``mesh`` as a 3MF package to a path or binary stream."""

    options = options or ThreeMfOptions()
    with zipfile.ZipFile(path_or_file, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(PART_CONTENT_TYPES, _content_types_xml())
        zf.writestr(PART_RELS, _rels_xml())
        zf.writestr(PART_MODEL, _model_xml(mesh, options))


def threemf_bytes(mesh: Mesh, options: Optional[ThreeMfOptions] = None) -> bytes:
    buffer = io.BytesIO()
    write_3mf(mesh, buffer, options)
    return buffer.getvalue()


__all__ = [
    'ThreeMfOptions',
    'write_3mf',
    'threemf_bytes',
    'index_vertices',
    'PACKAGE_PARTS',
    'NS_CORE',
    'NS_MATERIAL',
]
