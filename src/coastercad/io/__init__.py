"""File format codecs for coaster meshes."""

from .stl import read_stl, stl_bytes, write_stl
from .threemf import ThreeMfOptions, threemf_bytes, write_3mf

__all__ = ['write_stl', 'read_stl', 'stl_bytes', 'ThreeMfOptions', 'write_3mf', 'threemf_bytes']
