"""Geometry I/O for polyclip.

This module handles reading JSON geometry into domain Paths and writing
boolean results back out.
"""

from polyclip.io.geometry_json import (
    GeometryInput,
    parse_paths,
    read_geometry,
    read_paths,
    result_to_dict,
    write_result,
)

__all__ = [
    "GeometryInput",
    "parse_paths",
    "read_geometry",
    "read_paths",
    "result_to_dict",
    "write_result",
]
