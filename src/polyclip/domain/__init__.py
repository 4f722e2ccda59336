"""Domain models for polyclip.

This module contains the value types exchanged with the clipping engine.
All containers are immutable once constructed and never alias engine memory.

Key classes:
- Point: A 2D point on the engine's integer grid
- Path: One contour
- Paths: A collection of contours
- GeometryInput: Subjects, open subjects and clips for one operation
- PointScaler: Application units to grid units conversion
- ClipType, FillRule: Boolean operation options
"""

from polyclip.domain.geometry import GeometryInput
from polyclip.domain.options import ClipType, FillRule
from polyclip.domain.path import Path, Paths, PathsLike, Point
from polyclip.domain.scaling import CENTI, DECI, MILLI, ONE, PointScaler, scaler_from_data

__all__: list[str] = [
    # Enums
    "ClipType",
    "FillRule",
    # Scaling
    "CENTI",
    "DECI",
    "MILLI",
    "ONE",
    "PointScaler",
    "scaler_from_data",
    # Core types
    "GeometryInput",
    "Path",
    "Paths",
    "PathsLike",
    "Point",
]
