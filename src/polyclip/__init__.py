"""Polyclip - Safe boolean operations on 2D polygons.

Polyclip runs union, difference, intersection and xor on polygon sets
through the Clipper engine. Geometry is registered on a builder that
moves through three states (no geometry, subjects, subjects and clips)
and each boolean operation consumes the builder, so every engine
resource is released exactly once.

Example:
    >>> from polyclip import Clipper, ClipType, Paths
    >>> square = Paths.from_tuples([[(0, 0), (2, 0), (2, 2), (0, 2)]])
    >>> corner = Paths.from_tuples([[(1, 1), (3, 1), (3, 3), (1, 3)]])
    >>> result = Clipper().add_subject(square).add_clip(corner).union()
    >>> result.closed.area()
    7.0

Nested results are available as a PolyTree of outer contours and holes:
    >>> tree = Clipper().add_subject(square).add_clip(corner).union_tree().tree
"""

__version__ = "0.1.0"

from polyclip.core import (
    BooleanResult,
    BooleanTreeResult,
    BooleanTreeViewResult,
    Clipper,
    ClipperWithClips,
    ClipperWithSubjects,
    PolyNode,
    PolyTree,
    PolyTreeView,
    difference,
    difference_tree,
    intersect,
    intersect_tree,
    union,
    union_tree,
    xor,
    xor_tree,
)
from polyclip.domain import ClipType, FillRule, Path, Paths, Point, PointScaler
from polyclip.exceptions import (
    ClipperConsumedError,
    FailedBooleanOperation,
    PolyclipError,
    ScalerMismatchError,
)

__all__ = [
    "BooleanResult",
    "BooleanTreeResult",
    "BooleanTreeViewResult",
    "ClipType",
    "Clipper",
    "ClipperConsumedError",
    "ClipperWithClips",
    "ClipperWithSubjects",
    "FailedBooleanOperation",
    "FillRule",
    "Path",
    "Paths",
    "Point",
    "PointScaler",
    "PolyNode",
    "PolyTree",
    "PolyTreeView",
    "PolyclipError",
    "ScalerMismatchError",
    "__version__",
    "difference",
    "difference_tree",
    "intersect",
    "intersect_tree",
    "union",
    "union_tree",
    "xor",
    "xor_tree",
]
