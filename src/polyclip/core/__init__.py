"""Core orchestration for polyclip.

This module contains:

- The typestate Clipper builder (Clipper -> ClipperWithSubjects -> ClipperWithClips)
- Result types for flat and tree-producing operations
- PolyTree, the owned containment tree, and PolyTreeView, its lazy engine-resident alternative
- The execution adapter that runs operations against the engine
- One-call operations (union, difference, intersect, xor and tree variants)
- BooleanProcessor, which runs operations with configured defaults and statistics
"""

from polyclip.core.adapter import execute, execute_tree
from polyclip.core.clipper import Clipper, ClipperWithClips, ClipperWithSubjects
from polyclip.core.operations import (
    boolean,
    boolean_tree,
    difference,
    difference_tree,
    intersect,
    intersect_tree,
    union,
    union_tree,
    xor,
    xor_tree,
)
from polyclip.core.polytree import PolyNode, PolyTree
from polyclip.core.polytree_view import PolyTreeView
from polyclip.core.processor import BooleanProcessor
from polyclip.core.results import BooleanResult, BooleanTreeResult, BooleanTreeViewResult

__all__ = [
    # Results
    "BooleanResult",
    "BooleanTreeResult",
    "BooleanTreeViewResult",
    # Builder
    "BooleanProcessor",
    "Clipper",
    "ClipperWithClips",
    "ClipperWithSubjects",
    # Trees
    "PolyNode",
    "PolyTree",
    "PolyTreeView",
    # Operations
    "boolean",
    "boolean_tree",
    "difference",
    "difference_tree",
    "execute",
    "execute_tree",
    "intersect",
    "intersect_tree",
    "union",
    "union_tree",
    "xor",
    "xor_tree",
]
