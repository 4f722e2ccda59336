"""Clipping engine boundary.

The engine is the external polygon clipping collaborator (pyclipper).
polyclip reaches it only through the handle-based primitives of
ClippingEngine, never through pyclipper objects directly.
"""

from polyclip.engine.pyclipper_engine import (
    COORDINATE_RANGE,
    ClippingEngine,
    GridContour,
    NodeRef,
    get_default_engine,
)

__all__ = [
    "COORDINATE_RANGE",
    "ClippingEngine",
    "GridContour",
    "NodeRef",
    "get_default_engine",
]
