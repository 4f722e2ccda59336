"""Unit tests for one-call boolean operations."""

import pytest

from polyclip.core import (
    BooleanResult,
    BooleanTreeResult,
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
from polyclip.domain import MILLI, ClipType, FillRule, Paths
from polyclip.engine import ClippingEngine

SUBJECT = [(0.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0)]
CLIP = [(1.0, 1.0), (3.0, 1.0), (3.0, 3.0), (1.0, 3.0)]


class TestFlat:
    """Tests for flat operation shortcuts."""

    @pytest.mark.parametrize(
        ("operation", "expected"),
        [(union, 7.0), (difference, 3.0), (intersect, 1.0), (xor, 6.0)],
        ids=["union", "difference", "intersect", "xor"],
    )
    def test_shortcut(self, operation, expected):
        """Each shortcut runs its operation with NonZero by default."""
        result = operation(SUBJECT, CLIP)
        assert isinstance(result, BooleanResult)
        assert result.closed.signed_area() == pytest.approx(expected)

    def test_fill_rule_forwarded(self):
        """The fill rule reaches the engine."""
        doubled = [SUBJECT, SUBJECT]
        nonzero = union(doubled, [], FillRule.NON_ZERO)
        evenodd = union(doubled, [], FillRule.EVEN_ODD)
        assert nonzero.closed.area() == pytest.approx(4.0)
        assert evenodd.closed.is_empty()

    def test_scaler_forwarded(self):
        """Results come back on the requested grid."""
        result = intersect(SUBJECT, CLIP, scaler=MILLI)
        assert result.closed.scaler == MILLI
        assert result.closed.area() == pytest.approx(1.0)

    def test_boolean_with_engine(self):
        """The general form accepts an injected engine."""
        engine = ClippingEngine()
        result = boolean(ClipType.DIFFERENCE, SUBJECT, CLIP, engine=engine)
        assert result.closed.area() == pytest.approx(3.0)
        assert engine.live_handles() == 0

    def test_accepts_paths(self):
        """Pre-built Paths are accepted as operands."""
        result = union(Paths.coerce(SUBJECT), Paths.coerce(CLIP))
        assert result.closed.area() == pytest.approx(7.0)


class TestTree:
    """Tests for tree operation shortcuts."""

    @pytest.mark.parametrize(
        ("operation", "expected"),
        [(union_tree, 7.0), (difference_tree, 3.0), (intersect_tree, 1.0), (xor_tree, 6.0)],
        ids=["union", "difference", "intersect", "xor"],
    )
    def test_shortcut(self, operation, expected):
        """Each tree shortcut returns an owned tree."""
        result = operation(SUBJECT, CLIP)
        assert isinstance(result, BooleanTreeResult)
        assert result.tree.to_paths().signed_area() == pytest.approx(expected)

    def test_boolean_tree_with_engine(self):
        """The general tree form accepts an injected engine."""
        engine = ClippingEngine()
        result = boolean_tree(ClipType.UNION, SUBJECT, CLIP, engine=engine)
        assert result.tree.child_count() == 1
        assert engine.live_handles() == 0
