"""Unit tests for the handle-based clipping engine.

Tests cover:
- Handle allocation and release bookkeeping
- Use-after-release and wrong-kind handle detection
- Flat and tree execution
- Tree introspection through NodeRef
- Degenerate, open and out-of-range input
"""

import pytest

from polyclip.domain import ClipType, FillRule
from polyclip.engine import COORDINATE_RANGE, ClippingEngine, NodeRef, get_default_engine
from polyclip.exceptions import EngineHandleError


def square(x0: int, y0: int, size: int) -> list[tuple[int, int]]:
    return [(x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)]


def shoelace(contour: list[tuple[int, int]]) -> float:
    total = 0
    for i, (x1, y1) in enumerate(contour):
        x2, y2 = contour[(i + 1) % len(contour)]
        total += x1 * y2 - x2 * y1
    return total / 2


@pytest.fixture
def engine() -> ClippingEngine:
    """Fresh engine with an empty handle table."""
    return ClippingEngine()


def run_flat(engine, subjects, clips, clip_type, open_subjects=None):
    handle = engine.new_clipper()
    closed_out = engine.new_paths()
    open_out = engine.new_paths()
    try:
        engine.add_subject(handle, subjects)
        if open_subjects:
            engine.add_open_subject(handle, open_subjects)
        engine.add_clip(handle, clips)
        assert engine.execute(handle, clip_type, FillRule.NON_ZERO, closed_out, open_out)
        return engine.paths_contents(closed_out), engine.paths_contents(open_out)
    finally:
        engine.delete_paths(open_out)
        engine.delete_paths(closed_out)
        engine.delete_clipper(handle)


class TestHandleTable:
    """Tests for allocation bookkeeping."""

    def test_new_engine_has_no_handles(self, engine):
        """A fresh engine holds nothing."""
        assert engine.live_handles() == 0

    def test_allocate_and_release(self, engine):
        """Every allocation is matched by its release."""
        clipper = engine.new_clipper()
        paths = engine.new_paths()
        tree = engine.new_polytree()
        assert engine.live_handles() == 3
        assert engine.is_live(clipper)

        engine.delete_polytree(tree)
        engine.delete_paths(paths)
        engine.delete_clipper(clipper)
        assert engine.live_handles() == 0
        assert not engine.is_live(clipper)

    def test_handles_are_unique(self, engine):
        """Released handles are never reused."""
        first = engine.new_clipper()
        engine.delete_clipper(first)
        second = engine.new_clipper()
        assert second != first
        engine.delete_clipper(second)

    def test_double_release_raises(self, engine):
        """Releasing a handle twice is an error."""
        handle = engine.new_clipper()
        engine.delete_clipper(handle)
        with pytest.raises(EngineHandleError) as exc_info:
            engine.delete_clipper(handle)
        assert exc_info.value.handle == handle

    def test_use_after_release_raises(self, engine):
        """A released handle cannot be used."""
        handle = engine.new_clipper()
        engine.delete_clipper(handle)
        with pytest.raises(EngineHandleError):
            engine.add_subject(handle, [square(0, 0, 10)])

    def test_wrong_kind_raises(self, engine):
        """A handle is only accepted by calls for its own kind."""
        handle = engine.new_clipper()
        with pytest.raises(EngineHandleError, match="expected"):
            engine.delete_paths(handle)
        assert engine.is_live(handle)
        engine.delete_clipper(handle)

    def test_default_engine_is_shared(self):
        """The default engine is one instance per process."""
        assert get_default_engine() is get_default_engine()


class TestExecute:
    """Tests for flat execution."""

    def test_union_of_overlapping_squares(self, engine):
        """Two overlapping squares merge into one contour."""
        closed, opened = run_flat(
            engine, [square(0, 0, 20)], [square(10, 10, 20)], ClipType.UNION
        )
        assert len(closed) == 1
        assert abs(shoelace(closed[0])) == 700
        assert opened == []

    def test_intersection(self, engine):
        """Intersection keeps only the overlap."""
        closed, _ = run_flat(
            engine, [square(0, 0, 20)], [square(10, 10, 20)], ClipType.INTERSECTION
        )
        assert len(closed) == 1
        assert sorted(closed[0]) == sorted(square(10, 10, 10))

    def test_disjoint_intersection_is_empty(self, engine):
        """No overlap gives no output, which is still success."""
        closed, opened = run_flat(
            engine, [square(0, 0, 10)], [square(50, 50, 10)], ClipType.INTERSECTION
        )
        assert closed == []
        assert opened == []

    def test_degenerate_subject_is_ignored(self, engine):
        """Contours the engine rejects simply do not take part."""
        closed, _ = run_flat(
            engine, [[(0, 0), (10, 10)]], [square(0, 0, 10)], ClipType.UNION
        )
        assert len(closed) == 1
        assert abs(shoelace(closed[0])) == 100

    def test_empty_input_is_ignored(self, engine):
        """Registering no contours is allowed."""
        closed, _ = run_flat(engine, [], [square(0, 0, 10)], ClipType.DIFFERENCE)
        assert closed == []

    def test_open_subject_clipped(self, engine):
        """Open subjects are returned in the open buffer."""
        closed, opened = run_flat(
            engine,
            [],
            [square(0, 0, 100)],
            ClipType.INTERSECTION,
            open_subjects=[[(-50, 50), (150, 50)]],
        )
        assert closed == []
        assert len(opened) == 1
        xs = [x for x, _ in opened[0]]
        assert (min(xs), max(xs)) == (0, 100)
        assert {y for _, y in opened[0]} == {50}

    def test_buffers_untouched_on_wrong_handle(self, engine):
        """Execute validates every handle before running."""
        handle = engine.new_clipper()
        out = engine.new_paths()
        with pytest.raises(EngineHandleError):
            engine.execute(handle, ClipType.UNION, FillRule.NON_ZERO, out, 9999)
        assert engine.paths_contents(out) == []
        engine.delete_paths(out)
        engine.delete_clipper(handle)


    def test_out_of_range_refused(self, engine):
        """Coordinates beyond the engine range make execution report failure."""
        limit = COORDINATE_RANGE + 1
        handle = engine.new_clipper()
        out = engine.new_paths()
        tree = engine.new_polytree()
        engine.add_subject(handle, [[(0, 0), (limit, 0), (limit, limit), (0, limit)]])
        engine.add_clip(handle, [square(0, 0, 10)])
        assert not engine.execute(handle, ClipType.UNION, FillRule.NON_ZERO, out, out)
        assert not engine.execute_tree(handle, ClipType.UNION, FillRule.NON_ZERO, tree, out)
        assert engine.paths_contents(out) == []
        engine.delete_polytree(tree)
        engine.delete_paths(out)
        engine.delete_clipper(handle)
        assert engine.live_handles() == 0

    def test_negative_out_of_range_refused(self, engine):
        """The range check applies to negative coordinates too."""
        limit = -COORDINATE_RANGE - 1
        handle = engine.new_clipper()
        out = engine.new_paths()
        engine.add_subject(handle, [[(0, 0), (limit, 0), (0, 10)]])
        engine.add_clip(handle, [square(0, 0, 10)])
        assert not engine.execute(handle, ClipType.UNION, FillRule.NON_ZERO, out, out)
        engine.delete_paths(out)
        engine.delete_clipper(handle)

@pytest.fixture
def holed_tree(engine):
    """Engine tree for a square with a square hole punched out."""
    handle = engine.new_clipper()
    engine.add_subject(handle, [square(0, 0, 100)])
    engine.add_clip(handle, [square(30, 30, 40)])
    tree = engine.new_polytree()
    open_out = engine.new_paths()
    assert engine.execute_tree(handle, ClipType.DIFFERENCE, FillRule.NON_ZERO, tree, open_out)
    engine.delete_paths(open_out)
    engine.delete_clipper(handle)
    yield tree
    if engine.is_live(tree):
        engine.delete_polytree(tree)


class TestTree:
    """Tests for tree execution and introspection."""

    def test_root_structure(self, engine, holed_tree):
        """One outer polygon holding one hole."""
        root = engine.polytree_root(holed_tree)
        assert root.is_root
        assert engine.polytree_count(root) == 1

        outer = engine.polytree_get_child(root, 0)
        assert not engine.polytree_is_hole(outer)
        assert engine.polytree_count(outer) == 1

        hole = engine.polytree_get_child(outer, 0)
        assert engine.polytree_is_hole(hole)
        assert engine.polytree_count(hole) == 0

    def test_root_polygon_is_empty(self, engine, holed_tree):
        """The container node has no contour."""
        root = engine.polytree_root(holed_tree)
        assert engine.polytree_polygon(root) == []

    def test_parent_links(self, engine, holed_tree):
        """Parents walk back towards the container."""
        root = engine.polytree_root(holed_tree)
        outer = engine.polytree_get_child(root, 0)
        hole = engine.polytree_get_child(outer, 0)
        assert engine.polytree_parent(hole) == outer
        assert engine.polytree_parent(outer) == root
        assert engine.polytree_parent(root) is None

    def test_area_sign(self, engine, holed_tree):
        """Holes are wound opposite to their outer polygon."""
        root = engine.polytree_root(holed_tree)
        outer = engine.polytree_get_child(root, 0)
        hole = engine.polytree_get_child(outer, 0)
        assert abs(engine.polytree_area(outer)) == 10000
        assert abs(engine.polytree_area(hole)) == 1600
        assert engine.polytree_area(outer) * engine.polytree_area(hole) < 0
        assert engine.polytree_area(root) == 0.0

    def test_to_paths_pre_order(self, engine, holed_tree):
        """Flattening visits the outer polygon before its hole."""
        root = engine.polytree_root(holed_tree)
        contours = engine.polytree_to_paths(root)
        assert len(contours) == 2
        assert abs(shoelace(contours[0])) == 10000
        assert abs(shoelace(contours[1])) == 1600

    def test_walk(self, engine, holed_tree):
        """A walk yields every node below the start in pre-order with its level."""
        root = engine.polytree_root(holed_tree)
        walked = list(engine.polytree_walk(root))
        assert [(level, is_hole) for level, is_hole, _ in walked] == [(0, False), (1, True)]
        assert [abs(shoelace(contour)) for _, _, contour in walked] == [10000, 1600]

    def test_walk_from_node(self, engine, holed_tree):
        """include_self puts the start node at level 0."""
        outer = engine.polytree_get_child(engine.polytree_root(holed_tree), 0)
        walked = list(engine.polytree_walk(outer, include_self=True))
        assert [(level, is_hole) for level, is_hole, _ in walked] == [(0, False), (1, True)]
        hole = engine.polytree_get_child(outer, 0)
        assert list(engine.polytree_walk(hole)) == []

    def test_cached_lookup_matches_engine(self, engine, holed_tree):
        """Repeated lookups return the same answers."""
        root = engine.polytree_root(holed_tree)
        hole = engine.polytree_get_child(engine.polytree_get_child(root, 0), 0)
        first = engine.polytree_polygon(hole)
        assert engine.polytree_polygon(hole) == first
        assert engine.polytree_is_hole(hole)
        with pytest.raises(EngineHandleError, match="out of range"):
            engine.polytree_get_child(root, -1)

    def test_child_out_of_range(self, engine, holed_tree):
        """Indexing past the last child fails."""
        root = engine.polytree_root(holed_tree)
        with pytest.raises(EngineHandleError, match="out of range"):
            engine.polytree_get_child(root, 1)

    def test_dangling_ref_after_release(self, engine, holed_tree):
        """References into a released tree fail on use."""
        root = engine.polytree_root(holed_tree)
        outer = engine.polytree_get_child(root, 0)
        engine.delete_polytree(holed_tree)
        with pytest.raises(EngineHandleError):
            engine.polytree_count(outer)
        with pytest.raises(EngineHandleError):
            engine.polytree_polygon(NodeRef(holed_tree))

    def test_unfilled_tree(self, engine):
        """Nodes of a tree that was never executed cannot be queried."""
        tree = engine.new_polytree()
        with pytest.raises(EngineHandleError, match="not been filled"):
            engine.polytree_count(engine.polytree_root(tree))
        engine.delete_polytree(tree)
