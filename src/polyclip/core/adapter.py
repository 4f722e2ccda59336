"""Execution adapter between polyclip values and the clipping engine.

Every function here follows the same discipline: each engine resource it
allocates is registered on an ExitStack the moment it exists, so it is
released on success, on engine failure and on any unexpected exception.
Output buffers are only read after the engine reported success.
"""

import logging
from contextlib import ExitStack

from polyclip.core.polytree import PolyTree
from polyclip.core.polytree_view import PolyTreeView
from polyclip.domain import CENTI, ClipType, FillRule, Paths, PathsLike, PointScaler
from polyclip.engine import ClippingEngine, get_default_engine
from polyclip.exceptions import FailedBooleanOperation

logger = logging.getLogger(__name__)


def register_geometry(
    engine: ClippingEngine,
    handle: int,
    subjects: Paths,
    open_subjects: Paths,
    clips: Paths,
) -> None:
    """Register geometry in engine order: subjects, open subjects, clips."""
    engine.add_subject(handle, subjects.to_grid())
    engine.add_open_subject(handle, open_subjects.to_grid())
    engine.add_clip(handle, clips.to_grid())


def run_boolean(
    engine: ClippingEngine,
    handle: int,
    clip_type: ClipType,
    fill_rule: FillRule,
    scaler: PointScaler,
) -> tuple[Paths, Paths]:
    """Execute a flat boolean operation on a prepared computation handle.

    The handle itself is not released; that is the caller's responsibility.

    Args:
        engine: Engine owning the handle
        handle: Computation handle with registered geometry
        clip_type: Boolean operation to perform
        fill_rule: Fill rule for subjects and clips
        scaler: Scaler used to convert output back to application units

    Returns:
        Tuple of (closed paths, open paths)

    Raises:
        FailedBooleanOperation: If the engine reports failure
    """
    with ExitStack() as stack:
        closed_out = engine.new_paths()
        stack.callback(engine.delete_paths, closed_out)
        open_out = engine.new_paths()
        stack.callback(engine.delete_paths, open_out)

        if not engine.execute(handle, clip_type, fill_rule, closed_out, open_out):
            raise FailedBooleanOperation(clip_type, fill_rule)

        closed = Paths.from_grid(engine.paths_contents(closed_out), scaler)
        opened = Paths.from_grid(engine.paths_contents(open_out), scaler)

    logger.debug(
        "%s finished: %d closed, %d open contour(s)",
        clip_type.value, len(closed), len(opened),
    )
    return closed, opened


def run_boolean_tree(
    engine: ClippingEngine,
    handle: int,
    clip_type: ClipType,
    fill_rule: FillRule,
    scaler: PointScaler,
) -> tuple[PolyTree, Paths]:
    """Execute a tree-producing boolean operation and copy the tree out.

    The engine tree is walked once into an owned PolyTree and released
    before returning.

    Returns:
        Tuple of (owned tree, open paths)

    Raises:
        FailedBooleanOperation: If the engine reports failure
    """
    with ExitStack() as stack:
        tree_out = engine.new_polytree()
        stack.callback(engine.delete_polytree, tree_out)
        open_out = engine.new_paths()
        stack.callback(engine.delete_paths, open_out)

        if not engine.execute_tree(handle, clip_type, fill_rule, tree_out, open_out):
            raise FailedBooleanOperation(clip_type, fill_rule)

        tree = PolyTree.from_engine(engine, tree_out, scaler)
        opened = Paths.from_grid(engine.paths_contents(open_out), scaler)

    logger.debug(
        "%s tree finished: %d node(s), %d open contour(s)",
        clip_type.value, len(tree), len(opened),
    )
    return tree, opened


def run_boolean_view(
    engine: ClippingEngine,
    handle: int,
    clip_type: ClipType,
    fill_rule: FillRule,
    scaler: PointScaler,
) -> tuple[PolyTreeView, Paths]:
    """Execute a tree-producing boolean operation and keep the tree in the engine.

    On success the engine tree is handed to a PolyTreeView, which becomes
    its only owner. On failure the tree is released here.

    Returns:
        Tuple of (owning root view, open paths)

    Raises:
        FailedBooleanOperation: If the engine reports failure
    """
    with ExitStack() as stack:
        open_out = engine.new_paths()
        stack.callback(engine.delete_paths, open_out)

        with ExitStack() as tree_guard:
            tree_out = engine.new_polytree()
            tree_guard.callback(engine.delete_polytree, tree_out)

            if not engine.execute_tree(handle, clip_type, fill_rule, tree_out, open_out):
                raise FailedBooleanOperation(clip_type, fill_rule)

            opened = Paths.from_grid(engine.paths_contents(open_out), scaler)
            view = PolyTreeView.take(engine, tree_out, scaler)
            tree_guard.pop_all()

    return view, opened


def _coerce_all(
    subjects: PathsLike,
    open_subjects: PathsLike | None,
    clips: PathsLike,
    scaler: PointScaler,
) -> tuple[Paths, Paths, Paths]:
    return (
        Paths.coerce(subjects, scaler),
        Paths.coerce(open_subjects if open_subjects is not None else [], scaler),
        Paths.coerce(clips, scaler),
    )


def execute(
    subjects: PathsLike,
    open_subjects: PathsLike | None,
    clips: PathsLike,
    clip_type: ClipType,
    fill_rule: FillRule = FillRule.NON_ZERO,
    scaler: PointScaler = CENTI,
    engine: ClippingEngine | None = None,
) -> tuple[Paths, Paths]:
    """Run one flat boolean operation on a fresh computation handle.

    Args:
        subjects: Closed subject geometry
        open_subjects: Open subject geometry (None for none)
        clips: Clip geometry
        clip_type: Boolean operation to perform
        fill_rule: Fill rule for subjects and clips
        scaler: Scaler for input quantization and output conversion
        engine: Engine to use (process default if None)

    Returns:
        Tuple of (closed paths, open paths)

    Raises:
        FailedBooleanOperation: If the engine reports failure
    """
    engine = engine or get_default_engine()
    subject_paths, open_paths, clip_paths = _coerce_all(subjects, open_subjects, clips, scaler)

    handle = engine.new_clipper()
    try:
        register_geometry(engine, handle, subject_paths, open_paths, clip_paths)
        return run_boolean(engine, handle, clip_type, fill_rule, scaler)
    finally:
        engine.delete_clipper(handle)


def execute_tree(
    subjects: PathsLike,
    open_subjects: PathsLike | None,
    clips: PathsLike,
    clip_type: ClipType,
    fill_rule: FillRule = FillRule.NON_ZERO,
    scaler: PointScaler = CENTI,
    engine: ClippingEngine | None = None,
) -> tuple[PolyTree, Paths]:
    """Run one tree-producing boolean operation on a fresh computation handle.

    Returns:
        Tuple of (owned tree, open paths)

    Raises:
        FailedBooleanOperation: If the engine reports failure
    """
    engine = engine or get_default_engine()
    subject_paths, open_paths, clip_paths = _coerce_all(subjects, open_subjects, clips, scaler)

    handle = engine.new_clipper()
    try:
        register_geometry(engine, handle, subject_paths, open_paths, clip_paths)
        return run_boolean_tree(engine, handle, clip_type, fill_rule, scaler)
    finally:
        engine.delete_clipper(handle)
