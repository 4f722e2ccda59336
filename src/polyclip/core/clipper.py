"""Typestate builder for boolean operations.

The builder is split into three classes, one per stage, and each exposes
only the calls that are legal at that stage:

    Clipper               add_subject, add_open_subject
    ClipperWithSubjects   add_subject, add_open_subject, add_clip
    ClipperWithClips      add_clip, union/difference/intersect/xor (+ _tree)

so a boolean operation cannot be requested before at least one subject and
one clip were registered.

All stages share one engine computation handle, held by a single
_EngineHandle owner. Every call moves that owner from the receiving builder
to the builder (or result) it returns and leaves the receiver consumed;
using a consumed builder raises ClipperConsumedError. The owner releases
the handle exactly once: explicitly through close() or a terminal
operation, or when the last builder holding it is garbage collected.

Example:
    result = (
        Clipper()
        .add_subject([(0.2, 0.2), (6.0, 0.2), (6.0, 6.0), (0.2, 6.0)])
        .add_clip([(5.0, 5.0), (8.0, 5.0), (8.0, 8.0), (5.0, 8.0)])
        .union(FillRule.NON_ZERO)
    )
"""

import logging
import weakref

from polyclip.core.adapter import run_boolean, run_boolean_tree, run_boolean_view
from polyclip.core.results import BooleanResult, BooleanTreeResult, BooleanTreeViewResult
from polyclip.domain import CENTI, ClipType, FillRule, Paths, PathsLike, PointScaler
from polyclip.engine import ClippingEngine, get_default_engine
from polyclip.exceptions import ClipperConsumedError

logger = logging.getLogger(__name__)


def _release_clipper(engine: ClippingEngine, handle: int) -> None:
    engine.delete_clipper(handle)
    logger.debug("Released clipper handle %d", handle)


class _EngineHandle:
    """Sole owner of one engine computation handle.

    The release action is bound to this object rather than to any builder,
    so passing the owner from one builder to the next never creates a
    second release obligation. release() is idempotent.
    """

    __slots__ = ("__weakref__", "_finalizer", "engine", "handle")

    def __init__(self, engine: ClippingEngine) -> None:
        self.engine = engine
        self.handle = engine.new_clipper()
        self._finalizer = weakref.finalize(self, _release_clipper, engine, self.handle)

    @property
    def released(self) -> bool:
        """True once the engine handle has been released."""
        return not self._finalizer.alive

    def release(self) -> None:
        """Release the engine handle; later calls do nothing."""
        self._finalizer()


class _ClipperStage:
    """State shared by every builder stage."""

    _stage_name = "Clipper"

    _owner: _EngineHandle | None
    _scaler: PointScaler

    def _init_stage(self, owner: _EngineHandle, scaler: PointScaler) -> None:
        self._owner = owner
        self._scaler = scaler

    @property
    def scaler(self) -> PointScaler:
        """Scaler used to quantize registered geometry and convert results."""
        return self._scaler

    @property
    def consumed(self) -> bool:
        """True once this builder has handed its engine handle on or released it."""
        return self._owner is None

    def _coerce(self, geometry: PathsLike) -> Paths:
        if self._owner is None:
            raise ClipperConsumedError(self._stage_name)
        return Paths.coerce(geometry, self._scaler)

    def _take(self) -> _EngineHandle:
        owner = self._owner
        if owner is None:
            raise ClipperConsumedError(self._stage_name)
        self._owner = None
        return owner

    def close(self) -> None:
        """Abandon the builder and release its engine handle.

        Safe to call on a consumed builder; it then does nothing.
        """
        owner, self._owner = self._owner, None
        if owner is not None:
            owner.release()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "consumed" if self.consumed else "active"
        return f"{self._stage_name}({state}, scale={self._scaler.multiplier})"


class Clipper(_ClipperStage):
    """Builder stage with no geometry registered.

    Args:
        scaler: Grid resolution for input and output (CENTI if None)
        engine: Engine performing the computation (process default if None)
    """

    _stage_name = "Clipper"

    def __init__(
        self,
        scaler: PointScaler | None = None,
        engine: ClippingEngine | None = None,
    ) -> None:
        self._init_stage(_EngineHandle(engine or get_default_engine()), scaler or CENTI)

    def add_subject(self, subject: PathsLike) -> "ClipperWithSubjects":
        """Register closed subject geometry.

        Args:
            subject: A contour, a list of contours, a Path or Paths

        Returns:
            Builder owning the engine handle; this builder is consumed
        """
        paths = self._coerce(subject)
        owner = self._take()
        owner.engine.add_subject(owner.handle, paths.to_grid())
        return ClipperWithSubjects(owner, self._scaler)

    def add_open_subject(self, subject: PathsLike) -> "ClipperWithSubjects":
        """Register open subject geometry (polylines).

        Returns:
            Builder owning the engine handle; this builder is consumed
        """
        paths = self._coerce(subject)
        owner = self._take()
        owner.engine.add_open_subject(owner.handle, paths.to_grid())
        return ClipperWithSubjects(owner, self._scaler)


class ClipperWithSubjects(_ClipperStage):
    """Builder stage with subjects registered and no clips yet.

    Instances are only produced by Clipper.add_subject/add_open_subject.
    """

    _stage_name = "ClipperWithSubjects"

    def __init__(self, owner: _EngineHandle, scaler: PointScaler) -> None:
        if not isinstance(owner, _EngineHandle):
            raise TypeError("ClipperWithSubjects is created by Clipper.add_subject()")
        self._init_stage(owner, scaler)

    def add_subject(self, subject: PathsLike) -> "ClipperWithSubjects":
        """Register more closed subject geometry."""
        paths = self._coerce(subject)
        owner = self._take()
        owner.engine.add_subject(owner.handle, paths.to_grid())
        return ClipperWithSubjects(owner, self._scaler)

    def add_open_subject(self, subject: PathsLike) -> "ClipperWithSubjects":
        """Register more open subject geometry."""
        paths = self._coerce(subject)
        owner = self._take()
        owner.engine.add_open_subject(owner.handle, paths.to_grid())
        return ClipperWithSubjects(owner, self._scaler)

    def add_clip(self, clip: PathsLike) -> "ClipperWithClips":
        """Register clip geometry.

        Returns:
            Builder on which boolean operations can be run
        """
        paths = self._coerce(clip)
        owner = self._take()
        owner.engine.add_clip(owner.handle, paths.to_grid())
        return ClipperWithClips(owner, self._scaler)


class ClipperWithClips(_ClipperStage):
    """Builder stage with subjects and clips registered.

    Every boolean operation consumes the builder and releases the engine
    handle, whether it succeeds or raises FailedBooleanOperation.
    """

    _stage_name = "ClipperWithClips"

    def __init__(self, owner: _EngineHandle, scaler: PointScaler) -> None:
        if not isinstance(owner, _EngineHandle):
            raise TypeError("ClipperWithClips is created by ClipperWithSubjects.add_clip()")
        self._init_stage(owner, scaler)

    def add_clip(self, clip: PathsLike) -> "ClipperWithClips":
        """Register more clip geometry."""
        paths = self._coerce(clip)
        owner = self._take()
        owner.engine.add_clip(owner.handle, paths.to_grid())
        return ClipperWithClips(owner, self._scaler)

    def boolean_operation(
        self, clip_type: ClipType, fill_rule: FillRule = FillRule.NON_ZERO
    ) -> BooleanResult:
        """Run a flat boolean operation.

        Args:
            clip_type: Boolean operation to perform
            fill_rule: Fill rule for subjects and clips

        Returns:
            BooleanResult with closed and open paths

        Raises:
            FailedBooleanOperation: If the engine reports failure
        """
        owner = self._take()
        try:
            closed, opened = run_boolean(
                owner.engine, owner.handle, clip_type, fill_rule, self._scaler
            )
        finally:
            owner.release()
        return BooleanResult(closed=closed, open=opened)

    def union(self, fill_rule: FillRule = FillRule.NON_ZERO) -> BooleanResult:
        """Union of subjects and clips."""
        return self.boolean_operation(ClipType.UNION, fill_rule)

    def difference(self, fill_rule: FillRule = FillRule.NON_ZERO) -> BooleanResult:
        """Subjects minus clips."""
        return self.boolean_operation(ClipType.DIFFERENCE, fill_rule)

    def intersect(self, fill_rule: FillRule = FillRule.NON_ZERO) -> BooleanResult:
        """Regions covered by both subjects and clips."""
        return self.boolean_operation(ClipType.INTERSECTION, fill_rule)

    def xor(self, fill_rule: FillRule = FillRule.NON_ZERO) -> BooleanResult:
        """Regions covered by exactly one of subjects and clips."""
        return self.boolean_operation(ClipType.XOR, fill_rule)

    def boolean_operation_tree(
        self, clip_type: ClipType, fill_rule: FillRule = FillRule.NON_ZERO
    ) -> BooleanTreeResult:
        """Run a boolean operation producing an owned containment tree.

        Args:
            clip_type: Boolean operation to perform
            fill_rule: Fill rule for subjects and clips

        Returns:
            BooleanTreeResult with a PolyTree and open paths

        Raises:
            FailedBooleanOperation: If the engine reports failure
        """
        owner = self._take()
        try:
            tree, opened = run_boolean_tree(
                owner.engine, owner.handle, clip_type, fill_rule, self._scaler
            )
        finally:
            owner.release()
        return BooleanTreeResult(tree=tree, open=opened)

    def union_tree(self, fill_rule: FillRule = FillRule.NON_ZERO) -> BooleanTreeResult:
        """Union of subjects and clips as a containment tree."""
        return self.boolean_operation_tree(ClipType.UNION, fill_rule)

    def difference_tree(self, fill_rule: FillRule = FillRule.NON_ZERO) -> BooleanTreeResult:
        """Subjects minus clips as a containment tree."""
        return self.boolean_operation_tree(ClipType.DIFFERENCE, fill_rule)

    def intersect_tree(self, fill_rule: FillRule = FillRule.NON_ZERO) -> BooleanTreeResult:
        """Intersection of subjects and clips as a containment tree."""
        return self.boolean_operation_tree(ClipType.INTERSECTION, fill_rule)

    def xor_tree(self, fill_rule: FillRule = FillRule.NON_ZERO) -> BooleanTreeResult:
        """Exclusive or of subjects and clips as a containment tree."""
        return self.boolean_operation_tree(ClipType.XOR, fill_rule)

    def boolean_operation_view(
        self, clip_type: ClipType, fill_rule: FillRule = FillRule.NON_ZERO
    ) -> BooleanTreeViewResult:
        """Run a boolean operation and keep the result tree inside the engine.

        The computation handle is released here; the engine tree is owned
        by the returned root view until it is closed.

        Raises:
            FailedBooleanOperation: If the engine reports failure
        """
        owner = self._take()
        try:
            view, opened = run_boolean_view(
                owner.engine, owner.handle, clip_type, fill_rule, self._scaler
            )
        finally:
            owner.release()
        return BooleanTreeViewResult(tree=view, open=opened)
