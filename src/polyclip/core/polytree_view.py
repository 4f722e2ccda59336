"""Lazy, engine-resident view of a result tree.

PolyTreeView is the alternative to the owned PolyTree: instead of copying
the engine's tree it keeps it alive inside the engine and answers every
query by asking the engine. Only the root view owns the engine tree and
releases it, exactly once, on close(), on leaving a with block, or when it
is garbage collected. Views obtained through get_child(), children or
parent borrow that tree: they keep the root alive but never release
anything. After the root is closed every view fails with EngineHandleError.

Prefer PolyTree unless traversal of the live engine tree is actually
needed; to_eager() converts a still-open view.
"""

import logging
import weakref
from typing import TYPE_CHECKING

from polyclip.core.polytree import PolyTree
from polyclip.domain import Path, Paths, PointScaler
from polyclip.engine import NodeRef

if TYPE_CHECKING:
    from polyclip.engine import ClippingEngine

logger = logging.getLogger(__name__)


def _release_tree(engine: "ClippingEngine", tree: int) -> None:
    engine.delete_polytree(tree)
    logger.debug("Released engine tree %d", tree)


class PolyTreeView:
    """Node of an engine-resident tree, queried on demand.

    Use PolyTreeView.take() to create the owning root view.
    """

    def __init__(
        self,
        engine: "ClippingEngine",
        ref: NodeRef,
        scaler: PointScaler,
        owner: "PolyTreeView | None" = None,
    ) -> None:
        self._engine = engine
        self._ref = ref
        self._scaler = scaler
        # Borrowed views hold the owning root so it outlives them
        self._owner = owner
        self._finalizer: weakref.finalize | None = None

    @classmethod
    def take(cls, engine: "ClippingEngine", tree: int, scaler: PointScaler) -> "PolyTreeView":
        """Create the root view, taking over release of the engine tree.

        Args:
            engine: Engine owning the tree
            tree: Tree handle filled by a tree boolean operation
            scaler: Scaler for converting contours and areas

        Returns:
            Owning root view
        """
        view = cls(engine, engine.polytree_root(tree), scaler)
        view._finalizer = weakref.finalize(view, _release_tree, engine, tree)
        return view

    def _borrow(self, ref: NodeRef) -> "PolyTreeView":
        return PolyTreeView(self._engine, ref, self._scaler, owner=self._owner or self)

    @property
    def is_owner(self) -> bool:
        """True for the root view responsible for releasing the engine tree."""
        return self._finalizer is not None

    @property
    def closed(self) -> bool:
        """True once the underlying engine tree has been released."""
        root = self._owner or self
        return root._finalizer is None or not root._finalizer.alive

    @property
    def is_root(self) -> bool:
        """True for the container node."""
        return self._ref.is_root

    def close(self) -> None:
        """Release the engine tree if this is the owning root view.

        Borrowed views own nothing, so closing them does nothing. Calling
        close() on the root more than once is safe.
        """
        if self._finalizer is not None:
            self._finalizer()

    def __enter__(self) -> "PolyTreeView":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def child_count(self) -> int:
        """Number of direct children."""
        return self._engine.polytree_count(self._ref)

    def get_child(self, index: int) -> "PolyTreeView | None":
        """Borrowed view of the child at a 0-based index, or None if out of range."""
        if not 0 <= index < self.child_count():
            return None
        return self._borrow(self._engine.polytree_get_child(self._ref, index))

    @property
    def children(self) -> list["PolyTreeView"]:
        """Borrowed views of the direct children in engine order."""
        return [
            self._borrow(self._engine.polytree_get_child(self._ref, i))
            for i in range(self.child_count())
        ]

    @property
    def parent(self) -> "PolyTreeView | None":
        """Borrowed view of the parent; the root view itself for top-level polygons."""
        ref = self._engine.polytree_parent(self._ref)
        if ref is None:
            return None
        if ref.is_root:
            return self._owner or self
        return self._borrow(ref)

    def is_hole(self) -> bool:
        """Check if this node's polygon bounds a hole."""
        return self._engine.polytree_is_hole(self._ref)

    @property
    def polygon(self) -> Path:
        """Copy of this node's contour."""
        return Path.from_grid(self._engine.polytree_polygon(self._ref), self._scaler)

    def area(self) -> float:
        """Signed area of this node's own polygon in application units.

        The engine measures area on the integer grid, so it is divided by
        the square of the scale multiplier.
        """
        return self._scaler.area_from_grid(self._engine.polytree_area(self._ref))

    def to_paths(self) -> Paths:
        """Flatten this node and its descendants into one collection, pre-order."""
        return Paths.from_grid(self._engine.polytree_to_paths(self._ref), self._scaler)

    def get_hole_paths(self) -> Paths:
        """Flatten only the hole polygons of this subtree, pre-order."""
        engine = self._engine
        holes: list[Path] = []
        stack = [self._ref]
        while stack:
            ref = stack.pop()
            if not ref.is_root and engine.polytree_is_hole(ref):
                holes.append(Path.from_grid(engine.polytree_polygon(ref), self._scaler))
            count = engine.polytree_count(ref)
            stack.extend(engine.polytree_get_child(ref, i) for i in reversed(range(count)))
        return Paths(tuple(holes), self._scaler)

    def to_eager(self) -> PolyTree:
        """Copy this subtree into an owned PolyTree."""
        return PolyTree.from_engine(self._engine, self._ref.tree, self._scaler, start=self._ref)

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        role = "owner" if self.is_owner else "borrowed"
        return f"PolyTreeView({role}, {state}, path={self._ref.path})"
