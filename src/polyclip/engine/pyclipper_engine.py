"""Handle-based boundary around the pyclipper clipping engine.

The rest of polyclip never touches pyclipper objects directly. Every engine
resource (a clipper computation, an output buffer, a result tree) is
allocated here, handed out as an opaque integer handle, and must be freed
through the matching delete call. Looking up a handle that was never
allocated or has already been freed raises EngineHandleError, which turns
double-release and use-after-release bugs into immediate errors.

Tree nodes are addressed by NodeRef values: the owning tree handle plus the
child index path from the root. A NodeRef does not own anything; once its
tree is deleted every NodeRef into it is dangling and fails on use.
"""

import itertools
import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

import pyclipper

from polyclip.domain import ClipType, FillRule
from polyclip.exceptions import EngineHandleError

logger = logging.getLogger(__name__)

GridContour = list[tuple[int, int]]

# Largest coordinate magnitude the engine accepts
COORDINATE_RANGE = 0x3FFFFFFFFFFFFFFF

_CLIP_TYPES: dict[ClipType, int] = {
    ClipType.UNION: pyclipper.CT_UNION,
    ClipType.DIFFERENCE: pyclipper.CT_DIFFERENCE,
    ClipType.INTERSECTION: pyclipper.CT_INTERSECTION,
    ClipType.XOR: pyclipper.CT_XOR,
}

_FILL_RULES: dict[FillRule, int] = {
    FillRule.EVEN_ODD: pyclipper.PFT_EVENODD,
    FillRule.NON_ZERO: pyclipper.PFT_NONZERO,
    FillRule.POSITIVE: pyclipper.PFT_POSITIVE,
    FillRule.NEGATIVE: pyclipper.PFT_NEGATIVE,
}


@dataclass(frozen=True, slots=True)
class NodeRef:
    """Non-owning reference to a node of an engine-resident tree.

    Attributes:
        tree: Handle of the tree the node belongs to
        path: Child indices leading from the root to this node
    """

    tree: int
    path: tuple[int, ...] = ()

    @property
    def is_root(self) -> bool:
        """True for the tree's container node."""
        return not self.path


@dataclass
class _ClipperSlot:
    clipper: Any
    has_open: bool = False
    out_of_range: bool = False


@dataclass
class _PathsBuffer:
    contours: list[GridContour] = field(default_factory=list)


@dataclass
class _TreeSlot:
    root: Any = None
    nodes: dict[tuple[int, ...], Any] = field(default_factory=dict)
    children: dict[tuple[int, ...], list[Any]] = field(default_factory=dict)

    def fill(self, root: Any) -> None:
        self.root = root
        self.nodes.clear()
        self.children.clear()

    def closed_children(self, path: tuple[int, ...]) -> list[Any]:
        cached = self.children.get(path)
        if cached is None:
            cached = self.children[path] = _closed_children(self.node(path))
        return cached

    def node(self, path: tuple[int, ...]) -> Any:
        if not path:
            return self.root
        cached = self.nodes.get(path)
        if cached is None:
            siblings = self.closed_children(path[:-1])
            index = path[-1]
            if not 0 <= index < len(siblings):
                raise IndexError(index)
            cached = self.nodes[path] = siblings[index]
        return cached


def _contour(raw: Sequence[Sequence[int]]) -> GridContour:
    return [(int(x), int(y)) for x, y in raw]


def _closed_children(node: Any) -> list[Any]:
    return [child for child in node.Childs if not child.IsOpen]


def _in_range(contour: GridContour) -> bool:
    return all(
        -COORDINATE_RANGE <= x <= COORDINATE_RANGE and -COORDINATE_RANGE <= y <= COORDINATE_RANGE
        for x, y in contour
    )


class ClippingEngine:
    """Allocator and primitive set for boolean computations.

    Example:
        engine = ClippingEngine()
        handle = engine.new_clipper()
        engine.add_subject(handle, [[(0, 0), (10, 0), (10, 10)]])
        ...
        engine.delete_clipper(handle)
    """

    def __init__(self) -> None:
        self._handles: dict[int, object] = {}
        self._ids = itertools.count(1)

    # -- handle table -------------------------------------------------------

    def _allocate(self, resource: object) -> int:
        handle = next(self._ids)
        self._handles[handle] = resource
        logger.debug("Allocated %s handle %d", type(resource).__name__, handle)
        return handle

    def _lookup(self, handle: int, kind: type) -> Any:
        resource = self._handles.get(handle)
        if resource is None:
            raise EngineHandleError(handle, "not allocated or already released")
        if not isinstance(resource, kind):
            raise EngineHandleError(
                handle, f"expected {kind.__name__}, got {type(resource).__name__}"
            )
        return resource

    def _free(self, handle: int, kind: type) -> None:
        self._lookup(handle, kind)
        del self._handles[handle]
        logger.debug("Released %s handle %d", kind.__name__, handle)

    def live_handles(self) -> int:
        """Number of engine resources currently allocated."""
        return len(self._handles)

    def is_live(self, handle: int) -> bool:
        """Check whether a handle is currently allocated."""
        return handle in self._handles

    # -- clipper computations -----------------------------------------------

    def new_clipper(self) -> int:
        """Allocate a boolean computation handle."""
        return self._allocate(_ClipperSlot(clipper=pyclipper.Pyclipper()))

    def delete_clipper(self, handle: int) -> None:
        """Release a boolean computation handle."""
        slot = self._lookup(handle, _ClipperSlot)
        slot.clipper.Clear()
        self._free(handle, _ClipperSlot)

    def _add(self, handle: int, contours: list[GridContour], poly_type: int, closed: bool) -> bool:
        slot = self._lookup(handle, _ClipperSlot)
        if not contours:
            return False
        if not all(_in_range(c) for c in contours):
            # Out-of-range input fails the whole computation
            logger.warning("Coordinates outside the engine range on handle %d", handle)
            slot.out_of_range = True
            return False
        try:
            slot.clipper.AddPaths(contours, poly_type, closed)
        except pyclipper.ClipperException as exc:
            # Degenerate input is the engine's concern; it is simply not part
            # of the computation.
            logger.debug("Engine rejected %d contour(s): %s", len(contours), exc)
            return False
        return True

    def add_subject(self, handle: int, contours: list[GridContour]) -> None:
        """Register closed subject contours on a computation."""
        self._add(handle, contours, pyclipper.PT_SUBJECT, True)

    def add_open_subject(self, handle: int, contours: list[GridContour]) -> None:
        """Register open subject contours (polylines) on a computation."""
        if self._add(handle, contours, pyclipper.PT_SUBJECT, False):
            self._lookup(handle, _ClipperSlot).has_open = True

    def add_clip(self, handle: int, contours: list[GridContour]) -> None:
        """Register clip contours on a computation."""
        self._add(handle, contours, pyclipper.PT_CLIP, True)

    # -- output buffers -----------------------------------------------------

    def new_paths(self) -> int:
        """Allocate an empty output buffer."""
        return self._allocate(_PathsBuffer())

    def paths_contents(self, handle: int) -> list[GridContour]:
        """Copy the contours held by an output buffer."""
        buffer = self._lookup(handle, _PathsBuffer)
        return [list(c) for c in buffer.contours]

    def delete_paths(self, handle: int) -> None:
        """Release an output buffer."""
        self._free(handle, _PathsBuffer)

    # -- execution ----------------------------------------------------------

    def execute(
        self,
        handle: int,
        clip_type: ClipType,
        fill_rule: FillRule,
        closed_out: int,
        open_out: int,
    ) -> bool:
        """Run a boolean operation writing flat closed and open output.

        Args:
            handle: Computation handle with registered geometry
            clip_type: Boolean operation to perform
            fill_rule: Fill rule applied to subjects and clips
            closed_out: Buffer receiving closed contours
            open_out: Buffer receiving open contours

        Returns:
            True on success, False if the engine reported failure
        """
        slot = self._lookup(handle, _ClipperSlot)
        closed_buffer = self._lookup(closed_out, _PathsBuffer)
        open_buffer = self._lookup(open_out, _PathsBuffer)
        if slot.out_of_range:
            logger.warning("Engine execute refused on handle %d: coordinates out of range", handle)
            return False
        ct = _CLIP_TYPES[clip_type]
        ft = _FILL_RULES[fill_rule]

        try:
            if slot.has_open:
                # Open path clipping is only available through the tree variant
                root = slot.clipper.Execute2(ct, ft, ft)
                closed = pyclipper.ClosedPathsFromPolyTree(root)
                opened = pyclipper.OpenPathsFromPolyTree(root)
            else:
                closed = slot.clipper.Execute(ct, ft, ft)
                opened = []
        except pyclipper.ClipperException as exc:
            logger.warning("Engine execute failed on handle %d: %s", handle, exc)
            return False

        closed_buffer.contours = [_contour(c) for c in closed]
        open_buffer.contours = [_contour(c) for c in opened]
        return True

    def new_polytree(self) -> int:
        """Allocate an empty tree to receive hierarchical output."""
        return self._allocate(_TreeSlot())

    def execute_tree(
        self,
        handle: int,
        clip_type: ClipType,
        fill_rule: FillRule,
        tree_out: int,
        open_out: int,
    ) -> bool:
        """Run a boolean operation writing a containment tree and open output.

        Returns:
            True on success, False if the engine reported failure
        """
        slot = self._lookup(handle, _ClipperSlot)
        tree = self._lookup(tree_out, _TreeSlot)
        open_buffer = self._lookup(open_out, _PathsBuffer)
        if slot.out_of_range:
            logger.warning(
                "Engine tree execute refused on handle %d: coordinates out of range", handle
            )
            return False
        ct = _CLIP_TYPES[clip_type]
        ft = _FILL_RULES[fill_rule]

        try:
            root = slot.clipper.Execute2(ct, ft, ft)
        except pyclipper.ClipperException as exc:
            logger.warning("Engine tree execute failed on handle %d: %s", handle, exc)
            return False

        tree.fill(root)
        open_buffer.contours = [_contour(c) for c in pyclipper.OpenPathsFromPolyTree(root)]
        return True

    def delete_polytree(self, tree: int) -> None:
        """Release a result tree and every node in it."""
        slot = self._lookup(tree, _TreeSlot)
        slot.fill(None)
        self._free(tree, _TreeSlot)

    # -- tree introspection -------------------------------------------------

    def _tree_slot(self, ref: NodeRef) -> _TreeSlot:
        slot = self._lookup(ref.tree, _TreeSlot)
        if slot.root is None:
            raise EngineHandleError(ref.tree, "tree has not been filled by execute_tree")
        return slot

    def _resolve(self, ref: NodeRef) -> Any:
        slot = self._tree_slot(ref)
        try:
            return slot.node(ref.path)
        except IndexError as exc:
            raise EngineHandleError(ref, f"child index {exc.args[0]} out of range") from None

    def polytree_root(self, tree: int) -> NodeRef:
        """Reference to the container node of a tree."""
        self._lookup(tree, _TreeSlot)
        return NodeRef(tree)

    def polytree_count(self, ref: NodeRef) -> int:
        """Number of direct closed children of a node."""
        self._resolve(ref)
        return len(self._tree_slot(ref).closed_children(ref.path))

    def polytree_get_child(self, ref: NodeRef, index: int) -> NodeRef:
        """Reference to the child at a 0-based index."""
        child = NodeRef(ref.tree, (*ref.path, index))
        self._resolve(child)
        return child

    def polytree_parent(self, ref: NodeRef) -> NodeRef | None:
        """Reference to the parent node, None for the container node."""
        self._resolve(ref)
        if ref.is_root:
            return None
        return NodeRef(ref.tree, ref.path[:-1])

    def polytree_is_hole(self, ref: NodeRef) -> bool:
        """Hole flag of a node."""
        return bool(self._resolve(ref).IsHole)

    def polytree_polygon(self, ref: NodeRef) -> GridContour:
        """Copy of a node's own contour."""
        return _contour(self._resolve(ref).Contour)

    def polytree_to_paths(self, ref: NodeRef) -> list[GridContour]:
        """Pre-order copy of the contours of a node and its descendants."""
        result: list[GridContour] = []
        stack = [self._resolve(ref)]
        while stack:
            node = stack.pop()
            if len(node.Contour) > 0:
                result.append(_contour(node.Contour))
            stack.extend(reversed(_closed_children(node)))
        return result

    def polytree_walk(
        self, ref: NodeRef, include_self: bool = False
    ) -> Iterator[tuple[int, bool, GridContour]]:
        """Pre-order walk below a node in a single pass.

        Yields (level, is_hole, contour) per node. Level 0 is the node itself
        when include_self is set, otherwise its direct children. Children are
        visited in index order.
        """
        node = self._resolve(ref)
        if include_self:
            stack = [(node, 0)]
        else:
            stack = [(child, 0) for child in reversed(_closed_children(node))]
        while stack:
            node, level = stack.pop()
            yield level, bool(node.IsHole), _contour(node.Contour)
            stack.extend((child, level + 1) for child in reversed(_closed_children(node)))

    def polytree_area(self, ref: NodeRef) -> float:
        """Signed area of a node's own contour in grid units."""
        contour = self._resolve(ref).Contour
        if len(contour) < 3:
            return 0.0
        return float(pyclipper.Area(contour))


_default_engine: ClippingEngine | None = None


def get_default_engine() -> ClippingEngine:
    """Get the process-wide engine used when none is injected."""
    global _default_engine
    if _default_engine is None:
        _default_engine = ClippingEngine()
    return _default_engine
