"""Owned containment tree produced by tree boolean operations.

A PolyTree is a deep copy of the engine's result tree, taken once right
after a successful operation. All nodes live in one list owned by the
PolyTree; children and parents are integer indices into that list. Index 0
is a virtual container whose children are the top-level polygons.

Nothing here refers to engine memory, so a PolyTree can be held, copied and
queried indefinitely after the engine tree has been released.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from polyclip.domain import CENTI, Path, Paths, PointScaler, scaler_from_data

if TYPE_CHECKING:
    from polyclip.engine import ClippingEngine, NodeRef

ROOT_INDEX = 0


@dataclass
class _NodeRecord:
    """Storage for one tree node.

    Attributes:
        polygon: Contour of this node (empty for the container)
        is_hole: True if the contour bounds a hole
        parent: Index of the parent record (None for the container)
        children: Indices of child records in engine order
        depth: Nesting depth, 0 for top-level polygons
    """

    polygon: Path
    is_hole: bool
    parent: int | None
    children: list[int] = field(default_factory=list)
    depth: int = -1


class _NodeQueries:
    """Queries shared by the tree container and its nodes."""

    _tree: "PolyTree"
    _index: int

    @property
    def _record(self) -> _NodeRecord:
        return self._tree._records[self._index]

    @property
    def is_root(self) -> bool:
        """True for the virtual container node."""
        return self._index == ROOT_INDEX

    def child_count(self) -> int:
        """Number of direct children."""
        return len(self._record.children)

    def get_child(self, index: int) -> "PolyNode | None":
        """Get the direct child at a 0-based index, or None if out of range."""
        children = self._record.children
        if not 0 <= index < len(children):
            return None
        return PolyNode(self._tree, children[index])

    @property
    def children(self) -> list["PolyNode"]:
        """Direct children in engine order."""
        return [PolyNode(self._tree, i) for i in self._record.children]

    def is_hole(self) -> bool:
        """Check if this node's polygon bounds a hole."""
        return self._record.is_hole

    @property
    def polygon(self) -> Path:
        """Contour of this node."""
        return self._record.polygon

    @property
    def depth(self) -> int:
        """Nesting depth; top-level polygons are 0, the container is -1."""
        return self._record.depth

    def area(self) -> float:
        """Signed area of this node's own polygon in application units."""
        return self._record.polygon.signed_area()

    def iter_nodes(self) -> Iterator["PolyNode"]:
        """Iterate this node and all descendants depth-first, pre-order.

        The container node itself is not yielded.
        """
        records = self._tree._records
        stack = [self._index]
        while stack:
            index = stack.pop()
            if index != ROOT_INDEX:
                yield PolyNode(self._tree, index)
            stack.extend(reversed(records[index].children))

    def to_paths(self) -> Paths:
        """Flatten this node and its descendants into one collection, pre-order."""
        return Paths(tuple(node.polygon for node in self.iter_nodes()), self._tree.scaler)

    def get_hole_paths(self) -> Paths:
        """Flatten only the hole polygons of this subtree, pre-order."""
        return Paths(
            tuple(node.polygon for node in self.iter_nodes() if node.is_hole()),
            self._tree.scaler,
        )


class PolyNode(_NodeQueries):
    """View of one node inside a PolyTree.

    PolyNode holds the tree and an index; it shares the tree's storage and
    stays valid for as long as the tree does.
    """

    __slots__ = ("_index", "_tree")

    def __init__(self, tree: "PolyTree", index: int) -> None:
        self._tree = tree
        self._index = index

    @property
    def parent(self) -> "PolyNode | PolyTree | None":
        """Parent node; the PolyTree itself for top-level polygons."""
        parent = self._record.parent
        if parent is None:
            return None
        if parent == ROOT_INDEX:
            return self._tree
        return PolyNode(self._tree, parent)

    @property
    def tree(self) -> "PolyTree":
        """The tree this node belongs to."""
        return self._tree

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PolyNode):
            return NotImplemented
        return self._tree is other._tree and self._index == other._index

    def __hash__(self) -> int:
        return hash((id(self._tree), self._index))

    def __repr__(self) -> str:
        kind = "hole" if self.is_hole() else "outer"
        return f"PolyNode({kind}, points={len(self.polygon)}, children={self.child_count()})"


class PolyTree(_NodeQueries):
    """Owned hierarchy of polygons, holes and nested islands.

    The PolyTree object is the virtual container: its children are the
    top-level polygons. Holes are always children of a non-hole node, and
    islands inside holes are children of that hole, exactly as reported by
    the engine.

    Example:
        tree = Clipper().add_subject(square).add_clip(inner).difference_tree().tree
        outer = tree.get_child(0)
        assert outer.get_child(0).is_hole()
    """

    def __init__(self, records: list[_NodeRecord], scaler: PointScaler = CENTI) -> None:
        if not records or records[ROOT_INDEX].parent is not None:
            raise ValueError("PolyTree needs a container record at index 0")
        self._records = records
        self._tree = self
        self._index = ROOT_INDEX
        self.scaler = scaler

    @classmethod
    def empty(cls, scaler: PointScaler = CENTI) -> "PolyTree":
        """Tree with no polygons."""
        return cls([_NodeRecord(polygon=Path((), scaler), is_hole=False, parent=None)], scaler)

    @classmethod
    def from_engine(
        cls,
        engine: "ClippingEngine",
        tree: int,
        scaler: PointScaler = CENTI,
        start: "NodeRef | None" = None,
    ) -> "PolyTree":
        """Deep copy an engine-resident tree.

        Walks the engine tree once, depth-first, visiting children in the
        engine's index order. When start is a node other than the engine
        root, that node becomes the single top-level polygon of the copy.

        Args:
            engine: Engine owning the tree
            tree: Tree handle filled by a tree boolean operation
            scaler: Scaler converting grid contours to application units
            start: Node to copy from (engine root if None)

        Returns:
            Independent PolyTree
        """
        include_self = start is not None and not start.is_root
        ref = start if include_self else engine.polytree_root(tree)
        result = cls.empty(scaler)
        records = result._records

        # lineage[level] is the record receiving nodes found at that level
        lineage = [ROOT_INDEX]
        for level, is_hole, contour in engine.polytree_walk(ref, include_self=include_self):
            del lineage[level + 1 :]
            parent = lineage[level]
            index = len(records)
            records.append(
                _NodeRecord(
                    polygon=Path.from_grid(contour, scaler),
                    is_hole=is_hole,
                    parent=parent,
                    depth=level,
                )
            )
            records[parent].children.append(index)
            lineage.append(index)

        return result

    @property
    def parent(self) -> None:
        """The container has no parent."""
        return None

    def __len__(self) -> int:
        """Number of polygons in the tree, excluding the container."""
        return len(self._records) - 1

    def __repr__(self) -> str:
        return f"PolyTree(top_level={self.child_count()}, nodes={len(self)})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to nested dictionaries.

        Returns:
            Dictionary with the scale multiplier and nested children
        """

        def node_dict(index: int) -> dict[str, Any]:
            record = self._records[index]
            return {
                "polygon": [list(p) for p in record.polygon.to_tuples()],
                "is_hole": record.is_hole,
                "children": [node_dict(i) for i in record.children],
            }

        return {
            "scale": self.scaler.multiplier,
            "children": [node_dict(i) for i in self._records[ROOT_INDEX].children],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PolyTree":
        """Deserialize from nested dictionaries produced by to_dict."""
        scaler = scaler_from_data(data.get("scale", CENTI.multiplier))
        result = cls.empty(scaler)
        records = result._records

        stack = [(child, ROOT_INDEX) for child in reversed(data.get("children", []))]
        while stack:
            node, parent = stack.pop()
            index = len(records)
            records.append(
                _NodeRecord(
                    polygon=Path.from_tuples(node["polygon"], scaler),
                    is_hole=bool(node["is_hole"]),
                    parent=parent,
                    depth=records[parent].depth + 1,
                )
            )
            records[parent].children.append(index)
            stack.extend((child, index) for child in reversed(node.get("children", [])))

        return result
