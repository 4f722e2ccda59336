"""Result values of boolean operations."""

from dataclasses import dataclass
from typing import Any

from polyclip.core.polytree import PolyTree
from polyclip.core.polytree_view import PolyTreeView
from polyclip.domain import Paths


@dataclass(frozen=True)
class BooleanResult:
    """Closed and open output of a flat boolean operation.

    Attributes:
        closed: Closed contours (outer polygons and holes mixed)
        open: Open contours, present only when open subjects were registered
    """

    closed: Paths
    open: Paths

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"closed": self.closed.to_dict(), "open": self.open.to_dict()}


@dataclass(frozen=True)
class BooleanTreeResult:
    """Containment tree and open output of a tree boolean operation.

    Attributes:
        tree: Owned hierarchy of the closed output
        open: Open contours, present only when open subjects were registered
    """

    tree: PolyTree
    open: Paths

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"tree": self.tree.to_dict(), "open": self.open.to_dict()}


@dataclass(frozen=True)
class BooleanTreeViewResult:
    """Engine-resident tree and open output of a tree boolean operation.

    The tree still lives in the engine; close the result (or use it as a
    context manager) to release it.

    Attributes:
        tree: Owning root view of the engine tree
        open: Open contours
    """

    tree: PolyTreeView
    open: Paths

    def close(self) -> None:
        """Release the engine tree."""
        self.tree.close()

    def __enter__(self) -> "BooleanTreeViewResult":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
