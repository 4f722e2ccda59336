"""Geometry containers for boolean operations.

This module defines the value types exchanged with the clipping engine:
- Point: A 2D point on the engine's integer grid
- Path: An ordered sequence of points forming one contour
- Paths: A collection of independent contours

Every container remembers the PointScaler used to quantize it, so that
results can be converted back to application coordinates.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from polyclip.domain.scaling import CENTI, PointScaler, scaler_from_data
from polyclip.exceptions import ScalerMismatchError

GridPoint = tuple[int, int]
FloatPoint = tuple[float, float]


@dataclass(frozen=True, slots=True)
class Point:
    """A point on the engine grid.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in grid units
        y: Y coordinate in grid units
    """

    x: int
    y: int

    @classmethod
    def from_float(cls, x: float, y: float, scaler: PointScaler = CENTI) -> "Point":
        """Quantize an application coordinate pair onto the grid.

        Args:
            x: X coordinate in application units
            y: Y coordinate in application units
            scaler: Scaler defining the grid resolution

        Returns:
            Point instance
        """
        return cls(scaler.to_grid(x), scaler.to_grid(y))

    def to_float(self, scaler: PointScaler = CENTI) -> FloatPoint:
        """Convert back to application units."""
        return (scaler.from_grid(self.x), scaler.from_grid(self.y))

    def to_tuple(self) -> GridPoint:
        """Convert to simple (x, y) grid tuple."""
        return (self.x, self.y)


def _twice_signed_area(points: Sequence[Point]) -> int:
    """Shoelace sum on grid coordinates, exact in integer arithmetic."""
    n = len(points)
    if n < 3:
        return 0

    total = 0
    for i in range(n):
        j = (i + 1) % n
        total += points[i].x * points[j].y
        total -= points[j].x * points[i].y
    return total


@dataclass(frozen=True)
class Path:
    """An ordered sequence of points forming one contour.

    Point order defines winding. No closing edge is stored; closed contours
    are implicitly closed by whoever interprets them.

    Attributes:
        points: Points in contour order
        scaler: Scaler the points were quantized with
    """

    points: tuple[Point, ...] = ()
    scaler: PointScaler = field(default=CENTI)

    def __post_init__(self) -> None:
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))

    @classmethod
    def from_tuples(
        cls, points: Iterable[Sequence[float]], scaler: PointScaler = CENTI
    ) -> "Path":
        """Build a path from application coordinates.

        Args:
            points: Iterable of (x, y) pairs in application units
            scaler: Scaler defining the grid resolution

        Returns:
            Path instance
        """
        return cls(tuple(Point.from_float(x, y, scaler) for x, y in points), scaler)

    @classmethod
    def from_grid(
        cls, points: Iterable[Sequence[int]], scaler: PointScaler = CENTI
    ) -> "Path":
        """Build a path from coordinates already on the grid."""
        return cls(tuple(Point(int(x), int(y)) for x, y in points), scaler)

    def to_tuples(self) -> list[FloatPoint]:
        """Convert to a list of (x, y) pairs in application units."""
        return [p.to_float(self.scaler) for p in self.points]

    def to_grid(self) -> list[GridPoint]:
        """Convert to a list of (x, y) grid pairs for the engine."""
        return [p.to_tuple() for p in self.points]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, index: int) -> Point:
        return self.points[index]

    def is_empty(self) -> bool:
        """Check if the path has no points."""
        return len(self.points) == 0

    def signed_area(self) -> float:
        """Calculate signed area in application units using the shoelace formula.

        The sign indicates winding direction:
        - Positive area: counter-clockwise winding
        - Negative area: clockwise winding

        Returns:
            Signed area. Returns 0.0 for fewer than three points.
        """
        return self.scaler.area_from_grid(_twice_signed_area(self.points) / 2.0)

    def area(self) -> float:
        """Absolute enclosed area in application units."""
        return abs(self.signed_area())

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box in application units.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.points:
            return (0.0, 0.0, 0.0, 0.0)

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        s = self.scaler
        return (s.from_grid(min(xs)), s.from_grid(min(ys)), s.from_grid(max(xs)), s.from_grid(max(ys)))

    def reversed(self) -> "Path":
        """Return the same contour with opposite winding."""
        return Path(tuple(reversed(self.points)), self.scaler)

    def translate(self, dx: float, dy: float) -> "Path":
        """Return a copy moved by (dx, dy) application units."""
        gx = self.scaler.to_grid(dx)
        gy = self.scaler.to_grid(dy)
        return Path(tuple(Point(p.x + gx, p.y + gy) for p in self.points), self.scaler)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with application-unit points and the scale multiplier
        """
        return {
            "points": [list(p) for p in self.to_tuples()],
            "scale": self.scaler.multiplier,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Path":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with points and scale fields

        Returns:
            Path instance
        """
        scaler = scaler_from_data(data.get("scale", CENTI.multiplier))
        return cls.from_tuples(data["points"], scaler)


PathsLike = Union[
    "Paths",
    Path,
    Sequence[Sequence[float]],
    Sequence[Union[Path, Sequence[Sequence[float]]]],
]


@dataclass(frozen=True)
class Paths:
    """A collection of independent contours.

    Insertion order is preserved but carries no meaning.

    Attributes:
        paths: Contained contours
        scaler: Scaler shared by every contained contour
    """

    paths: tuple[Path, ...] = ()
    scaler: PointScaler = field(default=CENTI)

    def __post_init__(self) -> None:
        if not isinstance(self.paths, tuple):
            object.__setattr__(self, "paths", tuple(self.paths))

    @classmethod
    def from_tuples(
        cls,
        contours: Iterable[Iterable[Sequence[float]]],
        scaler: PointScaler = CENTI,
    ) -> "Paths":
        """Build from nested lists of application coordinates."""
        return cls(tuple(Path.from_tuples(c, scaler) for c in contours), scaler)

    @classmethod
    def from_grid(
        cls,
        contours: Iterable[Iterable[Sequence[int]]],
        scaler: PointScaler = CENTI,
    ) -> "Paths":
        """Build from nested lists of grid coordinates as returned by the engine."""
        return cls(tuple(Path.from_grid(c, scaler) for c in contours), scaler)

    @classmethod
    def coerce(cls, value: PathsLike, scaler: PointScaler = CENTI) -> "Paths":
        """Normalize any accepted geometry argument into Paths.

        Accepts a Paths, a single Path, a single contour as a list of (x, y)
        pairs, or a list whose items are Path values or such contours.

        Args:
            value: Geometry in any accepted shape
            scaler: Scaler used for raw coordinates and checked for Path values

        Returns:
            Paths instance

        Raises:
            ScalerMismatchError: If a Path or Paths was built with another scaler
        """
        if isinstance(value, Paths):
            if value.scaler != scaler:
                raise ScalerMismatchError(scaler.multiplier, value.scaler.multiplier)
            return value

        if isinstance(value, Path):
            value = [value]

        items = list(value)
        if not items:
            return cls((), scaler)

        first = items[0]
        if not isinstance(first, Path) and len(first) == 2 and isinstance(first[0], (int, float)):
            # A single contour given as a flat list of points
            return cls((Path.from_tuples(items, scaler),), scaler)

        paths = []
        for item in items:
            if isinstance(item, Path):
                if item.scaler != scaler:
                    raise ScalerMismatchError(scaler.multiplier, item.scaler.multiplier)
                paths.append(item)
            else:
                paths.append(Path.from_tuples(item, scaler))
        return cls(tuple(paths), scaler)

    def to_tuples(self) -> list[list[FloatPoint]]:
        """Convert to nested lists of application coordinates."""
        return [p.to_tuples() for p in self.paths]

    def to_grid(self) -> list[list[GridPoint]]:
        """Convert to nested lists of grid coordinates for the engine."""
        return [p.to_grid() for p in self.paths]

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def __getitem__(self, index: int) -> Path:
        return self.paths[index]

    def is_empty(self) -> bool:
        """Check if the collection has no contours."""
        return len(self.paths) == 0

    def concat(self, other: "Paths") -> "Paths":
        """Return a collection holding the contours of both operands."""
        if other.scaler != self.scaler:
            raise ScalerMismatchError(self.scaler.multiplier, other.scaler.multiplier)
        return Paths(self.paths + other.paths, self.scaler)

    def signed_area(self) -> float:
        """Sum of the contours' signed areas; holes subtract when wound opposite."""
        return sum(p.signed_area() for p in self.paths)

    def area(self) -> float:
        """Absolute value of the net signed area."""
        return abs(self.signed_area())

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Bounding box over all non-empty contours, in application units."""
        boxes = [p.bounding_box() for p in self.paths if not p.is_empty()]
        if not boxes:
            return (0.0, 0.0, 0.0, 0.0)
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )

    def translate(self, dx: float, dy: float) -> "Paths":
        """Return a copy with every contour moved by (dx, dy)."""
        return Paths(tuple(p.translate(dx, dy) for p in self.paths), self.scaler)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "paths": [[list(pt) for pt in p.to_tuples()] for p in self.paths],
            "scale": self.scaler.multiplier,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Paths":
        """Deserialize from dictionary."""
        scaler = scaler_from_data(data.get("scale", CENTI.multiplier))
        return cls.from_tuples(data["paths"], scaler)
