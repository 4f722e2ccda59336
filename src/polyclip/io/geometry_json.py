"""JSON geometry reader and writer.

Geometry files hold application coordinates. Two layouts are accepted:

- A bare list of contours: [[[x, y], [x, y], ...], ...]
  (a single contour [[x, y], ...] is accepted too)
- An object with any of "subjects", "open_subjects" and "clips", each a
  list of contours, plus an optional "scale" multiplier
"""

import json
from pathlib import Path
from typing import Any

from polyclip.core.results import BooleanResult, BooleanTreeResult
from polyclip.domain import CENTI, GeometryInput, Paths, PointScaler, scaler_from_data
from polyclip.exceptions import GeometryFormatError


def _load_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Geometry file not found: {path}")
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as e:
        raise GeometryFormatError(str(path), f"not valid JSON ({e})") from e


def parse_paths(data: Any, scaler: PointScaler = CENTI, source: str = "<data>") -> Paths:
    """Convert decoded JSON contours into Paths.

    Args:
        data: A contour or list of contours as nested lists of numbers
        scaler: Scaler used to quantize coordinates
        source: Name used in error messages

    Returns:
        Paths instance

    Raises:
        GeometryFormatError: If the data is not a list of coordinate pairs
    """
    if isinstance(data, dict) and "paths" in data:
        data = data["paths"]
    if not isinstance(data, list):
        raise GeometryFormatError(source, "expected a list of contours")

    try:
        for contour in data:
            points = [contour] if _is_point(contour) else contour
            for point in points:
                if not _is_point(point):
                    raise GeometryFormatError(source, f"invalid point {point!r}")
        return Paths.coerce(data, scaler)
    except TypeError as e:
        raise GeometryFormatError(source, str(e)) from e


def _is_point(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value)
    )


def read_paths(path: Path, scaler: PointScaler = CENTI) -> Paths:
    """Read a contour collection from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        GeometryFormatError: If the content is not valid geometry
    """
    return parse_paths(_load_json(path), scaler, str(path))


def read_geometry(path: Path, scaler: PointScaler | None = None) -> GeometryInput:
    """Read subjects, open subjects and clips from one JSON file.

    A "scale" key in the file is used when no scaler is given.

    Raises:
        FileNotFoundError: If the file does not exist
        GeometryFormatError: If the content is not valid geometry
    """
    data = _load_json(path)
    if not isinstance(data, dict):
        raise GeometryFormatError(str(path), "expected an object with subjects and clips")

    source = str(path)
    if scaler is None:
        scaler = scaler_from_data(data.get("scale", CENTI.multiplier), source)
    return GeometryInput(
        subjects=parse_paths(data.get("subjects", []), scaler, source),
        clips=parse_paths(data.get("clips", []), scaler, source),
        open_subjects=parse_paths(data.get("open_subjects", []), scaler, source),
    )


def result_to_dict(result: BooleanResult | BooleanTreeResult) -> dict[str, Any]:
    """Serialize a flat or tree result to plain data."""
    return result.to_dict()


def write_result(result: BooleanResult | BooleanTreeResult, path: Path) -> None:
    """Write a flat or tree result as JSON."""
    with path.open("w", encoding="utf-8") as fh:
        json.dump(result_to_dict(result), fh, indent=2)
        fh.write("\n")
