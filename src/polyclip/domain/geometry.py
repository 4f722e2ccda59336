"""Input geometry grouped by the role it plays in a boolean operation."""

from dataclasses import dataclass, field

from polyclip.domain.path import Paths


@dataclass(frozen=True)
class GeometryInput:
    """Geometry to register on a clipper.

    Attributes:
        subjects: Closed subject contours
        clips: Clip contours
        open_subjects: Open subject contours (polylines)
    """

    subjects: Paths
    clips: Paths
    open_subjects: Paths = field(default_factory=Paths)
