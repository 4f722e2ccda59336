"""One-call boolean operations on a subject and a clip.

Each function builds a Clipper, registers the subject and the clip and runs
a single operation, e.g.:

    result = union(
        [(0.2, 0.2), (6.0, 0.2), (6.0, 6.0), (0.2, 6.0)],
        [(5.0, 5.0), (8.0, 5.0), (8.0, 8.0), (5.0, 8.0)],
    )
    output = result.closed.to_tuples()
"""

from polyclip.core.clipper import Clipper
from polyclip.core.results import BooleanResult, BooleanTreeResult
from polyclip.domain import ClipType, FillRule, PathsLike, PointScaler
from polyclip.engine import ClippingEngine


def boolean(
    clip_type: ClipType,
    subject: PathsLike,
    clip: PathsLike,
    fill_rule: FillRule = FillRule.NON_ZERO,
    scaler: PointScaler | None = None,
    engine: ClippingEngine | None = None,
) -> BooleanResult:
    """Run one flat boolean operation.

    Args:
        clip_type: Boolean operation to perform
        subject: Closed subject geometry
        clip: Clip geometry
        fill_rule: Fill rule for subjects and clips
        scaler: Grid resolution (CENTI if None)
        engine: Engine to use (process default if None)

    Returns:
        BooleanResult with closed and open paths

    Raises:
        FailedBooleanOperation: If the engine reports failure
    """
    return (
        Clipper(scaler, engine)
        .add_subject(subject)
        .add_clip(clip)
        .boolean_operation(clip_type, fill_rule)
    )


def boolean_tree(
    clip_type: ClipType,
    subject: PathsLike,
    clip: PathsLike,
    fill_rule: FillRule = FillRule.NON_ZERO,
    scaler: PointScaler | None = None,
    engine: ClippingEngine | None = None,
) -> BooleanTreeResult:
    """Run one tree-producing boolean operation.

    Raises:
        FailedBooleanOperation: If the engine reports failure
    """
    return (
        Clipper(scaler, engine)
        .add_subject(subject)
        .add_clip(clip)
        .boolean_operation_tree(clip_type, fill_rule)
    )


def union(
    subject: PathsLike,
    clip: PathsLike,
    fill_rule: FillRule = FillRule.NON_ZERO,
    scaler: PointScaler | None = None,
) -> BooleanResult:
    """Join subject and clip paths."""
    return boolean(ClipType.UNION, subject, clip, fill_rule, scaler)


def difference(
    subject: PathsLike,
    clip: PathsLike,
    fill_rule: FillRule = FillRule.NON_ZERO,
    scaler: PointScaler | None = None,
) -> BooleanResult:
    """Remove clip regions from subject regions."""
    return boolean(ClipType.DIFFERENCE, subject, clip, fill_rule, scaler)


def intersect(
    subject: PathsLike,
    clip: PathsLike,
    fill_rule: FillRule = FillRule.NON_ZERO,
    scaler: PointScaler | None = None,
) -> BooleanResult:
    """Keep regions covered by both subject and clip."""
    return boolean(ClipType.INTERSECTION, subject, clip, fill_rule, scaler)


def xor(
    subject: PathsLike,
    clip: PathsLike,
    fill_rule: FillRule = FillRule.NON_ZERO,
    scaler: PointScaler | None = None,
) -> BooleanResult:
    """Keep regions covered by exactly one of subject and clip."""
    return boolean(ClipType.XOR, subject, clip, fill_rule, scaler)


def union_tree(
    subject: PathsLike,
    clip: PathsLike,
    fill_rule: FillRule = FillRule.NON_ZERO,
    scaler: PointScaler | None = None,
) -> BooleanTreeResult:
    """Union as a containment tree."""
    return boolean_tree(ClipType.UNION, subject, clip, fill_rule, scaler)


def difference_tree(
    subject: PathsLike,
    clip: PathsLike,
    fill_rule: FillRule = FillRule.NON_ZERO,
    scaler: PointScaler | None = None,
) -> BooleanTreeResult:
    """Difference as a containment tree."""
    return boolean_tree(ClipType.DIFFERENCE, subject, clip, fill_rule, scaler)


def intersect_tree(
    subject: PathsLike,
    clip: PathsLike,
    fill_rule: FillRule = FillRule.NON_ZERO,
    scaler: PointScaler | None = None,
) -> BooleanTreeResult:
    """Intersection as a containment tree."""
    return boolean_tree(ClipType.INTERSECTION, subject, clip, fill_rule, scaler)


def xor_tree(
    subject: PathsLike,
    clip: PathsLike,
    fill_rule: FillRule = FillRule.NON_ZERO,
    scaler: PointScaler | None = None,
) -> BooleanTreeResult:
    """Exclusive or as a containment tree."""
    return boolean_tree(ClipType.XOR, subject, clip, fill_rule, scaler)
