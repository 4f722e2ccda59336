"""Orchestration of boolean operations on loaded geometry.

BooleanProcessor ties together settings, logging and the Clipper builder
for callers that work with whole geometry inputs, such as the CLI.
"""

import time
import traceback

from polyclip.config import PolyclipSettings
from polyclip.core.clipper import Clipper
from polyclip.core.results import BooleanResult, BooleanTreeResult
from polyclip.domain import ClipType, FillRule, GeometryInput, PointScaler
from polyclip.engine import ClippingEngine
from polyclip.exceptions import FailedBooleanOperation
from polyclip.utils import OperationLogger, OperationStats, configure_logging


class BooleanProcessor:
    """Runs boolean operations with configured defaults and statistics.

    Example:
        settings = PolyclipSettings()
        processor = BooleanProcessor(settings)
        result = processor.run(geometry, ClipType.UNION)
        print(processor.stats.operation_count)
    """

    def __init__(
        self,
        config: PolyclipSettings,
        engine: ClippingEngine | None = None,
        quiet: bool = False,
    ) -> None:
        """Initialize processor with configuration.

        Args:
            config: Settings with scaling, operation and logging config
            engine: Engine to run operations on (process default if None)
            quiet: Suppress console log output
        """
        self.config = config
        self.engine = engine
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.operation_logger = OperationLogger(self.logger)

    @property
    def scaler(self) -> PointScaler:
        """Scaler geometry must be quantized with."""
        return self.config.scaling.scaler()

    @property
    def stats(self) -> OperationStats:
        """Statistics of operations run so far."""
        return self.operation_logger.stats

    def run(
        self,
        geometry: GeometryInput,
        clip_type: ClipType | None = None,
        fill_rule: FillRule | None = None,
        tree: bool | None = None,
    ) -> BooleanResult | BooleanTreeResult:
        """Run one boolean operation on a geometry input.

        Args:
            geometry: Subjects, open subjects and clips
            clip_type: Operation (configured default if None)
            fill_rule: Fill rule (configured default if None)
            tree: Produce a containment tree (configured default if None)

        Returns:
            BooleanTreeResult if tree output was requested, else BooleanResult

        Raises:
            FailedBooleanOperation: If the engine reports failure
        """
        ops = self.config.operation
        clip_type = clip_type or ops.default_clip_type
        fill_rule = fill_rule or ops.default_fill_rule
        tree = ops.tree_output if tree is None else tree

        self.operation_logger.log_operation_start(
            clip_type.value,
            fill_rule.value,
            subjects=len(geometry.subjects) + len(geometry.open_subjects),
            clips=len(geometry.clips),
        )
        start_time = time.perf_counter()

        builder = Clipper(self.scaler, self.engine).add_subject(geometry.subjects)
        if geometry.open_subjects:
            builder = builder.add_open_subject(geometry.open_subjects)
        ready = builder.add_clip(geometry.clips)

        try:
            if tree:
                result: BooleanResult | BooleanTreeResult = ready.boolean_operation_tree(
                    clip_type, fill_rule
                )
            else:
                result = ready.boolean_operation(clip_type, fill_rule)
        except FailedBooleanOperation as e:
            self.operation_logger.log_operation_error(
                clip_type.value, e, traceback=traceback.format_exc()
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        if isinstance(result, BooleanTreeResult):
            closed = len(result.tree)
            self.operation_logger.log_tree_summary(
                clip_type.value,
                nodes=closed,
                holes=len(result.tree.get_hole_paths()),
            )
        else:
            closed = len(result.closed)
        self.operation_logger.log_operation_complete(
            clip_type.value, closed=closed, open_paths=len(result.open), duration_ms=duration_ms
        )
        return result
