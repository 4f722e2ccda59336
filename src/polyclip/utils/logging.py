"""Logging utilities for polyclip."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class OperationStats:
    """Statistics from a run of boolean operations."""

    operation_count: int = 0
    failure_count: int = 0
    closed_contours: int = 0
    open_contours: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    durations_ms: list[float] = field(default_factory=list)

    @property
    def total_duration_ms(self) -> float:
        """Total time spent in operations."""
        return sum(self.durations_ms)

    @property
    def avg_duration_ms(self) -> float | None:
        """Average time per operation, None before any operation ran."""
        if not self.durations_ms:
            return None
        return self.total_duration_ms / len(self.durations_ms)


_HANDLER_TAG = "_polyclip_handler"

_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _install_handler(root: logging.Logger, handler: logging.Handler, level: str, fmt: str) -> None:
    handler.setLevel(getattr(logging, level.upper()))
    handler.setFormatter(logging.Formatter(fmt))
    setattr(handler, _HANDLER_TAG, True)
    root.addHandler(handler)


def _remove_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root.removeHandler(handler)
            handler.close()


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Route polyclip logging to the console and optionally a file.

    Handlers installed by an earlier call are replaced, so configuring
    again (e.g. once per BooleanProcessor) never duplicates output.
    Engine and builder modules log through the standard library; the
    returned structlog logger renders operation events as JSON.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Minimum level shown on the console
        file_level: Minimum level written to the log file
        quiet: If True, nothing is logged to the console

    Returns:
        Logger for operation events
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    _remove_handlers(root)

    if log_file is not None:
        _install_handler(root, logging.FileHandler(log_file, encoding="utf-8"), file_level, _FILE_FORMAT)
    if not quiet:
        _install_handler(root, logging.StreamHandler(), console_level, "%(message)s")

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("polyclip")
    logger.debug("Logging configured", log_file=str(log_file) if log_file else None, quiet=quiet)
    return logger


class OperationLogger:
    """Logger for tracking boolean operations and their statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = OperationStats()

    def log_operation_start(self, clip_type: str, fill_rule: str, subjects: int, clips: int) -> None:
        """Log start of a boolean operation."""
        self._logger.debug(
            "Running boolean operation",
            clip_type=clip_type,
            fill_rule=fill_rule,
            subjects=subjects,
            clips=clips,
        )

    def log_operation_complete(
        self,
        clip_type: str,
        closed: int,
        open_paths: int,
        duration_ms: float,
    ) -> None:
        """Log a successful boolean operation."""
        self._logger.info(
            "Boolean operation complete",
            clip_type=clip_type,
            closed=closed,
            open=open_paths,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.operation_count += 1
        self._stats.closed_contours += closed
        self._stats.open_contours += open_paths
        self._stats.durations_ms.append(duration_ms)

    def log_operation_error(
        self,
        clip_type: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log a failed boolean operation."""
        self._logger.error(
            "Boolean operation failed",
            clip_type=clip_type,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.operation_count += 1
        self._stats.failure_count += 1
        self._stats.errors.append((clip_type, str(error)))

    def log_tree_summary(self, clip_type: str, nodes: int, holes: int) -> None:
        """Log containment tree statistics."""
        self._logger.debug(
            "Tree reconstructed",
            clip_type=clip_type,
            nodes=nodes,
            holes=holes,
        )

    @property
    def stats(self) -> OperationStats:
        """Get current operation statistics."""
        return self._stats
