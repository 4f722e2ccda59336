"""Exception hierarchy for polyclip."""


class PolyclipError(Exception):
    """Base exception for all polyclip errors."""

    pass


class ClipperError(PolyclipError):
    """Errors raised by the clipper builder and boolean operations."""

    pass


class FailedBooleanOperation(ClipperError):
    """The clipping engine reported failure for a boolean operation.

    No geometry is returned. The builder that ran the operation is consumed;
    retrying requires a new builder with the geometry registered again.
    """

    def __init__(self, clip_type: object = None, fill_rule: object = None) -> None:
        self.clip_type = clip_type
        self.fill_rule = fill_rule
        if clip_type is None:
            super().__init__("Failed boolean operation")
        else:
            super().__init__(
                f"Failed boolean operation: {getattr(clip_type, 'value', clip_type)} "
                f"with fill rule {getattr(fill_rule, 'value', fill_rule)}"
            )


class ClipperConsumedError(ClipperError):
    """A builder was used after ownership moved to another builder or a result."""

    def __init__(self, state: str) -> None:
        self.state = state
        super().__init__(
            f"{state} has already been consumed; use the builder returned by the previous call"
        )


class ScalerMismatchError(ClipperError):
    """Geometry was quantized with a different scaler than the builder uses."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Geometry uses scale multiplier {actual}, builder expects {expected}"
        )


class EngineError(PolyclipError):
    """Errors at the clipping engine boundary."""

    pass


class EngineHandleError(EngineError):
    """An engine handle is unknown, already released, or of the wrong kind."""

    def __init__(self, handle: object, reason: str) -> None:
        self.handle = handle
        self.reason = reason
        super().__init__(f"Invalid engine handle {handle!r}: {reason}")


class GeometryFormatError(PolyclipError):
    """Geometry input could not be parsed."""

    def __init__(self, source: str, details: str) -> None:
        self.source = source
        self.details = details
        super().__init__(f"Invalid geometry in '{source}': {details}")
