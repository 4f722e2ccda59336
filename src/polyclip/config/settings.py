"""Configuration settings for polyclip."""

from pathlib import Path
from typing import Literal, get_args

from pydantic import BaseModel, Field, field_validator

from polyclip.domain import ClipType, FillRule, PointScaler

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


class ScalingConfig(BaseModel):
    """Configuration for quantizing application coordinates onto the engine grid."""

    multiplier: int = Field(
        default=100,
        ge=1,
        le=10**9,
        description="Grid units per application unit",
    )

    def scaler(self) -> PointScaler:
        """Get the PointScaler for this configuration."""
        return PointScaler(multiplier=self.multiplier)


class OperationConfig(BaseModel):
    """Configuration for boolean operations."""

    default_clip_type: ClipType = Field(
        default=ClipType.UNION,
        description="Boolean operation used when none is given",
    )
    default_fill_rule: FillRule = Field(
        default=FillRule.NON_ZERO,
        description="Fill rule used when none is given",
    )
    tree_output: bool = Field(
        default=False,
        description="Produce a containment tree instead of flat paths",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: LogLevel = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )

    @field_validator("log_level", "file_log_level", mode="before")
    @classmethod
    def _upper(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class PolyclipSettings(BaseModel):
    """Main application settings."""

    scaling: ScalingConfig = Field(default_factory=ScalingConfig)
    operation: OperationConfig = Field(default_factory=OperationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PolyclipSettings:
    """Get default application settings."""
    return PolyclipSettings()
