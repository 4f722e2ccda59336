"""Configuration management for polyclip.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ScalingConfig: Grid resolution settings
- OperationConfig: Default boolean operation settings
- LoggingConfig: Logging settings
- PolyclipSettings: Main application settings
"""

from polyclip.config.settings import (
    LOG_LEVELS,
    LoggingConfig,
    OperationConfig,
    PolyclipSettings,
    ScalingConfig,
    get_default_settings,
)

__all__ = [
    "LOG_LEVELS",
    "LoggingConfig",
    "OperationConfig",
    "PolyclipSettings",
    "ScalingConfig",
    "get_default_settings",
]
