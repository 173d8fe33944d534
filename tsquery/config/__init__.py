"""YAML configuration for temporal evaluation."""

from .load_config import (
    LoggingConfig,
    TemporalConfig,
    TemporalYamlConfig,
    load_temporal_config,
)

__all__ = [
    "LoggingConfig",
    "TemporalConfig",
    "TemporalYamlConfig",
    "load_temporal_config",
]
