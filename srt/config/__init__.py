"""
SRT Configuration

Loads config.toml; environment variables override TOML values.
"""

from .loader import (
    SRTConfig,
    TokenSectionConfig,
    LoggingSectionConfig,
    load_config,
)

__all__ = [
    "SRTConfig",
    "TokenSectionConfig",
    "LoggingSectionConfig",
    "load_config",
]
