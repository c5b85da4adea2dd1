"""
Configuration management.
"""

from .config import (
    Config,
    get_config,
    reset_config,
    NumericConfig,
    LogConfig,
)

from . import constants

__all__ = [
    "Config",
    "get_config",
    "reset_config",
    "NumericConfig",
    "LogConfig",
    "constants",
]
