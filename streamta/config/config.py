"""
Configuration management for streamta.
Loads settings from environment variables with sensible defaults.
"""

import decimal
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .constants import (
    DEFAULT_DECIMAL_PRECISION,
    DEFAULT_DISPLAY_PLACES,
    MIN_DECIMAL_PRECISION,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class NumericConfig:
    """
    Decimal arithmetic settings.

    precision is the decimal context precision (significant digits) used
    while indicators run. display_places only affects rendering.
    """
    precision: int = DEFAULT_DECIMAL_PRECISION
    display_places: int = DEFAULT_DISPLAY_PLACES

    def __post_init__(self):
        if self.precision < MIN_DECIMAL_PRECISION:
            raise ValueError(
                f"STREAMTA_DECIMAL_PRECISION must be >= {MIN_DECIMAL_PRECISION}, "
                f"got {self.precision}"
            )
        if self.display_places < 0:
            raise ValueError(
                f"STREAMTA_DISPLAY_PLACES must be >= 0, got {self.display_places}"
            )


@dataclass
class LogConfig:
    """Logging configuration. Empty log_dir means console only."""
    level: str = "INFO"
    log_dir: str = ""

    def __post_init__(self):
        if self.level.upper() not in _LOG_LEVELS:
            raise ValueError(
                f"STREAMTA_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {self.level!r}"
            )


class Config:
    """
    Central configuration manager.

    Loads configuration from environment variables and provides
    typed access to all settings.
    """

    _instance: Optional['Config'] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, env_file: str = ".env"):
        if self._initialized:
            return

        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=True)

        self.numeric = self._load_numeric_config()
        self.log = self._load_log_config()

        self._initialized = True

    def _load_numeric_config(self) -> NumericConfig:
        """Load decimal settings from environment."""
        return NumericConfig(
            precision=_env_int("STREAMTA_DECIMAL_PRECISION", DEFAULT_DECIMAL_PRECISION),
            display_places=_env_int("STREAMTA_DISPLAY_PLACES", DEFAULT_DISPLAY_PLACES),
        )

    def _load_log_config(self) -> LogConfig:
        """Load logging configuration from environment."""
        return LogConfig(
            level=os.getenv("STREAMTA_LOG_LEVEL", "INFO"),
            log_dir=os.getenv("STREAMTA_LOG_DIR", ""),
        )

    def apply_decimal_context(self) -> None:
        """Set the current thread's decimal precision from config."""
        decimal.getcontext().prec = self.numeric.precision

    def summary(self) -> str:
        """Generate a short one-line configuration summary."""
        log_target = self.log.log_dir or "console"
        return (
            f"streamta | prec={self.numeric.precision} "
            f"| places={self.numeric.display_places} "
            f"| log={self.log.level}@{log_target}"
        )


def get_config(env_file: str = ".env") -> Config:
    """Get or create the global config instance."""
    return Config(env_file)


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the environment."""
    Config._instance = None
