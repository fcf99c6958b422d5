"""
SRT TOML Configuration Loader

Loads config.toml with environment variable overrides.
Each [section] maps onto a dataclass with from_dict + apply_env.

Environment variable mapping:
    [token] name           → SRT_TOKEN_NAME
    [token] symbol         → SRT_TOKEN_SYMBOL
    [token] initial_supply → SRT_INITIAL_SUPPLY
    [token] decimals       → SRT_DECIMALS
    [token] deployer       → SRT_DEPLOYER
    [logging] level        → SRT_LOG_LEVEL
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

try:
    import tomllib as tomli  # Python 3.11+
except ImportError:
    import tomli  # type: ignore[no-redef]

from ..address import is_null_address, is_valid_address
from ..constants import SRT_DEFAULT_DECIMALS, SRT_MAX_DECIMALS
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DEPLOYER = "0x" + "11" * 20


def _env_int(var: str) -> int | None:
    v = os.environ.get(var)
    if not v:
        return None
    try:
        return int(v)
    except ValueError:
        raise ConfigurationError(f"{var} must be an integer, got {v!r}") from None


@dataclass
class TokenSectionConfig:
    """[token] section."""
    name: str = "Simple Restricted Token"
    symbol: str = "SRT"
    initial_supply: int = 1_000_000
    decimals: int = SRT_DEFAULT_DECIMALS
    deployer: str = DEFAULT_DEPLOYER

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenSectionConfig":
        return cls(
            name=data.get("name", "Simple Restricted Token"),
            symbol=data.get("symbol", "SRT"),
            initial_supply=data.get("initial_supply", 1_000_000),
            decimals=data.get("decimals", SRT_DEFAULT_DECIMALS),
            deployer=data.get("deployer", DEFAULT_DEPLOYER),
        )

    def apply_env(self) -> None:
        """Override from environment variables."""
        if v := os.environ.get("SRT_TOKEN_NAME"):
            self.name = v
        if v := os.environ.get("SRT_TOKEN_SYMBOL"):
            self.symbol = v
        if (v := _env_int("SRT_INITIAL_SUPPLY")) is not None:
            self.initial_supply = v
        if (v := _env_int("SRT_DECIMALS")) is not None:
            self.decimals = v
        if v := os.environ.get("SRT_DEPLOYER"):
            self.deployer = v

    def validate(self) -> None:
        if not self.name or not self.symbol:
            raise ConfigurationError("[token] name and symbol are required")
        if isinstance(self.initial_supply, bool) or not isinstance(self.initial_supply, int):
            raise ConfigurationError("[token] initial_supply must be an integer")
        if self.initial_supply <= 0:
            raise ConfigurationError("[token] initial_supply must be positive")
        if isinstance(self.decimals, bool) or not isinstance(self.decimals, int):
            raise ConfigurationError("[token] decimals must be an integer")
        if not 0 <= self.decimals <= SRT_MAX_DECIMALS:
            raise ConfigurationError(f"[token] decimals must be 0-{SRT_MAX_DECIMALS}")
        if not is_valid_address(self.deployer) or is_null_address(self.deployer):
            raise ConfigurationError(f"[token] deployer is not a usable address: {self.deployer!r}")


@dataclass
class LoggingSectionConfig:
    """[logging] section."""
    level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggingSectionConfig":
        return cls(level=data.get("level", "INFO"))

    def apply_env(self) -> None:
        if v := os.environ.get("SRT_LOG_LEVEL"):
            self.level = v

    def validate(self) -> None:
        if str(self.level).upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigurationError(f"[logging] unknown level: {self.level!r}")


@dataclass
class SRTConfig:
    """Top-level configuration."""
    token: TokenSectionConfig = field(default_factory=TokenSectionConfig)
    logging: LoggingSectionConfig = field(default_factory=LoggingSectionConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SRTConfig":
        return cls(
            token=TokenSectionConfig.from_dict(data.get("token", {})),
            logging=LoggingSectionConfig.from_dict(data.get("logging", {})),
        )

    @classmethod
    def from_file(cls, config_path: str) -> "SRTConfig":
        """
        Load configuration from a TOML file.

        A missing file falls back to defaults (with env overrides).
        """
        path = Path(config_path)
        if not path.exists():
            logger.warning("Config file not found: %s, using defaults", config_path)
            cfg = cls()
            cfg.apply_env()
            cfg.validate()
            return cfg

        try:
            with open(path, "rb") as f:
                raw = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {config_path}: {e}") from e

        cfg = cls.from_dict(raw)
        cfg.apply_env()
        cfg.validate()
        return cfg

    def apply_env(self) -> None:
        """Apply environment variable overrides to all sections."""
        self.token.apply_env()
        self.logging.apply_env()

    def validate(self) -> None:
        self.token.validate()
        self.logging.validate()


def load_config(path: str | None = None) -> SRTConfig:
    """
    Load token configuration.

    Resolution order:
        1. Explicit *path* argument
        2. SRT_CONFIG env var
        3. ./config.toml in current directory
        4. Defaults (with env overrides)
    """
    if path is None:
        path = os.environ.get("SRT_CONFIG", "config.toml")

    return SRTConfig.from_file(path)
