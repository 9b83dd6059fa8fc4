"""
Configuration management for cidrexpand.

Loads defaults from environment variables, seeded from a .env file when
one is found.
"""

import logging
import os
from pathlib import Path
from dataclasses import dataclass

from dotenv import load_dotenv

ENV_LOCATIONS = [
    Path.home() / ".cidrexpand" / ".env",
    Path.home() / ".config" / "cidrexpand" / ".env",
    Path.cwd() / ".env",
]

_TRUE_VALUES = {"1", "true", "yes", "on"}


def load_env_file() -> Path | None:
    """Load the first .env file found. Existing variables are not overridden."""
    for env_path in ENV_LOCATIONS:
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_level(name: str, default: str) -> str:
    value = os.getenv(name, "").strip().upper()
    if isinstance(logging.getLevelName(value), int):
        return value
    return default


@dataclass
class ExpanderConfig:
    """Defaults for range expansion and CLI output."""

    # Keep network/broadcast addresses in expansions
    include_boundaries: bool = False

    # Skip malformed CIDRs instead of failing the whole batch
    skip_invalid: bool = False

    # Max addresses printed by the CLI (0 = unlimited)
    output_limit: int = 65536

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ExpanderConfig":
        """Load configuration from environment variables."""
        return cls(
            include_boundaries=_env_bool("CIDREXPAND_INCLUDE_BOUNDARIES", False),
            skip_invalid=_env_bool("CIDREXPAND_SKIP_INVALID", False),
            output_limit=_env_int("CIDREXPAND_OUTPUT_LIMIT", 65536),
            log_level=_env_level("CIDREXPAND_LOG_LEVEL", "INFO"),
        )


# Global config instance
_config: ExpanderConfig | None = None


def get_config() -> ExpanderConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        load_env_file()
        _config = ExpanderConfig.from_env()
    return _config


def set_config(config: ExpanderConfig | None) -> None:
    """Set the global configuration instance (None forces a reload)."""
    global _config
    _config = config
