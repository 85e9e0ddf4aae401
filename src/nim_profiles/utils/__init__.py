"""Utility modules for nim-profiles."""

from nim_profiles.utils.config import NimProfilesConfig, get_config, load_config
from nim_profiles.utils.errors import (
    ConfigurationError,
    ManifestNotFoundError,
    ManifestParseError,
    NimProfilesError,
    ValidationError,
)
from nim_profiles.utils.logging import configure_logging, get_logger

__all__ = [
    "NimProfilesConfig",
    "get_config",
    "load_config",
    "ConfigurationError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "NimProfilesError",
    "ValidationError",
    "configure_logging",
    "get_logger",
]
