"""Configuration file support for nim-profiles."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from nim_profiles.utils.errors import ConfigurationError


class MatchConfig(BaseModel):
    """Profile matching configuration."""

    sort_results: bool = Field(
        default=True,
        description="Sort matched profile ids lexicographically in output",
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    default_format: str = Field(default="terminal", description="Default output format")
    color: bool = Field(default=True, description="Enable color output")
    verbose: bool = Field(default=False, description="Verbose output")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    structured: bool = Field(default=False, description="Use structured log format")


class NimProfilesConfig(BaseModel):
    """Main configuration for nim-profiles."""

    match: MatchConfig = Field(default_factory=MatchConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths.

    Returns:
        List of paths to check for configuration files
    """
    paths = []

    # Current directory
    paths.append(Path.cwd() / ".nim-profiles.yaml")
    paths.append(Path.cwd() / ".nim-profiles.yml")
    paths.append(Path.cwd() / "nim-profiles.yaml")

    # Home directory
    home = Path.home()
    paths.append(home / ".nim-profiles.yaml")
    paths.append(home / ".config" / "nim-profiles" / "config.yaml")

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "nim-profiles" / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> NimProfilesConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If an explicit path is missing or a file is invalid
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise ConfigurationError(f"Config file not found: {config_path}")

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return NimProfilesConfig()


def _load_config_file(path: Path) -> NimProfilesConfig:
    """Load configuration from a specific file."""
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return NimProfilesConfig()

    try:
        return NimProfilesConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e


def save_config(config: NimProfilesConfig, config_path: Path | str | None = None) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save
        config_path: Path to save to. Defaults to ~/.config/nim-profiles/config.yaml

    Returns:
        Path where config was saved
    """
    if config_path is None:
        config_path = Path.home() / ".config" / "nim-profiles" / "config.yaml"
    else:
        config_path = Path(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_defaults=True)
    config_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    return config_path


def get_default_config() -> NimProfilesConfig:
    """Get the default configuration."""
    return NimProfilesConfig()


# Global config instance
_config: NimProfilesConfig | None = None


def get_config() -> NimProfilesConfig:
    """Get the global configuration instance.

    Loads from file on first call.

    Returns:
        Global configuration
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: NimProfilesConfig | None) -> None:
    """Set the global configuration instance.

    Args:
        config: Configuration to set, or None to reload on next access
    """
    global _config
    _config = config
