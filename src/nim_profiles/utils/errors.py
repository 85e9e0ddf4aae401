"""Error handling utilities for nim-profiles."""

from __future__ import annotations

from typing import Any

from nim_profiles.models.common import ProfileError


class NimProfilesError(Exception):
    """Base exception for nim-profiles."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_profile_error(self) -> ProfileError:
        """Convert to ProfileError model."""
        return ProfileError(code=self.code, message=self.message, details=self.details)


class ManifestParseError(NimProfilesError):
    """Manifest document is not well-formed.

    The underlying decode failure is chained as ``__cause__``.
    """

    def __init__(self, message: str, source: str | None = None):
        details = {"source": source} if source else {}
        super().__init__(message, code="MANIFEST_PARSE_ERROR", details=details)
        self.source = source


class ManifestNotFoundError(NimProfilesError):
    """Manifest file does not exist."""

    def __init__(self, path: str):
        super().__init__(
            f"Manifest not found: {path}",
            code="MANIFEST_NOT_FOUND",
            details={"path": path},
        )


class ValidationError(NimProfilesError):
    """Validation failed."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConfigurationError(NimProfilesError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


def safe_get(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Safely get a nested value from a dictionary.

    Args:
        data: Dictionary to get value from
        *keys: Keys to traverse
        default: Default value if key not found

    Returns:
        Value at the nested key path, or default
    """
    current = data
    for key in keys:
        if isinstance(current, dict):
            current = current.get(key)
            if current is None:
                return default
        else:
            return default
    return current
