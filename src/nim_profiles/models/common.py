"""Common model types shared across modules."""

from typing import Any

from pydantic import BaseModel, Field


class ProfileError(BaseModel):
    """Represents an error that occurred while loading or matching profiles."""

    model_config = {"frozen": True}

    code: str = Field(description="Error code for programmatic handling")
    message: str = Field(description="Human-readable error message")
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional error context",
    )

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


def coerce_str(value: Any) -> str:
    """Render a YAML scalar the way it lands in a string field.

    Booleans become ``true``/``false`` and ``None`` becomes the empty string.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
