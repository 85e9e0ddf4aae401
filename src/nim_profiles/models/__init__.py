"""Data models for nim-profiles.

All models are Pydantic BaseModel with frozen=True for immutability.
"""

from nim_profiles.models.common import ProfileError
from nim_profiles.models.manifest import (
    ModelFile,
    ModelSource,
    Profile,
    Workspace,
    WorkspaceComponent,
)
from nim_profiles.models.match import MatchReport
from nim_profiles.models.spec import GPUSpec, ModelSpec

__all__ = [
    # Manifest
    "ModelFile",
    "ModelSource",
    "Profile",
    "Workspace",
    "WorkspaceComponent",
    # Spec
    "GPUSpec",
    "ModelSpec",
    # Match
    "MatchReport",
    # Common
    "ProfileError",
]
