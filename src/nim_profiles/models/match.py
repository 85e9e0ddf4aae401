"""Profile match result models."""

from pydantic import BaseModel, Field

from nim_profiles.models.spec import ModelSpec


class MatchReport(BaseModel):
    """Summary of one profile matching run."""

    model_config = {"frozen": True, "protected_namespaces": ()}

    manifest_source: str | None = Field(
        default=None,
        description="Where the manifest was read from",
    )
    model_spec: ModelSpec = Field(description="Criteria the profiles were matched against")
    discovered_gpus: list[str] = Field(
        default_factory=list,
        description="GPU product labels observed in the cluster",
    )
    profile_ids: list[str] = Field(default_factory=list, description="Matching profile ids")
    total_profiles: int = Field(default=0, description="Number of profiles in the manifest")

    @property
    def matched(self) -> bool:
        """Whether any profile matched."""
        return bool(self.profile_ids)
