"""Profile manifest data models."""

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from nim_profiles.models.common import coerce_str


def _scalar_to_str(value: Any) -> Any:
    # Nested mappings and lists are left for validation to reject
    if value is None or isinstance(value, (bool, int, float)):
        return coerce_str(value)
    return value


class ModelFile(BaseModel):
    """A single file fetched from a model source repository."""

    model_config = {"frozen": True}

    name: str = Field(description="File name relative to the repository")


class ModelSource(BaseModel):
    """Source repository and files for a workspace component.

    Producers encode each file either as a bare filename or as a mapping
    keyed by the filename (the value carries metadata that is ignored here).
    Both shapes normalize to ``ModelFile``; anything else is dropped.
    """

    model_config = {"frozen": True}

    repo_id: str = Field(default="", description="Source repository id")
    files: list[ModelFile] = Field(default_factory=list, description="Files to fetch")

    @model_validator(mode="before")
    @classmethod
    def _decode_files(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        repo_id = _scalar_to_str(data.get("repo_id"))
        files: list[ModelFile] = []
        raw_files = data.get("files")
        if isinstance(raw_files, list):
            for entry in raw_files:
                if isinstance(entry, str):
                    files.append(ModelFile(name=entry))
                elif isinstance(entry, dict):
                    for key in entry:
                        if isinstance(key, str):
                            files.append(ModelFile(name=key))

        return {
            "repo_id": repo_id if isinstance(repo_id, str) else "",
            "files": files,
        }


class WorkspaceComponent(BaseModel):
    """Source and destination of a set of model files."""

    model_config = {"frozen": True}

    dst: str = Field(default="", description="Destination directory")
    src: ModelSource = Field(default_factory=ModelSource, description="Source repository")

    @field_validator("dst", mode="before")
    @classmethod
    def _coerce_dst(cls, value: Any) -> Any:
        return _scalar_to_str(value)

    @field_validator("src", mode="before")
    @classmethod
    def _none_to_default(cls, value: Any) -> Any:
        return {} if value is None else value


class Workspace(BaseModel):
    """Workspace layout for a profile's model components."""

    model_config = {"frozen": True}

    components: list[WorkspaceComponent] = Field(default_factory=list)

    @field_validator("components", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class Profile(BaseModel):
    """One precomputed model-engine variant published by a NIM container."""

    model_config = {"frozen": True}

    model: str = Field(default="", description="Model name")
    release: str = Field(default="", description="Release version")
    tags: dict[str, str] = Field(
        default_factory=dict,
        description="Free-form hardware/software characteristics",
    )
    container_url: str = Field(default="", description="Container image URL")
    workspace: Workspace = Field(default_factory=Workspace, description="Files to fetch")

    @field_validator("model", "release", "container_url", mode="before")
    @classmethod
    def _coerce_scalars(cls, value: Any) -> Any:
        return _scalar_to_str(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _stringify_tags(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {coerce_str(k): _scalar_to_str(v) for k, v in value.items()}
        return value

    @field_validator("workspace", mode="before")
    @classmethod
    def _none_to_default(cls, value: Any) -> Any:
        return {} if value is None else value
