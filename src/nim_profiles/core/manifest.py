"""NIM profile manifest parsing and access."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Protocol, runtime_checkable

import yaml
from pydantic import ValidationError as PydanticValidationError

from nim_profiles.core.matcher import match_profiles
from nim_profiles.models.manifest import Profile
from nim_profiles.models.spec import ModelSpec
from nim_profiles.utils.errors import ManifestNotFoundError, ManifestParseError
from nim_profiles.utils.logging import get_logger_with_context

# Implicit resolvers the manifest loader keeps
_KEPT_RESOLVERS = ("tag:yaml.org,2002:null", "tag:yaml.org,2002:merge")


class _SourceTextLoader(yaml.SafeLoader):
    """Safe loader that leaves plain scalars as their source text.

    ``tp: 0x2`` stays ``"0x2"`` and ``feat_lora: True`` stays ``"True"``.
    Only nulls and merge keys are resolved.
    """


_SourceTextLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag in _KEPT_RESOLVERS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class NIMManifest(Mapping[str, Profile]):
    """Read-only mapping of profile id to profile.

    A manifest is immutable once parsed and can be shared between
    concurrent matching calls.

    Example:
        manifest = parse_manifest_file("/opt/nim/etc/default/model_manifest.yaml")

        for profile_id in manifest.match_profiles(ModelSpec(precision="fp16"), ["NVIDIA H100"]):
            print(profile_id, manifest.get_profile_model(profile_id))
    """

    def __init__(self, profiles: Mapping[str, Profile] | None = None, source: str | None = None) -> None:
        self._profiles: Mapping[str, Profile] = MappingProxyType(dict(profiles or {}))
        self._source = source

    @property
    def source(self) -> str | None:
        """Where the manifest was read from, if known."""
        return self._source

    def __getitem__(self, profile_id: str) -> Profile:
        return self._profiles[profile_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    def __repr__(self) -> str:
        return f"NIMManifest(profiles={len(self)}, source={self._source!r})"

    def profile_ids(self) -> list[str]:
        """Get all profile ids (unordered)."""
        return list(self._profiles)

    def get_profile_model(self, profile_id: str) -> str:
        """Get a profile's model name, or "" for unknown ids."""
        return self._lookup(profile_id).model

    def get_profile_tags(self, profile_id: str) -> dict[str, str]:
        """Get a copy of a profile's tags, or {} for unknown ids."""
        return dict(self._lookup(profile_id).tags)

    def get_profile_release(self, profile_id: str) -> str:
        """Get a profile's release, or "" for unknown ids."""
        return self._lookup(profile_id).release

    def match_profiles(self, model_spec: ModelSpec, discovered_gpus: Sequence[str] = ()) -> set[str]:
        """Select profile ids compatible with a model spec and GPU inventory."""
        return match_profiles(self, model_spec, discovered_gpus)

    def _lookup(self, profile_id: str) -> Profile:
        profile = self._profiles.get(profile_id)
        return profile if profile is not None else Profile()


def parse_manifest(data: bytes | str, source: str | None = None) -> NIMManifest:
    """Parse a raw manifest document.

    Args:
        data: YAML (or JSON) manifest content
        source: Optional description of where the data came from

    Returns:
        Parsed manifest

    Raises:
        ManifestParseError: If the document is not a well-formed manifest
    """
    try:
        raw = yaml.load(data, Loader=_SourceTextLoader)
    except yaml.YAMLError as e:
        raise ManifestParseError(f"Invalid manifest YAML: {e}", source=source) from e

    if raw is None:
        return NIMManifest(source=source)

    if not isinstance(raw, dict):
        raise ManifestParseError(
            f"Manifest must be a mapping of profile ids, got {type(raw).__name__}",
            source=source,
        )

    profiles: dict[str, Profile] = {}
    for profile_id, entry in raw.items():
        try:
            profiles[str(profile_id)] = Profile.model_validate(entry if entry is not None else {})
        except PydanticValidationError as e:
            raise ManifestParseError(
                f"Invalid profile {profile_id}: {e}",
                source=source,
            ) from e

    log = get_logger_with_context(__name__, source=source or "raw data")
    log.debug("Parsed %d profiles", len(profiles))
    return NIMManifest(profiles, source=source)


def parse_manifest_file(path: Path | str) -> NIMManifest:
    """Parse a manifest file from disk.

    Raises:
        ManifestNotFoundError: If the file does not exist
        ManifestParseError: If the file is not a well-formed manifest
    """
    path = Path(path)
    if not path.is_file():
        raise ManifestNotFoundError(str(path))
    return parse_manifest(path.read_bytes(), source=str(path))


@runtime_checkable
class ManifestParser(Protocol):
    """Protocol for versioned manifest parsers."""

    def parse(self, data: bytes | str) -> NIMManifest:
        """Parse raw manifest content."""
        ...

    def parse_file(self, path: Path | str) -> NIMManifest:
        """Parse a manifest file."""
        ...


class YAMLManifestParser:
    """Parser for the v1 YAML manifest format."""

    def parse(self, data: bytes | str) -> NIMManifest:
        return parse_manifest(data)

    def parse_file(self, path: Path | str) -> NIMManifest:
        return parse_manifest_file(path)


def get_parser() -> ManifestParser:
    """Get the default manifest parser."""
    return YAMLManifestParser()
