"""Core manifest parsing and profile matching."""

from nim_profiles.core.gpu import is_gpu_compatible, is_optimized_engine, matches_regex
from nim_profiles.core.manifest import (
    ManifestParser,
    NIMManifest,
    YAMLManifestParser,
    get_parser,
    parse_manifest,
    parse_manifest_file,
)
from nim_profiles.core.matcher import match_profiles, resolve_backend, sorted_profile_ids

__all__ = [
    "NIMManifest",
    "ManifestParser",
    "YAMLManifestParser",
    "get_parser",
    "parse_manifest",
    "parse_manifest_file",
    "match_profiles",
    "resolve_backend",
    "sorted_profile_ids",
    "is_gpu_compatible",
    "is_optimized_engine",
    "matches_regex",
]
