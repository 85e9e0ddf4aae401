"""nim-profiles: select NIM model profiles for a cluster's GPUs.

A NIM container publishes a manifest of precomputed model-engine profiles,
each tagged with precision, parallelism, backend and target GPU. This
package parses that manifest and selects the profiles compatible with a
requested model configuration and the GPUs present in a cluster:

- **Manifest Store**: parse a manifest into an immutable ``NIMManifest``
- **Profile Matcher**: filter profiles by precision, parallelism, QoS,
  LoRA, engine and GPU compatibility
- **GPU Compatibility**: match requested or discovered GPUs to profile tags

Usage:
    from nim_profiles import GPUSpec, ModelSpec, parse_manifest_file

    manifest = parse_manifest_file("model_manifest.yaml")
    spec = ModelSpec(precision="fp16", gpus=[GPUSpec(product="H100")])
    profile_ids = manifest.match_profiles(spec, discovered_gpus=["NVIDIA-H100-80GB-HBM3"])

CLI:
    nim-profiles list --manifest <manifest>
    nim-profiles show --manifest <manifest> <profile-id>
    nim-profiles match --manifest <manifest> --precision fp16 --gpu H100
"""

__version__ = "0.1.0"

# Core
from nim_profiles.core.gpu import is_gpu_compatible
from nim_profiles.core.manifest import (
    ManifestParser,
    NIMManifest,
    get_parser,
    parse_manifest,
    parse_manifest_file,
)
from nim_profiles.core.matcher import match_profiles, sorted_profile_ids

# Models
from nim_profiles.models.manifest import Profile
from nim_profiles.models.match import MatchReport
from nim_profiles.models.spec import GPUSpec, ModelSpec

# Errors
from nim_profiles.utils.errors import ManifestNotFoundError, ManifestParseError, NimProfilesError

__all__ = [
    # Version
    "__version__",
    # Core
    "NIMManifest",
    "ManifestParser",
    "get_parser",
    "parse_manifest",
    "parse_manifest_file",
    "match_profiles",
    "sorted_profile_ids",
    "is_gpu_compatible",
    # Models
    "Profile",
    "GPUSpec",
    "ModelSpec",
    "MatchReport",
    # Errors
    "NimProfilesError",
    "ManifestParseError",
    "ManifestNotFoundError",
]
