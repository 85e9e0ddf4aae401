"""Profile matching against a model specification and GPU inventory."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from nim_profiles.core.gpu import is_gpu_compatible, is_optimized_engine
from nim_profiles.models.manifest import Profile
from nim_profiles.models.spec import ModelSpec
from nim_profiles.utils.logging import get_logger

logger = get_logger(__name__)

ENGINE_SUFFIX = "_llm"


def resolve_backend(tags: Mapping[str, str]) -> str:
    """Get a profile's backend, preferring ``llm_engine`` over ``backend``."""
    return tags.get("llm_engine", "") or tags.get("backend", "")


def _rejection(profile: Profile, model_spec: ModelSpec, discovered_gpus: Sequence[str]) -> str | None:
    """Return the name of the first gate a profile fails, or None if it passes."""
    tags = profile.tags

    if model_spec.precision and tags.get("precision", "") != model_spec.precision:
        return "precision"
    if model_spec.tensor_parallelism and tags.get("tp", "") != model_spec.tensor_parallelism:
        return "tp"
    if model_spec.qos_profile and tags.get("profile", "") != model_spec.qos_profile:
        return "profile"

    # An unset LoRA request means no LoRA
    feat_lora = tags.get("feat_lora", "")
    if model_spec.lora is None:
        if feat_lora == "true":
            return "lora"
    elif feat_lora != ("true" if model_spec.lora else "false"):
        return "lora"

    backend = resolve_backend(tags)

    if model_spec.engine:
        engine = model_spec.engine
        if engine.endswith(ENGINE_SUFFIX):
            engine = engine[: -len(ENGINE_SUFFIX)]
        if engine not in backend:
            return "engine"

    # GPU checks apply when either side is optimized or GPUs are requested
    if is_optimized_engine(backend) or is_optimized_engine(model_spec.engine) or model_spec.gpus:
        if not is_optimized_engine(backend):
            return "backend"
        if model_spec.gpus or discovered_gpus:
            if not is_gpu_compatible(model_spec.gpus, tags, discovered_gpus):
                return "gpu"

    return None


def match_profiles(
    manifest: Mapping[str, Profile],
    model_spec: ModelSpec,
    discovered_gpus: Sequence[str] = (),
) -> set[str]:
    """Select the profiles compatible with a model spec and GPU inventory.

    Every profile is evaluated independently; a profile is selected only
    when it passes every active filter. Mismatches never raise, they only
    exclude the profile.

    Args:
        manifest: Mapping of profile id to profile
        model_spec: Requested matching criteria
        discovered_gpus: GPU product labels found in the cluster

    Returns:
        Set of matching profile ids (unordered)
    """
    selected: set[str] = set()

    for profile_id, profile in manifest.items():
        gate = _rejection(profile, model_spec, discovered_gpus)
        if gate is not None:
            logger.debug("Profile %s rejected by %s filter", profile_id, gate)
            continue
        selected.add(profile_id)

    logger.debug("Matched %d of %d profiles", len(selected), len(manifest))
    return selected


def sorted_profile_ids(profile_ids: Iterable[str]) -> list[str]:
    """Order profile ids lexicographically for deterministic output."""
    return sorted(profile_ids)
