"""GPU compatibility checks between requested hardware and profile tags."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from nim_profiles.models.spec import GPUSpec
from nim_profiles.utils.logging import get_logger

logger = get_logger(__name__)

BACKEND_TYPE_TENSORRT = "tensorrt"

# PCI vendor suffix appended to gpu_device tags (e.g. "2330:10de")
NVIDIA_VENDOR_SUFFIX = ":10de"


def is_optimized_engine(engine: str) -> bool:
    """Check whether an engine or backend name refers to TensorRT."""
    return bool(engine) and BACKEND_TYPE_TENSORRT in engine.lower()


def matches_regex(product_label: str, pattern: str) -> bool:
    """Check whether a GPU product label matches a profile's regex.

    An empty or invalid pattern never matches.
    """
    if not pattern:
        return False

    try:
        regex = re.compile(pattern)
    except re.error as e:
        logger.debug("Ignoring invalid product_name_regex %r: %s", pattern, e)
        return False

    return regex.search(product_label) is not None


def _strip_vendor(device: str) -> str:
    if device.endswith(NVIDIA_VENDOR_SUFFIX):
        return device[: -len(NVIDIA_VENDOR_SUFFIX)]
    return device


def is_gpu_compatible(
    gpus: Sequence[GPUSpec],
    tags: Mapping[str, str],
    discovered_gpus: Sequence[str],
) -> bool:
    """Check whether requested or discovered GPUs fit a profile.

    Explicit GPUs are matched by product name against the ``gpu`` and ``key``
    tags. A matched GPU that lists device ids must also match ``gpu_device``,
    otherwise the profile is rejected outright. Without an explicit match,
    the discovered product labels are checked against the ``gpu`` tag and
    then ``product_name_regex``.

    Args:
        gpus: Explicitly requested GPUs
        tags: Profile tags
        discovered_gpus: GPU product labels found in the cluster

    Returns:
        True if the profile can run on the given hardware
    """
    gpu_tag = tags.get("gpu", "")
    key_tag = tags.get("key", "")
    found = False

    for gpu in gpus:
        if not gpu.product:
            continue

        product = gpu.product.lower()
        if product in gpu_tag.lower() or product in key_tag.lower():
            found = True

        if found and gpu.ids:
            device = _strip_vendor(tags.get("gpu_device", ""))
            if device not in gpu.ids:
                return False

    if found:
        return True

    regex = tags.get("product_name_regex", "")
    for label in discovered_gpus:
        if not label:
            continue
        # llm NIMs tag the GPU name, others publish a product regex
        if gpu_tag.lower() in label.lower():
            return True
        if matches_regex(label, regex):
            return True

    return False
