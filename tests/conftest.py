"""Shared test fixtures for nim-profiles tests."""

import logging
from pathlib import Path

import pytest

from nim_profiles.core.manifest import NIMManifest, parse_manifest
from nim_profiles.utils.config import NimProfilesConfig, set_config

SAMPLE_MANIFEST = """
trt-h100-fp16-tp1:
  model: meta/llama3-8b-instruct
  release: "1.0.3"
  tags:
    feat_lora: "false"
    gpu: H100
    gpu_device: "2330:10de"
    llm_engine: tensorrt_llm
    pp: "1"
    precision: fp16
    profile: latency
    tp: "1"
  container_url: nvcr.io/nim/meta/llama3-8b-instruct:1.0.3
  workspace:
    components:
      - dst: ""
        src:
          repo_id: ngc://nim/meta/llama3-8b-instruct:0.10.0+1.0.3-h100x1-fp16-latency
          files:
            - config.json
            - rank0.engine:
                size: 16106127360
trt-h100-fp8-tp2:
  model: meta/llama3-8b-instruct
  release: "1.0.3"
  tags:
    feat_lora: "false"
    gpu: H100
    gpu_device: "2330:10de"
    llm_engine: tensorrt_llm
    pp: "1"
    precision: fp8
    profile: throughput
    tp: 2
  container_url: nvcr.io/nim/meta/llama3-8b-instruct:1.0.3
trt-a100-fp16-tp1-lora:
  model: meta/llama3-8b-instruct
  release: "1.0.3"
  tags:
    feat_lora: "true"
    gpu: A100
    gpu_device: "20b2:10de"
    llm_engine: tensorrt_llm
    precision: fp16
    profile: latency
    tp: "1"
  container_url: nvcr.io/nim/meta/llama3-8b-instruct:1.0.3
vllm-fp16-tp1:
  model: meta/llama3-8b-instruct
  release: "1.0.3"
  tags:
    feat_lora: "false"
    llm_engine: vllm
    precision: fp16
    tp: "1"
  container_url: nvcr.io/nim/meta/llama3-8b-instruct:1.0.3
  workspace:
    components:
      - dst: ""
        src:
          repo_id: hf://meta-llama/Meta-Llama-3-8B-Instruct
          files:
            - model.safetensors
            - tokenizer.json
onnx-a10g:
  model: nvidia/nv-rerankqa-mistral-4b-v3
  release: "1.0.2"
  tags:
    backend: tensorrt
    precision: fp16
    product_name_regex: "^NVIDIA A10G.*"
    tp: "1"
  container_url: nvcr.io/nim/nvidia/nv-rerankqa-mistral-4b-v3:1.0.2
"""


@pytest.fixture(autouse=True)
def default_config():
    """Isolate tests from any config file on the host."""
    set_config(NimProfilesConfig())
    yield
    set_config(None)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo CLI logging setup so caplog sees package records."""
    yield
    logger = logging.getLogger("nim_profiles")
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_manifest_yaml() -> str:
    """Raw sample manifest document."""
    return SAMPLE_MANIFEST


@pytest.fixture
def sample_manifest() -> NIMManifest:
    """Parsed sample manifest."""
    return parse_manifest(SAMPLE_MANIFEST)


@pytest.fixture
def sample_manifest_file(tmp_path) -> Path:
    """Sample manifest written to disk."""
    manifest_file = tmp_path / "model_manifest.yaml"
    manifest_file.write_text(SAMPLE_MANIFEST)
    return manifest_file


@pytest.fixture
def sample_nimcache_file(tmp_path) -> Path:
    """NIMCache resource carrying a model spec."""
    content = """
apiVersion: apps.nvidia.com/v1alpha1
kind: NIMCache
metadata:
  name: meta-llama3-8b-instruct
spec:
  source:
    ngc:
      modelPuller: nvcr.io/nim/meta/llama3-8b-instruct:1.0.3
      authSecret: ngc-secret
      model:
        engine: tensorrt_llm
        tensorParallelism: "1"
        qosProfile: latency
        gpus:
          - product: h100
            ids:
              - "2330"
  storage:
    pvc:
      create: true
      size: 50Gi
"""
    spec_file = tmp_path / "nimcache.yaml"
    spec_file.write_text(content)
    return spec_file
