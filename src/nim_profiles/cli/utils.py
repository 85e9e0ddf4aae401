"""Shared utilities for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
import yaml
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console

from nim_profiles.core.manifest import NIMManifest, parse_manifest_file
from nim_profiles.models.spec import GPUSpec, ModelSpec
from nim_profiles.utils.errors import NimProfilesError, ValidationError, safe_get

# Shared console instance
console = Console()


def load_manifest(path: Path) -> NIMManifest:
    """Load a manifest file, exiting with an error message on failure.

    Args:
        path: Manifest file path

    Returns:
        Parsed manifest
    """
    with console.status("Loading manifest..."):
        try:
            return parse_manifest_file(path)
        except NimProfilesError as e:
            console.print(f"[red]Error:[/red] {e.to_profile_error()}")
            raise typer.Exit(1)


def load_model_spec_file(path: Path) -> dict[str, Any]:
    """Read model spec fields from a YAML file.

    Accepts either a bare model spec or a NIMCache resource, in which case
    ``spec.source.ngc.model`` is used.

    Raises:
        ValidationError: If the file cannot be read as a model spec
    """
    if not path.is_file():
        raise ValidationError(f"Model spec file not found: {path}", field="spec")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in model spec file: {e}", field="spec") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Model spec must be a mapping", field="spec")

    if "kind" in data:
        model = safe_get(data, "spec", "source", "ngc", "model", default={})
        return dict(model) if isinstance(model, dict) else {}
    return data


def parse_gpu_option(value: str) -> GPUSpec:
    """Parse a ``PRODUCT[:ID,ID...]`` command-line GPU value."""
    product, _, ids = value.partition(":")
    return GPUSpec(
        product=product.strip(),
        ids=[i.strip() for i in ids.split(",") if i.strip()],
    )


def build_model_spec(base: dict[str, Any], overrides: dict[str, Any]) -> ModelSpec:
    """Build a ModelSpec from file fields overlaid with command-line flags.

    Raises:
        ValidationError: If the merged fields are not a valid model spec
    """
    merged = dict(base)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return ModelSpec.model_validate(merged)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid model spec: {e}", field="spec") from e


def output_json(data: dict[str, Any] | BaseModel, output: Path | None = None) -> None:
    """Output data as JSON to console or file.

    Args:
        data: Data to output (dict or Pydantic model)
        output: Optional output file path
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")

    json_str = json.dumps(data, indent=2, default=str)

    if output:
        output.write_text(json_str)
        console.print(f"Report written to {output}")
    else:
        console.print_json(json_str)
