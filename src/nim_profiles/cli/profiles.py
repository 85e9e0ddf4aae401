"""CLI commands for inspecting manifest profiles."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from nim_profiles.cli.utils import console, load_manifest, output_json
from nim_profiles.core.matcher import resolve_backend, sorted_profile_ids
from nim_profiles.utils.config import get_config


def list_cmd(
    manifest: Path = typer.Option(..., "--manifest", "-m", help="Path to the model manifest"),
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (terminal, json)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
) -> None:
    """
    List the profiles published in a manifest.

    Example:
        nim-profiles list --manifest model_manifest.yaml
    """
    nim_manifest = load_manifest(manifest)
    format = format or get_config().output.default_format

    if format == "json":
        data = {
            "manifest": str(manifest),
            "profiles": {
                profile_id: nim_manifest[profile_id].model_dump(mode="json")
                for profile_id in sorted_profile_ids(nim_manifest)
            },
        }
        output_json(data, output)
        return

    if not len(nim_manifest):
        console.print("[yellow]Warning:[/yellow] Manifest contains no profiles")
        return

    table = Table(title=f"Profiles ({len(nim_manifest)})")
    table.add_column("ID", style="bold", overflow="fold")
    table.add_column("Model")
    table.add_column("Release")
    table.add_column("Precision")
    table.add_column("TP")
    table.add_column("Profile")
    table.add_column("Engine")
    table.add_column("GPU")

    for profile_id in sorted_profile_ids(nim_manifest):
        tags = nim_manifest.get_profile_tags(profile_id)
        table.add_row(
            profile_id,
            nim_manifest.get_profile_model(profile_id),
            nim_manifest.get_profile_release(profile_id),
            tags.get("precision", ""),
            tags.get("tp", ""),
            tags.get("profile", ""),
            resolve_backend(tags),
            tags.get("gpu", ""),
        )

    console.print(table)


def show_cmd(
    profile_id: str = typer.Argument(..., help="Profile id"),
    manifest: Path = typer.Option(..., "--manifest", "-m", help="Path to the model manifest"),
) -> None:
    """
    Show the model, release and tags of one profile.

    Example:
        nim-profiles show --manifest model_manifest.yaml 4f904d571fe60ff24695b5ee2aa42da58cb460787a968f1e8a09f5a7e862728d
    """
    nim_manifest = load_manifest(manifest)

    if profile_id not in nim_manifest:
        console.print(f"[yellow]Warning:[/yellow] Profile {profile_id} not found in manifest")

    console.print(f"[bold]Profile:[/bold] {profile_id}")
    console.print(f"[bold]Model:[/bold] {nim_manifest.get_profile_model(profile_id)}")
    console.print(f"[bold]Release:[/bold] {nim_manifest.get_profile_release(profile_id)}")

    tags = nim_manifest.get_profile_tags(profile_id)
    if tags:
        table = Table(title="Tags")
        table.add_column("Tag", style="bold")
        table.add_column("Value")
        for key in sorted(tags):
            table.add_row(key, tags[key])
        console.print(table)
