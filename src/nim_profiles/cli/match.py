"""CLI command for matching manifest profiles."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from nim_profiles.cli.utils import (
    build_model_spec,
    console,
    load_manifest,
    load_model_spec_file,
    output_json,
    parse_gpu_option,
)
from nim_profiles.core.matcher import match_profiles, resolve_backend, sorted_profile_ids
from nim_profiles.models.match import MatchReport
from nim_profiles.utils.config import get_config
from nim_profiles.utils.errors import NimProfilesError


def match_cmd(
    manifest: Path = typer.Option(..., "--manifest", "-m", help="Path to the model manifest"),
    spec: Optional[Path] = typer.Option(
        None,
        "--spec",
        "-s",
        help="Model spec YAML (or a NIMCache resource)",
    ),
    precision: Optional[str] = typer.Option(None, "--precision", help="Model precision (e.g., fp16)"),
    tp: Optional[str] = typer.Option(None, "--tp", help="Tensor parallelism"),
    qos_profile: Optional[str] = typer.Option(
        None,
        "--qos-profile",
        help="QoS profile (latency, throughput)",
    ),
    engine: Optional[str] = typer.Option(None, "--engine", "-e", help="Engine (e.g., tensorrt_llm)"),
    lora: Optional[bool] = typer.Option(None, "--lora/--no-lora", help="Require or exclude LoRA profiles"),
    gpu: Optional[List[str]] = typer.Option(
        None,
        "--gpu",
        "-g",
        help="Requested GPU as PRODUCT[:ID,ID]; repeatable",
    ),
    discovered: Optional[List[str]] = typer.Option(
        None,
        "--discovered",
        "-d",
        help="GPU product label found in the cluster; repeatable",
    ),
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
    Select the profiles compatible with a model spec and GPU inventory.

    Exits with status 1 when no profile matches.

    Example:
        nim-profiles match -m model_manifest.yaml --precision fp16 --gpu H100 -d "NVIDIA-H100-80GB-HBM3"
    """
    config = get_config()
    format = format or config.output.default_format

    try:
        base = load_model_spec_file(spec) if spec else {}
        model_spec = build_model_spec(
            base,
            {
                "precision": precision,
                "tensorParallelism": tp,
                "qosProfile": qos_profile,
                "engine": engine,
                "lora": lora,
                "gpus": [parse_gpu_option(g).model_dump() for g in gpu] if gpu else None,
            },
        )
    except NimProfilesError as e:
        console.print(f"[red]Error:[/red] {e.to_profile_error()}")
        raise typer.Exit(1)

    nim_manifest = load_manifest(manifest)
    discovered_gpus = list(discovered or [])

    matched = match_profiles(nim_manifest, model_spec, discovered_gpus)
    profile_ids = sorted_profile_ids(matched) if config.match.sort_results else list(matched)

    report = MatchReport(
        manifest_source=nim_manifest.source,
        model_spec=model_spec,
        discovered_gpus=discovered_gpus,
        profile_ids=profile_ids,
        total_profiles=len(nim_manifest),
    )

    if format == "json":
        output_json(report, output)
    else:
        _print_terminal_report(report, nim_manifest)

    if not report.matched:
        raise typer.Exit(1)


def _print_terminal_report(report: MatchReport, nim_manifest) -> None:
    """Print a rich terminal report."""
    spec = report.model_spec
    gpus = ", ".join(
        g.product + (f" ({', '.join(g.ids)})" if g.ids else "") for g in spec.gpus
    )

    console.print(
        Panel(
            f"[bold]Manifest:[/bold] {report.manifest_source}\n"
            f"[bold]Precision:[/bold] {spec.precision or 'any'}\n"
            f"[bold]Tensor parallelism:[/bold] {spec.tensor_parallelism or 'any'}\n"
            f"[bold]QoS profile:[/bold] {spec.qos_profile or 'any'}\n"
            f"[bold]Engine:[/bold] {spec.engine or 'any'}\n"
            f"[bold]LoRA:[/bold] {'unset' if spec.lora is None else spec.lora}\n"
            f"[bold]GPUs:[/bold] {gpus or 'none'}\n"
            f"[bold]Discovered GPUs:[/bold] {', '.join(report.discovered_gpus) or 'none'}",
            title="Profile Match",
        )
    )

    if not report.matched:
        console.print(
            f"[bold red]No matching profiles[/bold red] (0 of {report.total_profiles})"
        )
        return

    table = Table(title=f"Matching profiles ({len(report.profile_ids)} of {report.total_profiles})")
    table.add_column("ID", style="bold", overflow="fold")
    table.add_column("Model")
    table.add_column("Precision")
    table.add_column("TP")
    table.add_column("Engine")
    table.add_column("GPU")

    for profile_id in report.profile_ids:
        tags = nim_manifest.get_profile_tags(profile_id)
        table.add_row(
            profile_id,
            nim_manifest.get_profile_model(profile_id),
            tags.get("precision", ""),
            tags.get("tp", ""),
            resolve_backend(tags),
            tags.get("gpu", ""),
        )

    console.print(table)
