"""Main CLI entry point for nim-profiles."""

import typer

from nim_profiles.cli import match, profiles
from nim_profiles.cli.utils import console

app = typer.Typer(
    name="nim-profiles",
    help="Inspect NIM model manifests and select compatible profiles.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register subcommands
app.command(name="list")(profiles.list_cmd)
app.command(name="show")(profiles.show_cmd)
app.command(name="match")(match.match_cmd)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
) -> None:
    """
    nim-profiles: select NIM model profiles for a GPU inventory.

    - [bold]list[/bold]: List the profiles in a manifest
    - [bold]show[/bold]: Show the tags of a single profile
    - [bold]match[/bold]: Select profiles compatible with a model spec
    """
    from nim_profiles.utils.config import get_config
    from nim_profiles.utils.errors import ConfigurationError
    from nim_profiles.utils.logging import configure_logging

    config = get_config()
    console.no_color = not config.output.color

    if verbose or config.output.verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"
    else:
        level = config.logging.level
    try:
        configure_logging(level=level, structured=config.logging.structured)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e.to_profile_error()}")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the nim-profiles version."""
    from nim_profiles import __version__

    console.print(f"nim-profiles version {__version__}")


if __name__ == "__main__":
    app()
