"""CLI application for depchange."""

import json
import sys
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console

from depchange.config import BranchNameConfig, Settings, load_settings
from depchange.detect import UNKNOWN, identify
from depchange.errors import DepChangeError
from depchange.logging_utils import configure_logging
from depchange.parse_change import change_to_dict, parse_change
from depchange.registry import VersionRegistry, default_registry

console = Console()

SYMBOLS = {-1: "<", 0: "=", 1: ">"}

app = typer.Typer(
    name="depchange",
    help="depchange - Compare ecosystem versions and name dependency update branches",
    add_completion=False,
)


def _settings(ctx: typer.Context) -> Settings:
    if ctx.obj is None:
        ctx.obj = load_settings()
    return ctx.obj


def _fail(error: Exception) -> NoReturn:
    console.print(f"Error: {error}", style="red", markup=False, soft_wrap=True)
    raise typer.Exit(1)


def resolve_ecosystem(ecosystem: str | None, manifest: str | None) -> str:
    """Pick the ecosystem from --ecosystem or a manifest file name."""
    if ecosystem:
        return ecosystem
    if manifest:
        detected = identify(manifest)
        if detected != UNKNOWN:
            return detected
        console.print(f"Error: Cannot detect ecosystem from {manifest}", style="red", markup=False, soft_wrap=True)
        raise typer.Exit(1)
    console.print("Error: Specify --ecosystem or --manifest", style="red", soft_wrap=True)
    raise typer.Exit(1)


def get_registry() -> VersionRegistry:
    return default_registry()


EcosystemOption = typer.Option(None, "--ecosystem", "-e", help="Ecosystem id, e.g. docker, pip, bundler")
ManifestOption = typer.Option(None, "--manifest", "-m", help="Manifest file name used to detect the ecosystem")


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to a YAML config file"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)"),
) -> None:
    """depchange - Compare ecosystem versions and name dependency update branches."""
    try:
        settings = load_settings(config)
    except DepChangeError as e:
        _fail(e)
    ctx.obj = settings
    configure_logging(log_level or settings.log_level)


@app.command()
def compare(
    first: str = typer.Argument(help="First version"),
    second: str = typer.Argument(help="Second version"),
    ecosystem: str | None = EcosystemOption,
    manifest: str | None = ManifestOption,
) -> None:
    """Compare two versions of the same ecosystem."""
    eco = resolve_ecosystem(ecosystem, manifest)
    try:
        result = get_registry().compare(eco, first, second)
    except DepChangeError as e:
        _fail(e)
    typer.echo(f"{first} {SYMBOLS[result]} {second}")


@app.command()
def check(
    versions: list[str] = typer.Argument(help="Versions to validate"),
    ecosystem: str | None = EcosystemOption,
    manifest: str | None = ManifestOption,
) -> None:
    """Check whether versions are valid for an ecosystem."""
    eco = resolve_ecosystem(ecosystem, manifest)
    registry = get_registry()
    all_valid = True
    try:
        for version in versions:
            valid = registry.is_valid(eco, version)
            all_valid = all_valid and valid
            typer.echo(f"{version}: {'valid' if valid else 'invalid'}")
    except DepChangeError as e:
        _fail(e)

    if not all_valid:
        raise typer.Exit(1)


@app.command(name="sort")
def sort_versions(
    versions: list[str] = typer.Argument(help="Versions to sort"),
    ecosystem: str | None = EcosystemOption,
    manifest: str | None = ManifestOption,
    reverse: bool = typer.Option(False, "--reverse", "-r", help="Highest version first"),
    format_type: str = typer.Option("text", "--format", help="Output format: text or json"),
) -> None:
    """Sort versions using the ecosystem's ordering."""
    eco = resolve_ecosystem(ecosystem, manifest)
    try:
        ordered = get_registry().sort(eco, versions, reverse=reverse)
    except DepChangeError as e:
        _fail(e)

    if format_type == "json":
        typer.echo(json.dumps({
            "ecosystem": eco,
            "versions": [{"version": str(v), "segments": v.segments} for v in ordered],
        }, indent=2))
    else:
        for version in ordered:
            typer.echo(str(version))


@app.command()
def branch(
    ctx: typer.Context,
    change_file: str = typer.Argument(help="Path to a change document in JSON (use '-' for stdin)"),
    prefix: str | None = typer.Option(None, "--prefix", help="Branch name prefix"),
    separator: str | None = typer.Option(None, "--separator", help="Separator between branch name parts"),
    max_length: int | None = typer.Option(None, "--max-length", help="Maximum branch name length"),
    format_type: str = typer.Option("text", "--format", help="Output format: text or json"),
) -> None:
    """Print the branch name for a dependency change."""
    settings = _settings(ctx)

    if change_file == "-":
        content = sys.stdin.read()
    else:
        path_obj = Path(change_file)
        if not path_obj.exists():
            console.print(f"Error: File {change_file} not found", style="red", markup=False, soft_wrap=True)
            raise typer.Exit(1)
        content = path_obj.read_text()

    try:
        config = BranchNameConfig(
            prefix=settings.branch.prefix if prefix is None else prefix,
            separator=separator or settings.branch.separator,
            max_length=settings.branch.max_length if max_length is None else max_length,
        )
        change = parse_change(content)
        if format_type == "json":
            typer.echo(json.dumps(change_to_dict(change, config), indent=2))
        else:
            typer.echo(change.branch_name(config))
    except DepChangeError as e:
        _fail(e)


@app.command()
def ecosystems() -> None:
    """List ecosystems with a registered version strategy."""
    for ecosystem in get_registry().ecosystems:
        typer.echo(ecosystem)


if __name__ == "__main__":
    app()
