"""
launchgen — CLI entrypoint.

Usage:
    python -m launchgen --help
    python -m launchgen generate
    python -m launchgen generate --dry-run -- --check
    python -m launchgen detect
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from launchgen import __version__
from launchgen.core.observability.logging_config import configure_from_cli

_ROOT_OPTION = click.option(
    "--root",
    "start_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory to start the project root search from (default: cwd).",
)


@click.group()
@click.version_option(version=__version__, prog_name="launchgen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """launchgen — generate VS Code debug configurations for test files."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    configure_from_cli(debug=debug, verbose=verbose, quiet=quiet)


@cli.command(context_settings={"ignore_unknown_options": True})
@_ROOT_OPTION
@click.option("--dry-run", is_flag=True, help="Print launch.json instead of writing it.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.argument("runtime_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def generate(
    ctx: click.Context,
    start_dir: Path | None,
    dry_run: bool,
    as_json: bool,
    runtime_args: tuple[str, ...],
) -> None:
    """Rebuild .vscode/launch.json from test files and custom groups.

    Any RUNTIME_ARGS are added to the runtime arguments of every
    discovered test file entry.

    Examples:

        launchgen generate

        launchgen generate --dry-run

        launchgen generate -- --unstable
    """
    from launchgen.core.use_cases.generate import run_generate

    try:
        result = run_generate(
            start_dir=start_dir,
            runtime_args=runtime_args,
            write=not dry_run,
        )
    except OSError as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        data = result.to_dict()
        if dry_run and result.document is not None:
            data["document"] = result.document
        click.echo(json.dumps(data, indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if dry_run:
        click.echo(json.dumps(result.document, indent=2, ensure_ascii=False))
        return

    quiet = ctx.obj.get("quiet", False)
    verbose = ctx.obj.get("verbose", False)

    if not quiet:
        click.secho(f"\n🧭 Project root: {result.project_root}", fg="cyan", bold=True)
        runtime = result.runtime.value if result.runtime else "?"
        click.echo(f"   Runtime: {runtime}")
        click.echo()

    click.secho(f"   Retaining {len(result.retained)} configurations", fg="green")
    if verbose:
        for name in result.retained:
            click.echo(f"     • {name}")

    click.secho(f"   Adding {len(result.added_files)} test files", fg="green")
    if verbose:
        for name in result.added_files:
            click.echo(f"     + {name}")

    click.secho(f"   Adding {len(result.added_groups)} from launch.config.json", fg="green")
    if verbose:
        for name in result.added_groups:
            click.echo(f"     + {name}")

    click.echo()
    click.secho(f"   💾 Updated {result.launch_file}", fg="cyan")
    click.echo()


@cli.command()
@_ROOT_OPTION
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def detect(start_dir: Path | None, as_json: bool) -> None:
    """Show the project root, runtime and workspace scopes."""
    from launchgen.core.use_cases.detect import run_detect

    result = run_detect(start_dir=start_dir)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    runtime = result.runtime.value if result.runtime else "?"
    click.secho(f"\n🔍 Project root: {result.project_root}", fg="cyan", bold=True)
    click.echo(f"   Runtime: {runtime}")
    found = "found" if result.descriptor_found else "missing"
    click.echo(f"   Descriptor: {result.descriptor_file} ({found})")
    click.echo()

    click.secho(f"   Scopes: {len(result.scopes)}", fg="white", bold=True)
    for scope in result.scopes:
        click.echo(f"     • {scope.name}  → {scope.path}")

    if result.file_filter.include or result.file_filter.exclude:
        click.echo()
        for pattern in result.file_filter.include:
            click.echo(f"   include: {pattern}")
        for pattern in result.file_filter.exclude:
            click.echo(f"   exclude: {pattern}")

    click.echo()


if __name__ == "__main__":
    cli()
