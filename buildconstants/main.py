"""
build-constants — CLI entrypoint.

Usage:
    python -m buildconstants.main --help
    python -m buildconstants.main generate
    python -m buildconstants.main check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from buildconstants import __version__
from buildconstants.core.observability.logging_config import (
    ENV_LOG_FILE,
    ENV_LOG_FILE_LEVEL,
    ENV_LOG_LEVEL,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="buildconstants")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to build-constants.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Build Constants — generate a Java class describing the build."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get(ENV_LOG_LEVEL, "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get(ENV_LOG_FILE),
        log_file_level=os.environ.get(ENV_LOG_FILE_LEVEL),
    )


@cli.command()
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default=None,
    help="Root directory for generated sources (default: from config).",
)
@click.option("--classname", default=None, help="Fully qualified name of the generated class.")
@click.option(
    "--access",
    type=click.Choice(["PUBLIC", "PACKAGE"], case_sensitive=False),
    default=None,
    help="Visibility of the generated class and constants.",
)
@click.option("--build-time", type=int, default=None, help="Build time in epoch milliseconds.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    output_dir: str | None,
    classname: str | None,
    access: str | None,
    build_time: int | None,
    as_json: bool,
) -> None:
    """Generate the build constants class."""
    from buildconstants.core.models import SourceAccess
    from buildconstants.core.use_cases.generate import run_generate

    overrides: dict = {}
    if classname is not None:
        overrides["classname"] = classname
    if access is not None:
        overrides["source_access"] = SourceAccess(access)
    if build_time is not None:
        overrides["build_time"] = build_time

    result = run_generate(
        config_path=ctx.obj.get("config_path"),
        output_dir=Path(output_dir) if output_dir else None,
        overrides=overrides,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if ctx.obj.get("quiet"):
        click.echo(str(result.path))
        return

    assert result.config is not None  # guaranteed after error check above
    click.secho(f"✅ Generated {result.config.classname}", fg="green", bold=True)
    click.echo(f"   📄 {result.path}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Validate build-constants.yml without generating anything."""
    from buildconstants.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.valid:
            sys.exit(1)
        return

    for error in result.errors:
        click.secho(f"❌ {error}", fg="red")
    for warning in result.warnings:
        click.secho(f"⚠️  {warning}", fg="yellow")

    if not result.valid:
        sys.exit(1)

    assert result.config is not None
    click.secho(f"✅ {result.config_path} is valid", fg="green", bold=True)
    click.echo(f"   Class:  {result.config.classname}")
    click.echo(f"   Output: {result.output_path}")


if __name__ == "__main__":
    cli()
