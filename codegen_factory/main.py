"""
codegen-factory — CLI entrypoint.

Usage:
    python -m codegen_factory --help
    python -m codegen_factory generate -package main -config cfg.json -out things.go
    python -m codegen_factory rule show stone/BUILD.yml
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from codegen_factory import __version__
from codegen_factory.core.config.defaults import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_OUT_PATH,
    DEFAULT_PACKAGE,
    DEFAULT_TEMPLATE_PATH,
)
from codegen_factory.core.observability.logging_config import configure_from_cli

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="codegen-factory")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """codegen-factory — render source files from JSON config and templates."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    configure_from_cli(debug=debug, verbose=verbose, quiet=quiet)


@cli.command()
@click.option(
    "-package", "--package", "package",
    default=DEFAULT_PACKAGE, show_default=True,
    help="The package name in the generated code file.",
)
@click.option(
    "-tmpl", "--tmpl", "tmpl_path",
    default=DEFAULT_TEMPLATE_PATH, show_default=True,
    type=click.Path(path_type=Path),
    help="The template file.",
)
@click.option(
    "-config", "--config", "config_path",
    default=DEFAULT_CONFIG_PATH, show_default=True,
    type=click.Path(path_type=Path),
    help="The configuration file.",
)
@click.option(
    "-out", "--out", "out_path",
    default=DEFAULT_OUT_PATH, show_default=True,
    type=click.Path(path_type=Path),
    help="The output file.",
)
@click.pass_context
def generate(
    ctx: click.Context,
    package: str,
    tmpl_path: Path,
    config_path: Path,
    out_path: Path,
) -> None:
    """Render TMPL with CONFIG and write a source file to OUT.

    Examples:

        codegen-factory generate -package main -config base.json -out things.go

        codegen-factory generate --package stone --tmpl things.tmpl --out stone.go
    """
    from codegen_factory.core.errors import GeneratorError
    from codegen_factory.core.services.generator import generate as run_generator

    try:
        generated = run_generator(
            package=package,
            template_path=tmpl_path,
            config_path=config_path,
            out_path=out_path,
        )
    except GeneratorError as e:
        logger.debug("Generation failed", exc_info=True)
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if not ctx.obj.get("quiet"):
        click.echo(f"✅ {generated.path} (package {generated.package})")


# ── Register sub-command groups from codegen_factory/ui/cli/ ──────

from codegen_factory.ui.cli.rule import rule  # noqa: E402

cli.add_command(rule)


if __name__ == "__main__":
    cli()
