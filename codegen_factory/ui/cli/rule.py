"""
CLI commands for factory rules.

Thin wrappers over ``codegen_factory.core.rules``.
"""

from __future__ import annotations

import json
import shlex
import sys
from pathlib import Path

import click


def _load(rule_file: Path, root: Path | None):
    """Load rules or exit with a diagnostic."""
    from codegen_factory.core.errors import RuleError
    from codegen_factory.core.rules.loader import load_rules

    try:
        return load_rules(rule_file, workspace_root=root)
    except RuleError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


_root_option = click.option(
    "--root",
    "root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Workspace root the generator runs in (default: cwd).",
)


@click.group()
def rule() -> None:
    """Factory rules — show declared inputs/outputs, run the generator."""


# ── Show ────────────────────────────────────────────────────────


@rule.command("show")
@click.argument("rule_file", type=click.Path(path_type=Path))
@_root_option
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def show(rule_file: Path, root: Path | None, as_json: bool) -> None:
    """Show each rule's inputs, outputs and generator command."""
    rules = _load(rule_file, root)

    if as_json:
        click.echo(json.dumps([r.describe() for r in rules], indent=2))
        return

    if not rules:
        click.secho("No rules declared.", fg="yellow")
        return

    for r in rules:
        click.secho(f"🏭 {r.name}", fg="cyan", bold=True, nl=False)
        click.echo(f"  [{r.mnemonic}]")
        for path in r.inputs:
            click.echo(f"   ← {path}")
        for path in r.outputs:
            click.echo(f"   → {path}")
        click.echo(f"   $ {shlex.join(r.command())}")
    click.echo()


# ── Run ─────────────────────────────────────────────────────────


@rule.command("run")
@click.argument("rule_file", type=click.Path(path_type=Path))
@_root_option
@click.option("--target", "-t", "targets", multiple=True, help="Run only the named rule(s).")
@click.option("--dry-run", is_flag=True, help="Print commands but don't run them.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def run(
    ctx: click.Context,
    rule_file: Path,
    root: Path | None,
    targets: tuple[str, ...],
    dry_run: bool,
    as_json: bool,
) -> None:
    """Run the generator once for each declared rule."""
    from codegen_factory.adapters.generator import GeneratorAdapter
    from codegen_factory.core.rules.runner import run_rules

    rules = _load(rule_file, root)

    if targets:
        known = {r.name for r in rules}
        unknown = [t for t in targets if t not in known]
        if unknown:
            click.secho(f"❌ Unknown rule(s): {', '.join(unknown)}", fg="red", err=True)
            sys.exit(1)
        rules = [r for r in rules if r.name in targets]

    report = run_rules(rules, GeneratorAdapter(), workspace_root=root, dry_run=dry_run)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        if report.failed > 0:
            sys.exit(1)
        return

    for receipt in report.receipts:
        if receipt.ok:
            click.secho(f"   ✓ {receipt.action_id}", fg="green", nl=False)
            timing = f" ({receipt.duration_ms}ms)" if receipt.duration_ms else ""
            click.echo(f"{timing}")
            for path in receipt.outputs:
                click.echo(f"     → {path}")
        elif receipt.failed:
            click.secho(f"   ✗ {receipt.action_id}", fg="red")
            if receipt.error:
                click.echo(f"     │ {receipt.error}")
        else:
            click.secho(f"   ⊘ {receipt.action_id} ", fg="yellow", nl=False)
            click.echo(f"({receipt.output})")

    if not ctx.obj.get("quiet"):
        click.echo()
        status_color = {"ok": "green", "partial": "yellow", "failed": "red"}.get(
            report.status, "white"
        )
        click.secho(
            f"   Result: {report.succeeded}/{report.total} succeeded",
            fg=status_color,
            bold=True,
        )

    if report.failed > 0:
        sys.exit(1)
