"""
Rule runner — execute factory rules once each and collect receipts.

This is a minimal stand-in for the build orchestrator: it runs every
requested rule in declaration order through an adapter. It does no
caching and no dependency ordering; a real build system does those.

Flow:
    rules → actions → adapter.execute → receipts → report
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from codegen_factory.adapters.base import Adapter, ExecutionContext
from codegen_factory.core.models.action import Receipt
from codegen_factory.core.models.rule import FactoryRule

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """Result of running a set of rules."""

    receipts: list[Receipt] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.receipts)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.receipts if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.receipts if r.status == "skipped")

    @property
    def outputs(self) -> list[str]:
        """Files produced by successful rules, for downstream steps."""
        return [path for r in self.receipts for path in r.outputs]

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "outputs": self.outputs,
            "receipts": [r.model_dump(mode="json") for r in self.receipts],
        }


def run_rules(
    rules: list[FactoryRule],
    adapter: Adapter,
    workspace_root: Path | None = None,
    dry_run: bool = False,
) -> RunReport:
    """Run each rule once through ``adapter``.

    A failing rule does not stop the others; every rule gets a receipt.
    """
    root = str(workspace_root or Path.cwd())
    report = RunReport()

    for rule in rules:
        action = rule.to_action()
        context = ExecutionContext(action=action, workspace_root=root, dry_run=dry_run)
        logger.info("%s %s", rule.mnemonic, rule.out)
        receipt = adapter.execute(context)
        if receipt.failed:
            logger.error("Rule %s failed: %s", rule.name, receipt.error)
        report.receipts.append(receipt)

    return report
