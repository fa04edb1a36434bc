"""
Stub generator — stands in for the generator process in tests.

Instead of spawning the generator it writes a small placeholder
source file for each output the rule declares, so runner and CLI
tests observe the same files appearing under the workspace as a real
run would produce.
"""

from __future__ import annotations

from pathlib import Path

from codegen_factory.adapters.base import Adapter, ExecutionContext
from codegen_factory.core.config.defaults import DEFAULT_PACKAGE
from codegen_factory.core.models.action import Receipt


def stub_source(action_id: str, package: str) -> str:
    """Content written for every output of a stubbed rule."""
    return f"package {package}\n\n// Stub output of {action_id}.\n"


class StubGenerator(Adapter):
    """Adapter that fakes generator runs by writing stub outputs.

    Every ``execute`` is recorded in ``calls``. Rules registered with
    ``fail`` get a failed receipt and write nothing.
    """

    def __init__(self, adapter_name: str = "generator"):
        self._name = adapter_name
        self._failures: dict[str, str] = {}
        self.calls: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    def fail(self, action_id: str, error: str = "Stub failure") -> None:
        """Make runs of ``action_id`` fail with ``error``."""
        self._failures[action_id] = error

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.action.params.get("outputs"):
            return False, "Rule declares no output file"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self.calls.append(context)
        action_id = context.action.id
        command = list(context.action.params.get("command") or [])

        if context.dry_run:
            return Receipt.planned(action_id, command, adapter=self._name)
        if action_id in self._failures:
            return Receipt.broken(
                action_id, self._failures[action_id], adapter=self._name, command=command
            )
        valid, message = self.validate(context)
        if not valid:
            return Receipt.broken(action_id, message, adapter=self._name, command=command)

        outputs = list(context.action.params["outputs"])
        content = stub_source(action_id, _package_flag(command))
        root = Path(context.workspace_root)
        try:
            for out in outputs:
                path = root / out
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8")
        except OSError as e:
            return Receipt.broken(
                action_id, f"Cannot write stub output: {e}", adapter=self._name, command=command
            )

        return Receipt.produced(action_id, outputs, adapter=self._name, command=command)


def _package_flag(command: list[str]) -> str:
    """Value of ``-package`` in a generator argv, or the generator default."""
    if "-package" in command:
        i = command.index("-package")
        if i + 1 < len(command):
            return command[i + 1]
    return DEFAULT_PACKAGE
