"""
Generator adapter — run the generator as a subprocess for one rule.

Mirrors what a build orchestrator does with a rule action: check the
declared inputs exist, run the executable with the computed argv
from the workspace root, and hand the declared outputs to later steps.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import time
from pathlib import Path

from codegen_factory.adapters.base import Adapter, ExecutionContext
from codegen_factory.core.models.action import Receipt

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120


class GeneratorAdapter(Adapter):
    """Execute generator actions built by ``FactoryRule.to_action()``.

    Action params:
        command (list[str]): Generator argv.
        inputs (list[str]): Files the generator reads.
        outputs (list[str]): Files the generator writes.
        timeout (int): Timeout in seconds (default: 120).
    """

    @property
    def name(self) -> str:
        return "generator"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        params = context.action.params
        command = params.get("command") or []
        if not command:
            return False, "Missing required param: 'command'"

        root = Path(context.workspace_root)
        if not root.is_dir():
            return False, f"Workspace root does not exist: {root}"

        missing = [p for p in params.get("inputs", []) if not (root / p).is_file()]
        if missing:
            return False, f"Missing input file(s): {', '.join(missing)}"

        if not params.get("outputs"):
            return False, "Rule declares no output file"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.action.params
        action_id = context.action.id
        command: list[str] = list(params.get("command") or [])
        outputs: list[str] = list(params.get("outputs", []))
        timeout = params.get("timeout", DEFAULT_TIMEOUT)

        if context.dry_run:
            return Receipt.planned(action_id, command, adapter=self.name)

        valid, message = self.validate(context)
        if not valid:
            return Receipt.broken(action_id, message, adapter=self.name, command=command)

        logger.debug("Executing: %s (cwd=%s)", shlex.join(command), context.workspace_root)
        start = time.monotonic()

        try:
            result = subprocess.run(
                command,
                cwd=context.workspace_root,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.broken(
                action_id,
                f"Generator timed out after {timeout}s",
                adapter=self.name,
                command=command,
            )
        except OSError as e:
            return Receipt.broken(
                action_id, f"Cannot start generator: {e}", adapter=self.name, command=command
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stderr = result.stderr.strip()
        ran = {
            "adapter": self.name,
            "command": command,
            "return_code": result.returncode,
            "duration_ms": elapsed_ms,
            "stderr": stderr,
        }

        if result.returncode != 0:
            error = _diagnostic(stderr) or f"Generator exited with code {result.returncode}"
            return Receipt.broken(action_id, error, **ran)

        root = Path(context.workspace_root)
        absent = [p for p in outputs if not (root / p).is_file()]
        if absent:
            return Receipt.broken(
                action_id,
                f"Generator did not produce declared output(s): {', '.join(absent)}",
                **ran,
            )

        return Receipt.produced(action_id, outputs, output=result.stdout.strip(), **ran)


def _diagnostic(stderr: str) -> str:
    """Last non-empty line of the generator's stderr."""
    lines = [line for line in stderr.splitlines() if line.strip()]
    return lines[-1].strip() if lines else ""
