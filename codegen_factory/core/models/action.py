"""
Action and Receipt models — the execution contract.

An Action is one requested generator invocation, built from a rule
declaration. A Receipt is its result. Adapters take Actions and
return Receipts; they never raise.
"""

from __future__ import annotations

import shlex
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Action(BaseModel):
    """A requested generator run.

    ``params`` carries ``command`` (argv list), ``inputs`` and
    ``outputs`` (file paths) and ``mnemonic``.
    """

    id: str                         # rule target name
    name: str = ""                  # human-readable label
    adapter: str                    # which adapter handles this
    params: dict[str, Any] = Field(default_factory=dict)


class Receipt(BaseModel):
    """Result of one generator run.

    ``outputs`` lists the files the run produced and is only ever
    non-empty for an ``ok`` receipt, so downstream steps can consume
    it without checking the status first. A failed run carries the
    generator's one-line diagnostic in ``error``.
    """

    adapter: str = "generator"
    action_id: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    command: list[str] = Field(default_factory=list)
    outputs: list[str] = Field(default_factory=list)
    return_code: int | None = None

    finished_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""                # generator stdout, or the dry-run line
    error: str | None = None
    stderr: str = ""

    @model_validator(mode="after")
    def _outputs_only_when_ok(self) -> Receipt:
        if self.outputs and self.status != "ok":
            raise ValueError(f"{self.status} receipt cannot list outputs")
        return self

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def produced(cls, action_id: str, outputs: list[str], **kwargs: Any) -> Receipt:
        """The generator ran and wrote every declared output."""
        return cls(action_id=action_id, status="ok", outputs=list(outputs), **kwargs)

    @classmethod
    def broken(cls, action_id: str, error: str, **kwargs: Any) -> Receipt:
        """The generator could not run or exited with a diagnostic."""
        return cls(action_id=action_id, status="failed", error=error, **kwargs)

    @classmethod
    def planned(cls, action_id: str, command: list[str], **kwargs: Any) -> Receipt:
        """Dry run: the command that would have run, nothing executed."""
        return cls(
            action_id=action_id,
            status="skipped",
            command=list(command),
            output=f"[dry-run] {shlex.join(command)}",
            **kwargs,
        )
