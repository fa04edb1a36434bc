"""
Factory rule model — the build-step declaration for the generator.

A rule tells the orchestrator three things: which executable to run,
which files it reads, and which single file it writes. It holds no
logic beyond turning its attributes into generator arguments.

    FactoryRule(name="go_factory", config="stone/config/config.json",
                package="stone", out="stone/things.go")

    rule.inputs     → ["factory/templates/things.tmpl", "stone/config/config.json"]
    rule.outputs    → ["stone/things.go"]
    rule.command()  → [python, -m, codegen_factory, generate, -tmpl, ..., -package, stone]
"""

from __future__ import annotations

import sys

from pydantic import BaseModel, ConfigDict, Field

from codegen_factory.core.config.defaults import DEFAULT_TEMPLATE_PATH
from codegen_factory.core.models.action import Action

DEFAULT_MNEMONIC = "SmallFactory"


def _default_generator() -> list[str]:
    return [sys.executable, "-m", "codegen_factory", "generate"]


class FactoryRule(BaseModel):
    """One generator invocation declared to the build orchestrator."""

    model_config = ConfigDict(extra="forbid")

    name: str
    config: str
    out: str
    package: str = ""
    template: str = DEFAULT_TEMPLATE_PATH
    generator: list[str] = Field(default_factory=_default_generator)
    mnemonic: str = DEFAULT_MNEMONIC

    @property
    def inputs(self) -> list[str]:
        """Files the generator reads."""
        return [self.template, self.config]

    @property
    def outputs(self) -> list[str]:
        """The single file the generator writes."""
        return [self.out]

    def arguments(self) -> list[str]:
        """Generator arguments computed from the rule attributes.

        An empty ``package`` leaves the flag off so the generator's own
        default applies.
        """
        args = [
            "-tmpl", self.template,
            "-config", self.config,
            "-out", self.out,
        ]
        if self.package:
            args += ["-package", self.package]
        return args

    def command(self) -> list[str]:
        """Full argv: generator executable followed by its arguments."""
        return [*self.generator, *self.arguments()]

    def to_action(self) -> Action:
        """Build the engine action that runs this rule."""
        return Action(
            id=self.name,
            name=f"{self.mnemonic} {self.out}",
            adapter="generator",
            params={
                "command": self.command(),
                "inputs": self.inputs,
                "outputs": self.outputs,
                "mnemonic": self.mnemonic,
            },
        )

    def describe(self) -> dict:
        """Plain-dict view for JSON output."""
        return {
            "name": self.name,
            "mnemonic": self.mnemonic,
            "inputs": self.inputs,
            "outputs": self.outputs,
            "command": self.command(),
        }
