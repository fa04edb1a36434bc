"""
Adapter base — the protocol between the rule runner and executors.

The runner only talks to adapters through this protocol, never
directly to the generator process.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from codegen_factory.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute an action.

    Relative paths in the action's params resolve against
    ``workspace_root``; the generator runs with it as working directory.
    """

    action: Action
    workspace_root: str = "."
    dry_run: bool = False


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform the side effect and return a receipt.
    They NEVER raise exceptions — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'generator')."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the action can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Execute the action and return a receipt.

        MUST never raise exceptions. All failures are captured
        in the Receipt with status='failed'.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
