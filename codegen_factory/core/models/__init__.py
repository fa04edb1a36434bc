"""
Domain models — Pydantic types for the generator and its build rule.

All models are re-exported here for convenient access:

    from codegen_factory.core.models import Configuration, FactoryRule, Receipt
"""

from codegen_factory.core.models.action import Action, Receipt
from codegen_factory.core.models.configuration import Configuration
from codegen_factory.core.models.generated import GeneratedFile
from codegen_factory.core.models.rule import FactoryRule

__all__ = [
    # action.py
    "Action",
    # configuration.py
    "Configuration",
    # rule.py
    "FactoryRule",
    # generated.py
    "GeneratedFile",
    "Receipt",
]
