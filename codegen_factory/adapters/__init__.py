"""
Adapters — execute generator actions and return receipts.

    from codegen_factory.adapters import GeneratorAdapter, StubGenerator
"""

from codegen_factory.adapters.base import Adapter, ExecutionContext
from codegen_factory.adapters.generator import GeneratorAdapter
from codegen_factory.adapters.stub import StubGenerator

__all__ = ["Adapter", "ExecutionContext", "GeneratorAdapter", "StubGenerator"]
