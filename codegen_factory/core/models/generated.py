"""
Generated file model — the result of one generator run.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A source file produced by the generator.

    Attributes:
        path:     Where the file was (or will be) written.
        content:  Full rendered text, package declaration included.
        package:  Package name used for the declaration.
        reason:   Which template and config produced it.
    """

    path: str
    content: str
    package: str = ""
    reason: str = ""
