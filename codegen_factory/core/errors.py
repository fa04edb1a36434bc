"""
Error taxonomy for the generator.

Every failure during a generator run is one of these. None of them is
recovered locally: the CLI prints the message and exits non-zero.

    GeneratorError
    ├── ConfigError     config file unreadable or not valid JSON / fields
    ├── TemplateError   template file unreadable or malformed
    ├── RenderError     template refers to something the config lacks
    └── OutputError     output path cannot be created or written
"""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for every fatal generator failure."""


class ConfigError(GeneratorError):
    """Raised when the configuration file is missing or invalid."""


class TemplateError(GeneratorError):
    """Raised when the template cannot be read or parsed."""

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.line = line


class RenderError(GeneratorError):
    """Raised when a parsed template cannot be executed against the config."""


class OutputError(GeneratorError):
    """Raised when the rendered output cannot be written."""


class RuleError(Exception):
    """Raised when a rule declaration file is missing or invalid."""
