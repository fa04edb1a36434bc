"""
Configuration model — the variables a template can refer to.

Field names are the placeholder names: ``{{.Count}}`` reads ``Count``.
Extra template variables are added by subclassing:

    class ShopConfiguration(Configuration):
        Color: str = ""
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Configuration(BaseModel):
    """Template variables loaded from the JSON config file.

    Unknown JSON keys are ignored and missing keys keep the zero value
    of their type. ``Package`` is always replaced by the package name
    given on the command line.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, strict=True)

    Package: str = ""
    Count: int = 0
    Material: str = ""

    def with_package(self, package: str) -> Configuration:
        """Return a copy with ``Package`` set."""
        return self.model_copy(update={"Package": package})

    def lookup(self, field: str) -> object:
        """Return the value of a declared field.

        Raises:
            KeyError: If the model has no such field.
        """
        if field not in type(self).model_fields:
            raise KeyError(field)
        return getattr(self, field)
