"""
Configuration loader — reads the JSON config file into a Configuration.

Reads the file, parses JSON, validates against the Pydantic model and
returns an immutable Configuration. Any problem is a ConfigError.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from codegen_factory.core.errors import ConfigError
from codegen_factory.core.models.configuration import Configuration

logger = logging.getLogger(__name__)


def load_configuration(
    path: Path,
    model: type[Configuration] = Configuration,
) -> Configuration:
    """Load and validate a JSON configuration file.

    Keys are matched to model fields by exact name. Unknown keys are
    ignored; missing keys and ``null`` values keep the field default.

    Args:
        path: Path to the JSON config file.
        model: Configuration subclass declaring the template variables.

    Returns:
        Validated, frozen configuration.

    Raises:
        ConfigError: If the file is missing, unreadable, not JSON, not
            an object, or holds a value of the wrong type.
    """
    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config {path} is not valid UTF-8: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected a JSON object in config {path}, got {type(data).__name__}"
        )

    # null behaves like an absent key
    data = {k: v for k, v in data.items() if v is not None}

    try:
        config = model.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid config {path}: {problems}") from e

    logger.info("Loaded config %s", path)
    return config
