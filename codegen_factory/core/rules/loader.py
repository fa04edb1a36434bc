"""
Rule loader — reads BUILD.yml rule declarations into FactoryRule models.

A rule file sits in a package directory next to the files it names:

    # stone/BUILD.yml
    rules:
      - name: go_factory
        config: config/config.json
        package: stone
        out: things.go

``config`` and ``out`` are relative to the rule file's directory.
``template`` is relative to the workspace root, since the default
template lives in the generator's own package. All paths in the
loaded rules are expressed relative to the workspace root, which is
where the generator runs.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

import yaml
from pydantic import ValidationError

from codegen_factory.core.errors import RuleError
from codegen_factory.core.models.rule import FactoryRule

logger = logging.getLogger(__name__)

RULE_FILE = "BUILD.yml"

# Attributes resolved against the rule file's directory
_PACKAGE_RELATIVE = ("config", "out")


def load_rules(path: Path, workspace_root: Path | None = None) -> list[FactoryRule]:
    """Load and validate the rules declared in a rule file.

    Args:
        path: Rule file, or a directory containing ``BUILD.yml``.
        workspace_root: Directory the generator runs in (default: cwd).

    Returns:
        Rules in declaration order.

    Raises:
        RuleError: If the file is missing or invalid, a rule is
            malformed, or two rules share a name.
    """
    if path.is_dir():
        path = path / RULE_FILE
    root = (workspace_root or Path.cwd()).resolve()

    if not path.is_file():
        raise RuleError(f"Rule file not found: {path}")

    logger.debug("Loading rules from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RuleError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise RuleError(f"Invalid YAML in {path}: {e}") from e

    # Either a mapping with a "rules" list or a bare list
    entries = data.get("rules", []) if isinstance(data, dict) else data
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise RuleError(f"Expected a list of rules in {path}, got {type(entries).__name__}")

    package_dir = _package_dir(path, root)
    rules: list[FactoryRule] = []
    seen: set[str] = set()

    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise RuleError(f"Rule #{index + 1} in {path} is not a mapping")

        entry = dict(entry)
        for key in _PACKAGE_RELATIVE:
            if isinstance(entry.get(key), str):
                entry[key] = _join(package_dir, entry[key])

        try:
            rule = FactoryRule.model_validate(entry)
        except ValidationError as e:
            label = entry.get("name", f"#{index + 1}")
            raise RuleError(f"Invalid rule {label} in {path}: {e}") from e

        if rule.name in seen:
            raise RuleError(f"Duplicate rule name '{rule.name}' in {path}")
        seen.add(rule.name)
        rules.append(rule)

    logger.info("Loaded %d rule(s) from %s", len(rules), path)
    return rules


def _package_dir(rule_file: Path, root: Path) -> str:
    """Rule file directory relative to the workspace root, or absolute."""
    directory = rule_file.parent.resolve()
    try:
        rel = directory.relative_to(root)
    except ValueError:
        return directory.as_posix()
    return rel.as_posix()


def _join(package_dir: str, value: str) -> str:
    """Resolve a package-relative path; absolute paths are kept."""
    if PurePosixPath(value).is_absolute() or Path(value).is_absolute():
        return value
    if package_dir in ("", "."):
        return PurePosixPath(value).as_posix()
    return (PurePosixPath(package_dir) / value).as_posix()
