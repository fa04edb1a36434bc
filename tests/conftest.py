"""
Shared test fixtures and configuration.
"""

import json
from pathlib import Path

import pytest

THINGS_TEMPLATE = """\
package {{.Package}}

func Things() string {
	return "{{.Count}} items are made of {{.Material}}"
}
"""


@pytest.fixture
def repo_root() -> Path:
    """Return the repository root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a JSON config into tmp_path and return its path."""

    def _write(data, name: str = "config.json") -> Path:
        path = tmp_path / name
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return path

    return _write


@pytest.fixture
def things_template(tmp_path: Path) -> Path:
    """A template equivalent to the shipped factory template."""
    path = tmp_path / "things.tmpl"
    path.write_text(THINGS_TEMPLATE)
    return path


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A workspace laid out like the repository: factory/ plus a stone/ package."""
    root = tmp_path / "ws"
    (root / "factory" / "templates").mkdir(parents=True)
    (root / "factory" / "templates" / "things.tmpl").write_text(THINGS_TEMPLATE)
    (root / "stone" / "config").mkdir(parents=True)
    (root / "stone" / "config" / "config.json").write_text(
        json.dumps({"Material": "stone", "Count": 42})
    )
    (root / "stone" / "BUILD.yml").write_text(
        "rules:\n"
        "  - name: go_factory\n"
        "    config: config/config.json\n"
        "    package: stone\n"
        "    out: things.go\n"
    )
    return root
