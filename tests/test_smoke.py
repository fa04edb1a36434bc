"""
Smoke tests — verify the shipped package and sample workspace are healthy.

These tests ensure the basic scaffolding works:
- Package imports successfully and version is set
- The shipped factory template parses
- The stone/ rule file loads and points at existing inputs
"""

from pathlib import Path

from codegen_factory import __version__
from codegen_factory.core.config.defaults import DEFAULT_CONFIG_PATH, DEFAULT_TEMPLATE_PATH
from codegen_factory.core.rules.loader import load_rules
from codegen_factory.core.services.generator import generate, read_template


class TestBootstrap:
    """Verify the project bootstrap is healthy."""

    def test_version_is_set(self):
        """Version string should be defined and non-empty."""
        assert __version__
        assert isinstance(__version__, str)

    def test_default_template_parses(self, repo_root: Path):
        template = read_template(repo_root / DEFAULT_TEMPLATE_PATH)
        assert template.fields == ["Package", "Count", "Material"]

    def test_default_config_generates(self, repo_root: Path, tmp_path: Path):
        result = generate(
            "main",
            repo_root / DEFAULT_TEMPLATE_PATH,
            repo_root / DEFAULT_CONFIG_PATH,
            tmp_path / "out.go",
        )
        assert result.content.startswith("package main\n")
        assert "items are made of" in result.content

    def test_stone_rule_inputs_exist(self, repo_root: Path):
        rules = load_rules(repo_root / "stone" / "BUILD.yml", workspace_root=repo_root)
        assert [r.name for r in rules] == ["go_factory"]
        for path in rules[0].inputs:
            assert (repo_root / path).is_file(), path
        assert rules[0].outputs == ["stone/things.go"]
