"""
Tests for the adapter protocol, the generator adapter and the stub generator.
"""

import os
import sys
from pathlib import Path

import pytest

from codegen_factory.adapters.base import ExecutionContext
from codegen_factory.adapters.generator import GeneratorAdapter, _diagnostic
from codegen_factory.adapters.stub import StubGenerator, stub_source
from codegen_factory.core.models.action import Action
from codegen_factory.core.models.rule import FactoryRule


@pytest.fixture
def importable(monkeypatch, repo_root: Path):
    """Make ``python -m codegen_factory`` work from any working directory."""
    existing = os.environ.get("PYTHONPATH")
    value = str(repo_root) if not existing else f"{repo_root}{os.pathsep}{existing}"
    monkeypatch.setenv("PYTHONPATH", value)


def _stone_rule(**kwargs) -> FactoryRule:
    attrs = {
        "name": "go_factory",
        "config": "stone/config/config.json",
        "out": "stone/things.go",
        "package": "stone",
    }
    attrs.update(kwargs)
    return FactoryRule(**attrs)


# ── Generator Adapter Tests ──────────────────────────────────────────


class TestGeneratorAdapterValidate:
    def test_valid(self, workspace: Path):
        ctx = ExecutionContext(action=_stone_rule().to_action(), workspace_root=str(workspace))
        assert GeneratorAdapter().validate(ctx) == (True, "")

    def test_missing_command(self, workspace: Path):
        ctx = ExecutionContext(
            action=Action(id="x", adapter="generator"), workspace_root=str(workspace)
        )
        valid, msg = GeneratorAdapter().validate(ctx)
        assert not valid
        assert "command" in msg

    def test_missing_input(self, workspace: Path):
        action = _stone_rule(config="stone/config/missing.json").to_action()
        ctx = ExecutionContext(action=action, workspace_root=str(workspace))
        valid, msg = GeneratorAdapter().validate(ctx)
        assert not valid
        assert "stone/config/missing.json" in msg

    def test_missing_workspace(self, tmp_path: Path):
        ctx = ExecutionContext(
            action=_stone_rule().to_action(), workspace_root=str(tmp_path / "nope")
        )
        valid, msg = GeneratorAdapter().validate(ctx)
        assert not valid
        assert "Workspace root" in msg


class TestGeneratorAdapterExecute:
    def test_runs_generator(self, workspace: Path, importable):
        ctx = ExecutionContext(action=_stone_rule().to_action(), workspace_root=str(workspace))
        receipt = GeneratorAdapter().execute(ctx)

        assert receipt.ok, receipt.error
        assert receipt.outputs == ["stone/things.go"]
        text = (workspace / "stone" / "things.go").read_text()
        assert text.startswith("package stone\n")
        assert 'return "42 items are made of stone"' in text

    def test_generator_failure_reported(self, workspace: Path, importable):
        (workspace / "stone" / "config" / "config.json").write_text("{broken")
        ctx = ExecutionContext(action=_stone_rule().to_action(), workspace_root=str(workspace))
        receipt = GeneratorAdapter().execute(ctx)

        assert receipt.failed
        assert "Invalid JSON" in receipt.error
        assert receipt.return_code == 1
        assert receipt.command[-2:] == ["-package", "stone"]
        assert receipt.outputs == []
        assert not (workspace / "stone" / "things.go").exists()

    def test_missing_input_fails_without_running(self, workspace: Path):
        action = _stone_rule(
            config="stone/config/missing.json", generator=["/definitely/not/here"]
        ).to_action()
        ctx = ExecutionContext(action=action, workspace_root=str(workspace))
        receipt = GeneratorAdapter().execute(ctx)
        assert receipt.failed
        assert "Missing input" in receipt.error

    def test_unstartable_executable(self, workspace: Path):
        action = _stone_rule(generator=[str(workspace / "no-such-binary")]).to_action()
        ctx = ExecutionContext(action=action, workspace_root=str(workspace))
        receipt = GeneratorAdapter().execute(ctx)
        assert receipt.failed
        assert "Cannot start generator" in receipt.error

    def test_declared_output_not_produced(self, workspace: Path):
        action = _stone_rule(generator=[sys.executable, "-c", "pass", "--"]).to_action()
        ctx = ExecutionContext(action=action, workspace_root=str(workspace))
        receipt = GeneratorAdapter().execute(ctx)
        assert receipt.failed
        assert "did not produce" in receipt.error

    def test_dry_run_skips(self, workspace: Path):
        ctx = ExecutionContext(
            action=_stone_rule().to_action(), workspace_root=str(workspace), dry_run=True
        )
        receipt = GeneratorAdapter().execute(ctx)
        assert receipt.status == "skipped"
        assert "[dry-run]" in receipt.output
        assert "-package stone" in receipt.output
        assert not (workspace / "stone" / "things.go").exists()

    def test_never_raises_on_bad_action(self, workspace: Path):
        ctx = ExecutionContext(
            action=Action(id="x", adapter="generator"), workspace_root=str(workspace)
        )
        receipt = GeneratorAdapter().execute(ctx)
        assert receipt.failed


class TestDiagnostic:
    def test_last_line(self):
        assert _diagnostic("warn\n❌ Cannot read config x\n\n") == "❌ Cannot read config x"

    def test_empty(self):
        assert _diagnostic("") == ""


# ── Stub Generator Tests ─────────────────────────────────────────────


class TestStubGenerator:
    def test_writes_declared_outputs(self, tmp_path: Path):
        stub = StubGenerator()
        ctx = ExecutionContext(action=_stone_rule().to_action(), workspace_root=str(tmp_path))
        receipt = stub.execute(ctx)

        assert receipt.ok
        assert receipt.adapter == "generator"
        assert receipt.outputs == ["stone/things.go"]
        written = (tmp_path / "stone" / "things.go").read_text()
        assert written == stub_source("go_factory", "stone")
        assert written.startswith("package stone\n")
        assert len(stub.calls) == 1

    def test_default_package_when_flag_omitted(self, tmp_path: Path):
        ctx = ExecutionContext(
            action=_stone_rule(package="").to_action(), workspace_root=str(tmp_path)
        )
        StubGenerator().execute(ctx)
        assert (tmp_path / "stone" / "things.go").read_text().startswith("package codegen\n")

    def test_fail(self, tmp_path: Path):
        stub = StubGenerator()
        stub.fail("go_factory", error="Intentional failure")
        ctx = ExecutionContext(action=_stone_rule().to_action(), workspace_root=str(tmp_path))
        receipt = stub.execute(ctx)

        assert receipt.failed
        assert receipt.error == "Intentional failure"
        assert receipt.outputs == []
        assert not (tmp_path / "stone").exists()

    def test_dry_run_writes_nothing(self, tmp_path: Path):
        ctx = ExecutionContext(
            action=_stone_rule().to_action(), workspace_root=str(tmp_path), dry_run=True
        )
        receipt = StubGenerator().execute(ctx)
        assert receipt.status == "skipped"
        assert "-package stone" in receipt.output
        assert not (tmp_path / "stone").exists()

    def test_no_outputs_declared(self, tmp_path: Path):
        ctx = ExecutionContext(
            action=Action(id="x", adapter="generator"), workspace_root=str(tmp_path)
        )
        receipt = StubGenerator().execute(ctx)
        assert receipt.failed
        assert "no output" in receipt.error

    def test_unwritable_output_is_a_failed_receipt(self, tmp_path: Path):
        (tmp_path / "stone").write_text("a file, not a directory")
        ctx = ExecutionContext(action=_stone_rule().to_action(), workspace_root=str(tmp_path))
        receipt = StubGenerator().execute(ctx)
        assert receipt.failed
        assert "Cannot write stub output" in receipt.error

    def test_repr(self):
        assert repr(StubGenerator(adapter_name="g")) == "<StubGenerator name='g'>"
