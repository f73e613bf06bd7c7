"""Tests for synlint.cli.commands.lint_cmd."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from synlint.cli.main import app
from synlint.kernel.logging import configure_logging


@pytest.fixture
def runner() -> CliRunner:
    """Fixture providing a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def clean_file(swift_file: Callable[..., Path]) -> Path:
    return swift_file("let formatter = DateFormatter.whatnotFormatter\n", "Clean.swift")


@pytest.fixture
def warning_file(swift_file: Callable[..., Path]) -> Path:
    return swift_file("for (_, item) in items.enumerated() {\n    print(item)\n}\n", "Loop.swift")


@pytest.fixture
def error_file(swift_file: Callable[..., Path]) -> Path:
    return swift_file("let a = 1\nlet locale = Locale.current\n", "Locale.swift")


class TestLintCommand:
    def test_clean_file(self, runner: CliRunner, isolated_cwd: Path, clean_file: Path) -> None:
        result = runner.invoke(app, ["lint", str(clean_file)])
        assert result.exit_code == 0
        assert "No issues found" in result.stdout

    def test_warnings_do_not_fail(
        self, runner: CliRunner, isolated_cwd: Path, warning_file: Path
    ) -> None:
        result = runner.invoke(app, ["lint", str(warning_file)])
        assert result.exit_code == 0
        assert "unused_enumerated" in result.stdout

    def test_errors_fail(self, runner: CliRunner, isolated_cwd: Path, error_file: Path) -> None:
        result = runner.invoke(app, ["lint", str(error_file)])
        assert result.exit_code == 1
        assert "locale_override" in result.stdout

    def test_json_output(self, runner: CliRunner, isolated_cwd: Path, error_file: Path) -> None:
        result = runner.invoke(app, ["lint", str(error_file), "--format", "json"])
        assert result.exit_code == 1
        (record,) = json.loads(result.stdout)
        assert record == {
            "path": str(error_file),
            "rule_id": "locale_override",
            "severity": "error",
            "message": "Please use Locale.overriddenOrCurrent",
            "position": len("let a = 1\nlet locale = "),
            "line": 2,
            "column": len("let locale = ") + 1,
        }

    def test_each_file_is_read_once(
        self,
        runner: CliRunner,
        isolated_cwd: Path,
        error_file: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        reads: list[Path] = []
        read_text = Path.read_text

        def counting_read_text(self: Path, *args: Any, **kwargs: Any) -> str:
            reads.append(self)
            return read_text(self, *args, **kwargs)

        monkeypatch.setattr(Path, "read_text", counting_read_text)
        result = runner.invoke(app, ["lint", str(error_file), "-f", "json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)[0]["line"] == 2
        assert reads.count(error_file) == 1

    def test_json_clean(self, runner: CliRunner, isolated_cwd: Path, clean_file: Path) -> None:
        result = runner.invoke(app, ["lint", str(clean_file), "-f", "json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == []

    def test_directory(
        self,
        runner: CliRunner,
        isolated_cwd: Path,
        clean_file: Path,
        warning_file: Path,
        error_file: Path,
    ) -> None:
        result = runner.invoke(app, ["lint", str(clean_file.parent), "--format", "json", "-j", "2"])
        assert result.exit_code == 1
        records = json.loads(result.stdout)
        assert [record["rule_id"] for record in records] == ["locale_override", "unused_enumerated"]

    def test_severity_filter(
        self, runner: CliRunner, isolated_cwd: Path, warning_file: Path
    ) -> None:
        result = runner.invoke(app, ["lint", str(warning_file), "--severity", "error", "-f", "json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == []

    def test_disable(self, runner: CliRunner, isolated_cwd: Path, error_file: Path) -> None:
        result = runner.invoke(
            app, ["lint", str(error_file), "--disable", "locale_override", "-f", "json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == []

    def test_disable_unknown_rule_warns(
        self, runner: CliRunner, isolated_cwd: Path, clean_file: Path
    ) -> None:
        result = runner.invoke(app, ["lint", str(clean_file), "--disable", "no_such_rule"])
        assert result.exit_code == 0
        assert "Unknown rule ID" in result.output

    def test_config_severity_override(
        self, runner: CliRunner, isolated_cwd: Path, error_file: Path
    ) -> None:
        (isolated_cwd / ".synlint.yml").write_text(
            "rules:\n  locale_override: warning\n", encoding="utf-8"
        )
        result = runner.invoke(app, ["lint", str(error_file), "-f", "json"])
        assert result.exit_code == 0
        (record,) = json.loads(result.stdout)
        assert record["severity"] == "warning"

    def test_config_disables_rule(
        self, runner: CliRunner, isolated_cwd: Path, error_file: Path
    ) -> None:
        config = isolated_cwd / "custom.yml"
        config.write_text("disabled_rules: [locale_override]\n", encoding="utf-8")
        result = runner.invoke(app, ["lint", str(error_file), "--config", str(config)])
        assert result.exit_code == 0

    def test_config_logging_output_file(
        self, runner: CliRunner, isolated_cwd: Path, clean_file: Path
    ) -> None:
        (isolated_cwd / ".synlint.yml").write_text(
            "logging:\n  level: INFO\n  format: console\n  output_file: logs/run.jsonl\n"
            "  include_timestamp: false\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["lint", str(clean_file)])
        # Reconfiguring closes the file sink
        configure_logging(level="WARNING", format="console", force_reconfigure=True)
        assert result.exit_code == 0
        log_text = (isolated_cwd / "logs" / "run.jsonl").read_text(encoding="utf-8")
        assert "Linting 1 file(s)" in log_text

    def test_invalid_config(self, runner: CliRunner, isolated_cwd: Path, clean_file: Path) -> None:
        config = isolated_cwd / "bad.yml"
        config.write_text("rules:\n  locale_override: fatal\n", encoding="utf-8")
        result = runner.invoke(app, ["lint", str(clean_file), "-c", str(config)])
        assert result.exit_code == 2
        assert "Configuration Error" in result.output

    def test_malformed_parent_pyproject(
        self,
        runner: CliRunner,
        isolated_cwd: Path,
        clean_file: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (isolated_cwd / "pyproject.toml").write_text("[tool.synlint\n", encoding="utf-8")
        nested = isolated_cwd / "Sources"
        nested.mkdir()
        monkeypatch.chdir(nested)
        result = runner.invoke(app, ["lint", str(clean_file)])
        assert result.exit_code == 2
        assert "invalid TOML" in result.output

    def test_unknown_rule_in_config(
        self, runner: CliRunner, isolated_cwd: Path, clean_file: Path
    ) -> None:
        (isolated_cwd / ".synlint.yml").write_text("disabled_rules: [mystery]\n", encoding="utf-8")
        result = runner.invoke(app, ["lint", str(clean_file)])
        assert result.exit_code == 2

    def test_missing_config_file(
        self, runner: CliRunner, isolated_cwd: Path, clean_file: Path
    ) -> None:
        result = runner.invoke(app, ["lint", str(clean_file), "-c", str(isolated_cwd / "nope.yml")])
        assert result.exit_code == 2

    def test_parse_error(
        self, runner: CliRunner, isolated_cwd: Path, swift_file: Callable[..., Path]
    ) -> None:
        broken = swift_file("let x = )\n", "Broken.swift")
        result = runner.invoke(app, ["lint", str(broken)])
        assert result.exit_code == 2
        assert "Error:" in result.output
        assert "Broken.swift" in result.output

    def test_broken_file_does_not_hide_other_results(
        self,
        runner: CliRunner,
        isolated_cwd: Path,
        error_file: Path,
        swift_file: Callable[..., Path],
    ) -> None:
        swift_file("let x = )\n", "Broken.swift")
        result = runner.invoke(app, ["lint", str(error_file.parent), "-f", "json"])
        assert result.exit_code == 2
        (record,) = json.loads(result.stdout)
        assert record["path"] == str(error_file)
        assert record["rule_id"] == "locale_override"
        assert "Broken.swift" in result.output

    def test_undecodable_file(self, runner: CliRunner, isolated_cwd: Path) -> None:
        binary = isolated_cwd / "Binary.swift"
        binary.write_bytes(b"let x = \xff\n")
        result = runner.invoke(app, ["lint", str(binary)])
        assert result.exit_code == 2
        assert "Cannot read" in result.output
        assert "invalid UTF-8" in result.output

    def test_invalid_severity(self, runner: CliRunner, isolated_cwd: Path, clean_file: Path) -> None:
        result = runner.invoke(app, ["lint", str(clean_file), "--severity", "fatal"])
        assert result.exit_code == 2

    def test_invalid_format(self, runner: CliRunner, isolated_cwd: Path, clean_file: Path) -> None:
        result = runner.invoke(app, ["lint", str(clean_file), "--format", "xml"])
        assert result.exit_code == 2

    def test_missing_path(self, runner: CliRunner, isolated_cwd: Path) -> None:
        result = runner.invoke(app, ["lint", str(isolated_cwd / "Missing.swift")])
        assert result.exit_code == 2


class TestMainApp:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "synlint" in result.stdout

    def test_no_args_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, [])
        assert "lint" in result.output
        assert "verify" in result.output

    def test_verbose_flag(self, runner: CliRunner, isolated_cwd: Path, clean_file: Path) -> None:
        result = runner.invoke(app, ["--log-level", "error", "lint", str(clean_file)])
        assert result.exit_code == 0
