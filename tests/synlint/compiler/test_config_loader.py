"""Tests for configuration discovery and loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from synlint.compiler.config_loader import (
    CONFIG_PATH_ENV_VAR,
    ConfigLoader,
    get_default_config,
    load_config,
)
from synlint.kernel.config.models import LintConfig
from synlint.kernel.exceptions import ConfigurationError
from synlint.kernel.linting.models import Severity

KNOWN = {"locale_override", "unused_enumerated", "serializable_event"}


class TestConfigLoaderYaml:
    def test_load_explicit_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "lint.yml"
        config_file.write_text(
            "disabled_rules:\n"
            "  - serializable_event\n"
            "rules:\n"
            "  unused_enumerated:\n"
            "    severity: error\n"
            "  locale_override: warning\n",
            encoding="utf-8",
        )
        config = ConfigLoader(KNOWN).load(config_file)
        assert config.disabled_rules == ("serializable_event",)
        assert config.severity_for("unused_enumerated", Severity.WARNING) is Severity.ERROR
        assert config.severity_for("locale_override", Severity.ERROR) is Severity.WARNING

    def test_synlint_key(self, tmp_path: Path) -> None:
        config_file = tmp_path / "lint.yaml"
        config_file.write_text("synlint:\n  only_rules: [locale_override]\n", encoding="utf-8")
        assert ConfigLoader().load(config_file).only_rules == ("locale_override",)

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yml"
        config_file.write_text("", encoding="utf-8")
        assert ConfigLoader().load(config_file) == LintConfig()

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yml"
        config_file.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="expected a mapping"):
            ConfigLoader().load(config_file)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "broken.yml"
        config_file.write_text("rules: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="invalid YAML"):
            ConfigLoader().load(config_file)

    def test_unknown_severity(self, tmp_path: Path) -> None:
        config_file = tmp_path / "bad.yml"
        config_file.write_text("rules:\n  locale_override: fatal\n", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader(KNOWN).load(config_file)
        assert "rules.locale_override.severity" in exc_info.value.reason

    def test_unknown_rule_id(self, tmp_path: Path) -> None:
        config_file = tmp_path / "unknown.yml"
        config_file.write_text("disabled_rules: [no_such_rule]\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="no_such_rule"):
            ConfigLoader(KNOWN).load(config_file)

    def test_unknown_rule_id_unchecked_without_registry(self, tmp_path: Path) -> None:
        config_file = tmp_path / "unknown.yml"
        config_file.write_text("disabled_rules: [no_such_rule]\n", encoding="utf-8")
        assert ConfigLoader().load(config_file).disabled_rules == ("no_such_rule",)


class TestConfigLoaderToml:
    def test_pyproject_section(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            '[project]\nname = "app"\n\n[tool.synlint]\ndisabled_rules = ["locale_override"]\n',
            encoding="utf-8",
        )
        assert ConfigLoader(KNOWN).load(pyproject).disabled_rules == ("locale_override",)

    def test_pyproject_without_section(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "app"\n', encoding="utf-8")
        assert ConfigLoader().load(pyproject) == LintConfig()

    def test_dedicated_toml_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "synlint.toml"
        config_file.write_text('only_rules = ["unused_enumerated"]\n', encoding="utf-8")
        assert ConfigLoader().load(config_file).only_rules == ("unused_enumerated",)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "synlint.toml"
        config_file.write_text("only_rules = [\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="invalid TOML"):
            ConfigLoader().load(config_file)


class TestDiscovery:
    def test_explicit_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ConfigLoader().load(tmp_path / "missing.yml")

    def test_yaml_in_cwd(self, isolated_cwd: Path) -> None:
        (isolated_cwd / ".synlint.yml").write_text(
            "disabled_rules: [locale_override]\n", encoding="utf-8"
        )
        assert ConfigLoader().load().disabled_rules == ("locale_override",)

    def test_env_var_wins_over_cwd(
        self, isolated_cwd: Path, tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (isolated_cwd / ".synlint.yml").write_text(
            "disabled_rules: [locale_override]\n", encoding="utf-8"
        )
        other = tmp_path_factory.mktemp("elsewhere") / "custom.yml"
        other.write_text("disabled_rules: [unused_enumerated]\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(other))
        assert ConfigLoader().load().disabled_rules == ("unused_enumerated",)

    def test_env_var_pointing_nowhere_falls_through(
        self, isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (isolated_cwd / ".synlint.yaml").write_text("only_rules: [locale_override]\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(isolated_cwd / "nope.yml"))
        assert ConfigLoader().load().only_rules == ("locale_override",)

    def test_pyproject_in_parent(self, isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (isolated_cwd / "pyproject.toml").write_text(
            "[tool.synlint]\ndisabled_rules = [\"serializable_event\"]\n", encoding="utf-8"
        )
        nested = isolated_cwd / "Sources" / "App"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert ConfigLoader().load().disabled_rules == ("serializable_event",)

    def test_pyproject_without_section_is_skipped(
        self, isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (isolated_cwd / "pyproject.toml").write_text(
            "[tool.synlint]\nonly_rules = [\"locale_override\"]\n", encoding="utf-8"
        )
        nested = isolated_cwd / "pkg"
        nested.mkdir()
        (nested / "pyproject.toml").write_text('[project]\nname = "pkg"\n', encoding="utf-8")
        monkeypatch.chdir(nested)
        assert ConfigLoader().load().only_rules == ("locale_override",)

    def test_malformed_pyproject_in_parent(
        self, isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (isolated_cwd / "pyproject.toml").write_text("[tool.synlint\n", encoding="utf-8")
        nested = isolated_cwd / "Sources"
        nested.mkdir()
        monkeypatch.chdir(nested)
        with pytest.raises(ConfigurationError, match="invalid TOML") as exc_info:
            load_config()
        assert exc_info.value.component.endswith("pyproject.toml")


class TestLoadConfig:
    def test_defaults_when_nothing_found(self, isolated_cwd: Path) -> None:
        assert load_config() == get_default_config()

    def test_missing_explicit_path_is_configuration_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.yml")

    def test_known_rule_ids_forwarded(self, tmp_path: Path) -> None:
        config_file = tmp_path / "lint.yml"
        config_file.write_text("rules:\n  mystery: error\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mystery"):
            load_config(config_file, known_rule_ids=KNOWN)

    def test_parse_is_format_agnostic(self) -> None:
        config = ConfigLoader(KNOWN).parse({"only_rules": ["locale_override"]})
        assert config.only_rules == ("locale_override",)
