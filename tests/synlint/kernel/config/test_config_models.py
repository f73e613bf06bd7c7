"""Tests for the configuration models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from synlint.kernel.config.models import LintConfig, LoggingConfig
from synlint.kernel.exceptions import ConfigurationError
from synlint.kernel.linting.models import Severity


class TestLintConfig:
    def test_defaults(self) -> None:
        config = LintConfig()
        assert config.rules == {}
        assert config.disabled_rules == ()
        assert config.only_rules is None
        assert config.logging == LoggingConfig()

    def test_severity_shorthand(self) -> None:
        config = LintConfig.model_validate({"rules": {"locale_override": "warning"}})
        assert config.severity_for("locale_override", Severity.ERROR) is Severity.WARNING

    def test_severity_mapping(self) -> None:
        config = LintConfig.model_validate({"rules": {"unused_enumerated": {"severity": "error"}}})
        assert config.severity_for("unused_enumerated", Severity.WARNING) is Severity.ERROR

    def test_severity_falls_back_to_default(self) -> None:
        config = LintConfig.model_validate({"rules": {"unused_enumerated": {}}})
        assert config.severity_for("unused_enumerated", Severity.WARNING) is Severity.WARNING
        assert config.severity_for("locale_override", Severity.ERROR) is Severity.ERROR

    def test_unknown_severity_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LintConfig.model_validate({"rules": {"locale_override": "fatal"}})

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LintConfig.model_validate({"excluded": ["Pods"]})

    def test_only_and_disabled_overlap_rejected(self) -> None:
        with pytest.raises(ValidationError, match="both enabled and disabled"):
            LintConfig(only_rules=("locale_override",), disabled_rules=("locale_override",))

    def test_frozen(self) -> None:
        config = LintConfig()
        with pytest.raises(ValidationError):
            config.disabled_rules = ("locale_override",)  # type: ignore[misc]

    def test_is_enabled(self) -> None:
        config = LintConfig(disabled_rules=("serializable_event",))
        assert config.is_enabled("locale_override")
        assert not config.is_enabled("serializable_event")

    def test_only_rules(self) -> None:
        config = LintConfig(only_rules=("locale_override",))
        assert config.is_enabled("locale_override")
        assert not config.is_enabled("unused_enumerated")

    def test_check_rule_ids(self) -> None:
        config = LintConfig.model_validate(
            {"rules": {"not_a_rule": "error"}, "disabled_rules": ["locale_override"]}
        )
        assert config.referenced_rule_ids() == {"not_a_rule", "locale_override"}
        with pytest.raises(ConfigurationError, match="not_a_rule"):
            config.check_rule_ids({"locale_override"})

    def test_check_rule_ids_passes(self) -> None:
        LintConfig(only_rules=("locale_override",)).check_rule_ids({"locale_override"})


class TestLoggingConfig:
    def test_level_is_case_insensitive(self) -> None:
        assert LoggingConfig.model_validate({"level": "debug"}).level == "DEBUG"

    def test_invalid_format(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig.model_validate({"format": "xml"})

    def test_output_options(self) -> None:
        config = LoggingConfig.model_validate(
            {"output_file": "logs/synlint.jsonl", "use_color": False, "include_timestamp": False}
        )
        assert config.output_file == "logs/synlint.jsonl"
        assert not config.use_color
        assert not config.include_timestamp

    def test_output_defaults(self) -> None:
        config = LoggingConfig()
        assert config.output_file is None
        assert config.use_color
        assert config.include_timestamp
