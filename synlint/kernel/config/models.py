"""Configuration data models for synlint.

YAML configuration::

    disabled_rules:
      - serializable_event
    rules:
      unused_enumerated:
        severity: error
      locale_override: warning      # shorthand for {severity: warning}
    logging:
      level: DEBUG
      output_file: .build/synlint.log

``pyproject.toml`` uses the same keys under ``[tool.synlint]``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from synlint.kernel.exceptions import ConfigurationError
from synlint.kernel.linting.models import Severity


class LoggingConfig(BaseModel):
    """Logging section of the configuration.

    Attributes
    ----------
    level : str, default="WARNING"
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Also write JSON records to this file
    use_color : bool, default=True
        Colorize structured output on a terminal
    include_timestamp : bool, default=True
        Prefix records with a timestamp
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class RuleSettings(BaseModel):
    """Per-rule overrides."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    severity: Severity | None = Field(default=None, description="Overriding severity")


class LintConfig(BaseModel):
    """Top-level lint configuration.

    Attributes
    ----------
    rules : dict[str, RuleSettings]
        Per-rule overrides keyed by rule identifier
    disabled_rules : tuple[str, ...]
        Rules that never run
    only_rules : tuple[str, ...] | None
        When set, the only rules that run (minus ``disabled_rules``)
    logging : LoggingConfig
        Logging setup applied by the CLI
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    rules: dict[str, RuleSettings] = Field(default_factory=dict)
    disabled_rules: tuple[str, ...] = ()
    only_rules: tuple[str, ...] | None = None
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("rules", mode="before")
    @classmethod
    def _expand_shorthand(cls, value: Any) -> Any:
        """Accept ``rule_id: severity`` as shorthand for ``rule_id: {severity: ...}``."""
        if isinstance(value, dict):
            return {
                key: {"severity": setting} if isinstance(setting, str) else setting
                for key, setting in value.items()
            }
        return value

    @model_validator(mode="after")
    def _check_selection(self) -> LintConfig:
        if self.only_rules is not None:
            overlap = set(self.only_rules) & set(self.disabled_rules)
            if overlap:
                raise ValueError(
                    f"rules both enabled and disabled: {', '.join(sorted(overlap))}"
                )
        return self

    def severity_for(self, rule_id: str, default: Severity) -> Severity:
        """Configured severity of ``rule_id``, falling back to ``default``."""
        settings = self.rules.get(rule_id)
        if settings is None or settings.severity is None:
            return default
        return settings.severity

    def is_enabled(self, rule_id: str) -> bool:
        if rule_id in self.disabled_rules:
            return False
        return self.only_rules is None or rule_id in self.only_rules

    def referenced_rule_ids(self) -> set[str]:
        """Every rule identifier mentioned anywhere in the configuration."""
        referenced = set(self.rules) | set(self.disabled_rules)
        if self.only_rules is not None:
            referenced |= set(self.only_rules)
        return referenced

    def check_rule_ids(self, known: Iterable[str]) -> None:
        """Reject identifiers that do not name a registered rule.

        Raises
        ------
        ConfigurationError
            If any referenced rule identifier is unknown
        """
        unknown = self.referenced_rule_ids() - set(known)
        if unknown:
            raise ConfigurationError("rules", f"unknown rule identifier(s): {', '.join(sorted(unknown))}")
