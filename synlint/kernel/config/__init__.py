"""Configuration models for synlint."""

from synlint.kernel.config.models import LintConfig, LoggingConfig, RuleSettings

__all__ = ["LintConfig", "LoggingConfig", "RuleSettings"]
