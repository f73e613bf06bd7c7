"""synlint kernel: syntax model, rule engine, configuration models.

User-space code (``synlint.api``, ``synlint.cli``) imports from here;
kernel-space code (``synlint.kernel.*``, ``synlint.stdlib.*``,
``synlint.compiler.*``) may import kernel submodules directly.
"""

from synlint.kernel.config import LintConfig, LoggingConfig, RuleSettings
from synlint.kernel.exceptions import (
    ConfigurationError,
    ParseError,
    RuleDefinitionError,
    SourceReadError,
    SynlintError,
)
from synlint.kernel.linting import (
    Example,
    FileFailure,
    Finding,
    LintReport,
    Rule,
    RuleDescription,
    RuleKind,
    RuleRegistry,
    RuleVerification,
    Severity,
    Violation,
    run_rule,
    run_rules,
    strip_markers,
    verify_rule,
)
from synlint.kernel.logging import configure_logging, get_logger
from synlint.kernel.syntax import NodeKind, SyntaxTree, walk

__all__ = [
    "ConfigurationError",
    "Example",
    "FileFailure",
    "Finding",
    "LintConfig",
    "LintReport",
    "LoggingConfig",
    "NodeKind",
    "ParseError",
    "Rule",
    "RuleDefinitionError",
    "RuleDescription",
    "RuleKind",
    "RuleRegistry",
    "RuleSettings",
    "RuleVerification",
    "Severity",
    "SourceReadError",
    "SynlintError",
    "SyntaxTree",
    "Violation",
    "configure_logging",
    "get_logger",
    "run_rule",
    "run_rules",
    "strip_markers",
    "verify_rule",
    "walk",
]
