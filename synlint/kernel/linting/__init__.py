"""Rule engine: violation model, dispatcher, matchers and example verification."""

from synlint.kernel.linting.models import (
    Collector,
    FileFailure,
    Finding,
    LintReport,
    RuleKind,
    Severity,
    Violation,
)
from synlint.kernel.linting.registry import RuleRegistry
from synlint.kernel.linting.rules import Example, Rule, RuleDescription, run_rule, run_rules
from synlint.kernel.linting.verification import (
    ExampleResult,
    RuleVerification,
    strip_markers,
    verify_rule,
)

__all__ = [
    "Collector",
    "FileFailure",
    "Example",
    "ExampleResult",
    "Finding",
    "LintReport",
    "Rule",
    "RuleDescription",
    "RuleKind",
    "RuleRegistry",
    "RuleVerification",
    "Severity",
    "Violation",
    "run_rule",
    "run_rules",
    "strip_markers",
    "verify_rule",
]
