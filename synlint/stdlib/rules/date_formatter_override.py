"""Require the shared ``DateFormatter.whatnotFormatter`` instance."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from synlint.kernel.linting.matchers import (
    match_restricted_construction,
    match_restricted_member,
)
from synlint.kernel.linting.models import Finding, RuleKind, Severity
from synlint.kernel.linting.rules import Callback, Example, Rule, RuleDescription
from synlint.kernel.syntax.nodes import Call, MemberAccess, NodeKind

_TYPE_NAME = "DateFormatter"
_SANCTIONED = "whatnotFormatter"
_MESSAGE = "Please use DateFormatter.whatnotFormatter"


class DateFormatterOverrideRule(Rule):
    default_severity = Severity.ERROR
    metadata = RuleDescription(
        identifier="date_formatter_override",
        name="DateFormatter Override",
        description=_MESSAGE,
        kind=RuleKind.LINT,
        non_triggering_examples=(
            Example("let df = DateFormatter.whatnotFormatter"),
            Example("DateFormatter.whatnotFormatter"),
            Example("let df = DateFormatter(locale: .overriddenOrCurrent)"),
        ),
        triggering_examples=(
            Example("let df = ↓DateFormatter.init()"),
            Example("let df = ↓DateFormatter()"),
            Example("let df = ↓DateFormatter.anotherStaticInit"),
            Example("↓DateFormatter()"),
            Example("↓DateFormatter.init()"),
            Example("↓DateFormatter.anotherStaticInit"),
        ),
    )

    def callbacks(self) -> Mapping[NodeKind, Callback]:
        return {
            NodeKind.MEMBER_ACCESS: self._check_member_access,
            NodeKind.CALL: self._check_call,
        }

    def _check_member_access(self, node: MemberAccess) -> Iterator[Finding]:
        if finding := match_restricted_member(node, _TYPE_NAME, _SANCTIONED, _MESSAGE):
            yield finding

    def _check_call(self, node: Call) -> Iterator[Finding]:
        if finding := match_restricted_construction(node, _TYPE_NAME, _MESSAGE):
            yield finding
