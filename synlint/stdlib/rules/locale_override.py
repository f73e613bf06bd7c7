"""Require ``Locale.overriddenOrCurrent`` instead of the system locale."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from synlint.kernel.linting.matchers import (
    match_restricted_argument,
    match_restricted_construction,
    match_restricted_member,
)
from synlint.kernel.linting.models import Finding, RuleKind, Severity
from synlint.kernel.linting.rules import Callback, Example, Rule, RuleDescription
from synlint.kernel.syntax.nodes import Call, MemberAccess, NodeKind

_TYPE_NAME = "Locale"
_SANCTIONED = "overriddenOrCurrent"
_ARGUMENT_LABEL = "locale"
_DISALLOWED_DEFAULT = "current"
_MESSAGE = "Please use Locale.overriddenOrCurrent"


class LocaleOverrideRule(Rule):
    """Locale lookups must honour the in-app locale override.

    Besides constructing ``Locale`` directly or reading ``Locale.current``,
    passing ``.current`` to any ``locale:`` parameter is flagged at the
    argument.
    """

    default_severity = Severity.ERROR
    metadata = RuleDescription(
        identifier="locale_override",
        name="Locale Override",
        description=_MESSAGE,
        kind=RuleKind.LINT,
        non_triggering_examples=(
            Example("let df = Locale.overriddenOrCurrent"),
            Example("Locale.overriddenOrCurrent"),
            Example("Text(date, locale: .overriddenOrCurrent)"),
            Example('let locale = Locale(identifier: "en_US")'),
        ),
        triggering_examples=(
            Example("let locale = ↓Locale.init()"),
            Example("let locale = ↓Locale()"),
            Example("let locale = ↓Locale.current"),
            Example("↓Locale()"),
            Example("↓Locale.init()"),
            Example("↓Locale.current"),
            Example("Text(date, ↓locale: .current)"),
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
            return
        yield from match_restricted_argument(node, _ARGUMENT_LABEL, _DISALLOWED_DEFAULT, _MESSAGE)
