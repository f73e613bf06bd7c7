"""Flag ``enumerated()`` loops that ignore the index or the element."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from synlint.kernel.linting.matchers import match_unused_enumerated
from synlint.kernel.linting.models import Finding, RuleKind, Severity
from synlint.kernel.linting.rules import Callback, Example, Rule, RuleDescription
from synlint.kernel.syntax.nodes import ForLoop, NodeKind


class UnusedEnumeratedRule(Rule):
    """``for (_, item) in xs.enumerated()`` should just iterate ``xs``."""

    default_severity = Severity.WARNING
    metadata = RuleDescription(
        identifier="unused_enumerated",
        name="Unused Enumerated",
        description="When the index or the item is not used, `.enumerated()` can be removed.",
        kind=RuleKind.IDIOMATIC,
        non_triggering_examples=(
            Example("for (idx, foo) in bar.enumerated() { }"),
            Example("for (_, foo) in bar.enumerated().something() { }"),
            Example("for (_, foo) in bar.something() { }"),
            Example("for foo in bar.enumerated() { }"),
            Example("for foo in bar { }"),
            Example("for (idx, _) in bar.enumerated().something() { }"),
            Example("for (idx, _) in bar.something() { }"),
            Example("for idx in bar.indices { }"),
            Example("for (section, (event, _)) in data.enumerated() {}"),
        ),
        triggering_examples=(
            Example("for (↓_, foo) in bar.enumerated() { }"),
            Example("for (↓_, foo) in abc.bar.enumerated() { }"),
            Example("for (↓_, foo) in abc.something().enumerated() { }"),
            Example("for (idx, ↓_) in bar.enumerated() { }"),
        ),
    )

    def callbacks(self) -> Mapping[NodeKind, Callback]:
        return {NodeKind.FOR_LOOP: self._check_for_loop}

    def _check_for_loop(self, node: ForLoop) -> Iterator[Finding]:
        if finding := match_unused_enumerated(node):
            yield finding
