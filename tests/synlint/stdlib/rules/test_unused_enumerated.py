"""Tests for UnusedEnumeratedRule."""

from __future__ import annotations

from synlint.compiler.swift_parser import parse_source
from synlint.kernel.linting.matchers import UNUSED_INDEX_MESSAGE, UNUSED_ITEM_MESSAGE
from synlint.kernel.linting.models import Severity, Violation
from synlint.kernel.linting.rules import run_rule
from synlint.stdlib.rules import UnusedEnumeratedRule


class TestUnusedEnumeratedRule:
    rule = UnusedEnumeratedRule()

    def _run(self, source: str) -> tuple[Violation, ...]:
        return run_rule(self.rule, parse_source(source))

    def test_unused_index(self) -> None:
        (violation,) = self._run("for (_, foo) in bar.enumerated() { }")
        assert violation.position == 5
        assert violation.message == UNUSED_INDEX_MESSAGE
        assert violation.severity is Severity.WARNING

    def test_unused_item(self) -> None:
        (violation,) = self._run("for (idx, _) in bar.enumerated() { }")
        assert violation.position == 10
        assert violation.message == UNUSED_ITEM_MESSAGE

    def test_both_wildcards_single_violation(self) -> None:
        (violation,) = self._run("for (_, _) in bar.enumerated() { }")
        assert violation.message == UNUSED_INDEX_MESSAGE

    def test_both_used(self) -> None:
        assert self._run("for (idx, foo) in bar.enumerated() { }") == ()

    def test_not_enumerated(self) -> None:
        assert self._run("for (_, foo) in zip(a, b) { }") == ()

    def test_nested_loops(self) -> None:
        source = (
            "for (_, row) in rows.enumerated() {\n"
            "    for (col, _) in row.enumerated() { }\n"
            "}"
        )
        violations = self._run(source)
        assert [v.message for v in violations] == [UNUSED_INDEX_MESSAGE, UNUSED_ITEM_MESSAGE]

    def test_inside_closure(self) -> None:
        source = "items.forEach { group in\n    for (_, item) in group.enumerated() { print(item) }\n}"
        assert len(self._run(source)) == 1
