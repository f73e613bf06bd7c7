"""Tests for the DateFormatter and Locale override rules."""

from __future__ import annotations

import pytest

from synlint.compiler.swift_parser import parse_source
from synlint.kernel.linting.models import Severity
from synlint.kernel.linting.rules import Rule, run_rule
from synlint.stdlib.rules import DateFormatterOverrideRule, LocaleOverrideRule


def _positions(rule: Rule, source: str) -> list[int]:
    return [violation.position for violation in run_rule(rule, parse_source(source))]


class TestDateFormatterOverrideRule:
    rule = DateFormatterOverrideRule()

    def test_construction(self) -> None:
        (violation,) = run_rule(self.rule, parse_source("let df = DateFormatter()"))
        assert violation.position == len("let df = ")
        assert violation.message == "Please use DateFormatter.whatnotFormatter"
        assert violation.severity is Severity.ERROR

    def test_explicit_init_reported_once(self) -> None:
        assert _positions(self.rule, "let df = DateFormatter.init()") == [len("let df = ")]

    def test_other_static_member(self) -> None:
        assert _positions(self.rule, "DateFormatter.anotherStaticInit") == [0]

    def test_sanctioned_accessor(self) -> None:
        assert _positions(self.rule, "let df = DateFormatter.whatnotFormatter") == []

    def test_members_of_the_shared_instance(self) -> None:
        assert _positions(self.rule, "DateFormatter.whatnotFormatter.string(from: date)") == []

    def test_construction_with_arguments(self) -> None:
        assert _positions(self.rule, "let df = DateFormatter(locale: .overriddenOrCurrent)") == []

    def test_other_formatters(self) -> None:
        assert _positions(self.rule, "let nf = NumberFormatter()") == []


class TestLocaleOverrideRule:
    rule = LocaleOverrideRule()

    @pytest.mark.parametrize(
        "source",
        ["let locale = Locale()", "let locale = Locale.init()", "let locale = Locale.current"],
    )
    def test_flagged_at_type(self, source: str) -> None:
        assert _positions(self.rule, source) == [len("let locale = ")]

    def test_sanctioned_accessor(self) -> None:
        assert _positions(self.rule, "let locale = Locale.overriddenOrCurrent") == []

    def test_current_argument(self) -> None:
        assert _positions(self.rule, "Text(date, locale: .current)") == [len("Text(date, ")]

    def test_explicit_current_argument(self) -> None:
        source = "formatter.string(from: date, locale: Locale.current)"
        argument = len("formatter.string(from: date, ")
        member = len("formatter.string(from: date, locale: ")
        assert _positions(self.rule, source) == [argument, member]

    def test_overridden_argument(self) -> None:
        assert _positions(self.rule, "Text(date, locale: .overriddenOrCurrent)") == []

    def test_identifier_construction(self) -> None:
        assert _positions(self.rule, 'let locale = Locale(identifier: "en_US")') == []

    def test_lowercase_property(self) -> None:
        assert _positions(self.rule, "let l = settings.locale.current") == []

    def test_inside_switch_case(self) -> None:
        source = "switch x {\ncase .a:\n    let l = Locale.current\ndefault: break\n}"
        assert _positions(self.rule, source) == [source.index("Locale")]

    def test_inside_every_compilation_branch(self) -> None:
        source = "#if DEBUG\nlet a = Locale.current\n#else\nlet b = Locale()\n#endif"
        assert _positions(self.rule, source) == [
            source.index("Locale.current"),
            source.index("Locale()"),
        ]

    def test_inside_case_condition(self) -> None:
        source = "if case .some(let l) = Locale.current.region { }"
        assert _positions(self.rule, source) == [source.index("Locale")]
