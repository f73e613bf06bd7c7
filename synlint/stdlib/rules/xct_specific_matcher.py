"""Prefer dedicated XCTest assertions over generic comparisons."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from synlint.kernel.linting.matchers import match_specific_assertion
from synlint.kernel.linting.models import Finding, RuleKind, Severity
from synlint.kernel.linting.rules import Callback, Example, Rule, RuleDescription
from synlint.kernel.syntax.nodes import Call, NodeKind


class XCTSpecificMatcherRule(Rule):
    default_severity = Severity.WARNING
    metadata = RuleDescription(
        identifier="xct_specific_matcher",
        name="XCTest Specific Matcher",
        description="Prefer specific XCTest matchers over `XCTAssertEqual` and `XCTAssertNotEqual`.",
        kind=RuleKind.IDIOMATIC,
        non_triggering_examples=(
            Example("XCTAssertFalse(foo)"),
            Example("XCTAssertTrue(foo)"),
            Example("XCTAssertNil(foo)"),
            Example("XCTAssertEqual(a, b)"),
            Example("XCTAssertEqual(a?.b, false)"),
            Example("XCTAssertEqual(a?[0], true)"),
            Example('XCTAssert(foo, "a == b")'),
            Example("XCTAssert(foo(bar == baz))"),
            Example('XCTAssertTrue(foo(bar == baz), "toto")'),
        ),
        triggering_examples=(
            Example("↓XCTAssertEqual(foo, true)"),
            Example("↓XCTAssertEqual(foo, false)"),
            Example("↓XCTAssertEqual(foo, nil)"),
            Example("↓XCTAssertNotEqual(foo, true)"),
            Example("↓XCTAssertNotEqual(foo, nil)"),
            Example("↓XCTAssertEqual(a!.b, false)"),
            Example("↓XCTAssertEqual(a ?? b, false)"),
            Example("↓XCTAssert(foo == bar)"),
            Example("↓XCTAssertTrue(foo != 1)"),
            Example("↓XCTAssertFalse(bar == foo)"),
        ),
    )

    def callbacks(self) -> Mapping[NodeKind, Callback]:
        return {NodeKind.CALL: self._check_call}

    def _check_call(self, node: Call) -> Iterator[Finding]:
        if finding := match_specific_assertion(node):
            yield finding
