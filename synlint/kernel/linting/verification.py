"""Self-verification of rules against their bundled examples.

Every non-triggering example must produce no violations. Every triggering
example must produce exactly one violation per ``↓`` marker, at the byte
offset the marker occupied once all markers are removed, in marker order.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from synlint.kernel.linting.rules import Example, Rule, run_rule
from synlint.kernel.syntax.nodes import SyntaxTree

VIOLATION_MARKER = "↓"

Parser = Callable[[str], SyntaxTree]


def strip_markers(code: str) -> tuple[str, tuple[int, ...]]:
    """Remove violation markers from ``code``.

    Returns
    -------
    tuple[str, tuple[int, ...]]
        The clean source and the UTF-8 byte offset of each marker in it
    """
    first, *rest = code.split(VIOLATION_MARKER)
    pieces = [first]
    offset = len(first.encode("utf-8"))
    offsets: list[int] = []
    for piece in rest:
        offsets.append(offset)
        pieces.append(piece)
        offset += len(piece.encode("utf-8"))
    return "".join(pieces), tuple(offsets)


@dataclass(frozen=True, slots=True)
class ExampleResult:
    """Outcome of running a rule against one example."""

    example: Example
    triggering: bool
    expected: tuple[int, ...]
    actual: tuple[int, ...]

    @property
    def passed(self) -> bool:
        return self.expected == self.actual

    def describe(self) -> str:
        label = "triggering" if self.triggering else "non-triggering"
        return (
            f"{label} example {self.example.code!r}: "
            f"expected violations at {list(self.expected)}, got {list(self.actual)}"
        )


@dataclass(frozen=True, slots=True)
class RuleVerification:
    """Outcome of verifying every example of one rule."""

    rule_id: str
    results: tuple[ExampleResult, ...]

    @property
    def failures(self) -> tuple[ExampleResult, ...]:
        return tuple(result for result in self.results if not result.passed)

    @property
    def passed(self) -> bool:
        return not self.failures


def _default_parser() -> Parser:
    from synlint.compiler.swift_parser import parse_source

    return parse_source


def verify_example(
    rule: Rule, example: Example, *, triggering: bool, parse: Parser | None = None
) -> ExampleResult:
    """Run ``rule`` over one example and compare against its markers."""
    parse = parse or _default_parser()
    source, markers = strip_markers(example.code)
    violations = run_rule(rule, parse(source))
    return ExampleResult(
        example=example,
        triggering=triggering,
        expected=markers if triggering else (),
        actual=tuple(violation.position for violation in violations),
    )


def verify_rule(rule: Rule, parse: Parser | None = None) -> RuleVerification:
    """Verify all non-triggering and triggering examples of ``rule``."""
    parse = parse or _default_parser()
    results = [
        verify_example(rule, example, triggering=False, parse=parse)
        for example in rule.metadata.non_triggering_examples
    ]
    results.extend(
        verify_example(rule, example, triggering=True, parse=parse)
        for example in rule.metadata.triggering_examples
    )
    return RuleVerification(rule_id=rule.rule_id, results=tuple(results))
