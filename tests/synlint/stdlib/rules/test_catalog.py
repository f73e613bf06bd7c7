"""Every built-in rule must pass its own examples."""

from __future__ import annotations

import pytest

from synlint.kernel.linting.rules import Rule
from synlint.kernel.linting.verification import verify_rule
from synlint.stdlib.rules import ALL_RULES, default_registry


@pytest.mark.parametrize("rule", ALL_RULES, ids=lambda rule: rule.rule_id)
def test_rule_examples(rule: Rule) -> None:
    verification = verify_rule(rule)
    assert verification.passed, "\n".join(f.describe() for f in verification.failures)


@pytest.mark.parametrize("rule", ALL_RULES, ids=lambda rule: rule.rule_id)
def test_rule_has_examples(rule: Rule) -> None:
    assert rule.metadata.triggering_examples
    assert rule.metadata.non_triggering_examples


def test_identifiers_are_unique() -> None:
    ids = [rule.rule_id for rule in ALL_RULES]
    assert len(ids) == len(set(ids))
    assert len(default_registry()) == len(ALL_RULES)
