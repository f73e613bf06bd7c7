"""Rule catalog with identifier uniqueness checks."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from synlint.kernel.exceptions import RuleDefinitionError
from synlint.kernel.linting.rules import Rule

if TYPE_CHECKING:
    from synlint.kernel.config.models import LintConfig


class RuleRegistry:
    """Immutable, ordered collection of rules keyed by identifier."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[Rule]) -> None:
        """Build the registry.

        Raises
        ------
        RuleDefinitionError
            If two rules share an identifier
        """
        by_id: dict[str, Rule] = {}
        for rule in rules:
            if rule.rule_id in by_id:
                raise RuleDefinitionError(rule.rule_id, "identifier is already registered")
            by_id[rule.rule_id] = rule
        self._rules = by_id

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._rules)

    def get(self, rule_id: str) -> Rule:
        """Return the rule registered under ``rule_id``.

        Raises
        ------
        KeyError
            If no such rule exists
        """
        try:
            return self._rules[rule_id]
        except KeyError:
            known = ", ".join(sorted(self._rules))
            raise KeyError(f"Unknown rule '{rule_id}'. Known: {known}") from None

    def select(self, config: LintConfig | None = None) -> list[Rule]:
        """Rules that are active under ``config``, in registration order."""
        if config is None:
            return list(self._rules.values())
        return [rule for rule in self._rules.values() if config.is_enabled(rule.rule_id)]
