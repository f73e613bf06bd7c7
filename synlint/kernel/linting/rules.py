"""Rule base class and the single-pass dispatcher.

A rule declares which node kinds it is interested in by returning a
``{NodeKind: callback}`` mapping from :meth:`Rule.callbacks`. The dispatcher
walks the tree once (post-order, left to right) and hands every node of a
registered kind to its callback. Callbacks return findings; they never touch
shared state, so one rule instance can serve any number of concurrent
traversals.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from synlint.kernel.exceptions import RuleDefinitionError
from synlint.kernel.linting.models import (
    Collector,
    Finding,
    LintReport,
    RuleKind,
    Severity,
    Violation,
)
from synlint.kernel.logging import get_logger
from synlint.kernel.syntax.nodes import NodeKind, SyntaxTree
from synlint.kernel.syntax.traversal import walk

if TYPE_CHECKING:
    from synlint.kernel.config.models import LintConfig

logger = get_logger(__name__)

_IDENTIFIER_RE = re.compile(r"^[a-z][a-z0-9]*(_[a-z0-9]+)*$")

Callback = Callable[[Any], Iterable[Finding]]


@dataclass(frozen=True, slots=True)
class Example:
    """A source snippet bundled with a rule.

    Triggering examples mark each expected violation with ``↓`` placed
    immediately before the reported token.
    """

    code: str


@dataclass(frozen=True, slots=True)
class RuleDescription:
    """Static, published metadata of a rule.

    ``identifier`` is referenced from configuration files and must never
    change once released.
    """

    identifier: str
    name: str
    description: str
    kind: RuleKind
    non_triggering_examples: tuple[Example, ...] = ()
    triggering_examples: tuple[Example, ...] = ()

    def __post_init__(self) -> None:
        if not _IDENTIFIER_RE.match(self.identifier):
            raise RuleDefinitionError(self.identifier, "identifier must be snake_case")
        if not self.name:
            raise RuleDefinitionError(self.identifier, "name cannot be empty")
        if not self.description:
            raise RuleDefinitionError(self.identifier, "description cannot be empty")


class Rule(ABC):
    """Base class for every lint rule.

    Subclasses set ``metadata`` and ``default_severity`` and implement
    :meth:`callbacks`.
    """

    metadata: ClassVar[RuleDescription]
    default_severity: ClassVar[Severity] = Severity.WARNING

    @property
    def rule_id(self) -> str:
        return self.metadata.identifier

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def description(self) -> str:
        return self.metadata.description

    @property
    def kind(self) -> RuleKind:
        return self.metadata.kind

    @abstractmethod
    def callbacks(self) -> Mapping[NodeKind, Callback]:
        """Return the node kinds this rule inspects and the callback for each."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rule_id!r})"


def run_rule(
    rule: Rule, tree: SyntaxTree, config: LintConfig | None = None
) -> tuple[Violation, ...]:
    """Run one rule over one tree and return its violations.

    Parameters
    ----------
    rule : Rule
        The rule to evaluate
    tree : SyntaxTree
        Parsed source file
    config : LintConfig | None
        Active configuration; used only to resolve the rule's severity

    Returns
    -------
    tuple[Violation, ...]
        Violations in non-decreasing position order
    """
    severity = (
        config.severity_for(rule.rule_id, rule.default_severity)
        if config is not None
        else rule.default_severity
    )
    callbacks = rule.callbacks()
    collector = Collector()
    visited = 0

    for node in walk(tree.root):
        visited += 1
        callback = callbacks.get(node.kind)
        if callback is None:
            continue
        for finding in callback(node):
            collector.add(
                Violation(
                    rule_id=rule.rule_id,
                    position=finding.position,
                    message=finding.message,
                    severity=severity,
                )
            )

    logger.debug(
        "{rule} visited {visited} nodes, {count} violation(s)",
        rule=rule.rule_id,
        visited=visited,
        count=len(collector),
    )
    return collector.drain()


def run_rules(
    rules: Sequence[Rule],
    tree: SyntaxTree,
    config: LintConfig | None = None,
    path: str = "<source>",
) -> LintReport:
    """Run a list of rules against one tree and return a report."""
    report = LintReport()
    report.extend((), path)
    for rule in rules:
        report.extend(run_rule(rule, tree, config), path)
    return report
