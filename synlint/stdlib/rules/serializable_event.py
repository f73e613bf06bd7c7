"""Require ``Event`` and ``SerializableEvent`` to be adopted together."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from synlint.kernel.linting.matchers import match_companion_conformance
from synlint.kernel.linting.models import Finding, RuleKind, Severity
from synlint.kernel.linting.rules import Callback, Example, Rule, RuleDescription
from synlint.kernel.syntax.nodes import NodeKind, TypeDecl

# Enums, protocols and extensions are not checked
_CHECKED_KEYWORDS = frozenset({"struct", "class"})


class SerializableEventRule(Rule):
    default_severity = Severity.WARNING
    metadata = RuleDescription(
        identifier="serializable_event",
        name="Serializable Events",
        description="Ensure that all Events are also SerializableEvents",
        kind=RuleKind.LINT,
        non_triggering_examples=(
            Example("struct Thing {}"),
            Example("struct Thing: SomeOtherProtocol {}"),
            Example("struct Thing: SomeOtherProtocolWithEventInTheName {}"),
            Example("struct MyEvent: Event, SerializableEvent {}"),
            Example("class Thing {}"),
            Example("class Thing: SomeOtherProtocol {}"),
            Example("class Thing: SomeOtherProtocolWithEventInTheName {}"),
            Example("class MyEvent: Event, SerializableEvent {}"),
            Example("extension MyEvent: Event {}"),
        ),
        triggering_examples=(
            Example("struct ↓MyEvent: Event {}"),
            Example("struct ↓MyEvent: SerializableEvent {}"),
            Example("class ↓MyEvent: Event {}"),
            Example("class ↓MyEvent: SerializableEvent {}"),
        ),
    )

    def callbacks(self) -> Mapping[NodeKind, Callback]:
        return {NodeKind.TYPE_DECL: self._check_type_decl}

    def _check_type_decl(self, node: TypeDecl) -> Iterator[Finding]:
        if node.keyword not in _CHECKED_KEYWORDS:
            return
        if finding := match_companion_conformance(node, "Event", "SerializableEvent"):
            yield finding
