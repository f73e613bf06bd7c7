"""Flag code that decodes, re-encodes or otherwise picks apart backend IDs."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from synlint.kernel.linting.matchers import (
    is_manual_id_decoding,
    is_manual_id_encoding,
    match_attribute_name,
    match_disallowed_member,
    match_disallowed_method_call,
)
from synlint.kernel.linting.models import Finding, RuleKind, Severity
from synlint.kernel.linting.rules import Callback, Example, Rule, RuleDescription
from synlint.kernel.syntax.nodes import Attribute, Call, MemberAccess, NodeKind

_MESSAGE = "Avoid manipulating backend IDs. Use them as opaque values from GQL API"

_ID_MEMBERS = frozenset({"canonicalId", "decodedNumericId", "unsignedIntID"})
_ID_METHODS = frozenset({"decodedIdentifier", "encodedUserId", "encodedIdWithName"})
_ID_PROPERTY_WRAPPER = "EncodedWhatnotID"


class BackendIDManipulationRule(Rule):
    """IDs coming from the GraphQL API are opaque and must not be decoded."""

    default_severity = Severity.ERROR
    metadata = RuleDescription(
        identifier="backend_id_manipulation",
        name="Backend ID Manipulation",
        description=_MESSAGE,
        kind=RuleKind.IDIOMATIC,
        non_triggering_examples=(
            Example("let userID = user.id"),
            Example("if user.id == otherUser.id { }"),
            Example("let directUsage = listing.id"),
            Example("identity.unsignedIntIDForLiveXP"),
            Example("identity.canonicalIDForAnalytics"),
            Example("func canonicalId() -> String { }"),
            Example("Data(image.jpegData()).base64EncodedString()"),
            Example('let split = text.split(separator: ";")'),
            Example("let canonical = data.canonicalForm"),
        ),
        triggering_examples=(
            Example("let decoded = userID↓.canonicalId"),
            Example("let numeric = orderID↓.decodedNumericId"),
            Example("let unsigned = categoryID↓.unsignedIntID"),
            Example("let decoded = listingID↓.decodedIdentifier()"),
            Example("let encoded = userID↓.encodedUserId()"),
            Example('let encoded = id↓.encodedIdWithName("UserNode")'),
            Example("↓@EncodedWhatnotID var userID: String"),
            Example('Data("UserNode:\\(id)".utf8)↓.base64EncodedString()'),
            Example('Data(base64Encoded: idString)↓?.split(separator: ":")'),
        ),
    )

    def callbacks(self) -> Mapping[NodeKind, Callback]:
        return {
            NodeKind.MEMBER_ACCESS: self._check_member_access,
            NodeKind.CALL: self._check_call,
            NodeKind.ATTRIBUTE: self._check_attribute,
        }

    def _check_member_access(self, node: MemberAccess) -> Iterator[Finding]:
        if finding := match_disallowed_member(node, _ID_MEMBERS, _MESSAGE):
            yield finding

    def _check_call(self, node: Call) -> Iterator[Finding]:
        if finding := match_disallowed_method_call(node, _ID_METHODS, _MESSAGE):
            yield finding
            return

        callee = node.callee
        if not isinstance(callee, MemberAccess):
            return
        if callee.name == "base64EncodedString" and is_manual_id_encoding(callee.base):
            yield Finding(callee.name_position, _MESSAGE)
        elif callee.name == "split" and is_manual_id_decoding(node):
            yield Finding(callee.name_position, _MESSAGE)

    def _check_attribute(self, node: Attribute) -> Iterator[Finding]:
        if finding := match_attribute_name(node, _ID_PROPERTY_WRAPPER, _MESSAGE):
            yield finding
