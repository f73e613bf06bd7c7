"""Pattern matchers shared by the rule catalog.

Every matcher is a pure function over one node (occasionally peeking at its
direct children). A matcher returns ``None`` (or yields nothing) when the
node does not have the shape it looks for; that is the normal outcome, not
an error.
"""

from __future__ import annotations

from collections.abc import Collection, Iterator

from synlint.kernel.linting.models import Finding
from synlint.kernel.syntax.nodes import (
    Attribute,
    Binary,
    Call,
    Expr,
    ForLoop,
    Identifier,
    MemberAccess,
    Node,
    Postfix,
    TuplePattern,
    TypeDecl,
    WildcardPattern,
)
from synlint.kernel.syntax.traversal import walk

UNUSED_INDEX_MESSAGE = "When the index is not used, `.enumerated()` can be removed"
UNUSED_ITEM_MESSAGE = (
    "When the item is not used, `.indices` should be used instead of `.enumerated()`"
)

# Substrings that identify ``Data("SomeNode:\(id)".utf8)``
_MANUAL_ENCODING_MARKERS = ("Data(", "Node:", ".utf8")
# Renderings of a ":" separator argument
_COLON_SEPARATORS = ('":"|', '":"')


# ---------------------------------------------------------------------------
# Disallowed members and attributes
# ---------------------------------------------------------------------------


def match_disallowed_member(
    node: MemberAccess, names: Collection[str], message: str
) -> Finding | None:
    """Flag ``x.name`` for any ``name`` in ``names``, with no exceptions."""
    if node.name in names:
        return Finding(node.name_position, message)
    return None


def match_disallowed_method_call(
    node: Call, names: Collection[str], message: str
) -> Finding | None:
    """Flag ``x.name(...)`` for any ``name`` in ``names``."""
    callee = node.callee
    if isinstance(callee, MemberAccess) and callee.name in names:
        return Finding(callee.name_position, message)
    return None


def is_manual_id_encoding(base: Expr | None) -> bool:
    """Whether ``base`` renders like ``Data("UserNode:\\(id)".utf8)``.

    All three telltale substrings must be present in the receiver's text.
    """
    if base is None:
        return False
    return all(marker in base.text for marker in _MANUAL_ENCODING_MARKERS)


def is_manual_id_decoding(node: Call) -> bool:
    """Whether ``node`` looks like ``decoded.split(separator: ":")``."""
    callee = node.callee
    if not isinstance(callee, MemberAccess) or callee.name != "split":
        return False
    if not node.arguments or node.arguments[0].label != "separator":
        return False
    argument_text = node.arguments[0].value.text
    return any(separator in argument_text for separator in _COLON_SEPARATORS)


def match_attribute_name(node: Attribute, name: str, message: str) -> Finding | None:
    """Flag ``@name`` regardless of its arguments."""
    if node.name == name:
        return Finding(node.position, message)
    return None


# ---------------------------------------------------------------------------
# Unused enumerated()
# ---------------------------------------------------------------------------


def is_enumerated_call(expr: Expr) -> bool:
    """``base.enumerated()`` with no arguments and no trailing closure."""
    match expr:
        case Call(callee=MemberAccess(base=base, name="enumerated")) if base is not None:
            return expr.has_no_arguments
        case _:
            return False


def match_unused_enumerated(node: ForLoop) -> Finding | None:
    """Flag a wildcard index or item in ``for (a, b) in x.enumerated()``.

    When both elements are wildcards only the index is reported.
    """
    pattern = node.pattern
    if not isinstance(pattern, TuplePattern) or len(pattern.elements) != 2:
        return None
    if not is_enumerated_call(node.iterable):
        return None

    first, second = pattern.elements
    if isinstance(first, WildcardPattern):
        return Finding(first.position, UNUSED_INDEX_MESSAGE)
    if isinstance(second, WildcardPattern):
        return Finding(second.position, UNUSED_ITEM_MESSAGE)
    return None


# ---------------------------------------------------------------------------
# Restricted type overrides
# ---------------------------------------------------------------------------


def _is_type_reference(expr: Expr | None, type_name: str) -> bool:
    return isinstance(expr, Identifier) and expr.name == type_name


def match_restricted_construction(node: Call, type_name: str, message: str) -> Finding | None:
    """Flag ``TypeName()``. Exact name match, so aliases and shadowing also match."""
    if _is_type_reference(node.callee, type_name) and not node.arguments:
        return Finding(node.position, message)
    return None


def match_restricted_member(
    node: MemberAccess, type_name: str, sanctioned: str, message: str
) -> Finding | None:
    """Flag ``TypeName.member`` for every member except the sanctioned accessor.

    ``TypeName.init()`` is caught here too, since ``init`` is just another
    member name.
    """
    if _is_type_reference(node.base, type_name) and node.name != sanctioned:
        return Finding(node.position, message)
    return None


def match_restricted_argument(
    node: Call, label: str, disallowed_member: str, message: str
) -> Iterator[Finding]:
    """Flag ``f(label: .disallowed)`` / ``f(label: X.disallowed)`` arguments."""
    for argument in node.arguments:
        value = argument.value
        if (
            argument.label == label
            and isinstance(value, MemberAccess)
            and value.name == disallowed_member
        ):
            yield Finding(argument.position, message)


# ---------------------------------------------------------------------------
# Required companion conformance
# ---------------------------------------------------------------------------


def match_companion_conformance(node: TypeDecl, first: str, second: str) -> Finding | None:
    """Require ``first`` and ``second`` to be declared together.

    Only the names written in the declaration's own inheritance clause count;
    conformances inherited from elsewhere are not resolved.
    """
    if node.inherited is None:
        return None

    adopted = {reference.name for reference in node.inherited}
    if first in adopted and second not in adopted:
        return Finding(
            node.name_position,
            f"'{node.name}' adopts '{first}', so it must also adopt '{second}'",
        )
    if second in adopted and first not in adopted:
        return Finding(
            node.name_position,
            f"'{node.name}' adopts '{second}', so it must also adopt '{first}'",
        )
    return None


# ---------------------------------------------------------------------------
# XCTest specific matchers
# ---------------------------------------------------------------------------

_LITERAL_ASSERTIONS: dict[str, dict[str, str]] = {
    "XCTAssertEqual": {
        "true": "XCTAssertTrue",
        "false": "XCTAssertFalse",
        "nil": "XCTAssertNil",
    },
    "XCTAssertNotEqual": {
        "true": "XCTAssertFalse",
        "false": "XCTAssertTrue",
        "nil": "XCTAssertNotNil",
    },
}

_COMPARISON_ASSERTIONS: dict[str, dict[str, str]] = {
    "XCTAssert": {"==": "XCTAssertEqual", "!=": "XCTAssertNotEqual"},
    "XCTAssertTrue": {"==": "XCTAssertEqual", "!=": "XCTAssertNotEqual"},
    "XCTAssertFalse": {"==": "XCTAssertNotEqual", "!=": "XCTAssertEqual"},
}


def _has_optional_chain(expr: Node) -> bool:
    """Whether ``expr`` contains ``a?.b`` or ``a?[i]`` anywhere inside it."""
    return any(
        (isinstance(node, MemberAccess) and node.optional)
        or (isinstance(node, Postfix) and node.operator == "?")
        for node in walk(expr)
    )


def _specific_matcher_message(suggestion: str) -> str:
    return f"Prefer the specific matcher '{suggestion}' instead"


def match_specific_assertion(node: Call) -> Finding | None:
    """Suggest a dedicated XCTest assertion over a generic one.

    ``XCTAssertEqual(x, true)`` becomes ``XCTAssertTrue(x)`` and
    ``XCTAssert(a == b)`` becomes ``XCTAssertEqual(a, b)``. Comparing an
    optional chain against ``true``/``false`` is left alone because the two
    forms are not equivalent for ``nil``.
    """
    if not isinstance(node.callee, Identifier):
        return None
    assertion = node.callee.name

    if (literals := _LITERAL_ASSERTIONS.get(assertion)) is not None:
        operands = node.arguments[:2]
        if len(operands) < 2 or any(argument.label for argument in operands):
            return None
        for argument in operands:
            text = argument.value.text
            suggestion = literals.get(text)
            if suggestion is None:
                continue
            if text in ("true", "false") and any(
                _has_optional_chain(operand.value) for operand in operands
            ):
                return None
            return Finding(node.position, _specific_matcher_message(suggestion))
        return None

    if (comparisons := _COMPARISON_ASSERTIONS.get(assertion)) is not None:
        if not node.arguments or node.arguments[0].label is not None:
            return None
        condition = node.arguments[0].value
        if isinstance(condition, Binary) and condition.operator in comparisons:
            return Finding(node.position, _specific_matcher_message(comparisons[condition.operator]))
    return None
