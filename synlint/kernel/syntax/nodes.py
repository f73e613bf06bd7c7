"""Syntax tree node types.

The tree is a closed union of frozen dataclasses. Every node carries its
UTF-8 byte span (``position`` is the first significant token, leading
whitespace and comments excluded) and the source text of that span. The
``kind`` class attribute is the discriminant used by the rule dispatcher.

Fields that hold sub-nodes are declared in source order, so
:meth:`SyntaxNode.children` yields children left to right without any
per-class bookkeeping.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, fields
from enum import Enum
from typing import ClassVar


class NodeKind(Enum):
    """Discriminant tag for syntax nodes."""

    SOURCE_FILE = "source_file"
    CODE_BLOCK = "code_block"
    # Declarations
    IMPORT_DECL = "import_decl"
    VARIABLE_DECL = "variable_decl"
    FUNCTION_DECL = "function_decl"
    PARAMETER = "parameter"
    TYPE_DECL = "type_decl"
    ATTRIBUTE = "attribute"
    # Statements
    FOR_LOOP = "for_loop"
    IF_STMT = "if_stmt"
    GUARD_STMT = "guard_stmt"
    WHILE_STMT = "while_stmt"
    RETURN_STMT = "return_stmt"
    SWITCH_STMT = "switch_stmt"
    SWITCH_CASE = "switch_case"
    CASE_CONDITION = "case_condition"
    IF_CONFIG_DECL = "if_config_decl"
    IF_CONFIG_CLAUSE = "if_config_clause"
    # Patterns
    TUPLE_PATTERN = "tuple_pattern"
    WILDCARD_PATTERN = "wildcard_pattern"
    IDENTIFIER_PATTERN = "identifier_pattern"
    VALUE_BINDING_PATTERN = "value_binding_pattern"
    IS_PATTERN = "is_pattern"
    # Types
    TYPE_REFERENCE = "type_reference"
    # Expressions
    IDENTIFIER = "identifier"
    MEMBER_ACCESS = "member_access"
    CALL = "call"
    ARGUMENT = "argument"
    SUBSCRIPT = "subscript"
    POSTFIX = "postfix"
    PREFIX = "prefix"
    BINARY = "binary"
    TERNARY = "ternary"
    TUPLE_EXPR = "tuple_expr"
    ARRAY_EXPR = "array_expr"
    CLOSURE = "closure"
    STRING_LITERAL = "string_literal"
    NUMBER_LITERAL = "number_literal"
    BOOLEAN_LITERAL = "boolean_literal"
    NIL_LITERAL = "nil_literal"


@dataclass(frozen=True, slots=True, kw_only=True)
class SyntaxNode:
    """Common span information shared by every node."""

    kind: ClassVar[NodeKind]

    position: int
    end: int
    text: str

    def children(self) -> Iterator[Node]:
        """Yield direct sub-nodes in source order."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, SyntaxNode):
                yield value  # type: ignore[misc]
            elif isinstance(value, tuple):
                for item in value:
                    if isinstance(item, SyntaxNode):
                        yield item  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class SourceFile(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.SOURCE_FILE

    statements: tuple[Node, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class CodeBlock(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.CODE_BLOCK

    statements: tuple[Node, ...]


# ---------------------------------------------------------------------------
# Types and patterns
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class TypeReference(SyntaxNode):
    """A written type such as ``Event``, ``[String]`` or ``Foo.Bar?``."""

    kind: ClassVar[NodeKind] = NodeKind.TYPE_REFERENCE

    name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class WildcardPattern(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.WILDCARD_PATTERN


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentifierPattern(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.IDENTIFIER_PATTERN

    name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class TuplePattern(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.TUPLE_PATTERN

    elements: tuple[Pattern, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class ValueBindingPattern(SyntaxNode):
    """``let``/``var`` applied to a case pattern: ``case let .some(x)``, ``.some(let x)``."""

    kind: ClassVar[NodeKind] = NodeKind.VALUE_BINDING_PATTERN

    keyword: str
    pattern: Pattern | Expr


@dataclass(frozen=True, slots=True, kw_only=True)
class IsPattern(SyntaxNode):
    """Type-check pattern ``is SomeType`` in a ``case`` label."""

    kind: ClassVar[NodeKind] = NodeKind.IS_PATTERN

    type: TypeReference


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class Identifier(SyntaxNode):
    """A bare name reference (``user``, ``DateFormatter``, ``self``)."""

    kind: ClassVar[NodeKind] = NodeKind.IDENTIFIER

    name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class MemberAccess(SyntaxNode):
    """``base.name`` or ``base?.name``; ``base`` is None for ``.name``.

    ``name_position`` points at the member's leading ``.`` (or the ``?`` of
    ``?.``), which is where member-name violations are reported.
    """

    kind: ClassVar[NodeKind] = NodeKind.MEMBER_ACCESS

    base: Expr | None
    name: str
    name_position: int
    optional: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class Argument(SyntaxNode):
    """A call/subscript/tuple element, optionally labelled (``separator: ":"``).

    Inside a ``case`` pattern the value may itself be a pattern, as in
    ``.some(let x)``.
    """

    kind: ClassVar[NodeKind] = NodeKind.ARGUMENT

    label: str | None
    value: Expr | Pattern


@dataclass(frozen=True, slots=True, kw_only=True)
class Closure(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.CLOSURE

    statements: tuple[Node, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class Call(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.CALL

    callee: Expr
    arguments: tuple[Argument, ...]
    trailing_closures: tuple[Closure, ...] = ()

    @property
    def has_no_arguments(self) -> bool:
        return not self.arguments and not self.trailing_closures


@dataclass(frozen=True, slots=True, kw_only=True)
class Subscript(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.SUBSCRIPT

    base: Expr
    arguments: tuple[Argument, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class Postfix(SyntaxNode):
    """Force unwrap (``x!``) or optional chaining (``x?``)."""

    kind: ClassVar[NodeKind] = NodeKind.POSTFIX

    operand: Expr
    operator: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Prefix(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.PREFIX

    operator: str
    operand: Expr


@dataclass(frozen=True, slots=True, kw_only=True)
class Binary(SyntaxNode):
    """Infix operation; the right side of ``as``/``is`` is a TypeReference."""

    kind: ClassVar[NodeKind] = NodeKind.BINARY

    left: Expr
    operator: str
    right: Expr | TypeReference


@dataclass(frozen=True, slots=True, kw_only=True)
class Ternary(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.TERNARY

    condition: Expr
    if_true: Expr
    if_false: Expr


@dataclass(frozen=True, slots=True, kw_only=True)
class TupleExpr(SyntaxNode):
    """Parenthesized expression list; a single unlabelled element is a paren."""

    kind: ClassVar[NodeKind] = NodeKind.TUPLE_EXPR

    elements: tuple[Argument, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class ArrayExpr(SyntaxNode):
    """Array literal; dictionary literals store keys and values interleaved."""

    kind: ClassVar[NodeKind] = NodeKind.ARRAY_EXPR

    elements: tuple[Expr, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class StringLiteral(SyntaxNode):
    """String literal; ``value`` is the raw content between the quotes."""

    kind: ClassVar[NodeKind] = NodeKind.STRING_LITERAL

    value: str


@dataclass(frozen=True, slots=True, kw_only=True)
class NumberLiteral(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.NUMBER_LITERAL

    value: str


@dataclass(frozen=True, slots=True, kw_only=True)
class BooleanLiteral(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.BOOLEAN_LITERAL

    value: bool


@dataclass(frozen=True, slots=True, kw_only=True)
class NilLiteral(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.NIL_LITERAL


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class Attribute(SyntaxNode):
    """``@Name`` or ``@Name(arguments)``."""

    kind: ClassVar[NodeKind] = NodeKind.ATTRIBUTE

    name: str
    arguments: tuple[Argument, ...] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ImportDecl(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.IMPORT_DECL

    module: str


@dataclass(frozen=True, slots=True, kw_only=True)
class VariableDecl(SyntaxNode):
    """``let``/``var`` binding; also used for ``if let`` optional bindings."""

    kind: ClassVar[NodeKind] = NodeKind.VARIABLE_DECL

    attributes: tuple[Attribute, ...]
    keyword: str
    pattern: Pattern
    type_annotation: TypeReference | None = None
    initializer: Expr | None = None
    accessor: CodeBlock | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Parameter(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.PARAMETER

    label: str | None
    name: str
    type_annotation: TypeReference | None
    default: Expr | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class FunctionDecl(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.FUNCTION_DECL

    attributes: tuple[Attribute, ...]
    name: str
    parameters: tuple[Parameter, ...]
    return_type: TypeReference | None
    body: CodeBlock | None


@dataclass(frozen=True, slots=True, kw_only=True)
class TypeDecl(SyntaxNode):
    """``struct``/``class``/``enum``/``protocol``/``extension``/``actor`` declaration.

    ``inherited`` is None when the declaration has no inheritance clause at
    all, and a (possibly one-element) tuple of the listed names otherwise.
    """

    kind: ClassVar[NodeKind] = NodeKind.TYPE_DECL

    attributes: tuple[Attribute, ...]
    keyword: str
    name: str
    name_position: int
    inherited: tuple[TypeReference, ...] | None
    members: CodeBlock


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class ForLoop(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.FOR_LOOP

    pattern: Pattern | Expr
    iterable: Expr
    body: CodeBlock


@dataclass(frozen=True, slots=True, kw_only=True)
class IfStmt(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.IF_STMT

    conditions: tuple[Node, ...]
    body: CodeBlock
    else_body: CodeBlock | IfStmt | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class GuardStmt(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.GUARD_STMT

    conditions: tuple[Node, ...]
    body: CodeBlock


@dataclass(frozen=True, slots=True, kw_only=True)
class WhileStmt(SyntaxNode):
    kind: ClassVar[NodeKind] = NodeKind.WHILE_STMT

    conditions: tuple[Node, ...]
    body: CodeBlock


@dataclass(frozen=True, slots=True, kw_only=True)
class ReturnStmt(SyntaxNode):
    """``return``/``throw`` with an optional value."""

    kind: ClassVar[NodeKind] = NodeKind.RETURN_STMT

    keyword: str
    value: Expr | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CaseCondition(SyntaxNode):
    """``case <pattern> = <value>`` in an ``if``/``guard``/``while`` condition list."""

    kind: ClassVar[NodeKind] = NodeKind.CASE_CONDITION

    pattern: Pattern | Expr
    value: Expr


@dataclass(frozen=True, slots=True, kw_only=True)
class SwitchCase(SyntaxNode):
    """One ``case ...:`` or ``default:`` label and the statements under it.

    ``patterns`` is empty for ``default``. ``guards`` holds the ``where``
    clauses of the label, in source order.
    """

    kind: ClassVar[NodeKind] = NodeKind.SWITCH_CASE

    attributes: tuple[Attribute, ...]
    patterns: tuple[Pattern | Expr, ...]
    guards: tuple[Expr, ...]
    statements: tuple[Node, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class SwitchStmt(SyntaxNode):
    """``switch subject { ... }``; ``cases`` may contain IfConfigDecl wrappers."""

    kind: ClassVar[NodeKind] = NodeKind.SWITCH_STMT

    subject: Expr
    cases: tuple[Node, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class IfConfigClause(SyntaxNode):
    """One branch of a ``#if`` block; ``condition`` is None for ``#else``."""

    kind: ClassVar[NodeKind] = NodeKind.IF_CONFIG_CLAUSE

    directive: str
    condition: str | None
    statements: tuple[Node, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class IfConfigDecl(SyntaxNode):
    """``#if ... #elseif ... #else ... #endif``.

    Every branch is parsed and visited, whatever its condition.
    """

    kind: ClassVar[NodeKind] = NodeKind.IF_CONFIG_DECL

    clauses: tuple[IfConfigClause, ...]


Pattern = (
    WildcardPattern | IdentifierPattern | TuplePattern | ValueBindingPattern | IsPattern
)

Expr = (
    Identifier
    | MemberAccess
    | Call
    | Subscript
    | Postfix
    | Prefix
    | Binary
    | Ternary
    | TupleExpr
    | ArrayExpr
    | Closure
    | StringLiteral
    | NumberLiteral
    | BooleanLiteral
    | NilLiteral
)

Node = (
    SourceFile
    | CodeBlock
    | TypeReference
    | Pattern
    | Expr
    | Argument
    | Attribute
    | ImportDecl
    | VariableDecl
    | Parameter
    | FunctionDecl
    | TypeDecl
    | ForLoop
    | IfStmt
    | GuardStmt
    | WhileStmt
    | ReturnStmt
    | CaseCondition
    | SwitchCase
    | SwitchStmt
    | IfConfigClause
    | IfConfigDecl
)


@dataclass(frozen=True, slots=True)
class SyntaxTree:
    """A parsed source file: the root node plus the text it was parsed from."""

    source: str
    root: SourceFile

    def line_and_column(self, position: int) -> tuple[int, int]:
        return line_and_column(self.source, position)


def line_and_column(source: str, position: int) -> tuple[int, int]:
    """Convert a UTF-8 byte offset into a 1-based (line, column) pair.

    The column counts bytes, matching how positions are stored.
    """
    prefix = source.encode("utf-8")[:position]
    line = prefix.count(b"\n") + 1
    column = len(prefix) - (prefix.rfind(b"\n") + 1) + 1
    return line, column
