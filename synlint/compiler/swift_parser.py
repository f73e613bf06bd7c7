"""Recursive-descent parser for the Swift subset the rule catalog inspects.

Produces the node types from :mod:`synlint.kernel.syntax.nodes`. Declarations,
control flow (including ``switch`` cases and ``if case`` conditions), every
branch of ``#if`` blocks and the full expression grammar are modelled.
Constructs no rule looks at (enum cases, generic clauses, declaration
``where`` clauses) are skipped over as balanced token runs.

Examples
--------
Basic usage::

    from synlint.compiler.swift_parser import parse_source

    tree = parse_source("for (_, item) in items.enumerated() {}")
    tree.root.statements[0]  # ForLoop(...)
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from synlint.compiler.swift_lexer import SwiftLexer, Token, TokenType
from synlint.kernel.exceptions import ParseError
from synlint.kernel.logging import get_logger
from synlint.kernel.syntax.nodes import (
    Argument,
    ArrayExpr,
    Attribute,
    Binary,
    BooleanLiteral,
    Call,
    CaseCondition,
    Closure,
    CodeBlock,
    Expr,
    ForLoop,
    FunctionDecl,
    GuardStmt,
    Identifier,
    IdentifierPattern,
    IfConfigClause,
    IfConfigDecl,
    IfStmt,
    ImportDecl,
    IsPattern,
    MemberAccess,
    NilLiteral,
    Node,
    NumberLiteral,
    Parameter,
    Pattern,
    Postfix,
    Prefix,
    ReturnStmt,
    SourceFile,
    StringLiteral,
    Subscript,
    SwitchCase,
    SwitchStmt,
    SyntaxTree,
    Ternary,
    TupleExpr,
    TuplePattern,
    TypeDecl,
    TypeReference,
    ValueBindingPattern,
    VariableDecl,
    WhileStmt,
    WildcardPattern,
)

__all__ = ["SwiftParser", "parse_file", "parse_source"]

logger = get_logger(__name__)

# Binary operator precedence (higher binds tighter)
_ASSIGNMENT = 1
_TERNARY = 2
_CASTING = 7
_DEFAULT_PRECEDENCE = 9

_PRECEDENCE: dict[str, int] = {
    "=": _ASSIGNMENT,
    "+=": _ASSIGNMENT,
    "-=": _ASSIGNMENT,
    "*=": _ASSIGNMENT,
    "/=": _ASSIGNMENT,
    "%=": _ASSIGNMENT,
    "&=": _ASSIGNMENT,
    "|=": _ASSIGNMENT,
    "^=": _ASSIGNMENT,
    "?": _TERNARY,
    "||": 3,
    "&&": 4,
    "==": 5,
    "!=": 5,
    "===": 5,
    "!==": 5,
    "<": 5,
    "<=": 5,
    ">": 5,
    ">=": 5,
    "~=": 5,
    "??": 6,
    "..<": 8,
    "...": 8,
    "+": 9,
    "-": 9,
    "|": 9,
    "^": 9,
    "&+": 9,
    "&-": 9,
    "*": 10,
    "/": 10,
    "%": 10,
    "&": 10,
    "&*": 10,
    "<<": 11,
    ">>": 11,
}

_RIGHT_ASSOCIATIVE = frozenset({"=", "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "??"})

_MODIFIERS = frozenset({
    "private",
    "fileprivate",
    "internal",
    "public",
    "open",
    "static",
    "final",
    "override",
    "lazy",
    "weak",
    "unowned",
    "mutating",
    "nonmutating",
    "dynamic",
    "optional",
    "required",
    "convenience",
    "indirect",
    "nonisolated",
})

_DECLARATION_KEYWORDS = frozenset({
    "let",
    "var",
    "func",
    "init",
    "deinit",
    "struct",
    "class",
    "enum",
    "protocol",
    "extension",
    "typealias",
    "subscript",
    "case",
    "import",
})

_TYPE_SPECIFIERS = frozenset({"inout", "some", "any", "borrowing", "consuming", "sending"})

_EFFECTS = frozenset({"async", "throws", "rethrows"})

_DIRECTIVE_BRANCHES = frozenset({"#elseif", "#else", "#endif"})

# `#available(iOS 15, *)` uses platform syntax rather than expressions
_AVAILABILITY_CONDITIONS = frozenset({"#available", "#unavailable"})


class SwiftParser:
    """Parser over the token stream of one source file."""

    def __init__(self, source: str) -> None:
        self.source = source
        self._encoded = source.encode("utf-8")
        self.tokens = SwiftLexer(source).tokenize()
        self.index = 0
        # Nesting depth of `case` patterns, where `let x` may appear inside expressions
        self._pattern_depth = 0

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def peek(self, offset: int = 1) -> Token:
        return self.tokens[min(self.index + offset, len(self.tokens) - 1)]

    def advance(self) -> Token:
        token = self.current
        if token.type is not TokenType.EOF:
            self.index += 1
        return token

    def check(self, token_type: TokenType, value: str | None = None) -> bool:
        token = self.current
        return token.type is token_type and (value is None or token.value == value)

    def accept(self, token_type: TokenType, value: str | None = None) -> Token | None:
        if self.check(token_type, value):
            return self.advance()
        return None

    def expect(self, token_type: TokenType, value: str | None = None) -> Token:
        if self.check(token_type, value):
            return self.advance()
        wanted = value or token_type.name.lower()
        raise self._error(f"expected {wanted!r}")

    def _error(self, message: str) -> ParseError:
        token = self.current
        found = "end of file" if token.type is TokenType.EOF else repr(token.value)
        return ParseError(f"{message}, found {found}", token.start)

    def _span(self, start: int) -> dict[str, Any]:
        """Span keyword arguments from ``start`` to the last consumed token."""
        end = self.tokens[self.index - 1].end if self.index > 0 else start
        end = max(end, start)
        return {
            "position": start,
            "end": end,
            "text": self._encoded[start:end].decode("utf-8"),
        }

    def _is_name(self, token: Token) -> bool:
        return token.type in (TokenType.IDENTIFIER, TokenType.KEYWORD)

    def _at_directive_branch(self) -> bool:
        """Whether the current token is ``#elseif``, ``#else`` or ``#endif``."""
        token = self.current
        return token.type is TokenType.IDENTIFIER and token.value in _DIRECTIVE_BRANCHES

    def _skip_balanced(self, opener: TokenType, closer: TokenType) -> None:
        """Skip from the current ``opener`` up to and including its ``closer``."""
        self.expect(opener)
        depth = 1
        while depth:
            token = self.advance()
            if token.type is TokenType.EOF:
                raise self._error(f"unbalanced {opener.name.lower()}")
            if token.type is opener:
                depth += 1
            elif token.type is closer:
                depth -= 1

    def _skip_angle_brackets(self) -> None:
        """Skip a generic clause such as ``<T: Equatable>`` if one starts here."""
        token = self.current
        if token.type is not TokenType.OPERATOR or not token.value.startswith("<"):
            return
        if token.space_before:
            return
        depth = 0
        while True:
            token = self.advance()
            if token.type is TokenType.EOF:
                raise self._error("unterminated generic clause")
            if token.type is TokenType.OPERATOR:
                depth += token.value.count("<") - token.value.count(">")
                if depth <= 0:
                    return

    def _skip_until(self, token_type: TokenType) -> None:
        while not self.check(token_type):
            if self.check(TokenType.EOF):
                raise self._error(f"expected {token_type.name.lower()!r}")
            self.advance()

    def _skip_to_statement_end(self) -> None:
        """Skip the rest of a statement whose contents are not modelled."""
        depth = 0
        self.advance()
        while True:
            token = self.current
            if token.type is TokenType.EOF:
                return
            if depth == 0 and (
                token.newline_before or token.type in (TokenType.SEMICOLON, TokenType.RBRACE)
            ):
                return
            if token.type in (TokenType.LPAREN, TokenType.LBRACKET, TokenType.LBRACE):
                depth += 1
            elif token.type in (TokenType.RPAREN, TokenType.RBRACKET, TokenType.RBRACE):
                depth -= 1
            self.advance()

    # ------------------------------------------------------------------
    # File and statements
    # ------------------------------------------------------------------

    def parse(self) -> SyntaxTree:
        """Parse the whole source into a :class:`SyntaxTree`.

        Raises
        ------
        ParseError
            If the source is not valid within the supported grammar
        """
        start = self.current.start
        statements = self._parse_statements(TokenType.EOF)
        if not self.check(TokenType.EOF):
            raise self._error("unexpected compilation directive")
        root = SourceFile(statements=statements, **self._span(start))
        return SyntaxTree(source=self.source, root=root)

    def _parse_statements(self, terminator: TokenType) -> tuple[Node, ...]:
        """Parse statements up to ``terminator`` or the next ``#if`` branch directive."""
        statements: list[Node] = []
        while not self.check(terminator) and not self._at_directive_branch():
            if self.check(TokenType.EOF):
                raise self._error("unexpected end of file")
            if self.accept(TokenType.SEMICOLON):
                continue
            if self.check(TokenType.IDENTIFIER, "#if"):
                statements.append(self._parse_if_config(lambda: self._parse_statements(terminator)))
            else:
                statements.extend(self._parse_statement())
            self._end_statement(terminator)
        return tuple(statements)

    def _end_statement(self, terminator: TokenType) -> None:
        token = self.current
        if token.newline_before or token.type in (TokenType.SEMICOLON, terminator, TokenType.EOF):
            return
        raise self._error("expected end of statement")

    def _parse_block(self) -> CodeBlock:
        start = self.expect(TokenType.LBRACE).start
        statements = self._parse_statements(TokenType.RBRACE)
        self.expect(TokenType.RBRACE)
        return CodeBlock(statements=statements, **self._span(start))

    def _parse_statement(self) -> list[Node]:
        start = self.current.start
        attributes = self._parse_attributes()
        self._skip_modifiers()
        token = self.current

        if token.type is TokenType.IDENTIFIER:
            if token.value == "actor" and self.peek().type is TokenType.IDENTIFIER:
                return [self._parse_type_decl(start, attributes)]
            if token.value == "associatedtype":
                self._skip_to_statement_end()
                return list(attributes)

        if token.type is TokenType.KEYWORD:
            match token.value:
                case "let" | "var":
                    return list(self._parse_variable_decls(start, attributes))
                case "func" | "init" | "deinit":
                    return [self._parse_function_decl(start, attributes)]
                case "struct" | "class" | "enum" | "protocol" | "extension":
                    return [self._parse_type_decl(start, attributes)]
                case "import":
                    return [self._parse_import(start)]
                case "for":
                    return [self._parse_for(start)]
                case "if":
                    return [self._parse_if()]
                case "guard":
                    return [self._parse_guard(start)]
                case "while":
                    return [self._parse_while(start)]
                case "repeat":
                    return [self._parse_repeat(start)]
                case "return" | "throw":
                    return [self._parse_return(start)]
                case "break" | "continue" | "fallthrough":
                    self.advance()
                    if self.check(TokenType.IDENTIFIER) and not self.current.newline_before:
                        self.advance()
                    return []
                case "defer":
                    self.advance()
                    return [self._parse_block()]
                case "do":
                    return self._parse_do()
                case "switch":
                    return [self._parse_switch(start)]
                case "case" | "typealias" | "subscript":
                    # Enum cases, aliases and subscripts carry nothing the rules inspect
                    self._skip_to_statement_end()
                    return list(attributes)

        return [*attributes, self._parse_expression()]

    def _parse_attributes(self) -> tuple[Attribute, ...]:
        attributes: list[Attribute] = []
        while self.check(TokenType.AT):
            start = self.advance().start
            if not self._is_name(self.current):
                raise self._error("expected attribute name")
            name = self.advance().value
            arguments = None
            if self.check(TokenType.LPAREN) and not self.current.space_before:
                arguments = self._parse_attribute_arguments()
            attributes.append(Attribute(name=name, arguments=arguments, **self._span(start)))
        return tuple(attributes)

    def _parse_attribute_arguments(self) -> tuple[Argument, ...] | None:
        """Parse ``(args)`` as expressions, or skip it when it is not expression-shaped.

        Attributes such as ``@available(iOS 15, *)`` use their own argument
        syntax, in which case None is returned.
        """
        saved = self.index
        try:
            return self._parse_argument_list(TokenType.RPAREN)
        except ParseError:
            self.index = saved
            self._skip_balanced(TokenType.LPAREN, TokenType.RPAREN)
            return None

    def _is_declaration_start(self, offset: int) -> bool:
        token = self.peek(offset)
        if token.type is TokenType.KEYWORD and token.value in _DECLARATION_KEYWORDS:
            return True
        if token.type is TokenType.IDENTIFIER and token.value in _MODIFIERS | {"actor"}:
            return True
        if (
            token.type is TokenType.LPAREN
            and self.peek(offset + 1).value in ("set", "unsafe")
            and self.peek(offset + 2).type is TokenType.RPAREN
        ):
            return self._is_declaration_start(offset + 3)
        return False

    def _skip_modifiers(self) -> None:
        while True:
            token = self.current
            is_modifier = token.type is TokenType.IDENTIFIER and token.value in _MODIFIERS
            is_class_modifier = token.type is TokenType.KEYWORD and token.value == "class"
            if not (is_modifier or is_class_modifier) or not self._is_declaration_start(1):
                return
            self.advance()
            if self.check(TokenType.LPAREN) and not self.current.space_before:
                self._skip_balanced(TokenType.LPAREN, TokenType.RPAREN)

    # ------------------------------------------------------------------
    # Compilation directives
    # ------------------------------------------------------------------

    def _parse_if_config(self, parse_branch: Callable[[], tuple[Node, ...]]) -> IfConfigDecl:
        """Parse ``#if``/``#elseif``/``#else``/``#endif``, keeping every branch.

        ``parse_branch`` parses the contents of one branch, so the same code
        handles branches of statements and branches of ``switch`` cases.
        """
        start = self.current.start
        clauses: list[IfConfigClause] = []
        while True:
            clause_start = self.current.start
            directive = self.advance().value
            condition = None if directive == "#else" else self._parse_directive_condition()
            statements = parse_branch()
            clauses.append(
                IfConfigClause(
                    directive=directive,
                    condition=condition,
                    statements=statements,
                    **self._span(clause_start),
                )
            )
            if self.accept(TokenType.IDENTIFIER, "#endif"):
                return IfConfigDecl(clauses=tuple(clauses), **self._span(start))
            if not self._at_directive_branch():
                raise self._error("expected '#endif'")
            if directive == "#else":
                raise self._error("expected '#endif' after '#else'")

    def _parse_directive_condition(self) -> str:
        """Consume the rest of the directive's line and return its text."""
        start = self.current.start
        if self.current.newline_before or self.check(TokenType.EOF):
            raise self._error("expected compilation condition")
        while not self.current.newline_before and not self.check(TokenType.EOF):
            self.advance()
        return self._span(start)["text"]

    def _directive_opens_cases(self) -> bool:
        """Whether the ``#if`` at the current token wraps ``case`` labels."""
        offset = 1
        while True:
            token = self.peek(offset)
            if token.newline_before or token.type is TokenType.EOF:
                break
            offset += 1
        return (
            token.type is TokenType.KEYWORD and token.value in ("case", "default")
        ) or (token.type is TokenType.AT and self.peek(offset + 1).value == "unknown")

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_import(self, start: int) -> ImportDecl:
        self.advance()
        if self.check(TokenType.KEYWORD) and self.peek().type is TokenType.IDENTIFIER:
            self.advance()  # import struct Foo.Bar
        parts = [self.expect(TokenType.IDENTIFIER).value]
        while self.accept(TokenType.PERIOD):
            parts.append(self.advance().value)
        return ImportDecl(module=".".join(parts), **self._span(start))

    def _parse_variable_decls(
        self, start: int, attributes: tuple[Attribute, ...]
    ) -> list[VariableDecl]:
        keyword = self.advance().value
        declarations: list[VariableDecl] = []
        while True:
            pattern = self._parse_pattern()
            type_annotation = self._parse_type() if self.accept(TokenType.COLON) else None
            initializer = None
            if self.accept(TokenType.OPERATOR, "="):
                initializer = self._parse_expression()
            accessor = None
            if initializer is None and self.check(TokenType.LBRACE):
                accessor = self._parse_block()
            declarations.append(
                VariableDecl(
                    attributes=attributes,
                    keyword=keyword,
                    pattern=pattern,
                    type_annotation=type_annotation,
                    initializer=initializer,
                    accessor=accessor,
                    **self._span(start),
                )
            )
            if not self.accept(TokenType.COMMA):
                return declarations
            start = self.current.start
            attributes = ()

    def _parse_function_decl(self, start: int, attributes: tuple[Attribute, ...]) -> FunctionDecl:
        keyword = self.advance()
        if keyword.value == "func":
            name = self.advance().value
        else:
            name = keyword.value
            if self.check(TokenType.OPERATOR) and self.current.value in ("?", "!"):
                self.advance()  # failable init
        self._skip_angle_brackets()

        parameters: tuple[Parameter, ...] = ()
        if keyword.value != "deinit":
            parameters = self._parse_parameter_clause()

        while self.check(TokenType.IDENTIFIER) and self.current.value in _EFFECTS:
            self.advance()
        return_type = self._parse_type() if self.accept(TokenType.ARROW) else None
        if self.check(TokenType.KEYWORD, "where"):
            self._skip_until(TokenType.LBRACE)
        body = self._parse_block() if self.check(TokenType.LBRACE) else None
        return FunctionDecl(
            attributes=attributes,
            name=name,
            parameters=parameters,
            return_type=return_type,
            body=body,
            **self._span(start),
        )

    def _parse_parameter_clause(self) -> tuple[Parameter, ...]:
        self.expect(TokenType.LPAREN)
        parameters: list[Parameter] = []
        while not self.check(TokenType.RPAREN):
            start = self.current.start
            self._parse_attributes()
            if not self._is_name(self.current):
                raise self._error("expected parameter name")
            first = self.advance().value
            second = None
            if self._is_name(self.current):
                second = self.advance().value
            label = None if first == "_" else first
            name = second if second is not None else first
            type_annotation = self._parse_type() if self.accept(TokenType.COLON) else None
            self.accept(TokenType.OPERATOR, "...")
            default = None
            if self.accept(TokenType.OPERATOR, "="):
                default = self._parse_expression()
            parameters.append(
                Parameter(
                    label=label,
                    name=name,
                    type_annotation=type_annotation,
                    default=default,
                    **self._span(start),
                )
            )
            if not self.accept(TokenType.COMMA):
                break
        self.expect(TokenType.RPAREN)
        return tuple(parameters)

    def _parse_type_decl(self, start: int, attributes: tuple[Attribute, ...]) -> TypeDecl:
        keyword = self.advance().value
        name_token = self.current
        if keyword == "extension":
            name = self._parse_type().name
        else:
            if not self.check(TokenType.IDENTIFIER):
                raise self._error(f"expected {keyword} name")
            name = self.advance().value
            self._skip_angle_brackets()

        inherited = None
        if self.accept(TokenType.COLON):
            references = [self._parse_type()]
            while self.accept(TokenType.COMMA):
                references.append(self._parse_type())
            inherited = tuple(references)
        if self.check(TokenType.KEYWORD, "where"):
            self._skip_until(TokenType.LBRACE)

        members = self._parse_block()
        return TypeDecl(
            attributes=attributes,
            keyword=keyword,
            name=name,
            name_position=name_token.start,
            inherited=inherited,
            members=members,
            **self._span(start),
        )

    # ------------------------------------------------------------------
    # Types and patterns
    # ------------------------------------------------------------------

    def _parse_type(self) -> TypeReference:
        start = self.current.start
        self._skip_type()
        span = self._span(start)
        return TypeReference(name=span["text"], **span)

    def _skip_type(self) -> None:
        while True:
            if self.check(TokenType.AT):
                self._parse_attributes()
                continue
            token = self.current
            if (
                token.type is TokenType.IDENTIFIER
                and token.value in _TYPE_SPECIFIERS
                and self.peek().type
                in (TokenType.IDENTIFIER, TokenType.KEYWORD, TokenType.LPAREN, TokenType.LBRACKET)
            ):
                self.advance()
                continue
            break

        token = self.current
        if token.type is TokenType.LBRACKET:
            self._skip_balanced(TokenType.LBRACKET, TokenType.RBRACKET)
        elif token.type is TokenType.LPAREN:
            self._skip_balanced(TokenType.LPAREN, TokenType.RPAREN)
        elif self._is_name(token):
            self.advance()
            self._skip_angle_brackets()
            while self.check(TokenType.PERIOD) and self._is_name(self.peek()):
                self.advance()
                self.advance()
                self._skip_angle_brackets()
        else:
            raise self._error("expected type")

        # Optional and implicitly unwrapped suffixes: String?, Int!, [T]??
        while (
            self.check(TokenType.OPERATOR)
            and not self.current.space_before
            and set(self.current.value) <= {"?", "!"}
        ):
            self.advance()

        while self.check(TokenType.IDENTIFIER) and self.current.value in _EFFECTS:
            self.advance()
        if self.accept(TokenType.ARROW):
            self._skip_type()

    def _parse_pattern(self) -> Pattern:
        token = self.current
        start = token.start
        if token.type is TokenType.KEYWORD and token.value in ("let", "var"):
            self.advance()
            return self._parse_pattern()
        if token.type is TokenType.IDENTIFIER and token.value == "_":
            self.advance()
            return WildcardPattern(**self._span(start))
        if token.type is TokenType.LPAREN:
            self.advance()
            elements: list[Pattern] = []
            while not self.check(TokenType.RPAREN):
                elements.append(self._parse_pattern())
                if not self.accept(TokenType.COMMA):
                    break
            self.expect(TokenType.RPAREN)
            return TuplePattern(elements=tuple(elements), **self._span(start))
        if self._is_name(token):
            self.advance()
            return IdentifierPattern(name=token.value, **self._span(start))
        raise self._error("expected pattern")

    def _parse_case_pattern(self) -> Pattern | Expr:
        """Parse the pattern of a ``case`` label or ``case`` condition.

        Expression patterns (``.some(let x)``, ``1...5``, ``(_, 0)``) go
        through the expression grammar with bindings allowed inside. Parsing
        stops before ``=``, which belongs to ``if case <pattern> = <value>``.
        """
        token = self.current
        start = token.start
        if token.type is TokenType.KEYWORD and token.value in ("let", "var"):
            self.advance()
            pattern = self._parse_case_pattern()
            return ValueBindingPattern(keyword=token.value, pattern=pattern, **self._span(start))
        if self.accept(TokenType.KEYWORD, "is"):
            return IsPattern(type=self._parse_type(), **self._span(start))
        self._pattern_depth += 1
        try:
            return self._parse_binary(_TERNARY, allow_trailing_closure=False)
        finally:
            self._pattern_depth -= 1

    # ------------------------------------------------------------------
    # Control flow
    # ------------------------------------------------------------------

    def _parse_for(self, start: int) -> ForLoop:
        self.advance()
        is_case = self.accept(TokenType.KEYWORD, "case") is not None
        if self.check(TokenType.KEYWORD, "try") or self.check(TokenType.IDENTIFIER, "await"):
            self.advance()
        pattern: Pattern | Expr = self._parse_case_pattern() if is_case else self._parse_pattern()
        if self.accept(TokenType.COLON):
            self._parse_type()
        self.expect(TokenType.KEYWORD, "in")
        iterable = self._parse_expression(allow_trailing_closure=False)
        if self.accept(TokenType.KEYWORD, "where"):
            self._parse_expression(allow_trailing_closure=False)
        body = self._parse_block()
        return ForLoop(pattern=pattern, iterable=iterable, body=body, **self._span(start))

    def _parse_conditions(self) -> tuple[Node, ...]:
        conditions: list[Node] = []
        while True:
            start = self.current.start
            if self.check(TokenType.KEYWORD, "let") or self.check(TokenType.KEYWORD, "var"):
                keyword = self.advance().value
                pattern = self._parse_pattern()
                type_annotation = self._parse_type() if self.accept(TokenType.COLON) else None
                initializer = None
                if self.accept(TokenType.OPERATOR, "="):
                    initializer = self._parse_expression(allow_trailing_closure=False)
                conditions.append(
                    VariableDecl(
                        attributes=(),
                        keyword=keyword,
                        pattern=pattern,
                        type_annotation=type_annotation,
                        initializer=initializer,
                        **self._span(start),
                    )
                )
            elif self.accept(TokenType.KEYWORD, "case"):
                case_pattern = self._parse_case_pattern()
                self.expect(TokenType.OPERATOR, "=")
                value = self._parse_expression(allow_trailing_closure=False)
                conditions.append(
                    CaseCondition(pattern=case_pattern, value=value, **self._span(start))
                )
            else:
                conditions.append(self._parse_expression(allow_trailing_closure=False))
            if not self.accept(TokenType.COMMA):
                return tuple(conditions)

    def _parse_if(self) -> IfStmt:
        start = self.expect(TokenType.KEYWORD, "if").start
        conditions = self._parse_conditions()
        body = self._parse_block()
        else_body: CodeBlock | IfStmt | None = None
        if self.accept(TokenType.KEYWORD, "else"):
            if self.check(TokenType.KEYWORD, "if"):
                else_body = self._parse_if()
            else:
                else_body = self._parse_block()
        return IfStmt(conditions=conditions, body=body, else_body=else_body, **self._span(start))

    def _parse_guard(self, start: int) -> GuardStmt:
        self.advance()
        conditions = self._parse_conditions()
        self.expect(TokenType.KEYWORD, "else")
        body = self._parse_block()
        return GuardStmt(conditions=conditions, body=body, **self._span(start))

    def _parse_while(self, start: int) -> WhileStmt:
        self.advance()
        conditions = self._parse_conditions()
        body = self._parse_block()
        return WhileStmt(conditions=conditions, body=body, **self._span(start))

    def _parse_repeat(self, start: int) -> WhileStmt:
        self.advance()
        body = self._parse_block()
        self.expect(TokenType.KEYWORD, "while")
        conditions = (self._parse_expression(),)
        return WhileStmt(conditions=conditions, body=body, **self._span(start))

    def _parse_return(self, start: int) -> ReturnStmt:
        keyword = self.advance().value
        value = None
        token = self.current
        if not token.newline_before and token.type not in (
            TokenType.RBRACE,
            TokenType.SEMICOLON,
            TokenType.EOF,
        ):
            value = self._parse_expression()
        return ReturnStmt(keyword=keyword, value=value, **self._span(start))

    def _parse_do(self) -> list[Node]:
        self.advance()
        blocks: list[Node] = [self._parse_block()]
        while self.accept(TokenType.KEYWORD, "catch"):
            self._skip_until(TokenType.LBRACE)
            blocks.append(self._parse_block())
        return blocks

    def _parse_switch(self, start: int) -> SwitchStmt:
        self.advance()
        subject = self._parse_expression(allow_trailing_closure=False)
        self.expect(TokenType.LBRACE)
        cases = self._parse_switch_cases()
        self.expect(TokenType.RBRACE)
        return SwitchStmt(subject=subject, cases=cases, **self._span(start))

    def _parse_switch_cases(self) -> tuple[Node, ...]:
        cases: list[Node] = []
        while not self.check(TokenType.RBRACE) and not self._at_directive_branch():
            if self.check(TokenType.EOF):
                raise self._error("unexpected end of file")
            if self.check(TokenType.IDENTIFIER, "#if"):
                cases.append(self._parse_if_config(self._parse_switch_cases))
            else:
                cases.append(self._parse_switch_case())
        return tuple(cases)

    def _parse_switch_case(self) -> SwitchCase:
        start = self.current.start
        attributes = self._parse_attributes()  # @unknown default:
        patterns: list[Pattern | Expr] = []
        guards: list[Expr] = []
        if not self.accept(TokenType.KEYWORD, "default"):
            self.expect(TokenType.KEYWORD, "case")
            while True:
                patterns.append(self._parse_case_pattern())
                if self.accept(TokenType.KEYWORD, "where"):
                    guards.append(self._parse_expression(allow_trailing_closure=False))
                if not self.accept(TokenType.COMMA):
                    break
        self.expect(TokenType.COLON)
        statements = self._parse_case_statements()
        return SwitchCase(
            attributes=attributes,
            patterns=tuple(patterns),
            guards=tuple(guards),
            statements=statements,
            **self._span(start),
        )

    def _at_case_label(self) -> bool:
        token = self.current
        if token.type is TokenType.KEYWORD and token.value in ("case", "default"):
            return True
        return token.type is TokenType.AT and self.peek().value == "unknown"

    def _parse_case_statements(self) -> tuple[Node, ...]:
        """Statements under a case label, up to the next label or the closing brace."""
        statements: list[Node] = []
        while not (
            self.check(TokenType.RBRACE) or self._at_case_label() or self._at_directive_branch()
        ):
            if self.check(TokenType.EOF):
                raise self._error("unexpected end of file")
            if self.accept(TokenType.SEMICOLON):
                continue
            if self.check(TokenType.IDENTIFIER, "#if"):
                if self._directive_opens_cases():
                    break
                statements.append(self._parse_if_config(self._parse_case_statements))
            else:
                statements.extend(self._parse_statement())
            self._end_statement(TokenType.RBRACE)
        return tuple(statements)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self, allow_trailing_closure: bool = True) -> Expr:
        return self._parse_binary(0, allow_trailing_closure)

    def _binary_operator(self) -> tuple[str, int] | None:
        token = self.current
        if token.type is TokenType.KEYWORD and token.value in ("as", "is"):
            return token.value, _CASTING
        if token.type is not TokenType.OPERATOR:
            return None
        # Infix operators have whitespace on both sides or on neither
        if token.space_before != token.space_after:
            return None
        if token.value in ("?", "!") and not token.space_before:
            return None
        return token.value, _PRECEDENCE.get(token.value, _DEFAULT_PRECEDENCE)

    def _parse_binary(self, min_precedence: int, allow_trailing_closure: bool) -> Expr:
        start = self.current.start
        left = self._parse_prefix(allow_trailing_closure)
        while True:
            operator = self._binary_operator()
            if operator is None or operator[1] < min_precedence:
                return left
            symbol, precedence = operator
            self.advance()

            if symbol in ("as", "is"):
                if (
                    symbol == "as"
                    and self.check(TokenType.OPERATOR)
                    and self.current.value in ("?", "!")
                    and not self.current.space_before
                ):
                    symbol += self.advance().value
                right: Expr | TypeReference = self._parse_type()
                left = Binary(left=left, operator=symbol, right=right, **self._span(start))
                continue

            if symbol == "?":
                if_true = self._parse_binary(0, allow_trailing_closure)
                self.expect(TokenType.COLON)
                if_false = self._parse_binary(_TERNARY, allow_trailing_closure)
                left = Ternary(
                    condition=left, if_true=if_true, if_false=if_false, **self._span(start)
                )
                continue

            next_min = precedence if symbol in _RIGHT_ASSOCIATIVE else precedence + 1
            right = self._parse_binary(next_min, allow_trailing_closure)
            left = Binary(left=left, operator=symbol, right=right, **self._span(start))

    def _parse_prefix(self, allow_trailing_closure: bool) -> Expr:
        while True:
            if self.accept(TokenType.KEYWORD, "try"):
                if (
                    self.check(TokenType.OPERATOR)
                    and self.current.value in ("?", "!")
                    and not self.current.space_before
                ):
                    self.advance()
                continue
            if self.check(TokenType.IDENTIFIER, "await") and not self.peek().newline_before:
                self.advance()
                continue
            break

        token = self.current
        start = token.start
        if (
            token.type is TokenType.OPERATOR
            and not token.space_after
            and token.value != "="
            and self.peek().type not in (TokenType.COMMA, TokenType.RPAREN)
        ):
            self.advance()
            operand = self._parse_prefix(allow_trailing_closure)
            return Prefix(operator=token.value, operand=operand, **self._span(start))
        if token.type is TokenType.BACKSLASH:
            self.advance()
            operand = self._parse_postfix(allow_trailing_closure)
            return Prefix(operator="\\", operand=operand, **self._span(start))
        return self._parse_postfix(allow_trailing_closure)

    def _parse_member_name(self) -> str:
        token = self.current
        if token.type not in (TokenType.IDENTIFIER, TokenType.KEYWORD, TokenType.NUMBER):
            raise self._error("expected member name")
        self.advance()
        return token.value

    def _parse_postfix(self, allow_trailing_closure: bool) -> Expr:
        start = self.current.start
        expr = self._parse_primary(allow_trailing_closure)
        while True:
            token = self.current
            if token.type is TokenType.PERIOD:
                self.advance()
                name = self._parse_member_name()
                expr = MemberAccess(
                    base=expr, name=name, name_position=token.start, **self._span(start)
                )
            elif (
                token.type is TokenType.OPERATOR
                and token.value in ("?", "!")
                and not token.space_before
            ):
                self.advance()
                if token.value == "?" and self.check(TokenType.PERIOD):
                    self.advance()
                    name = self._parse_member_name()
                    expr = MemberAccess(
                        base=expr,
                        name=name,
                        name_position=token.start,
                        optional=True,
                        **self._span(start),
                    )
                else:
                    expr = Postfix(operand=expr, operator=token.value, **self._span(start))
            elif token.type is TokenType.LPAREN and not token.newline_before:
                arguments = self._parse_argument_list(TokenType.RPAREN)
                closures = self._parse_trailing_closures() if allow_trailing_closure else ()
                expr = Call(
                    callee=expr,
                    arguments=arguments,
                    trailing_closures=closures,
                    **self._span(start),
                )
            elif token.type is TokenType.LBRACKET and not token.newline_before:
                arguments = self._parse_argument_list(TokenType.RBRACKET)
                expr = Subscript(base=expr, arguments=arguments, **self._span(start))
            elif (
                token.type is TokenType.LBRACE
                and allow_trailing_closure
                and not token.newline_before
            ):
                closures = self._parse_trailing_closures()
                expr = Call(callee=expr, arguments=(), trailing_closures=closures, **self._span(start))
            else:
                return expr

    def _parse_trailing_closures(self) -> tuple[Closure, ...]:
        closures: list[Closure] = []
        if self.check(TokenType.LBRACE) and not self.current.newline_before:
            closures.append(self._parse_closure())
            # Additional labelled closures: `} onFailure: { ... }`
            while (
                self.check(TokenType.IDENTIFIER)
                and self.peek().type is TokenType.COLON
                and self.peek(2).type is TokenType.LBRACE
            ):
                self.advance()
                self.advance()
                closures.append(self._parse_closure())
        return tuple(closures)

    def _parse_argument_list(self, closer: TokenType) -> tuple[Argument, ...]:
        self.advance()
        arguments: list[Argument] = []
        while not self.check(closer):
            start = self.current.start
            label = None
            if self._is_name(self.current) and self.peek().type is TokenType.COLON:
                label = self.advance().value
                self.advance()
            value = self._parse_expression()
            arguments.append(Argument(label=label, value=value, **self._span(start)))
            if not self.accept(TokenType.COMMA):
                break
        self.expect(closer)
        return tuple(arguments)

    def _parse_primary(self, allow_trailing_closure: bool) -> Expr:
        token = self.current
        start = token.start

        match token.type:
            case TokenType.IDENTIFIER if token.value == "_" and self._pattern_depth:
                self.advance()
                return WildcardPattern(**self._span(start))  # type: ignore[return-value]
            case TokenType.IDENTIFIER if (
                token.value in _AVAILABILITY_CONDITIONS and self.peek().type is TokenType.LPAREN
            ):
                self.advance()
                self._skip_balanced(TokenType.LPAREN, TokenType.RPAREN)
                return Identifier(name=token.value, **self._span(start))
            case TokenType.IDENTIFIER:
                self.advance()
                return Identifier(name=token.value, **self._span(start))
            case TokenType.KEYWORD if token.value in ("let", "var") and self._pattern_depth:
                # Binding nested in a case pattern: .some(let x)
                self.advance()
                pattern = self._parse_postfix(allow_trailing_closure)
                return ValueBindingPattern(  # type: ignore[return-value]
                    keyword=token.value, pattern=pattern, **self._span(start)
                )
            case TokenType.KEYWORD if token.value in ("true", "false"):
                self.advance()
                return BooleanLiteral(value=token.value == "true", **self._span(start))
            case TokenType.KEYWORD if token.value == "nil":
                self.advance()
                return NilLiteral(**self._span(start))
            case TokenType.KEYWORD if token.value in ("self", "Self", "super", "init"):
                self.advance()
                return Identifier(name=token.value, **self._span(start))
            case TokenType.NUMBER:
                self.advance()
                return NumberLiteral(value=token.value, **self._span(start))
            case TokenType.STRING:
                self.advance()
                return StringLiteral(value=token.value, **self._span(start))
            case TokenType.PERIOD:
                self.advance()
                name = self._parse_member_name()
                return MemberAccess(
                    base=None, name=name, name_position=start, **self._span(start)
                )
            case TokenType.LPAREN:
                elements = self._parse_argument_list(TokenType.RPAREN)
                return TupleExpr(elements=elements, **self._span(start))
            case TokenType.LBRACKET:
                return self._parse_collection()
            case TokenType.LBRACE:
                return self._parse_closure()
            case TokenType.OPERATOR if self.peek().type in (TokenType.COMMA, TokenType.RPAREN):
                # Operator passed as a function: reduce(0, +)
                self.advance()
                return Identifier(name=token.value, **self._span(start))

        raise self._error("expected expression")

    def _parse_collection(self) -> ArrayExpr:
        start = self.expect(TokenType.LBRACKET).start
        elements: list[Expr] = []
        if self.accept(TokenType.COLON):
            self.expect(TokenType.RBRACKET)
            return ArrayExpr(elements=(), **self._span(start))
        while not self.check(TokenType.RBRACKET):
            elements.append(self._parse_expression())
            if self.accept(TokenType.COLON):
                elements.append(self._parse_expression())
            if not self.accept(TokenType.COMMA):
                break
        self.expect(TokenType.RBRACKET)
        return ArrayExpr(elements=tuple(elements), **self._span(start))

    def _parse_closure(self) -> Closure:
        start = self.expect(TokenType.LBRACE).start
        self._skip_closure_signature()
        statements = self._parse_statements(TokenType.RBRACE)
        self.expect(TokenType.RBRACE)
        return Closure(statements=statements, **self._span(start))

    def _skip_closure_signature(self) -> None:
        """Skip ``[captures] (params) -> T in`` when the closure has one."""
        depth = 0
        for offset in range(self.index, len(self.tokens)):
            token = self.tokens[offset]
            if token.type in (TokenType.LPAREN, TokenType.LBRACKET):
                depth += 1
            elif token.type in (TokenType.RPAREN, TokenType.RBRACKET):
                depth -= 1
            elif token.type in (TokenType.LBRACE, TokenType.RBRACE, TokenType.EOF):
                return
            elif depth == 0 and token.type is TokenType.KEYWORD:
                if token.value == "in":
                    self.index = offset + 1
                    return
                if token.value not in ("throws", "as", "Self", "self"):
                    return


def parse_source(source: str) -> SyntaxTree:
    """Parse Swift ``source`` text.

    Raises
    ------
    ParseError
        If the source cannot be parsed
    """
    return SwiftParser(source).parse()


def parse_file(path: str | Path) -> SyntaxTree:
    """Read and parse a Swift file (UTF-8)."""
    path = Path(path)
    logger.debug("Parsing {path}", path=str(path))
    return parse_source(path.read_text(encoding="utf-8"))
