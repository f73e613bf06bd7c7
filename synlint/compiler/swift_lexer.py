"""Swift tokenizer.

Converts source text into a list of tokens carrying UTF-8 byte offsets.
Whitespace and comments are trivia: they are not emitted, but each token
records whether whitespace (or a line break) precedes and follows it, which
the parser needs to tell prefix, postfix and infix operators apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from synlint.kernel.exceptions import ParseError


class TokenType(Enum):
    """Types of tokens in Swift source."""

    IDENTIFIER = auto()  # foo, _, $0, `default`, #selector
    KEYWORD = auto()  # let, for, struct, ...
    NUMBER = auto()  # 42, 0xFF, 1_000.5
    STRING = auto()  # "text \(interpolated)"
    OPERATOR = auto()  # ==, ?, !, ..<, =
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    COMMA = auto()
    COLON = auto()
    SEMICOLON = auto()
    PERIOD = auto()
    AT = auto()
    ARROW = auto()  # ->
    BACKSLASH = auto()  # key paths
    EOF = auto()


KEYWORDS = frozenset({
    "as",
    "break",
    "case",
    "catch",
    "class",
    "continue",
    "default",
    "defer",
    "deinit",
    "do",
    "else",
    "enum",
    "extension",
    "fallthrough",
    "false",
    "for",
    "func",
    "guard",
    "if",
    "import",
    "in",
    "init",
    "is",
    "let",
    "nil",
    "protocol",
    "repeat",
    "return",
    "Self",
    "self",
    "struct",
    "subscript",
    "super",
    "switch",
    "throw",
    "true",
    "try",
    "typealias",
    "var",
    "where",
    "while",
})

_OPERATOR_CHARS = frozenset("/=-+!*%<>&|^~?")

_PUNCTUATION = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    "@": TokenType.AT,
    "\\": TokenType.BACKSLASH,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A single token; ``start``/``end`` are UTF-8 byte offsets."""

    type: TokenType
    value: str
    start: int
    end: int
    space_before: bool = False
    newline_before: bool = False
    space_after: bool = False

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.start}:{self.end})"


class SwiftLexer:
    """Tokenizer for Swift source.

    Usage::

        tokens = SwiftLexer(source).tokenize()
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.length = len(source)
        self.pos = 0
        # Byte offset of every character index (plus one past the end)
        self._byte_offsets = [0] * (self.length + 1)
        for index, char in enumerate(source):
            self._byte_offsets[index + 1] = self._byte_offsets[index] + len(char.encode("utf-8"))

    def _current(self) -> str:
        return self.source[self.pos] if self.pos < self.length else ""

    def _peek(self, offset: int = 1) -> str:
        pos = self.pos + offset
        return self.source[pos] if pos < self.length else ""

    def _byte(self, index: int) -> int:
        return self._byte_offsets[index]

    def _error(self, message: str) -> ParseError:
        return ParseError(message, self._byte(min(self.pos, self.length)))

    def tokenize(self) -> list[Token]:
        """Tokenize the whole source, ending with an EOF token."""
        raw: list[tuple[TokenType, str, int, int, bool, bool]] = []
        newline_before = True
        space_before = True

        while True:
            saw_space, saw_newline = self._skip_trivia()
            space_before = space_before or saw_space
            newline_before = newline_before or saw_newline
            if self.pos >= self.length:
                break

            begin = self.pos
            token_type, value = self._scan_token()
            raw.append((token_type, value, begin, self.pos, space_before, newline_before))
            space_before = False
            newline_before = False

        tokens: list[Token] = []
        for index, (token_type, value, begin, finish, before, line_before) in enumerate(raw):
            if index + 1 < len(raw):
                after = raw[index + 1][4]
            else:
                after = True
            tokens.append(
                Token(
                    type=token_type,
                    value=value,
                    start=self._byte(begin),
                    end=self._byte(finish),
                    space_before=before,
                    newline_before=line_before,
                    space_after=after,
                )
            )

        end = self._byte(self.length)
        tokens.append(Token(TokenType.EOF, "", end, end, True, True, True))
        return tokens

    # ------------------------------------------------------------------
    # Trivia
    # ------------------------------------------------------------------

    def _skip_trivia(self) -> tuple[bool, bool]:
        """Skip whitespace and comments; report whether any space/newline was seen."""
        saw_space = False
        saw_newline = False
        while self.pos < self.length:
            char = self._current()
            if char == "\n":
                saw_space = saw_newline = True
                self.pos += 1
            elif char in " \t\r\f\v":
                saw_space = True
                self.pos += 1
            elif char == "/" and self._peek() == "/":
                saw_space = True
                while self.pos < self.length and self._current() != "\n":
                    self.pos += 1
            elif char == "/" and self._peek() == "*":
                saw_space = True
                saw_newline = self._skip_block_comment() or saw_newline
            else:
                break
        return saw_space, saw_newline

    def _skip_block_comment(self) -> bool:
        """Skip a (possibly nested) block comment; return True if it spans lines."""
        depth = 0
        spans_lines = False
        while self.pos < self.length:
            if self._current() == "/" and self._peek() == "*":
                depth += 1
                self.pos += 2
            elif self._current() == "*" and self._peek() == "/":
                depth -= 1
                self.pos += 2
                if depth == 0:
                    return spans_lines
            else:
                spans_lines = spans_lines or self._current() == "\n"
                self.pos += 1
        raise self._error("unterminated block comment")

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def _scan_token(self) -> tuple[TokenType, str]:
        char = self._current()

        if char.isalpha() or char in "_$":
            return self._scan_identifier()
        if char == "#" and self._at_raw_string():
            return self._scan_raw_string()
        if char == "#" and (self._peek().isalpha() or self._peek() == "_"):
            self.pos += 1
            _, name = self._scan_identifier()
            return TokenType.IDENTIFIER, "#" + name
        if char == "`":
            end = self.source.find("`", self.pos + 1)
            if end == -1:
                raise self._error("unterminated escaped identifier")
            value = self.source[self.pos + 1 : end]
            self.pos = end + 1
            return TokenType.IDENTIFIER, value
        if char.isdigit():
            return self._scan_number()
        if char == '"':
            return self._scan_string()
        if char == "." and self._peek() != ".":
            self.pos += 1
            return TokenType.PERIOD, "."
        if char == "-" and self._peek() == ">":
            self.pos += 2
            return TokenType.ARROW, "->"
        if char in _PUNCTUATION:
            self.pos += 1
            return _PUNCTUATION[char], char
        if char in _OPERATOR_CHARS or char == ".":
            return self._scan_operator()

        raise self._error(f"unexpected character {char!r}")

    def _scan_identifier(self) -> tuple[TokenType, str]:
        begin = self.pos
        while self.pos < self.length and (
            self._current().isalnum() or self._current() in "_$"
        ):
            self.pos += 1
        value = self.source[begin : self.pos]
        token_type = TokenType.KEYWORD if value in KEYWORDS else TokenType.IDENTIFIER
        return token_type, value

    def _scan_number(self) -> tuple[TokenType, str]:
        begin = self.pos
        while self.pos < self.length:
            char = self._current()
            if char.isalnum() or char == "_":
                self.pos += 1
            elif char == "." and self._peek().isdigit():
                self.pos += 1
            else:
                break
        return TokenType.NUMBER, self.source[begin : self.pos]

    def _scan_operator(self) -> tuple[TokenType, str]:
        begin = self.pos
        dotted = self._current() == "."
        while self.pos < self.length:
            char = self._current()
            if char in _OPERATOR_CHARS or (dotted and char == "."):
                self.pos += 1
            else:
                break
        return TokenType.OPERATOR, self.source[begin : self.pos]

    def _scan_string(self, delimiter: str = "") -> tuple[TokenType, str]:
        """Scan a string literal; ``delimiter`` is the ``#`` run of a raw string."""
        multiline = self.source.startswith('"""', self.pos)
        quote = '"""' if multiline else '"'
        self.pos += len(quote)
        content_start = self.pos
        content_end = self._scan_string_body(quote + delimiter, "\\" + delimiter, multiline)
        return TokenType.STRING, self.source[content_start:content_end]

    def _at_raw_string(self) -> bool:
        offset = 0
        while self._peek(offset) == "#":
            offset += 1
        return self._peek(offset) == '"'

    def _scan_raw_string(self) -> tuple[TokenType, str]:
        r"""Scan ``#"..."#`` (any number of ``#``, single or multi-line).

        A backslash only escapes when followed by the same ``#`` run, so
        ``#"a\b"#`` holds a literal backslash and ``\#(x)`` interpolates.
        """
        begin = self.pos
        while self._current() == "#":
            self.pos += 1
        return self._scan_string(self.source[begin : self.pos])

    def _scan_string_body(self, closer: str, escape: str, multiline: bool) -> int:
        """Advance past ``closer``; return the index where content ends."""
        while self.pos < self.length:
            char = self._current()
            if self.source.startswith(escape + "(", self.pos):
                self.pos += len(escape) + 1
                self._scan_interpolation()
            elif self.source.startswith(escape, self.pos):
                self.pos += len(escape) + 1
            elif self.source.startswith(closer, self.pos):
                content_end = self.pos
                self.pos += len(closer)
                return content_end
            elif char == "\n" and not multiline:
                break
            else:
                self.pos += 1
        raise self._error("unterminated string literal")

    def _scan_interpolation(self) -> None:
        """Skip an interpolated expression up to its closing parenthesis."""
        depth = 1
        while self.pos < self.length:
            char = self._current()
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0:
                    self.pos += 1
                    return
            elif char == '"':
                self._scan_string()
                continue
            self.pos += 1
        raise self._error("unterminated string interpolation")
