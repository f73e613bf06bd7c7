"""Tests for the Swift tokenizer."""

from __future__ import annotations

import pytest

from synlint.compiler.swift_lexer import SwiftLexer, Token, TokenType
from synlint.kernel.exceptions import ParseError


def _tokens(source: str) -> list[Token]:
    return SwiftLexer(source).tokenize()


def _types(source: str) -> list[TokenType]:
    return [token.type for token in _tokens(source)[:-1]]


def _values(source: str) -> list[str]:
    return [token.value for token in _tokens(source)[:-1]]


class TestBasicTokens:
    def test_empty_source(self) -> None:
        tokens = _tokens("")
        assert len(tokens) == 1
        assert tokens[0].type is TokenType.EOF

    def test_keywords_and_identifiers(self) -> None:
        assert _types("let foo") == [TokenType.KEYWORD, TokenType.IDENTIFIER]

    def test_contextual_words_are_identifiers(self) -> None:
        assert _types("actor await async") == [TokenType.IDENTIFIER] * 3

    def test_special_identifiers(self) -> None:
        assert _values("$0 _ `default` #selector") == ["$0", "_", "default", "#selector"]
        assert _types("`default`") == [TokenType.IDENTIFIER]

    def test_numbers(self) -> None:
        assert _values("42 0xFF 1_000.5") == ["42", "0xFF", "1_000.5"]
        assert _types("1.5") == [TokenType.NUMBER]

    def test_member_on_number_literal(self) -> None:
        assert _values("1.description") == ["1", ".", "description"]

    def test_punctuation(self) -> None:
        assert _types("(){}[],:;@\\") == [
            TokenType.LPAREN,
            TokenType.RPAREN,
            TokenType.LBRACE,
            TokenType.RBRACE,
            TokenType.LBRACKET,
            TokenType.RBRACKET,
            TokenType.COMMA,
            TokenType.COLON,
            TokenType.SEMICOLON,
            TokenType.AT,
            TokenType.BACKSLASH,
        ]

    def test_arrow(self) -> None:
        assert _types("-> Int") == [TokenType.ARROW, TokenType.IDENTIFIER]


class TestOperators:
    def test_operator_runs(self) -> None:
        assert _values("a == b != c") == ["a", "==", "b", "!=", "c"]

    def test_range_operators(self) -> None:
        assert _values("0..<n") == ["0", "..<", "n"]
        assert _values("0...n") == ["0", "...", "n"]

    def test_optional_chaining(self) -> None:
        assert _types("a?.b") == [
            TokenType.IDENTIFIER,
            TokenType.OPERATOR,
            TokenType.PERIOD,
            TokenType.IDENTIFIER,
        ]

    def test_spacing_flags(self) -> None:
        tokens = _tokens("a + b!")
        plus = tokens[1]
        bang = tokens[3]
        assert plus.space_before and plus.space_after
        assert not bang.space_before


class TestStrings:
    def test_simple(self) -> None:
        token = _tokens('"hello"')[0]
        assert token.type is TokenType.STRING
        assert token.value == "hello"
        assert (token.start, token.end) == (0, 7)

    def test_interpolation_is_part_of_the_token(self) -> None:
        tokens = _tokens('"UserNode:\\(id)".utf8')
        assert tokens[0].value == "UserNode:\\(id)"
        assert [t.type for t in tokens[1:3]] == [TokenType.PERIOD, TokenType.IDENTIFIER]

    def test_nested_interpolation(self) -> None:
        token = _tokens('"a \\(f("x)")) b"')[0]
        assert token.value == 'a \\(f("x)")) b'

    def test_escaped_quote(self) -> None:
        assert _values('"say \\"hi\\""') == ['say \\"hi\\"']

    def test_multiline(self) -> None:
        source = '"""\nline one\nline two\n"""'
        tokens = _tokens(source)
        assert tokens[0].type is TokenType.STRING
        assert tokens[0].value == "\nline one\nline two\n"

    def test_unterminated(self) -> None:
        with pytest.raises(ParseError, match="unterminated string literal"):
            _tokens('let s = "oops\n')


class TestRawStrings:
    def test_backslash_is_literal(self) -> None:
        tokens = _tokens('let s = #"a\\b"#')
        assert [t.type for t in tokens[:4]] == [
            TokenType.KEYWORD,
            TokenType.IDENTIFIER,
            TokenType.OPERATOR,
            TokenType.STRING,
        ]
        assert tokens[3].value == "a\\b"
        assert (tokens[3].start, tokens[3].end) == (len("let s = "), len('let s = #"a\\b"#'))

    def test_quote_inside_longer_delimiter(self) -> None:
        assert _values('##"say "#hi"#"##') == ['say "#hi"#']

    def test_only_delimited_backslash_interpolates(self) -> None:
        token = _tokens('#"\\#(f(")")) and \\(y)"#')[0]
        assert token.value == '\\#(f(")")) and \\(y)'

    def test_escaped_quote_needs_delimiter(self) -> None:
        assert _values('#"a\\#"b"#') == ['a\\#"b']

    def test_multiline(self) -> None:
        token = _tokens('#"""\nline "quoted" \\n\n"""#')[0]
        assert token.type is TokenType.STRING
        assert token.value == '\nline "quoted" \\n\n'

    def test_directives_are_not_raw_strings(self) -> None:
        assert _values("#if DEBUG\n#endif") == ["#if", "DEBUG", "#endif"]

    def test_unterminated(self) -> None:
        with pytest.raises(ParseError, match="unterminated string literal"):
            _tokens('#"abc"\n')


class TestTrivia:
    def test_line_comment(self) -> None:
        assert _values("a // comment\nb") == ["a", "b"]

    def test_nested_block_comment(self) -> None:
        assert _values("a /* outer /* inner */ still */ b") == ["a", "b"]

    def test_unterminated_block_comment(self) -> None:
        with pytest.raises(ParseError, match="unterminated block comment"):
            _tokens("a /* never closed")

    def test_newline_before(self) -> None:
        tokens = _tokens("a\nb c")
        assert tokens[0].newline_before
        assert tokens[1].newline_before
        assert not tokens[2].newline_before

    def test_block_comment_spanning_lines_counts_as_newline(self) -> None:
        tokens = _tokens("a /*\n*/ b")
        assert tokens[1].newline_before


class TestOffsets:
    def test_byte_offsets_after_multibyte_text(self) -> None:
        tokens = _tokens('"é" x')
        assert (tokens[0].start, tokens[0].end) == (0, 4)
        assert tokens[1].start == 5

    def test_unexpected_character(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _tokens("a ¤ b")
        assert exc_info.value.position == 2
