"""Test the tokenizer."""
import pytest

from servo.errors import LexError
from servo.frontend.lexer import Token, TokenKind, Tokenizer, tokenize


def kinds(source):
    return [token.kind for token in tokenize(source)]


class TestTokenize:
    """Tests for tokenize."""

    def test_empty_source(self):
        """Empty input yields only the EOF token."""
        assert tokenize("") == [Token(TokenKind.EOF, "EndOfFile")]

    def test_whitespace_only(self):
        """Whitespace is discarded."""
        assert kinds(" \t\r\n ") == [TokenKind.EOF]

    def test_variable_declaration(self):
        """Keywords, identifiers, punctuation and numbers."""
        tokens = tokenize("let x = 45;")
        assert tokens == [
            Token(TokenKind.LET, "let"),
            Token(TokenKind.IDENTIFIER, "x"),
            Token(TokenKind.EQUALS, "="),
            Token(TokenKind.NUMBER, "45"),
            Token(TokenKind.SEMICOLON, ";"),
            Token(TokenKind.EOF, "EndOfFile"),
        ]

    def test_single_eof_at_end(self):
        """Exactly one EOF token, always last."""
        tokens = tokenize("a b c")
        assert tokens[-1].kind == TokenKind.EOF
        assert sum(1 for t in tokens if t.kind == TokenKind.EOF) == 1

    def test_binary_operators(self):
        """All arithmetic operators share one kind."""
        tokens = tokenize("+-*/%^")[:-1]
        assert all(t.kind == TokenKind.BINARY_OPERATOR for t in tokens)
        assert [t.text for t in tokens] == ["+", "-", "*", "/", "%", "^"]

    def test_punctuation(self):
        """Single character punctuation."""
        assert kinds("()[]{}=;:,.<>~!") == [
            TokenKind.OPEN_PAREN,
            TokenKind.CLOSE_PAREN,
            TokenKind.OPEN_BRACKET,
            TokenKind.CLOSE_BRACKET,
            TokenKind.OPEN_BRACE,
            TokenKind.CLOSE_BRACE,
            TokenKind.EQUALS,
            TokenKind.SEMICOLON,
            TokenKind.COLON,
            TokenKind.COMMA,
            TokenKind.DOT,
            TokenKind.LESS_THAN,
            TokenKind.GREATER_THAN,
            TokenKind.TILDE,
            TokenKind.EXCLAMATION,
            TokenKind.EOF,
        ]

    def test_arrow(self):
        """'->' is a single arrow token."""
        assert tokenize("->")[0] == Token(TokenKind.ARROW, "->")

    def test_separated_minus_and_greater(self):
        """'- >' stays two tokens."""
        assert kinds("- >") == [TokenKind.BINARY_OPERATOR, TokenKind.GREATER_THAN, TokenKind.EOF]

    def test_subtraction_is_not_arrow(self):
        """A minus between operands stays an operator."""
        assert kinds("a-b") == [
            TokenKind.IDENTIFIER,
            TokenKind.BINARY_OPERATOR,
            TokenKind.IDENTIFIER,
            TokenKind.EOF,
        ]

    def test_keywords_are_case_sensitive(self):
        """'Void' is a keyword, 'void' is an identifier."""
        assert kinds("Void void") == [TokenKind.VOID, TokenKind.IDENTIFIER, TokenKind.EOF]

    def test_function_header(self):
        """Function declaration header."""
        assert kinds("function f(a) -> Void {") == [
            TokenKind.FUNCTION,
            TokenKind.IDENTIFIER,
            TokenKind.OPEN_PAREN,
            TokenKind.IDENTIFIER,
            TokenKind.CLOSE_PAREN,
            TokenKind.ARROW,
            TokenKind.VOID,
            TokenKind.OPEN_BRACE,
            TokenKind.EOF,
        ]

    def test_digits_split_identifiers(self):
        """Identifiers are alphabetic only."""
        tokens = tokenize("abc123")
        assert tokens[0] == Token(TokenKind.IDENTIFIER, "abc")
        assert tokens[1] == Token(TokenKind.NUMBER, "123")

    def test_string_literal(self):
        """Quotes emit open quote, contents, close quote."""
        assert tokenize('"hi there"') == [
            Token(TokenKind.DOUBLE_QUOTE, '"'),
            Token(TokenKind.STRING_LITERAL, "hi there"),
            Token(TokenKind.DOUBLE_QUOTE, '"'),
            Token(TokenKind.EOF, "EndOfFile"),
        ]

    def test_string_contents_are_verbatim(self):
        """Other quote characters and symbols inside a string are kept."""
        tokens = tokenize("`it's @ 1`")
        assert tokens[1] == Token(TokenKind.STRING_LITERAL, "it's @ 1")
        assert tokens[0].kind == tokens[2].kind == TokenKind.GRAVE

    def test_empty_string(self):
        """Empty string literal."""
        assert tokenize("''")[1] == Token(TokenKind.STRING_LITERAL, "")

    def test_unterminated_string(self):
        """A string without its closing quote is a LexError."""
        with pytest.raises(LexError) as exc:
            tokenize('"abc')
        assert exc.value.offset == 0

    def test_unknown_character(self):
        """Unrecognised characters raise LexError with position."""
        with pytest.raises(LexError) as exc:
            tokenize("let x = @;")
        assert exc.value.char == "@"
        assert exc.value.offset == 8
        assert exc.value.category == "LexError"

    def test_underscore_rejected(self):
        """Underscores are not part of identifiers."""
        with pytest.raises(LexError):
            tokenize("my_var")


class TestTokenizer:
    """Tests for the Tokenizer keyword table."""

    def test_custom_keyword_table(self):
        """A supplied table replaces the default one."""
        tokenizer = Tokenizer({"fn": TokenKind.FUNCTION})
        tokens = tokenizer.tokenize("fn let")
        assert tokens[0].kind == TokenKind.FUNCTION
        assert tokens[1].kind == TokenKind.IDENTIFIER

    def test_keyword_table_is_read_only(self):
        """The keyword table cannot be modified after construction."""
        tokenizer = Tokenizer()
        with pytest.raises(TypeError):
            tokenizer.keywords["fn"] = TokenKind.FUNCTION

    def test_token_to_dict(self):
        """Token serialization."""
        assert Token(TokenKind.NUMBER, "7").to_dict() == {"kind": "NUMBER", "text": "7"}

    def test_tokens_are_immutable(self):
        """Tokens are frozen."""
        token = Token(TokenKind.NUMBER, "7")
        with pytest.raises(Exception):
            token.text = "8"
