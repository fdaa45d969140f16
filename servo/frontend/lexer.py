"""
Servo Lexer

Turns source text into an ordered list of typed tokens in a single
left-to-right scan. The keyword table is an explicit immutable mapping
handed to the Tokenizer, so alternative tables can be supplied without
touching module state.

Key classes:
- TokenKind: Closed set of token kinds
- Token: Immutable (kind, text) pair
- Tokenizer: The scanner
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from servo.errors import LexError

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    # Literals
    NUMBER = auto()
    IDENTIFIER = auto()
    STRING_LITERAL = auto()

    # Keywords
    VAR = auto()
    LET = auto()
    CONST = auto()
    NUM = auto()
    STRING = auto()
    NEW = auto()
    THROW = auto()
    OPTIONAL = auto()
    SCOPE = auto()
    CLASS = auto()
    WITH = auto()
    SUPER = auto()
    PUBLIC = auto()
    PRIVATE = auto()
    PROTECTED = auto()
    FUNCTION = auto()
    VOID = auto()
    RETURN = auto()
    ASYNC = auto()
    STATIC = auto()
    ARROW = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    FOR = auto()
    WHILE = auto()
    DO = auto()
    BREAK = auto()

    # Grouping and operators
    BINARY_OPERATOR = auto()
    EQUALS = auto()
    COMMA = auto()
    DOT = auto()
    COLON = auto()
    SEMICOLON = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    OPEN_BRACE = auto()
    CLOSE_BRACE = auto()
    OPEN_BRACKET = auto()
    CLOSE_BRACKET = auto()
    LESS_THAN = auto()
    GREATER_THAN = auto()
    DOUBLE_QUOTE = auto()
    QUOTE = auto()
    GRAVE = auto()
    TILDE = auto()
    EXCLAMATION = auto()

    EOF = auto()
    UNKNOWN = auto()


@dataclass(frozen=True)
class Token:
    """A single token: its kind and the raw text it was read from."""
    kind: TokenKind
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.name, "text": self.text}


DEFAULT_KEYWORDS: Mapping[str, TokenKind] = MappingProxyType({
    "let": TokenKind.LET,
    "const": TokenKind.CONST,
    "var": TokenKind.VAR,
    "num": TokenKind.NUM,
    "string": TokenKind.STRING,
    "new": TokenKind.NEW,
    "throw": TokenKind.THROW,
    "optional": TokenKind.OPTIONAL,
    "arrow": TokenKind.ARROW,
    "scope": TokenKind.SCOPE,
    "class": TokenKind.CLASS,
    "with": TokenKind.WITH,
    "super": TokenKind.SUPER,
    "public": TokenKind.PUBLIC,
    "private": TokenKind.PRIVATE,
    "protected": TokenKind.PROTECTED,
    "function": TokenKind.FUNCTION,
    "Void": TokenKind.VOID,
    "return": TokenKind.RETURN,
    "async": TokenKind.ASYNC,
    "static": TokenKind.STATIC,
    "if": TokenKind.IF,
    "then": TokenKind.THEN,
    "else": TokenKind.ELSE,
    "for": TokenKind.FOR,
    "while": TokenKind.WHILE,
    "do": TokenKind.DO,
    "break": TokenKind.BREAK,
})

SINGLE_CHAR_TOKENS: Mapping[str, TokenKind] = MappingProxyType({
    "(": TokenKind.OPEN_PAREN,
    ")": TokenKind.CLOSE_PAREN,
    "{": TokenKind.OPEN_BRACE,
    "}": TokenKind.CLOSE_BRACE,
    "[": TokenKind.OPEN_BRACKET,
    "]": TokenKind.CLOSE_BRACKET,
    "+": TokenKind.BINARY_OPERATOR,
    "-": TokenKind.BINARY_OPERATOR,
    "*": TokenKind.BINARY_OPERATOR,
    "/": TokenKind.BINARY_OPERATOR,
    "%": TokenKind.BINARY_OPERATOR,
    "^": TokenKind.BINARY_OPERATOR,
    "=": TokenKind.EQUALS,
    ";": TokenKind.SEMICOLON,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "<": TokenKind.LESS_THAN,
    ">": TokenKind.GREATER_THAN,
    "~": TokenKind.TILDE,
    "!": TokenKind.EXCLAMATION,
})

QUOTE_TOKENS: Mapping[str, TokenKind] = MappingProxyType({
    '"': TokenKind.DOUBLE_QUOTE,
    "'": TokenKind.QUOTE,
    "`": TokenKind.GRAVE,
})

WHITESPACE = frozenset(" \t\n\r")

EOF_TEXT = "EndOfFile"


def is_alpha(char: str) -> bool:
    return char.isalpha()


def is_digit(char: str) -> bool:
    return "0" <= char <= "9"


class Tokenizer:
    """
    Scanner producing tokens from source text.

    Classification order: the two-character arrow, single-character
    punctuation, quoted strings, integer runs, alphabetic runs (keyword or
    identifier), whitespace. Anything else raises LexError.
    """

    def __init__(self, keywords: Optional[Mapping[str, TokenKind]] = None):
        self.keywords = MappingProxyType(dict(keywords)) if keywords is not None else DEFAULT_KEYWORDS

    def tokenize(self, source: str) -> List[Token]:
        """Tokenize source text. Always ends with exactly one EOF token."""
        tokens: List[Token] = []
        pos = 0
        length = len(source)

        while pos < length:
            char = source[pos]

            if char == "-" and pos + 1 < length and source[pos + 1] == ">":
                tokens.append(Token(TokenKind.ARROW, "->"))
                pos += 2
            elif char in SINGLE_CHAR_TOKENS:
                tokens.append(Token(SINGLE_CHAR_TOKENS[char], char))
                pos += 1
            elif char in QUOTE_TOKENS:
                pos = self._scan_string(source, pos, tokens)
            elif is_digit(char):
                start = pos
                while pos < length and is_digit(source[pos]):
                    pos += 1
                tokens.append(Token(TokenKind.NUMBER, source[start:pos]))
            elif is_alpha(char):
                start = pos
                while pos < length and is_alpha(source[pos]):
                    pos += 1
                word = source[start:pos]
                tokens.append(Token(self.keywords.get(word, TokenKind.IDENTIFIER), word))
            elif char in WHITESPACE:
                pos += 1
            else:
                raise LexError(
                    f"Unrecognized character found in source: char#:{ord(char)} : {char!r} at offset {pos}",
                    char=char,
                    offset=pos,
                )

        tokens.append(Token(TokenKind.EOF, EOF_TEXT))
        logger.debug("Tokenized %d characters into %d tokens", length, len(tokens))
        return tokens

    def _scan_string(self, source: str, pos: int, tokens: List[Token]) -> int:
        """Emit open quote, string contents and close quote; return the new position."""
        quote = source[pos]
        kind = QUOTE_TOKENS[quote]
        end = source.find(quote, pos + 1)
        if end == -1:
            raise LexError(
                f"Unterminated string literal opened with {quote} at offset {pos}",
                char=quote,
                offset=pos,
            )

        tokens.append(Token(kind, quote))
        tokens.append(Token(TokenKind.STRING_LITERAL, source[pos + 1:end]))
        tokens.append(Token(kind, quote))
        return end + 1


def tokenize(source: str, keywords: Optional[Mapping[str, TokenKind]] = None) -> List[Token]:
    """Tokenize source text with the default (or a supplied) keyword table."""
    return Tokenizer(keywords).tokenize(source)
