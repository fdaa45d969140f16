"""
Servo Frontend

Source text to syntax tree:
- Tokenizer: Characters to tokens
- Parser: Tokens to a Program via recursive descent
- ast: The closed set of syntax node variants
"""

from servo.frontend.lexer import Token, TokenKind, Tokenizer, tokenize
from servo.frontend.parser import Parser, parse

__all__ = [
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
    "Parser",
    "parse",
]
