"""
Servo Error Taxonomy

Every stage of the pipeline raises one of these at the point of detection.
Nothing inside the core recovers from them or terminates the process; the
interpreter facade converts them into a failed ExecutionResult.

Key classes:
- ServoError: Base of the hierarchy
- LexError: Unrecognised character or unterminated string
- ParseError: Unexpected token at a production
- EvalError: Runtime failure, subdivided by category
"""

from __future__ import annotations

from typing import Optional


class ServoError(Exception):
    """Base class for all language errors."""

    category = "ServoError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error_type": self.category, "message": self.message}


class LexError(ServoError):
    """Raised by the tokenizer on input it cannot classify."""

    category = "LexError"

    def __init__(self, message: str, char: Optional[str] = None, offset: Optional[int] = None):
        super().__init__(message)
        self.char = char
        self.offset = offset


class ParseError(ServoError):
    """
    Raised when a production meets an unexpected token.

    Carries the expected token kind (when a single kind was expected) and
    the token actually found.
    """

    category = "ParseError"

    def __init__(self, message: str, expected=None, actual=None):
        if actual is not None:
            detail = f"found {actual.kind.name} {actual.text!r}"
            if expected is not None:
                detail = f"expected {expected.name}, {detail}"
            message = f"{message} ({detail})"
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class EvalError(ServoError):
    """Raised while walking the syntax tree."""

    category = "EvalError"


class ScopeReferenceError(EvalError):
    """Unresolved name, re-declared name or reassigned constant."""

    category = "ReferenceError"

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.name = name


class ScopeTypeError(EvalError):
    """Operation applied to a value or node of the wrong shape."""

    category = "TypeError"


class DivisionByZeroError(EvalError):
    """Arithmetic failure: division or remainder involving zero, overflow."""

    category = "ArithmeticError"


class InternalError(EvalError):
    """A node kind reached the evaluator without an evaluation rule."""

    category = "InternalError"
