"""
Servo - a small interpreted scripting language

Pipeline: text -> tokens -> syntax tree -> value.

Exports:
- tokenize / parse: Frontend entry points
- evaluate: Walk a node against a scope
- Interpreter: Facade returning ExecutionResult instead of raising
"""

from servo.errors import (
    ServoError,
    LexError,
    ParseError,
    EvalError,
    ScopeReferenceError,
    ScopeTypeError,
    DivisionByZeroError,
    InternalError,
)
from servo.frontend.lexer import tokenize
from servo.frontend.parser import parse
from servo.runtime.environment import Environment
from servo.runtime.evaluator import evaluate
from servo.runtime.builtins import create_global_environment
from servo.runtime.interpreter import Interpreter, InterpreterConfig, ExecutionResult

__version__ = "0.1.0"

__all__ = [
    "tokenize",
    "parse",
    "evaluate",
    "Environment",
    "create_global_environment",
    "Interpreter",
    "InterpreterConfig",
    "ExecutionResult",
    "ServoError",
    "LexError",
    "ParseError",
    "EvalError",
    "ScopeReferenceError",
    "ScopeTypeError",
    "DivisionByZeroError",
    "InternalError",
]
