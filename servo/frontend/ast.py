"""
Servo Syntax Tree

The closed set of node variants produced by the parser and consumed by the
evaluator. Nodes are frozen dataclasses and hold their children in tuples,
so a tree is immutable and two parses of the same source compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class Visibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"


BINARY_OPERATORS = frozenset({"+", "-", "*", "/", "%", "^"})


class Node:
    """Base class for every syntax node."""

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-ready mapping with a 'kind' key."""
        data: Dict[str, Any] = {"kind": self.kind}
        for f in fields(self):
            data[f.name] = _serialize(getattr(self, f.name))
        return data


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    return value


class Statement(Node):
    pass


class Expression(Statement):
    """Expressions produce a value and are also valid statements."""


# Statements

@dataclass(frozen=True)
class Program(Statement):
    body: Tuple[Statement, ...] = ()


@dataclass(frozen=True)
class VariableDeclaration(Statement):
    name: str
    value: Optional[Expression] = None
    constant: bool = False


@dataclass(frozen=True)
class FunctionDeclaration(Statement):
    name: str
    parameters: Tuple[str, ...] = ()
    body: Tuple[Statement, ...] = ()
    visibility: Optional[Visibility] = None


@dataclass(frozen=True)
class AccessDeclaration(Statement):
    function: FunctionDeclaration
    visibility: Visibility


# Expressions

@dataclass(frozen=True)
class Identifier(Expression):
    symbol: str


@dataclass(frozen=True)
class NumericLiteral(Expression):
    value: float


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str


@dataclass(frozen=True)
class BinaryExpression(Expression):
    left: Expression
    right: Expression
    operator: str

    def __post_init__(self):
        if self.operator not in BINARY_OPERATORS:
            raise ValueError(f"Unsupported binary operator: {self.operator!r}")


@dataclass(frozen=True)
class AssignmentExpression(Expression):
    target: Expression
    value: Expression


@dataclass(frozen=True)
class MemberExpression(Expression):
    object: Expression
    property: Expression
    computed: bool


@dataclass(frozen=True)
class CallExpression(Expression):
    callee: Expression
    arguments: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Property(Node):
    """Object literal entry; a missing value means shorthand lookup of `key`."""
    key: str
    value: Optional[Expression] = None


@dataclass(frozen=True)
class ObjectLiteral(Expression):
    properties: Tuple[Property, ...] = ()


SyntaxNode = Union[
    Program,
    VariableDeclaration,
    FunctionDeclaration,
    AccessDeclaration,
    Identifier,
    NumericLiteral,
    StringLiteral,
    BinaryExpression,
    AssignmentExpression,
    MemberExpression,
    CallExpression,
    ObjectLiteral,
]
