"""
Servo Runtime Values

Closed set of values produced by evaluation. Values are frozen records;
the only mutable part is an ObjectValue's property map, which grows while
its literal is being evaluated.

Key classes:
- NullValue, BooleanValue, NumberValue, StringValue: Primitive values
- ObjectValue: Name to value mapping
- NativeFunctionValue: Host callable (args, scope) -> value
- FunctionValue: User function with the arena and handle of its closure scope
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple, Union

from servo.frontend.ast import Statement, Visibility

if TYPE_CHECKING:
    from servo.runtime.environment import Environment, ScopeArena


@dataclass(frozen=True)
class NullValue:
    def to_python(self) -> Any:
        return None

    def __str__(self) -> str:
        return "null"


@dataclass(frozen=True)
class BooleanValue:
    value: bool

    def to_python(self) -> Any:
        return self.value

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class NumberValue:
    value: float

    def to_python(self) -> Any:
        # JSON has no NaN or Infinity
        return self.value if math.isfinite(self.value) else format_number(self.value)

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class StringValue:
    value: str

    def to_python(self) -> Any:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ObjectValue:
    properties: Dict[str, "RuntimeValue"] = field(default_factory=dict)

    def to_python(self) -> Any:
        return {key: value.to_python() for key, value in self.properties.items()}

    def __str__(self) -> str:
        inner = ", ".join(f"{key}: {value}" for key, value in self.properties.items())
        return "{ " + inner + " }" if inner else "{}"


NativeCall = Callable[[List["RuntimeValue"], "Environment"], "RuntimeValue"]


@dataclass(frozen=True)
class NativeFunctionValue:
    name: str
    call: NativeCall = field(compare=False)

    def to_python(self) -> Any:
        return f"<native {self.name}>"

    def __str__(self) -> str:
        return f"<native {self.name}>"


@dataclass(frozen=True)
class FunctionValue:
    name: str
    parameters: Tuple[str, ...]
    body: Tuple[Statement, ...]
    closure: int
    visibility: Optional[Visibility] = None
    arena: Optional[ScopeArena] = field(default=None, compare=False, repr=False)

    def to_python(self) -> Any:
        return f"<function {self.name}>"

    def __str__(self) -> str:
        return f"<function {self.name}({', '.join(self.parameters)})>"


RuntimeValue = Union[
    NullValue,
    BooleanValue,
    NumberValue,
    StringValue,
    ObjectValue,
    NativeFunctionValue,
    FunctionValue,
]

NULL = NullValue()
TRUE = BooleanValue(True)
FALSE = BooleanValue(False)


def format_number(value: float) -> str:
    """Render a number the way the language prints it: 5 not 5.0."""
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


def make_number(value: float = 0.0) -> NumberValue:
    return NumberValue(float(value))
