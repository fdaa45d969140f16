"""
Servo Built-ins

The default built-in table (true, false, null, print, time) as an immutable
mapping, and the helper that declares a table into a fresh global scope.
"""

from __future__ import annotations

import time
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional

from servo.runtime.environment import Environment
from servo.runtime.values import (
    FALSE,
    NULL,
    TRUE,
    NativeFunctionValue,
    RuntimeValue,
    make_number,
)


def default_builtins(output: Optional[Callable[[str], None]] = None) -> Mapping[str, RuntimeValue]:
    """
    Build the default built-in table.

    Args:
        output: Sink for print(); defaults to the builtin print

    Returns:
        Read-only name -> value mapping
    """
    sink = output or print

    def native_print(args: List[RuntimeValue], scope: Environment) -> RuntimeValue:
        sink(" ".join(str(arg) for arg in args))
        return NULL

    def native_time(args: List[RuntimeValue], scope: Environment) -> RuntimeValue:
        return make_number(time.time() * 1000)

    return MappingProxyType({
        "true": TRUE,
        "false": FALSE,
        "null": NULL,
        "print": NativeFunctionValue("print", native_print),
        "time": NativeFunctionValue("time", native_time),
    })


def create_global_environment(builtins: Optional[Mapping[str, RuntimeValue]] = None) -> Environment:
    """Create a root scope with every built-in declared as a constant."""
    env = Environment()
    table = default_builtins() if builtins is None else builtins
    for name, value in table.items():
        env.declare(name, value, constant=True)
    return env
