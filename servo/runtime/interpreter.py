"""
Servo Interpreter

Facade that runs source text through tokenize -> parse -> evaluate against a
persistent global scope and reports the outcome as an ExecutionResult. Language
errors never escape run(); the caller decides whether to abort, report or retry.

Key classes:
- InterpreterConfig: Configuration for evaluation
- ExecutionResult: Outcome of one run
- Interpreter: Owns the parser, evaluator and global scope
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from servo.errors import EvalError, ServoError
from servo.frontend.ast import Program
from servo.frontend.parser import Parser
from servo.runtime.builtins import create_global_environment, default_builtins
from servo.runtime.environment import Environment
from servo.runtime.evaluator import Evaluator
from servo.runtime.values import NULL, RuntimeValue

logger = logging.getLogger(__name__)


@dataclass
class InterpreterConfig:
    """Configuration for source evaluation."""
    strict_arity: bool = False
    include_builtins: bool = True


@dataclass
class ExecutionResult:
    """Result of running one source unit."""
    success: bool
    value: RuntimeValue = NULL
    error: Optional[str] = None
    error_type: Optional[str] = None
    execution_time_ms: float = 0.0
    program: Optional[Program] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "value": self.value.to_python() if self.success else None,
            "display": str(self.value) if self.success else None,
            "error": self.error,
            "error_type": self.error_type,
            "execution_time_ms": self.execution_time_ms,
        }


class Interpreter:
    """
    Runs Servo source against a global scope that persists between runs,
    so a REPL session can build on earlier declarations.
    """

    def __init__(self,
                 config: Optional[InterpreterConfig] = None,
                 builtins: Optional[Mapping[str, RuntimeValue]] = None,
                 output: Optional[Callable[[str], None]] = None):
        self.config = config or InterpreterConfig()
        self.parser = Parser()
        self.evaluator = Evaluator(strict_arity=self.config.strict_arity)
        if not self.config.include_builtins:
            builtins = {}
        elif builtins is None:
            builtins = default_builtins(output)
        self.global_scope: Environment = create_global_environment(builtins)

    def parse(self, source: str) -> Program:
        return self.parser.produce_ast(source)

    def evaluate(self, node, scope: Optional[Environment] = None) -> RuntimeValue:
        return self.evaluator.evaluate(node, scope or self.global_scope)

    def run(self, source: str) -> ExecutionResult:
        """
        Tokenize, parse and evaluate source text.

        Args:
            source: Servo program text

        Returns:
            ExecutionResult with the value of the last statement, or the error
        """
        start_time = time.perf_counter()
        program: Optional[Program] = None

        try:
            program = self.parse(source)
            value = self.evaluate(program)
        except ServoError as e:
            logger.debug("Run failed with %s: %s", e.category, e.message)
            return ExecutionResult(
                success=False,
                error=e.message,
                error_type=e.category,
                execution_time_ms=_elapsed_ms(start_time),
                program=program,
            )
        except RecursionError:
            error = EvalError("Maximum call depth exceeded")
            return ExecutionResult(
                success=False,
                error=error.message,
                error_type=error.category,
                execution_time_ms=_elapsed_ms(start_time),
                program=program,
            )

        return ExecutionResult(
            success=True,
            value=value,
            execution_time_ms=_elapsed_ms(start_time),
            program=program,
        )


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000
