"""
Servo Runtime

This module provides the evaluation half of the pipeline:
- Environment: Scope chain stored in a ScopeArena
- Evaluator: Tree-walking node evaluation
- Interpreter: tokenize -> parse -> evaluate facade with ExecutionResult
- builtins: Default global table (true, false, null, print, time)
"""

from servo.runtime.environment import Environment, ScopeArena, ScopeRecord
from servo.runtime.evaluator import Evaluator, evaluate
from servo.runtime.interpreter import Interpreter, InterpreterConfig, ExecutionResult
from servo.runtime.builtins import create_global_environment, default_builtins

__all__ = [
    "Environment",
    "ScopeArena",
    "ScopeRecord",
    "Evaluator",
    "evaluate",
    "Interpreter",
    "InterpreterConfig",
    "ExecutionResult",
    "create_global_environment",
    "default_builtins",
]
