"""
Servo Evaluator

Tree-walking evaluation of syntax nodes against a scope chain. Dispatch is a
match over the closed node set; a node without a rule raises InternalError.

Key classes:
- Evaluator: evaluate(node, scope) -> RuntimeValue
"""

from __future__ import annotations

import logging
import math
from typing import List

from servo.errors import DivisionByZeroError, InternalError, ScopeReferenceError, ScopeTypeError
from servo.frontend.ast import (
    AccessDeclaration,
    AssignmentExpression,
    BinaryExpression,
    CallExpression,
    FunctionDeclaration,
    Identifier,
    MemberExpression,
    Node,
    NumericLiteral,
    ObjectLiteral,
    Program,
    StringLiteral,
    VariableDeclaration,
)
from servo.runtime.environment import Environment
from servo.runtime.values import (
    NULL,
    FunctionValue,
    NativeFunctionValue,
    NumberValue,
    ObjectValue,
    RuntimeValue,
    StringValue,
    format_number,
)

logger = logging.getLogger(__name__)


class Evaluator:
    """
    Evaluates syntax nodes.

    Args:
        strict_arity: Raise a TypeError when a call's argument count differs
            from the function's parameter count. When off, missing arguments
            bind null and extra arguments are ignored.
    """

    def __init__(self, strict_arity: bool = False):
        self.strict_arity = strict_arity

    def evaluate(self, node: Node, scope: Environment) -> RuntimeValue:
        match node:
            case NumericLiteral(value=value):
                return NumberValue(value)
            case StringLiteral(value=value):
                return StringValue(value)
            case Identifier(symbol=symbol):
                return scope.lookup(symbol)
            case ObjectLiteral():
                return self._eval_object(node, scope)
            case CallExpression():
                return self._eval_call(node, scope)
            case AssignmentExpression():
                return self._eval_assignment(node, scope)
            case BinaryExpression():
                return self._eval_binary(node, scope)
            case MemberExpression():
                return self._eval_member(node, scope)
            case Program(body=body):
                return self._eval_body(body, scope)
            case VariableDeclaration():
                return self._eval_variable_declaration(node, scope)
            case FunctionDeclaration():
                return self._eval_function_declaration(node, scope)
            case AccessDeclaration(function=function, visibility=visibility):
                return self._eval_function_declaration(function, scope, visibility)
            case _:
                raise InternalError(
                    f"This AST node has not yet been set up for interpretation: {type(node).__name__}"
                )

    def _eval_body(self, body, scope: Environment) -> RuntimeValue:
        last: RuntimeValue = NULL
        for statement in body:
            last = self.evaluate(statement, scope)
        return last

    # Statements

    def _eval_variable_declaration(self, declaration: VariableDeclaration, scope: Environment) -> RuntimeValue:
        value = NULL if declaration.value is None else self.evaluate(declaration.value, scope)
        return scope.declare(declaration.name, value, declaration.constant)

    def _eval_function_declaration(self, declaration: FunctionDeclaration, scope: Environment,
                                   visibility=None) -> RuntimeValue:
        function = FunctionValue(
            name=declaration.name,
            parameters=declaration.parameters,
            body=declaration.body,
            closure=scope.handle,
            visibility=visibility or declaration.visibility,
            arena=scope.arena,
        )
        scope.arena.capture(scope.handle)
        return scope.declare(declaration.name, function, constant=True)

    # Expressions

    def _eval_binary(self, node: BinaryExpression, scope: Environment) -> RuntimeValue:
        left = self.evaluate(node.left, scope)
        right = self.evaluate(node.right, scope)

        if isinstance(left, NumberValue) and isinstance(right, NumberValue):
            return NumberValue(apply_operator(node.operator, left.value, right.value))

        # Arithmetic is numbers-only; anything else yields null.
        return NULL

    def _eval_assignment(self, node: AssignmentExpression, scope: Environment) -> RuntimeValue:
        if not isinstance(node.target, Identifier):
            raise ScopeTypeError(f"Invalid left-hand side inside assignment: {node.target.kind}")

        value = self.evaluate(node.value, scope)
        return scope.assign(node.target.symbol, value)

    def _eval_object(self, node: ObjectLiteral, scope: Environment) -> RuntimeValue:
        obj = ObjectValue()
        for prop in node.properties:
            if prop.value is None:
                obj.properties[prop.key] = scope.lookup(prop.key)
            else:
                obj.properties[prop.key] = self.evaluate(prop.value, scope)
        return obj

    def _eval_member(self, node: MemberExpression, scope: Environment) -> RuntimeValue:
        obj = self.evaluate(node.object, scope)
        if not isinstance(obj, ObjectValue):
            raise ScopeTypeError(f"Cannot access a property of non-object value {obj}")

        if not node.computed:
            if not isinstance(node.property, Identifier):
                raise ScopeTypeError("Right hand side of '.' must be an identifier.")
            key = node.property.symbol
        else:
            key_value = self.evaluate(node.property, scope)
            if isinstance(key_value, StringValue):
                key = key_value.value
            elif isinstance(key_value, NumberValue):
                key = format_number(key_value.value)
            else:
                raise ScopeTypeError(f"Cannot use {key_value} as a property key")

        if key not in obj.properties:
            raise ScopeReferenceError(f"Object has no property '{key}'", name=key)
        return obj.properties[key]

    def _eval_call(self, node: CallExpression, scope: Environment) -> RuntimeValue:
        callee = self.evaluate(node.callee, scope)
        args = [self.evaluate(argument, scope) for argument in node.arguments]

        if isinstance(callee, NativeFunctionValue):
            logger.debug("Calling native %s with %d args", callee.name, len(args))
            return callee.call(args, scope)

        if isinstance(callee, FunctionValue):
            return self._call_function(callee, args, scope)

        raise ScopeTypeError(f"Cannot call value that is not a function: {callee}")

    def _call_function(self, function: FunctionValue, args: List[RuntimeValue], scope: Environment) -> RuntimeValue:
        if self.strict_arity and len(args) != len(function.parameters):
            raise ScopeTypeError(
                f"Function {function.name} expects {len(function.parameters)} arguments, got {len(args)}"
            )

        logger.debug("Calling %s with %d args", function.name, len(args))
        # The closure handle is only valid in the arena it was declared in.
        arena = function.arena if function.arena is not None else scope.arena
        call_scope = Environment.at(arena, function.closure).child()
        try:
            for index, parameter in enumerate(function.parameters):
                value = args[index] if index < len(args) else NULL
                call_scope.declare(parameter, value, constant=False)
            return self._eval_body(function.body, call_scope)
        finally:
            call_scope.arena.release(call_scope.handle)


def apply_operator(operator: str, left: float, right: float) -> float:
    """Apply an arithmetic operator to two numbers."""
    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    if operator == "/":
        if left == 0 or right == 0:
            raise DivisionByZeroError("Division by zero")
        return left / right
    if operator == "%":
        if right == 0:
            raise DivisionByZeroError("Modulo by zero")
        return math.fmod(left, right)
    if operator == "^":
        try:
            result = left ** right
        except ZeroDivisionError:
            raise DivisionByZeroError("Zero raised to a negative power")
        except OverflowError:
            raise DivisionByZeroError(f"Numeric overflow in {format_number(left)} ^ {format_number(right)}")
        if isinstance(result, complex):
            return math.nan
        return float(result)
    raise InternalError(f"Unsupported binary operator: {operator}")


def evaluate(node: Node, scope: Environment, strict_arity: bool = False) -> RuntimeValue:
    """Evaluate a node in the given scope."""
    return Evaluator(strict_arity=strict_arity).evaluate(node, scope)
