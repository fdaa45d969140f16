"""Test the interpreter facade and error taxonomy."""
import pytest

from servo.errors import (
    DivisionByZeroError,
    EvalError,
    InternalError,
    LexError,
    ParseError,
    ScopeReferenceError,
    ScopeTypeError,
    ServoError,
)
from servo.frontend.ast import Program
from servo.runtime.interpreter import ExecutionResult, Interpreter, InterpreterConfig
from servo.runtime.values import NULL, NumberValue, StringValue


class TestInterpreterConfig:
    """Tests for InterpreterConfig."""

    def test_config_defaults(self):
        """Lenient arity and built-ins by default."""
        config = InterpreterConfig()
        assert config.strict_arity == False
        assert config.include_builtins == True


class TestInterpreter:
    """Tests for Interpreter.run."""

    def test_run_success(self, interpreter):
        """A successful run carries the final value and the tree."""
        result = interpreter.run("2 + 3 * 4")
        assert result.success == True
        assert result.value == NumberValue(14.0)
        assert result.error is None
        assert isinstance(result.program, Program)
        assert result.execution_time_ms >= 0

    def test_scope_persists_between_runs(self, interpreter):
        """Declarations survive into later runs."""
        interpreter.run("let x = 4;")
        interpreter.run("function sq(n) -> Void { n * n }")
        assert interpreter.run("sq(x)").value == NumberValue(16.0)

    @pytest.mark.parametrize("source, error_type", [
        ("let x = $;", "LexError"),
        ("let x = ;", "ParseError"),
        ("missing", "ReferenceError"),
        ("const c = 1; c = 2;", "ReferenceError"),
        ("let n = 1; n()", "TypeError"),
        ("1 / 0", "ArithmeticError"),
    ])
    def test_run_failures(self, interpreter, source, error_type):
        """Each stage's errors come back as failed results."""
        result = interpreter.run(source)
        assert result.success == False
        assert result.error_type == error_type
        assert result.error
        assert result.value == NULL

    def test_parse_failure_has_no_program(self, interpreter):
        """No partial tree is produced on a parse error."""
        result = interpreter.run("let = 1;")
        assert result.program is None

    def test_eval_failure_keeps_program(self, interpreter):
        """Evaluation errors still report the parsed program."""
        result = interpreter.run("1 / 0")
        assert isinstance(result.program, Program)

    def test_unbounded_recursion(self, interpreter):
        """Recursion without a base case fails cleanly."""
        interpreter.run("function loop() -> Void { loop() }")
        result = interpreter.run("loop()")
        assert result.success == False
        assert result.error_type == "EvalError"
        assert "depth" in result.error

    def test_deep_nesting_is_parse_error(self, interpreter):
        """Deeply nested source fails at the parse stage."""
        result = interpreter.run("(" * 3000 + "1" + ")" * 3000)
        assert result.success == False
        assert result.error_type == "ParseError"
        assert result.program is None

    def test_interpreter_usable_after_failure(self, interpreter):
        """A failed run does not poison the session."""
        interpreter.run("let x = 1;")
        interpreter.run("x / 0")
        assert interpreter.run("x + 1").value == NumberValue(2.0)

    def test_print_output(self, interpreter, printed):
        """print goes to the supplied sink."""
        interpreter.run('print("hello") print(1 + 1)')
        assert printed == ["hello", "2"]

    def test_without_builtins(self):
        """include_builtins=False starts with an empty scope."""
        interpreter = Interpreter(config=InterpreterConfig(include_builtins=False))
        result = interpreter.run("true")
        assert result.error_type == "ReferenceError"

    def test_strict_arity(self):
        """strict_arity reaches the evaluator."""
        interpreter = Interpreter(config=InterpreterConfig(strict_arity=True))
        interpreter.run("function f(a, b) -> Void { a }")
        result = interpreter.run("f(1)")
        assert result.error_type == "TypeError"

    def test_parse_and_evaluate_separately(self, interpreter):
        """The facade exposes the two core entry points."""
        program = interpreter.parse('"text"')
        assert interpreter.evaluate(program) == StringValue("text")


class TestExecutionResult:
    """Tests for ExecutionResult."""

    def test_to_dict_success(self):
        """Values are converted to plain Python."""
        result = ExecutionResult(success=True, value=NumberValue(14.0))
        data = result.to_dict()
        assert data["success"] == True
        assert data["value"] == 14.0
        assert data["display"] == "14"
        assert data["error"] is None

    def test_to_dict_failure(self):
        """Failures carry the error and its category."""
        result = ExecutionResult(success=False, error="Division by zero", error_type="ArithmeticError")
        data = result.to_dict()
        assert data["value"] is None
        assert data["error_type"] == "ArithmeticError"

    def test_to_dict_object(self, interpreter):
        """Objects become dictionaries."""
        result = interpreter.run("let o = { a: 1, b: true };")
        assert result.to_dict()["value"] == {"a": 1.0, "b": True}
        assert result.to_dict()["display"] == "{ a: 1, b: true }"


class TestErrorTaxonomy:
    """Tests for the error hierarchy."""

    def test_hierarchy(self):
        """Every error derives from ServoError; runtime errors from EvalError."""
        for cls in (LexError, ParseError, EvalError):
            assert issubclass(cls, ServoError)
        for cls in (ScopeReferenceError, ScopeTypeError, DivisionByZeroError, InternalError):
            assert issubclass(cls, EvalError)

    def test_categories(self):
        """Categories name the taxonomy, not the Python class."""
        assert ScopeReferenceError("x").category == "ReferenceError"
        assert ScopeTypeError("x").category == "TypeError"
        assert DivisionByZeroError("x").category == "ArithmeticError"

    def test_to_dict(self):
        """Errors serialize with their category."""
        assert LexError("bad").to_dict() == {"error_type": "LexError", "message": "bad"}
