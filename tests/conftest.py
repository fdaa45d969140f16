"""Test fixtures for the Servo test suite."""
import pytest
import sys
from pathlib import Path
from typing import List

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from servo.frontend.parser import parse
from servo.runtime.builtins import create_global_environment, default_builtins
from servo.runtime.environment import Environment
from servo.runtime.evaluator import evaluate
from servo.runtime.interpreter import Interpreter


@pytest.fixture
def printed() -> List[str]:
    """Collects everything the print built-in writes."""
    return []


@pytest.fixture
def global_env(printed) -> Environment:
    """Global scope with the default built-ins, print captured."""
    return create_global_environment(default_builtins(output=printed.append))


@pytest.fixture
def run(global_env):
    """Parse and evaluate source against the shared global scope."""
    def _run(source: str):
        return evaluate(parse(source), global_env)
    return _run


@pytest.fixture
def interpreter(printed) -> Interpreter:
    """Interpreter with print captured."""
    return Interpreter(output=printed.append)


@pytest.fixture
def program_file(tmp_path):
    """Write source text to a temporary .servo file and return its path."""
    def _write(source: str, name: str = "program.servo") -> str:
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return str(path)
    return _write
