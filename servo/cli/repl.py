"""REPL command for Servo CLI."""

import click

from servo import __version__
from servo.runtime.interpreter import Interpreter, InterpreterConfig

PROMPT = "> "
EXIT_WORDS = ("exit", "quit")


@click.command()
@click.option('--strict-arity', is_flag=True, help='Reject calls whose argument count differs from the parameters')
def repl_command(strict_arity):
    """Start an interactive session. Declarations persist between lines."""
    interpreter = Interpreter(config=InterpreterConfig(strict_arity=strict_arity))

    click.echo(f"\nServo-Repl v{__version__}")
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            break

        if line.strip() in EXIT_WORDS:
            break
        if not line.strip():
            continue

        result = interpreter.run(line)
        if result.success:
            click.echo(str(result.value))
        else:
            click.echo(f"Error: {result.error_type}: {result.error}", err=True)
