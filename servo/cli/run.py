"""Run command for Servo CLI."""

import json
from pathlib import Path

import click

from servo.runtime.interpreter import Interpreter, InterpreterConfig


@click.command()
@click.argument('source', type=click.Path(exists=True, dir_okay=False))
@click.option('--strict-arity', is_flag=True, help='Reject calls whose argument count differs from the parameters')
@click.option('--json-output', '-j', 'json_output', is_flag=True, help='Output as JSON')
@click.pass_context
def run_command(ctx, source, strict_arity, json_output):
    """Run a Servo source file and print the value of its last statement."""
    text = Path(source).read_text(encoding="utf-8")

    interpreter = Interpreter(config=InterpreterConfig(strict_arity=strict_arity))
    result = interpreter.run(text)

    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.success:
        click.echo(str(result.value))
    else:
        click.echo(f"Error: {result.error_type}: {result.error}", err=True)

    if not result.success:
        ctx.exit(1)
