"""Inspection commands for Servo CLI: dump tokens or the syntax tree."""

import json
from pathlib import Path

import click

from servo.errors import ServoError
from servo.frontend.lexer import tokenize
from servo.frontend.parser import parse


@click.command()
@click.argument('source', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def tokens_command(ctx, source):
    """Print one line per token: KIND text."""
    try:
        tokens = tokenize(Path(source).read_text(encoding="utf-8"))
    except ServoError as e:
        click.echo(f"Error: {e.category}: {e.message}", err=True)
        ctx.exit(1)

    for token in tokens:
        click.echo(f"{token.kind.name} {token.text}")


@click.command()
@click.argument('source', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def ast_command(ctx, source):
    """Print the syntax tree as indented JSON."""
    try:
        program = parse(Path(source).read_text(encoding="utf-8"))
    except ServoError as e:
        click.echo(f"Error: {e.category}: {e.message}", err=True)
        ctx.exit(1)

    click.echo(json.dumps(program.to_dict(), indent=2))
