"""Servo CLI Package - run files, start a REPL, inspect tokens and trees."""

import logging

import click

from servo import __version__
from servo.cli.run import run_command
from servo.cli.repl import repl_command
from servo.cli.inspect import tokens_command, ast_command


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def main(verbose):
    """Servo - a small interpreted scripting language."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")


@main.command("version")
def version_command():
    """Show version info."""
    click.echo(f"Servo v{__version__}")


main.add_command(run_command, "run")
main.add_command(repl_command, "repl")
main.add_command(tokens_command, "tokens")
main.add_command(ast_command, "ast")

__all__ = [
    "main",
    "run_command",
    "repl_command",
    "tokens_command",
    "ast_command",
]
