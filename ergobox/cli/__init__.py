"""Command-line interface for Ergobox using Typer."""

from ergobox.cli.app import AppContext, app, main
from ergobox.cli.commands import register_all_commands


register_all_commands(app)

__all__ = ["AppContext", "app", "main"]
