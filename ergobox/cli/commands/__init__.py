"""CLI command modules."""

import typer

from ergobox.cli.commands.bind import register_commands as register_bind_commands
from ergobox.cli.commands.export import register_commands as register_export_commands
from ergobox.cli.commands.keys import register_commands as register_keys_commands
from ergobox.cli.commands.layer import register_commands as register_layer_commands
from ergobox.cli.commands.project import (
    register_commands as register_project_commands,
)
from ergobox.cli.commands.resolve import (
    register_commands as register_resolve_commands,
)


def register_all_commands(app: typer.Typer) -> None:
    """Register all CLI commands with the main app.

    Args:
        app: The main Typer app
    """
    register_resolve_commands(app)
    register_project_commands(app)
    register_layer_commands(app)
    register_bind_commands(app)
    register_export_commands(app)
    register_keys_commands(app)
