"""Keys command: list the key registry palette."""

from typing import Annotated

import typer

from ergobox.cli.decorators import handle_errors
from ergobox.cli.helpers.context import get_codec_from_context
from ergobox.cli.helpers.output import print_table


@handle_errors
def keys(
    ctx: typer.Context,
    group: Annotated[
        str | None, typer.Option("--group", "-g", help="Only show this group")
    ] = None,
) -> None:
    """List the keys that can be assigned with 'bind key'."""
    registry = get_codec_from_context(ctx).registry
    groups = [
        entry
        for entry in registry.groups
        if group is None or entry.title.casefold() == group.casefold()
    ]
    if not groups:
        titles = ", ".join(entry.title for entry in registry.groups)
        raise ValueError(f"Unknown group '{group}'; available: {titles}")

    for entry in groups:
        print_table(
            entry.title,
            ["section", "label", "zmk", "qmk"],
            (
                [section.title, item.label, item.zmk, item.qmk]
                for section in entry.sections
                for item in section.items
            ),
        )


def register_commands(app: typer.Typer) -> None:
    """Register the keys command with the main app."""
    app.command(name="keys")(keys)
