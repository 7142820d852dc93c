"""Export command: write ZMK and QMK sources for a project."""

from pathlib import Path
from typing import Annotated

import typer

from ergobox.cli.decorators import handle_errors
from ergobox.cli.helpers.context import get_settings
from ergobox.cli.helpers.output import print_list_item, print_success_message
from ergobox.generators.service import ExportTarget, create_export_service
from ergobox.project.persistence import load_project


@handle_errors
def export(
    ctx: typer.Context,
    project_file: Annotated[
        Path,
        typer.Argument(help="Project file (.kb.json)", exists=True, dir_okay=False),
    ],
    output_dir: Annotated[
        Path, typer.Argument(help="Directory receiving zmk/ and qmk/", file_okay=False)
    ],
    target: Annotated[
        ExportTarget, typer.Option("--target", "-t", help="Firmware to export")
    ] = ExportTarget.ALL,
    include_skipped: Annotated[
        bool,
        typer.Option("--include-skipped", help="Emit skipped matrix positions too"),
    ] = False,
    name: Annotated[
        str | None,
        typer.Option("--name", help="Keyboard name (default: from configuration)"),
    ] = None,
) -> None:
    """Render firmware sources for a project."""
    settings = get_settings(ctx)
    service = create_export_service(
        keyboard_name=name or settings.keyboard_name,
        manufacturer=settings.manufacturer,
        maintainer=settings.maintainer,
    )
    written = service.write(
        load_project(project_file), output_dir, target, include_skipped
    )
    print_success_message(f"Wrote {len(written)} files to {output_dir}")
    for path in written:
        print_list_item(str(path))


def register_commands(app: typer.Typer) -> None:
    """Register the export command with the main app."""
    app.command(name="export")(export)
