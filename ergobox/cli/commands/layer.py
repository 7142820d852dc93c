"""Layer commands: structural edits to the layers of a project."""

from pathlib import Path
from typing import Annotated

import typer

from ergobox.cli.commands.project import print_layers
from ergobox.cli.decorators import handle_errors
from ergobox.cli.helpers.output import print_success_message, print_warning_message
from ergobox.project.models import KeymapProject
from ergobox.project.persistence import load_project, save_project
from ergobox.project.service import create_project_service


layer_app = typer.Typer(
    name="layer",
    help="""Layer management commands.

Adding, removing and moving layers rewrites every layer key (&mo 2, MO(2), ...)
so it keeps pointing at the same layer. The base layer (0) cannot be removed
or moved.""",
    no_args_is_help=True,
)

ProjectArgument = Annotated[
    Path, typer.Argument(help="Project file (.kb.json)", exists=True, dir_okay=False)
]


def _finish(project_file: Path, before: KeymapProject, after: KeymapProject) -> None:
    if after is before:
        print_warning_message("Nothing changed")
        return
    save_project(after, project_file)
    print_success_message(f"Updated {project_file}")
    print_layers(after)


@layer_app.command(name="add")
@handle_errors
def add(project_file: ProjectArgument) -> None:
    """Append an empty layer."""
    project = load_project(project_file)
    _finish(project_file, project, create_project_service().add_layer(project))


@layer_app.command(name="duplicate")
@handle_errors
def duplicate(
    project_file: ProjectArgument,
    index: Annotated[
        int | None, typer.Argument(help="Layer to copy (default: active layer)")
    ] = None,
) -> None:
    """Append a copy of a layer."""
    project = load_project(project_file)
    _finish(
        project_file, project, create_project_service().duplicate_layer(project, index)
    )


@layer_app.command(name="rename")
@handle_errors
def rename(
    project_file: ProjectArgument,
    index: Annotated[int, typer.Argument(help="Layer index")],
    name: Annotated[str, typer.Argument(help="New layer name")],
) -> None:
    """Rename a layer."""
    project = load_project(project_file)
    _finish(
        project_file, project, create_project_service().rename_layer(project, index, name)
    )


@layer_app.command(name="remove")
@handle_errors
def remove(
    project_file: ProjectArgument,
    index: Annotated[int, typer.Argument(help="Layer index (not 0)")],
) -> None:
    """Remove a layer; keys pointing at it are cleared."""
    project = load_project(project_file)
    _finish(project_file, project, create_project_service().remove_layer(project, index))


@layer_app.command(name="move")
@handle_errors
def move(
    project_file: ProjectArgument,
    from_index: Annotated[int, typer.Argument(help="Layer to move")],
    to_index: Annotated[int, typer.Argument(help="New position")],
) -> None:
    """Move a layer to a new position."""
    project = load_project(project_file)
    _finish(
        project_file,
        project,
        create_project_service().move_layer(project, from_index, to_index),
    )


def register_commands(app: typer.Typer) -> None:
    """Register layer commands with the main app."""
    app.add_typer(layer_app, name="layer")
