"""Project commands: create, re-parse, inspect and configure keymap projects."""

from pathlib import Path
from typing import Annotated

import typer

from ergobox.bindings.codec import BindingCodec
from ergobox.bindings.models import Dialect
from ergobox.cli.decorators import handle_errors
from ergobox.cli.helpers.context import get_codec_from_context, get_settings
from ergobox.cli.helpers.output import (
    print_info_message,
    print_list_item,
    print_success_message,
    print_table,
    print_warning_message,
)
from ergobox.project.models import KeymapProject
from ergobox.project.persistence import load_project, save_project
from ergobox.project.service import create_project_service


project_app = typer.Typer(
    name="project",
    help="""Keymap project commands.

A project (.kb.json) stores the layout source, its resolved keys and matrix,
the keymap layers and the per-dialect export settings.""",
    no_args_is_help=True,
)

ProjectArgument = Annotated[
    Path, typer.Argument(help="Project file (.kb.json)", dir_okay=False)
]
LayoutArgument = Annotated[
    Path, typer.Argument(help="Layout YAML file", exists=True, dir_okay=False)
]


def print_layers(project: KeymapProject) -> None:
    """Print the layer list with the active and default layers marked."""
    for index, layer in enumerate(project.layers):
        markers = []
        if index == project.active_layer:
            markers.append("active")
        for dialect in Dialect:
            if index == project.default_layer(dialect):
                markers.append(f"{dialect.value} default")
        suffix = f" ({', '.join(markers)})" if markers else ""
        print_list_item(f"{index}: {layer.name}{suffix}")


def print_layer_bindings(
    project: KeymapProject, codec: BindingCodec, index: int
) -> None:
    layer = project.layers[index]
    keys = project.parsed.visible_keys if project.parsed else []
    names = project.layer_names
    rows = []
    for key in keys:
        binding = layer.binding_for(key.id)
        if binding is None:
            continue
        rows.append([key.id, codec.key_label(binding, names), binding.zmk, binding.qmk])
    print_table(f"Layer {index}: {layer.name}", ["key", "label", "zmk", "qmk"], rows)


@project_app.command(name="init")
@handle_errors
def init(
    ctx: typer.Context,
    layout_file: LayoutArgument,
    output: Annotated[
        Path, typer.Option("-o", "--output", help="Project file to create")
    ] = Path("keyboard-config.kb.json"),
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite an existing project file")
    ] = False,
) -> None:
    """Resolve a layout and create a project with a Base layer."""
    if output.exists() and not force:
        raise ValueError(f"{output} already exists; use --force to overwrite")

    settings = get_settings(ctx)
    service = create_project_service()
    project = service.create_project(
        layout_file.read_text(encoding="utf-8"),
        unicode_os=settings.unicode_os,
        hold_letters=settings.magic_hold_letters,
    )
    save_project(project, output)

    keys = len(project.parsed.visible_keys) if project.parsed else 0
    print_success_message(f"Created {output} with {keys} keys")
    for warning in project.parsed.warnings if project.parsed else []:
        print_warning_message(warning)


@project_app.command(name="reparse")
@handle_errors
def reparse(project_file: ProjectArgument, layout_file: LayoutArgument) -> None:
    """Replace the geometry of a project and keep its layers."""
    service = create_project_service()
    project = service.reparse(
        load_project(project_file), layout_file.read_text(encoding="utf-8")
    )
    save_project(project, project_file)

    keys = len(project.parsed.visible_keys) if project.parsed else 0
    print_success_message(f"Re-parsed {project_file}: {keys} keys")
    for warning in project.parsed.warnings if project.parsed else []:
        print_warning_message(warning)


@project_app.command(name="show")
@handle_errors
def show(
    ctx: typer.Context,
    project_file: ProjectArgument,
    layer: Annotated[
        int | None, typer.Option("--layer", "-l", help="Only show this layer")
    ] = None,
) -> None:
    """Show layers, settings and per-key labels of a project."""
    project = load_project(project_file)
    codec = get_codec_from_context(ctx)

    print_info_message(f"Layers of {project_file}:")
    print_layers(project)
    print_info_message(
        "Unicode OS: "
        + ", ".join(f"{d.value}={project.unicode_os(d)}" for d in Dialect)
    )
    print_info_message(f"Magic hold letters: {' '.join(project.magic.hold_letters)}")

    if layer is not None and project.get_layer(layer) is None:
        raise ValueError(f"Layer {layer} does not exist")
    indices = [layer] if layer is not None else range(len(project.layers))
    for index in indices:
        print_layer_bindings(project, codec, index)


@project_app.command(name="configure")
@handle_errors
def configure(
    project_file: ProjectArgument,
    default_layer_zmk: Annotated[
        int | None, typer.Option("--default-layer-zmk", help="ZMK power-on layer")
    ] = None,
    default_layer_qmk: Annotated[
        int | None, typer.Option("--default-layer-qmk", help="QMK power-on layer")
    ] = None,
    unicode_os_zmk: Annotated[
        str | None, typer.Option("--unicode-os-zmk", help="ZMK unicode input mode")
    ] = None,
    unicode_os_qmk: Annotated[
        str | None, typer.Option("--unicode-os-qmk", help="QMK unicode input mode")
    ] = None,
    hold_letters: Annotated[
        str | None,
        typer.Option(
            "--hold-letters", help="Magic layer letters, comma separated (e.g. A,X,C)"
        ),
    ] = None,
) -> None:
    """Change the export settings of a project."""
    service = create_project_service()
    project = load_project(project_file)

    if default_layer_zmk is not None:
        project = service.set_default_layer(project, Dialect.ZMK, default_layer_zmk)
    if default_layer_qmk is not None:
        project = service.set_default_layer(project, Dialect.QMK, default_layer_qmk)
    if unicode_os_zmk is not None:
        project = service.set_unicode_os(project, Dialect.ZMK, unicode_os_zmk)
    if unicode_os_qmk is not None:
        project = service.set_unicode_os(project, Dialect.QMK, unicode_os_qmk)
    if hold_letters is not None:
        project = service.set_hold_letters(project, hold_letters.split(","))

    save_project(project, project_file)
    print_success_message(f"Updated {project_file}")
    print_layers(project)


def register_commands(app: typer.Typer) -> None:
    """Register project commands with the main app."""
    app.add_typer(project_app, name="project")
