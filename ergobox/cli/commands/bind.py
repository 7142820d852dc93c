"""Bind commands: assign actions to keys of a project layer."""

from pathlib import Path
from typing import Annotated

import typer

from ergobox.bindings.models import MODIFIER_ORDER, Binding, LayerMode
from ergobox.bindings.unicode import unicode_binding
from ergobox.cli.decorators import handle_errors
from ergobox.cli.helpers.context import get_codec_from_context, get_settings
from ergobox.cli.helpers.output import (
    print_error_message,
    print_list_item,
    print_success_message,
)
from ergobox.geometry.ordering import capture_order
from ergobox.project.models import KeymapProject
from ergobox.project.persistence import load_project, save_project
from ergobox.project.service import clear_binding, create_project_service


bind_app = typer.Typer(
    name="bind",
    help="""Key assignment commands.

Every assignment stores a ZMK and a QMK binding for the same action.
Use 'bind raw' to edit either string directly.""",
    no_args_is_help=True,
)

ProjectArgument = Annotated[
    Path, typer.Argument(help="Project file (.kb.json)", exists=True, dir_okay=False)
]
KeyIdArgument = Annotated[str, typer.Argument(help="Key id, e.g. main_inner_home")]
LayerOption = Annotated[
    int | None,
    typer.Option("--layer", "-l", help="Layer index (default: active layer)"),
]


def _assign(
    project_file: Path,
    project: KeymapProject,
    key_id: str,
    binding: Binding,
    layer: int | None,
) -> None:
    updated = create_project_service().set_binding(project, key_id, binding, layer)
    save_project(updated, project_file)
    index = updated.active_layer if layer is None else layer
    print_success_message(
        f"{key_id} on layer {index}: zmk '{binding.zmk}', qmk '{binding.qmk}'"
    )


def _check_modifiers(modifiers: list[str]) -> list[str]:
    unknown = [modifier for modifier in modifiers if modifier not in MODIFIER_ORDER]
    if unknown:
        raise ValueError(
            f"Unknown modifier(s) {', '.join(unknown)}; "
            f"expected one of {', '.join(MODIFIER_ORDER)}"
        )
    return modifiers


@bind_app.command(name="key")
@handle_errors
def bind_key(
    ctx: typer.Context,
    project_file: ProjectArgument,
    key_id: KeyIdArgument,
    name: Annotated[
        str, typer.Argument(help="Key label or binding: A, Esc, KC_VOLU, '&kp TAB'")
    ],
    layer: LayerOption = None,
    modifiers: Annotated[
        list[str] | None,
        typer.Option("--mod", "-m", help="Modifier to hold (lctrl, lshift, ...)"),
    ] = None,
) -> None:
    """Assign a key from the registry, optionally wrapped in modifiers."""
    codec = get_codec_from_context(ctx)
    item = codec.registry.find(name)
    if item is None:
        raise ValueError(f"Unknown key '{name}'; run 'ergobox keys' for the list")
    binding = codec.item_binding(item, _check_modifiers(modifiers or []))
    _assign(project_file, load_project(project_file), key_id, binding, layer)


@bind_app.command(name="layer")
@handle_errors
def bind_layer(
    ctx: typer.Context,
    project_file: ProjectArgument,
    key_id: KeyIdArgument,
    target: Annotated[str, typer.Argument(help="Target layer index or name")],
    mode: Annotated[
        LayerMode | None,
        typer.Option("--mode", help="hold (&mo/MO), toggle (&tog/TG), once (&sl/OSL)"),
    ] = None,
    layer: LayerOption = None,
) -> None:
    """Assign a key that activates another layer."""
    codec = get_codec_from_context(ctx)
    project = load_project(project_file)
    names = project.layer_names
    palette = codec.layer_palette(names, mode or get_settings(ctx).layer_mode)

    if target.isdigit():
        position = int(target) - 1
    else:
        position = next(
            (index for index, item in enumerate(palette) if item.label == target), -1
        )
    if not palette:
        raise ValueError("The project has no layer besides the base layer")
    if not 0 <= position < len(palette):
        raise ValueError(
            f"No layer '{target}' to bind; layer keys target layers 1-{len(palette)}"
        )
    item = palette[position]
    _assign(project_file, project, key_id, Binding(zmk=item.zmk, qmk=item.qmk), layer)


@bind_app.command(name="unicode")
@handle_errors
def bind_unicode(
    project_file: ProjectArgument,
    key_id: KeyIdArgument,
    code_point: Annotated[str, typer.Argument(help="Code point: 1F600, U+1F600, 0x1F600")],
    layer: LayerOption = None,
) -> None:
    """Assign a key that types a unicode character."""
    binding, message = unicode_binding(code_point)
    if binding is None:
        print_error_message(message)
        raise typer.Exit(1)
    _assign(project_file, load_project(project_file), key_id, binding, layer)


@bind_app.command(name="raw")
@handle_errors
def bind_raw(
    project_file: ProjectArgument,
    key_id: KeyIdArgument,
    zmk: Annotated[str | None, typer.Option("--zmk", help="ZMK binding text")] = None,
    qmk: Annotated[str | None, typer.Option("--qmk", help="QMK binding text")] = None,
    layer: LayerOption = None,
) -> None:
    """Set the binding text of either dialect directly."""
    if zmk is None and qmk is None:
        raise ValueError("Give --zmk and/or --qmk")
    project = load_project(project_file)
    index = project.active_layer if layer is None else layer
    current = project.get_layer(index)
    existing = (current.binding_for(key_id) if current else None) or Binding()
    binding = Binding(
        zmk=existing.zmk if zmk is None else zmk.strip(),
        qmk=existing.qmk if qmk is None else qmk.strip(),
    )
    _assign(project_file, project, key_id, binding, layer)


@bind_app.command(name="clear")
@handle_errors
def bind_clear(
    project_file: ProjectArgument,
    key_id: KeyIdArgument,
    layer: LayerOption = None,
) -> None:
    """Set a key to no action."""
    _assign(project_file, load_project(project_file), key_id, clear_binding(), layer)


@bind_app.command(name="fill")
@handle_errors
def bind_fill(
    ctx: typer.Context,
    project_file: ProjectArgument,
    names: Annotated[list[str], typer.Argument(help="Keys to assign, in order")],
    layer: LayerOption = None,
    start: Annotated[
        str | None, typer.Option("--start", help="Key id to start from")
    ] = None,
    row_descending: Annotated[
        bool, typer.Option("--row-descending", help="Walk rows bottom to top")
    ] = False,
    col_descending: Annotated[
        bool, typer.Option("--col-descending", help="Walk columns right to left")
    ] = False,
) -> None:
    """Assign registry keys to consecutive keys in capture order."""
    codec = get_codec_from_context(ctx)
    project = load_project(project_file)
    if project.parsed is None or project.parsed.matrix is None:
        raise ValueError("Project has no resolved layout")

    order = capture_order(
        project.parsed.keys,
        mirrored=project.parsed.matrix.mirrored,
        row_descending=row_descending,
        col_descending=col_descending,
    )
    ids = [key.id for key in order]
    offset = 0
    if start is not None:
        if start not in ids:
            raise ValueError(f"Key {start} does not exist in the layout")
        offset = ids.index(start)
    if len(names) > len(ids) - offset:
        raise ValueError(f"Only {len(ids) - offset} keys left to fill")

    items = []
    for name in names:
        item = codec.registry.find(name)
        if item is None:
            raise ValueError(f"Unknown key '{name}'; run 'ergobox keys' for the list")
        items.append(item)

    service = create_project_service()
    for key_id, item in zip(ids[offset:], items, strict=False):
        project = service.set_binding(project, key_id, codec.item_binding(item), layer)
        print_list_item(f"{key_id}: {item.label}")
    save_project(project, project_file)
    print_success_message(f"Assigned {len(items)} keys")


def register_commands(app: typer.Typer) -> None:
    """Register bind commands with the main app."""
    app.add_typer(bind_app, name="bind")
