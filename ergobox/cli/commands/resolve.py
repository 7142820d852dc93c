"""Resolve command: show the keys and matrix described by a layout file."""

import json
from pathlib import Path
from typing import Annotated

import typer

from ergobox.cli.decorators import handle_errors
from ergobox.cli.helpers.output import (
    print_info_message,
    print_table,
    print_warning_message,
)
from ergobox.geometry.models import ResolvedLayout
from ergobox.project.service import create_project_service


def _format_number(value: float) -> str:
    return f"{value:.2f}"


def print_layout(layout: ResolvedLayout, show_skipped: bool = False) -> None:
    """Print keys, matrix wiring and warnings of a resolved layout."""
    keys = layout.export_keys(include_skipped=show_skipped)
    print_table(
        "Keys",
        ["id", "zone", "col", "row", "x", "y", "rot", "col net", "row net"],
        (
            [
                key.id + (" (skip)" if key.skip else ""),
                key.zone,
                key.col,
                key.row,
                _format_number(key.x),
                _format_number(key.y),
                _format_number(key.rot),
                key.col_net,
                key.row_net,
            ]
            for key in keys
        ),
    )

    matrix = layout.matrix
    if matrix is not None:
        lines = [("row", line) for line in matrix.rows] + [
            ("col", line) for line in matrix.cols
        ]
        print_table(
            "Matrix",
            ["kind", "name", "net", "pin"],
            (
                [kind, line.name, line.net, matrix.pin_for(line.net) or "-"]
                for kind, line in lines
            ),
        )
        split = "split (mirrored)" if matrix.mirrored else "unibody"
        trrs = f", TRRS pin {matrix.trrs_pin}" if matrix.trrs_pin else ""
        print_info_message(f"{len(keys)} keys, {split}{trrs}")

    for warning in layout.warnings:
        print_warning_message(warning)


@handle_errors
def resolve(
    layout_file: Annotated[
        Path, typer.Argument(help="Layout YAML file", exists=True, dir_okay=False)
    ],
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the resolved layout as JSON")
    ] = False,
    show_skipped: Annotated[
        bool, typer.Option("--show-skipped", help="Include skipped matrix positions")
    ] = False,
) -> None:
    """Resolve a layout file into keys, matrix and warnings."""
    service = create_project_service()
    layout = service.resolve_text(layout_file.read_text(encoding="utf-8"))

    if as_json:
        data = layout.to_dict_full()
        data["keys"] = [
            key.to_dict_full() for key in layout.export_keys(include_skipped=show_skipped)
        ]
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    print_layout(layout, show_skipped=show_skipped)


def register_commands(app: typer.Typer) -> None:
    """Register the resolve command with the main app."""
    app.command(name="resolve")(resolve)
