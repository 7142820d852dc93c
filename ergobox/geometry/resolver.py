"""Resolve ergogen-style layout documents into key positions and a wiring matrix.

A document is processed zone by zone. Each zone is placed by its anchor,
columns advance by their spread and accumulate stagger and splay, and every
declared row yields one key per column. An optional mirror directive appends a
reflected copy of every key. Problems that leave a usable result (dangling
references, unmapped nets) are reported as warnings and never abort the pass.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any

import yaml

from ergobox.core.errors import LayoutParseError
from ergobox.geometry.models import (
    DEFAULT_UNIT,
    Bounds,
    Key,
    MatrixDescriptor,
    MatrixLine,
    ResolvedLayout,
)
from ergobox.geometry.utils import (
    ORIGIN,
    Point,
    expand_dots,
    first_set,
    mapping,
    pair,
    parse_distance,
    to_number,
)


logger = logging.getLogger(__name__)

MIRROR_PREFIX = "mirror_"
TRRS_SIGNAL_KEYS = ("A", "B", "C", "D")
_PIN_NAME = re.compile(r"^P\d+$")


@dataclass
class _ResolutionPass:
    """Mutable bookkeeping for a single call to ``GeometryResolver.resolve``."""

    unit: float
    global_rotate: float
    keys: list[Key] = field(default_factory=list)
    key_by_id: dict[str, Key] = field(default_factory=dict)
    rows: list[MatrixLine] = field(default_factory=list)
    cols: list[MatrixLine] = field(default_factory=list)
    row_index: dict[str, int] = field(default_factory=dict)
    col_index: dict[str, int] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    def add_key(self, key: Key) -> None:
        self.keys.append(key)
        self.key_by_id[key.id] = key

    def register_row(self, name: str, net: str) -> None:
        if name not in self.row_index:
            self.row_index[name] = len(self.rows)
            self.rows.append(MatrixLine(name=name, net=net))

    def register_col(self, name: str, net: str) -> None:
        if name not in self.col_index:
            self.col_index[name] = len(self.cols)
            self.cols.append(MatrixLine(name=name, net=net))

    def warn(self, message: str) -> None:
        logger.warning("Layout warning: %s", message)
        self.warnings.append(message)


class GeometryResolver:
    """Turns a deserialized layout document into a ``ResolvedLayout``.

    The resolver keeps no state between calls and may be shared freely.
    """

    def __init__(self, default_unit: float = DEFAULT_UNIT) -> None:
        self.default_unit = default_unit

    def resolve(self, document: Any) -> ResolvedLayout:
        """Resolve a layout document.

        Args:
            document: Nested mappings as produced by a YAML/JSON parser, or None

        Returns:
            ResolvedLayout with keys, matrix, warnings and bounds

        Raises:
            LayoutParseError: If the document is not a mapping
        """
        if document is None:
            return ResolvedLayout()
        if not isinstance(document, dict):
            raise LayoutParseError(
                f"Layout document must be a mapping, got {type(document).__name__}"
            )

        doc = expand_dots(document)
        units = mapping(doc.get("units"))
        points = mapping(doc.get("points"))
        state = _ResolutionPass(
            unit=to_number(units.get("u"), self.default_unit),
            global_rotate=to_number(points.get("rotate"), 0.0),
        )

        footprints = mapping(
            mapping(mapping(doc.get("pcbs")).get("main")).get("footprints")
        )
        pin_map = self._derive_pin_map(footprints)
        trrs_pin = self._find_trrs_pin(footprints)

        for zone_order, (zone_name, zone) in enumerate(
            mapping(points.get("zones")).items()
        ):
            self._resolve_zone(state, zone_name, mapping(zone), zone_order)

        mirror = points.get("mirror")
        if mirror:
            self._mirror_keys(state, mapping(mirror))
            if not trrs_pin:
                state.warn("TRRS pin not found for split QMK configuration")

        self._validate_nets(state, pin_map)

        matrix = MatrixDescriptor(
            rows=state.rows,
            cols=state.cols,
            pin_map=pin_map,
            mirrored=bool(mirror),
            trrs_pin=trrs_pin,
        )
        logger.debug(
            "Resolved %d keys (%d rows, %d columns, %d warnings)",
            len(state.keys),
            len(state.rows),
            len(state.cols),
            len(state.warnings),
        )
        return ResolvedLayout(
            keys=state.keys,
            matrix=matrix,
            warnings=state.warnings,
            bounds=compute_bounds(state.keys),
        )

    def _resolve_zone(
        self,
        state: _ResolutionPass,
        zone_name: str,
        zone: dict[str, Any],
        zone_order: int,
    ) -> None:
        unit = state.unit
        anchor = mapping(zone.get("anchor"))
        anchor_shift = pair(anchor.get("shift") or [0, 0], unit)
        anchor_rotate = to_number(anchor.get("rotate"), 0.0)

        ref_key: Key | None = None
        if anchor.get("ref"):
            ref_key = state.key_by_id.get(str(anchor["ref"]))
            if ref_key is None:
                state.warn(f"Anchor ref {anchor['ref']} not found for zone {zone_name}")

        # A referenced key already carries the global rotation
        base_rotate = ref_key.rot if ref_key else state.global_rotate
        zone_rotate = base_rotate + anchor_rotate + to_number(zone.get("rotate"), 0.0)
        ref_origin = Point(ref_key.x, ref_key.y) if ref_key else ORIGIN
        anchor_point = ref_origin + anchor_shift.rotated(base_rotate + anchor_rotate)

        # Mapping keys are already strings after expand_dots
        rows = mapping(zone.get("rows"))
        for row_name, row_value in rows.items():
            state.register_row(row_name, mapping(row_value).get("row_net") or "")

        zone_key = mapping(zone.get("key"))
        column_x = 0.0
        column_y = 0.0
        column_rotation = zone_rotate

        for col_name, column_value in mapping(zone.get("columns")).items():
            column = mapping(column_value)
            column_key = mapping(column.get("key"))
            col_net = column_key.get("column_net") or ""
            state.register_col(col_name, col_net)

            spread = parse_distance(
                first_set(column_key.get("spread"), zone_key.get("spread"), unit),
                unit,
                fallback=unit,
            )
            stagger = parse_distance(
                first_set(column_key.get("stagger"), zone_key.get("stagger"), 0),
                unit,
            )
            splay = to_number(
                first_set(column_key.get("splay"), zone_key.get("splay"), 0), 0.0
            )
            origin = pair(
                first_set(column_key.get("origin"), zone_key.get("origin"), [0, 0]),
                unit,
            )
            column_rows = mapping(column.get("rows"))

            column_y += stagger
            if splay != 0:
                pivot = Point(column_x + origin.x, column_y + origin.y)
                swung = (Point(column_x, column_y) - pivot).rotated(splay)
                column_x = pivot.x + swung.x
                column_y = pivot.y + swung.y
            column_rotation += splay

            for row_position, (row_name, row_value) in enumerate(rows.items()):
                row_info = mapping(row_value)
                row_entry = column_rows.get(row_name)
                local = Point(column_x, column_y + row_position * unit)
                placed = local.rotated(column_rotation) + anchor_point
                state.add_key(
                    Key(
                        id=f"{zone_name}_{col_name}_{row_name}",
                        zone=zone_name,
                        row=row_name,
                        col=col_name,
                        row_net=row_info.get("row_net") or "",
                        col_net=col_net,
                        x=placed.x,
                        y=placed.y,
                        rot=column_rotation,
                        unit=unit,
                        row_index=state.row_index[row_name],
                        col_index=state.col_index[col_name],
                        zone_order=zone_order,
                        skip=_is_skipped(row_entry),
                    )
                )

            column_x += spread

    def _mirror_keys(self, state: _ResolutionPass, mirror: dict[str, Any]) -> None:
        distance = parse_distance(mirror.get("distance"), state.unit)
        ref_key: Key | None = None
        if mirror.get("ref"):
            ref_key = state.key_by_id.get(str(mirror["ref"]))
            if ref_key is None:
                state.warn(f"Mirror ref {mirror['ref']} not found")
        axis_x = (ref_key.x if ref_key else 0.0) + distance / 2

        for key in list(state.keys):
            state.add_key(
                key.model_copy(
                    update={
                        "id": f"{MIRROR_PREFIX}{key.id}",
                        "x": axis_x + (axis_x - key.x),
                        "rot": -key.rot,
                        "mirror_of": key.id,
                    }
                )
            )

    @staticmethod
    def _derive_pin_map(footprints: dict[str, Any]) -> dict[str, str]:
        params = mapping(mapping(footprints.get("mcu")).get("params"))
        return {
            net: str(pin)
            for pin, net in params.items()
            if isinstance(net, str) and str(pin).startswith("P")
        }

    @staticmethod
    def _find_trrs_pin(footprints: dict[str, Any]) -> str:
        params = mapping(mapping(footprints.get("trrs")).get("params"))
        for name, net in params.items():
            if str(name) in TRRS_SIGNAL_KEYS and isinstance(net, str):
                if _PIN_NAME.match(net):
                    return net
        return ""

    @staticmethod
    def _validate_nets(state: _ResolutionPass, pin_map: dict[str, str]) -> None:
        for row in state.rows:
            if not row.net:
                state.warn(f"Row {row.name} is missing row_net")
            elif row.net not in pin_map:
                state.warn(f"Row net {row.net} has no MCU pin mapping")
        for col in state.cols:
            if not col.net:
                state.warn(f"Column {col.name} is missing column_net")
            elif col.net not in pin_map:
                state.warn(f"Column net {col.net} has no MCU pin mapping")


def _is_skipped(row_entry: Any) -> bool:
    entry = mapping(row_entry)
    return entry.get("skip") is True or mapping(entry.get("key")).get("skip") is True


def compute_bounds(keys: list[Key]) -> Bounds | None:
    """Bounding box with half a key pitch around each center, y flipped for display."""
    if not keys:
        return None
    return Bounds(
        min_x=min(key.x - key.unit / 2 for key in keys),
        max_x=max(key.x + key.unit / 2 for key in keys),
        min_y=min(-key.y - key.unit / 2 for key in keys),
        max_y=max(-key.y + key.unit / 2 for key in keys),
    )


def load_layout_text(text: str) -> Any:
    """Deserialize layout YAML text.

    Returns:
        The deserialized document, or None for blank text

    Raises:
        LayoutParseError: If the text is not valid YAML
    """
    if not text.strip():
        return None
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise LayoutParseError(f"Failed to parse YAML: {e}") from e


def create_geometry_resolver(default_unit: float = DEFAULT_UNIT) -> GeometryResolver:
    """Create a GeometryResolver instance.

    Returns:
        GeometryResolver instance
    """
    return GeometryResolver(default_unit=default_unit)


def resolve_layout(document: Any) -> ResolvedLayout:
    """Resolve a deserialized layout document with default settings."""
    return create_geometry_resolver().resolve(document)
