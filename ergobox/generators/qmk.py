"""QMK keymap.c, info.json, config.h and rules.mk rendering."""

import json
import logging
from collections.abc import Sequence

from ergobox.adapters.template_adapter import TemplateAdapter, create_template_adapter
from ergobox.bindings.magic import has_unicode_binding
from ergobox.bindings.models import Dialect, get_unicode_os
from ergobox.generators.base import KeymapExport, render_layers
from ergobox.geometry.models import DEFAULT_UNIT, Key, MatrixDescriptor


logger = logging.getLogger(__name__)

RULES_MK_LINES = (
    "SPLIT_KEYBOARD = yes",
    "SPLIT_TRANSPORT = serial",
    "SERIAL_DRIVER = software",
)


def _layout_coordinate(value: float, unit: float) -> float | int:
    # Whole numbers are written without a fraction, as QMK's own files do
    rounded = round(value / unit, 2)
    return int(rounded) if rounded.is_integer() else rounded


class QmkGenerator:
    """Renders the QMK keyboard and keymap sources."""

    KEYMAP_TEMPLATE = "qmk_keymap.c.j2"
    CONFIG_TEMPLATE = "qmk_config.h.j2"
    RULES_TEMPLATE = "qmk_rules.mk.j2"

    def __init__(
        self,
        template_adapter: TemplateAdapter,
        keyboard_name: str = "custom-ergogen",
        manufacturer: str = "custom",
        maintainer: str = "you",
    ) -> None:
        self.template_adapter = template_adapter
        self.keyboard_name = keyboard_name
        self.manufacturer = manufacturer
        self.maintainer = maintainer

    def generate_keymap(self, export: KeymapExport) -> str:
        layers = render_layers(export, Dialect.QMK)
        unicode_mode = None
        if has_unicode_binding(export.layers, Dialect.QMK):
            unicode_mode = get_unicode_os(export.unicode_os).qmk

        logger.debug("Rendering QMK keymap with %d layers", len(layers))
        return self.template_adapter.render_template(
            self.KEYMAP_TEMPLATE,
            {
                "layers": layers,
                "default_layer": export.safe_default_layer,
                "unicode_mode": unicode_mode,
            },
        )

    def generate_info(self, keys: Sequence[Key], matrix: MatrixDescriptor) -> str:
        """Render info.json with pins and a LAYOUT in key units."""
        unit = keys[0].unit if keys and keys[0].unit else DEFAULT_UNIT
        layout = [
            {
                "label": key.id,
                "x": _layout_coordinate(key.x, unit),
                "y": _layout_coordinate(key.y, unit),
            }
            for key in keys
        ]
        info = {
            "keyboard_name": self.keyboard_name,
            "manufacturer": self.manufacturer,
            "maintainer": self.maintainer,
            "matrix_pins": {
                "rows": [matrix.pin_for(row.net) for row in matrix.rows],
                "cols": [matrix.pin_for(col.net) for col in matrix.cols],
            },
            "diode_direction": "COL2ROW",
            "split": matrix.mirrored,
            "layouts": {"LAYOUT": {"layout": layout}},
        }
        return json.dumps(info, indent=2, ensure_ascii=False)

    def generate_config_h(self, matrix: MatrixDescriptor | None) -> str:
        trrs_pin = matrix.trrs_pin if matrix is not None else None
        return self.template_adapter.render_template(
            self.CONFIG_TEMPLATE, {"trrs_pin": trrs_pin}
        )

    def generate_rules_mk(self) -> str:
        return self.template_adapter.render_template(
            self.RULES_TEMPLATE, {"rules": RULES_MK_LINES}
        )

    def generate(self, export: KeymapExport) -> dict[str, str]:
        """All QMK artifacts keyed by file name."""
        return {
            "keymap.c": self.generate_keymap(export),
            "info.json": self.generate_info(export.keys, export.matrix),
            "config.h": self.generate_config_h(export.matrix),
            "rules.mk": self.generate_rules_mk(),
        }


def create_qmk_generator(
    keyboard_name: str = "custom-ergogen",
    manufacturer: str = "custom",
    maintainer: str = "you",
    template_adapter: TemplateAdapter | None = None,
) -> QmkGenerator:
    return QmkGenerator(
        template_adapter or create_template_adapter(),
        keyboard_name=keyboard_name,
        manufacturer=manufacturer,
        maintainer=maintainer,
    )
