"""ZMK keymap and kscan overlay rendering."""

import logging
import re

from ergobox.adapters.template_adapter import TemplateAdapter, create_template_adapter
from ergobox.bindings.magic import has_unicode_binding
from ergobox.bindings.models import Dialect, get_unicode_os
from ergobox.generators.base import KeymapExport, render_layers
from ergobox.geometry.models import MatrixDescriptor


logger = logging.getLogger(__name__)

_NRF_PIN = re.compile(r"^P(\d+)$")


def pin_to_gpio(pin: str | None) -> str | None:
    """Map ``P<n>`` to a gpio0 specifier; other pin names pass through."""
    if not pin:
        return None
    if match := _NRF_PIN.match(pin):
        return f"&gpio0 {match.group(1)} GPIO_ACTIVE_HIGH"
    return pin


class ZmkGenerator:
    """Renders ZMK ``.keymap`` and board overlay sources."""

    KEYMAP_TEMPLATE = "zmk_keymap.keymap.j2"
    OVERLAY_TEMPLATE = "zmk_kscan.overlay.j2"

    def __init__(self, template_adapter: TemplateAdapter) -> None:
        self.template_adapter = template_adapter

    def generate_keymap(self, export: KeymapExport) -> str:
        layers = render_layers(export, Dialect.ZMK)
        unicode_mode = None
        if has_unicode_binding(export.layers, Dialect.ZMK):
            unicode_mode = get_unicode_os(export.unicode_os).zmk

        logger.debug("Rendering ZMK keymap with %d layers", len(layers))
        return self.template_adapter.render_template(
            self.KEYMAP_TEMPLATE,
            {
                "layers": layers,
                "default_layer": export.safe_default_layer,
                "unicode_mode": unicode_mode,
            },
        )

    def generate_overlay(self, matrix: MatrixDescriptor) -> str:
        """Render the kscan GPIO matrix; nets without a pin are left out."""
        row_pins = [
            gpio
            for row in matrix.rows
            if (gpio := pin_to_gpio(matrix.pin_for(row.net)))
        ]
        col_pins = [
            gpio
            for col in matrix.cols
            if (gpio := pin_to_gpio(matrix.pin_for(col.net)))
        ]
        return self.template_adapter.render_template(
            self.OVERLAY_TEMPLATE, {"row_pins": row_pins, "col_pins": col_pins}
        )

    def generate(self, export: KeymapExport, name: str) -> dict[str, str]:
        """All ZMK artifacts keyed by file name."""
        overlay = self.generate_overlay(export.matrix)
        return {
            f"{name}.keymap": self.generate_keymap(export),
            f"{name}_left.overlay": overlay,
            f"{name}_right.overlay": overlay,
        }


def create_zmk_generator(
    template_adapter: TemplateAdapter | None = None,
) -> ZmkGenerator:
    return ZmkGenerator(template_adapter or create_template_adapter())
