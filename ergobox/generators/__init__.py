"""Firmware source generators for ZMK and QMK."""

from ergobox.generators.base import KeymapExport, RenderedLayer, render_layers
from ergobox.generators.qmk import QmkGenerator, create_qmk_generator
from ergobox.generators.service import (
    ExportService,
    ExportTarget,
    create_export_service,
)
from ergobox.generators.zmk import ZmkGenerator, create_zmk_generator, pin_to_gpio


__all__ = [
    "ExportService",
    "ExportTarget",
    "KeymapExport",
    "QmkGenerator",
    "RenderedLayer",
    "ZmkGenerator",
    "create_export_service",
    "create_qmk_generator",
    "create_zmk_generator",
    "pin_to_gpio",
    "render_layers",
]
