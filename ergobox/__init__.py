"""Ergobox - ergogen layout to ZMK and QMK keymap compiler."""

from importlib.metadata import distribution


__version__ = distribution(__package__ or "ergobox").version

__all__ = ["__version__"]
