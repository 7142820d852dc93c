"""Shared model base classes."""

from ergobox.models.base import ErgoboxBaseModel


__all__ = ["ErgoboxBaseModel"]
