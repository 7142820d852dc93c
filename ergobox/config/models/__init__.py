"""Configuration models."""

from ergobox.config.models.user import UserConfigData


__all__ = ["UserConfigData"]
