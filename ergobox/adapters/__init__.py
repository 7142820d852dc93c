"""Adapters package for external system interfaces."""

from .template_adapter import TemplateAdapter, create_template_adapter


__all__ = [
    "TemplateAdapter",
    "create_template_adapter",
]
