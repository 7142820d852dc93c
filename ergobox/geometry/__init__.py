"""Layout geometry: document resolution, key models and key ordering."""

from ergobox.geometry.models import (
    DEFAULT_UNIT,
    Bounds,
    Key,
    MatrixDescriptor,
    MatrixLine,
    ResolvedLayout,
)
from ergobox.geometry.ordering import capture_order
from ergobox.geometry.resolver import (
    GeometryResolver,
    compute_bounds,
    create_geometry_resolver,
    load_layout_text,
    resolve_layout,
)


__all__ = [
    "DEFAULT_UNIT",
    "Bounds",
    "Key",
    "MatrixDescriptor",
    "MatrixLine",
    "ResolvedLayout",
    "GeometryResolver",
    "capture_order",
    "compute_bounds",
    "create_geometry_resolver",
    "load_layout_text",
    "resolve_layout",
]
