"""Numeric and document helpers used by the geometry resolver."""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """Simple class representing a 2d point."""

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def rotated(self, degrees: float) -> "Point":
        """Rotate counter-clockwise around the origin."""
        radians = math.radians(degrees)
        cos = math.cos(radians)
        sin = math.sin(radians)
        return Point(self.x * cos - self.y * sin, self.x * sin + self.y * cos)


ORIGIN = Point(0.0, 0.0)


def to_number(value: Any, fallback: float = 0.0) -> float:
    """Coerce a scalar document value to a finite float.

    Missing values, non-numeric strings and non-finite numbers yield ``fallback``.
    Empty strings count as zero.
    """
    if value is None:
        return fallback
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return fallback
    else:
        return fallback
    return number if math.isfinite(number) else fallback


def parse_distance(value: Any, unit: float, fallback: float = 0.0) -> float:
    """Parse a distance given as a number, a numeric string or ``"<n>u"``.

    Examples:
        >>> parse_distance("2u", 19.05)
        38.1
        >>> parse_distance(7, 19.05)
        7.0
    """
    if isinstance(value, str) and value.strip().endswith("u"):
        return to_number(value.strip()[:-1], 0.0) * unit
    if isinstance(value, int | float | str) and not isinstance(value, bool):
        return to_number(value, fallback)
    return fallback


def pair(value: Any, unit: float) -> Point:
    """Read a ``[x, y]`` document pair as a point; missing members are zero."""
    if not isinstance(value, list | tuple):
        return ORIGIN
    x = parse_distance(value[0], unit) if len(value) > 0 else 0.0
    y = parse_distance(value[1], unit) if len(value) > 1 else 0.0
    return Point(x, y)


def first_set(*values: Any) -> Any:
    """Return the first value that is not None."""
    return next((value for value in values if value is not None), None)


def mapping(value: Any) -> dict[str, Any]:
    """Return ``value`` when it is a mapping, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def _merge_value(target: Any, value: Any) -> Any:
    if not target:
        return value
    if isinstance(target, dict) and isinstance(value, dict):
        return {**target, **value}
    return value


def expand_dots(node: Any) -> Any:
    """Expand dotted mapping keys into nested mappings.

    ``{"points.zones.main": {...}}`` becomes
    ``{"points": {"zones": {"main": {...}}}}``; sibling mappings that end up at
    the same path are merged shallowly.
    """
    if isinstance(node, list):
        return [expand_dots(item) for item in node]
    if not isinstance(node, dict):
        return node

    output: dict[str, Any] = {}
    for raw_key, value in node.items():
        key = str(raw_key)
        expanded = expand_dots(value)
        if "." not in key:
            output[key] = _merge_value(output.get(key), expanded)
            continue

        *parents, leaf = key.split(".")
        cursor = output
        for part in parents:
            if not isinstance(cursor.get(part), dict):
                cursor[part] = {}
            cursor = cursor[part]
        cursor[leaf] = _merge_value(cursor.get(leaf), expanded)
    return output
