"""Geometry models produced by a layout resolution pass."""

from pydantic import ConfigDict, Field

from ergobox.models.base import ErgoboxBaseModel


DEFAULT_UNIT = 19.05


class Key(ErgoboxBaseModel):
    """A resolved physical key (or skipped matrix position)."""

    model_config = ConfigDict(frozen=True)

    id: str
    zone: str
    row: str
    col: str
    row_net: str = ""
    col_net: str = ""
    x: float
    y: float
    rot: float = 0.0
    unit: float = DEFAULT_UNIT
    row_index: int = Field(alias="rowIndex")
    col_index: int = Field(alias="colIndex")
    zone_order: int = Field(default=0, alias="zoneOrder")
    skip: bool = False
    mirror_of: str | None = None

    @property
    def is_mirrored(self) -> bool:
        return self.mirror_of is not None


class MatrixLine(ErgoboxBaseModel):
    """A matrix row or column and the net that wires it."""

    name: str
    net: str = ""


class MatrixDescriptor(ErgoboxBaseModel):
    """Electrical matrix derived from the layout document."""

    rows: list[MatrixLine] = Field(default_factory=list)
    cols: list[MatrixLine] = Field(default_factory=list)
    pin_map: dict[str, str] = Field(default_factory=dict, alias="pinMap")
    mirrored: bool = False
    trrs_pin: str = Field(default="", alias="trrsPin")

    def pin_for(self, net: str) -> str:
        """Return the MCU pin wired to ``net`` or an empty string."""
        return self.pin_map.get(net, "")


class Bounds(ErgoboxBaseModel):
    """Bounding box of all keys in display coordinates (y flipped)."""

    min_x: float = Field(alias="minX")
    max_x: float = Field(alias="maxX")
    min_y: float = Field(alias="minY")
    max_y: float = Field(alias="maxY")

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


class ResolvedLayout(ErgoboxBaseModel):
    """Result of resolving a layout document."""

    keys: list[Key] = Field(default_factory=list)
    matrix: MatrixDescriptor | None = None
    warnings: list[str] = Field(default_factory=list)
    bounds: Bounds | None = None

    @property
    def visible_keys(self) -> list[Key]:
        """Keys that carry a physical switch, in resolution order."""
        return [key for key in self.keys if not key.skip]

    def export_keys(self, include_skipped: bool = False) -> list[Key]:
        """Keys used for firmware output, optionally including ghost positions."""
        return list(self.keys) if include_skipped else self.visible_keys

    def get_key(self, key_id: str) -> Key | None:
        return next((key for key in self.keys if key.id == key_id), None)
