"""Virtual window data models"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .diff import DiffKind


class WindowRange(BaseModel):
    """Half-open row range to materialize"""

    model_config = ConfigDict(frozen=True)

    start_row: int
    end_row: int


class WindowRequest(BaseModel):
    """Inputs of the window calculation"""

    length: int = Field(ge=0)
    bytes_per_row: int = Field(default=16, gt=0)
    row_height: float = Field(default=22, gt=0)
    viewport_height: float = Field(ge=0)
    scroll_offset: float = Field(default=0, ge=0)
    overscan: int = Field(default=10, ge=0)


class ViewSettings(BaseModel):
    """Persisted view defaults, keyed the way the config file stores them"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    bytes_per_row: int = Field(default=16, gt=0, alias="bytesPerRow")
    row_height: float = Field(default=22, gt=0, alias="rowHeight")
    overscan: int = Field(default=10, ge=0)
    viewport_height: float = Field(default=440, ge=0, alias="viewportHeight")
    gutter_height: int = Field(default=400, gt=0, alias="gutterHeight")

    @field_validator("*", mode="before")
    @classmethod
    def reject_booleans(cls, value):
        if isinstance(value, bool):
            raise ValueError("must be a number")
        return value


class HexCell(BaseModel):
    """One rendered byte"""

    offset: int
    hex: str
    ascii: str
    printable: bool
    diff: DiffKind | None = None
    match: bool = False
    selected: bool = False


class HexRow(BaseModel):
    """One materialized row of a panel"""

    row: int
    offset: int
    label: str  # 8 uppercase hex digits
    cells: list[HexCell]


class RowsResponse(BaseModel):
    """Rows of the current window plus spacer heights around them"""

    window: WindowRange
    total_rows: int
    top_spacer: float
    bottom_spacer: float
    rows: list[HexRow]
    changed: bool = True  # False when the window equals the last one
