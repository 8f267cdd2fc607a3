"""Session API data models"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .decode import DecodeErrorDetail, InputFormat, Side
from .diff import DiffRegion
from .selection import CopyFormat, SelectionRange


class SideInputRequest(BaseModel):
    """Replace the raw text of one side"""

    text: str
    format: InputFormat = InputFormat.AUTO
    compare: bool = True  # re-run the comparison after decoding


class SideSummary(BaseModel):
    """Current state of one side"""

    side: Side
    format: InputFormat
    length: int | None = None
    byte_count_label: str  # "N bytes" or "format error"
    size_label: str = ""
    error: DecodeErrorDetail | None = None


class SessionResponse(BaseModel):
    """Snapshot of a session"""

    session_id: str
    sides: list[SideSummary]
    diff_count: int
    bytes_per_row: int
    row_height: float
    overscan: int
    scroll_offset: float
    current_offset: int
    current_offset_label: str
    match_count: int
    current_match: int
    match_info: str
    selection: SelectionRange | None = None
    selection_label: str = ""


class CompareRequest(BaseModel):
    """Compare options"""

    raise_errors: bool = False  # report decode failures as 400 instead of per side


class BytesPerRowRequest(BaseModel):
    bytes_per_row: int = Field(gt=0)


class ScrollRequest(BaseModel):
    """Scroll/resize event from the viewport"""

    scroll_offset: float = Field(ge=0)
    viewport_height: float | None = Field(default=None, ge=0)


class JumpRequest(BaseModel):
    offset: str  # hex text, optional 0x


class SessionSearchRequest(BaseModel):
    pattern: str
    side: Side = Side.A


class NavigateRequest(BaseModel):
    direction: int = Field(default=1)  # +1 next, -1 previous


class SelectionRequest(BaseModel):
    """Pointer event on a byte cell"""

    side: Side
    offset: int = Field(ge=0)


class SelectAllRequest(BaseModel):
    side: Side | None = None


class SessionCopyRequest(BaseModel):
    copy_format: CopyFormat = CopyFormat.HEX


class RegionsResponse(BaseModel):
    count: int
    regions: list[DiffRegion]
