"""Selection and copy data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .decode import DecodeRequest, Side


class CopyFormat(str, Enum):
    """Text renderings offered for a selection"""

    HEX = "hex"
    HEX_NO_SPACE = "hexNoSpace"
    ASCII = "ascii"
    C_ARRAY = "cArray"


class SelectionRange(BaseModel):
    """Anchor/cursor pair on one side; bounds are inclusive"""

    side: Side
    anchor: int = Field(ge=0)
    cursor: int = Field(ge=0)
    active: bool = False  # True while dragging

    @property
    def start(self) -> int:
        return min(self.anchor, self.cursor)

    @property
    def end(self) -> int:
        return max(self.anchor, self.cursor)

    @property
    def count(self) -> int:
        return self.end - self.start + 1

    def contains(self, side: Side, offset: int) -> bool:
        return side == self.side and self.start <= offset <= self.end


class CopyRequest(BaseModel):
    """Stateless copy request"""

    data: DecodeRequest
    start: int = Field(ge=0)
    end: int = Field(ge=0)  # inclusive
    copy_format: CopyFormat = CopyFormat.HEX


class CopyResponse(BaseModel):
    """Formatted selection"""

    text: str
    length: int
