"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from .decode import DecodeErrorDetail, DecodeRequest, Side

REGION_MIXED = "mixed"


class DiffKind(str, Enum):
    """Classification of a single differing offset"""

    ADDED = "added"  # only in B
    REMOVED = "removed"  # only in A
    MODIFIED = "modified"  # in both, different value


class DiffEntry(BaseModel):
    """One differing offset"""

    offset: int
    kind: DiffKind


class BytePair(BaseModel):
    """Side-by-side byte listing line, "--" marks an absent side"""

    offset: int
    a: str
    b: str


class DiffRegion(BaseModel):
    """A maximal run of consecutive differing offsets"""

    start: int
    end: int  # exclusive
    type: str  # a DiffKind value or "mixed"
    length: int
    pairs: list[BytePair] = []
    remaining: int = 0  # bytes not listed in ``pairs``


class GutterBlock(BaseModel):
    """Minimap bucket of offsets sharing one gutter slot"""

    index: int
    position: float  # 0.0 (top) .. 1.0 (bottom)
    kinds: list[DiffKind]
    dominant: DiffKind


class DiffRequest(BaseModel):
    """Request to compare two payloads"""

    a: DecodeRequest | None = None
    b: DecodeRequest | None = None


class DiffSideResult(BaseModel):
    """Per-side decode outcome of a comparison"""

    side: Side
    length: int | None = None  # None when the side has no data
    size_label: str = ""
    error: DecodeErrorDetail | None = None


class DiffResponse(BaseModel):
    """Complete comparison result"""

    sides: list[DiffSideResult]
    count: int
    entries: list[DiffEntry]
    regions: list[DiffRegion]
