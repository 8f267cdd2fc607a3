"""Models module - Pydantic data models"""

from .decode import DecodeErrorDetail, DecodeRequest, DecodeResponse, InputFormat, Side
from .diff import (
    REGION_MIXED,
    BytePair,
    DiffEntry,
    DiffKind,
    DiffRegion,
    DiffRequest,
    DiffResponse,
    DiffSideResult,
    GutterBlock,
)
from .search import Match, SearchRequest, SearchResponse
from .selection import CopyFormat, CopyRequest, CopyResponse, SelectionRange
from .view import HexCell, HexRow, RowsResponse, ViewSettings, WindowRange, WindowRequest

__all__ = [
    # Decode models
    "DecodeErrorDetail",
    "DecodeRequest",
    "DecodeResponse",
    "InputFormat",
    "Side",
    # Diff models
    "REGION_MIXED",
    "BytePair",
    "DiffEntry",
    "DiffKind",
    "DiffRegion",
    "DiffRequest",
    "DiffResponse",
    "DiffSideResult",
    "GutterBlock",
    # Search models
    "Match",
    "SearchRequest",
    "SearchResponse",
    # Selection models
    "CopyFormat",
    "CopyRequest",
    "CopyResponse",
    "SelectionRange",
    # View models
    "HexCell",
    "HexRow",
    "RowsResponse",
    "ViewSettings",
    "WindowRange",
    "WindowRequest",
]
