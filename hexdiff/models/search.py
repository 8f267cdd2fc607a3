"""Search-related data models"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .decode import DecodeRequest


class Match(BaseModel):
    """Half-open interval where the pattern occurred"""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int


class SearchRequest(BaseModel):
    """Stateless search request"""

    data: DecodeRequest
    pattern: str  # hex text


class SearchResponse(BaseModel):
    """Match list plus navigation pointer"""

    matches: list[Match]
    count: int
    current_index: int  # -1 when nothing is selected
    match_info: str
    noop: bool = False  # True when the pattern was empty
