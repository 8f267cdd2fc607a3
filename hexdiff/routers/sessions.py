"""Session API endpoints - stateful comparison for an interactive viewer"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from hexdiff.models.decode import Side
from hexdiff.models.diff import GutterBlock
from hexdiff.models.search import Match
from hexdiff.models.selection import CopyResponse
from hexdiff.models.session import (
    BytesPerRowRequest,
    CompareRequest,
    JumpRequest,
    NavigateRequest,
    RegionsResponse,
    ScrollRequest,
    SelectAllRequest,
    SelectionRequest,
    SessionCopyRequest,
    SessionResponse,
    SessionSearchRequest,
    SideInputRequest,
    SideSummary,
)
from hexdiff.models.view import RowsResponse
from hexdiff.routers.engine import decode_error_response
from hexdiff.services.config_manager import ConfigManager
from hexdiff.services.errors import (
    DecodeError,
    InvalidOffsetError,
    NothingToExportError,
    SessionNotFoundError,
)
from hexdiff.services.export import REPORT_FILENAME
from hexdiff.services.session_store import HexDiffSession, SessionStore

router = APIRouter()


def get_session(session_id: str) -> HexDiffSession:
    """Look up a session or answer 404"""
    try:
        return SessionStore.get_instance().get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


# ========== Lifecycle ==========


@router.post("", response_model=SessionResponse)
async def create_session() -> SessionResponse:
    """Start a new comparison session using the configured view defaults"""
    config = ConfigManager.get_instance()
    session = SessionStore.get_instance().create(
        view=config.view_settings(),
        focus_margin=config.get("search", {}).get("focusMarginPx", 80),
    )
    return session.snapshot()


@router.get("/{session_id}", response_model=SessionResponse)
async def read_session(session_id: str) -> SessionResponse:
    return get_session(session_id).snapshot()


@router.delete("/{session_id}")
async def delete_session(session_id: str) -> dict[str, Any]:
    try:
        SessionStore.get_instance().delete(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"status": "success", "message": "Session deleted"}


# ========== Inputs ==========


@router.put("/{session_id}/sides/{side}", response_model=SideSummary)
async def set_side_input(session_id: str, side: Side, request: SideInputRequest) -> SideSummary:
    """Replace one side's text; a decode failure is reported on that side only"""
    session = get_session(session_id)
    session.set_input(side, request.text, request.format)
    if request.compare:
        session.compare()
    return session.sides[side].summary()


@router.post("/{session_id}/sides/{side}/sample", response_model=SideSummary)
async def load_sample(session_id: str, side: Side) -> SideSummary:
    """Fill one side with the built-in demo payload"""
    return get_session(session_id).load_sample(side)


@router.post("/{session_id}/compare", response_model=SessionResponse)
async def compare(session_id: str, request: CompareRequest | None = None) -> SessionResponse:
    """Decode both sides and rebuild the diff"""
    session = get_session(session_id)
    errors = session.compare()

    if request and request.raise_errors:
        for side, error in errors.items():
            if error is not None:
                raise decode_error_response(error, side)

    return session.snapshot()


@router.post("/{session_id}/swap", response_model=SessionResponse)
async def swap(session_id: str) -> SessionResponse:
    session = get_session(session_id)
    session.swap()
    return session.snapshot()


@router.post("/{session_id}/clear", response_model=SessionResponse)
async def clear(session_id: str) -> SessionResponse:
    session = get_session(session_id)
    session.clear()
    return session.snapshot()


# ========== View ==========


@router.put("/{session_id}/bytes-per-row", response_model=SessionResponse)
async def set_bytes_per_row(session_id: str, request: BytesPerRowRequest) -> SessionResponse:
    session = get_session(session_id)
    session.set_bytes_per_row(request.bytes_per_row)
    return session.snapshot()


@router.post("/{session_id}/scroll", response_model=SessionResponse)
async def scroll(session_id: str, request: ScrollRequest) -> SessionResponse:
    session = get_session(session_id)
    session.scroll(request.scroll_offset, request.viewport_height)
    return session.snapshot()


@router.get("/{session_id}/rows/{side}", response_model=RowsResponse)
async def rows(session_id: str, side: Side, force: bool = False) -> RowsResponse:
    """Rows of the current window; empty with ``changed=False`` when nothing moved"""
    return get_session(session_id).rows(side, force=force)


@router.post("/{session_id}/jump", response_model=SessionResponse)
async def jump_to_offset(session_id: str, request: JumpRequest) -> SessionResponse:
    session = get_session(session_id)
    try:
        session.jump_to_offset(request.offset)
    except InvalidOffsetError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return session.snapshot()


@router.get("/{session_id}/gutter", response_model=list[GutterBlock])
async def gutter(session_id: str, height: int | None = None) -> list[GutterBlock]:
    """Minimap buckets for a gutter ``height`` pixels tall"""
    if height is None:
        height = ConfigManager.get_instance().view_settings()["gutterHeight"]
    return get_session(session_id).gutter(height)


# ========== Search ==========


@router.post("/{session_id}/search", response_model=SessionResponse)
async def search(session_id: str, request: SessionSearchRequest) -> SessionResponse:
    session = get_session(session_id)
    try:
        session.search(request.pattern, request.side)
    except DecodeError as e:
        raise decode_error_response(e) from e
    return session.snapshot()


@router.get("/{session_id}/matches", response_model=list[Match])
async def matches(session_id: str) -> list[Match]:
    return get_session(session_id).search_state.matches


@router.post("/{session_id}/matches/navigate", response_model=SessionResponse)
async def navigate_match(session_id: str, request: NavigateRequest) -> SessionResponse:
    session = get_session(session_id)
    session.navigate(request.direction)
    return session.snapshot()


# ========== Selection ==========


@router.post("/{session_id}/selection/start", response_model=SessionResponse)
async def begin_selection(session_id: str, request: SelectionRequest) -> SessionResponse:
    session = get_session(session_id)
    session.begin_selection(request.side, request.offset)
    return session.snapshot()


@router.post("/{session_id}/selection/extend", response_model=SessionResponse)
async def extend_selection(session_id: str, request: SelectionRequest) -> SessionResponse:
    session = get_session(session_id)
    session.extend_selection(request.side, request.offset)
    return session.snapshot()


@router.post("/{session_id}/selection/end", response_model=SessionResponse)
async def end_selection(session_id: str) -> SessionResponse:
    session = get_session(session_id)
    session.end_selection()
    return session.snapshot()


@router.post("/{session_id}/selection/all", response_model=SessionResponse)
async def select_all(session_id: str, request: SelectAllRequest | None = None) -> SessionResponse:
    session = get_session(session_id)
    session.select_all(request.side if request else None)
    return session.snapshot()


@router.delete("/{session_id}/selection", response_model=SessionResponse)
async def clear_selection(session_id: str) -> SessionResponse:
    session = get_session(session_id)
    session.clear_selection()
    return session.snapshot()


@router.post("/{session_id}/copy", response_model=CopyResponse)
async def copy_selection(session_id: str, request: SessionCopyRequest) -> CopyResponse:
    session = get_session(session_id)
    text = session.copy(request.copy_format)
    if text is None:
        raise HTTPException(status_code=400, detail="Nothing selected")
    return CopyResponse(text=text, length=len(session.selected_bytes()))


# ========== Export ==========


@router.get("/{session_id}/regions", response_model=RegionsResponse)
async def regions(session_id: str) -> RegionsResponse:
    session = get_session(session_id)
    return RegionsResponse(count=session.diff_count, regions=session.regions())


@router.get("/{session_id}/export", response_class=PlainTextResponse)
async def export(session_id: str) -> PlainTextResponse:
    session = get_session(session_id)
    try:
        report = session.export_report()
    except NothingToExportError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return PlainTextResponse(
        report,
        headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
    )
