"""Stateless engine API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from hexdiff.models.decode import DecodeErrorDetail, DecodeRequest, DecodeResponse, Side
from hexdiff.models.diff import DiffRequest, DiffResponse, DiffSideResult
from hexdiff.models.search import SearchRequest, SearchResponse
from hexdiff.models.selection import CopyRequest, CopyResponse
from hexdiff.models.view import WindowRange, WindowRequest
from hexdiff.services.decoders import decode_with_format, encode_hex, format_size
from hexdiff.services.diff_engine import DiffEngine
from hexdiff.services.errors import DecodeError, EmptyPatternError, NothingToExportError
from hexdiff.services.export import REPORT_FILENAME, consolidate_regions, copy, export_report, slice_range
from hexdiff.services.search_engine import SearchState, search
from hexdiff.services.virtual_window import compute_window

router = APIRouter()
diff_engine = DiffEngine()


def decode_error_response(error: DecodeError, side: Side | None = None) -> HTTPException:
    """Turn a decode failure into a 400 carrying the typed detail"""
    detail = error.to_dict()
    if side is not None:
        detail["side"] = side.value
    return HTTPException(status_code=400, detail=detail)


def decode_or_400(request: DecodeRequest) -> bytes:
    try:
        return decode_with_format(request.text, request.format)[1]
    except DecodeError as e:
        raise decode_error_response(e) from e


def _decode_side(side: Side, request: DecodeRequest | None) -> tuple[bytes | None, DiffSideResult]:
    """Decode one side without letting its failure affect the other"""
    if request is None:
        return None, DiffSideResult(side=side)
    try:
        _, data = decode_with_format(request.text, request.format)
    except DecodeError as e:
        return None, DiffSideResult(side=side, error=DecodeErrorDetail(**e.to_dict()))
    return data, DiffSideResult(side=side, length=len(data), size_label=format_size(len(data)))


@router.post("/decode", response_model=DecodeResponse)
async def decode_payload(request: DecodeRequest) -> DecodeResponse:
    """Decode a single payload"""
    try:
        detected, data = decode_with_format(request.text, request.format)
    except DecodeError as e:
        raise decode_error_response(e) from e

    return DecodeResponse(
        format=request.format,
        detected_format=detected,
        length=len(data),
        size_label=format_size(len(data)),
        hex=encode_hex(data),
    )


@router.post("/diff", response_model=DiffResponse)
async def diff_payloads(request: DiffRequest) -> DiffResponse:
    """Compare two payloads; decode failures are reported per side"""
    data_a, result_a = _decode_side(Side.A, request.a)
    data_b, result_b = _decode_side(Side.B, request.b)

    diff_map, count = diff_engine.compute(data_a, data_b)

    return DiffResponse(
        sides=[result_a, result_b],
        count=count,
        entries=diff_engine.entries(diff_map),
        regions=consolidate_regions(diff_map, data_a, data_b),
    )


@router.post("/window", response_model=WindowRange)
async def window(request: WindowRequest) -> WindowRange:
    """Row range to materialize for a scroll position"""
    return compute_window(
        request.length,
        request.bytes_per_row,
        request.row_height,
        request.viewport_height,
        request.scroll_offset,
        request.overscan,
    )


@router.post("/search", response_model=SearchResponse)
async def search_payload(request: SearchRequest) -> SearchResponse:
    """Find a hex pattern; an empty pattern is a no-op"""
    data = decode_or_400(request.data)
    state = SearchState()
    try:
        state.replace(search(data, request.pattern))
    except EmptyPatternError:
        return SearchResponse(matches=[], count=0, current_index=-1, match_info="0", noop=True)
    except DecodeError as e:
        raise decode_error_response(e) from e

    return SearchResponse(
        matches=state.matches,
        count=len(state.matches),
        current_index=state.current_index,
        match_info=state.match_info,
    )


@router.post("/copy", response_model=CopyResponse)
async def copy_range(request: CopyRequest) -> CopyResponse:
    """Format an inclusive byte range"""
    data = decode_or_400(request.data)
    text = copy(data, request.start, request.end, request.copy_format)
    return CopyResponse(text=text, length=len(slice_range(data, request.start, request.end)))


@router.post("/export", response_class=PlainTextResponse)
async def export_diff(request: DiffRequest) -> PlainTextResponse:
    """Plain-text diff report as a download"""
    data_a, _ = _decode_side(Side.A, request.a)
    data_b, _ = _decode_side(Side.B, request.b)
    diff_map, _ = diff_engine.compute(data_a, data_b)

    try:
        report = export_report(data_a, data_b, diff_map)
    except NothingToExportError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return PlainTextResponse(
        report,
        headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
    )
