"""
Virtual Window Calculator - Decide which rows of a large payload to materialize
"""

from __future__ import annotations

import math
import re

from hexdiff.models.decode import Side
from hexdiff.models.search import Match
from hexdiff.models.selection import SelectionRange
from hexdiff.models.view import HexCell, HexRow, RowsResponse, WindowRange
from hexdiff.services.diff_engine import DiffMap
from hexdiff.services.errors import InvalidOffsetError
from hexdiff.services.search_engine import is_match

DEFAULT_BYTES_PER_ROW = 16
DEFAULT_ROW_HEIGHT = 22
DEFAULT_OVERSCAN = 10

_JUMP_OFFSET = re.compile(r"(?:0x)?([0-9a-fA-F]+)", re.IGNORECASE)


def total_rows(length: int, bytes_per_row: int = DEFAULT_BYTES_PER_ROW) -> int:
    return math.ceil(length / bytes_per_row)


def compute_window(
    length: int,
    bytes_per_row: int = DEFAULT_BYTES_PER_ROW,
    row_height: float = DEFAULT_ROW_HEIGHT,
    viewport_height: float = 0,
    scroll_offset: float = 0,
    overscan: int = DEFAULT_OVERSCAN,
) -> WindowRange:
    """Row range covering the viewport plus ``overscan`` rows on each side.

    Pure and idempotent: identical inputs always give an equal range, so a
    caller can compare against the last materialized window and skip work.
    """
    rows = total_rows(length, bytes_per_row)
    start_row = max(0, math.floor(scroll_offset / row_height) - overscan)
    end_row = min(rows, math.ceil((scroll_offset + viewport_height) / row_height) + overscan)
    # A scroll position past the content can put start beyond end
    start_row = min(start_row, end_row)
    return WindowRange(start_row=start_row, end_row=end_row)


def row_for_offset(offset: int, bytes_per_row: int = DEFAULT_BYTES_PER_ROW) -> int:
    return offset // bytes_per_row


def scroll_offset_for_row(row: int, row_height: float = DEFAULT_ROW_HEIGHT) -> float:
    return row * row_height


def offset_at_scroll(
    scroll_offset: float,
    bytes_per_row: int = DEFAULT_BYTES_PER_ROW,
    row_height: float = DEFAULT_ROW_HEIGHT,
) -> int:
    """First byte offset of the row at the top of the viewport"""
    return math.floor(scroll_offset / row_height) * bytes_per_row


def format_offset(offset: int) -> str:
    return f"{offset:08X}"


def parse_jump_offset(text: str, max_len: int) -> int:
    """Parse a hex offset typed by the user and clamp it to the data"""
    found = _JUMP_OFFSET.match(text.strip())
    if not found:
        raise InvalidOffsetError(f"Not a hex offset: {text!r}")
    return min(int(found.group(1), 16), max_len)


def match_scroll_offset(
    match: Match,
    bytes_per_row: int = DEFAULT_BYTES_PER_ROW,
    row_height: float = DEFAULT_ROW_HEIGHT,
    margin: float = 80,
) -> float:
    """Scroll position that shows ``match`` a little below the top edge"""
    row = row_for_offset(match.start, bytes_per_row)
    return max(0, row * row_height - margin)


class WindowTracker:
    """Remembers the last materialized window of each side.

    ``update`` answers whether the caller has to re-render; ``invalidate``
    forgets everything so the next update always renders.
    """

    def __init__(self):
        self._windows: dict[Side, WindowRange] = {}

    def update(self, side: Side, window: WindowRange) -> bool:
        if self._windows.get(side) == window:
            return False
        self._windows[side] = window
        return True

    def last(self, side: Side) -> WindowRange | None:
        return self._windows.get(side)

    def invalidate(self):
        self._windows.clear()


def _cell(offset: int, byte: int) -> HexCell:
    printable = 0x20 <= byte <= 0x7E
    return HexCell(
        offset=offset,
        hex=f"{byte:02X}",
        ascii=chr(byte) if printable else ".",
        printable=printable,
    )


def materialize_rows(
    data: bytes | None,
    window: WindowRange,
    side: Side = Side.A,
    bytes_per_row: int = DEFAULT_BYTES_PER_ROW,
    row_height: float = DEFAULT_ROW_HEIGHT,
    diff_map: DiffMap | None = None,
    matches: list[Match] | None = None,
    selection: SelectionRange | None = None,
) -> RowsResponse:
    """Build the row records a renderer needs for ``window``"""
    data = data or b""
    rows_total = total_rows(len(data), bytes_per_row)
    diff_map = diff_map or {}
    matches = matches or []
    starts = [m.start for m in matches]

    rows = []
    for row in range(window.start_row, min(window.end_row, rows_total)):
        base = row * bytes_per_row
        cells = []
        for i, byte in enumerate(data[base : base + bytes_per_row]):
            offset = base + i
            cell = _cell(offset, byte)
            cell.diff = diff_map.get(offset)
            cell.match = is_match(offset, matches, starts)
            cell.selected = selection is not None and selection.contains(side, offset)
            cells.append(cell)
        rows.append(HexRow(row=row, offset=base, label=format_offset(base), cells=cells))

    return RowsResponse(
        window=window,
        total_rows=rows_total,
        top_spacer=window.start_row * row_height,
        bottom_spacer=max(0, rows_total - window.end_row) * row_height,
        rows=rows,
    )
