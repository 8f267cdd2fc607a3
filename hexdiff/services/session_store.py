"""
Session Store - Per-user comparison state kept in memory

The engine modules are stateless; a session owns the inputs, decoded
buffers, diff map, search results, selection and scroll position, and feeds
them explicitly into each engine call.
"""

from __future__ import annotations

import uuid
from typing import Any

from hexdiff.models.decode import DecodeErrorDetail, InputFormat, Side
from hexdiff.models.diff import DiffRegion, GutterBlock
from hexdiff.models.search import Match
from hexdiff.models.selection import CopyFormat, SelectionRange
from hexdiff.models.session import SessionResponse, SideSummary
from hexdiff.models.view import RowsResponse, WindowRange
from hexdiff.services import decoders, export, virtual_window
from hexdiff.services.diff_engine import DiffEngine, DiffMap
from hexdiff.services.errors import DecodeError, EmptyPatternError, SessionNotFoundError
from hexdiff.services.search_engine import SearchState, search

SAMPLES = {
    Side.A: (
        " 48 65 6C 6C 6F 20 57 6F 72 6C 64 21 0A 54 68 69\n"
        "73 20 69 73 20 61 20 74 65 73 74 20 66 69 6C 65\n"
        "2E 0A 56 65 72 73 69 6F 6E 3A 20 31 2E 30 2E 30"
    ),
    Side.B: (
        "48 65 6C 6C 6F 20 57 6F 72 6C 64 21 0A 54 68 69\n"
        "73 20 69 73 20 61 20 64 65 6D 6F 20 66 69 6C 65\n"
        "2E 0A 56 65 72 73 69 6F 6E 3A 20 32 2E 30 2E 30"
    ),
}


class SideState:
    """Raw text, chosen format and decode outcome of one side"""

    def __init__(self, side: Side):
        self.side = side
        self.text = ""
        self.format = InputFormat.AUTO
        self.data: bytes | None = None
        self.error: DecodeError | None = None

    def decode(self) -> bytes | None:
        """Re-decode the text; a failure leaves ``data`` absent"""
        try:
            self.data = decoders.decode(self.text, self.format)
            self.error = None
        except DecodeError as e:
            self.data = None
            self.error = e
        return self.data

    def reset(self):
        self.text = ""
        self.data = None
        self.error = None

    def summary(self) -> SideSummary:
        error = DecodeErrorDetail(**self.error.to_dict()) if self.error else None
        if error:
            label = "format error"
        else:
            # Preview of what the current text decodes to
            label = f"{len(self.data) if self.data is not None else 0} bytes"
        return SideSummary(
            side=self.side,
            format=self.format,
            length=len(self.data) if self.data is not None else None,
            byte_count_label=label,
            size_label=decoders.format_size(len(self.data)) if self.data is not None else "",
            error=error,
        )


class HexDiffSession:
    """Comparison state for one client"""

    def __init__(self, session_id: str, view: dict[str, Any] | None = None, focus_margin: float = 80):
        view = view or {}
        self.session_id = session_id
        self.sides = {side: SideState(side) for side in Side}
        self.diff_engine = DiffEngine()
        self.diff_map: DiffMap = {}
        self.diff_count = 0

        self.search_state = SearchState()
        self.search_side = Side.A
        self.selection: SelectionRange | None = None

        self.bytes_per_row = int(view.get("bytesPerRow", virtual_window.DEFAULT_BYTES_PER_ROW))
        self.row_height = float(view.get("rowHeight", virtual_window.DEFAULT_ROW_HEIGHT))
        self.overscan = int(view.get("overscan", virtual_window.DEFAULT_OVERSCAN))
        self.viewport_height = float(view.get("viewportHeight", 0))
        self.focus_margin = focus_margin
        # Both panels scroll together
        self.scroll_offset = 0.0
        self.windows = virtual_window.WindowTracker()

    # ========== Data ==========

    def data(self, side: Side) -> bytes | None:
        return self.sides[side].data

    @property
    def max_len(self) -> int:
        return max(len(state.data or b"") for state in self.sides.values())

    def set_input(self, side: Side, text: str, fmt: InputFormat = InputFormat.AUTO) -> SideSummary:
        """Replace one side's text and refresh its byte count preview"""
        state = self.sides[side]
        state.text = text
        state.format = InputFormat(fmt)
        state.decode()
        self.windows.invalidate()
        return state.summary()

    def load_sample(self, side: Side) -> SideSummary:
        return self.set_input(side, SAMPLES[side], self.sides[side].format)

    def compare(self) -> dict[Side, DecodeError | None]:
        """Decode both sides independently and rebuild the diff map"""
        errors = {}
        for side, state in self.sides.items():
            state.decode()
            errors[side] = state.error
            if state.error:
                print(f"[Session] {self.session_id}: side {side.value} failed to decode: {state.error}")

        self.diff_map, self.diff_count = self.diff_engine.compute(self.data(Side.A), self.data(Side.B))
        self.windows.invalidate()
        return errors

    def swap(self):
        """Exchange text and format of A and B, then compare"""
        a, b = self.sides[Side.A], self.sides[Side.B]
        a.text, b.text = b.text, a.text
        a.format, b.format = b.format, a.format
        self.compare()

    def clear(self):
        for state in self.sides.values():
            state.reset()
        self.diff_map, self.diff_count = {}, 0
        self.search_state.clear()
        self.selection = None
        self.windows.invalidate()

    # ========== View ==========

    def set_bytes_per_row(self, bytes_per_row: int):
        """Row width change: every window is stale and scrolling restarts"""
        self.bytes_per_row = bytes_per_row
        self.scroll_offset = 0.0
        self.windows.invalidate()

    def scroll(self, scroll_offset: float, viewport_height: float | None = None):
        self.scroll_offset = scroll_offset
        if viewport_height is not None:
            self.viewport_height = viewport_height

    def window(self, side: Side) -> WindowRange:
        return virtual_window.compute_window(
            len(self.data(side) or b""),
            self.bytes_per_row,
            self.row_height,
            self.viewport_height,
            self.scroll_offset,
            self.overscan,
        )

    def rows(self, side: Side, force: bool = False) -> RowsResponse:
        """Materialize the current window; ``changed`` is False when unchanged"""
        window = self.window(side)
        changed = self.windows.update(side, window) or force
        if not changed:
            rows_total = virtual_window.total_rows(len(self.data(side) or b""), self.bytes_per_row)
            return RowsResponse(
                window=window,
                total_rows=rows_total,
                top_spacer=window.start_row * self.row_height,
                bottom_spacer=max(0, rows_total - window.end_row) * self.row_height,
                rows=[],
                changed=False,
            )
        return virtual_window.materialize_rows(
            self.data(side),
            window,
            side,
            self.bytes_per_row,
            self.row_height,
            self.diff_map,
            self.search_state.matches,
            self.selection,
        )

    @property
    def current_offset(self) -> int:
        return virtual_window.offset_at_scroll(self.scroll_offset, self.bytes_per_row, self.row_height)

    def jump_to_offset(self, text: str) -> int:
        offset = virtual_window.parse_jump_offset(text, self.max_len)
        row = virtual_window.row_for_offset(offset, self.bytes_per_row)
        self.scroll_offset = virtual_window.scroll_offset_for_row(row, self.row_height)
        return offset

    def gutter(self, height: int) -> list[GutterBlock]:
        return self.diff_engine.gutter(self.diff_map, self.max_len, height)

    # ========== Search ==========

    def search(self, pattern: str, side: Side = Side.A) -> bool:
        """Run a new search; returns False when the pattern was empty.

        An invalid pattern raises ``DecodeError`` and keeps the old results.
        """
        try:
            matches = search(self.data(side), pattern)
        except EmptyPatternError:
            return False
        self.search_side = side
        self.search_state.replace(matches)
        self.windows.invalidate()
        self._focus(self.search_state.current)
        return True

    def navigate(self, direction: int) -> Match | None:
        match = self.search_state.navigate(direction)
        self._focus(match)
        return match

    def _focus(self, match: Match | None):
        if match is not None:
            self.scroll_offset = virtual_window.match_scroll_offset(
                match, self.bytes_per_row, self.row_height, self.focus_margin
            )

    # ========== Selection ==========

    def begin_selection(self, side: Side, offset: int):
        self.selection = SelectionRange(side=side, anchor=offset, cursor=offset, active=True)
        self.windows.invalidate()

    def extend_selection(self, side: Side, offset: int):
        """Drag update; ignored when not dragging or on the other panel"""
        if self.selection and self.selection.active and self.selection.side == side:
            self.selection.cursor = offset
            self.windows.invalidate()

    def end_selection(self):
        if self.selection:
            self.selection.active = False

    def clear_selection(self):
        self.selection = None
        self.windows.invalidate()

    def select_all(self, side: Side | None = None):
        side = side or (self.selection.side if self.selection else Side.A)
        selection = export.select_all(self.data(side), side)
        if selection is not None:
            self.selection = selection
            self.windows.invalidate()

    def selected_bytes(self) -> bytes:
        if self.selection is None:
            return b""
        return export.slice_range(self.data(self.selection.side), self.selection.start, self.selection.end)

    def copy(self, copy_format: CopyFormat) -> str | None:
        """Selected bytes in ``copy_format``, None when nothing is selected"""
        if self.selection is None or self.data(self.selection.side) is None:
            return None
        return export.format_bytes(self.selected_bytes(), copy_format)

    # ========== Export ==========

    def regions(self) -> list[DiffRegion]:
        return export.consolidate_regions(self.diff_map, self.data(Side.A), self.data(Side.B))

    def export_report(self) -> str:
        return export.export_report(self.data(Side.A), self.data(Side.B), self.diff_map)

    def snapshot(self) -> SessionResponse:
        return SessionResponse(
            session_id=self.session_id,
            sides=[state.summary() for state in self.sides.values()],
            diff_count=self.diff_count,
            bytes_per_row=self.bytes_per_row,
            row_height=self.row_height,
            overscan=self.overscan,
            scroll_offset=self.scroll_offset,
            current_offset=self.current_offset,
            current_offset_label=virtual_window.format_offset(self.current_offset),
            match_count=len(self.search_state.matches),
            current_match=self.search_state.current_index,
            match_info=self.search_state.match_info,
            selection=self.selection,
            selection_label=export.selection_label(self.selection),
        )


class SessionStore:
    """In-memory session registry"""

    _instance = None

    def __init__(self):
        self._sessions: dict[str, HexDiffSession] = {}

    @classmethod
    def get_instance(cls) -> "SessionStore":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = SessionStore()
        return cls._instance

    def create(self, view: dict[str, Any] | None = None, focus_margin: float = 80) -> HexDiffSession:
        session_id = str(uuid.uuid4())
        session = HexDiffSession(session_id, view, focus_margin)
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> HexDiffSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def delete(self, session_id: str):
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)

    def clear(self):
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
