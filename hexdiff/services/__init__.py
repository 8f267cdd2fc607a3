"""Services module - Business logic layer"""

from .config_manager import ConfigManager
from .decoders import decode, decode_with_format, detect_format, encode_hex, format_size
from .diff_engine import DiffEngine, compute_diff
from .errors import (
    DecodeError,
    EmptyPatternError,
    HexDiffError,
    InvalidOffsetError,
    NothingToExportError,
    SessionNotFoundError,
)
from .export import consolidate_regions, copy, export_report
from .search_engine import SearchState, search
from .session_store import HexDiffSession, SessionStore
from .virtual_window import WindowTracker, compute_window

__all__ = [
    "ConfigManager",
    "decode",
    "decode_with_format",
    "detect_format",
    "encode_hex",
    "format_size",
    "DiffEngine",
    "compute_diff",
    "DecodeError",
    "EmptyPatternError",
    "HexDiffError",
    "InvalidOffsetError",
    "NothingToExportError",
    "SessionNotFoundError",
    "consolidate_regions",
    "copy",
    "export_report",
    "SearchState",
    "search",
    "HexDiffSession",
    "SessionStore",
    "WindowTracker",
    "compute_window",
]
