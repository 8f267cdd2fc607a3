"""
Selection & Export - Copy formats for a byte range and the diff report
"""

from __future__ import annotations

from hexdiff.models.decode import Side
from hexdiff.models.diff import REGION_MIXED, BytePair, DiffRegion
from hexdiff.models.selection import CopyFormat, SelectionRange
from hexdiff.services.diff_engine import DiffMap
from hexdiff.services.errors import NothingToExportError

REGION_PREVIEW_BYTES = 16
REPORT_RULE_WIDTH = 60
REPORT_FILENAME = "hexdump-diff-report.txt"
ABSENT_BYTE = "--"


# ========== Selection ==========


def normalize_range(start: int, end: int) -> tuple[int, int]:
    return min(start, end), max(start, end)


def slice_range(data: bytes | None, start: int, end: int) -> bytes:
    """Bytes of the inclusive range, clipped to the data"""
    if not data:
        return b""
    start, end = normalize_range(start, end)
    return data[start : end + 1]


def select_all(data: bytes | None, side: Side) -> SelectionRange | None:
    """Selection spanning every byte of ``side`` (None when empty)"""
    if not data:
        return None
    return SelectionRange(side=side, anchor=0, cursor=len(data) - 1)


def selection_label(selection: SelectionRange | None) -> str:
    if selection is None:
        return ""
    return f"{selection.count} bytes (0x{selection.start:X}-0x{selection.end:X})"


def format_bytes(chunk: bytes, copy_format: CopyFormat | str) -> str:
    """Render bytes in one of the clipboard formats"""
    copy_format = CopyFormat(copy_format)
    if copy_format is CopyFormat.HEX:
        return " ".join(f"{b:02X}" for b in chunk)
    if copy_format is CopyFormat.HEX_NO_SPACE:
        return "".join(f"{b:02X}" for b in chunk)
    if copy_format is CopyFormat.ASCII:
        return "".join(chr(b) if 0x20 <= b <= 0x7E else "." for b in chunk)
    return "{ " + ", ".join(f"0x{b:02X}" for b in chunk) + " }"


def copy(data: bytes | None, start: int, end: int, copy_format: CopyFormat | str = CopyFormat.HEX) -> str:
    """Format the inclusive range ``[start, end]`` of ``data``"""
    return format_bytes(slice_range(data, start, end), copy_format)


# ========== Export ==========


def _byte_at(data: bytes | None, offset: int) -> str:
    if data is not None and offset < len(data):
        return f"{data[offset]:02X}"
    return ABSENT_BYTE


def consolidate_regions(
    diff_map: DiffMap,
    data_a: bytes | None = None,
    data_b: bytes | None = None,
    preview: int = REGION_PREVIEW_BYTES,
) -> list[DiffRegion]:
    """Merge consecutive differing offsets into maximal regions"""
    spans: list[list] = []  # [start, end, type]
    for offset in sorted(diff_map):
        kind = diff_map[offset].value
        if spans and offset == spans[-1][1]:
            spans[-1][1] = offset + 1
            if spans[-1][2] != kind:
                spans[-1][2] = REGION_MIXED
        else:
            spans.append([offset, offset + 1, kind])

    regions = []
    for start, end, kind in spans:
        length = end - start
        shown = min(preview, length)
        regions.append(
            DiffRegion(
                start=start,
                end=end,
                type=kind,
                length=length,
                pairs=[
                    BytePair(offset=off, a=_byte_at(data_a, off), b=_byte_at(data_b, off))
                    for off in range(start, start + shown)
                ],
                remaining=length - shown,
            )
        )
    return regions


def export_report(data_a: bytes | None, data_b: bytes | None, diff_map: DiffMap) -> str:
    """Plain-text report listing every differing region"""
    if not diff_map:
        raise NothingToExportError("No differences to export")

    lines = [
        "HexDump Diff Report",
        "=" * REPORT_RULE_WIDTH,
        "",
        f"Data A: {len(data_a) if data_a is not None else 0} bytes",
        f"Data B: {len(data_b) if data_b is not None else 0} bytes",
        f"Total differences: {len(diff_map)} bytes",
        "",
        "-" * REPORT_RULE_WIDTH,
        "",
    ]

    for region in consolidate_regions(diff_map, data_a, data_b):
        lines.append(
            f"Offset 0x{region.start:08X} - 0x{region.end - 1:08X} "
            f"({region.length} bytes) [{region.type}]"
        )
        for pair in region.pairs:
            lines.append(f"  0x{pair.offset:08X}: A={pair.a} B={pair.b}")
        if region.remaining:
            lines.append(f"  ... {region.remaining} more bytes")
        lines.append("")

    return "\n".join(lines) + "\n"
