"""
Diff Engine - Positional byte comparison of two payloads
"""

from __future__ import annotations

import math

from hexdiff.models.diff import DiffEntry, DiffKind, GutterBlock

DiffMap = dict[int, DiffKind]

# Gutter colour precedence, strongest first
_GUTTER_PRECEDENCE = (DiffKind.MODIFIED, DiffKind.REMOVED, DiffKind.ADDED)


class DiffEngine:
    """Compare two byte sequences offset by offset.

    There is no realignment: an insertion near the start of B shows up as a
    run of modified bytes after it.
    """

    def compute(self, data_a: bytes | None, data_b: bytes | None) -> tuple[DiffMap, int]:
        """Classify every offset in ``[0, max(len(a), len(b)))`` that differs"""
        diff_map: DiffMap = {}
        if data_a is None and data_b is None:
            return diff_map, 0

        len_a = len(data_a) if data_a is not None else 0
        len_b = len(data_b) if data_b is not None else 0
        common = min(len_a, len_b)

        for i in range(common):
            if data_a[i] != data_b[i]:
                diff_map[i] = DiffKind.MODIFIED

        # Only one of these ranges is non-empty
        for i in range(common, len_b):
            diff_map[i] = DiffKind.ADDED
        for i in range(common, len_a):
            diff_map[i] = DiffKind.REMOVED

        return diff_map, len(diff_map)

    def entries(self, diff_map: DiffMap) -> list[DiffEntry]:
        """Diff map as an offset-ordered list"""
        return [DiffEntry(offset=offset, kind=kind) for offset, kind in sorted(diff_map.items())]

    def gutter(self, diff_map: DiffMap, max_len: int, height: int) -> list[GutterBlock]:
        """Bucket differing offsets into ``height`` minimap slots"""
        if not diff_map or max_len <= 0 or height <= 0:
            return []

        block_size = max(1, math.ceil(max_len / height))
        blocks: dict[int, set[DiffKind]] = {}
        for offset, kind in diff_map.items():
            blocks.setdefault(offset // block_size, set()).add(kind)

        slots = max_len / block_size
        result = []
        for index in sorted(blocks):
            kinds = blocks[index]
            dominant = next(kind for kind in _GUTTER_PRECEDENCE if kind in kinds)
            result.append(
                GutterBlock(
                    index=index,
                    position=index / slots,
                    kinds=[kind for kind in _GUTTER_PRECEDENCE if kind in kinds],
                    dominant=dominant,
                )
            )
        return result


_engine = DiffEngine()


def compute_diff(data_a: bytes | None, data_b: bytes | None) -> tuple[DiffMap, int]:
    """Module-level shortcut for ``DiffEngine().compute``"""
    return _engine.compute(data_a, data_b)
