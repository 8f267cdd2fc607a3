from __future__ import annotations

import itertools

import pytest

from hexdiff.models.diff import DiffKind
from hexdiff.services.diff_engine import DiffEngine, compute_diff

PAIRS = [
    (b"", b""),
    (b"\x01\x02", b"\x01\x03"),
    (b"\x01", b"\x01\x02"),
    (b"abcdef", b"abc"),
    (b"\x00\x01\x02\x03", b"\x03\x02\x01\x00\xff"),
    (bytes(range(32)), bytes(range(1, 33))),
]


def test_modified_byte() -> None:
    diff_map, count = compute_diff(bytes([0x01, 0x02]), bytes([0x01, 0x03]))
    assert diff_map == {1: DiffKind.MODIFIED}
    assert count == 1


def test_added_byte() -> None:
    diff_map, count = compute_diff(bytes([0x01]), bytes([0x01, 0x02]))
    assert diff_map == {1: DiffKind.ADDED}
    assert count == 1


def test_removed_tail() -> None:
    diff_map, count = compute_diff(b"abcdef", b"abc")
    assert diff_map == {3: DiffKind.REMOVED, 4: DiffKind.REMOVED, 5: DiffKind.REMOVED}
    assert count == 3


def test_absent_sides() -> None:
    assert compute_diff(None, None) == ({}, 0)
    assert compute_diff(None, b"\x01\x02") == ({0: DiffKind.ADDED, 1: DiffKind.ADDED}, 2)
    assert compute_diff(b"\x01", None) == ({0: DiffKind.REMOVED}, 1)


def test_insertion_cascades_without_realignment() -> None:
    diff_map, _ = compute_diff(b"\x01\x02\x03", b"\x00\x01\x02\x03")
    assert diff_map == {
        0: DiffKind.MODIFIED,
        1: DiffKind.MODIFIED,
        2: DiffKind.MODIFIED,
        3: DiffKind.ADDED,
    }


@pytest.mark.parametrize(("a", "b"), PAIRS)
def test_swap_inverts_added_and_removed(a: bytes, b: bytes) -> None:
    forward, _ = compute_diff(a, b)
    backward, _ = compute_diff(b, a)
    swapped = {DiffKind.ADDED: DiffKind.REMOVED, DiffKind.REMOVED: DiffKind.ADDED}
    assert backward == {offset: swapped.get(kind, kind) for offset, kind in forward.items()}


@pytest.mark.parametrize(("a", "b"), PAIRS)
def test_every_offset_classified_exactly_once(a: bytes, b: bytes) -> None:
    diff_map, count = compute_diff(a, b)
    assert count == len(diff_map)
    for i in range(max(len(a), len(b))):
        if i < len(a) and i < len(b):
            if a[i] == b[i]:
                assert i not in diff_map
            else:
                assert diff_map[i] is DiffKind.MODIFIED
        elif i < len(b):
            assert diff_map[i] is DiffKind.ADDED
        else:
            assert diff_map[i] is DiffKind.REMOVED
    assert all(0 <= offset < max(len(a), len(b)) for offset in diff_map)


def test_entries_are_offset_ordered() -> None:
    engine = DiffEngine()
    diff_map, _ = engine.compute(b"\x00\x00\x00", b"\x01\x00\x02\x03")
    entries = engine.entries(diff_map)
    assert [(e.offset, e.kind) for e in entries] == [
        (0, DiffKind.MODIFIED),
        (2, DiffKind.MODIFIED),
        (3, DiffKind.ADDED),
    ]


def test_gutter_buckets_and_dominant_kind() -> None:
    diff_map = {0: DiffKind.ADDED, 1: DiffKind.MODIFIED, 50: DiffKind.REMOVED, 55: DiffKind.ADDED}
    blocks = DiffEngine().gutter(diff_map, max_len=100, height=10)

    assert [b.index for b in blocks] == [0, 5]
    assert blocks[0].dominant is DiffKind.MODIFIED
    assert blocks[0].kinds == [DiffKind.MODIFIED, DiffKind.ADDED]
    assert blocks[0].position == 0.0
    assert blocks[1].dominant is DiffKind.REMOVED
    assert blocks[1].position == pytest.approx(0.5)


def test_gutter_empty_when_no_differences() -> None:
    assert DiffEngine().gutter({}, max_len=100, height=10) == []


def test_large_identical_buffers() -> None:
    data = bytes(itertools.islice(itertools.cycle(range(256)), 100_000))
    assert compute_diff(data, data) == ({}, 0)
