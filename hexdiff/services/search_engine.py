"""
Search Engine - Find a byte pattern inside a decoded payload
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterable

from hexdiff.models.search import Match
from hexdiff.services.decoders import decode_hex
from hexdiff.services.errors import EmptyPatternError


def find_pattern(data: bytes | None, pattern: bytes) -> list[Match]:
    """Greedy leftmost scan; a hit resumes after its last byte"""
    if not data or not pattern:
        return []

    matches = []
    size = len(pattern)
    i = 0
    last_start = len(data) - size
    while i <= last_start:
        if data[i : i + size] == pattern:
            matches.append(Match(start=i, end=i + size))
            i += size
        else:
            i += 1
    return matches


def dedupe_matches(matches: Iterable[Match]) -> list[Match]:
    """Drop repeated (start, end) pairs, keeping first-seen order"""
    seen = set()
    unique = []
    for match in matches:
        key = (match.start, match.end)
        if key not in seen:
            seen.add(key)
            unique.append(match)
    return unique


def search(data: bytes | None, pattern_hex: str) -> list[Match]:
    """Search ``data`` for a pattern written as hex text.

    Raises ``DecodeError`` when the pattern is not valid hex and
    ``EmptyPatternError`` when it holds no bytes.
    """
    pattern = decode_hex(pattern_hex.strip())
    if not pattern:
        raise EmptyPatternError("Search pattern is empty")
    return dedupe_matches(find_pattern(data, pattern))


def is_match(offset: int, matches: list[Match], starts: list[int] | None = None) -> bool:
    """Whether ``offset`` falls inside one of the sorted, disjoint matches"""
    if not matches:
        return False
    if starts is None:
        starts = [m.start for m in matches]
    idx = bisect_right(starts, offset) - 1
    return idx >= 0 and matches[idx].start <= offset < matches[idx].end


class SearchState:
    """Match list plus the circular "current match" pointer"""

    def __init__(self):
        self.matches: list[Match] = []
        self.current_index = -1

    def replace(self, matches: list[Match]):
        """Install a new result list and select its first match"""
        self.matches = list(matches)
        self.current_index = -1
        if self.matches:
            self.current_index = 0

    def clear(self):
        self.replace([])

    def navigate(self, direction: int) -> Match | None:
        """Step forward (+1) or backward (-1), wrapping at both ends"""
        if not self.matches:
            return None
        self.current_index = (self.current_index + direction) % len(self.matches)
        return self.current

    def next(self) -> Match | None:
        return self.navigate(1)

    def previous(self) -> Match | None:
        return self.navigate(-1)

    @property
    def current(self) -> Match | None:
        if 0 <= self.current_index < len(self.matches):
            return self.matches[self.current_index]
        return None

    @property
    def match_info(self) -> str:
        if not self.matches:
            return "0"
        return f"{self.current_index + 1}/{len(self.matches)}"
