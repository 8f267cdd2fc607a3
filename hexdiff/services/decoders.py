"""
Format Decoders - Turn free-form pasted text into raw bytes

Every decoder is a pure function ``text -> bytes`` that raises
``DecodeError`` on malformed input. Blank input always decodes to ``b""``.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Callable

from hexdiff.models.decode import InputFormat
from hexdiff.services.errors import DecodeError

# ========== Patterns ==========

# Prefixes and separators dropped from plain hex, matched in one pass
_HEX_NOISE = re.compile(r"\\x|0x|[,\s;:\[\]{}()'\"]+", re.IGNORECASE)
_NON_HEX = re.compile(r"[^0-9A-Fa-f]")

_HEXDUMP_ADDRESS = re.compile(r"^(?:0x)?[0-9a-fA-F]+(?::\s*|\s{2,})")
_HEXDUMP_ASCII_GUTTER = re.compile(r"\s{2,}[\x20-\x7E]+$")
_HEX_PAIR = re.compile(r"[0-9a-fA-F]{2}")

_C_ARRAY_BODY = re.compile(r"\{(.*)\}", re.DOTALL)
_C_ARRAY_ITEM = re.compile(r"[^\s,;\[\]{}()]+")
_C_ARRAY_LITERAL = re.compile(r"(?:0[xX])?([0-9a-fA-F]+)")

_WHITESPACE = re.compile(r"\s+")

_BASE64_SHAPE = re.compile(r"[A-Za-z0-9+/]+={0,2}")
_PURE_HEX = re.compile(r"(?:0x)?[0-9a-fA-F]+")
_HEXDUMP_LINE = re.compile(r"^(?:0x)?[0-9a-fA-F]{6,}(?::|[ \t]{2,})[0-9a-fA-F]{2}", re.MULTILINE)
_C_ARRAY_BRACKETS = re.compile(r"[{}\[\]]")
_C_ARRAY_ELEMENT = re.compile(r"0x[0-9a-fA-F]+\s*,")

BASE64_MIN_LENGTH = 10


# ========== Decoders ==========


def _strip_hex_noise(text: str) -> tuple[str, list[int]]:
    """Hex digits left after dropping noise, with their indices in ``text``"""
    kept: list[int] = []
    last = 0
    for noise in _HEX_NOISE.finditer(text):
        kept.extend(range(last, noise.start()))
        last = noise.end()
    kept.extend(range(last, len(text)))
    return "".join(text[i] for i in kept), kept


def decode_hex(text: str) -> bytes:
    """Decode plain hex, tolerating prefixes, separators and any case"""
    cleaned, positions = _strip_hex_noise(text)
    if not cleaned:
        return b""

    if len(cleaned) % 2 != 0:
        raise DecodeError(
            DecodeError.ODD_LENGTH,
            InputFormat.HEX.value,
            f"Hex digit count must be even, got {len(cleaned)}",
            length=len(cleaned),
        )

    bad = _NON_HEX.search(cleaned)
    if bad:
        position = positions[bad.start()]
        raise DecodeError(
            DecodeError.INVALID_CHARACTER,
            InputFormat.HEX.value,
            f"Invalid hex character {bad.group()!r} at position {position}",
            position=position,
            character=bad.group(),
        )

    return bytes.fromhex(cleaned)


def decode_hexdump(text: str) -> bytes:
    """Decode xxd, debugger and bare ``address  bytes`` dumps line by line.

    Each line loses its leading address and trailing ASCII gutter; every
    remaining two-digit hex token becomes a byte. Lines without tokens are
    skipped.
    """
    out = bytearray()
    for line in text.splitlines():
        if not line.strip():
            continue
        payload = _HEXDUMP_ADDRESS.sub("", line, count=1)
        payload = _HEXDUMP_ASCII_GUTTER.sub("", payload, count=1)
        out.extend(int(token, 16) for token in _HEX_PAIR.findall(payload))
    return bytes(out)


def decode_c_array(text: str) -> bytes:
    """Decode a C/C++/Python array literal such as ``{0x48, 0x65}``.

    Only the initializer between the outer braces is read when present, so
    the declaration and array size do not leak into the output. Each element
    is split left to right into one or two digit bytes, ``0x0102`` giving
    ``01 02``. An element that is not a hex literal is an error.
    """
    body = _C_ARRAY_BODY.search(text)
    start = body.start(1) if body else 0
    out = bytearray()
    for item in _C_ARRAY_ITEM.finditer(body.group(1) if body else text):
        literal = _C_ARRAY_LITERAL.fullmatch(item.group())
        if literal is None:
            raise DecodeError(
                DecodeError.INVALID_CHARACTER,
                InputFormat.C_ARRAY.value,
                f"Invalid array element {item.group()!r} at position {start + item.start()}",
                position=start + item.start(),
                character=item.group(),
            )
        digits = literal.group(1)
        out.extend(int(digits[i : i + 2], 16) for i in range(0, len(digits), 2))
    return bytes(out)


def decode_base64(text: str) -> bytes:
    """Decode standard Base64 after dropping whitespace"""
    cleaned = _WHITESPACE.sub("", text)
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(
            DecodeError.INVALID_BASE64,
            InputFormat.BASE64.value,
            f"Invalid Base64 data: {e}",
        ) from e


# ========== Auto-detection ==========


def looks_like_base64(text: str) -> bool:
    """Base64 alphabet, long enough, and not just a run of hex digits"""
    cleaned = _WHITESPACE.sub("", text.strip())
    if len(cleaned) <= BASE64_MIN_LENGTH:
        return False
    if not _BASE64_SHAPE.fullmatch(cleaned):
        return False
    return not is_pure_hex(cleaned)


def is_pure_hex(cleaned: str) -> bool:
    return bool(_PURE_HEX.fullmatch(re.sub("0x", "", cleaned, flags=re.IGNORECASE)))


def looks_like_hexdump(text: str) -> bool:
    """Some line starts with a long address immediately followed by a byte"""
    return bool(_HEXDUMP_LINE.search(text.strip()))


def looks_like_c_array(text: str) -> bool:
    trimmed = text.strip()
    return bool(_C_ARRAY_BRACKETS.search(trimmed) or _C_ARRAY_ELEMENT.search(trimmed))


def decode_auto(text: str) -> tuple[InputFormat, bytes]:
    """Pick a decoder by ordered heuristics and run it.

    Returns the format that was actually used. Only a failed Base64 attempt
    falls through to the next heuristic; every later branch commits.
    """
    if not text.strip():
        return InputFormat.HEX, b""

    if looks_like_base64(text):
        try:
            return InputFormat.BASE64, decode_base64(text)
        except DecodeError:
            pass

    if looks_like_hexdump(text):
        return InputFormat.HEXDUMP, decode_hexdump(text)

    if looks_like_c_array(text):
        return InputFormat.C_ARRAY, decode_c_array(text)

    return InputFormat.HEX, decode_hex(text)


def detect_format(text: str) -> InputFormat:
    """Format auto-detection would settle on (decode errors propagate)"""
    fmt, _ = decode_auto(text)
    return fmt


# ========== Entry points ==========

DECODERS: dict[InputFormat, Callable[[str], bytes]] = {
    InputFormat.HEX: decode_hex,
    InputFormat.HEXDUMP: decode_hexdump,
    InputFormat.C_ARRAY: decode_c_array,
    InputFormat.BASE64: decode_base64,
}


def decode_with_format(text: str, fmt: InputFormat | str = InputFormat.AUTO) -> tuple[InputFormat, bytes]:
    """Decode text and report which decoder produced the bytes"""
    fmt = InputFormat(fmt)
    if fmt is InputFormat.AUTO:
        return decode_auto(text)
    if not text.strip():
        return fmt, b""
    return fmt, DECODERS[fmt](text)


def decode(text: str, fmt: InputFormat | str = InputFormat.AUTO) -> bytes:
    """Decode text in the given format (``auto`` by default)"""
    return decode_with_format(text, fmt)[1]


def encode_hex(data: bytes, sep: str = " ") -> str:
    """Uppercase hex pairs, the inverse of ``decode_hex``"""
    return sep.join(f"{b:02X}" for b in data)


def format_size(size_bytes: int) -> str:
    """Human readable size, e.g. ``512 B`` or ``1.50 KB``"""
    units = ["B", "KB", "MB", "GB"]
    size = float(size_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024
        unit_index += 1
    decimals = 2 if unit_index > 0 else 0
    return f"{size:.{decimals}f} {units[unit_index]}"
