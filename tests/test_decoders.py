from __future__ import annotations

import pytest

from hexdiff.models.decode import InputFormat
from hexdiff.services.decoders import (
    decode,
    decode_base64,
    decode_c_array,
    decode_hex,
    decode_hexdump,
    decode_with_format,
    detect_format,
    encode_hex,
    format_size,
)
from hexdiff.services.errors import DecodeError


# ========== Hex ==========


def test_decode_hex_space_separated() -> None:
    assert decode("48 65 6C 6C 6F", "hex") == bytes([0x48, 0x65, 0x6C, 0x6C, 0x6F])


def test_decode_hex_strips_prefixes_and_separators() -> None:
    assert decode_hex(r"0x48, 0X65; \x6c [6c] {6F} ('0a')") == bytes.fromhex("48656c6c6f0a")


def test_decode_hex_is_case_insensitive() -> None:
    assert decode_hex("aBcD") == b"\xab\xcd"


@pytest.mark.parametrize("text", ["", "   ", "\n\t \r\n"])
def test_blank_input_decodes_to_nothing(text: str) -> None:
    for fmt in InputFormat:
        assert decode(text, fmt) == b""


def test_decode_hex_odd_length() -> None:
    with pytest.raises(DecodeError) as exc:
        decode_hex("48 6")
    assert exc.value.kind == DecodeError.ODD_LENGTH
    assert exc.value.decoder == "hex"
    assert exc.value.length == 3


def test_decode_hex_invalid_character_reports_position() -> None:
    with pytest.raises(DecodeError) as exc:
        decode_hex("48 ZZ")
    assert exc.value.kind == DecodeError.INVALID_CHARACTER
    assert exc.value.position == 3
    assert exc.value.character == "Z"


def test_decode_hex_position_counts_prefixes() -> None:
    with pytest.raises(DecodeError) as exc:
        decode_hex("0x48, 0xG1")
    assert exc.value.position == 8
    assert exc.value.character == "G"


def test_hex_round_trip_all_byte_values() -> None:
    data = bytes(range(256))
    assert decode(encode_hex(data), "hex") == data
    assert decode(encode_hex(data, sep=""), "hex") == data


# ========== Hexdump ==========


def test_decode_hexdump_xxd_line() -> None:
    assert decode("00000000: 4865 6c6c 6f0a   Hello.", "hexdump") == bytes(
        [0x48, 0x65, 0x6C, 0x6C, 0x6F, 0x0A]
    )


def test_decode_hexdump_debugger_layout() -> None:
    text = "768fb64000  02 1f 3f 14 71 c6 18 40  ..?.q..@\n768fb64008  41 42  AB\n"
    assert decode_hexdump(text) == bytes.fromhex("021f3f1471c618404142")


def test_decode_hexdump_without_ascii_gutter() -> None:
    text = "00000000  48 65 6c 6c 6f\n00000005  20 57\n"
    assert decode_hexdump(text) == b"Hello W"


def test_decode_hexdump_skips_lines_without_tokens() -> None:
    text = "\n--- dump ---\n\n00000000: 41 42\n"
    assert decode_hexdump(text) == b"AB"


# ========== C array ==========


def test_decode_c_array_ignores_declaration() -> None:
    text = "unsigned char data[3] = {0x48, 0x65, 0x6C};"
    assert decode_c_array(text) == b"Hel"


def test_decode_c_array_without_prefixes() -> None:
    assert decode_c_array("{ 1, 2, ff }") == b"\x01\x02\xff"


def test_decode_c_array_splits_wide_literals() -> None:
    assert decode_c_array("{0x0102}") == b"\x01\x02"
    assert decode_c_array("{0x0102, 0x0304}") == b"\x01\x02\x03\x04"
    assert decode_c_array("{0x123}") == b"\x12\x03"


def test_decode_c_array_keeps_unprefixed_elements() -> None:
    assert decode_c_array("{0x01, 02, 03}") == b"\x01\x02\x03"


def test_decode_c_array_python_list() -> None:
    assert decode_c_array("[0x48, 0x69]") == b"Hi"


def test_decode_c_array_empty_initializer() -> None:
    assert decode_c_array("char buf[] = {};") == b""


def test_decode_c_array_rejects_non_literals() -> None:
    with pytest.raises(DecodeError) as exc:
        decode_c_array("{0x01, x}")
    assert exc.value.kind == DecodeError.INVALID_CHARACTER
    assert exc.value.decoder == "c_array"
    assert exc.value.character == "x"
    assert exc.value.position == 7


# ========== Base64 ==========


def test_decode_base64() -> None:
    assert decode_base64("SGVsbG8g\nV29ybGQ=") == b"Hello World"


@pytest.mark.parametrize("text", ["SGVsbG8", "SGV@bG8=", "===="])
def test_decode_base64_rejects_bad_input(text: str) -> None:
    with pytest.raises(DecodeError) as exc:
        decode_base64(text)
    assert exc.value.kind == DecodeError.INVALID_BASE64


# ========== Auto-detection ==========


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("SGVsbG8gV29ybGQ=", InputFormat.BASE64),
        ("48656C6C6F20576F726C64", InputFormat.HEX),
        ("0x48 0x65 0x6C 0x6C 0x6F", InputFormat.HEX),
        ("768fb64000  02 1f 3f 14", InputFormat.HEXDUMP),
        ("00000000:4865 6c6c", InputFormat.HEXDUMP),
        ("{0x01, 0x02}", InputFormat.C_ARRAY),
        ("0x01, 0x02", InputFormat.C_ARRAY),
        ("48 65 6c", InputFormat.HEX),
    ],
)
def test_detect_format(text: str, expected: InputFormat) -> None:
    assert detect_format(text) == expected


def test_short_hex_run_is_not_base64() -> None:
    fmt, data = decode_with_format("DEADBEEFCAFE", "auto")
    assert fmt == InputFormat.HEX
    assert data == bytes.fromhex("DEADBEEFCAFE")


def test_address_needs_payload_right_after_separator() -> None:
    # A space after the colon keeps this out of the hexdump branch
    fmt, data = decode_with_format("00000000: 4865 6c6c", "auto")
    assert fmt == InputFormat.HEX
    assert data == bytes.fromhex("0000000048656c6c")


def test_failed_base64_falls_through_to_hex() -> None:
    with pytest.raises(DecodeError) as exc:
        decode("ABCDEFGHIJKLM", "auto")
    assert exc.value.decoder == "hex"
    assert exc.value.kind == DecodeError.ODD_LENGTH


def test_auto_decodes_c_array() -> None:
    assert decode("uint8_t buf[] = { 0xDE, 0xAD };") == b"\xde\xad"
    assert decode("{0x0102, 0x0304}") == b"\x01\x02\x03\x04"


# ========== Helpers ==========


@pytest.mark.parametrize(
    ("size", "label"),
    [(0, "0 B"), (1023, "1023 B"), (1536, "1.50 KB"), (1048576, "1.00 MB")],
)
def test_format_size(size: int, label: str) -> None:
    assert format_size(size) == label
