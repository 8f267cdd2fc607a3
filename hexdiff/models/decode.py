"""Decode-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class InputFormat(str, Enum):
    """Textual encodings a payload can be pasted in"""

    AUTO = "auto"
    HEX = "hex"
    HEXDUMP = "hexdump"
    C_ARRAY = "c_array"
    BASE64 = "base64"


class Side(str, Enum):
    """Which of the two compared payloads"""

    A = "A"
    B = "B"


class DecodeRequest(BaseModel):
    """Request to decode a single payload"""

    text: str
    format: InputFormat = InputFormat.AUTO


class DecodeErrorDetail(BaseModel):
    """Typed decode failure returned to the client"""

    kind: str  # "OddLength", "InvalidCharacter", "InvalidBase64"
    decoder: str
    message: str
    position: int | None = None
    character: str | None = None
    length: int | None = None


class DecodeResponse(BaseModel):
    """Decoded payload summary"""

    format: InputFormat
    detected_format: InputFormat  # decoder actually used
    length: int
    size_label: str
    hex: str  # space-separated uppercase pairs
