"""
Typed failures raised by the HexDiff engine
"""

from __future__ import annotations


class HexDiffError(Exception):
    """Base class for all engine failures"""


class DecodeError(HexDiffError):
    """Text could not be turned into bytes by the chosen decoder"""

    ODD_LENGTH = "OddLength"
    INVALID_CHARACTER = "InvalidCharacter"
    INVALID_BASE64 = "InvalidBase64"

    def __init__(
        self,
        kind: str,
        decoder: str,
        message: str,
        position: int | None = None,
        character: str | None = None,
        length: int | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.decoder = decoder
        self.message = message
        self.position = position
        self.character = character
        self.length = length

    def to_dict(self) -> dict:
        """Serializable form used in API error bodies"""
        return {
            "kind": self.kind,
            "decoder": self.decoder,
            "message": self.message,
            "position": self.position,
            "character": self.character,
            "length": self.length,
        }


class EmptyPatternError(HexDiffError):
    """Search pattern decoded to zero bytes"""

    kind = "EmptyPattern"


class NothingToExportError(HexDiffError):
    """Export requested while the two sides are identical"""


class InvalidOffsetError(HexDiffError):
    """Jump target is not a non-negative hex offset"""


class SessionNotFoundError(HexDiffError):
    """No session is stored under the requested id"""

    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id
