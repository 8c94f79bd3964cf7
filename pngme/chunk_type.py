"""
PNGME Chunk Type

A chunk type is a 4-byte code. Bit 5 (0x20) of each byte carries a
property flag:

    byte 0: ancillary (set) / critical (clear)
    byte 1: private (set) / public (clear)
    byte 2: reserved, must be clear for a valid type
    byte 3: safe to copy (set) / unsafe to copy (clear)

Construction from raw bytes is permissive so malformed codes can still be
inspected; is_valid is the gate the decoder applies.
"""

from __future__ import annotations

from dataclasses import dataclass

from pngme.errors import InvalidCharacter, WrongLength


PROPERTY_BIT = 0b0010_0000


@dataclass(frozen=True)
class ChunkType:
    """The 4-byte type code of a PNG chunk."""
    raw: bytes

    @classmethod
    def from_bytes(cls, raw: bytes) -> ChunkType:
        """Wrap 4 raw bytes without checking letters or the reserved bit."""
        raw = bytes(raw)
        if len(raw) != 4:
            raise WrongLength(len(raw))
        return cls(raw)

    @classmethod
    def from_str(cls, text: str) -> ChunkType:
        """Build a chunk type from text such as "IHDR" or "ruSt".

        Raises:
            WrongLength: text is not exactly 4 bytes once encoded
            InvalidCharacter: any byte is not an ASCII letter
        """
        # Undecodable CLI bytes arrive as lone surrogates; map them back to bytes
        raw = text.encode("utf-8", errors="surrogateescape")
        if len(raw) != 4:
            raise WrongLength(len(raw))
        if not all(cls.is_valid_byte(b) for b in raw):
            raise InvalidCharacter(text)
        return cls(raw)

    @staticmethod
    def is_valid_byte(byte: int) -> bool:
        return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A

    @property
    def is_critical(self) -> bool:
        return not self.raw[0] & PROPERTY_BIT

    @property
    def is_public(self) -> bool:
        return not self.raw[1] & PROPERTY_BIT

    @property
    def is_reserved_bit_valid(self) -> bool:
        return not self.raw[2] & PROPERTY_BIT

    @property
    def is_safe_to_copy(self) -> bool:
        return bool(self.raw[3] & PROPERTY_BIT)

    @property
    def is_valid(self) -> bool:
        """Reserved bit clear and all four bytes are A-Z / a-z."""
        return self.is_reserved_bit_valid and all(
            self.is_valid_byte(b) for b in self.raw
        )

    def __str__(self) -> str:
        # UnicodeDecodeError here means a raw, never-validated code
        return self.raw.decode("utf-8")

    @property
    def label(self) -> str:
        """Display text; bytes that are not UTF-8 show as \\xNN escapes."""
        return self.raw.decode("utf-8", errors="backslashreplace")

    def __repr__(self) -> str:
        return f"<ChunkType {self.raw!r}>"
