"""
PNGME Errors

Every failure the codec can report, one class per kind. All of them
derive from PngError so callers can catch the whole family at once;
format problems are also ValueErrors and lookup misses are LookupErrors.
"""

from __future__ import annotations


class PngError(Exception):
    """Base class for everything raised by pngme."""


class FormatError(PngError, ValueError):
    """Bytes or text that do not form a valid chunk / chunk type / PNG."""


class TooShort(FormatError):
    def __init__(self, needed: int, available: int) -> None:
        self.needed = needed
        self.available = available
        super().__init__(
            f"At least {needed} bytes must be supplied, only {available} available"
        )


class InvalidSignature(FormatError):
    def __init__(self, found: bytes) -> None:
        self.found = found
        super().__init__(f"Bad PNG signature: {found.hex(' ')}")


class InvalidChunkType(FormatError):
    def __init__(self, raw: bytes) -> None:
        self.raw = raw
        super().__init__(f"Invalid chunk type {raw!r}")


class InvalidChecksum(FormatError):
    """Declared CRC disagrees with the CRC of the decoded type + data."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid CRC when constructing chunk. "
            f"Expected {expected} but found {actual}"
        )


class WrongLength(FormatError):
    def __init__(self, actual: int) -> None:
        self.actual = actual
        super().__init__(
            f"Expected 4 bytes but received {actual} when creating chunk type"
        )


class InvalidCharacter(FormatError):
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Chunk type {text!r} contains characters outside A-Z / a-z")


class NotUtf8(FormatError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Chunk data is not valid UTF-8: {reason}")


class PayloadTooLarge(FormatError):
    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"Chunk data of {size} bytes does not fit a 32-bit length")


class ChunkNotFound(PngError, LookupError):
    def __init__(self, chunk_type: str) -> None:
        self.chunk_type = chunk_type
        super().__init__(f"No chunk of type {chunk_type!r} found")
