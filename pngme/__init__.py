"""
PNGME - hide messages in PNG chunks
A codec for the PNG chunk container: decode a file into its chunks, add,
find and remove chunks, and write it back out byte for byte.

Layers:
    ChunkType — 4-byte type code and its property bits
    Chunk     — length / type / data / CRC record
    Png       — signature + ordered chunks
"""

__version__ = "0.1.0"

from pngme.chunk_type import ChunkType
from pngme.chunk import Chunk
from pngme.png import Png
from pngme.layout import StructuredRange
from pngme.errors import (
    PngError,
    FormatError,
    TooShort,
    InvalidSignature,
    InvalidChunkType,
    InvalidChecksum,
    WrongLength,
    InvalidCharacter,
    NotUtf8,
    PayloadTooLarge,
    ChunkNotFound,
)

__all__ = [
    "ChunkType",
    "Chunk",
    "Png",
    "StructuredRange",
    "PngError",
    "FormatError",
    "TooShort",
    "InvalidSignature",
    "InvalidChunkType",
    "InvalidChecksum",
    "WrongLength",
    "InvalidCharacter",
    "NotUtf8",
    "PayloadTooLarge",
    "ChunkNotFound",
]
