"""
PNGME Chunk

One PNG chunk: a length-prefixed, type-tagged, CRC-checked record.

    length:4 | type:4 | data:length | crc:4      (big-endian)

Two ways in:
- Chunk(chunk_type, data) trusts the caller (writing path)
- Chunk.from_bytes() / Chunk.read() trust nothing (reading path)

The CRC is never stored. It is recomputed from type + data every time it
is asked for, so a Chunk cannot disagree with its own checksum.
"""

from __future__ import annotations

import io
import struct
import zlib
from dataclasses import dataclass

from kaitaistruct import KaitaiStream

from pngme.chunk_type import ChunkType
from pngme.errors import (
    InvalidChecksum,
    InvalidChunkType,
    NotUtf8,
    PayloadTooLarge,
    TooShort,
)


DATA_LENGTH_BYTES = 4
CHUNK_TYPE_BYTES = 4
CRC_BYTES = 4
METADATA_BYTES = DATA_LENGTH_BYTES + CHUNK_TYPE_BYTES + CRC_BYTES

MAX_DATA_LENGTH = 0xFFFFFFFF


@dataclass(frozen=True)
class Chunk:
    chunk_type: ChunkType
    data: bytes = b""

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))
        if len(self.data) > MAX_DATA_LENGTH:
            raise PayloadTooLarge(len(self.data))

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def crc(self) -> int:
        """CRC-32 (ISO-HDLC) over the type code followed by the data."""
        return zlib.crc32(self.chunk_type.raw + self.data) & 0xFFFFFFFF

    def data_as_string(self) -> str:
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise NotUtf8(str(e)) from e

    def to_bytes(self) -> bytes:
        return (
            struct.pack(">I", self.length)
            + self.chunk_type.raw
            + self.data
            + struct.pack(">I", self.crc)
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> Chunk:
        """Decode and validate a single chunk from the start of `data`.

        Bytes past the end of the chunk are left alone.

        Raises:
            TooShort: fewer than 12 bytes, or the declared length runs
                past the end of `data`
            InvalidChunkType: type code fails ChunkType.is_valid
            InvalidChecksum: stored CRC does not match type + data
        """
        return cls.read(KaitaiStream(io.BytesIO(data)))

    @classmethod
    def read(cls, stream: KaitaiStream) -> Chunk:
        """Decode one chunk at the stream's current position.

        On success the stream is left exactly 12 + length bytes further on.
        """
        available = stream.size() - stream.pos()
        if available < METADATA_BYTES:
            raise TooShort(METADATA_BYTES, available)

        length = stream.read_u4be()
        chunk_type = ChunkType.from_bytes(stream.read_bytes(CHUNK_TYPE_BYTES))
        if not chunk_type.is_valid:
            raise InvalidChunkType(chunk_type.raw)

        # Guard the declared length before trusting it for a read
        if length + CRC_BYTES > available - DATA_LENGTH_BYTES - CHUNK_TYPE_BYTES:
            raise TooShort(METADATA_BYTES + length, available)

        data = stream.read_bytes(length)
        stored_crc = stream.read_u4be()

        chunk = cls(chunk_type, data)
        if chunk.crc != stored_crc:
            raise InvalidChecksum(chunk.crc, stored_crc)
        return chunk

    def describe(self) -> str:
        """Multi-line diagnostic summary."""
        return (
            "Chunk {\n"
            f"  Length: {self.length}\n"
            f"  Type: {self.chunk_type.label}\n"
            f"  Data: {len(self.data)} bytes\n"
            f"  Crc: {self.crc}\n"
            "}"
        )

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"<Chunk {self.chunk_type.raw!r} {self.length}B crc={self.crc:#010x}>"
