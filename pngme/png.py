"""
PNGME PNG Container

A PNG file as the generic chunk container it is: the fixed 8-byte
signature followed by an ordered run of chunks. Only the container is
modeled; no chunk's data is interpreted.

Usage:
    png = Png.from_bytes(Path("image.png").read_bytes())
    iend = png.remove_chunk("IEND")
    png.append_chunk(Chunk(ChunkType.from_str("ruSt"), b"hidden"))
    png.append_chunk(iend)
    Path("out.png").write_bytes(png.to_bytes())
"""

from __future__ import annotations

import io
import logging
from typing import Iterable, Iterator, Optional

from kaitaistruct import KaitaiStream

from pngme.chunk import METADATA_BYTES, Chunk
from pngme.errors import ChunkNotFound, InvalidSignature, TooShort
from pngme.layout import StructuredRange

log = logging.getLogger(__name__)


class Png:

    SIGNATURE = b"\x89PNG\r\n\x1a\n"

    def __init__(self, chunks: Optional[Iterable[Chunk]] = None) -> None:
        self._chunks: list[Chunk] = list(chunks) if chunks is not None else []

    @classmethod
    def from_chunks(cls, chunks: Iterable[Chunk]) -> Png:
        return cls(chunks)

    @classmethod
    def from_bytes(cls, data: bytes) -> Png:
        """Decode a whole PNG file.

        Chunks are decoded back to back until the buffer is exhausted;
        IEND does not stop decoding, so anything after it must also be a
        well-formed chunk. The first failure aborts the decode.

        Raises:
            TooShort: buffer shorter than the signature, or a truncated chunk
            InvalidSignature: first 8 bytes are not the PNG signature
            InvalidChunkType / InvalidChecksum: from Chunk.read
        """
        if len(data) < len(cls.SIGNATURE):
            raise TooShort(len(cls.SIGNATURE), len(data))
        if data[:len(cls.SIGNATURE)] != cls.SIGNATURE:
            raise InvalidSignature(bytes(data[:len(cls.SIGNATURE)]))

        stream = KaitaiStream(io.BytesIO(data))
        stream.seek(len(cls.SIGNATURE))

        chunks: list[Chunk] = []
        while not stream.is_eof():
            offset = stream.pos()
            chunk = Chunk.read(stream)
            log.debug("decoded %s (%d bytes data) at %#x",
                      chunk.chunk_type, chunk.length, offset)
            chunks.append(chunk)

        return cls(chunks)

    @property
    def chunks(self) -> tuple[Chunk, ...]:
        """All chunks in file order."""
        return tuple(self._chunks)

    def append_chunk(self, chunk: Chunk) -> None:
        self._chunks.append(chunk)

    def remove_chunk(self, chunk_type: str) -> Chunk:
        """Remove and return the first chunk whose type renders as `chunk_type`.

        Raises:
            ChunkNotFound: no chunk of that type (the PNG is left untouched)
        """
        for i, chunk in enumerate(self._chunks):
            if _type_matches(chunk, chunk_type):
                return self._chunks.pop(i)
        raise ChunkNotFound(chunk_type)

    def chunk_by_type(self, chunk_type: str) -> Optional[Chunk]:
        """First chunk whose type renders as `chunk_type`, or None."""
        for chunk in self._chunks:
            if _type_matches(chunk, chunk_type):
                return chunk
        return None

    def to_bytes(self) -> bytes:
        return self.SIGNATURE + b"".join(c.to_bytes() for c in self._chunks)

    def layout(self) -> list[StructuredRange]:
        """Byte ranges of the signature and each chunk as laid out by to_bytes()."""
        ranges = [StructuredRange(0, len(self.SIGNATURE), "png_signature", "PNG file signature")]
        offset = len(self.SIGNATURE)
        for i, chunk in enumerate(self._chunks):
            end = offset + METADATA_BYTES + chunk.length
            ranges.append(StructuredRange(
                offset, end, f"chunk_{i}_{chunk.chunk_type.label}",
                f"{chunk.chunk_type.label} chunk ({chunk.length} bytes data)",
            ))
            offset = end
        return ranges

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Png):
            return NotImplemented
        return self._chunks == other._chunks

    def __repr__(self) -> str:
        types = ", ".join(c.chunk_type.label for c in self._chunks)
        return f"<Png: {len(self._chunks)} chunks [{types}]>"


def _type_matches(chunk: Chunk, chunk_type: str) -> bool:
    # Compare on raw bytes so trusted chunks with undecodable codes never raise
    return chunk.chunk_type.raw == chunk_type.encode("utf-8", errors="surrogateescape")
