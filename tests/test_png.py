"""
PNGME Container Tests

1. Decoding a real PNG layout
2. Signature and stream termination
3. Append / remove / lookup
4. Serialization and layout
5. End to end
"""

import struct
import sys
import os
import zlib

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pngme import (
    Chunk,
    ChunkNotFound,
    ChunkType,
    InvalidChecksum,
    InvalidChunkType,
    InvalidSignature,
    Png,
    TooShort,
)


def make_chunk(chunk_type: bytes, data: bytes) -> bytes:
    length = struct.pack(">I", len(data))
    crc = struct.pack(">I", zlib.crc32(chunk_type + data) & 0xFFFFFFFF)
    return length + chunk_type + data + crc


def build_minimal_png() -> bytes:
    """Construct a minimal valid PNG (1x1 white pixel)."""
    signature = b"\x89PNG\r\n\x1a\n"

    # IHDR: 1x1, 8-bit RGB
    ihdr_data = struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0)
    ihdr = make_chunk(b"IHDR", ihdr_data)

    # IDAT: compressed scanline (filter byte 0 + RGB white)
    raw_data = b"\x00\xff\xff\xff"
    idat = make_chunk(b"IDAT", zlib.compress(raw_data))

    iend = make_chunk(b"IEND", b"")

    return signature + ihdr + idat + iend


def chunk(chunk_type: str, data: bytes = b"") -> Chunk:
    return Chunk(ChunkType.from_str(chunk_type), data)


def sample_png() -> Png:
    return Png.from_chunks([
        chunk("FrSt", b"I am the first chunk"),
        chunk("miDl", b"I am another chunk"),
        chunk("LASt", b"I am the last chunk"),
    ])


# --- Test 1: Decoding ---

def test_from_bytes_minimal_png():
    png = Png.from_bytes(build_minimal_png())
    assert [str(c.chunk_type) for c in png.chunks] == ["IHDR", "IDAT", "IEND"]
    assert png.chunks[0].length == 13
    assert png.chunks[2].length == 0


def test_from_bytes_empty_chunk_stream():
    png = Png.from_bytes(Png.SIGNATURE)
    assert len(png) == 0
    assert png.chunks == ()


def test_invalid_chunk_aborts_whole_decode():
    data = Png.SIGNATURE + make_chunk(b"IHDR", b"abc") + make_chunk(b"Rust", b"x")
    with pytest.raises(InvalidChunkType):
        Png.from_bytes(data)


def test_corrupt_chunk_aborts_whole_decode():
    data = bytearray(build_minimal_png())
    data[20] ^= 0x01  # inside IHDR data
    with pytest.raises(InvalidChecksum):
        Png.from_bytes(bytes(data))


# --- Test 2: Signature and termination ---

@pytest.mark.parametrize("size", [0, 1, 7])
def test_shorter_than_signature(size):
    with pytest.raises(TooShort):
        Png.from_bytes(Png.SIGNATURE[:size])


def test_bad_signature():
    data = b"\x89PNG\r\n\x1a\x00" + make_chunk(b"IEND", b"")
    with pytest.raises(InvalidSignature) as exc:
        Png.from_bytes(data)
    assert exc.value.found == b"\x89PNG\r\n\x1a\x00"


def test_trailing_garbage_after_iend_is_too_short():
    with pytest.raises(TooShort):
        Png.from_bytes(build_minimal_png() + b"\x00\x01\x02")


def test_chunks_after_iend_are_still_decoded():
    data = build_minimal_png() + make_chunk(b"ruSt", b"after the end")
    png = Png.from_bytes(data)
    assert [str(c.chunk_type) for c in png] == ["IHDR", "IDAT", "IEND", "ruSt"]


def test_truncated_last_chunk():
    with pytest.raises(TooShort):
        Png.from_bytes(build_minimal_png()[:-1])


# --- Test 3: Append / remove / lookup ---

def test_append_chunk():
    png = sample_png()
    png.append_chunk(chunk("TeSt", b"Message"))
    assert len(png) == 4
    assert png.chunks[-1].data == b"Message"


def test_chunk_by_type():
    found = sample_png().chunk_by_type("FrSt")
    assert found is not None
    assert found.data_as_string() == "I am the first chunk"


def test_chunk_by_type_missing():
    png = sample_png()
    assert png.chunk_by_type("NoNe") is None
    assert len(png) == 3


def test_remove_chunk():
    png = sample_png()
    removed = png.remove_chunk("miDl")
    assert removed.data == b"I am another chunk"
    assert [str(c.chunk_type) for c in png] == ["FrSt", "LASt"]


def test_remove_only_first_match():
    png = sample_png()
    png.append_chunk(chunk("FrSt", b"second copy"))
    removed = png.remove_chunk("FrSt")
    assert removed.data == b"I am the first chunk"
    assert png.chunk_by_type("FrSt").data == b"second copy"


def test_remove_missing_chunk():
    png = sample_png()
    with pytest.raises(ChunkNotFound) as exc:
        png.remove_chunk("NoNe")
    assert exc.value.chunk_type == "NoNe"
    assert png == sample_png()


def test_chunk_not_found_is_lookup_error():
    with pytest.raises(LookupError):
        sample_png().remove_chunk("NoNe")


def test_chunks_view_is_read_only():
    png = sample_png()
    view = png.chunks
    assert isinstance(view, tuple)
    png.append_chunk(chunk("TeSt"))
    assert len(view) == 3


# --- Test 4: Serialization and layout ---

def test_to_bytes_matches_input():
    data = build_minimal_png()
    assert Png.from_bytes(data).to_bytes() == data


def test_round_trip_programmatic_png():
    png = sample_png()
    out = png.to_bytes()
    assert out.startswith(Png.SIGNATURE)
    assert Png.from_bytes(out) == png


def test_layout_offsets():
    png = Png.from_bytes(build_minimal_png())
    layout = png.layout()
    assert layout[0].field_id == "png_signature"
    assert (layout[0].start, layout[0].end) == (0, 8)
    assert layout[1].field_id == "chunk_0_IHDR"
    assert (layout[1].start, layout[1].end) == (8, 8 + 12 + 13)
    assert layout[-1].field_id == "chunk_2_IEND"
    assert layout[-1].end == len(png.to_bytes())
    for prev, nxt in zip(layout, layout[1:]):
        assert prev.end == nxt.start


def test_repr():
    assert repr(sample_png()) == "<Png: 3 chunks [FrSt, miDl, LASt]>"


# --- Test 5: End to end ---

def test_replace_chunk_before_iend():
    data = Png.SIGNATURE + make_chunk(b"IHDR", b"\x00" * 13) + make_chunk(b"IEND", b"")
    png = Png.from_bytes(data)

    png.remove_chunk("IHDR")
    iend = png.remove_chunk("IEND")
    png.append_chunk(chunk("ruSt", b"hidden"))
    png.append_chunk(iend)

    result = Png.from_bytes(png.to_bytes())
    assert [str(c.chunk_type) for c in result] == ["ruSt", "IEND"]
    assert result.chunk_by_type("ruSt").data_as_string() == "hidden"


def test_repr_with_undecodable_type():
    png = Png.from_chunks([Chunk(ChunkType.from_bytes(b"\xff\xfe\xfd\xfc"), b"")])
    assert repr(png) == "<Png: 1 chunks [\\xff\\xfe\\xfd\\xfc]>"
    assert png.layout()[1].field_id == "chunk_0_\\xff\\xfe\\xfd\\xfc"


def test_lookup_with_undecodable_text():
    png = sample_png()
    assert png.chunk_by_type("Fr\udcffS") is None
    with pytest.raises(ChunkNotFound):
        png.remove_chunk("Fr\udcffS")
    assert png == sample_png()


def test_layout_range_length_and_repr():
    png = Png.from_bytes(build_minimal_png())
    ihdr = png.layout()[1]
    assert ihdr.length == 12 + 13
    assert repr(ihdr) == "<chunk_0_IHDR [0x8:0x21] (IHDR chunk (13 bytes data))>"
