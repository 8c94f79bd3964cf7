"""
PNGME Commands

The four operations the CLI exposes, as plain functions over file paths.
Each one decodes the whole file first and only writes once every step has
succeeded, so a failed command never touches the output file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from pngme.chunk import Chunk
from pngme.chunk_type import ChunkType
from pngme.errors import ChunkNotFound
from pngme.png import Png

log = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_OUTPUT = "output.png"
END_CHUNK = "IEND"


def load(path: PathLike) -> Png:
    return Png.from_bytes(Path(path).read_bytes())


def embed_message(png: Png, chunk_type: str, message: str) -> Chunk:
    """Insert a new chunk carrying `message` just before IEND.

    IEND stays the last chunk. The type is validated before the PNG is
    modified.
    """
    new_chunk = Chunk(ChunkType.from_str(chunk_type), message.encode("utf-8"))
    iend = png.remove_chunk(END_CHUNK)
    png.append_chunk(new_chunk)
    png.append_chunk(iend)
    return new_chunk


def encode(
    path: PathLike,
    chunk_type: str,
    message: str,
    output_path: Optional[PathLike] = None,
) -> Path:
    """Hide `message` in a new `chunk_type` chunk and write the result.

    Returns the path written (DEFAULT_OUTPUT when none is given).
    """
    png = load(path)
    embed_message(png, chunk_type, message)
    out = Path(output_path) if output_path is not None else Path(DEFAULT_OUTPUT)
    out.write_bytes(png.to_bytes())
    log.info("encoded %s chunk into %s", chunk_type, out)
    return out


def decode(path: PathLike, chunk_type: str) -> str:
    """Return the text of the first `chunk_type` chunk.

    Raises:
        ChunkNotFound: the file has no chunk of that type
        NotUtf8: the chunk data is not text
    """
    chunk = load(path).chunk_by_type(chunk_type)
    if chunk is None:
        raise ChunkNotFound(chunk_type)
    return chunk.data_as_string()


def remove(path: PathLike, chunk_type: str) -> Chunk:
    """Remove the first `chunk_type` chunk and rewrite the file in place."""
    png = load(path)
    removed = png.remove_chunk(chunk_type)
    Path(path).write_bytes(png.to_bytes())
    log.info("removed %s chunk from %s", chunk_type, path)
    return removed


def print_chunks(path: PathLike, offsets: bool = False) -> list[str]:
    """Diagnostic text for every chunk, in file order.

    With `offsets`, each entry starts with the chunk's byte range in the file.
    """
    png = load(path)
    if not offsets:
        return [chunk.describe() for chunk in png]
    return [
        f"[{rng.start:#08x}:{rng.end:#08x}] {rng.length} bytes\n{chunk.describe()}"
        for chunk, rng in zip(png, png.layout()[1:])
    ]
