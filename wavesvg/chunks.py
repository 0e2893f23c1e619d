"""
wavesvg.chunks - Locate the ``data`` chunk of a WAV file.

After the 36-byte header a WAV file holds any number of tagged,
length-prefixed chunks (``LIST``, ``bext``, ``JUNK``, ...). The scanner
trusts each declared length and seeks past the payload until it reaches
the ``data`` chunk. Chunk contents are never interpreted.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from wavesvg.exceptions import HeaderInconsistencyError, IncompatibleFormatError, ReadError
from wavesvg.header import RIFF_TAG, WAVE_TAG
from wavesvg.logging import logger
from wavesvg.source import ByteSource

DATA_TAG = b"data"

CHUNK_HEADER = struct.Struct("<4sI")

# Sizes at or above this would read as negative in a signed 32-bit field.
MAX_CHUNK_SIZE = 0x7FFFFFFF


@dataclass(frozen=True)
class PayloadLocation:
    """Where the sample payload lives.

    Attributes:
        offset: Absolute position of the first sample byte
        size_bytes: Declared length of the ``data`` chunk
    """

    offset: int
    size_bytes: int


@dataclass(frozen=True)
class ChunkInfo:
    """A chunk header found while listing a file.

    Attributes:
        tag: 4-character chunk identifier (e.g. ``"fmt "``, ``"LIST"``)
        size: Declared payload size in bytes (excluding the 8-byte header)
        offset: Absolute position of the chunk payload
    """

    tag: str
    size: int
    offset: int


def _read_chunk_header(source: ByteSource) -> tuple[bytes, int]:
    data = source.read(CHUNK_HEADER.size)
    if len(data) != CHUNK_HEADER.size:
        raise ReadError("Unexpected end of stream while scanning chunks")
    tag, size = CHUNK_HEADER.unpack(data)
    return tag, size


def locate_payload(source: ByteSource) -> PayloadLocation:
    """Scan forward from the end of the header to the ``data`` chunk.

    Args:
        source: Byte source positioned right after the 36-byte header

    Returns:
        PayloadLocation for the first ``data`` chunk

    Raises:
        ReadError: If the stream ends before a ``data`` chunk is found
        HeaderInconsistencyError: If a skipped chunk declares an invalid size
    """
    skipped = 0
    while True:
        tag, size = _read_chunk_header(source)
        if tag == DATA_TAG:
            break
        if size > MAX_CHUNK_SIZE:
            raise HeaderInconsistencyError(
                "chunk_size",
                f"<= {MAX_CHUNK_SIZE}",
                size,
                f"Invalid sub chunk size encountered: {tag!r} declares {size} bytes",
            )
        logger.debug("Skipping %r chunk (%d bytes)", tag, size)
        source.seek_relative(size)
        skipped += 1

    offset = source.tell()
    logger.debug("Found data chunk at %d (%d bytes) after %d other chunks", offset, size, skipped)
    return PayloadLocation(offset=offset, size_bytes=size)


def list_chunks(source: ByteSource) -> list[ChunkInfo]:
    """Return every chunk after the RIFF/WAVE preamble, in file order.

    This is a lightweight scan that only reads chunk headers (8 bytes
    each) and seeks past the payload data. Odd-sized chunks are followed
    by a pad byte, as RIFF requires. Scanning stops at end of stream or
    at a truncated chunk header.

    Args:
        source: Byte source over the whole file

    Returns:
        Ordered list of ChunkInfo, ``fmt `` and ``data`` included

    Raises:
        IncompatibleFormatError: If the stream does not start with a RIFF/WAVE preamble
    """
    source.seek_absolute(0)
    preamble = source.read(12)
    if preamble[:4] != RIFF_TAG or preamble[8:12] != WAVE_TAG:
        raise IncompatibleFormatError(
            f"Not a RIFF/WAVE file: found {preamble[:4]!r}, {preamble[8:12]!r}"
        )

    chunks: list[ChunkInfo] = []
    pos = source.tell()

    while True:
        data = source.read(CHUNK_HEADER.size)
        if len(data) < CHUNK_HEADER.size:
            break
        tag, size = CHUNK_HEADER.unpack(data)
        chunks.append(
            ChunkInfo(tag=tag.decode("ascii", errors="replace"), size=size, offset=pos + 8)
        )
        # Advance past chunk data; chunks are padded to even boundaries
        pos += 8 + size
        if size % 2:
            pos += 1
        source.seek_absolute(pos)

    return chunks
