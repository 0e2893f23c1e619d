"""
wavesvg.header - RIFF/WAVE header parsing and validation.

Reads the fixed 36-byte preamble (RIFF tag, chunk size, WAVE tag and the
``fmt `` sub-chunk) and checks that the derived fields agree with each
other before anything downstream trusts them.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from wavesvg.exceptions import HeaderInconsistencyError, IncompatibleFormatError
from wavesvg.logging import logger
from wavesvg.source import ByteSource

RIFF_TAG = b"RIFF"
WAVE_TAG = b"WAVE"
FMT_TAG = b"fmt "

# subChunk1Size, audioFormat, channels, sampleRate, byteRate, blockAlign, bitsPerSample
FMT_STRUCT = struct.Struct("<IHHIIHH")

HEADER_SIZE = 4 + 4 + 4 + 4 + FMT_STRUCT.size

PCM_FORMAT = 1


@dataclass(frozen=True)
class ContainerHeader:
    """Parsed and validated WAV header fields.

    Attributes:
        chunk_size: Declared RIFF chunk size (not checked against file length)
        fmt_chunk_size: Declared size of the ``fmt `` sub-chunk
        audio_format: Format code, always 1 (linear PCM) once parsed
        channels: Number of interleaved channels
        sample_rate: Frames per second
        byte_rate: Bytes of audio data per second
        block_align: Bytes per frame across all channels
        bits_per_sample: Bit depth of a single sample
    """

    chunk_size: int
    fmt_chunk_size: int
    audio_format: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int


def _expect_tag(source: ByteSource, tag: bytes, message: str) -> None:
    found = source.read(len(tag))
    if found != tag:
        raise IncompatibleFormatError(f"{message}: expected {tag!r}, found {found!r}")


def validate_header(header: ContainerHeader) -> None:
    """Check the cross-field invariants of a header.

    Raises:
        HeaderInconsistencyError: Naming the first field that does not match
    """
    if header.channels < 1:
        raise HeaderInconsistencyError("channels", ">= 1", header.channels)
    if header.sample_rate <= 0:
        raise HeaderInconsistencyError("sample_rate", "> 0", header.sample_rate)
    if header.bits_per_sample <= 0:
        raise HeaderInconsistencyError("bits_per_sample", "> 0", header.bits_per_sample)

    # Compared in bits so fractional byte counts never round into a match.
    expected_byte_rate_bits = header.sample_rate * header.channels * header.bits_per_sample
    if header.byte_rate * 8 != expected_byte_rate_bits:
        raise HeaderInconsistencyError(
            "byte_rate",
            expected_byte_rate_bits / 8,
            header.byte_rate,
            f"File header contains invalid data: byte rate does not match "
            f"(expected {expected_byte_rate_bits / 8:g}, found {header.byte_rate})",
        )

    expected_block_align_bits = header.channels * header.bits_per_sample
    if header.block_align * 8 != expected_block_align_bits:
        raise HeaderInconsistencyError(
            "block_align",
            expected_block_align_bits / 8,
            header.block_align,
            f"File header contains invalid data: block align does not match "
            f"(expected {expected_block_align_bits / 8:g}, found {header.block_align})",
        )


def parse_header(source: ByteSource) -> ContainerHeader:
    """Parse the WAV preamble from a source positioned at offset 0.

    Advances the source by exactly 36 bytes on success.

    Args:
        source: Byte source at the start of the file

    Returns:
        Validated ContainerHeader

    Raises:
        IncompatibleFormatError: If a tag does not match or the format is not PCM
        HeaderInconsistencyError: If derived fields disagree
        ReadError: If the numeric fields cannot be read in full
    """
    _expect_tag(source, RIFF_TAG, "Unsupported file type")
    (chunk_size,) = struct.unpack("<I", source.read_exact(4, "chunk size"))
    _expect_tag(source, WAVE_TAG, "Unsupported file format")
    _expect_tag(source, FMT_TAG, "Unsupported file format")

    (
        fmt_chunk_size,
        audio_format,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        bits_per_sample,
    ) = FMT_STRUCT.unpack(source.read_exact(FMT_STRUCT.size, "fmt sub-chunk"))

    if audio_format != PCM_FORMAT:
        raise IncompatibleFormatError(
            f"Unsupported audio format: {audio_format} (only linear PCM is supported)"
        )

    header = ContainerHeader(
        chunk_size=chunk_size,
        fmt_chunk_size=fmt_chunk_size,
        audio_format=audio_format,
        channels=channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
    )
    validate_header(header)

    logger.debug(
        "Parsed header: %d ch, %d Hz, %d bit",
        header.channels,
        header.sample_rate,
        header.bits_per_sample,
    )
    return header
