"""
wavesvg.decimate - Condense the sample stream into min/max buckets.

The decimator does not read every frame. After each sample it skips
``bits_per_sample * channels * 3`` bytes, so a preview of a long file
touches only a fraction of it. Every ``1 / resolution`` samples the
buffered values are folded into one SampleSummary.

Each read pulls ``bits_per_sample`` bytes and decodes the first two as a
little-endian signed 16-bit value. That matches 16-bit PCM exactly; other
bit depths produce a summary that is only loosely related to the audio.
"""

from __future__ import annotations

import struct
from collections.abc import Iterator
from typing import NamedTuple

from wavesvg.chunks import PayloadLocation
from wavesvg.exceptions import ReadError
from wavesvg.logging import logger
from wavesvg.source import ByteSource

SAMPLE_STRUCT = struct.Struct("<h")

STRIDE_FACTOR = 3


class SampleSummary(NamedTuple):
    """Lowest and highest decoded value within one bucket."""

    min: int
    max: int


def bucket_length(resolution: float) -> int:
    """Number of samples per bucket for *resolution* (truncated to int)."""
    return int(1 / resolution)


def stride_bytes(bits_per_sample: int, channels: int) -> int:
    """Bytes skipped after each sample read."""
    return bits_per_sample * channels * STRIDE_FACTOR


def _decode_sample(data: bytes) -> int:
    try:
        return SAMPLE_STRUCT.unpack_from(data)[0]
    except struct.error as e:
        raise ReadError(f"Failed to unpack sample from {len(data)} bytes") from e


def iter_summaries(
    source: ByteSource,
    payload: PayloadLocation,
    channels: int,
    bits_per_sample: int,
    resolution: float,
) -> Iterator[SampleSummary]:
    """Yield bucket summaries in stream order.

    The first bucket closes once the sample at index ``bucket_length`` has
    been buffered, so it holds one value more than the buckets after it.
    A trailing bucket that never reaches its length is dropped.

    Args:
        source: Byte source over the whole file
        payload: Location of the ``data`` chunk
        channels: Channel count from the header
        bits_per_sample: Bit depth from the header (bytes read per sample)
        resolution: Buckets per sample, in (0, 1]

    Raises:
        ReadError: On seek failure, invalid bit depth or a short read
    """
    source.seek_absolute(payload.offset)

    if bits_per_sample <= 0:
        raise ReadError(f"Invalid value for bits_per_sample: {bits_per_sample}")

    length = bucket_length(resolution)
    stride = stride_bytes(bits_per_sample, channels)
    samples: list[int] = []
    i = 0

    while True:
        data = source.read(bits_per_sample)
        if not data:
            break
        if len(data) < bits_per_sample:
            raise ReadError(
                f"Short read at sample {i}: expected {bits_per_sample} bytes, got {len(data)}"
            )
        samples.append(_decode_sample(data))

        if i > 0 and i % length == 0:
            yield SampleSummary(min(samples), max(samples))
            samples = []
        i += 1

        source.seek_relative(stride)

    logger.debug(
        "Decimated %d samples (bucket length %d, stride %d bytes), dropped %d trailing",
        i,
        length,
        stride,
        len(samples),
    )


def decimate(
    source: ByteSource,
    payload: PayloadLocation,
    channels: int,
    bits_per_sample: int,
    resolution: float,
) -> list[SampleSummary]:
    """Collect :func:`iter_summaries` into a waveform list."""
    return list(iter_summaries(source, payload, channels, bits_per_sample, resolution))
