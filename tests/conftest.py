"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

import struct
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest


def build_header(
    channels: int = 1,
    sample_rate: int = 44100,
    bits_per_sample: int = 16,
    audio_format: int = 1,
    byte_rate: int | None = None,
    block_align: int | None = None,
    chunk_size: int = 36,
    riff_tag: bytes = b"RIFF",
    wave_tag: bytes = b"WAVE",
    fmt_tag: bytes = b"fmt ",
) -> bytes:
    """Build the 36-byte RIFF/WAVE preamble."""
    if byte_rate is None:
        byte_rate = sample_rate * channels * bits_per_sample // 8
    if block_align is None:
        block_align = channels * bits_per_sample // 8
    return (
        riff_tag
        + struct.pack("<I", chunk_size)
        + wave_tag
        + fmt_tag
        + struct.pack(
            "<IHHIIHH",
            16,
            audio_format,
            channels,
            sample_rate,
            byte_rate,
            block_align,
            bits_per_sample,
        )
    )


def build_chunk(tag: bytes, payload: bytes, size: int | None = None) -> bytes:
    """Build a chunk; *size* overrides the declared length."""
    return tag + struct.pack("<I", len(payload) if size is None else size) + payload


def build_wav(
    payload: bytes = b"",
    extra_chunks: Sequence[bytes] = (),
    data_size: int | None = None,
    **header_kwargs,
) -> bytes:
    """Build a complete WAV file: header, extra chunks, then the data chunk."""
    body = b"".join(extra_chunks) + build_chunk(b"data", payload, size=data_size)
    header_kwargs.setdefault("chunk_size", 4 + 24 + len(body))
    return build_header(**header_kwargs) + body


def strided_payload(values: Sequence[int], bits_per_sample: int = 16, channels: int = 1) -> bytes:
    """Lay out *values* so each lands where the decimator reads a sample.

    Every read takes ``bits_per_sample`` bytes and is followed by a skip
    of ``bits_per_sample * channels * 3`` bytes.
    """
    period = bits_per_sample + bits_per_sample * channels * 3
    return b"".join(struct.pack("<h", v).ljust(period, b"\x00") for v in values)


@pytest.fixture
def make_wav(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a WAV file built by build_wav into tmp_path."""

    def _make(name: str = "test.wav", **kwargs) -> Path:
        path = tmp_path / name
        path.write_bytes(build_wav(**kwargs))
        return path

    return _make


@pytest.fixture
def mono_10s_wav(make_wav: Callable[..., Path]) -> Path:
    """Mono, 44100 Hz, 16-bit, 10 seconds of silence."""
    return make_wav("44100Hz-16bit-1ch.wav", payload=b"\x00" * 882000)


@pytest.fixture
def stereo_wav(make_wav: Callable[..., Path]) -> Path:
    """Stereo, 48000 Hz, 16-bit, one second."""
    return make_wav(
        "48000Hz-16bit-2ch.wav",
        payload=b"\x00" * 192000,
        channels=2,
        sample_rate=48000,
    )


@pytest.fixture
def tone_wav(make_wav: Callable[..., Path]) -> Path:
    """Mono file whose sampled values alternate between +/-16384."""
    values = [16384 if i % 2 else -16384 for i in range(40)]
    return make_wav("tone.wav", payload=strided_payload(values))
