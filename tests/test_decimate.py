"""Tests for wavesvg.decimate module."""

from __future__ import annotations

import pytest

from conftest import strided_payload
from wavesvg.chunks import PayloadLocation
from wavesvg.decimate import (
    SampleSummary,
    bucket_length,
    decimate,
    iter_summaries,
    stride_bytes,
)
from wavesvg.exceptions import ReadError
from wavesvg.source import ByteSource


def run(
    payload: bytes,
    resolution: float,
    channels: int = 1,
    bits_per_sample: int = 16,
    prefix: bytes = b"",
) -> list[SampleSummary]:
    source = ByteSource.from_bytes(prefix + payload)
    location = PayloadLocation(offset=len(prefix), size_bytes=len(payload))
    return decimate(source, location, channels, bits_per_sample, resolution)


class TestBucketPolicy:
    def test_bucket_length(self) -> None:
        assert bucket_length(1.0) == 1
        assert bucket_length(0.5) == 2
        assert bucket_length(0.25) == 4
        assert bucket_length(0.01) == 100

    def test_bucket_length_truncates(self) -> None:
        assert bucket_length(0.3) == 3

    def test_stride(self) -> None:
        assert stride_bytes(16, 1) == 48
        assert stride_bytes(16, 2) == 96


class TestDecimate:
    def test_first_bucket_holds_one_extra_value(self) -> None:
        waveform = run(strided_payload([1, 2, 3, 4, 5, 6, 7]), resolution=0.5)
        assert waveform == [
            SampleSummary(1, 3),
            SampleSummary(4, 5),
            SampleSummary(6, 7),
        ]

    def test_partial_trailing_bucket_is_dropped(self) -> None:
        waveform = run(strided_payload([1, 2, 3, 4, 5, 6, 7, 8]), resolution=0.5)
        assert waveform == [
            SampleSummary(1, 3),
            SampleSummary(4, 5),
            SampleSummary(6, 7),
        ]

    def test_full_resolution(self) -> None:
        waveform = run(strided_payload([5, -3, 7, 2]), resolution=1.0)
        assert waveform == [
            SampleSummary(-3, 5),
            SampleSummary(7, 7),
            SampleSummary(2, 2),
        ]

    def test_decodes_signed_little_endian(self) -> None:
        waveform = run(strided_payload([-32768, 32767]), resolution=1.0)
        assert waveform == [SampleSummary(-32768, 32767)]

    def test_only_first_two_bytes_are_decoded(self) -> None:
        payload = (b"\x01\x00" + b"\xff" * 14 + b"\x00" * 48) * 2
        waveform = run(payload, resolution=1.0)
        assert waveform == [SampleSummary(1, 1)]

    def test_stereo_stride(self) -> None:
        payload = strided_payload([10, 20, 30], channels=2)
        assert len(payload) == 3 * 112
        waveform = run(payload, resolution=0.5, channels=2)
        assert waveform == [SampleSummary(10, 30)]

    def test_starts_at_payload_offset(self) -> None:
        prefix = b"\x7f\x7f" * 22
        waveform = run(strided_payload([-1, -2]), resolution=1.0, prefix=prefix)
        assert waveform == [SampleSummary(-2, -1)]

    def test_empty_payload(self) -> None:
        assert run(b"", resolution=1.0) == []

    def test_tiny_resolution_yields_no_buckets(self) -> None:
        assert run(strided_payload(range(50)), resolution=0.000001) == []

    def test_buckets_follow_stream_order(self) -> None:
        waveform = run(strided_payload(range(1, 101)), resolution=0.1)
        assert len(waveform) == 9
        for earlier, later in zip(waveform, waveform[1:]):
            assert earlier.max < later.min

    def test_iter_summaries_is_lazy(self) -> None:
        source = ByteSource.from_bytes(strided_payload([1, 2, 3]))
        location = PayloadLocation(offset=0, size_bytes=192)
        summaries = iter_summaries(source, location, 1, 16, 1.0)
        assert next(summaries) == SampleSummary(1, 2)


class TestDecimateErrors:
    def test_short_read(self) -> None:
        payload = strided_payload([1]) + b"\x00" * 10
        with pytest.raises(ReadError, match="Short read"):
            run(payload, resolution=1.0)

    def test_invalid_bits_per_sample(self) -> None:
        with pytest.raises(ReadError, match="bits_per_sample"):
            run(strided_payload([1, 2]), resolution=1.0, bits_per_sample=0)

    def test_one_byte_samples_cannot_be_decoded(self) -> None:
        with pytest.raises(ReadError, match="unpack"):
            run(b"\x01\x00\x00\x00", resolution=1.0, bits_per_sample=1)

    def test_closed_source(self) -> None:
        source = ByteSource.from_bytes(strided_payload([1, 2]))
        source.stream.close()
        with pytest.raises(ReadError):
            decimate(source, PayloadLocation(0, 128), 1, 16, 1.0)
