"""Tests for wavesvg.chunks module."""

from __future__ import annotations

import pytest

from conftest import build_chunk, build_header, build_wav
from wavesvg.chunks import ChunkInfo, PayloadLocation, list_chunks, locate_payload
from wavesvg.exceptions import HeaderInconsistencyError, IncompatibleFormatError, ReadError
from wavesvg.source import ByteSource


def scan(data: bytes) -> PayloadLocation:
    source = ByteSource.from_bytes(data)
    source.seek_absolute(36)
    return locate_payload(source)


class TestLocatePayload:
    def test_data_right_after_header(self) -> None:
        location = scan(build_wav(payload=b"\x01\x00" * 10))
        assert location == PayloadLocation(offset=44, size_bytes=20)

    def test_skips_intervening_chunks(self) -> None:
        extra = [
            build_chunk(b"LIST", b"INFOISFT" + b"\x00" * 12),
            build_chunk(b"JUNK", b"\x00" * 100),
        ]
        location = scan(build_wav(payload=b"\x00" * 8, extra_chunks=extra))
        assert location.offset == 36 + (8 + 20) + (8 + 100) + 8
        assert location.size_bytes == 8

    def test_many_chunks(self) -> None:
        extra = [build_chunk(b"junk", b"\x00" * 2) for _ in range(500)]
        location = scan(build_wav(payload=b"", extra_chunks=extra))
        assert location.offset == 36 + 500 * 10 + 8

    def test_uses_declared_data_size(self) -> None:
        location = scan(build_wav(payload=b"\x00" * 4, data_size=1000))
        assert location.size_bytes == 1000

    def test_skips_without_pad_byte(self) -> None:
        extra = [build_chunk(b"odd ", b"\x00" * 3)]
        location = scan(build_wav(payload=b"", extra_chunks=extra))
        assert location.offset == 36 + 11 + 8

    def test_missing_data_chunk(self) -> None:
        data = build_header() + build_chunk(b"LIST", b"\x00" * 4)
        with pytest.raises(ReadError, match="end of stream"):
            scan(data)

    def test_truncated_chunk_header(self) -> None:
        with pytest.raises(ReadError):
            scan(build_header() + b"dat")

    def test_negative_size_in_skipped_chunk(self) -> None:
        data = build_header() + build_chunk(b"LIST", b"", size=0xFFFFFFFF)
        with pytest.raises(HeaderInconsistencyError) as exc_info:
            scan(data)
        assert exc_info.value.field == "chunk_size"

    def test_large_data_size_is_accepted(self) -> None:
        location = scan(build_wav(payload=b"", data_size=0xFFFFFFFF))
        assert location.size_bytes == 0xFFFFFFFF


class TestListChunks:
    def test_lists_all_chunks(self) -> None:
        extra = [build_chunk(b"LIST", b"\x00" * 6)]
        data = build_wav(payload=b"\x00" * 4, extra_chunks=extra)
        chunks = list_chunks(ByteSource.from_bytes(data))
        assert chunks == [
            ChunkInfo(tag="fmt ", size=16, offset=20),
            ChunkInfo(tag="LIST", size=6, offset=44),
            ChunkInfo(tag="data", size=4, offset=58),
        ]

    def test_follows_pad_bytes(self) -> None:
        data = build_header() + build_chunk(b"bext", b"\x00" * 3) + b"\x00" + build_chunk(b"data", b"")
        tags = [chunk.tag for chunk in list_chunks(ByteSource.from_bytes(data))]
        assert tags == ["fmt ", "bext", "data"]

    def test_stops_at_truncated_header(self) -> None:
        data = build_wav(payload=b"") + b"LI"
        tags = [chunk.tag for chunk in list_chunks(ByteSource.from_bytes(data))]
        assert tags == ["fmt ", "data"]

    def test_rejects_non_riff_stream(self) -> None:
        data = b"This is plain text, not audio at all.\n"
        with pytest.raises(IncompatibleFormatError, match="RIFF/WAVE"):
            list_chunks(ByteSource.from_bytes(data))

    def test_rejects_riff_without_wave_form(self) -> None:
        wav = build_wav()
        data = wav[:8] + b"AVI " + wav[12:]
        with pytest.raises(IncompatibleFormatError):
            list_chunks(ByteSource.from_bytes(data))

    def test_rejects_empty_stream(self) -> None:
        with pytest.raises(IncompatibleFormatError):
            list_chunks(ByteSource.from_bytes(b""))
