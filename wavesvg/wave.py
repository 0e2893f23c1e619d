"""
wavesvg.wave - Load a WAV file and render its waveform.

``decode`` and ``render_waveform`` are pure compositions over an open
ByteSource. ``Wave`` wraps them for callers that work with file paths:
it opens the file for each operation and remembers only the immutable
WaveInfo from the last successful load.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from wavesvg.chunks import PayloadLocation, locate_payload
from wavesvg.config import DEFAULT_RESOLUTION, validate_resolution
from wavesvg.decimate import decimate
from wavesvg.exceptions import AccessError
from wavesvg.header import ContainerHeader, parse_header
from wavesvg.io import write_text
from wavesvg.logging import logger
from wavesvg.source import ByteSource, open_source
from wavesvg.svg import render_svg


@dataclass(frozen=True)
class WaveInfo:
    """Header plus payload location, with the metrics derived from them."""

    header: ContainerHeader
    payload: PayloadLocation

    @property
    def kilobits_per_second(self) -> float:
        return self.header.byte_rate * 8 / 1000

    @property
    def total_samples(self) -> int:
        return self.payload.size_bytes * 8 // self.header.bits_per_sample // self.header.channels

    @property
    def duration(self) -> float:
        """Payload length in seconds, with decimals."""
        return self.payload.size_bytes / self.header.byte_rate

    @property
    def total_seconds(self) -> int:
        """Payload length in whole seconds, halves rounded up."""
        return (self.payload.size_bytes * 2 + self.header.byte_rate) // (self.header.byte_rate * 2)

    def as_dict(self) -> dict[str, Any]:
        return {
            "chunk_size": self.header.chunk_size,
            "audio_format": self.header.audio_format,
            "channels": self.header.channels,
            "sample_rate": self.header.sample_rate,
            "byte_rate": self.header.byte_rate,
            "block_align": self.header.block_align,
            "bits_per_sample": self.header.bits_per_sample,
            "data_offset": self.payload.offset,
            "data_size": self.payload.size_bytes,
            "kilobits_per_second": self.kilobits_per_second,
            "total_samples": self.total_samples,
            "total_seconds": self.total_seconds,
            "duration": self.duration,
        }


def decode(source: ByteSource) -> WaveInfo:
    """Parse the header and locate the payload of a source at offset 0."""
    header = parse_header(source)
    payload = locate_payload(source)
    return WaveInfo(header=header, payload=payload)


def render_waveform(source: ByteSource, info: WaveInfo, resolution: float) -> str:
    """Decimate the payload of *source* and render it as an SVG document."""
    validate_resolution(resolution)
    waveform = decimate(
        source,
        info.payload,
        channels=info.header.channels,
        bits_per_sample=info.header.bits_per_sample,
        resolution=resolution,
    )
    logger.debug("Rendering %d buckets", len(waveform))
    return render_svg(info.header, waveform)


class Wave:
    """A WAV file on disk, loaded once and rendered on demand."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path: Path | None = None
        self._info: WaveInfo | None = None
        if path is not None:
            self.load(path)

    def load(self, path: str | Path) -> ContainerHeader:
        """Read the header and locate the payload of *path*.

        On failure the previously loaded file, if any, is forgotten.

        Raises:
            ParamError: If the path is empty or does not exist
            AccessError: If the file cannot be opened
            IncompatibleFormatError: If the file is not PCM WAV
            HeaderInconsistencyError: If the header fields disagree
            ReadError: If the file is truncated
        """
        self.path = None
        self._info = None

        with open_source(path) as source:
            info = decode(source)

        self.path = Path(path)
        self._info = info
        logger.debug("Loaded %s", self.path)
        return info.header

    def render(self, resolution: float = DEFAULT_RESOLUTION, output: str | Path | None = None) -> str:
        """Render the loaded file as SVG, optionally writing it to *output*.

        Args:
            resolution: Buckets per sample, within [0.000001, 1.0]
            output: Optional destination file for the SVG text

        Returns:
            SVG document text

        Raises:
            AccessError: If nothing has been loaded
            ParamError: If the resolution is out of range
        """
        info = self.info
        validate_resolution(resolution)

        with open_source(self.path) as source:
            svg = render_waveform(source, info, resolution)

        if output:
            write_text(Path(output), svg)
        return svg

    @property
    def info(self) -> WaveInfo:
        if self._info is None or self.path is None:
            raise AccessError("No source loaded")
        return self._info

    @property
    def header(self) -> ContainerHeader:
        return self.info.header

    @property
    def chunk_size(self) -> int:
        return self.header.chunk_size

    @property
    def audio_format(self) -> int:
        return self.header.audio_format

    @property
    def channels(self) -> int:
        return self.header.channels

    @property
    def sample_rate(self) -> int:
        return self.header.sample_rate

    @property
    def byte_rate(self) -> int:
        return self.header.byte_rate

    @property
    def block_align(self) -> int:
        return self.header.block_align

    @property
    def bits_per_sample(self) -> int:
        return self.header.bits_per_sample

    @property
    def kilobits_per_second(self) -> float:
        return self.info.kilobits_per_second

    @property
    def total_samples(self) -> int:
        return self.info.total_samples

    @property
    def total_seconds(self) -> int:
        return self.info.total_seconds

    @property
    def duration(self) -> float:
        return self.info.duration
