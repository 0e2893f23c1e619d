"""
wavesvg.source - Positioned byte source over a binary stream.

Wraps any seekable binary file object and turns stream failures into
ReadError, so the parsers only ever see wavesvg exceptions. The
``open_source`` context manager owns the file handle and guarantees it is
closed on every exit path.
"""

from __future__ import annotations

import io
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from wavesvg.exceptions import AccessError, CloseError, ParamError, ReadError
from wavesvg.logging import logger


class ByteSource:
    """Read/seek/tell capability over a binary stream."""

    def __init__(self, stream: BinaryIO, name: str = "<stream>") -> None:
        self.stream = stream
        self.name = name

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "<bytes>") -> ByteSource:
        return cls(io.BytesIO(data), name=name)

    def read(self, size: int) -> bytes:
        """Read up to *size* bytes; an empty result means end of stream."""
        try:
            return self.stream.read(size)
        except (OSError, ValueError) as e:
            raise ReadError(f"Failed to read from {self.name}: {e}") from e

    def read_exact(self, size: int, what: str) -> bytes:
        """Read exactly *size* bytes or raise ReadError naming *what*."""
        data = self.read(size)
        if len(data) != size:
            raise ReadError(
                f"Failed to read {what} from {self.name}: expected {size} bytes, got {len(data)}"
            )
        return data

    def seek_absolute(self, offset: int) -> None:
        try:
            self.stream.seek(offset, io.SEEK_SET)
        except (OSError, ValueError) as e:
            raise ReadError(f"Failed to seek to {offset} in {self.name}: {e}") from e

    def seek_relative(self, delta: int) -> None:
        try:
            self.stream.seek(delta, io.SEEK_CUR)
        except (OSError, ValueError) as e:
            raise ReadError(f"Failed to seek by {delta} in {self.name}: {e}") from e

    def tell(self) -> int:
        try:
            return self.stream.tell()
        except (OSError, ValueError) as e:
            raise ReadError(f"Failed to tell position in {self.name}: {e}") from e


def validate_path(path: str | Path) -> Path:
    """Check that *path* is non-empty and points at an existing file.

    Raises:
        ParamError: If the path is empty or does not exist
    """
    if not str(path):
        raise ParamError("No file specified")
    file_path = Path(path)
    if not file_path.exists():
        raise ParamError(f"File does not exist: {file_path}")
    return file_path


@contextmanager
def open_source(path: str | Path) -> Iterator[ByteSource]:
    """Open *path* for reading and yield a ByteSource over it.

    The handle is closed however the block exits. If the block raised,
    a failing close is only logged so the original error reaches the
    caller; on a clean exit it raises CloseError.

    Raises:
        ParamError: If the path is empty or missing
        AccessError: If the file cannot be opened
        CloseError: If the file cannot be closed after a successful read
    """
    file_path = validate_path(path)
    try:
        stream = open(file_path, "rb")
    except OSError as e:
        raise AccessError(f"Failed to open file: {file_path}") from e

    logger.debug("Opened %s", file_path)
    try:
        yield ByteSource(stream, name=str(file_path))
    except BaseException:
        try:
            stream.close()
        except OSError as close_error:
            logger.warning("Failed to close %s after error: %s", file_path, close_error)
        raise

    try:
        stream.close()
    except OSError as e:
        raise CloseError(f"Failed to close file: {file_path}") from e
