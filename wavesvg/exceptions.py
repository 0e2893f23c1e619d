"""
wavesvg.exceptions - Custom exception classes.

All wavesvg exceptions inherit from WaveSvgError. Each class carries a
numeric ``code`` so callers can switch on the error kind without
importing every class.
"""

from __future__ import annotations


class WaveSvgError(Exception):
    """Base exception for all wavesvg errors."""

    code = 0


class ParamError(WaveSvgError):
    """Invalid argument: empty/missing path or out-of-range resolution."""

    code = 1


class AccessError(WaveSvgError):
    """Source or sink could not be opened, or nothing has been loaded."""

    code = 2


class ReadError(WaveSvgError):
    """Read, seek or position query failed, including short reads."""

    code = 3


class WriteError(WaveSvgError):
    """Writing the rendered output failed."""

    code = 4


class CloseError(WaveSvgError):
    """Releasing a source or sink failed."""

    code = 5


class IncompatibleFormatError(WaveSvgError):
    """Magic tag mismatch or unsupported audio format code."""

    code = 6


class HeaderInconsistencyError(WaveSvgError):
    """Header fields contradict each other, or a chunk size is invalid."""

    code = 7

    def __init__(self, field: str, expected: object, actual: object, message: str | None = None):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            message or f"File header contains invalid data: {field} is {actual}, expected {expected}"
        )
