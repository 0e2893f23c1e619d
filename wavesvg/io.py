"""
wavesvg.io - Atomic text/JSON writes for rendered output.

All writes go to a temp file in the destination directory first, then
replace the target, so an interrupted render never leaves a truncated SVG.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

from wavesvg.exceptions import AccessError, CloseError, WriteError
from wavesvg.logging import logger


def _discard(tmp: Any, tmp_path: Path) -> None:
    """Close and remove a temp file after a failed write, keeping the original error."""
    try:
        tmp.close()
    except OSError as e:
        logger.warning("Failed to close temp file %s: %s", tmp_path, e)
    try:
        tmp_path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Failed to remove temp file %s: %s", tmp_path, e)


def write_text(path: Path, content: str) -> None:
    """Write text file atomically.

    Args:
        path: Destination path
        content: Text content to write

    Raises:
        AccessError: If the destination cannot be opened for writing
        WriteError: If writing or moving the file into place fails
        CloseError: If the temp file cannot be closed
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        )
    except OSError as e:
        raise AccessError(f"Failed to open output file for writing: {path}") from e

    tmp_path = Path(tmp.name)
    try:
        try:
            tmp.write(content)
        except OSError as e:
            raise WriteError(f"Failed to write to output file: {path}") from e

        try:
            tmp.close()
        except OSError as e:
            raise CloseError(f"Failed to close output file: {path}") from e

        try:
            tmp_path.replace(path)
        except OSError as e:
            raise WriteError(f"Failed to move output into place: {path}") from e
    except BaseException:
        _discard(tmp, tmp_path)
        raise

    logger.debug("Wrote %d characters to %s", len(content), path)


def write_json(path: Path, data: dict[str, Any], indent: int = 2) -> None:
    """Write JSON file atomically with pretty formatting.

    Args:
        path: Destination path for JSON file
        data: Data to write
        indent: Indentation level for pretty printing (default: 2)
    """
    write_text(path, json.dumps(data, indent=indent, ensure_ascii=False) + "\n")
