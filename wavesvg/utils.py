"""
wavesvg.utils - Shared formatting helpers for the CLI.
"""

from __future__ import annotations


def format_duration(seconds: float) -> str:
    """Format seconds as H:MM:SS or M:SS.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string (H:MM:SS if >= 1 hour, otherwise M:SS)
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_size(size: float) -> str:
    """Format a byte count in human-readable form."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def channel_label(channels: int) -> str:
    """Describe a channel count ("mono", "stereo", or "N ch")."""
    if channels == 1:
        return "mono"
    elif channels == 2:
        return "stereo"
    return f"{channels} ch"
