"""
wavesvg - Waveform previews for PCM WAV files.

Parses the RIFF/WAVE header, locates the sample payload, condenses it into
per-bucket min/max envelopes and renders the envelope as a filled SVG path:
header parsing → chunk scan → decimation → path synthesis.
"""

__version__ = "0.1.0"
