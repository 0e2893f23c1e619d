"""
wavesvg.svg - Turn a waveform into a closed SVG path.

The top edge runs left to right through each bucket's maximum, the bottom
edge runs right to left through each minimum, and both start and end at
the vertical centre (0, 50), giving one filled contour. The viewport is
always 100 units high; width is one unit per bucket.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from wavesvg.decimate import SampleSummary
from wavesvg.exceptions import ReadError
from wavesvg.header import ContainerHeader

SVG_HEIGHT = 100

TEMPLATE_NAME = "waveform.svg"
TEMPLATE_DIR = Path(__file__).parent / "templates"


def round_ratio(numerator: int, denominator: int) -> int:
    """Round ``numerator / denominator`` to an integer, halves away from zero.

    Works on integers throughout so bit depths of any size stay exact.
    """
    rounded = (2 * abs(numerator) + denominator) // (2 * denominator)
    return rounded if numerator >= 0 else -rounded


def value_range(bits_per_sample: int) -> tuple[int, int, int]:
    """Return ``(min_possible, max_possible, range)`` for a bit depth.

    Raises:
        ReadError: If the bit depth gives no usable range
    """
    if bits_per_sample <= 0:
        raise ReadError(f"Invalid range value for {bits_per_sample}-bit samples")
    range_ = 2**bits_per_sample
    min_possible = -(range_ // 2)
    max_possible = -min_possible - 1
    return min_possible, max_possible, range_


def build_path(bits_per_sample: int, waveform: Sequence[SampleSummary]) -> str:
    """Build the ``d`` attribute for the waveform contour.

    Buckets with a zero min or max are skipped entirely; the x coordinate
    of the remaining buckets still reflects their index.

    Args:
        bits_per_sample: Bit depth used to scale values into 0..100
        waveform: Bucket summaries in stream order

    Returns:
        Path data string, e.g. ``"M0 50L0 40L1 45L1 55L0 60L0 50 Z"``
    """
    _, max_possible, range_ = value_range(bits_per_sample)

    top: list[str] = []
    bottom: list[str] = []
    for x, summary in enumerate(waveform):
        if summary.min == 0 or summary.max == 0:
            continue
        y_top = round_ratio(SVG_HEIGHT * (max_possible - summary.max), range_)
        top.append(f"L{x} {y_top}")
        y_bottom = round_ratio(SVG_HEIGHT * (max_possible - summary.min), range_)
        bottom.append(f"L{x} {y_bottom}")

    bottom.reverse()
    return "M0 50" + "".join(top) + "".join(bottom) + "L0 50 Z"


class SvgRenderer:
    """Jinja2-based renderer for the fixed waveform document."""

    def __init__(self, template_dir: Path | None = None):
        if template_dir is None:
            template_dir = TEMPLATE_DIR

        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["svg", "xml"]),
        )

    def render(self, header: ContainerHeader, waveform: Sequence[SampleSummary]) -> str:
        """Render the complete SVG document for *waveform*."""
        template = self.env.get_template(TEMPLATE_NAME)
        return template.render(
            width=len(waveform),
            height=SVG_HEIGHT,
            path=build_path(header.bits_per_sample, waveform),
        )


def render_svg(header: ContainerHeader, waveform: Sequence[SampleSummary]) -> str:
    """Render *waveform* with the bundled template."""
    return SvgRenderer().render(header, waveform)
