"""
Node size estimation.

Width comes from the widest label line, padded and clamped; height grows
with line count above a single-line floor. Text measurement is pluggable
so headless callers can use a fixed-width approximation.
"""

from typing import Dict, Protocol

from ..config import (
    AVERAGE_CHAR_WIDTH,
    LINE_HEIGHT,
    MAX_NODE_WIDTH,
    MIN_NODE_HEIGHT,
    MIN_NODE_WIDTH,
    NODE_PADDING,
    SizingSettings,
)
from ..core.types import Size


class TextMetrics(Protocol):
    """Measures the rendered width of one line of text in the node font."""

    def measure(self, text: str) -> float:
        ...


class MonospaceMetrics:
    """Every character advances by the same amount."""

    def __init__(self, char_width: float = AVERAGE_CHAR_WIDTH):
        self.char_width = char_width

    def measure(self, text: str) -> float:
        return len(text) * self.char_width


def measure(
    label: str,
    metrics: TextMetrics,
    min_width: float = MIN_NODE_WIDTH,
    max_width: float = MAX_NODE_WIDTH,
    padding: float = NODE_PADDING,
    min_height: float = MIN_NODE_HEIGHT,
    line_height: float = LINE_HEIGHT,
) -> Size:
    lines = label.split("\n")
    widest = max(metrics.measure(line) for line in lines)
    width = min(max(min_width, widest + padding), max_width)
    height = max(min_height, len(lines) * line_height)
    return Size(width=width, height=height)


class NodeSizer:
    """
    Memoizing estimator.

    Results are cached by label text, never by node identity, so a changed
    label is always re-measured.
    """

    def __init__(self, metrics: TextMetrics | None = None,
                 settings: SizingSettings | None = None):
        self.settings = settings or SizingSettings()
        self.metrics = metrics or MonospaceMetrics(self.settings.char_width)
        self._cache: Dict[str, Size] = {}

    def measure(self, label: str) -> Size:
        size = self._cache.get(label)
        if size is None:
            s = self.settings
            size = measure(
                label,
                self.metrics,
                min_width=s.min_width,
                max_width=s.max_width,
                padding=s.padding,
                min_height=s.min_height,
                line_height=s.line_height,
            )
            self._cache[label] = size
        return size

    def clear(self) -> None:
        self._cache.clear()
