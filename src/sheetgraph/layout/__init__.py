"""Node sizing and layered layout."""

from .layered import LayeredLayoutEngine, LayoutConfig, NodeBox, SugiyamaLayout
from .orchestrator import LayoutOrchestrator, layout
from .sizing import MonospaceMetrics, NodeSizer, TextMetrics, measure

__all__ = [
    "LayeredLayoutEngine", "LayoutConfig", "NodeBox", "SugiyamaLayout",
    "LayoutOrchestrator", "layout",
    "MonospaceMetrics", "NodeSizer", "TextMetrics", "measure",
]
