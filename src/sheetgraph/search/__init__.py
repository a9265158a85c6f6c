"""Search: the filter algorithm and its debounced driver."""

from .debounce import DebouncedSearch, SearchState, thread_timer
from .engine import Visibility, apply_filter, clear_filter, compute_visibility

__all__ = [
    "DebouncedSearch", "SearchState", "thread_timer",
    "Visibility", "apply_filter", "clear_filter", "compute_visibility",
]
