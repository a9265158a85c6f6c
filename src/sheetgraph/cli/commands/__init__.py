"""
CLI Commands Package.

Each command is implemented in its own module.
"""

from . import explore
from . import load
from . import search

__all__ = [
    "explore",
    "load",
    "search",
]
