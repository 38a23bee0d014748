"""Record sources for basket analysis."""

from .base import RecordSource
from .delimited import DelimitedTextSource
from .memory import InMemorySource

__all__ = [
    "RecordSource",
    "DelimitedTextSource",
    "InMemorySource",
]
