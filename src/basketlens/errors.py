"""Exception types raised by basket analysis."""

from __future__ import annotations


class BasketAnalysisError(Exception):
    """Base class for errors surfaced by the analysis core."""


class InvalidInputError(BasketAnalysisError, ValueError):
    """Input records are not a sequence of mapping-like rows."""


class EmptyAnalysisError(BasketAnalysisError):
    """Nothing is left to analyze after cleaning the input records."""
