"""Base interface for record sources feeding the analysis."""

from __future__ import annotations

from abc import ABC, abstractmethod

from basketlens.models import Record


class RecordSource(ABC):
    """Source that decodes an uploaded artifact into plain records."""

    name: str

    @abstractmethod
    def read(self) -> list[Record]:
        """Return the decoded records in input order."""
