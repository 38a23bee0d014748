"""Source wrapping records that were parsed elsewhere."""

from __future__ import annotations

from collections.abc import Iterable

from basketlens.models import Record
from basketlens.sources.base import RecordSource


class InMemorySource(RecordSource):
    """Serve an already-parsed table, e.g. rows decoded by a spreadsheet reader."""

    name = "in_memory"

    def __init__(self, records: Iterable[Record]) -> None:
        self.records = list(records)

    def read(self) -> list[Record]:
        return list(self.records)
