"""Lightweight preview of uploaded records before analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from basketlens.models import Record

DEFAULT_PREVIEW_ROWS = 5


@dataclass(frozen=True)
class DataPreview:
    """Header names, the first few rows and the total row count."""

    headers: tuple[str, ...]
    rows: tuple[dict[str, Any], ...] = field(default_factory=tuple)
    total_records: int = 0

    @property
    def is_truncated(self) -> bool:
        return self.total_records > len(self.rows)


def build_preview(records: Sequence[Record], limit: int = DEFAULT_PREVIEW_ROWS) -> DataPreview:
    """Preview ``records`` using the first record's keys as headers."""

    if limit < 0:
        raise ValueError(f"Preview limit cannot be negative: {limit}")
    if not records:
        return DataPreview(headers=())

    headers = tuple(records[0].keys())
    rows = tuple(
        {header: record.get(header, "") for header in headers}
        for record in records[:limit]
    )
    return DataPreview(headers=headers, rows=rows, total_records=len(records))
