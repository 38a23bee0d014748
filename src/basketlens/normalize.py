"""Cleaning and deduplication of raw tabular records."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from basketlens.errors import InvalidInputError
from basketlens.models import Record

logger = logging.getLogger(__name__)

_QUOTES_RE = re.compile(r"['\"]")


@dataclass
class NormalizationReport:
    """Cleaned records plus counts of what was dropped and why."""

    input_records: int
    records: list[dict[str, Any]] = field(default_factory=list)
    dropped_blank: int = 0
    dropped_duplicates: int = 0

    @property
    def output_records(self) -> int:
        return len(self.records)


class TableNormalizer:
    """Normalize string values, drop blank rows and remove duplicate rows.

    String values are stripped of quote characters, have whitespace runs
    collapsed to a single space, are trimmed and lower-cased. Other values pass
    through unchanged. Two rows are duplicates when their normalized fields and
    values match in the same order; the first one wins.
    """

    def normalize(self, records: Iterable[Record]) -> list[dict[str, Any]]:
        return self.clean(records).records

    def clean(self, records: Iterable[Record]) -> NormalizationReport:
        rows = self._coerce_rows(records)
        report = NormalizationReport(input_records=len(rows))
        seen: set[str] = set()

        for row in rows:
            # Quote-only values count as blank.
            normalized = {name: self.normalize_value(value) for name, value in row.items()}
            if self._is_blank(normalized):
                report.dropped_blank += 1
                continue

            key = self._identity(normalized)
            if key in seen:
                report.dropped_duplicates += 1
                continue

            seen.add(key)
            report.records.append(normalized)

        logger.debug(
            "Normalized %d -> %d records (%d blank, %d duplicate)",
            report.input_records,
            report.output_records,
            report.dropped_blank,
            report.dropped_duplicates,
        )
        return report

    @staticmethod
    def normalize_value(value: Any) -> Any:
        if not isinstance(value, str):
            return value
        unquoted = _QUOTES_RE.sub("", value)
        return " ".join(unquoted.split()).lower()

    @staticmethod
    def _coerce_rows(records: Iterable[Record]) -> list[Record]:
        if records is None or isinstance(records, (str, bytes, Mapping)):
            raise InvalidInputError(
                f"Expected a sequence of records, got {type(records).__name__}"
            )
        try:
            rows = list(records)
        except TypeError as exc:
            raise InvalidInputError(
                f"Expected a sequence of records, got {type(records).__name__}"
            ) from exc

        for index, row in enumerate(rows):
            if not isinstance(row, Mapping):
                raise InvalidInputError(
                    f"Record {index} is not a mapping: {type(row).__name__}"
                )
            bad_names = [name for name in row if not isinstance(name, str)]
            if bad_names:
                raise InvalidInputError(
                    f"Record {index} has non-string field names: {bad_names!r}"
                )

        return rows

    @staticmethod
    def _is_blank(row: Record) -> bool:
        for value in row.values():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            return False
        return True

    @staticmethod
    def _identity(row: dict[str, Any]) -> str:
        return json.dumps(list(row.items()), ensure_ascii=False, default=str)
