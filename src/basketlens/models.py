"""In-memory data models used by basket analysis."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

Scalar = Union[str, int, float]
Record = Mapping[str, Any]


@dataclass(frozen=True)
class Basket:
    """Records sharing one resolved basket key.

    ``key`` is ``None`` for the single basket holding records whose basket key
    could not be resolved.
    """

    key: str | None
    records: tuple[Record, ...] = ()

    @property
    def is_unkeyed(self) -> bool:
        return self.key is None

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class FrequencyStat:
    """Occurrence statistics for one item combination."""

    combination: str
    count: int
    frequency: float

    @property
    def percentage(self) -> str:
        """Frequency as a percentage string with one decimal and no ``%``."""

        return f"{self.frequency * 100:.1f}"

    def to_row(self) -> dict[str, Any]:
        return {
            "combination": self.combination,
            "count": self.count,
            "frequency": self.frequency,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class ItemStat:
    """Total occurrences of one item across all cleaned records."""

    item: str
    count: int

    def to_row(self) -> dict[str, Any]:
        return {"item": self.item, "count": self.count}


@dataclass(frozen=True)
class AnalysisResult:
    """Snapshot of one analysis run.

    Instances are never mutated; running the analysis again produces a new
    result.
    """

    total_records: int
    unique_items: int
    analyzed_baskets: int
    combinations: tuple[FrequencyStat, ...] = field(default_factory=tuple)
    item_stats: tuple[ItemStat, ...] = field(default_factory=tuple)

    @property
    def significant_combination_count(self) -> int:
        return len(self.combinations)

    def to_dict(self) -> dict[str, Any]:
        """Serialize into the plain structure consumed by exporters."""

        return {
            "totalRecords": self.total_records,
            "uniqueItems": self.unique_items,
            "analyzedBaskets": self.analyzed_baskets,
            "combinations": [stat.to_row() for stat in self.combinations],
            "itemStats": [stat.to_row() for stat in self.item_stats],
            "significantCombinationCount": self.significant_combination_count,
        }
