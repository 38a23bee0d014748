"""Co-occurrence analysis over cleaned records."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Any

from basketlens.config import AnalysisConfig, validate_threshold
from basketlens.errors import EmptyAnalysisError
from basketlens.models import AnalysisResult, Basket, FrequencyStat, ItemStat, Record
from basketlens.normalize import TableNormalizer
from basketlens.resolution import FieldResolver

logger = logging.getLogger(__name__)

COMBINATION_SEPARATOR = " + "


def combination_key(first: str, second: str) -> str:
    """Canonical key for the unordered pair ``{first, second}``."""

    low, high = sorted((first, second))
    return f"{low}{COMBINATION_SEPARATOR}{high}"


def tally_combinations(keys: Iterable[str]) -> Counter[str]:
    """Count occurrences of each combination key."""

    return Counter(keys)


def merge_tallies(*tallies: Counter[str]) -> Counter[str]:
    """Merge per-shard tallies into one; order of arguments does not matter."""

    merged: Counter[str] = Counter()
    for tally in tallies:
        merged.update(tally)
    return merged


class CoOccurrenceEngine:
    """Group records into baskets and compute pairwise co-occurrence statistics.

    The engine keeps only its configuration and resolver, so a single instance
    can be reused for any number of independent runs.
    """

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        *,
        resolver: FieldResolver | None = None,
        normalizer: TableNormalizer | None = None,
    ) -> None:
        self.config = config or AnalysisConfig()
        self.resolver = resolver or FieldResolver()
        self.normalizer = normalizer or TableNormalizer()

    def group(self, records: Sequence[Record]) -> list[Basket]:
        """Partition records by basket key, keeping first-seen key order."""

        grouped: dict[str | None, list[Record]] = {}
        for record in records:
            key = self.resolver.resolve_basket_key(record)
            if key is None:
                key = self.config.default_basket_key
            grouped.setdefault(key, []).append(record)

        return [Basket(key=key, records=tuple(members)) for key, members in grouped.items()]

    def enumerate_combinations(self, baskets: Iterable[Basket]) -> list[str]:
        """List the combination keys observed in each basket.

        Every positional pair ``i < j`` yields one entry, so an item listed
        twice in a basket pairs with itself and a basket of ``n`` records
        contributes ``n * (n - 1) / 2`` keys.
        """

        keys: list[str] = []
        for basket in baskets:
            items = [self.resolver.resolve_item(record) for record in basket.records]
            for i in range(len(items)):
                for j in range(i + 1, len(items)):
                    keys.append(combination_key(items[i], items[j]))
        return keys

    def compute_frequencies(
        self,
        combination_keys: Iterable[str] | Counter[str],
        total_baskets: int,
    ) -> list[FrequencyStat]:
        """Turn combination keys (or a ready tally) into sorted frequency stats."""

        if isinstance(combination_keys, Counter):
            tally = combination_keys
        else:
            tally = tally_combinations(combination_keys)

        stats = [
            FrequencyStat(
                combination=key,
                count=count,
                frequency=count / total_baskets if total_baskets > 0 else 0.0,
            )
            for key, count in tally.items()
        ]
        stats.sort(key=lambda stat: (-stat.frequency, stat.combination))
        return stats

    @staticmethod
    def filter_significant(stats: Iterable[FrequencyStat], threshold: float) -> list[FrequencyStat]:
        """Keep stats whose frequency reaches ``threshold``."""

        return [stat for stat in stats if stat.frequency >= threshold]

    def compute_item_stats(self, records: Iterable[Record]) -> list[ItemStat]:
        """Most frequent items across all records, ties broken by name."""

        counts = Counter(self.resolver.resolve_item(record) for record in records)
        ranked = sorted(counts.items(), key=lambda entry: (-entry[1], entry[0]))
        return [ItemStat(item=item, count=count) for item, count in ranked[: self.config.top_items]]

    def run_analysis(
        self,
        raw_records: Iterable[Record],
        threshold: float | None = None,
    ) -> AnalysisResult:
        """Clean, group, pair and tally ``raw_records`` into an analysis result."""

        threshold = self.config.threshold if threshold is None else validate_threshold(threshold)

        records = self.normalizer.normalize(raw_records)
        if not records:
            raise EmptyAnalysisError("No records left to analyze after cleaning")

        baskets = self.group(records)
        if not baskets:
            raise EmptyAnalysisError("No baskets could be formed from the records")

        keys = self.enumerate_combinations(baskets)
        stats = self.compute_frequencies(keys, len(baskets))
        significant = self.filter_significant(stats, threshold)
        item_stats = self.compute_item_stats(records)
        unique_items = len({self.resolver.resolve_item(record) for record in records})

        logger.info(
            "Analyzed %d records in %d baskets: %d combinations, %d significant at %.3f",
            len(records),
            len(baskets),
            len(stats),
            len(significant),
            threshold,
        )

        return AnalysisResult(
            total_records=len(records),
            unique_items=unique_items,
            analyzed_baskets=len(baskets),
            combinations=tuple(significant),
            item_stats=tuple(item_stats),
        )

    def describe(self) -> dict[str, Any]:
        """Plain summary of the engine configuration."""

        return {
            "threshold": self.config.threshold,
            "top_items": self.config.top_items,
            "default_basket_key": self.config.default_basket_key,
            "resolver": self.resolver.name,
        }
