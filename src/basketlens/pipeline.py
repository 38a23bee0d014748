"""Composable basket analysis pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from basketlens.engine import CoOccurrenceEngine
from basketlens.models import AnalysisResult, Record
from basketlens.publishers.base import ResultPublisher
from basketlens.sources.base import RecordSource

logger = logging.getLogger(__name__)


@dataclass
class AnalysisRunReport:
    """Execution summary for a pipeline run."""

    source_count: int
    ingested_records: int
    result: AnalysisResult
    published: list[Path] = field(default_factory=list)


class BasketAnalysisPipeline:
    """Read sources, run the engine and hand the result to publishers in order."""

    def __init__(
        self,
        *,
        sources: list[RecordSource],
        engine: CoOccurrenceEngine | None = None,
        publishers: list[ResultPublisher] | None = None,
    ) -> None:
        self.sources = sources
        self.engine = engine or CoOccurrenceEngine()
        self.publishers = publishers or []

    def run(self, threshold: float | None = None) -> AnalysisRunReport:
        records: list[Record] = []

        for source in self.sources:
            batch = source.read()
            logger.debug("Source %s produced %d records", source.name, len(batch))
            records.extend(batch)

        result = self.engine.run_analysis(records, threshold)

        published: list[Path] = []
        for publisher in self.publishers:
            path = publisher.publish(result)
            logger.info("Published %s export to %s", publisher.name, path)
            published.append(path)

        return AnalysisRunReport(
            source_count=len(self.sources),
            ingested_records=len(records),
            result=result,
            published=published,
        )
