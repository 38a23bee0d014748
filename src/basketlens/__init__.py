"""Co-occurrence (market basket) analysis over tabular records.

This package provides record cleaning, field resolution, the co-occurrence
engine and the sources/publishers that surround it.
"""

from .config import AnalysisConfig, DEFAULT_THRESHOLD
from .engine import CoOccurrenceEngine, combination_key, merge_tallies, tally_combinations
from .errors import BasketAnalysisError, EmptyAnalysisError, InvalidInputError
from .models import AnalysisResult, Basket, FrequencyStat, ItemStat
from .normalize import NormalizationReport, TableNormalizer
from .pipeline import AnalysisRunReport, BasketAnalysisPipeline
from .preview import DataPreview, build_preview
from .publishers import CsvCombinationPublisher, JsonResultPublisher, ResultPublisher
from .registry import PublisherRegistry, build_default_publisher_registry
from .resolution import FieldResolver, ResolutionProfileLoader
from .sources import DelimitedTextSource, InMemorySource, RecordSource

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "AnalysisRunReport",
    "Basket",
    "BasketAnalysisError",
    "BasketAnalysisPipeline",
    "CoOccurrenceEngine",
    "CsvCombinationPublisher",
    "DEFAULT_THRESHOLD",
    "DataPreview",
    "DelimitedTextSource",
    "EmptyAnalysisError",
    "FieldResolver",
    "FrequencyStat",
    "InMemorySource",
    "InvalidInputError",
    "ItemStat",
    "JsonResultPublisher",
    "NormalizationReport",
    "PublisherRegistry",
    "RecordSource",
    "ResolutionProfileLoader",
    "ResultPublisher",
    "TableNormalizer",
    "build_default_publisher_registry",
    "build_preview",
    "combination_key",
    "merge_tallies",
    "tally_combinations",
]
