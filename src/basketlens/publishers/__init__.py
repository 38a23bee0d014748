"""Analysis result publishers."""

from .base import ResultPublisher
from .csv_export import COMBINATION_COLUMNS, CsvCombinationPublisher
from .json_export import JsonResultPublisher

__all__ = [
    "COMBINATION_COLUMNS",
    "ResultPublisher",
    "CsvCombinationPublisher",
    "JsonResultPublisher",
]
