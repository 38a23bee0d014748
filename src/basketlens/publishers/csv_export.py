"""Delimited-text export of significant combinations."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from basketlens.models import AnalysisResult
from basketlens.publishers.base import ResultPublisher

COMBINATION_COLUMNS: tuple[str, ...] = (
    "combination",
    "count",
    "frequency",
    "percentage",
)


class CsvCombinationPublisher(ResultPublisher):
    """Write the ``combinations`` list as a table, one row per combination."""

    name = "csv"

    def __init__(self, *, output_path: str | Path, delimiter: str = ",") -> None:
        super().__init__(output_path=output_path)
        self.delimiter = delimiter

    def to_frame(self, result: AnalysisResult) -> pd.DataFrame:
        return pd.DataFrame(
            [stat.to_row() for stat in result.combinations],
            columns=list(COMBINATION_COLUMNS),
        )

    def render(self, result: AnalysisResult) -> str:
        return self.to_frame(result).to_csv(sep=self.delimiter, index=False)
