"""JSON export of the full analysis result."""

from __future__ import annotations

import json
from pathlib import Path

from basketlens.models import AnalysisResult
from basketlens.publishers.base import ResultPublisher


class JsonResultPublisher(ResultPublisher):
    """Write ``AnalysisResult.to_dict()`` verbatim as JSON."""

    name = "json"

    def __init__(self, *, output_path: str | Path, indent: int | None = 2) -> None:
        super().__init__(output_path=output_path)
        self.indent = indent

    def render(self, result: AnalysisResult) -> str:
        return json.dumps(result.to_dict(), indent=self.indent, ensure_ascii=False)
