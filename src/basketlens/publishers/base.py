"""Publisher interface for analysis results."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from basketlens.models import AnalysisResult


class ResultPublisher(ABC):
    """Serializes an analysis result into a consumer-facing artifact."""

    name: str

    def __init__(self, *, output_path: str | Path) -> None:
        self.output_path = Path(output_path)

    @abstractmethod
    def render(self, result: AnalysisResult) -> str:
        """Return the serialized artifact as text."""

    def publish(self, result: AnalysisResult) -> Path:
        """Write the rendered artifact to ``output_path`` and return it."""

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(self.render(result), encoding="utf-8")
        return self.output_path
