"""Export formats available for analysis results."""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

from basketlens.publishers import (
    CsvCombinationPublisher,
    JsonResultPublisher,
    ResultPublisher,
)


class PublisherRegistry:
    """Export formats keyed by each publisher class's ``name``.

    A format may also claim file suffixes so a bare output path such as
    ``out/result.json`` is enough to pick its publisher.
    """

    def __init__(self) -> None:
        self._publishers: dict[str, type[ResultPublisher]] = {}
        self._suffixes: dict[str, str] = {}

    def register(
        self,
        publisher_cls: type[ResultPublisher],
        *,
        suffixes: tuple[str, ...] = (),
    ) -> None:
        """Register ``publisher_cls`` under its ``name`` attribute."""

        if not isinstance(publisher_cls, type) or not issubclass(publisher_cls, ResultPublisher):
            raise TypeError(f"{publisher_cls!r} is not a ResultPublisher subclass")

        fmt = str(getattr(publisher_cls, "name", "")).strip().lower()
        if not fmt:
            raise ValueError(f"{publisher_cls.__name__} does not declare an export format name")
        if fmt in self._publishers:
            raise ValueError(f"Export format already registered: {fmt}")

        self._publishers[fmt] = publisher_cls
        for suffix in suffixes:
            self._suffixes[suffix.lower()] = fmt

    def register_plugin(self, module: str, class_name: str, **kwargs: Any) -> type[ResultPublisher]:
        """Import ``module.class_name`` and register it as an export format."""

        publisher_cls = getattr(importlib.import_module(module), class_name, None)
        if publisher_cls is None:
            raise ValueError(f"Module {module!r} has no attribute {class_name!r}")
        self.register(publisher_cls, **kwargs)
        return publisher_cls

    def create(self, fmt: str, output_path: str | Path, **options: Any) -> ResultPublisher:
        """Build the publisher for ``fmt`` writing to ``output_path``."""

        key = fmt.strip().lower()
        if key not in self._publishers:
            raise KeyError(
                f"Unknown export format '{fmt}'. Available: {', '.join(self.formats())}"
            )
        return self._publishers[key](output_path=output_path, **options)

    def create_for_path(self, output_path: str | Path, **options: Any) -> ResultPublisher:
        """Build a publisher chosen by the suffix of ``output_path``."""

        suffix = Path(output_path).suffix.lower()
        if suffix not in self._suffixes:
            raise KeyError(
                f"No export format for suffix '{suffix}'. Known: {', '.join(sorted(self._suffixes))}"
            )
        return self.create(self._suffixes[suffix], output_path, **options)

    def formats(self) -> list[str]:
        """Return sorted list of known export formats."""

        return sorted(self._publishers)


def build_default_publisher_registry() -> PublisherRegistry:
    """Create a registry with the JSON and CSV exporters."""

    registry = PublisherRegistry()
    registry.register(JsonResultPublisher, suffixes=(".json",))
    registry.register(CsvCombinationPublisher, suffixes=(".csv",))
    return registry
