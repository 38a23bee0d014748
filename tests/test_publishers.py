import csv
import importlib
import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from basketlens import (  # noqa: E402
    AnalysisResult,
    CsvCombinationPublisher,
    FrequencyStat,
    ItemStat,
    JsonResultPublisher,
    ResultPublisher,
)
from basketlens.registry import (  # noqa: E402
    PublisherRegistry,
    build_default_publisher_registry,
)


def _result() -> AnalysisResult:
    return AnalysisResult(
        total_records=5,
        unique_items=3,
        analyzed_baskets=4,
        combinations=(
            FrequencyStat("bread + milk", 2, 0.5),
            FrequencyStat("bread + eggs", 1, 0.25),
        ),
        item_stats=(ItemStat("bread", 3), ItemStat("milk", 2)),
    )


def test_json_publisher_writes_result_structure(tmp_path: Path) -> None:
    output = tmp_path / "exports" / "result.json"

    written = JsonResultPublisher(output_path=output).publish(_result())

    assert written == output
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload == _result().to_dict()
    assert payload["significantCombinationCount"] == 2
    assert payload["combinations"][0]["percentage"] == "50.0"


def test_csv_publisher_writes_combination_columns(tmp_path: Path) -> None:
    output = tmp_path / "combinations.csv"

    CsvCombinationPublisher(output_path=output).publish(_result())

    with output.open(newline="", encoding="utf-8") as stream:
        rows = list(csv.DictReader(stream))

    assert list(rows[0].keys()) == ["combination", "count", "frequency", "percentage"]
    assert rows[0] == {"combination": "bread + milk", "count": "2", "frequency": "0.5", "percentage": "50.0"}
    assert rows[1]["percentage"] == "25.0"


def test_csv_publisher_writes_header_for_empty_combinations(tmp_path: Path) -> None:
    result = AnalysisResult(total_records=1, unique_items=1, analyzed_baskets=1)

    text = CsvCombinationPublisher(output_path=tmp_path / "empty.csv").render(result)

    assert text.strip() == "combination,count,frequency,percentage"


def test_default_registry_contains_builtin_formats() -> None:
    registry = build_default_publisher_registry()

    assert registry.formats() == ["csv", "json"]


def test_registry_create_is_case_insensitive(tmp_path: Path) -> None:
    registry = build_default_publisher_registry()

    publisher = registry.create(" JSON ", tmp_path / "out.json", indent=None)

    assert isinstance(publisher, JsonResultPublisher)
    assert publisher.indent is None


def test_registry_picks_publisher_from_output_suffix(tmp_path: Path) -> None:
    registry = build_default_publisher_registry()

    assert isinstance(registry.create_for_path(tmp_path / "a.JSON"), JsonResultPublisher)
    assert isinstance(registry.create_for_path(tmp_path / "b.csv"), CsvCombinationPublisher)

    with pytest.raises(KeyError, match=".csv, .json"):
        registry.create_for_path(tmp_path / "c.pdf")


def test_registry_unknown_format_lists_available(tmp_path: Path) -> None:
    registry = build_default_publisher_registry()

    with pytest.raises(KeyError, match="csv, json"):
        registry.create("pdf", tmp_path / "out.pdf")


def test_registry_keys_on_publisher_name_and_rejects_duplicates() -> None:
    registry = PublisherRegistry()
    registry.register(JsonResultPublisher)

    assert registry.formats() == ["json"]
    with pytest.raises(ValueError):
        registry.register(JsonResultPublisher)


def test_registry_rejects_publisher_without_name() -> None:
    class _Unnamed(ResultPublisher):
        def render(self, result):
            return ""

    with pytest.raises(ValueError, match="_Unnamed"):
        PublisherRegistry().register(_Unnamed)


def test_registry_rejects_non_publisher_classes() -> None:
    registry = PublisherRegistry()

    with pytest.raises(TypeError):
        registry.register(dict)

    with pytest.raises(TypeError):
        registry.register(JsonResultPublisher(output_path="x.json"))


def _write_plugin_module(tmp_path: Path) -> None:
    (tmp_path / "plugin_publisher.py").write_text(
        "from basketlens.publishers import ResultPublisher\n"
        "class TextPublisher(ResultPublisher):\n"
        "    name='text'\n"
        "    def render(self, result):\n"
        "        return f'{result.analyzed_baskets} baskets'\n"
        "class NotAPublisher:\n"
        "    name='broken'\n"
    )


def test_registry_plugin_registration(tmp_path: Path) -> None:
    _write_plugin_module(tmp_path)

    sys.path.insert(0, str(tmp_path))
    try:
        importlib.invalidate_caches()
        registry = PublisherRegistry()
        registry.register_plugin("plugin_publisher", "TextPublisher", suffixes=(".txt",))

        publisher = registry.create_for_path(tmp_path / "out.txt")
        assert publisher.name == "text"
        publisher.publish(_result())
        assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "4 baskets"
    finally:
        sys.path = [path for path in sys.path if path != str(tmp_path)]
        sys.modules.pop("plugin_publisher", None)


def test_registry_plugin_must_be_a_publisher(tmp_path: Path) -> None:
    _write_plugin_module(tmp_path)

    sys.path.insert(0, str(tmp_path))
    try:
        importlib.invalidate_caches()
        registry = PublisherRegistry()

        with pytest.raises(TypeError, match="not a ResultPublisher subclass"):
            registry.register_plugin("plugin_publisher", "NotAPublisher")
        with pytest.raises(ValueError, match="no attribute"):
            registry.register_plugin("plugin_publisher", "MissingPublisher")
        assert registry.formats() == []
    finally:
        sys.path = [path for path in sys.path if path != str(tmp_path)]
        sys.modules.pop("plugin_publisher", None)
