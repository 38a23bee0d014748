#!/usr/bin/env python3
"""Run co-occurrence analysis over a delimited text export."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from basketlens import (  # noqa: E402
    AnalysisConfig,
    BasketAnalysisError,
    BasketAnalysisPipeline,
    CoOccurrenceEngine,
    DelimitedTextSource,
    PublisherRegistry,
    ResolutionProfileLoader,
    ResultPublisher,
    build_default_publisher_registry,
    build_preview,
)
from basketlens.config import DEFAULT_THRESHOLD, DEFAULT_TOP_ITEMS  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find item combinations that co-occur in the same basket."
    )
    parser.add_argument("--input-csv", required=True, help="Delimited input file with a header row")
    parser.add_argument("--delimiter", default=",", help="Field delimiter of the input file")
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help="Minimum combination frequency to report, in (0, 1].",
    )
    parser.add_argument(
        "--top-items",
        type=int,
        default=DEFAULT_TOP_ITEMS,
        help="Number of most frequent items to include.",
    )
    parser.add_argument(
        "--default-basket-key",
        default=None,
        help="Basket key for records without one. Defaults to a single unkeyed basket.",
    )
    parser.add_argument(
        "--profile",
        default="default",
        help="Field resolution profile name",
    )
    parser.add_argument(
        "--profile-path",
        default=None,
        help="Optional explicit profile JSON path (overrides --profile)",
    )
    parser.add_argument(
        "--profiles-dir",
        default=None,
        help="Optional custom profile directory",
    )
    parser.add_argument(
        "--export",
        action="append",
        default=[],
        metavar="FORMAT=PATH",
        help="Write an export as FORMAT=PATH (json, csv) or a PATH ending in .json or .csv. Repeatable.",
    )
    parser.add_argument(
        "--preview",
        type=int,
        default=0,
        help="Include the first N input rows in the printed summary.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def _build_publisher(registry: PublisherRegistry, value: str) -> ResultPublisher:
    fmt, sep, path = value.partition("=")
    if not sep:
        return registry.create_for_path(value.strip())
    if not fmt.strip() or not path.strip():
        raise ValueError(f"Export must look like FORMAT=PATH or PATH, got {value!r}")
    return registry.create(fmt, path.strip())


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger = logging.getLogger("basketlens.runner")

    if not Path(args.input_csv).is_file():
        parser.error(f"Input file not found: {args.input_csv}")

    try:
        loader = ResolutionProfileLoader(args.profiles_dir)
        resolver = loader.load(args.profile_path if args.profile_path else args.profile)
        config = AnalysisConfig(
            threshold=args.threshold,
            top_items=args.top_items,
            default_basket_key=args.default_basket_key,
        )
        registry = build_default_publisher_registry()
        publishers = [_build_publisher(registry, export) for export in args.export]
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))
    except KeyError as exc:
        parser.error(exc.args[0])

    engine = CoOccurrenceEngine(config, resolver=resolver)

    source = DelimitedTextSource(path=args.input_csv, delimiter=args.delimiter)
    pipeline = BasketAnalysisPipeline(sources=[source], engine=engine, publishers=publishers)

    logger.info("Analyzing %s with %s", args.input_csv, engine.describe())
    try:
        report = pipeline.run()
    except BasketAnalysisError as exc:
        logger.error("Analysis failed: %s", exc)
        return 2

    payload = {
        "engine": engine.describe(),
        "ingested_records": report.ingested_records,
        "result": report.result.to_dict(),
        "exports": [str(path) for path in report.published],
    }
    if args.preview > 0:
        preview = build_preview(source.read(), limit=args.preview)
        payload["preview"] = {
            "headers": list(preview.headers),
            "rows": list(preview.rows),
            "total_records": preview.total_records,
        }

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
