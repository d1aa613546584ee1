"""Offline CLI for the identification pipeline.

Usage:
    artlens identify photo.jpg [--language en] [--catalog catalog.json]
    artlens match "La Gioconda" "Leonardo da Vinci" --catalog catalog.json
    artlens category "Impresionismo"
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from artlens.app import build_components
from artlens.catalog.categories import map_period_to_category
from artlens.catalog.matcher import CatalogMatcher
from artlens.config import ArtLensConfig
from artlens.connectors.memory import load_catalog
from artlens.observability.logging import setup_logging
from artlens.pipeline.outcome import Identified
from artlens.types import Language


async def _identify(config: ArtLensConfig, image: bytes, language: Language) -> dict:
    components = build_components(config)
    try:
        run = await components.pipeline.identify(image, language)
        candidates = await components.catalog.find_all_candidates(language) if run.identified else []
        outcome = components.pipeline.resolve(run, candidates)
    finally:
        await components.close()

    report: dict = {
        "identified": run.identified,
        "stage": run.final_stage.value,
        "stages": [s.value for s in run.stages],
        "latency_ms": run.latency_ms,
        "pages_fetched": run.pages_fetched,
        "rendered": run.rendered,
    }
    if isinstance(outcome, Identified):
        report["result"] = outcome.evidence.model_dump(by_alias=True)
        report["matched_entry"] = outcome.matched_entry.model_dump() if outcome.matched_entry else None
        if outcome.is_custom:
            report["category_id"] = map_period_to_category(outcome.evidence.period)
    else:
        report["reason"] = outcome.reason
    return report


def cmd_identify(args: argparse.Namespace) -> None:
    """Run the full pipeline on one photo and print the outcome as JSON."""
    path = Path(args.image)
    if not path.exists():
        print(f"File not found: {path}")
        sys.exit(1)

    config = ArtLensConfig.from_yaml(args.config)
    if args.catalog:
        config.catalog_path = args.catalog
    # The CLI never writes to a shared database.
    config.postgres_url = ""
    language = Language.resolve(args.language or config.default_language)

    report = asyncio.run(_identify(config, path.read_bytes(), language))
    print(json.dumps(report, indent=2, ensure_ascii=False, default=str))


def cmd_match(args: argparse.Namespace) -> None:
    """Match a title/artist pair against a JSON catalog."""
    entries = load_catalog(args.catalog)
    matcher = CatalogMatcher(args.threshold)
    entry = matcher.match(args.title, args.artist, entries)
    if entry is None:
        print("No match")
        sys.exit(2)
    print(json.dumps(entry.model_dump(), indent=2, ensure_ascii=False))


def cmd_category(args: argparse.Namespace) -> None:
    """Print the category inferred for a period or style name."""
    print(map_period_to_category(args.period))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="artlens", description="Artwork identification from photos")
    parser.add_argument("--log-level", default="WARNING")
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("identify", help="Identify the artwork in a photo")
    p.add_argument("image")
    p.add_argument("--language", "-l", default=None, help="es, en or fr")
    p.add_argument("--catalog", default=None, help="JSON catalog to match against")
    p.add_argument("--config", default="artlens.yaml")

    p = sub.add_parser("match", help="Fuzzy-match a title and artist against a catalog")
    p.add_argument("title")
    p.add_argument("artist")
    p.add_argument("--catalog", required=True)
    p.add_argument("--threshold", type=float, default=0.90)

    p = sub.add_parser("category", help="Map a period/style to a category id")
    p.add_argument("period")

    return parser


def main() -> None:
    """Entry point for the `artlens` CLI."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging(args.log_level)
    commands = {
        "identify": cmd_identify,
        "match": cmd_match,
        "category": cmd_category,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
