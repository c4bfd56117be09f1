"""Command line trigger for generating the arboretum map dataset."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .config import SITE_CONFIG, STORAGE_PATHS
from .core import ExportInProgressError, ExportOutcome, RecordSourceError, StalenessStatus
from .pipelines import ExportPipeline
from .utils import format_display_datetime

__all__ = ["main", "render_outcome", "render_status"]


def render_outcome(outcome: ExportOutcome, out: TextIO) -> None:
    print(outcome.message, file=out)
    if not outcome.success or outcome.result is None:
        return
    result = outcome.result
    print(f"✔️ Arbres valides : {result.valid_count}", file=out)
    if result.error_count:
        print(f"⚠️ Arbres ignorés : {result.error_count}", file=out)
        for line in result.errors:
            print(line, file=out)
    if outcome.generated_at is not None:
        print(
            f"Dernière génération : {format_display_datetime(outcome.generated_at, seconds=True)}",
            file=out,
        )


def render_status(status: StalenessStatus, out: TextIO) -> None:
    if status.last_generation is None:
        print("ℹ️ Aucun fichier JSON n'a encore été généré.", file=out)
        return
    if status.up_to_date:
        print("✅ Le fichier JSON est à jour.", file=out)
        return
    print(
        f"⚠️ {len(status.modified_since)} arbre(s) ont été modifiés depuis la dernière génération :",
        file=out,
    )
    for record in status.modified_since:
        print(f"- {record.name} (modifié le {format_display_datetime(record.last_modified)})", file=out)


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate the tree dataset used by the arboretum map.",
    )
    parser.add_argument(
        "--source",
        type=Path,
        help="CSV export of the published tree posts (defaults to ARBORETUM_EXPORT_SOURCE_CSV)",
    )
    parser.add_argument(
        "--encoding",
        help="Encoding of the CSV export, or 'auto' to detect it",
    )
    parser.add_argument(
        "--uploads",
        type=Path,
        help="Public upload directory receiving carte-data/arbres.json",
    )
    parser.add_argument("--base-url", help="Site base URL stripped from permalinks")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("generate", help="Regenerate the dataset file now.")
    subparsers.add_parser("status", help="Report trees modified since the last generation.")
    return parser


def main(argv: Optional[Iterable[str]] = None, *, out: TextIO | None = None) -> int:
    parser = _build_argument_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    out = out or sys.stdout
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    site = SITE_CONFIG
    if args.source:
        site = replace(site, source_csv=args.source)
    if args.encoding:
        site = replace(site, source_encoding=args.encoding)
    if args.base_url:
        site = replace(site, base_url=args.base_url)
    paths = replace(STORAGE_PATHS, uploads=args.uploads) if args.uploads else STORAGE_PATHS

    if site.source_csv is None:
        parser.error("a tree export is required (--source or ARBORETUM_EXPORT_SOURCE_CSV)")

    pipeline = ExportPipeline.default(paths=paths, site=site)

    try:
        if args.command == "status":
            render_status(pipeline.status(), out)
            return 0
        outcome = pipeline.run()
    except ExportInProgressError as exc:
        print(str(exc), file=out)
        return 2
    except RecordSourceError as exc:
        print(str(exc), file=out)
        return 1
    render_outcome(outcome, out)
    return 0 if outcome.success else 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
