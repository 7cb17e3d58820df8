"""CLI entrypoint for exporting the Body of Knowledge to a Living Textbook document."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .assembler import ExportOptions
from .config import get_settings
from .export_phase import ExportPhase, WritePhase
from .pipeline import PipelineContext, PipelineRunner
from .repository import SnapshotRepository


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )


def run(
    output: Path,
    *,
    limit: Optional[int] = None,
    strip: bool = False,
    ka: Optional[int] = None,
    snapshot: Optional[Path] = None,
) -> Dict[str, Any]:
    """Export the repository snapshot to ``output`` and return the run report."""

    settings = get_settings()
    repository = SnapshotRepository.from_path(
        snapshot or settings.snapshot_path,
        base_url=settings.canonical_base(),
    )
    context = PipelineContext(settings=settings, repository=repository)
    options = ExportOptions(limit=limit, strip=strip, category_id=ka)
    runner = PipelineRunner([ExportPhase(options=options), WritePhase(output_path=output)], context)
    runner.run()
    export_result = runner.result("export")
    write_result = runner.result("write")
    report = dict(export_result.details.get("report", {}))
    report["output"] = {
        "path": write_result.details["path"],
        "bytes_written": write_result.details["bytes_written"],
        "error": write_result.error,
    }
    return report


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{raw!r} is not an integer") from exc
    if value < 1:
        raise argparse.ArgumentTypeError("value must be a positive integer")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export the Body of Knowledge as a Living Textbook JSON document")
    parser.add_argument("output", type=Path, help="Path of the JSON file to write")
    parser.add_argument(
        "--limit",
        type=_positive_int,
        default=None,
        help="Maximum number of topics exported per knowledge area (default: unlimited)",
    )
    parser.add_argument(
        "--strip",
        action="store_true",
        help="Strip markup from topic content fields",
    )
    parser.add_argument(
        "--ka",
        type=int,
        default=None,
        help="Only export the knowledge area with this term id",
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=None,
        help="Repository snapshot to read instead of the configured one",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Console script entry point."""

    args = build_parser().parse_args(argv)
    _configure_logging()

    report = run(args.output, limit=args.limit, strip=args.strip, ka=args.ka, snapshot=args.snapshot)
    error = report["output"]["error"]
    if error:
        print(error)

    statistics = report["statistics"]
    print(f"Nodes: {statistics['nodes']}")
    print(f"Learning outcomes: {statistics['learning_outcomes']}")
    print(f"Keywords: {statistics['keywords']}")
    print(f"Bibliography: {statistics['external_resources']}")
    logging.getLogger(__name__).info("Export completed", extra={"summary": report})


if __name__ == "__main__":  # pragma: no cover
    main()
