"""Command-line interface for wtpsync."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from wtpsync.errors import WtpSyncError
from wtpsync.pipeline import run
from wtpsync.renderer.descriptors import render_json

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="wtpsync",
        description="Compute Eclipse WTP classpath, component and facet descriptors "
        "from a resolved build snapshot.",
    )
    parser.add_argument(
        "snapshot",
        type=Path,
        help="Path to the resolved build snapshot (YAML or JSON)",
    )
    parser.add_argument(
        "-p",
        "--project",
        default=None,
        help="Only print descriptors for this project path (e.g. :web)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: .wtpsync.toml or pyproject.toml next to the snapshot)",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=1,
        help="Generate independent projects in parallel with this many workers",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("wtpsync").setLevel(logging.DEBUG)

    try:
        result = run(
            args.snapshot,
            project=args.project,
            config_path=args.config,
            max_workers=args.jobs,
        )
    except WtpSyncError as e:
        logger.error("%s", e)
        return 1

    sys.stdout.write(render_json(result.descriptors) + "\n")
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
