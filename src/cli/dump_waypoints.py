# src/cli/dump_waypoints.py

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from app.logging_config import configure_logging
from app.pipeline import run_dump
from app.summary import print_summary
from env.loader import load_dump_config


log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dump-waypoints",
        description=(
            "Dump a JourneyMap WaypointData.dat (raw, gzip, zlib or zip) to "
            "waypoints.json, waypoints.csv and create_waypoints.txt."
        ),
    )
    parser.add_argument("input", type=Path, help="WaypointData.dat, .zip or .gz")
    parser.add_argument("--out", type=Path, default=Path("export"), help="Output directory (default: export)")
    parser.add_argument("--config", type=Path, default=None, help="YAML config (default: config/waypoint_dump.yaml)")
    parser.add_argument("--player", default=None, help="Player appended to every command (overrides config)")
    parser.add_argument("--no-summary", action="store_true", help="Skip the summary table")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = load_dump_config(args.config)
        if args.player is not None:
            config = replace(config, player=args.player)
        result = run_dump(args.input, args.out, config)
    except Exception:
        log.exception("Waypoint dump failed")
        return 1

    if not args.no_summary:
        print_summary(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
