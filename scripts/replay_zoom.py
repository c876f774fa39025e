#!/usr/bin/env python3
"""Replay a recorded zoom session and print every change event.

Usage
-----
    python scripts/replay_zoom.py session.jsonl
    python scripts/replay_zoom.py --verbose --warn-unknown-axis session.jsonl
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from chartzoom.config import ZoomConfig
from chartzoom.coordinator import ZoomCoordinator
from chartzoom.exceptions import ChartZoomError
from chartzoom.replay import load_operations, replay


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replay recorded chartzoom coordinator calls")
    parser.add_argument("recording", type=Path, help="JSON-lines file of recorded calls")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable DEBUG logging")
    parser.add_argument(
        "--warn-unknown-axis",
        action="store_true",
        help="Log updates for unregistered axes at WARNING",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ZoomConfig.from_env(warn_on_unknown_axis=True) if args.warn_unknown_axis else ZoomConfig.from_env()
        coordinator = ZoomCoordinator(config=config)
        events = replay(load_operations(args.recording), coordinator)
    except (ChartZoomError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for index, event in enumerate(events, start=1):
        print(f"{index:>4}  {json.dumps(event.as_payload(), sort_keys=True)}")

    final = coordinator.get_zoom()
    print(f"final  {json.dumps(final.as_dict() if final is not None else None, sort_keys=True)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
