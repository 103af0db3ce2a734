from __future__ import annotations

import argparse
import asyncio
import datetime
import json
import logging
import os
import sys
from typing import Any

import requests

from ffpreviews.api.client import Sleep
from ffpreviews.config import PreviewConfig
from ffpreviews.errors import AggregationFailed
from ffpreviews.report.formatters import build_summary, write_artifacts
from ffpreviews.report.pipeline import run_pipeline

logger = logging.getLogger("ffpreviews")


def _pretty(data: Any) -> str:
    return json.dumps(data, indent=2, sort_keys=True)


def generate_previews_report(
    config: PreviewConfig,
    *,
    session: requests.Session | None = None,
    sleep: Sleep = asyncio.sleep,
    delay: Sleep = asyncio.sleep,
    now: datetime.datetime | None = None,
) -> dict:
    result = asyncio.run(run_pipeline(config, session=session, sleep=sleep, delay=delay))
    summary = build_summary(result.previews, result.snapshot.context, now=now)
    previews_path, info_path = write_artifacts(result.previews, summary, config.output_path)
    logger.info("Successfully generated %d previews", summary.total_previews)
    logger.info("Saved to: %s", previews_path)
    return {
        "meta": summary.to_json_payload(),
        "paths": {"previews": str(previews_path), "info": str(info_path)},
        "entries": {
            "managers": len(result.snapshot.managers),
            "games": len(result.games),
            "previews": len(result.previews),
        },
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate AI matchup previews for a Sleeper league's current week"
    )
    parser.add_argument(
        "--league-id", default=None, help="Sleeper league_id (default from SLEEPER_LEAGUE_ID)"
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Previews JSON path (default from PREVIEWS_OUTPUT or public/previews.json)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    try:
        config = PreviewConfig.from_env(os.environ, league_id=args.league_id, output_path=args.output)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        summary = generate_previews_report(config)
    except AggregationFailed as e:
        logger.error("Error generating previews: %s", e)
        return 1
    except OSError as e:
        logger.error("Could not write previews: %s", e)
        return 1
    print(_pretty(summary))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
