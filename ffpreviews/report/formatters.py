"""Artifact payloads and writers for generated previews.

Two JSON files are produced side by side:
 - ``previews.json``: ``{game_id: {"preview": text}}`` for successful games only
 - ``preview-info.json``: the run summary (timestamp, week, league, count)
"""

from __future__ import annotations

import datetime
import json
from pathlib import Path
from typing import Any

from .constants import SUMMARY_FILENAME
from .models import LeagueContext, PreviewSummary


def previews_payload(previews: dict[str, str]) -> dict[str, dict[str, str]]:
    return {gid: {"preview": text} for gid, text in previews.items()}


def format_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def build_summary(
    previews: dict[str, str],
    context: LeagueContext,
    now: datetime.datetime | None = None,
) -> PreviewSummary:
    ts = now or datetime.datetime.now(datetime.timezone.utc)
    return PreviewSummary(
        generated_at=ts.isoformat(),
        week=context.week,
        league_name=context.league_name,
        total_previews=len(previews),
    )


def summary_path_for(output_path: Path) -> Path:
    return output_path.with_name(SUMMARY_FILENAME)


def write_artifacts(
    previews: dict[str, str], summary: PreviewSummary, output_path: Path
) -> tuple[Path, Path]:
    """Write both artifacts, creating the parent directory. OSError propagates."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(format_json(previews_payload(previews)), encoding="utf-8")
    info_path = summary_path_for(output_path)
    info_path.write_text(format_json(summary.to_json_payload()), encoding="utf-8")
    return output_path, info_path


def load_previews(path: Path) -> dict[str, str]:
    """Read a previews artifact back into ``{game_id: text}``."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return {gid: entry["preview"] for gid, entry in data.items()}
