"""Grouping and field-resolution helpers.

Each ``resolve_*`` function is an explicit fallback chain over raw Sleeper
payload dicts; the first non-empty source in the listed order wins.
"""

from __future__ import annotations

from typing import Any

from ffpreviews.report.constants import HEALTHY, UNKNOWN_MANAGER


def _coerce_int(value: object, default: int = 0) -> int:
    """Best-effort int conversion (supports int, float, str of digits)."""
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int | float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return default
    return default


def _section(payload: dict | None, key: str) -> dict:
    # Sleeper sends null for empty metadata/settings blocks
    value = (payload or {}).get(key)
    return value if isinstance(value, dict) else {}


def group_rows(rows: list[dict]) -> dict[int, list[dict]]:
    """Group matchup rows by ``matchup_id`` in first-seen order.

    Rows without a matchup id (byes) get a synthetic per-roster key so they
    always form singleton groups.
    """
    groups: dict[int, list[dict]] = {}
    for row in rows or []:
        mid_raw = row.get("matchup_id")
        if mid_raw is None:
            rid_int = _coerce_int(row.get("roster_id"), 0)
            mid = -100000 - rid_int
        else:
            mid = _coerce_int(mid_raw, -1)
        groups.setdefault(mid, []).append(row)
    return groups


def resolve_display_name(user: dict | None) -> str:
    """display_name > username > "Unknown Manager"."""
    user = user or {}
    return user.get("display_name") or user.get("username") or UNKNOWN_MANAGER


def resolve_team_name(roster: dict | None, user: dict | None) -> str:
    """Roster metadata > roster settings > user metadata > "<display name>'s Team"."""
    for candidate in (
        _section(roster, "metadata").get("team_name"),
        _section(roster, "settings").get("team_name"),
        _section(user, "metadata").get("team_name"),
    ):
        if candidate:
            return str(candidate)
    return f"{resolve_display_name(user)}'s Team"


def resolve_record(roster: dict | None) -> tuple[int, int]:
    """(wins, losses) from roster settings, zero when missing."""
    settings = _section(roster, "settings")
    return _coerce_int(settings.get("wins"), 0), _coerce_int(settings.get("losses"), 0)


def format_record(wins: int, losses: int) -> str:
    return f"{wins}-{losses}"


def resolve_injury_status(raw_player: dict | None) -> str:
    return (raw_player or {}).get("injury_status") or HEALTHY


def resolve_player_name(player_id: str, raw_player: dict | None) -> str:
    """full_name > "first last" > player id (team defenses have no full_name)."""
    raw_player = raw_player or {}
    if raw_player.get("full_name"):
        return str(raw_player["full_name"])
    parts = [raw_player.get("first_name"), raw_player.get("last_name")]
    joined = " ".join(str(p) for p in parts if p)
    return joined or str(player_id)


def resolve_current_week(league: dict | None) -> int:
    """League ``settings.leg``; 1 when absent or not a positive integer."""
    week = _coerce_int(_section(league, "settings").get("leg"), 1)
    return week if week > 0 else 1


def optional_int(value: Any) -> int | None:
    """Like _coerce_int but keeps "missing" distinct from zero."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None
