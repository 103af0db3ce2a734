"""League data aggregation for preview generation.

Two phases, because the matchups endpoint needs the week number:

1. league, users, rosters and the player catalog are read concurrently;
2. the current week comes from ``league.settings.leg`` and that week's
   matchups are read.

Any exhausted fetch aborts aggregation with ``AggregationFailed``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import requests

from ffpreviews.api import sleeper
from ffpreviews.api.client import Sleep, make_session
from ffpreviews.compute.core import (
    _coerce_int,
    format_record,
    optional_int,
    resolve_current_week,
    resolve_display_name,
    resolve_injury_status,
    resolve_player_name,
    resolve_record,
    resolve_team_name,
)
from ffpreviews.config import PreviewConfig
from ffpreviews.errors import AggregationFailed, FetchExhausted
from ffpreviews.report.constants import UNKNOWN_MANAGER, UNKNOWN_POSITION
from .models import LeagueContext, LeagueSnapshot, Manager, Player, RosterView

logger = logging.getLogger(__name__)


def _expect(payload: Any, kind: type, what: str) -> Any:
    if not isinstance(payload, kind):
        raise AggregationFailed(f"Unexpected {what} payload: {type(payload).__name__}")
    return payload


def _expect_entries(payload: Any, what: str) -> list[dict]:
    """A list whose every entry is an object; one bad entry fails the run."""
    rows = _expect(payload, list, what)
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            raise AggregationFailed(f"Unexpected {what} entry at index {i}: {type(row).__name__}")
    return rows


def resolve_player(player_id: str, players: dict[str, dict]) -> Player:
    """Enrich one id from the catalog; unknown ids get a placeholder."""
    raw = players.get(player_id)
    if not isinstance(raw, dict):
        return Player.unknown(player_id)
    return Player(
        player_id=player_id,
        name=resolve_player_name(player_id, raw),
        position=raw.get("position") or UNKNOWN_POSITION,
        team=raw.get("team"),
        injury_status=resolve_injury_status(raw),
        age=optional_int(raw.get("age")),
        search_rank=optional_int(raw.get("search_rank")),
        depth_chart_order=optional_int(raw.get("depth_chart_order")),
    )


def build_roster_view(roster: dict, matchup: dict | None, players: dict[str, dict]) -> RosterView:
    starter_ids = tuple(str(p) for p in ((matchup or {}).get("starters") or []))
    starter_set = set(starter_ids)
    bench_ids = tuple(str(p) for p in (roster.get("players") or []) if str(p) not in starter_set)
    wins, losses = resolve_record(roster)
    return RosterView(
        roster_id=_coerce_int(roster.get("roster_id"), -1),
        owner_id=roster.get("owner_id"),
        starter_ids=starter_ids,
        bench_ids=bench_ids,
        wins=wins,
        losses=losses,
        starters=tuple(resolve_player(pid, players) for pid in starter_ids),
        bench=tuple(resolve_player(pid, players) for pid in bench_ids),
    )


def build_manager(roster: dict, view: RosterView, users: list[dict]) -> Manager:
    owner = roster.get("owner_id")
    user = next((u for u in users if owner and u.get("user_id") == owner), None)
    if user is None:
        user = {"user_id": owner, "display_name": UNKNOWN_MANAGER}
    return Manager(
        user_id=user.get("user_id"),
        display_name=resolve_display_name(user),
        team_name=resolve_team_name(roster, user),
        roster_id=view.roster_id,
        record=format_record(view.wins, view.losses),
    )


async def aggregate_league(
    config: PreviewConfig,
    *,
    session: requests.Session | None = None,
    sleep: Sleep = asyncio.sleep,
) -> LeagueSnapshot:
    """Fetch and normalize everything needed to pair and preview this week's games."""
    own_session = session is None
    session = session or make_session()
    kw = {"session": session, "sleep": sleep}
    try:
        league, users, rosters, players = await asyncio.gather(
            sleeper.get_league(config, **kw),
            sleeper.get_users(config, **kw),
            sleeper.get_rosters(config, **kw),
            sleeper.get_players(config, **kw),
        )
        league = _expect(league, dict, "league")
        week = resolve_current_week(league)
        logger.info("Processing Week %d matchups", week)
        matchups = await sleeper.get_matchups(config, week, **kw)
    except FetchExhausted as e:
        raise AggregationFailed(f"Could not load league {config.league_id}: {e}") from e
    finally:
        if own_session:
            session.close()

    users = [u for u in _expect(users, list, "users") if isinstance(u, dict)]
    rosters = _expect_entries(rosters, "rosters")
    players = _expect(players, dict, "players")
    matchups = [m for m in _expect(matchups, list, "matchups") if isinstance(m, dict)]

    # first entry wins when a roster id repeats
    by_roster: dict[Any, dict] = {}
    for m in matchups:
        by_roster.setdefault(m.get("roster_id"), m)
    views: list[RosterView] = []
    managers: list[Manager] = []
    for roster in rosters:
        view = build_roster_view(roster, by_roster.get(roster.get("roster_id")), players)
        views.append(view)
        managers.append(build_manager(roster, view, users))

    return LeagueSnapshot(
        league_id=config.league_id,
        context=LeagueContext(week=week, league_name=str(league.get("name") or "")),
        managers=managers,
        rosters=views,
        matchups=matchups,
    )
