"""Pair current-week matchup rows into head-to-head games."""

from __future__ import annotations

from ffpreviews.compute.core import _coerce_int, group_rows
from ffpreviews.report.constants import UNKNOWN_MANAGER
from ffpreviews.report.models import Game, GameSide, Manager, RosterView


def _projected(entry: dict) -> float:
    try:
        return float(entry.get("points_projected") or 0)
    except (TypeError, ValueError):
        return 0.0


def _side(entry: dict, managers: dict[int, Manager], rosters: dict[int, RosterView]) -> GameSide:
    rid = _coerce_int(entry.get("roster_id"), -1)
    manager = managers.get(rid)
    roster = rosters.get(rid)
    if manager is None:
        return GameSide(
            manager=UNKNOWN_MANAGER,
            team_name=f"Roster {rid}",
            record="0-0",
            projected=_projected(entry),
        )
    return GameSide(
        manager=manager.display_name,
        team_name=manager.team_name,
        record=manager.record,
        projected=_projected(entry),
        starters=roster.starters if roster else (),
        bench=roster.bench if roster else (),
    )


def pair_matchups(
    matchups: list[dict],
    managers: list[Manager],
    rosters: list[RosterView] | None = None,
) -> list[Game]:
    """Build a Game for every matchup group with exactly two entries.

    Ids are ``game-1``, ``game-2``, ... in the order groups are first seen;
    byes and malformed groups are skipped.
    """
    by_manager = {m.roster_id: m for m in managers}
    by_roster = {r.roster_id: r for r in rosters or []}
    games: list[Game] = []
    for entries in group_rows(matchups).values():
        if len(entries) != 2:
            continue
        a, b = entries
        games.append(
            Game(
                game_id=f"game-{len(games) + 1}",
                team1=_side(a, by_manager, by_roster),
                team2=_side(b, by_manager, by_roster),
            )
        )
    return games
