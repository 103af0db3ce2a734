"""Immutable projections built once per run from Sleeper payloads."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from ffpreviews.compute.roast import roast_level as _roast_level
from ffpreviews.report.constants import HEALTHY, UNKNOWN_POSITION


@dataclass(frozen=True, slots=True)
class Player:
    player_id: str
    name: str
    position: str
    team: str | None = None
    injury_status: str = HEALTHY
    age: int | None = None
    search_rank: int | None = None
    depth_chart_order: int | None = None

    @property
    def roast_level(self) -> int:
        return _roast_level(self)

    @classmethod
    def unknown(cls, player_id: str) -> "Player":
        """Placeholder for ids missing from the player catalog."""
        return cls(
            player_id=player_id,
            name=f"Unknown ({player_id})",
            position=UNKNOWN_POSITION,
            team=None,
        )


@dataclass(frozen=True, slots=True)
class RosterView:
    roster_id: int
    owner_id: str | None
    starter_ids: tuple[str, ...]
    bench_ids: tuple[str, ...]
    wins: int
    losses: int
    starters: tuple[Player, ...] = ()
    bench: tuple[Player, ...] = ()


@dataclass(frozen=True, slots=True)
class Manager:
    user_id: str | None
    display_name: str
    team_name: str
    roster_id: int
    record: str


@dataclass(frozen=True, slots=True)
class GameSide:
    manager: str
    team_name: str
    record: str
    projected: float
    starters: tuple[Player, ...] = ()
    bench: tuple[Player, ...] = ()


@dataclass(frozen=True, slots=True)
class Game:
    game_id: str
    team1: GameSide
    team2: GameSide

    @property
    def sides(self) -> tuple[GameSide, GameSide]:
        return (self.team1, self.team2)


@dataclass(frozen=True, slots=True)
class LeagueContext:
    week: int
    league_name: str


@dataclass(frozen=True, slots=True)
class LeagueSnapshot:
    """Everything the aggregator produces for one run."""

    league_id: str
    context: LeagueContext
    managers: list[Manager]
    rosters: list[RosterView]
    matchups: list[dict] = field(default_factory=list)


class GenerationState(enum.Enum):
    PENDING = "pending"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PreviewSummary:
    generated_at: str
    week: int
    league_name: str
    total_previews: int

    def to_json_payload(self) -> dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "week": self.week,
            "league_name": self.league_name,
            "total_previews": self.total_previews,
        }
