"""Roast level: a 0-4 novelty score for how grizzled or buried a player is."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ffpreviews.report.constants import (
    HEALTHY,
    ROAST_AGE_ANCIENT,
    ROAST_AGE_OLD,
    ROAST_DEPTH_CHART_BACKUP,
    ROAST_MAX,
    ROAST_RANK_BURIED,
    ROAST_RANK_DEEP,
)

if TYPE_CHECKING:
    from ffpreviews.report.models import Player


def roast_level(player: Player | None) -> int:
    if player is None:
        return 0
    score = 0
    age = player.age
    if age is not None and age >= ROAST_AGE_OLD:
        score += 1
    if age is not None and age >= ROAST_AGE_ANCIENT:
        score += 1
    rank = player.search_rank or 0
    if rank > ROAST_RANK_DEEP:
        score += 1
    if rank > ROAST_RANK_BURIED:
        score += 1
    depth = player.depth_chart_order if player.depth_chart_order is not None else 1
    if depth >= ROAST_DEPTH_CHART_BACKUP:
        score += 1
    if player.injury_status and player.injury_status != HEALTHY:
        score += 1
    return min(score, ROAST_MAX)
