from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import requests

from ffpreviews.api.client import Sleep, make_session
from ffpreviews.compute.pairing import pair_matchups
from ffpreviews.config import PreviewConfig
from .collect import aggregate_league
from .generate import generate_previews
from .models import Game, LeagueSnapshot

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineResult:
    snapshot: LeagueSnapshot
    games: list[Game]
    previews: dict[str, str]


async def run_pipeline(
    config: PreviewConfig,
    *,
    session: requests.Session | None = None,
    sleep: Sleep = asyncio.sleep,
    delay: Sleep = asyncio.sleep,
) -> PipelineResult:
    """Aggregate -> pair -> generate. AggregationFailed propagates to the caller."""
    own_session = session is None
    session = session or make_session()
    try:
        logger.info("Fetching league data for %s", config.league_id)
        snapshot = await aggregate_league(config, session=session, sleep=sleep)
        games = pair_matchups(snapshot.matchups, snapshot.managers, snapshot.rosters)
        logger.info("Found %d games to process", len(games))
        previews = await generate_previews(
            games, snapshot.context, config, session=session, delay=delay
        )
    finally:
        if own_session:
            session.close()
    return PipelineResult(snapshot=snapshot, games=games, previews=previews)
