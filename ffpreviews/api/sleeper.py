"""Sleeper read endpoints as free functions.

Each function takes the base URL and league id from the run config and reads
through ``fetch_json``; no state is kept between calls.
"""

from __future__ import annotations

from typing import Any

import requests

from ffpreviews.api.client import Sleep, fetch_json
from ffpreviews.config import PreviewConfig
from ffpreviews.report.constants import SPORT

# Path templates, kept in sync with openapi/sleeper.yaml
LEAGUE_PATH = "/league/{league_id}"
USERS_PATH = "/league/{league_id}/users"
ROSTERS_PATH = "/league/{league_id}/rosters"
MATCHUPS_PATH = "/league/{league_id}/matchups/{week}"
PLAYERS_PATH = "/players/{sport}"


def league_url(base_url: str, league_id: str) -> str:
    return base_url + LEAGUE_PATH.format(league_id=league_id)


def users_url(base_url: str, league_id: str) -> str:
    return base_url + USERS_PATH.format(league_id=league_id)


def rosters_url(base_url: str, league_id: str) -> str:
    return base_url + ROSTERS_PATH.format(league_id=league_id)


def matchups_url(base_url: str, league_id: str, week: int) -> str:
    return base_url + MATCHUPS_PATH.format(league_id=league_id, week=week)


def players_url(base_url: str, sport: str = SPORT) -> str:
    return base_url + PLAYERS_PATH.format(sport=sport)


async def _read(url: str, config: PreviewConfig, session: requests.Session, sleep: Sleep) -> Any:
    return await fetch_json(
        url,
        session=session,
        retries=config.fetch_retries,
        backoff_ms=config.backoff_ms,
        timeout=config.timeout,
        sleep=sleep,
    )


async def get_league(config: PreviewConfig, *, session: requests.Session, sleep: Sleep) -> Any:
    return await _read(league_url(config.sleeper_base_url, config.league_id), config, session, sleep)


async def get_users(config: PreviewConfig, *, session: requests.Session, sleep: Sleep) -> Any:
    return await _read(users_url(config.sleeper_base_url, config.league_id), config, session, sleep)


async def get_rosters(config: PreviewConfig, *, session: requests.Session, sleep: Sleep) -> Any:
    return await _read(rosters_url(config.sleeper_base_url, config.league_id), config, session, sleep)


async def get_matchups(
    config: PreviewConfig, week: int, *, session: requests.Session, sleep: Sleep
) -> Any:
    url = matchups_url(config.sleeper_base_url, config.league_id, week)
    return await _read(url, config, session, sleep)


async def get_players(config: PreviewConfig, *, session: requests.Session, sleep: Sleep) -> Any:
    """Full NFL player catalog keyed by player id (a multi-megabyte payload)."""
    return await _read(players_url(config.sleeper_base_url), config, session, sleep)
