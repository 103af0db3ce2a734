import json
from pathlib import Path

import pytest
import requests

from ffpreviews.api import sleeper
from ffpreviews.config import PreviewConfig


def make_response(payload=None, status=200, url="", text=None):
    r = requests.Response()
    r.status_code = status
    r.url = url
    r.encoding = "utf-8"
    r._content = (text if text is not None else json.dumps(payload)).encode("utf-8")
    return r


def completion(content):
    """Chat completion response body whose message content is ``content``."""
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FakeSession:
    """Stands in for requests.Session; GETs are routed by URL, POSTs are queued.

    A route value may be a Response, an exception, or a list of those consumed
    one per call.
    """

    def __init__(self, routes=None, posts=None):
        self.routes = dict(routes or {})
        self.posts = list(posts or [])
        self.get_calls = []
        self.post_calls = []
        self.closed = False

    @staticmethod
    def _resolve(outcome):
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def get(self, url, timeout=None):
        self.get_calls.append(url)
        outcome = self.routes[url]
        if isinstance(outcome, list):
            outcome = outcome.pop(0)
        return self._resolve(outcome)

    def post(self, url, json=None, headers=None, timeout=None):
        self.post_calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        return self._resolve(self.posts.pop(0))

    def close(self):
        self.closed = True


class SleepRecorder:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def sleeps():
    return SleepRecorder()


@pytest.fixture
def delays():
    return SleepRecorder()


@pytest.fixture
def config(tmp_path: Path):
    return PreviewConfig(
        league_id="L1",
        openai_api_key="sk-test",
        output_path=tmp_path / "public" / "previews.json",
        sleeper_base_url="https://sleeper.test/v1",
        openai_url="https://llm.test/v1/chat/completions",
    )


LEAGUE = {"league_id": "L1", "name": "Dynasty Degens", "settings": {"leg": 5}}

USERS = [
    {"user_id": "u1", "display_name": "Ava", "metadata": {}},
    {"user_id": "u2", "display_name": "Ben", "metadata": {"team_name": "Ben's Bombers"}},
    {"user_id": "u3", "display_name": "Cy", "metadata": None},
]

ROSTERS = [
    {
        "roster_id": 1,
        "owner_id": "u1",
        "players": ["p1", "p2", "p3"],
        "settings": {"wins": 3, "losses": 1},
        "metadata": None,
    },
    {
        "roster_id": 2,
        "owner_id": "u2",
        "players": ["p4", "p5", "ghost"],
        "settings": {"wins": 2, "losses": 2},
    },
    {
        "roster_id": 3,
        "owner_id": "u3",
        "players": ["p6"],
        "settings": {"wins": 1, "losses": 3, "team_name": "Settings Name"},
        "metadata": {"team_name": "Meta Name"},
    },
    {"roster_id": 4, "owner_id": "u9", "players": None, "settings": {}},
    {"roster_id": 5, "owner_id": "u1", "players": ["p6"], "settings": {"wins": 0, "losses": 4}},
]

PLAYERS = {
    "p1": {"full_name": "Old Timer", "position": "QB", "team": "NO", "age": 36, "search_rank": 50},
    "p2": {"full_name": "Speedy Back", "position": "RB", "team": "SF", "age": 24, "search_rank": 10},
    "p3": {
        "full_name": "Deep Sleeper",
        "position": "WR",
        "team": "NYJ",
        "age": 33,
        "search_rank": 2500,
        "depth_chart_order": 4,
        "injury_status": "Questionable",
    },
    "p4": {"full_name": "Tight End", "position": "TE", "team": "KC", "age": 33, "search_rank": 30},
    "p5": {"first_name": "Kansas City", "last_name": "Chiefs", "position": "DEF", "team": "KC"},
    "p6": {"full_name": "Rookie Wideout", "position": "WR", "team": "DET", "age": 22},
}

MATCHUPS = [
    {"roster_id": 1, "matchup_id": 1, "starters": ["p1", "p2"], "points_projected": 101.26},
    {"roster_id": 3, "matchup_id": 2, "starters": ["p6"], "points_projected": 88},
    {"roster_id": 2, "matchup_id": 1, "starters": ["p4", "ghost"], "points_projected": None},
    {"roster_id": 4, "matchup_id": 2, "starters": []},
    {"roster_id": 5, "matchup_id": None, "starters": []},
]


def league_routes(config, week=5, **overrides):
    base, lid = config.sleeper_base_url, config.league_id
    routes = {
        sleeper.league_url(base, lid): make_response(LEAGUE),
        sleeper.users_url(base, lid): make_response(USERS),
        sleeper.rosters_url(base, lid): make_response(ROSTERS),
        sleeper.players_url(base): make_response(PLAYERS),
        sleeper.matchups_url(base, lid, week): make_response(MATCHUPS),
    }
    routes.update(overrides)
    return routes
