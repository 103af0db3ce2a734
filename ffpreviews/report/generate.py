"""Sequential, rate-limited preview generation.

Games are sent to the chat completions endpoint one at a time with a fixed
pause between calls. A failure only drops that game's preview; the returned
map holds successful narratives keyed by game id.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import requests

from ffpreviews.api.client import Sleep
from ffpreviews.config import PreviewConfig
from ffpreviews.errors import GenerationFailed, NoCredential
from .models import Game, GenerationState, LeagueContext
from .prompt import SYSTEM_PROMPT, build_prompt

logger = logging.getLogger(__name__)


def request_body(prompt: str, config: PreviewConfig) -> dict[str, Any]:
    return {
        "model": config.model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
    }


def parse_preview(game_id: str, data: Any) -> str:
    """Pull ``{"preview": ...}`` out of a chat completion response body."""
    try:
        content = data["choices"][0]["message"]["content"]
        preview = json.loads(content)["preview"]
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise GenerationFailed(game_id, f"malformed response: {e!r}") from e
    if not isinstance(preview, str) or not preview.strip():
        raise GenerationFailed(game_id, "empty preview")
    return preview


def request_preview(
    game: Game, context: LeagueContext, config: PreviewConfig, session: requests.Session
) -> str:
    """Blocking call for one game; raises GenerationFailed on any problem."""
    if not config.has_credential:
        raise NoCredential(game.game_id, "no OpenAI API key configured")
    body = request_body(build_prompt(game, context), config)
    headers = {"Authorization": f"Bearer {config.openai_api_key}"}
    try:
        r = session.post(
            config.openai_url, json=body, headers=headers, timeout=config.generation_timeout
        )
    except requests.RequestException as e:
        raise GenerationFailed(game.game_id, f"network error: {e}") from e
    if not r.ok:
        raise GenerationFailed(game.game_id, f"OpenAI API error {r.status_code}: {r.text[:500]}")
    try:
        data = r.json()
    except ValueError as e:
        raise GenerationFailed(game.game_id, "response body is not JSON") from e
    return parse_preview(game.game_id, data)


async def generate_previews(
    games: list[Game],
    context: LeagueContext,
    config: PreviewConfig,
    *,
    session: requests.Session,
    delay: Sleep = asyncio.sleep,
) -> dict[str, str]:
    if not config.has_credential:
        logger.warning("No OpenAI API key found, skipping AI preview generation")
        return {}

    previews: dict[str, str] = {}
    states = {g.game_id: GenerationState.PENDING for g in games}
    for i, game in enumerate(games):
        logger.info(
            "Generating preview %d/%d: %s vs %s",
            i + 1,
            len(games),
            game.team1.team_name,
            game.team2.team_name,
        )
        states[game.game_id] = GenerationState.REQUESTING
        try:
            previews[game.game_id] = await asyncio.to_thread(
                request_preview, game, context, config, session
            )
            states[game.game_id] = GenerationState.SUCCEEDED
            logger.info("Generated preview for %s", game.game_id)
        except GenerationFailed as e:
            states[game.game_id] = GenerationState.FAILED
            logger.warning("Failed to generate preview for %s: %s", game.game_id, e.reason)
        if i < len(games) - 1:
            await delay(config.inter_call_delay)

    failed = [gid for gid, s in states.items() if s is GenerationState.FAILED]
    if failed:
        logger.warning("%d of %d previews failed: %s", len(failed), len(games), ", ".join(failed))
    return previews
