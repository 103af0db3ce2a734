"""Run configuration, built once at the program boundary.

Nothing below the CLI reads the environment; the aggregator and the
orchestrator receive a ``PreviewConfig`` explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from ffpreviews.report.constants import (
    DEFAULT_BACKOFF_MS,
    DEFAULT_FETCH_RETRIES,
    DEFAULT_GENERATION_TIMEOUT_SEC,
    DEFAULT_INTER_CALL_DELAY_SEC,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_OPENAI_URL,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_SLEEPER_BASE_URL,
    DEFAULT_TEMPERATURE,
    DEFAULT_TIMEOUT_SEC,
)


@dataclass(frozen=True, slots=True)
class PreviewConfig:
    league_id: str
    openai_api_key: str | None = None
    output_path: Path = Path(DEFAULT_OUTPUT_PATH)
    sleeper_base_url: str = DEFAULT_SLEEPER_BASE_URL
    openai_url: str = DEFAULT_OPENAI_URL
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    fetch_retries: int = DEFAULT_FETCH_RETRIES
    backoff_ms: int = DEFAULT_BACKOFF_MS
    inter_call_delay: float = DEFAULT_INTER_CALL_DELAY_SEC
    timeout: float = DEFAULT_TIMEOUT_SEC
    generation_timeout: float = DEFAULT_GENERATION_TIMEOUT_SEC

    @property
    def has_credential(self) -> bool:
        return bool(self.openai_api_key)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str],
        *,
        league_id: str | None = None,
        output_path: str | Path | None = None,
    ) -> "PreviewConfig":
        """Build a config from an environment mapping; explicit args win.

        Raises ValueError when no league id is available from either source.
        """
        lid = (league_id or environ.get("SLEEPER_LEAGUE_ID") or "").strip()
        if not lid:
            raise ValueError("A Sleeper league id is required (--league-id or SLEEPER_LEAGUE_ID)")
        key = (environ.get("OPENAI_API_KEY") or "").strip() or None
        out = output_path or environ.get("PREVIEWS_OUTPUT") or DEFAULT_OUTPUT_PATH
        base_url = environ.get("SLEEPER_BASE_URL") or DEFAULT_SLEEPER_BASE_URL
        return cls(
            league_id=lid,
            openai_api_key=key,
            output_path=Path(out),
            sleeper_base_url=base_url.rstrip("/"),
        )
