"""Error taxonomy for the preview pipeline.

Fetch-level errors are retried locally, aggregation errors are fatal for the
run, and generation errors are isolated to a single game.
"""

from __future__ import annotations


class PreviewError(Exception):
    """Base class for every error raised by ffpreviews."""


class TransientFetchError(PreviewError):
    """A single remote read failed; eligible for retry."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class FetchExhausted(PreviewError):
    """Every attempt allowed by the retry budget failed."""

    def __init__(self, url: str, attempts: int, last_error: BaseException | None) -> None:
        super().__init__(f"Gave up on {url} after {attempts} attempts: {last_error}")
        self.url = url
        self.attempts = attempts
        self.last_error = last_error


class AggregationFailed(PreviewError):
    """A required data source could not be read; the run cannot continue."""


class GenerationFailed(PreviewError):
    """Narrative generation failed for one game."""

    def __init__(self, game_id: str, reason: str) -> None:
        super().__init__(f"{game_id}: {reason}")
        self.game_id = game_id
        self.reason = reason


class NoCredential(GenerationFailed):
    """The generative service has no API key configured."""
