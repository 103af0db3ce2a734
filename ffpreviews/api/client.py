"""HTTP session and retrying JSON reader for the Sleeper API.

This module centralizes HTTP read concerns:
- A shared requests.Session sized for the concurrent phase-1 reads
- ``fetch_json``: one logical read retried with tenacity, waiting
  ``backoff_ms * attempt`` before each retry and nothing after the last attempt

Blocking ``requests`` calls run on worker threads so several reads can be in
flight while the event loop stays single-threaded.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

import requests
from requests.adapters import HTTPAdapter
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from ffpreviews.errors import FetchExhausted, TransientFetchError
from ffpreviews.report.constants import (
    DEFAULT_BACKOFF_MS,
    DEFAULT_FETCH_RETRIES,
    DEFAULT_TIMEOUT_SEC,
)

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


def make_session(pool_size: int = 8) -> requests.Session:
    """Create a session whose connection pool fits the concurrent reads.

    Retries are handled by ``fetch_json`` so the adapter does not retry on its own.
    """
    session = requests.Session()
    session.headers.update({"User-Agent": "ff-previews/1.0"})
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size, max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def _read_once(session: requests.Session, url: str, timeout: float) -> Any:
    try:
        r = session.get(url, timeout=timeout)
        r.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        raise TransientFetchError(url, f"API error: {status}") from e
    except requests.RequestException as e:
        raise TransientFetchError(url, f"transport error: {e}") from e
    try:
        return r.json()
    except ValueError as e:
        raise TransientFetchError(url, f"invalid JSON: {e}") from e


async def fetch_json(
    url: str,
    *,
    session: requests.Session,
    retries: int = DEFAULT_FETCH_RETRIES,
    backoff_ms: int = DEFAULT_BACKOFF_MS,
    timeout: float = DEFAULT_TIMEOUT_SEC,
    sleep: Sleep = asyncio.sleep,
) -> Any:
    """GET ``url`` and return decoded JSON, retrying up to ``retries`` attempts.

    Raises FetchExhausted (chained to the last TransientFetchError) when every
    attempt fails.
    """
    attempts = max(1, int(retries))
    step = backoff_ms / 1000.0

    def _log_failure(state: RetryCallState) -> None:
        e = state.outcome.exception() if state.outcome else None
        reason = e.reason if isinstance(e, TransientFetchError) else e
        logger.warning("Attempt %d/%d failed for %s: %s", state.attempt_number, attempts, url, reason)

    retrying = AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_incrementing(start=step, increment=step),
        retry=retry_if_exception_type(TransientFetchError),
        after=_log_failure,
        sleep=sleep,
    )
    try:
        async for attempt in retrying:
            with attempt:
                return await asyncio.to_thread(_read_once, session, url, timeout)
    except RetryError as e:
        last_error = e.last_attempt.exception()
        raise FetchExhausted(url, attempts, last_error) from last_error
