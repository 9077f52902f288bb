"""HTTP client for fetching the beacon event log."""

import logging
import time
from typing import Optional

import requests

from .config import SourceConfig

logger = logging.getLogger(__name__)


class FetchFailure(Exception):
    """The beacon log could not be fetched (transport error or non-success response)."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def _cache_busted_params(config: SourceConfig) -> Optional[dict]:
    if not config.cache_bust:
        return None
    return {"t": str(int(time.time() * 1000))}


def fetch_log(config: SourceConfig, session: Optional[requests.Session] = None) -> str:
    """
    Fetch the raw beacon log text.

    Args:
        config: Source configuration.
        session: Optional requests session to reuse connections across polls.

    Returns:
        The log body decoded as UTF-8.

    Raises:
        FetchFailure: On any transport error or non-2xx response.
    """
    http = session or requests
    logger.info(f"Fetching beacon log: {config.url}")

    try:
        response = http.get(
            config.url,
            params=_cache_busted_params(config),
            timeout=config.timeout_seconds,
        )
    except requests.RequestException as e:
        logger.error(f"Error fetching beacon log {config.url}: {e}")
        raise FetchFailure(config.url, f"Failed to fetch data: {e}") from e

    if not response.ok:
        logger.error(f"Beacon log request returned HTTP {response.status_code}")
        raise FetchFailure(
            config.url,
            f"Failed to fetch data: HTTP {response.status_code}",
            status_code=response.status_code,
        )

    text = response.content.decode("utf-8", errors="replace")
    if text.startswith("\ufeff"):
        text = text[1:]

    logger.debug(f"Fetched {len(text)} characters from {config.url}")
    return text
