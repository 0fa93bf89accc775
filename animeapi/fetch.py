from __future__ import annotations

import requests
from bs4 import BeautifulSoup

from animeapi.config import settings
from animeapi.errors import SourceUnavailable
from animeapi.log import get_logger

logger = get_logger(__name__)


def fetch_html(url: str, provider: str) -> bytes:
    """Single GET of ``url``. No retry, no cache, no custom headers."""
    logger.debug("GET {}", url)
    try:
        response = requests.get(url, timeout=settings.http.timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise SourceUnavailable(provider, f"error fetching {url}: {e}") from e
    return response.content


def get_soup(url: str, provider: str) -> BeautifulSoup:
    return BeautifulSoup(fetch_html(url, provider), "lxml")
