"""Shared extraction interface for anime providers.

A provider scrapes one source site. Its operations fetch one page, map the
repeating nodes into canonical models and return ``Ok(data)``; any failure
becomes ``Err(SourceUnavailable | ParseMismatch)`` at the operation boundary.
Selectors live only in the provider subclasses.
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Tuple, TypeVar
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from animeapi.errors import ExtractionError, OperationNotSupported, ParseMismatch
from animeapi.fetch import get_soup
from animeapi.log import get_logger
from animeapi.result import Err, Ok, Result

logger = get_logger(__name__)

ANIME_PREFIX = "/anime"

F = TypeVar("F", bound=Callable)
T = TypeVar("T")


def extraction(func: F) -> F:
    """Run a provider operation and turn every failure into an ``Err``."""

    @functools.wraps(func)
    def wrapper(self: "Provider", *args, **kwargs) -> Result:
        if func.__name__ not in self.operations:
            raise OperationNotSupported(f"{self.id} does not support {func.__name__}")
        try:
            return Ok(func(self, *args, **kwargs))
        except ExtractionError as e:
            logger.warning("{}.{} failed: {}", self.id, func.__name__, e)
            return Err(e)
        except Exception as e:
            logger.opt(exception=e).warning("{}.{} could not map the page", self.id, func.__name__)
            return Err(ParseMismatch(self.id, f"{type(e).__name__}: {e}"))

    return wrapper  # type: ignore[return-value]


def _site_label(netloc: str) -> str:
    """Site name of a host: ``www2.animeflv.bz`` and ``animeflv.net`` give ``animeflv``.

    Hosts with any other subdomain (``cdn.animeflv.net``) are their own site.
    """
    parts = netloc.split(":")[0].lower().split(".")
    if len(parts) < 2:
        return netloc
    sub = parts[:-2]
    if sub and not (len(sub) == 1 and sub[0].startswith("www")):
        return netloc
    return parts[-2]


def unique_by_url(items: Iterable[T]) -> List[T]:
    """Keep the first item for each url and drop items without one."""
    seen = set()
    result = []
    for item in items:
        url = item.url
        if not url or url in seen:
            continue
        seen.add(url)
        result.append(item)
    return result


class Provider(ABC):
    id: str = ""
    name: str = ""
    operations: Tuple[str, ...] = ("latest_episodes", "latest_additions")

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")
        self.host = urlparse(self.base_url).netloc
        self.site = _site_label(self.host)

    def soup(self, path: str = "/") -> BeautifulSoup:
        return get_soup(self.base_url + path, self.id)

    def same_site(self, netloc: str) -> bool:
        # mirrors rotate subdomain and TLD (www2.animeflv.bz, otakudesu.cloud)
        return netloc == self.host or _site_label(netloc) == self.site

    def site_path(self, link: str) -> str:
        """Reduce an absolute link on the provider site to its path and query."""
        parsed = urlparse(link)
        if not parsed.netloc:
            return link if link.startswith("/") else "/" + link
        if not self.same_site(parsed.netloc):
            return link
        return parsed.path + (f"?{parsed.query}" if parsed.query else "")

    def namespaced(self, link: str) -> str:
        """Qualify a site link with this provider's id.

        ``/anime/<slug>`` becomes ``/anime/<id>/<slug>``. Other site paths are
        put under ``/anime/<id>`` as they are. Links to other hosts are kept.
        """
        if not link:
            return link
        path = self.site_path(link)
        if urlparse(path).netloc:
            return path
        qualified = f"{ANIME_PREFIX}/{self.id}"
        if path == ANIME_PREFIX or path.startswith(ANIME_PREFIX + "/") or path.startswith(ANIME_PREFIX + "?"):
            return qualified + path[len(ANIME_PREFIX):]
        return qualified + path

    def episode_link(self, href: str) -> str:
        path = self.site_path(href) if href else ""
        if urlparse(path).netloc:
            return path
        return f"{ANIME_PREFIX}/{self.id}/episode{path}"

    def absolute(self, src: str | None) -> str | None:
        if src and src.startswith("/") and not src.startswith("//"):
            return self.base_url + src
        return src

    def require(self, node, selector: str):
        """``select_one`` that reports a missing node as a parse mismatch."""
        found = node.select_one(selector)
        if found is None:
            raise ParseMismatch(self.id, f"no node matches {selector!r}")
        return found

    @abstractmethod
    def latest_episodes(self) -> Result:
        """Most recently published episodes, as ``Episode`` models."""

    @abstractmethod
    def latest_additions(self) -> Result:
        """Series most recently added to the site, as ``Anime`` models."""

    def currently_airing(self) -> Result:
        raise OperationNotSupported(f"{self.id} does not implement currently_airing")

    def anime(self, slug: str) -> Result:
        raise OperationNotSupported(f"{self.id} does not implement anime")

    def episode(self, path: str) -> Result:
        raise OperationNotSupported(f"{self.id} does not implement episode")

    def describe(self) -> dict:
        return {"id": self.id, "name": self.name, "url": self.base_url, "operations": list(self.operations)}
