from __future__ import annotations

import json
import re
from typing import List

from animeapi.errors import ParseMismatch
from animeapi.models import Anime, Chronology, Episode, EpisodeServer, Image, episode_number
from animeapi.providers.base import Provider, extraction, unique_by_url

BANNER_RE = re.compile(r"url\(\s*['\"]?([^'\")]+)['\"]?\s*\)")
AIRING_STATUS = "en emision"


def _direct_text(node, tag: str) -> str:
    return "".join(child.get_text() for child in node.find_all(tag, recursive=False)).strip()


class FlvProvider(Provider):
    """AnimeFLV.

    Listing operations all read the home page. Episode lists and video
    servers are not in the markup but in inline ``var name = ...;`` scripts.
    """

    id = "flv"
    name = "AnimeFLV"
    operations = ("latest_episodes", "currently_airing", "latest_additions", "anime", "episode")

    @extraction
    def latest_episodes(self) -> List[Episode]:
        soup = self.soup()
        episodes = []
        for card in soup.select(".ListEpisodios li a"):
            picture = card.select_one(".picture")
            img = picture.find(True) if picture else None
            episodes.append(
                Episode(
                    name=_direct_text(card, "strong"),
                    url=self.episode_link(card.get("href", "")),
                    number=episode_number(_direct_text(card, "span")),
                    image=self.absolute(img.get("src")) if img else None,
                )
            )
        return episodes

    @extraction
    def currently_airing(self) -> List[Anime]:
        soup = self.soup()
        airing = []
        for item in soup.select(".ListSdbr li"):
            anchor = item.find("a", recursive=False)
            if anchor is None:
                raise ParseMismatch(self.id, "airing list item without a link")
            airing.append(
                Anime(
                    name=anchor.get_text().strip(),
                    url=self.namespaced(anchor.get("href", "")),
                    active=True,
                )
            )
        return airing

    @extraction
    def latest_additions(self) -> List[Anime]:
        soup = self.soup()
        additions = []
        for card in soup.select(".ListAnimes li article a"):
            category = card.select_one(".Type")
            img = card.select_one(":scope > .Image figure > img")
            src = img.get("src") if img else None
            additions.append(
                Anime(
                    name=_direct_text(card, "h3"),
                    url=self.namespaced(card.get("href", "")),
                    image=Image(self.absolute(src)) if src else None,
                    category=category.get_text().strip() if category else None,
                )
            )
        return unique_by_url(additions)

    @extraction
    def anime(self, slug: str) -> Anime:
        soup = self.soup(f"/anime/{slug}")
        title = self.require(soup, "h1.Title").get_text().strip()

        cover = soup.select_one(".AnimeCover .Image figure img")
        image = None
        if cover is not None and cover.get("src"):
            image = Image(self.absolute(cover["src"]), self._banner(soup))

        description = soup.select_one(".Description p")
        status = soup.select_one("p.AnmStts span")
        category = soup.select_one(".Ficha .Type")

        chronology = []
        for anchor in soup.select("ul.ListAnmRel li a"):
            chronology.append(
                Chronology(
                    name=anchor.get_text().strip(),
                    url=self.namespaced(anchor.get("href", "")),
                    image="",
                )
            )

        return Anime(
            name=title,
            url=self.namespaced(f"/anime/{slug}"),
            synopsis=description.get_text().strip() if description else "",
            image=image,
            genres=[a.get_text().strip() for a in soup.select("nav.Nvgnrs a")],
            chronology=chronology,
            episodes=self._episodes(soup, title),
            active=status is not None and status.get_text().strip().lower() == AIRING_STATUS,
            category=category.get_text().strip() if category else None,
        )

    @extraction
    def episode(self, path: str) -> Episode:
        path = "/" + path.lstrip("/")
        soup = self.soup(path)
        title = self.require(soup, "h1.Title").get_text().strip()
        subtitle = soup.select_one("h2.SubTitle")
        number = episode_number(subtitle.get_text().strip()) if subtitle else 1

        servers = []
        videos = self._script_var(soup, "videos")
        for entries in videos.values():
            for entry in entries:
                servers.append(
                    EpisodeServer(
                        name=entry.get("title") or entry.get("server", ""),
                        url=self.namespaced(entry.get("code") or entry.get("url", "")),
                    )
                )
        return Episode(
            name=f"{title} {number}",
            url=self.episode_link(path),
            number=number,
            servers=servers,
        )

    def _episodes(self, soup, title: str) -> List[Episode]:
        info = self._script_var(soup, "anime_info")
        try:
            anime_slug = info[2]
        except (IndexError, TypeError) as e:
            raise ParseMismatch(self.id, "anime_info has no slug") from e
        episodes = []
        for entry in self._script_var(soup, "episodes"):
            number = int(entry[0])
            episodes.append(
                Episode(
                    name=f"{title} {number}",
                    url=self.episode_link(f"/ver/{anime_slug}-{number}"),
                    number=number,
                )
            )
        return episodes

    def _script_var(self, soup, name: str):
        pattern = re.compile(r"var\s+" + re.escape(name) + r"\s*=\s*(.+?);\s*(?:\n|var\s|$)", re.S)
        for script in soup.find_all("script"):
            m = pattern.search(script.string or script.get_text())
            if m:
                try:
                    return json.loads(m.group(1))
                except json.JSONDecodeError as e:
                    raise ParseMismatch(self.id, f"malformed {name} script data") from e
        raise ParseMismatch(self.id, f"no {name} script data")

    def _banner(self, soup) -> str | None:
        bg = soup.select_one(".Bg")
        m = BANNER_RE.search(bg.get("style", "")) if bg else None
        return self.absolute(m.group(1)) if m else None
