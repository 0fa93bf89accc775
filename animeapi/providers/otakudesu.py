from __future__ import annotations

import re
from datetime import datetime
from typing import Dict, List

from animeapi.models import Anime, ClimaticStation, Episode, EpisodeServer, Image, episode_number
from animeapi.providers.base import Provider, extraction, unique_by_url

RELEASE_DATE_FORMAT = "%b %d, %Y"
YEAR_RE = re.compile(r"\b(\d{4})\b")


def _number(title: str) -> int:
    # "Frieren Episode 12 Subtitle Indonesia" carries the number before the suffix
    return episode_number(title.split(" Subtitle")[0])


class OtakudesuProvider(Provider):
    """Otakudesu.

    Home, ongoing and complete listings share the ``.venz li`` card layout.
    Links on this site are absolute and point at ``/anime/<slug>/`` and
    ``/episode/<slug>/``.
    """

    id = "otakudesu"
    name = "Otakudesu"
    operations = ("latest_episodes", "currently_airing", "latest_additions", "anime", "episode")

    def _cards(self, soup):
        venz = soup.find("div", class_="venz")
        if venz is None:
            return []
        return venz.find_all("li")

    def _card_parts(self, item):
        thumb = item.find("div", class_="thumb")
        if thumb is None:
            return None
        link_tag = thumb.find("a")
        img_tag = thumb.find("img")
        title_tag = thumb.find("h2", class_="jdlflm")
        return (
            title_tag.get_text(strip=True) if title_tag else "",
            link_tag.get("href", "") if link_tag else "",
            img_tag.get("src") if img_tag else None,
        )

    def _anime_link(self, href: str) -> str:
        return self.namespaced(href).rstrip("/")

    @extraction
    def latest_episodes(self) -> List[Episode]:
        soup = self.soup("/")
        episodes = []
        for item in self._cards(soup):
            parts = self._card_parts(item)
            if parts is None:
                continue
            title, href, src = parts
            if not href:
                continue
            label = item.find("div", class_="epz")
            episodes.append(
                Episode(
                    name=title,
                    url=self._anime_link(href),
                    number=episode_number(label.get_text(strip=True) if label else ""),
                    image=src,
                )
            )
        return episodes

    def _listing(self, path: str, active: bool) -> List[Anime]:
        soup = self.soup(path)
        anime_list = []
        for item in self._cards(soup):
            parts = self._card_parts(item)
            if parts is None:
                continue
            title, href, src = parts
            anime_list.append(
                Anime(
                    name=title,
                    url=self._anime_link(href),
                    image=Image(src) if src else None,
                    active=active,
                )
            )
        return anime_list

    @extraction
    def currently_airing(self) -> List[Anime]:
        return self._listing("/ongoing-anime/", active=True)

    @extraction
    def latest_additions(self) -> List[Anime]:
        return unique_by_url(self._listing("/complete-anime/", active=False))

    @extraction
    def anime(self, slug: str) -> Anime:
        soup = self.soup(f"/anime/{slug}/")

        jdlrx = soup.find("div", class_="jdlrx")
        title = jdlrx.find("h1").get_text(strip=True) if jdlrx and jdlrx.find("h1") else slug

        image = None
        info_div = soup.find("div", class_="fotoanime")
        img = info_div.find("img") if info_div else None
        if img is not None and img.get("src"):
            image = Image(img["src"])

        info = self._info(soup)
        synopsis = soup.find("div", class_="sinopc")
        year, station = self._release(info.get("tanggal_rilis", ""))

        episodes = []
        for episodelist_div in soup.find_all("div", class_="episodelist"):
            for item in episodelist_div.find_all("li"):
                link = item.find("a")
                if link is None or not link.get("href"):
                    continue
                name = link.get_text(strip=True)
                episodes.append(
                    Episode(
                        name=name,
                        url=self._episode_link(link["href"]),
                        number=_number(name),
                    )
                )

        return Anime(
            name=title,
            url=self.namespaced(f"/anime/{slug}"),
            synopsis=synopsis.get_text(strip=True) if synopsis else "",
            image=image,
            year=year,
            genres=[g.strip() for g in info.get("genre", "").split(",") if g.strip()],
            station=station,
            episodes=unique_by_url(episodes),
            active=info.get("status", "").lower() == "ongoing",
            category=info.get("tipe") or None,
        )

    @extraction
    def episode(self, slug: str) -> Episode:
        slug = slug.strip("/")
        soup = self.soup(f"/episode/{slug}/")

        h1 = soup.find("h1", class_="posttl")
        name = h1.get_text(strip=True) if h1 else slug

        servers = []
        iframe = soup.find("iframe")
        if iframe is not None and iframe.get("src"):
            servers.append(EpisodeServer("default", iframe["src"]))

        mirror_stream = soup.find("div", class_="mirrorstream")
        if mirror_stream:
            for qual_ul in mirror_stream.find_all("ul"):
                quality = qual_ul.get("class")[0] if qual_ul.get("class") else "unknown"
                if quality.startswith("m"):
                    quality = quality[1:]
                for li in qual_ul.find_all("li"):
                    a = li.find("a")
                    if a is not None:
                        servers.append(EpisodeServer(f"{a.get_text(strip=True)} {quality}", a.get("data-content", "")))

        return Episode(
            name=name,
            url=self.episode_link(f"/{slug}"),
            number=_number(name),
            servers=servers,
        )

    def _episode_link(self, href: str) -> str:
        path = self.site_path(href).strip("/")
        if path.startswith("episode/"):
            path = path[len("episode/"):]
        return self.episode_link(f"/{path}")

    def _info(self, soup) -> Dict[str, str]:
        details = {}
        info_z = soup.find("div", class_="infozingle")
        if info_z:
            for p in info_z.find_all("p"):
                text = p.get_text(strip=True)
                if ":" in text:
                    key, val = text.split(":", 1)
                    details[key.strip().lower().replace(" ", "_")] = val.strip()
        return details

    def _release(self, released: str):
        try:
            date = datetime.strptime(released, RELEASE_DATE_FORMAT)
        except ValueError:
            m = YEAR_RE.search(released)
            return (int(m.group(1)) if m else 0), None
        return date.year, ClimaticStation.from_month(date.month)
