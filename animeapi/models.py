from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field, is_dataclass
from enum import Enum
from typing import Any, List, Optional

LEADING_INT = re.compile(r"^[+-]?\d+")


def episode_number(name: Any) -> int:
    """Return the number after the last space of an episode title.

    "Some Show 12" gives 12. A title without a space, a non-numeric last token
    or a non-string value gives 0, which is not the movie default of 1.
    """
    if not isinstance(name, str):
        return 0
    idx = name.rfind(" ")
    if idx < 0:
        return 0
    m = LEADING_INT.match(name[idx:].strip())
    return int(m.group(0)) if m else 0


@dataclass(slots=True, frozen=True)
class Image:
    url: str
    banner: Optional[str] = None


@dataclass(slots=True)
class EpisodeServer:
    name: str
    url: str


@dataclass(slots=True)
class Episode:
    name: str
    url: str
    number: int = 1
    servers: List[EpisodeServer] = field(default_factory=list)
    image: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError(f"episode {self.name!r} has no url")

    number_from_title = staticmethod(episode_number)


class ClimaticStation(Enum):
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"
    SPRING = "spring"

    @classmethod
    def from_month(cls, month: int) -> Optional["ClimaticStation"]:
        # broadcast seasons: Jan-Mar winter, Apr-Jun spring, Jul-Sep summer, Oct-Dec autumn
        if not 1 <= month <= 12:
            return None
        return (cls.WINTER, cls.SPRING, cls.SUMMER, cls.AUTUMN)[(month - 1) // 3]


@dataclass(slots=True)
class Chronology:
    name: str
    url: str
    image: str


@dataclass(slots=True)
class Anime:
    name: str
    url: str
    synopsis: str = ""
    image: Optional[Image] = None
    year: int = 0
    genres: List[str] = field(default_factory=list)
    station: Optional[ClimaticStation] = None
    chronology: List[Chronology] = field(default_factory=list)
    episodes: List[Episode] = field(default_factory=list)
    active: bool = False
    category: Optional[str] = None

    def __post_init__(self) -> None:
        # genres act as an insertion-ordered set
        self.genres = list(dict.fromkeys(self.genres))


def _json_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _dict_factory(items: list[tuple[str, Any]]) -> dict:
    return {key: _json_value(value) for key, value in items}


def to_dict(entity: Any) -> Any:
    """Serialize a model, or a list of models, into JSON-ready structures."""
    if isinstance(entity, (list, tuple)):
        return [to_dict(item) for item in entity]
    if is_dataclass(entity) and not isinstance(entity, type):
        return asdict(entity, dict_factory=_dict_factory)
    return _json_value(entity)
