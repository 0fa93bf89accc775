import json

import pytest

from animeapi.models import (
    Anime,
    Chronology,
    ClimaticStation,
    Episode,
    EpisodeServer,
    Image,
    episode_number,
    to_dict,
)


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Some Show 12", 12),
        ("NoSuffix", 0),
        ("Episodio 7", 7),
        ("Some Show Final", 0),
        ("Some Show ", 0),
        ("Show 12v2", 12),
        (None, 0),
        (12, 0),
    ],
)
def test_episode_number(title, expected):
    assert episode_number(title) == expected


def test_episode_defaults_to_movie_number():
    ep = Episode(name="Kimi no Na wa", url="/anime/flv/episode/ver/kimi-no-na-wa-1")
    assert ep.number == 1
    assert ep.servers == []
    assert ep.image is None
    assert Episode.number_from_title("One Piece 1000") == 1000


def test_episode_requires_url():
    with pytest.raises(ValueError):
        Episode(name="Broken", url="")


def test_image_is_immutable():
    image = Image("https://example.com/cover.jpg")
    assert image.banner is None
    with pytest.raises(AttributeError):
        image.url = "https://example.com/other.jpg"


def test_genres_keep_first_occurrence_order():
    anime = Anime(name="A", url="/anime/flv/a", genres=["Acción", "Comedia", "Acción", "Drama"])
    assert anime.genres == ["Acción", "Comedia", "Drama"]


def test_climatic_station_from_month():
    assert ClimaticStation.from_month(1) is ClimaticStation.WINTER
    assert ClimaticStation.from_month(4) is ClimaticStation.SPRING
    assert ClimaticStation.from_month(9) is ClimaticStation.SUMMER
    assert ClimaticStation.from_month(10) is ClimaticStation.AUTUMN
    assert ClimaticStation.from_month(13) is None
    assert len(ClimaticStation) == 4


def test_anime_defaults_are_explicit_in_json():
    data = json.loads(json.dumps(to_dict(Anime(name="Frieren", url="/anime/flv/frieren"))))
    assert data == {
        "name": "Frieren",
        "url": "/anime/flv/frieren",
        "synopsis": "",
        "image": None,
        "year": 0,
        "genres": [],
        "station": None,
        "chronology": [],
        "episodes": [],
        "active": False,
        "category": None,
    }


def test_to_dict_nested_models():
    anime = Anime(
        name="Frieren",
        url="/anime/flv/frieren",
        image=Image("cover.jpg", "banner.jpg"),
        station=ClimaticStation.AUTUMN,
        chronology=[Chronology("Frieren 2", "/anime/flv/frieren-2", "")],
        episodes=[
            Episode(
                name="Frieren 1",
                url="/anime/flv/episode/ver/frieren-1",
                servers=[EpisodeServer("SW", "https://streamwish.to/e/abc")],
            )
        ],
    )
    data = to_dict([anime])
    assert data[0]["station"] == "autumn"
    assert data[0]["image"] == {"url": "cover.jpg", "banner": "banner.jpg"}
    assert data[0]["episodes"][0]["servers"] == [{"name": "SW", "url": "https://streamwish.to/e/abc"}]
    assert data[0]["chronology"][0]["url"] == "/anime/flv/frieren-2"
