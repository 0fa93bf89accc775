import json
from unittest.mock import patch

import pytest

from animeapi.errors import ParseMismatch, SourceUnavailable
from animeapi.models import Anime, Episode, Image
from animeapi.result import Err, Ok
from animeapi.web import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_index_lists_providers(client):
    rv = client.get("/")
    assert rv.status_code == 200
    ids = [p["id"] for p in rv.get_json()["providers"]]
    assert ids == ["flv", "otakudesu"]


def test_listing_serializes_with_two_space_indent(client):
    episodes = [Episode(name="One Piece", url="/anime/flv/episode/ver/one-piece-1085", number=1085)]
    with patch("animeapi.providers.flv.FlvProvider.latest_episodes", return_value=Ok(episodes)):
        rv = client.get("/anime/flv/list/latest-episodes")

    assert rv.status_code == 200
    assert rv.mimetype == "application/json"
    body = rv.get_data(as_text=True)
    assert body.startswith('[\n  {\n    "name": "One Piece"')
    assert json.loads(body)[0]["number"] == 1085


def test_failed_listing_returns_false_body(client):
    failure = Err(SourceUnavailable("flv", "connection refused"))
    with patch("animeapi.providers.flv.FlvProvider.latest_additions", return_value=failure):
        rv = client.get("/anime/flv/list/latest-additions")

    assert rv.status_code == 503
    assert rv.get_data(as_text=True) == "false"


def test_parse_mismatch_is_bad_gateway(client):
    failure = Err(ParseMismatch("otakudesu", "no node"))
    with patch("animeapi.providers.otakudesu.OtakudesuProvider.currently_airing", return_value=failure):
        rv = client.get("/anime/otakudesu/list/airing")

    assert rv.status_code == 502
    assert rv.get_json() is False


def test_anime_detail_route_mirrors_namespace(client):
    anime = Anime(name="Frieren", url="/anime/flv/sousou-no-frieren", image=Image("cover.jpg"))
    with patch("animeapi.providers.flv.FlvProvider.anime", return_value=Ok(anime)) as mock_anime:
        rv = client.get("/anime/flv/sousou-no-frieren")

    mock_anime.assert_called_once_with("sousou-no-frieren")
    data = rv.get_json()
    assert data["url"] == "/anime/flv/sousou-no-frieren"
    assert data["genres"] == []
    assert data["station"] is None


def test_episode_route_passes_site_path(client):
    episode = Episode(name="Frieren 12", url="/anime/flv/episode/ver/sousou-no-frieren-12", number=12)
    with patch("animeapi.providers.flv.FlvProvider.episode", return_value=Ok(episode)) as mock_episode:
        rv = client.get("/anime/flv/episode/ver/sousou-no-frieren-12")

    mock_episode.assert_called_once_with("ver/sousou-no-frieren-12")
    assert rv.get_json()["number"] == 12


def test_unknown_provider_is_not_found(client):
    rv = client.get("/anime/crunchy/list/latest-episodes")
    assert rv.status_code == 404
    assert "crunchy" in rv.get_json()["error"]


def test_unknown_listing_is_not_found(client):
    rv = client.get("/anime/flv/list/popular")
    assert rv.status_code == 404
