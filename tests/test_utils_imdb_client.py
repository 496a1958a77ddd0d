import pytest

from imdb_api.errors import MissingApiKey, MissingCriteria
from imdb_api.schemas.imdb_schemas import MovieOpts, MovieRequest, SearchRequest
from imdb_api.utils import utils_imdb_client as uclient
from imdb_api.utils.utils_imdb_client import PayloadKind, classify

from payloads import (
    DummyClient,
    EPISODE_PAYLOAD,
    ERROR_PAYLOAD,
    MOVIE_PAYLOAD,
    SEARCH_PAYLOAD,
    SERIES_PAYLOAD,
    season_payload,
)


# --- classify ---


@pytest.mark.parametrize("payload, kind", [
    (ERROR_PAYLOAD, PayloadKind.ERROR),
    (season_payload(1), PayloadKind.SEASON),
    (SEARCH_PAYLOAD, PayloadKind.SEARCH),
    (MOVIE_PAYLOAD, PayloadKind.MOVIE),
    (SERIES_PAYLOAD, PayloadKind.SERIES),
    (EPISODE_PAYLOAD, PayloadKind.EPISODE),
    (dict(MOVIE_PAYLOAD, Type="game"), PayloadKind.UNKNOWN),
    ({}, PayloadKind.UNKNOWN),
])
def test_classify(payload, kind):
    assert classify(payload) is kind


def test_classify_error_wins_over_other_shapes():
    payload = dict(MOVIE_PAYLOAD, Error="Something went wrong.")
    assert classify(payload) is PayloadKind.ERROR


# --- request builders ---


def test_build_get_params_prefers_name_over_id():
    params = uclient.build_get_params(
        MovieRequest(name="Mr. Robot", id="tt4158110"), MovieOpts(api_key="k")
    )
    assert params["t"] == "Mr. Robot"
    assert "i" not in params


def test_build_get_params_requires_criteria():
    with pytest.raises(MissingCriteria):
        uclient.build_get_params(MovieRequest(year=2001), MovieOpts(api_key="k"))


def test_build_get_params_checks_key_before_criteria():
    with pytest.raises(MissingApiKey):
        uclient.build_get_params(MovieRequest(), None)


def test_build_search_params_drops_missing_filters():
    params = uclient.build_search_params(SearchRequest(title="robot"), MovieOpts(api_key="k"))
    assert params == {"apikey": "k", "page": 1, "r": "json", "s": "robot"}


def test_build_season_params():
    params = uclient.build_season_params("tt4158110", 2, MovieOpts(api_key="k"))
    assert params == {"Season": 2, "apikey": "k", "i": "tt4158110", "r": "json"}


# --- transport ---


@pytest.mark.asyncio
async def test_fetch_json_hits_base_url():
    client = DummyClient(lambda params: MOVIE_PAYLOAD)
    data = await uclient.fetch_json(client, {"apikey": "k", "t": "x"}, MovieOpts(api_key="k"))
    url, params, kwargs = client.calls[0]
    assert url == uclient.OMDB_BASE_URL
    assert params == {"apikey": "k", "t": "x"}
    assert kwargs == {}
    assert data["imdbID"] == "tt0090190"


@pytest.mark.asyncio
async def test_client_scope_reuses_given_client():
    client = DummyClient(lambda params: {})
    async with uclient.client_scope(client) as http:
        assert http is client


# --- callback adapter ---


@pytest.mark.asyncio
async def test_with_callback_without_callback_raises():
    @uclient.with_callback
    async def boom():
        raise MissingCriteria("nope")

    with pytest.raises(MissingCriteria):
        await boom()


@pytest.mark.asyncio
async def test_with_callback_delivers_once():
    calls = []

    @uclient.with_callback
    async def answer(value):
        return value * 2

    result = await answer(21, callback=lambda err, data: calls.append((err, data)))
    assert result is None
    assert calls == [(None, 42)]
