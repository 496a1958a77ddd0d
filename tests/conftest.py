import pytest

from imdb_api.schemas.imdb_schemas import MovieOpts


@pytest.fixture
def opts():
    return MovieOpts(api_key="secret")
