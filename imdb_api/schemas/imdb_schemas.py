import asyncio
from datetime import date
from typing import Any, Callable, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, computed_field
from ..config import settings
from ..utils.field_mapper import (
    EPISODE_FIELDS,
    MOVIE_FIELDS,
    SEARCH_PAGE_FIELDS,
    SEARCH_RESULT_FIELDS,
    map_fields,
    parse_int,
    split_year_range,
)

IMDB_TITLE_URL = "https://www.imdb.com/title/"

RequestType = Literal['movie', 'series', 'episode', 'game']


class MovieOpts(BaseModel):
    """
    Options shared by every call.

    :param api_key: OMDb API key, required for any request.
    :param timeout: Per-request deadline in milliseconds.
    """
    api_key: Optional[str] = None
    timeout: Optional[int] = None

    @classmethod
    def from_settings(cls) -> "MovieOpts":
        return cls(api_key=settings.OMDB_API_KEY, timeout=settings.OMDB_TIMEOUT_MS)


class MovieRequest(BaseModel):
    """An explicit request for *one* title, by name or by IMDb id."""
    name: Optional[str] = None
    id: Optional[str] = None
    year: Optional[int] = None
    short_plot: bool = False


class SearchRequest(BaseModel):
    title: str
    reqtype: Optional[RequestType] = None
    year: Optional[int] = None


def _split_list(value: Optional[str]) -> List[str]:
    if not value or value == "N/A":
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class Movie(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    imdbid: Optional[str] = None
    title: Optional[str] = None
    year: Optional[int] = None
    year_data: Optional[str] = Field(default=None, exclude=True, repr=False)
    released: Optional[date] = None
    genres: Optional[str] = None
    languages: Optional[str] = None
    country: Optional[str] = None
    votes: Optional[str] = None
    rating: Optional[float] = None
    runtime: Optional[str] = None
    type: Optional[str] = None
    poster: Optional[str] = None
    metascore: Optional[str] = None
    plot: Optional[str] = None
    rated: Optional[str] = None
    director: Optional[str] = None
    writer: Optional[str] = None
    actors: Optional[str] = None

    @computed_field
    @property
    def series(self) -> bool:
        return self.type != "movie"

    @computed_field
    @property
    def imdburl(self) -> str:
        return f"{IMDB_TITLE_URL}{self.imdbid}"

    @property
    def genre_list(self) -> List[str]:
        return _split_list(self.genres)

    @property
    def language_list(self) -> List[str]:
        return _split_list(self.languages)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Movie":
        """
        Build a movie from a single-title OMDb payload.

        :param payload: Decoded JSON object with ``Type`` of movie or series.
        :return: Movie record.
        :raises InvalidField: When year, release date or rating cannot be parsed.
        """
        fields = map_fields(payload, MOVIE_FIELDS)
        if "Year" in payload:
            fields["year_data"] = str(payload["Year"])
        return cls(**fields)


class Episode(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    season: int
    episode: int
    name: Optional[str] = None
    released: date
    imdbid: Optional[str] = None
    rating: Optional[float] = None
    year: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], season: int) -> "Episode":
        """
        Build an episode. The season number is supplied by the caller, the
        payload's own ``Season`` key is ignored.
        """
        fields = map_fields(payload, EPISODE_FIELDS)
        fields["season"] = season
        return cls(**fields)


class TVShow(BaseModel):
    """
    A series: the movie attributes plus season information. Episodes are
    fetched on first use and kept on the instance afterwards.
    """
    model_config = ConfigDict(frozen=True)

    movie: Movie
    start_year: int
    end_year: Optional[int] = None
    totalseasons: int
    opts: MovieOpts = Field(exclude=True, repr=False)

    _episodes: Optional[List[Episode]] = PrivateAttr(default=None)
    _lock: Optional[asyncio.Lock] = PrivateAttr(default=None)

    @property
    def imdbid(self) -> Optional[str]:
        return self.movie.imdbid

    @property
    def title(self) -> Optional[str]:
        return self.movie.title

    @property
    def series(self) -> bool:
        return self.movie.series

    @property
    def imdburl(self) -> str:
        return self.movie.imdburl

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], opts: MovieOpts) -> "TVShow":
        movie = Movie.from_payload(payload)
        start_year, end_year = split_year_range(movie.year_data)
        return cls(
            movie=movie,
            start_year=start_year,
            end_year=end_year,
            totalseasons=parse_int(payload.get("totalSeasons"), "totalseasons"),
            opts=opts,
        )

    async def episodes(self, client=None, *, callback: Optional[Callable] = None):
        """
        Fetch every episode of the show, one request per season.

        :param client: Optional ``httpx.AsyncClient`` to reuse.
        :param callback: Optional ``callback(err, episodes)`` used instead of
            the return value.
        :return: Ordered list of episodes across all seasons.
        """
        from ..clients.imdb_client import episodes
        return await episodes(self, client=client, callback=callback)


class SearchResult(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    title: Optional[str] = None
    year: int
    imdbid: Optional[str] = None
    type: Optional[str] = None
    poster: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SearchResult":
        return cls(**map_fields(payload, SEARCH_RESULT_FIELDS))


class SearchResults(BaseModel):
    """
    One page of search results. Keeps the request and options it came from
    so the following page can be fetched with ``next``.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    results: List[SearchResult] = []
    totalresults: int
    page: int = 1
    request: SearchRequest
    opts: MovieOpts = Field(exclude=True, repr=False)

    @classmethod
    def from_payload(
        cls,
        payload: Dict[str, Any],
        page: int,
        opts: MovieOpts,
        req: SearchRequest
    ) -> "SearchResults":
        fields = map_fields(payload, SEARCH_PAGE_FIELDS)
        fields["results"] = [
            SearchResult.from_payload(item) for item in payload.get("Search", [])
        ]
        return cls(page=page, request=req, opts=opts, **fields)

    async def next(self, client=None, *, callback: Optional[Callable] = None):
        """
        Fetch the following page of the same search. There is no end-of-results
        check, compare against ``totalresults`` to stop.
        """
        from ..clients.imdb_client import search
        return await search(
            self.request, self.opts, self.page + 1, client=client, callback=callback
        )


class ErrorResponse(BaseModel):
    code: int
    message: str
