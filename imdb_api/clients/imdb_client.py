import asyncio
import logging
import warnings
from typing import Any, Dict, List, Optional, Union
import httpx
from ..errors import RemoteError, UnrecognizedType
from ..schemas.imdb_schemas import (
    Episode,
    Movie,
    MovieOpts,
    MovieRequest,
    SearchRequest,
    SearchResults,
    TVShow,
)
from ..utils.field_mapper import parse_int
from ..utils.utils_imdb_client import (
    PayloadKind,
    build_get_params,
    build_search_params,
    build_season_params,
    classify,
    client_scope,
    fetch_json,
    with_callback,
)

logger = logging.getLogger(__name__)

# OMDb gives no season for an episode fetched on its own
SINGLE_EPISODE_SEASON = 30


def _to_title(
    data: Dict[str, Any],
    req: MovieRequest,
    opts: MovieOpts
) -> Union[Movie, TVShow, Episode]:
    kind = classify(data)
    if kind is PayloadKind.ERROR:
        logger.warning("OMDb error for %s: %s", req.name or req.id, data["Error"])
        raise RemoteError(f"{data['Error']}: {req.name if req.name else req.id}")
    if kind is PayloadKind.MOVIE:
        return Movie.from_payload(data)
    if kind is PayloadKind.SERIES:
        return TVShow.from_payload(data, opts)
    if kind is PayloadKind.EPISODE:
        return Episode.from_payload(data, SINGLE_EPISODE_SEASON)
    raise UnrecognizedType(data.get("Type"))


@with_callback
async def get_req(
    req: MovieRequest,
    opts: MovieOpts,
    client: Optional[httpx.AsyncClient] = None
) -> Union[Movie, TVShow, Episode]:
    """
    Fetch one title by name or IMDb id.

    :param req: MovieRequest naming the title.
    :param opts: MovieOpts with the API key and optional timeout.
    :param client: Optional HTTP client to reuse.
    :return: Movie, TVShow or Episode depending on the title's type.
    """
    params = build_get_params(req, opts)
    async with client_scope(client) as http:
        data = await fetch_json(http, params, opts)
    return _to_title(data, req, opts)


@with_callback
async def get(
    name: str,
    opts: MovieOpts,
    client: Optional[httpx.AsyncClient] = None
):
    """Deprecated, use ``get_req``."""
    warnings.warn("get is deprecated, use get_req", DeprecationWarning, stacklevel=3)
    return await get_req(MovieRequest(name=name), opts, client)


@with_callback
async def get_by_id(
    imdbid: str,
    opts: MovieOpts,
    client: Optional[httpx.AsyncClient] = None
):
    """Deprecated, use ``get_req``."""
    warnings.warn("get_by_id is deprecated, use get_req", DeprecationWarning, stacklevel=3)
    return await get_req(MovieRequest(id=imdbid), opts, client)


@with_callback
async def search(
    req: SearchRequest,
    opts: MovieOpts,
    page: Optional[int] = None,
    client: Optional[httpx.AsyncClient] = None
) -> SearchResults:
    """
    Search titles by free text.

    :param req: SearchRequest with the title and optional type/year filters.
    :param opts: MovieOpts with the API key and optional timeout.
    :param page: Page number, defaults to 1.
    :param client: Optional HTTP client to reuse.
    :return: One page of SearchResults.
    """
    if page is None:
        page = 1
    params = build_search_params(req, opts, page)
    async with client_scope(client) as http:
        data = await fetch_json(http, params, opts)
    if classify(data) is PayloadKind.ERROR:
        logger.warning("OMDb search error for %s: %s", req.title, data["Error"])
        raise RemoteError(f"{data['Error']}: {req.title}")
    return SearchResults.from_payload(data, page, opts, req)


@with_callback
async def episodes(
    show: TVShow,
    client: Optional[httpx.AsyncClient] = None
) -> List[Episode]:
    """
    Fetch all episodes of a show, requesting every season concurrently.

    The list is kept on the show after the first success and returned
    without further requests. If any season answers with an error nothing
    is kept and the whole call fails.

    :param show: TVShow to fetch episodes for.
    :param client: Optional HTTP client to reuse.
    :return: Episodes ordered by season, then by listing order.
    """
    if show._episodes is not None:
        return show._episodes
    if show._lock is None:
        show._lock = asyncio.Lock()

    async with show._lock:
        if show._episodes is not None:
            return show._episodes

        queries = [
            build_season_params(show.imdbid, n, show.opts)
            for n in range(1, show.totalseasons + 1)
        ]
        async with client_scope(client) as http:
            # join every season before leaving the client scope
            listings = await asyncio.gather(*[
                fetch_json(http, params, show.opts) for params in queries
            ], return_exceptions=True)
        failure = next((r for r in listings if isinstance(r, BaseException)), None)
        if failure is not None:
            raise failure

        found: List[Episode] = []
        for listing in listings:
            if classify(listing) is PayloadKind.ERROR:
                logger.warning("OMDb season error for %s: %s", show.imdbid, listing["Error"])
                raise RemoteError(listing["Error"])
            season = parse_int(listing.get("Season"), "season")
            found.extend(
                Episode.from_payload(item, season) for item in listing.get("Episodes", [])
            )

        logger.debug("Fetched %d episodes over %d seasons for %s",
                     len(found), show.totalseasons, show.imdbid)
        show._episodes = found
        return found
