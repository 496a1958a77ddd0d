import enum
import functools
import inspect
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, Optional
import httpx
from ..errors import MissingApiKey, MissingCriteria

logger = logging.getLogger(__name__)

OMDB_BASE_URL = "https://www.omdbapi.com/"


class PayloadKind(enum.Enum):
    ERROR = "error"
    SEASON = "season"
    SEARCH = "search"
    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"
    UNKNOWN = "unknown"


TYPE_KINDS = {
    'movie': PayloadKind.MOVIE,
    'series': PayloadKind.SERIES,
    'episode': PayloadKind.EPISODE,
}


def classify(payload: Dict[str, Any]) -> PayloadKind:
    """
    Determine the shape of a decoded OMDb payload.

    Precedence is error, season listing, search page, then a single title
    split on its ``Type`` discriminator.

    :param payload: Decoded JSON object.
    :return: The matching PayloadKind, UNKNOWN for an unrecognised ``Type``.
    """
    if "Error" in payload:
        return PayloadKind.ERROR
    if isinstance(payload.get("Episodes"), list):
        return PayloadKind.SEASON
    if isinstance(payload.get("Search"), list):
        return PayloadKind.SEARCH
    return TYPE_KINDS.get(payload.get("Type"), PayloadKind.UNKNOWN)


def _require_api_key(opts) -> str:
    if opts is None or not getattr(opts, "api_key", None):
        raise MissingApiKey("Missing api key in opts")
    return opts.api_key


def _drop_none(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None}


def build_get_params(req, opts) -> Dict[str, Any]:
    """
    Build the query for fetching exactly one title.

    :param req: MovieRequest with a name or an id.
    :param opts: MovieOpts carrying the API key.
    :return: Query parameters for OMDb.
    :raises MissingApiKey: When opts or its key is absent.
    :raises MissingCriteria: When neither name nor id is set.
    """
    api_key = _require_api_key(opts)
    params = {
        'apikey': api_key,
        'plot': 'short' if req.short_plot else 'full',
        'r': 'json',
        'y': req.year,
    }
    if req.name:
        params['t'] = req.name
    elif req.id:
        params['i'] = req.id
    else:
        raise MissingCriteria("Missing one of req.id or req.name")
    return _drop_none(params)


def build_search_params(req, opts, page: int = 1) -> Dict[str, Any]:
    api_key = _require_api_key(opts)
    return _drop_none({
        'apikey': api_key,
        'page': page,
        'r': 'json',
        's': req.title,
        'type': req.reqtype,
        'y': req.year,
    })


def build_season_params(imdbid: str, season: int, opts) -> Dict[str, Any]:
    api_key = _require_api_key(opts)
    return {
        'Season': season,
        'apikey': api_key,
        'i': imdbid,
        'r': 'json',
    }


def _request_kwargs(opts) -> Dict[str, Any]:
    # opts.timeout is in milliseconds, httpx wants seconds
    if opts is not None and opts.timeout is not None:
        return {'timeout': opts.timeout / 1000}
    return {}


@asynccontextmanager
async def client_scope(
    client: Optional[httpx.AsyncClient] = None
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client, or open a fresh one for the duration."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient() as owned:
        yield owned


async def fetch_json(
    client: httpx.AsyncClient,
    params: Dict[str, Any],
    opts
) -> Dict[str, Any]:
    """
    Issue one GET against OMDb and decode the JSON body.

    Transport and HTTP status errors from httpx propagate unchanged.

    :param client: HTTP client for making API requests.
    :param params: Query parameters from one of the builders.
    :param opts: MovieOpts, used for the per-request timeout.
    :return: Decoded JSON object.
    """
    logger.debug("GET %s %s", OMDB_BASE_URL,
                 {k: v for k, v in params.items() if k != 'apikey'})
    resp = await client.get(OMDB_BASE_URL, params=params, **_request_kwargs(opts))
    resp.raise_for_status()
    return resp.json()


def with_callback(func: Callable) -> Callable:
    """
    Let a coroutine deliver its outcome to ``callback(err, data)`` instead of
    returning or raising. Exactly one of the two paths is used per call.
    """
    @functools.wraps(func)
    async def wrapper(*args, callback: Optional[Callable] = None, **kwargs):
        if callback is None:
            return await func(*args, **kwargs)
        try:
            result = await func(*args, **kwargs)
        except Exception as err:
            outcome = callback(err, None)
        else:
            outcome = callback(None, result)
        if inspect.isawaitable(outcome):
            await outcome
        return None
    return wrapper
