from fastapi import FastAPI, HTTPException, Depends
from .schemas.imdb_schemas import MovieOpts, MovieRequest, SearchRequest, TVShow, ErrorResponse
from .clients.imdb_client import get_req, search, episodes
from .errors import MissingApiKey, MissingCriteria, RemoteError, TitleNotSeries

app = FastAPI()

ERROR_RESPONSES = {
    400: {'model': ErrorResponse},
    404: {'model': ErrorResponse},
    502: {'model': ErrorResponse},
}


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, (MissingApiKey, MissingCriteria)):
        return HTTPException(status_code=400, detail=exc.message)
    if isinstance(exc, (RemoteError, TitleNotSeries)):
        return HTTPException(status_code=404, detail=exc.message)
    return HTTPException(status_code=502, detail=f"OMDb service error: {str(exc)}")


@app.get('/titles', responses=ERROR_RESPONSES)
async def get_title(params: MovieRequest = Depends()):
    try:
        return await get_req(params, MovieOpts.from_settings())
    except Exception as e:
        raise _http_error(e)


@app.get('/titles/{imdbid}/episodes', responses=ERROR_RESPONSES)
async def get_episodes(imdbid: str):
    opts = MovieOpts.from_settings()
    try:
        show = await get_req(MovieRequest(id=imdbid), opts)
        if not isinstance(show, TVShow):
            raise TitleNotSeries(f"{imdbid} is not a series")
        return await episodes(show)
    except Exception as e:
        raise _http_error(e)


@app.get('/search', responses=ERROR_RESPONSES)
async def search_titles(params: SearchRequest = Depends(), page: int = 1):
    try:
        return await search(params, MovieOpts.from_settings(), page)
    except Exception as e:
        raise _http_error(e)
