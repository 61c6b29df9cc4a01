"""Movie metadata proxy routes"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..api.errors import to_http_exception
from ..config import settings
from ..exceptions import UpstreamUnavailableError
from ..services.log_service import log_service
from ..services.omdb_service import OMDbLookupError, OMDbService

# Path the web client already calls for metadata lookups
router = APIRouter(prefix="/api/tmdb", tags=["movies"])


class MovieLookup(BaseModel):
    """Lookup parameters forwarded to OMDb"""

    title: Optional[str] = None
    imdb: Optional[str] = None
    year: Optional[str] = None
    plot: str = "full"
    type: Optional[str] = None


async def get_omdb_service():
    """OMDb client for the duration of one request"""
    omdb = OMDbService(settings.OMDB_API_KEY)
    try:
        yield omdb
    finally:
        await omdb.close()


async def _proxy(lookup: MovieLookup, omdb: OMDbService):
    try:
        return await omdb.lookup(**lookup.model_dump())
    except OMDbLookupError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except UpstreamUnavailableError as e:
        log_service.error(f"OMDb proxy error: {e.message}")
        raise to_http_exception(e)


@router.get("")
async def lookup_movie_get(
    title: Optional[str] = Query(None),
    imdb: Optional[str] = Query(None),
    year: Optional[str] = Query(None),
    plot: str = Query("full"),
    type: Optional[str] = Query(None),
    omdb: OMDbService = Depends(get_omdb_service),
):
    """Look up a movie (query parameters)"""
    lookup = MovieLookup(title=title, imdb=imdb, year=year, plot=plot, type=type)
    return await _proxy(lookup, omdb)


@router.post("")
async def lookup_movie_post(
    lookup: MovieLookup, omdb: OMDbService = Depends(get_omdb_service)
):
    """Look up a movie (JSON body)"""
    return await _proxy(lookup, omdb)
