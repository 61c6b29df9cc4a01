"""Watchlist API routes"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ..api.auth import get_current_user
from ..api.errors import to_http_exception
from ..database import get_db
from ..exceptions import WatchlistError
from ..models.user import User
from ..schemas.lists import ListsResponse, ListUpsert, TrackingStatus
from ..services.list_service import DatabaseListBackend, ListService
from ..services.log_service import log_service

router = APIRouter(prefix="/api/lists", tags=["lists"])


async def get_list_service(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ListService:
    """List service scoped to the authenticated user"""
    return ListService(DatabaseListBackend(db), current_user.id)


@router.get("", response_model=ListsResponse)
async def list_all(service: ListService = Depends(get_list_service)):
    """Get all five lists"""
    try:
        return ListsResponse(lists=await service.get_all())
    except WatchlistError as e:
        raise to_http_exception(e)
    except Exception as e:
        log_service.error(f"Failed to load lists: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to load lists")


@router.post("", response_model=ListsResponse)
async def list_upsert(
    body: ListUpsert, service: ListService = Depends(get_list_service)
):
    """
    Add a movie to a list, moving it out of any other list
    """
    try:
        return ListsResponse(lists=await service.upsert(body.list_type, body.movie))
    except WatchlistError as e:
        raise to_http_exception(e)
    except Exception as e:
        log_service.error(f"Failed to update list: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update list")


@router.delete("/{list_type}/{imdb_id}", response_model=ListsResponse)
async def list_remove(
    list_type: str, imdb_id: str, service: ListService = Depends(get_list_service)
):
    """
    Remove a movie from one list, or from every list with list_type "all"
    """
    try:
        return ListsResponse(lists=await service.remove(list_type, imdb_id))
    except WatchlistError as e:
        raise to_http_exception(e)
    except Exception as e:
        log_service.error(f"Failed to remove list item: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to remove movie from list")


@router.get("/status/{imdb_id}", response_model=TrackingStatus)
async def list_status(imdb_id: str, service: ListService = Depends(get_list_service)):
    """Which list, if any, holds a movie"""
    try:
        category = await service.category_of(imdb_id)
    except WatchlistError as e:
        raise to_http_exception(e)
    except Exception as e:
        log_service.error(f"Failed to look up list status: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to look up list status")

    return TrackingStatus(
        imdb_id=imdb_id, tracked=category is not None, list_type=category
    )
