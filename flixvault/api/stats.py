"""Statistics API routes"""

from fastapi import APIRouter, Depends, HTTPException

from ..api.errors import to_http_exception
from ..api.lists import get_list_service
from ..exceptions import WatchlistError
from ..schemas.stats import StatisticsSnapshot
from ..services.list_service import ListService
from ..services.log_service import log_service
from ..services.stats_service import aggregate

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=StatisticsSnapshot)
async def stats_get(service: ListService = Depends(get_list_service)):
    """
    Get statistics for the current user's lists
    """
    try:
        collection, created_at = await service.snapshot()
        return aggregate(collection, created_at)
    except WatchlistError as e:
        raise to_http_exception(e)
    except Exception as e:
        log_service.error(f"Failed to load statistics: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to load statistics")
