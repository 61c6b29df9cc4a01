"""System API routes (health, logs)"""

from fastapi import APIRouter, Depends, HTTPException, Query

from .. import __version__
from ..api.auth import get_current_admin
from ..config import settings as app_settings
from ..models.user import User
from ..services.log_service import log_service

router = APIRouter(tags=["system"])


@router.get("/api/health")
async def health_check():
    """Liveness check"""
    return {"status": "ok", "message": "FlixVault server is running!"}


@router.get("/api/system/status")
async def system_status():
    """Basic system status check"""
    return {
        "status": "ok",
        "version": __version__,
        "data_dir": str(app_settings.DATA_DIR),
        "logs_dir": str(app_settings.LOGS_DIR),
        "omdb_configured": bool(app_settings.OMDB_API_KEY),
    }


@router.get("/api/system/logs")
async def get_logs(
    type: str = Query("error", pattern="^(error|info)$"),
    limit: int = Query(100, ge=1, le=1000),
    current_user: User = Depends(get_current_admin),
):
    """Get recent log entries"""
    try:
        logs = log_service.get_logs(type, limit)
        return {"log_type": type, "lines": logs, "count": len(logs)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
