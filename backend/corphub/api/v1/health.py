"""
Health check endpoints for CorpHub.
"""

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from corphub.database.session import ping

router = APIRouter()


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """
    Liveness check - always returns 200 if the app is running.
    """
    return {
        "alive": True,
        "timestamp": datetime.now().isoformat()
    }


@router.get("/ready")
async def readiness_check():
    """
    Readiness check - 200 when the database answers, 503 otherwise.
    """
    database_ok = await ping()
    body = {
        "ready": database_ok,
        "checks": {"database": "ok" if database_ok else "unavailable"},
        "timestamp": datetime.now().isoformat(),
    }
    if not database_ok:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return body
