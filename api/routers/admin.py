from __future__ import annotations

from fastapi import APIRouter, Depends

from api.dependencies import get_request_log
from api.state import RequestLog

router = APIRouter(tags=["admin"])


@router.get("/admin")
async def admin(request_log: RequestLog = Depends(get_request_log)):
    return {
        "name": "CoinThis Admin",
        "uptime": round(request_log.uptime, 2),
        "stats": request_log.stats(),
        "recentRequests": request_log.entries(limit=50),
    }
