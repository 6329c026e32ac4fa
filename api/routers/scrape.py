from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.dependencies import client_ip, get_dispatcher, get_request_log
from api.state import RequestLog
from core.models import ScrapeRequest
from scrapers.dispatcher import ScrapeDispatcher

log = logging.getLogger(__name__)

router = APIRouter(tags=["scrape"])


@router.post("/scrape")
async def scrape(
    body: ScrapeRequest,
    request: Request,
    dispatcher: ScrapeDispatcher = Depends(get_dispatcher),
    request_log: RequestLog = Depends(get_request_log),
):
    url = (body.url or "").strip()
    if not url:
        return JSONResponse({"success": False, "error": "URL is required"}, status_code=400)

    try:
        log.info("Scraping URL: %s", url)
        result = await dispatcher.scrape(url)
    except Exception as e:
        log.exception("Scrape failed unexpectedly for %s", url)
        return JSONResponse(
            {"success": False, "error": "Internal server error", "message": str(e)},
            status_code=500,
        )

    request_log.record(
        endpoint="/scrape",
        ip=client_ip(request),
        url=url,
        success=result.success,
        source=result.source.value,
    )

    return JSONResponse(result.to_dict(), status_code=200 if result.success else 422)
