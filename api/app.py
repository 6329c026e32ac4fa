from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import admin, launch, scrape
from api.state import LaunchCooldown, RequestLog
from config.settings import settings
from scrapers.dispatcher import ScrapeDispatcher

log = logging.getLogger(__name__)

APP_NAME = "CoinThis API"
APP_VERSION = "1.0.0"


def create_app(dispatcher: ScrapeDispatcher | None = None) -> FastAPI:
    app = FastAPI(title=APP_NAME, version=APP_VERSION)
    app.state.dispatcher = dispatcher or ScrapeDispatcher()
    app.state.request_log = RequestLog(settings.REQUEST_LOG_SIZE)
    app.state.launch_cooldown = LaunchCooldown(settings.LAUNCH_COOLDOWN_SECONDS)

    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(scrape.router)
    app.include_router(launch.router)
    app.include_router(admin.router)

    @app.get("/")
    async def index():
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "status": "running",
            "endpoints": {
                "POST /scrape": "Scrape metadata from any URL",
                "POST /launch": "Scrape + launch coin",
                "GET /admin": "Recent request statistics",
            },
        }

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    log.debug("App created with CORS origins %s", origins)
    return app
