from __future__ import annotations

from fastapi import Request

from api.state import LaunchCooldown, RequestLog
from scrapers.dispatcher import ScrapeDispatcher


def get_dispatcher(request: Request) -> ScrapeDispatcher:
    return request.app.state.dispatcher


def get_request_log(request: Request) -> RequestLog:
    return request.app.state.request_log


def get_launch_cooldown(request: Request) -> LaunchCooldown:
    return request.app.state.launch_cooldown


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"
