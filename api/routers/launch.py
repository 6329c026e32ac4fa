"""Launch endpoint: validate the coin request, scrape the URL, summarize.

Responses are plain text so that phone shortcuts can show them as-is. No
on-chain work happens here.
"""

from __future__ import annotations

import json
import logging
import re

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from api.dependencies import client_ip, get_dispatcher, get_launch_cooldown, get_request_log
from api.state import LaunchCooldown, RequestLog
from api.wallet import is_valid_solana_address
from config.settings import settings
from scrapers.dispatcher import ScrapeDispatcher

log = logging.getLogger(__name__)

router = APIRouter(tags=["launch"])

_TICKER_RE = re.compile(r"[A-Za-z0-9]{1,10}")
NAME_MAX_LENGTH = 30


def _text(message: str, status_code: int = 200) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status_code)


def _field(body: dict, key: str) -> str:
    return str(body.get(key) or "").strip()


def _parse_body(raw: str) -> dict | None:
    """Shortcuts send either JSON or JSON-as-text; both arrive here as text."""
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        return None
    return body if isinstance(body, dict) else {}


def format_launch(name: str, ticker: str, source: str, wallet: str) -> str:
    wallet_line = f"\nCreator Wallet: {wallet[:4]}...{wallet[-4:]}" if wallet else ""
    return f"COIN LAUNCHED\n\nName: {name}\nTicker: ${ticker}\nSource: {source}{wallet_line}"


def validate_launch(wallet: str, url: str, ticker: str, name: str) -> str | None:
    """Error message for the first invalid field, or None."""
    if wallet and not is_valid_solana_address(wallet):
        return "Error: Invalid Solana wallet address"
    if not url:
        return "Error: URL is required"
    if not ticker:
        return "Error: Ticker is required"
    if not name:
        return "Error: Name is required"
    if not _TICKER_RE.fullmatch(ticker):
        return (
            "Error: Ticker must be 1-10 letters/numbers, no spaces\n"
            f'Received: "{ticker}" ({len(ticker)} chars)'
        )
    if len(name) > NAME_MAX_LENGTH:
        return f"Error: Name must be {NAME_MAX_LENGTH} characters or less"
    return None


@router.post("/launch")
async def launch(
    request: Request,
    dispatcher: ScrapeDispatcher = Depends(get_dispatcher),
    request_log: RequestLog = Depends(get_request_log),
    cooldown: LaunchCooldown = Depends(get_launch_cooldown),
):
    ip = client_ip(request)
    if not cooldown.allow(ip):
        wait = int(settings.LAUNCH_COOLDOWN_SECONDS)
        return _text(f"Too many requests. Wait {wait} seconds between launches.", 429)

    try:
        raw = (await request.body()).decode("utf-8", errors="replace")
        body = _parse_body(raw)
        if body is None:
            return _text(f"Error: Invalid JSON\nReceived: {raw[:200]}", 400)

        wallet = _field(body, "wallet")
        url = _field(body, "url")
        ticker = _field(body, "ticker")
        name = _field(body, "name")

        error = validate_launch(wallet, url, ticker, name)
        if error:
            return _text(error, 400)

        log.info(
            "Launching coin - URL: %s, Ticker: %s, Name: %s, Wallet: %s",
            url, ticker, name, wallet or "none",
        )

        result = await dispatcher.scrape(url)
        if not result.success:
            return _text(f"Error: Couldn't fetch that URL\n{result.error}", 422)

        source = result.source.value
        coin = {
            "ticker": ticker.upper(),
            "name": name[:NAME_MAX_LENGTH],
            "image": result.data.get("image"),
            "description": result.data.get("description") or f"Coined from {source}",
            "source": source,
            "originalUrl": url,
            "wallet": wallet or None,
        }

        request_log.record(
            endpoint="/launch",
            ip=ip,
            wallet=coin["wallet"],
            url=url,
            ticker=coin["ticker"],
            name=coin["name"],
            image=coin["image"],
            success=True,
            source=source,
        )

        return _text(format_launch(coin["name"], coin["ticker"], source, wallet))
    except Exception as e:
        log.exception("Launch failed unexpectedly")
        return _text(f"Error: Something went wrong\n{e}", 500)
