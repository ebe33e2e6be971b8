"""Ruter Ingfo?"""

from __future__ import annotations

from textwrap import dedent

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.services.bitbucket import EventKind

router = APIRouter()

HTTP_HELP_TEXT = dedent(
    """
Bitbucket → Discord Notifier (HTTP Help)

Endpoints
---------
- GET  /           : Health check
- GET  /help       : This text
- POST /bitbucket  : Bitbucket webhook (X-Event-Key, X-Hub-Signature)

Supported events
----------------
{events}
"""
).strip()


@router.get("/", response_class=PlainTextResponse)
def health() -> str:
    return "ok"


@router.get("/help", response_class=PlainTextResponse)
def http_help() -> str:
    """Endpoint and event overview."""
    events = "\n".join(f"- {kind.value}" for kind in EventKind)
    return HTTP_HELP_TEXT.format(events=events)
