"""Ruter BB?"""

from __future__ import annotations

from fastapi import APIRouter, Header, HTTPException, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from app.config import settings
from app.services.bitbucket import handle
from app.services.discord import send_embed
from app.utils import bb_verify

router = APIRouter(prefix="/bitbucket", tags=["bitbucket"])


@router.post("", response_class=PlainTextResponse)
async def bitbucket_webhook(
    request: Request,
    x_event_key: str | None = Header(None),
    x_hub_signature: str | None = Header(None),
):
    """
    Bitbucket webhook endpoint.

    When ``BITBUCKET_WEBHOOK_SECRET`` is set the raw body must carry a valid
    ``X-Hub-Signature``. The event is rendered as an embed and forwarded to
    the Discord channel configured for its repository.
    """
    body = await request.body()
    if settings.webhook_secret and not bb_verify(
        settings.webhook_secret, body, x_hub_signature
    ):
        logger.warning("Rejected Bitbucket webhook with invalid signature")
        raise HTTPException(401, "Invalid signature")

    if not x_event_key:
        raise HTTPException(400, "Missing X-Event-Key header")

    repository, embed, error = handle(x_event_key, body, settings)
    if error is not None:
        logger.warning("Could not decode {} payload: {}", x_event_key, error)
        raise HTTPException(400, f"Invalid {x_event_key} payload: {error}")
    if embed is None:
        logger.debug("Nothing to send for {}", x_event_key)
        return "ignored"

    webhook_url = settings.webhook_for(repository)
    if not webhook_url:
        logger.info("No Discord channel configured for {}", repository)
        return f"no channel for {repository}"

    try:
        await send_embed(webhook_url, embed)
    except HTTPException as exc:
        logger.error("Delivery of {} for {} failed: {}", x_event_key, repository, exc.detail)
        raise
    logger.info("Forwarded {} for {}", x_event_key, repository)
    return f"{x_event_key} event forwarded to {repository}"
