"""Unit tests for Discord webhook delivery."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest
from fastapi import HTTPException

from app.embed import Embed, EmbedColor, EmbedField
from app.services.discord import send_embed

WEBHOOK_URL = "https://discord.test/api/webhooks/1/token"

EMBED = Embed(
    title="Push happened",
    color=EmbedColor.SUCCESS,
    fields=(EmbedField("Number of commits", "2"),),
)


def _deliver(status_code: int) -> list[httpx.Request]:
    seen: list[httpx.Request] = []

    def respond(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status_code, text="rate limited" if status_code >= 300 else "")

    async def run() -> None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(respond)) as client:
            await send_embed(WEBHOOK_URL, EMBED, client=client)

    asyncio.run(run())
    return seen


def test_posts_embed_payload() -> None:
    seen = _deliver(204)

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == WEBHOOK_URL
    assert json.loads(request.content) == {"embeds": [EMBED.to_dict()]}


def test_error_status_raises() -> None:
    with pytest.raises(HTTPException) as excinfo:
        _deliver(429)

    assert excinfo.value.status_code == 502
    assert "429" in excinfo.value.detail
