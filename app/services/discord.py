"""Yet another discord services"""

from __future__ import annotations

from typing import Optional

import httpx
from fastapi import HTTPException

from app.embed import Embed

HTTP_TIMEOUT_SECONDS = 15


async def send_embed(
    webhook_url: str,
    embed: Embed,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> None:
    """Post a single embed to a Discord channel webhook."""
    payload = {"embeds": [embed.to_dict()]}
    if client is None:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as own_client:
            resp = await own_client.post(webhook_url, json=payload)
    else:
        resp = await client.post(webhook_url, json=payload)
    if resp.status_code >= 300:
        raise HTTPException(502, f"Discord error: {resp.status_code} {resp.text}")
