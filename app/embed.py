"""Renderer-agnostic notification message (maps 1:1 onto a Discord embed)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional

from app.utils import truncate

# Discord rejects embeds over these lengths with HTTP 400.
TITLE_LIMIT = 256
DESCRIPTION_LIMIT = 4096
AUTHOR_NAME_LIMIT = 256
FIELD_NAME_LIMIT = 256
FIELD_VALUE_LIMIT = 1024
ELLIPSIS = "..."


def _clamp(text: str, limit: int) -> str:
    return truncate(text, limit, limit - len(ELLIPSIS), ELLIPSIS)


class EmbedColor(IntEnum):
    SUCCESS = 0x90EE90
    FAILURE = 0xD10000
    PR_CREATED = 0x89CFF0
    PR_UPDATED = 0x0047AB
    GRAY = 0x979797


@dataclass(frozen=True)
class EmbedAuthor:
    name: str
    icon_url: str = ""


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str


@dataclass(frozen=True)
class Embed:
    """A fully assembled notification."""

    title: str
    color: EmbedColor
    author: Optional[EmbedAuthor] = None
    description: str = ""
    url: str = ""
    fields: tuple[EmbedField, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Discord embed object, with every text part cut to Discord's limits."""
        data: dict[str, Any] = {
            "title": _clamp(self.title, TITLE_LIMIT),
            "color": int(self.color),
        }
        if self.author is not None:
            author: dict[str, Any] = {"name": _clamp(self.author.name, AUTHOR_NAME_LIMIT)}
            if self.author.icon_url:
                author["icon_url"] = self.author.icon_url
            data["author"] = author
        if self.description:
            data["description"] = _clamp(self.description, DESCRIPTION_LIMIT)
        if self.url:
            data["url"] = self.url
        if self.fields:
            data["fields"] = [
                {
                    "name": _clamp(item.name, FIELD_NAME_LIMIT),
                    "value": _clamp(item.value, FIELD_VALUE_LIMIT),
                }
                for item in self.fields
            ]
        return data
