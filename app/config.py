"""the beautiful world start from here."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in TRUTHY


def parse_channels(raw: str) -> dict[str, str]:
    """
    Parse ``repo=url`` pairs separated by commas.

    Example
    -------
    'api=https://discord.com/api/webhooks/1/a,web=https://...' →
    {'api': 'https://discord.com/api/webhooks/1/a', 'web': 'https://...'}
    """
    channels: dict[str, str] = {}
    for item in (raw or "").split(","):
        repo, sep, url = item.partition("=")
        if not sep or not repo.strip() or not url.strip():
            continue
        channels[repo.strip()] = url.strip()
    return channels


@dataclass(frozen=True)
class Settings:
    """App Settings"""

    skip_repo_push_messages: bool = field(
        default_factory=lambda: _env_flag("SKIP_REPO_PUSH_MESSAGES")
    )
    webhook_secret: str = field(
        default_factory=lambda: os.getenv("BITBUCKET_WEBHOOK_SECRET", "")
    )
    default_webhook_url: str = field(
        default_factory=lambda: os.getenv("DISCORD_WEBHOOK_URL", "")
    )
    channel_webhooks: dict[str, str] = field(
        default_factory=lambda: parse_channels(os.getenv("DISCORD_CHANNELS", ""))
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    def webhook_for(self, repository: str) -> Optional[str]:
        """Discord webhook URL for a repository, or the default one."""
        return self.channel_webhooks.get(repository) or self.default_webhook_url or None


settings = Settings()
