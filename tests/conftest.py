from __future__ import annotations

import pytest

from app.config import Settings


@pytest.fixture()
def cfg() -> Settings:
    return Settings(
        skip_repo_push_messages=False,
        webhook_secret="",
        default_webhook_url="",
        channel_webhooks={},
        log_level="DEBUG",
    )
