"""the beautiful world start from here."""

from __future__ import annotations

from fastapi import FastAPI

from app.config import settings
from app.log import configure_logging
from app.routers import bitbucket, info

configure_logging(settings.log_level)

app = FastAPI(title="Bitbucket → Discord")

app.include_router(info.router)
app.include_router(bitbucket.router)
