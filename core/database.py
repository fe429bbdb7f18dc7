"""Record store construction and request-scoped access."""

from typing import Optional

from fastapi import Request

from core.seed import SEED_DATA
from core.settings import Settings, get_settings
from modules.catalog.service import RecordStore


def create_store(settings: Optional[Settings] = None) -> RecordStore:
    """Build a fresh store loaded with the demo seed data."""
    return RecordStore(settings or get_settings(), seed=SEED_DATA)


def get_store(request: Request) -> RecordStore:
    return request.app.state.store
