"""Construction of the objects the routes receive through ``Depends``."""

from __future__ import annotations

from functools import lru_cache

from api.services.reminder_service import ReminderService
from api.services.reminder_store import ReminderStore
from core.settings import get_settings


@lru_cache(maxsize=1)
def get_reminder_service() -> ReminderService:
    """Return the process-wide service bound to the configured data file."""

    settings = get_settings()
    store = ReminderStore(settings.data_file, strict_load=settings.strict_load)
    return ReminderService(store)
