"""List, add and delete operations over the persisted reminder collection."""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Set

from api.services.errors import (
    DuplicateIdError,
    MissingFieldError,
    NotFoundError,
    PersistenceError,
    ShapeError,
)
from api.services.reminder_store import Collection, ReminderStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "day", "month", "year")


def make_id() -> str:
    """Timestamp in milliseconds followed by a random suffix, e.g. ``id17123456789042``."""

    millis = int(time.time() * 1000)
    return f"id{millis}{random.randrange(10000)}"


class ReminderService:
    """Read-modify-write cycles against a :class:`ReminderStore`.

    Every operation runs inside ``store.locked()`` so concurrent requests never
    interleave between loading the collection and saving it back.
    """

    def __init__(self, store: ReminderStore, id_factory: Callable[[], str] = make_id) -> None:
        self.store = store
        self._id_factory = id_factory

    def list(self) -> Collection:
        with self.store.locked():
            return self.store.load()

    def add(self, candidate: Any) -> Dict[str, Any]:
        reminder = self._validate(candidate)
        with self.store.locked():
            reminders = self.store.load()
            existing = _ids(reminders)
            if _is_blank(reminder.get("id")):
                reminder["id"] = self._fresh_id(existing)
            elif reminder["id"] in existing:
                raise DuplicateIdError(detail=reminder["id"])
            reminders.append(reminder)
            self.store.save(reminders)
        logger.info("Added reminder %s", reminder["id"])
        return reminder

    def delete(self, reminder_id: Any) -> None:
        if _is_blank(reminder_id):
            raise MissingFieldError("missing id")
        if not isinstance(reminder_id, str):
            raise ShapeError("invalid id", detail="id must be a string")
        with self.store.locked():
            reminders = self.store.load()
            index = _find(reminders, reminder_id)
            if index is None:
                raise NotFoundError(detail=reminder_id)
            del reminders[index]
            try:
                self.store.save(reminders)
            except PersistenceError as exc:
                raise PersistenceError("failed to save after delete", detail=exc.detail) from exc
        logger.info("Deleted reminder %s", reminder_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _validate(self, candidate: Any) -> Dict[str, Any]:
        if not isinstance(candidate, Mapping):
            raise ShapeError(detail="reminder must be a JSON object")
        missing = [name for name in REQUIRED_FIELDS if name not in candidate]
        if missing:
            raise ShapeError(detail=f"missing fields: {', '.join(missing)}")
        identifier = candidate.get("id")
        if identifier is not None and not isinstance(identifier, str):
            raise ShapeError(detail="id must be a string")
        return dict(candidate)

    def _fresh_id(self, existing: Set[str]) -> str:
        identifier = self._id_factory()
        while identifier in existing:
            identifier = self._id_factory()
        return identifier


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _ids(reminders: List[Any]) -> Set[str]:
    return {item["id"] for item in reminders if isinstance(item, dict) and isinstance(item.get("id"), str)}


def _find(reminders: List[Any], reminder_id: str) -> Optional[int]:
    for index, item in enumerate(reminders):
        if isinstance(item, dict) and item.get("id") == reminder_id:
            return index
    return None
