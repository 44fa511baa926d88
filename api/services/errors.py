"""Error kinds raised by the reminder store and service.

Each class carries the HTTP status and the machine-readable ``reason`` the API
layer renders, so routes can let them propagate untouched.
"""

from __future__ import annotations

from typing import Optional


class ReminderError(Exception):
    status_code = 500
    reason = "internal error"

    def __init__(self, reason: Optional[str] = None, detail: Optional[str] = None) -> None:
        if reason is not None:
            self.reason = reason
        self.detail = detail
        super().__init__(self.reason if detail is None else f"{self.reason}: {detail}")


class InputError(ReminderError):
    """The client sent something unusable."""

    status_code = 400
    reason = "invalid input"


class EmptyBodyError(InputError):
    reason = "empty body"


class InvalidJSONError(InputError):
    reason = "invalid json"


class ShapeError(InputError):
    reason = "invalid reminder shape"


class MissingFieldError(InputError):
    reason = "missing field"


class NotFoundError(ReminderError):
    status_code = 404
    reason = "id not found"


class DuplicateIdError(ReminderError):
    status_code = 409
    reason = "duplicate id"


class PersistenceError(ReminderError):
    """Neither the atomic replace nor the direct overwrite succeeded."""

    reason = "failed to save"


class CorruptStateError(ReminderError):
    """The persisted collection could not be parsed as a JSON array."""

    reason = "corrupt storage"
