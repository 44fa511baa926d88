"""HTTP routes for listing, adding and deleting reminders.

Bodies are read and decoded here rather than through a Pydantic request model:
an empty body or broken JSON must answer 400 with a reason the browser client
can show, not FastAPI's 422 validation payload. Everything else is delegated to
the injected ``ReminderService`` and its errors propagate to the handler
registered in ``api.main``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from api.dependencies import get_reminder_service
from api.models.schemas import DeleteResponse, ErrorResponse, Reminder
from api.services.errors import EmptyBodyError, InvalidJSONError
from api.services.reminder_service import ReminderService

router = APIRouter(prefix="/api", tags=["reminders"])

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/reminders", response_model=None, responses={200: {"model": List[Reminder]}})
def list_reminders(service: ReminderService = Depends(get_reminder_service)) -> List[Dict[str, Any]]:
    """Return every stored reminder in insertion order."""

    return service.list()


@router.post("/add", response_model=None, responses={200: {"model": Reminder}, **_ERRORS})
async def add_reminder(
    request: Request, service: ReminderService = Depends(get_reminder_service)
) -> Dict[str, Any]:
    """Store a reminder and return it with its assigned id."""

    payload = await _read_json(request)
    return await run_in_threadpool(service.add, payload)


@router.post("/delete", response_model=DeleteResponse, responses=_ERRORS)
async def delete_reminder(
    request: Request, service: ReminderService = Depends(get_reminder_service)
) -> DeleteResponse:
    """Remove the first reminder whose id matches ``{"id": ...}``."""

    payload = await _read_json(request)
    reminder_id = payload.get("id") if isinstance(payload, dict) else None
    await run_in_threadpool(service.delete, reminder_id)
    return DeleteResponse(ok=True)


async def _read_json(request: Request) -> Any:
    body = await request.body()
    if not body:
        raise EmptyBodyError()
    try:
        payload = json.loads(body, parse_constant=_reject_constant)
        # Lone surrogates decode fine but cannot be written out as UTF-8.
        json.dumps(payload, ensure_ascii=False).encode("utf-8")
    except ValueError as exc:
        raise InvalidJSONError(detail=str(exc)) from exc
    return payload


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")
