"""Pydantic data models used by the FastAPI layer.

Request bodies are parsed by hand in the routes so that malformed input maps
to the 400 responses the browser client expects; these schemas describe the
response surface and document the request shapes.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class Reminder(BaseModel):
    """A stored reminder. Keys beyond the required ones pass through untouched."""

    model_config = ConfigDict(extra="allow")

    id: str
    title: Any
    day: Any
    month: Any
    year: Any


class DeleteResponse(BaseModel):
    ok: bool = True


class StatusResponse(BaseModel):
    status: str = "ok"
    message: str


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
