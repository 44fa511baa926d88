"""FastAPI application entrypoint for the reminders API."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from api.models.schemas import StatusResponse
from api.routes.reminders import router as reminders_router
from api.services.errors import ReminderError
from core.logging import setup_logging
from core.settings import get_settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the API with CORS, error mapping and the reminder routes."""

    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Cloud Reminders",
        version="0.1.0",
        description="Stores reminder records for the browser client in a single JSON file.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.include_router(reminders_router)

    @app.exception_handler(ReminderError)
    async def reminder_error_handler(request: Request, exc: ReminderError) -> JSONResponse:
        level = logging.WARNING if exc.status_code < 500 else logging.ERROR
        logger.log(level, "%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc)
        content = {"error": exc.reason}
        if exc.detail:
            content["detail"] = exc.detail
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.options("/{path:path}", include_in_schema=False)
    def preflight(path: str) -> PlainTextResponse:
        """Answer bare OPTIONS requests; real preflights are handled by the CORS middleware."""

        return PlainTextResponse("OK")

    @app.get("/", response_model=StatusResponse)
    def index() -> StatusResponse:
        """Simple readiness probe used by the client and deployment tooling."""

        return StatusResponse(status="ok", message="reminder server running")

    return app


app = create_app()
