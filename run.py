"""Start the reminders API with uvicorn."""

from __future__ import annotations


def main() -> None:
    """Serve ``api.main:app`` on the configured host and port."""

    import uvicorn

    from core.settings import get_settings

    settings = get_settings()
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
