from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_reminder_service
from api.main import app
from api.services.reminder_service import ReminderService
from api.services.reminder_store import ReminderStore


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "reminders.json"


@pytest.fixture
def store(data_file: Path) -> ReminderStore:
    return ReminderStore(data_file)


@pytest.fixture
def service(store: ReminderStore) -> ReminderService:
    return ReminderService(store)


@pytest.fixture
def client(service: ReminderService) -> Iterator[TestClient]:
    app.dependency_overrides[get_reminder_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
