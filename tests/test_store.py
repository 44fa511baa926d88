from __future__ import annotations

import json
from pathlib import Path

import pytest

from api.services import reminder_store
from api.services.errors import CorruptStateError, PersistenceError
from api.services.reminder_store import ReminderStore


REMINDER = {"id": "a", "title": "Pay bill", "day": 5, "month": 3, "year": 2025}


def test_load_creates_missing_file(store: ReminderStore, data_file: Path) -> None:
    assert store.load() == []
    assert json.loads(data_file.read_text(encoding="utf-8")) == []


def test_save_then_load(store: ReminderStore, data_file: Path) -> None:
    store.save([REMINDER])
    assert store.load() == [REMINDER]
    assert json.loads(data_file.read_text(encoding="utf-8")) == [REMINDER]
    assert not store.tmp_path.exists()


@pytest.mark.parametrize("content", ['[{"id": "a", "title"', '{"id": "a"}', "", "not json"])
def test_corrupt_storage_reads_as_empty(store: ReminderStore, data_file: Path, content: str) -> None:
    data_file.write_text(content, encoding="utf-8")
    assert store.load() == []


def test_strict_load_surfaces_corruption(data_file: Path) -> None:
    data_file.write_text('{"not": "a list"}', encoding="utf-8")
    with pytest.raises(CorruptStateError):
        ReminderStore(data_file, strict_load=True).load()


def test_interrupted_write_keeps_previous_content(
    store: ReminderStore, data_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    store.save([REMINDER])
    original_bytes = data_file.read_bytes()
    real_write = reminder_store._write_file

    def half_write(path: Path, payload: str) -> None:
        real_write(path, payload[: len(payload) // 2])
        raise OSError("disk full")

    monkeypatch.setattr(reminder_store, "_write_file", half_write)
    with pytest.raises(PersistenceError):
        store.save([REMINDER, dict(REMINDER, id="b")])

    assert data_file.read_bytes() == original_bytes
    assert json.loads(original_bytes) == [REMINDER]


def test_failed_rename_falls_back_to_overwrite(
    store: ReminderStore, data_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def refuse(src: object, dst: object) -> None:
        raise OSError("cross-device link")

    monkeypatch.setattr(reminder_store.os, "replace", refuse)
    store.save([REMINDER])

    assert json.loads(data_file.read_text(encoding="utf-8")) == [REMINDER]
    assert not store.tmp_path.exists()


def test_failed_rename_and_overwrite_raises(
    store: ReminderStore, monkeypatch: pytest.MonkeyPatch
) -> None:
    real_write = reminder_store._write_file

    def tmp_only(path: Path, payload: str) -> None:
        if path != store.tmp_path:
            raise PermissionError("read-only")
        real_write(path, payload)

    def refuse(src: object, dst: object) -> None:
        raise OSError("cross-device link")

    monkeypatch.setattr(reminder_store, "_write_file", tmp_only)
    monkeypatch.setattr(reminder_store.os, "replace", refuse)
    with pytest.raises(PersistenceError):
        store.save([REMINDER])


def test_independent_stores_do_not_share_state(tmp_path: Path) -> None:
    first = ReminderStore(tmp_path / "one.json")
    second = ReminderStore(tmp_path / "two.json")
    first.save([REMINDER])
    assert second.load() == []


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_save_refuses_non_json_numbers(store: ReminderStore, data_file: Path, value: float) -> None:
    store.save([REMINDER])
    before = data_file.read_bytes()

    with pytest.raises(PersistenceError):
        store.save([dict(REMINDER, title=value)])

    assert data_file.read_bytes() == before


def test_save_maps_unencodable_text_to_persistence_error(store: ReminderStore, data_file: Path) -> None:
    store.save([REMINDER])
    before = data_file.read_bytes()

    with pytest.raises(PersistenceError):
        store.save([dict(REMINDER, title="\ud800")])

    assert data_file.read_bytes() == before


def test_stored_non_json_constant_reads_as_corrupt(data_file: Path) -> None:
    data_file.write_text('[{"id": "a", "title": NaN}]', encoding="utf-8")
    assert ReminderStore(data_file).load() == []
    with pytest.raises(CorruptStateError):
        ReminderStore(data_file, strict_load=True).load()
