"""File-backed persistence for the reminder collection.

The whole collection lives in one JSON array on disk. Every read goes to the
file and every write replaces it in full, so the store holds no state besides
its path and its lock.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from api.services.errors import CorruptStateError, PersistenceError

logger = logging.getLogger(__name__)

Collection = List[Dict[str, Any]]


def _write_file(path: Path, payload: str) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(payload)
        handle.flush()
        os.fsync(handle.fileno())


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


class ReminderStore:
    """Mutually exclusive load and atomic-replace save of the collection."""

    def __init__(
        self,
        path: Path,
        *,
        lock: Optional[threading.RLock] = None,
        strict_load: bool = False,
    ) -> None:
        self.path = Path(path)
        self.strict_load = strict_load
        self._lock = lock if lock is not None else threading.RLock()

    @property
    def tmp_path(self) -> Path:
        return self.path.with_name(self.path.name + ".tmp")

    @contextlib.contextmanager
    def locked(self) -> Iterator[None]:
        """Hold exclusivity across a whole load-compute-save cycle."""

        with self._lock:
            yield

    def load(self) -> Collection:
        with self._lock:
            if not self.path.exists():
                self._initialise()
                return []
            try:
                return self._read()
            except CorruptStateError as exc:
                if self.strict_load:
                    raise
                logger.warning("Discarding unreadable reminder storage at %s: %s", self.path, exc.detail)
                return []

    def save(self, collection: Collection) -> None:
        with self._lock:
            try:
                payload = json.dumps(collection, indent=2, ensure_ascii=False, allow_nan=False)
            except (TypeError, ValueError) as exc:
                raise PersistenceError(detail=f"collection is not serializable: {exc}") from exc
            tmp_path = self.tmp_path
            try:
                _write_file(tmp_path, payload)
            except (OSError, ValueError) as exc:
                raise PersistenceError(detail=f"could not write {tmp_path}: {exc}") from exc
            try:
                os.replace(tmp_path, self.path)
            except OSError as exc:
                logger.warning("Atomic replace of %s failed (%s); overwriting in place", self.path, exc)
                try:
                    _write_file(self.path, payload)
                except (OSError, ValueError) as fallback_exc:
                    raise PersistenceError(detail=f"could not write {self.path}: {fallback_exc}") from fallback_exc
                with contextlib.suppress(OSError):
                    tmp_path.unlink()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _initialise(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            _write_file(self.path, "[]")
        except OSError as exc:
            # Absence still reads as an empty collection; the next save retries.
            logger.warning("Could not create reminder storage at %s: %s", self.path, exc)

    def _read(self) -> Collection:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"), parse_constant=_reject_constant)
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            raise CorruptStateError(detail=str(exc)) from exc
        if not isinstance(data, list):
            raise CorruptStateError(detail=f"expected a JSON array, found {type(data).__name__}")
        return data
