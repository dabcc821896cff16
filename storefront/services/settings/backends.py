"""
Persistence backends for the restaurant business rules.

Every backend honours the same contract:
- read() returns the stored BusinessRules, or None when nothing was ever written
- write(rules) persists the whole value (no partial patching)
- any I/O failure is raised as StorageUnavailable
"""
import os
import json
import logging
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, Callable

from pydantic import ValidationError as SchemaError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.core.errors import StorageUnavailable
from storefront.models import RestaurantSettings
from storefront.schemas.business_rules import BusinessRules

logger = logging.getLogger(__name__)


class SettingsBackend:
    """base settings backend interface."""

    name = "base"

    def read(self) -> Optional[BusinessRules]:  # pragma: no cover
        raise NotImplementedError

    def write(self, rules: BusinessRules) -> None:  # pragma: no cover
        raise NotImplementedError


class MemoryBackend(SettingsBackend):
    """process-local storage, for tests and ephemeral deployments."""

    name = "memory"

    def __init__(self, initial: Optional[BusinessRules] = None):
        # keep the serialized form so reads behave like a real store
        self._payload: Optional[str] = initial.model_dump_json() if initial else None
        self._lock = threading.Lock()

    def read(self) -> Optional[BusinessRules]:
        with self._lock:
            payload = self._payload
        if payload is None:
            return None
        return BusinessRules.model_validate_json(payload)

    def write(self, rules: BusinessRules) -> None:
        with self._lock:
            self._payload = rules.model_dump_json()


class JsonFileBackend(SettingsBackend):
    """whole-file JSON storage, rewritten atomically on every write."""

    name = "file"

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._lock = threading.Lock()

    def read(self) -> Optional[BusinessRules]:
        if not self.path.exists():
            return None
        try:
            raw = self.path.read_text(encoding="utf-8")
            return BusinessRules.model_validate_json(raw)
        except OSError as e:
            raise StorageUnavailable(f"Cannot read settings file {self.path}: {e}") from e
        except SchemaError as e:
            raise StorageUnavailable(f"Settings file {self.path} is corrupt") from e

    def write(self, rules: BusinessRules) -> None:
        data = json.dumps(rules.model_dump(mode="json"), indent=2, ensure_ascii=False)
        with self._lock:
            tmp_path = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".settings-", suffix=".json")
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(data)
                os.replace(tmp_path, self.path)
                tmp_path = None
            except OSError as e:
                raise StorageUnavailable(f"Cannot write settings file {self.path}: {e}") from e
            finally:
                if tmp_path and os.path.exists(tmp_path):
                    os.unlink(tmp_path)
        logger.debug(f"Settings written to {self.path}")


class DatabaseBackend(SettingsBackend):
    """single-row table holding the rules as JSON."""

    name = "database"
    ROW_ID = 1

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def read(self) -> Optional[BusinessRules]:
        try:
            with self.session_factory() as db:
                row = db.get(RestaurantSettings, self.ROW_ID)
                if row is None:
                    return None
                payload = row.payload
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"Cannot read settings from database: {e}") from e

        try:
            return BusinessRules.model_validate(payload)
        except SchemaError as e:
            raise StorageUnavailable("Stored settings row is corrupt") from e

    def write(self, rules: BusinessRules) -> None:
        try:
            with self.session_factory() as db:
                row = db.get(RestaurantSettings, self.ROW_ID)
                if row is None:
                    row = RestaurantSettings(id=self.ROW_ID)
                    db.add(row)
                row.payload = rules.model_dump(mode="json")
                row.updated_by = rules.updated_by
                row.updated_at = datetime.utcnow()
                db.commit()
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"Cannot write settings to database: {e}") from e
