"""
Base Repository - Nine-Box Talent Review
ninebox/repositories/base.py

JSON document store and the base repository class shared by every collection.

The whole document is read and written per operation. Read-modify-write cycles
are serialized inside the process by a lock and written through a temporary
file plus atomic rename; separate processes remain last-write-wins.
"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List, Optional, Union
from uuid import uuid4

from ninebox.core.exceptions import (
    CorruptDocumentException,
    DatabaseConnectionException,
)

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "employees", "assessments", "companies", "questions")

Document = Dict[str, Any]


class JsonDocumentStore:
    """Single JSON file with top-level collections plus a settings object."""

    def __init__(
        self,
        path: Union[str, Path],
        seed_factory: Optional[Callable[[], Document]] = None,
    ):
        self.path = Path(path)
        self.seed_factory = seed_factory
        self._lock = threading.RLock()

    def _empty_document(self) -> Document:
        document: Document = {name: [] for name in COLLECTIONS}
        document["settings"] = {}
        return document

    def _initialize(self) -> None:
        """Create the file (and parent directory) with seed data."""
        document = self.seed_factory() if self.seed_factory else self._empty_document()
        logger.info(f"Initializing document store at {self.path}")
        self._write(document)

    def _write(self, document: Document) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    json.dump(document, tmp, ensure_ascii=False, indent=2, default=str)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise DatabaseConnectionException(f"Failed to write {self.path}: {e}")

    def read(self) -> Document:
        """Load the whole document, creating it on first access."""
        with self._lock:
            if not self.path.exists():
                self._initialize()
            try:
                with self.path.open("r", encoding="utf-8") as fh:
                    document = json.load(fh)
            except OSError as e:
                raise DatabaseConnectionException(f"Failed to read {self.path}: {e}")
            except json.JSONDecodeError as e:
                raise CorruptDocumentException(f"{self.path} is not valid JSON: {e}")

        if not isinstance(document, dict):
            raise CorruptDocumentException(f"{self.path} does not hold a JSON object")

        # Older documents may lack collections added later
        for name in COLLECTIONS:
            document.setdefault(name, [])
        document.setdefault("settings", {})
        return document

    def write(self, document: Document) -> None:
        with self._lock:
            self._write(document)

    @contextmanager
    def transaction(self) -> Generator[Document, None, None]:
        """Read the document, yield it for mutation, write it back on success."""
        with self._lock:
            document = self.read()
            yield document
            self._write(document)

    def is_healthy(self) -> bool:
        try:
            self.read()
            return True
        except (DatabaseConnectionException, CorruptDocumentException):
            return False


class BaseRepository:
    """Base repository over one collection of the JSON document store."""

    COLLECTION: str = ""

    def __init__(self, store: JsonDocumentStore):
        self.store = store

    def new_id(self, prefix: str = "") -> str:
        return f"{prefix}{uuid4()}"

    def find(self, document: Document, entity_id: str, collection: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Return the record with ``entity_id`` from a loaded document."""
        for record in document[collection or self.COLLECTION]:
            if record.get("id") == entity_id:
                return record
        return None

    def get_all_records(self) -> List[Dict[str, Any]]:
        return [dict(r) for r in self.store.read()[self.COLLECTION]]

    def get_record(self, entity_id: str) -> Optional[Dict[str, Any]]:
        record = self.find(self.store.read(), entity_id)
        return dict(record) if record else None

    def exists(self, entity_id: str) -> bool:
        return self.get_record(entity_id) is not None

    def now_iso(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def normalize_timestamp(self, value: Optional[Union[str, datetime]]) -> Optional[datetime]:
        """Parse a stored timestamp and ensure it is UTC-aware."""
        if value is None:
            return None
        dt = datetime.fromisoformat(value.replace("Z", "+00:00")) if isinstance(value, str) else value
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
