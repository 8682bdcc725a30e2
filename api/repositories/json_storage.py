"""
JSON-based persistence adapters.

Each entity collection lives in its own file holding a single JSON array.
Services only see the CollectionStore interface, so tests can swap in the
in-memory variant without touching handler logic.
"""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Iterable, Protocol
import json
import logging
import threading

logger = logging.getLogger(__name__)

COLLECTION_FILES = {
    "users": "users.json",
    "suppliers": "supplier.json",
    "stores": "store.json",
    "products": "product.json",
    "orders": "order.json",
    "campaigns": "campaign.json",
}


class CollectionStore(Protocol):
    """Read-all / write-all access to one collection."""

    lock: threading.Lock

    def read_all(self) -> list[dict]:
        ...

    def write_all(self, records: Iterable[dict]) -> None:
        ...


class JsonCollectionStore:
    """Collection persisted as a pretty-printed JSON array on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.lock = threading.Lock()

    def read_all(self) -> list[dict]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("Creating empty collection file %s", self.path)
            self.write_all([])
            return []
        parsed = json.loads(raw or "[]")
        return parsed if isinstance(parsed, list) else []

    def write_all(self, records: Iterable[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(list(records), ensure_ascii=False, indent=2), encoding="utf-8")


class InMemoryCollectionStore:
    """Same contract as JsonCollectionStore, kept in process memory."""

    def __init__(self, records: Iterable[dict] | None = None) -> None:
        self._records = deepcopy(list(records or []))
        self.lock = threading.Lock()

    def read_all(self) -> list[dict]:
        return deepcopy(self._records)

    def write_all(self, records: Iterable[dict]) -> None:
        self._records = deepcopy(list(records))


def json_stores(data_dir: Path | str) -> dict[str, JsonCollectionStore]:
    """Build one file-backed store per collection under data_dir."""
    base = Path(data_dir)
    return {name: JsonCollectionStore(base / filename) for name, filename in COLLECTION_FILES.items()}
