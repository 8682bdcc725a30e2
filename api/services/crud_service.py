"""
Generic list/get/create/update/delete use cases over one collection.

Each entity service subclasses CrudService and fills in the hooks:
``build`` (validate a create payload), ``changes`` (validate an update
payload), ``check_conflicts`` (uniqueness/overlap rule) and optionally
``present`` (strip sensitive fields before returning a record).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional
import logging
import uuid

from api.domain.fields import is_blank, parse_date
from api.repositories.json_storage import CollectionStore
from api.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

Record = dict
Payload = Mapping[str, Any]


@dataclass(frozen=True)
class QueryFilter:
    """One optional query-string filter applied by List."""

    param: str
    field: str
    match: Callable[[Any, str], bool]

    def apply(self, records: Iterable[Record], raw: Optional[str]) -> list[Record]:
        if not raw:
            return list(records)
        return [record for record in records if self.match(record.get(self.field), raw)]


def contains(param: str, field: Optional[str] = None) -> QueryFilter:
    """Case-insensitive substring match."""
    def _match(value: Any, raw: str) -> bool:
        return raw.lower() in str(value or "").lower()

    return QueryFilter(param, field or param, _match)


def equals(param: str, field: Optional[str] = None) -> QueryFilter:
    return QueryFilter(param, field or param, lambda value, raw: value == raw)


def _date_bound(param: str, field: str, *, lower: bool) -> QueryFilter:
    def _match(value: Any, raw: str) -> bool:
        bound = parse_date(raw)
        if bound is None:
            # unparseable bounds are ignored, not rejected
            return True
        current = parse_date(value)
        if current is None:
            return False
        return current >= bound if lower else current <= bound

    return QueryFilter(param, field, _match)


def date_from(param: str, field: str) -> QueryFilter:
    """Inclusive lower bound on a stored timestamp."""
    return _date_bound(param, field, lower=True)


def date_to(param: str, field: str) -> QueryFilter:
    """Inclusive upper bound on a stored timestamp."""
    return _date_bound(param, field, lower=False)


def require_fields(payload: Payload, fields: Iterable[str], message: str) -> None:
    """Raise ValidationError when any of fields is missing or empty."""
    if any(is_blank(payload.get(name)) for name in fields):
        raise ValidationError(message)


def require_text(payload: Payload, *fields: str) -> None:
    """Reject provided fields that are not strings."""
    for name in fields:
        if name in payload and payload[name] is not None and not isinstance(payload[name], str):
            raise ValidationError(f"{name} deve ser texto")


class CrudService:
    """Provides the shared read-all / mutate / write-all flow."""

    collection = "records"
    not_found_message = "Registro nao encontrado"
    filters: tuple[QueryFilter, ...] = ()

    def __init__(self, store: CollectionStore) -> None:
        self.store = store

    # -------------------------------------- hooks --------------------------------------
    def build(self, payload: Payload) -> Record:
        raise NotImplementedError

    def changes(self, payload: Payload, current: Record) -> Record:
        raise NotImplementedError

    def check_conflicts(self, records: list[Record], candidate: Record, exclude_id: Optional[str] = None) -> None:
        """Raise ConflictError when candidate clashes with another record."""

    def present(self, record: Record) -> Record:
        return record

    # -------------------------------------- helpers --------------------------------------
    def _new_id(self) -> str:
        return str(uuid.uuid4())

    def _index_of(self, records: list[Record], record_id: str) -> int:
        for idx, record in enumerate(records):
            if record.get("id") == record_id:
                return idx
        raise NotFoundError(self.not_found_message)

    # -------------------------------------- use cases --------------------------------------
    def list(self, query: Optional[Mapping[str, str]] = None) -> list[Record]:
        query = query or {}
        records = self.store.read_all()
        for query_filter in self.filters:
            records = query_filter.apply(records, query.get(query_filter.param))
        return [self.present(record) for record in records]

    def get(self, record_id: str) -> Record:
        records = self.store.read_all()
        return self.present(records[self._index_of(records, record_id)])

    def create(self, payload: Payload) -> Record:
        fields = self.build(payload)
        with self.store.lock:
            records = self.store.read_all()
            self.check_conflicts(records, fields)
            record = {"id": self._new_id(), **fields}
            records.append(record)
            self.store.write_all(records)
        logger.info("%s: created %s", self.collection, record["id"])
        return self.present(record)

    def update(self, record_id: str, payload: Payload) -> Record:
        with self.store.lock:
            records = self.store.read_all()
            idx = self._index_of(records, record_id)
            current = records[idx]
            candidate = {**current, **self.changes(payload, current)}
            self.check_conflicts(records, candidate, exclude_id=record_id)
            records[idx] = candidate
            self.store.write_all(records)
        logger.info("%s: updated %s", self.collection, record_id)
        return self.present(candidate)

    def delete(self, record_id: str) -> None:
        with self.store.lock:
            records = self.store.read_all()
            idx = self._index_of(records, record_id)
            records.pop(idx)
            self.store.write_all(records)
        logger.info("%s: deleted %s", self.collection, record_id)
