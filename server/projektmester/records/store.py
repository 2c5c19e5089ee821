"""Keyed-collection persistence scoped by entity kind.

The store is deliberately dumb: it knows nothing about projects or
tasks, only about JSON objects with an ``id``. Every call is a complete
read or read-modify-write of one kind, committed before returning.
A single writer per kind is assumed; there is no locking or versioning.
"""

import copy
import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from projektmester.records.models import RecordKind, StoredRecord

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class RecordStoreError(Exception):
    """Base exception for record store errors."""
    pass


class UnknownKindError(RecordStoreError):
    """Raised when a kind is not one of the supported entity kinds."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown record kind: {kind!r}")


class InvalidRecordError(RecordStoreError):
    """Raised when a record cannot be stored (missing or duplicate id)."""
    pass


def _coerce_kind(kind: RecordKind | str) -> RecordKind:
    try:
        return RecordKind(kind)
    except ValueError as e:
        raise UnknownKindError(str(kind)) from e


def _record_id(record: Record) -> str:
    record_id = record.get("id") if isinstance(record, dict) else None
    if not isinstance(record_id, str) or not record_id:
        raise InvalidRecordError("Record must be an object with a non-empty string 'id'")
    return record_id


class RecordStore:
    """Record store backed by the ``records`` table.

    Returned records are deep copies; callers hold snapshots and must
    reload after any mutation.
    """

    def __init__(self, session: Session):
        self.session = session

    def _query(self, kind: RecordKind):
        return self.session.query(StoredRecord).filter(StoredRecord.kind == kind.value)

    def load_all(self, kind: RecordKind | str) -> list[Record]:
        """Return every record of a kind in stored order."""
        kind = _coerce_kind(kind)
        rows = self._query(kind).order_by(StoredRecord.position).all()
        return [copy.deepcopy(row.payload) for row in rows]

    def get(self, kind: RecordKind | str, record_id: str) -> Record | None:
        """Return a single record, or None if no record has that id."""
        kind = _coerce_kind(kind)
        row = self._query(kind).filter(StoredRecord.record_id == record_id).first()
        return copy.deepcopy(row.payload) if row else None

    def save_all(self, kind: RecordKind | str, records: list[Record]) -> None:
        """Replace the whole collection of a kind."""
        kind = _coerce_kind(kind)
        ids = [_record_id(r) for r in records]
        if len(set(ids)) != len(ids):
            raise InvalidRecordError(f"Duplicate ids in {kind.value} collection")

        for row in self._query(kind).all():
            self.session.delete(row)
        self.session.flush()
        for position, record in enumerate(records):
            self.session.add(StoredRecord(
                kind=kind.value,
                record_id=ids[position],
                position=position,
                payload=copy.deepcopy(record),
            ))
        self.session.commit()
        logger.debug(f"Saved {len(records)} {kind.value} records")

    def upsert(self, kind: RecordKind | str, record: Record) -> Record:
        """Replace the record with the same id, or append it."""
        kind = _coerce_kind(kind)
        record_id = _record_id(record)

        row = self._query(kind).filter(StoredRecord.record_id == record_id).first()
        if row:
            row.payload = copy.deepcopy(record)
        else:
            last = (
                self.session.query(func.max(StoredRecord.position))
                .filter(StoredRecord.kind == kind.value)
                .scalar()
            )
            row = StoredRecord(
                kind=kind.value,
                record_id=record_id,
                position=0 if last is None else last + 1,
                payload=copy.deepcopy(record),
            )
            self.session.add(row)
        self.session.commit()
        logger.debug(f"Upserted {kind.value}/{record_id}")
        return copy.deepcopy(record)

    def delete_by_id(self, kind: RecordKind | str, record_id: str) -> bool:
        """Delete a record. A missing id is a no-op and returns False."""
        kind = _coerce_kind(kind)
        row = self._query(kind).filter(StoredRecord.record_id == record_id).first()
        if not row:
            return False
        self.session.delete(row)
        self.session.commit()
        logger.debug(f"Deleted {kind.value}/{record_id}")
        return True
