"""Record store package.

This module provides:
- A single ``records`` table holding every entity kind as JSON
- ``RecordStore``: load-all / save-all / upsert / delete-by-id per kind
- The error hierarchy raised by the store
"""

from projektmester.records.models import RecordKind, StoredRecord
from projektmester.records.store import (
    Record,
    RecordStore,
    RecordStoreError,
    UnknownKindError,
    InvalidRecordError,
)

__all__ = [
    "RecordKind",
    "StoredRecord",
    "Record",
    "RecordStore",
    "RecordStoreError",
    "UnknownKindError",
    "InvalidRecordError",
]
