"""Record store table.

Every entity kind lives in the same table: a record is addressed by
(kind, record_id) and carries its full JSON payload. ``position`` keeps
the stored order of a kind stable across reads.
"""

from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, DateTime, JSON, Index
from sqlalchemy.sql import func

from projektmester.database import Base


class RecordKind(str, PyEnum):
    """Entity kinds held by the record store."""
    PROJECTS = "projects"
    USERS = "users"
    TASKS = "tasks"
    MATERIALS = "materials"
    COSTS = "costs"
    FILES = "files"
    CUSTOM_STATUSES = "custom_statuses"


class StoredRecord(Base):
    """One persisted record of a given kind."""

    __tablename__ = "records"

    kind = Column(String(50), primary_key=True)
    record_id = Column(String(100), primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_records_kind_position", "kind", "position"),
    )

    def __repr__(self):
        return f"<StoredRecord(kind={self.kind}, record_id='{self.record_id}')>"
