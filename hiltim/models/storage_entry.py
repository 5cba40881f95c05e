"""Key/value table standing in for browser local storage."""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from hiltim.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StorageEntry(Base):
    """One persisted blob, addressed by its storage key."""

    __tablename__ = "local_storage"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<StorageEntry key={self.key!r} size={len(self.value or '')}>"
