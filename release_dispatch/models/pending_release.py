"""PendingRelease ORM — a deferred decision waiting for a later dispatch pass.

Invariants:
    - One row per (release_guid, reason): re-storing refreshes, never duplicates
    - reason is a DeferralReason value
    - content_unit_ids stored as a JSON list of ints (order as discovered)

Design Decisions:
    - Decision payload kept as JSON (title, indexer, size, flags): the reader
      rebuilds what it needs without joining discovery tables
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from release_dispatch.db.base import Base


class PendingRelease(Base):
    """Deferred release: Delay, Fallback or ClientUnavailable."""
    __tablename__ = "pending_releases"
    __table_args__ = (
        UniqueConstraint("release_guid", "reason", name="uq_pending_release_guid_reason"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    release_guid: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    protocol: Mapped[str] = mapped_column(String(20), nullable=False)
    reason: Mapped[str] = mapped_column(String(30), nullable=False)
    content_unit_ids: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    payload: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
