"""SQLAlchemy Deferral Store — persists deferred decisions as PendingRelease rows.

Invariants:
    - Implements core.repository_protocols.DeferralStore
    - Upsert on (release_guid, reason): storing the same release for the same
      reason twice refreshes the row, never inserts a duplicate
    - No commit here: the pass runner commits once at loop exit, so a failed
      pass leaves nothing behind

Design Decisions:
    - Session-scoped store, one instance per pass
    - Pending rows added in this pass are tracked in memory as well; autoflush is
      not relied on to see them before commit
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from release_dispatch.core.decisions import Decision
from release_dispatch.core.domain_types import DeferralReason
from release_dispatch.models.pending_release import PendingRelease

logger = logging.getLogger(__name__)


def _payload(decision: Decision) -> dict:
    release = decision.release
    return {
        "indexer": release.indexer,
        "size": release.size,
        "approved": decision.approved,
        "temporarily_rejected": decision.temporarily_rejected,
        "rejection_reasons": list(decision.rejection_reasons),
    }


class SqlAlchemyDeferralStore:
    """DeferralStore backed by the pending_releases table."""

    def __init__(self, db: AsyncSession):
        self._db = db
        self._added: dict[tuple[str, str], PendingRelease] = {}

    async def store_deferred(
        self, decision: Decision, reason: DeferralReason,
    ) -> None:
        release = decision.release
        key = (release.guid, reason.value)
        row = self._added.get(key) or await self._find(*key)
        now = datetime.now(timezone.utc)

        if row is None:
            row = PendingRelease(
                release_guid=release.guid,
                title=release.title,
                protocol=release.protocol.value,
                reason=reason.value,
                content_unit_ids=sorted(decision.unit_ids),
                payload=_payload(decision),
                added_at=now,
                updated_at=now,
            )
            self._db.add(row)
            self._added[key] = row
        else:
            row.title = release.title
            row.content_unit_ids = sorted(decision.unit_ids)
            row.payload = _payload(decision)
            row.updated_at = now

        logger.debug(
            f"Stored '{release.title}' as pending ({reason.value})",
            extra={"release_title": release.title, "reason": reason.value},
        )

    async def _find(self, release_guid: str, reason: str) -> PendingRelease | None:
        result = await self._db.execute(
            select(PendingRelease).where(
                PendingRelease.release_guid == release_guid,
                PendingRelease.reason == reason,
            )
        )
        return result.scalar_one_or_none()

    async def list_pending(
        self, reason: DeferralReason | None = None,
    ) -> list[PendingRelease]:
        """Pending rows, oldest first. Optionally filtered by reason."""
        query = select(PendingRelease).order_by(PendingRelease.added_at.asc())
        if reason is not None:
            query = query.where(PendingRelease.reason == reason.value)
        result = await self._db.execute(query)
        return list(result.scalars().all())
