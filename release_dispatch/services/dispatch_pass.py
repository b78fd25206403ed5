"""Dispatch Pass Runner — wires settings, DB session and collaborators around one pass.

Invariants:
    - One DB session per pass; committed only after the pass completes
    - Any failure (including DB setup) rolls the session back and surfaces as
      DispatchPassError: the caller re-offers the whole batch next cycle, never
      a partial result
    - No state kept between calls beyond the process-wide session manager

Design Decisions:
    - Commit at loop exit, not per deferral: the store only adds rows and the
      unit of work persists them together
    - Caller supplies the acquisition client and prioritizer; this module owns
      only persistence and configuration
    - Without an explicit manager, reuse the one set by main.startup(), else
      build it from Settings on first use
"""

import logging
import uuid

from release_dispatch.config import Settings, get_settings
from release_dispatch.core.decisions import Decision
from release_dispatch.core.domain_types import PassId
from release_dispatch.core.errors import DispatchPassError
from release_dispatch.core.pass_result import PassResult, compute_pass_stats
from release_dispatch.core.repository_protocols import AcquisitionClient, Prioritizer
from release_dispatch.infrastructure import database
from release_dispatch.infrastructure.database import DatabaseSessionManager
from release_dispatch.infrastructure.pending_release_store import SqlAlchemyDeferralStore
from release_dispatch.services.process_decisions import DecisionProcessor

logger = logging.getLogger(__name__)


def _resolve_db_manager(
    db_manager: DatabaseSessionManager | None, settings: Settings,
) -> DatabaseSessionManager:
    if db_manager:
        return db_manager
    return database.db_manager or database.init_db_from_settings(settings)


async def run_dispatch_pass(
    decisions: list[Decision],
    acquisition_client: AcquisitionClient,
    prioritizer: Prioritizer | None = None,
    db_manager: DatabaseSessionManager | None = None,
    settings: Settings | None = None,
) -> PassResult:
    """Process one batch and persist its deferrals atomically."""
    settings = settings or get_settings()
    pass_id = PassId(uuid.uuid4().hex)

    try:
        manager = _resolve_db_manager(db_manager, settings)
        async with manager.session() as db:
            processor = DecisionProcessor(
                acquisition_client,
                SqlAlchemyDeferralStore(db),
                prioritizer=prioritizer,
                skip_dispatch_when_latched=settings.skip_dispatch_when_latched,
            )
            result = await processor.process(decisions, pass_id=pass_id)
            await db.commit()
    except Exception as e:
        err = DispatchPassError(f"Dispatch pass aborted: {e}", pass_id)
        logger.error(
            f"Dispatch pass aborted, batch of {len(decisions)} left unprocessed: {e}",
            exc_info=True,
            extra=err.to_log_extra(),
        )
        raise err from e

    logger.info(
        f"Dispatch pass stats: {compute_pass_stats(result)}",
        extra={"pass_id": pass_id},
    )
    return result
