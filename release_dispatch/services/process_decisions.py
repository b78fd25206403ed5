"""Decision Processor — one dispatch pass over a batch of download decisions.

Invariants:
    - Sequential: every dispatch and store call is awaited in prioritized order,
      nothing is gathered concurrently (dedup and latch depend on scan order)
    - PassContext built fresh per process() call
    - Temporarily rejected decisions are never handed to the acquisition client
    - A claimed content unit is never claimed again in the same pass
    - Non-client-unavailable dispatch failures are logged and dropped (no deferral)
    - Prioritizer / deferral store exceptions are NOT caught here; they abort the pass

Design Decisions:
    - Dispatch result is a tagged DispatchOutcome, matched on status rather than
      raised and caught
    - Latched protocols still get a dispatch attempt by default, so a latched
      decision that then succeeds is both claimed and deferred as FALLBACK.
      skip_dispatch_when_latched=True skips the attempt instead
"""

import logging
import uuid

from release_dispatch.core.classify_fallback import classify_failed_attempts
from release_dispatch.core.decisions import Decision
from release_dispatch.core.domain_types import DeferralReason, DispatchStatus, PassId
from release_dispatch.core.pass_context import PassContext
from release_dispatch.core.pass_result import PassResult, build_pass_result
from release_dispatch.core.qualify import qualify_decisions, rejected_decisions
from release_dispatch.core.repository_protocols import (
    AcquisitionClient, DeferralStore, Prioritizer, preserve_order,
)

logger = logging.getLogger(__name__)


class DecisionProcessor:
    """Qualifies, prioritizes, dispatches and classifies one batch of decisions."""

    def __init__(
        self,
        acquisition_client: AcquisitionClient,
        deferral_store: DeferralStore,
        prioritizer: Prioritizer | None = None,
        skip_dispatch_when_latched: bool = False,
    ):
        self._client = acquisition_client
        self._store = deferral_store
        self._prioritize = prioritizer or preserve_order
        self._skip_dispatch_when_latched = skip_dispatch_when_latched

    async def process(
        self, decisions: list[Decision], pass_id: PassId | None = None,
    ) -> PassResult:
        """Run one pass. Returns claimed / deferred / rejected."""
        ctx = PassContext(pass_id=pass_id or PassId(uuid.uuid4().hex))
        prioritized = self._prioritize(qualify_decisions(decisions))

        for decision in prioritized:
            await self._process_one(ctx, decision)

        delayed = list(ctx.deferred)
        classified = classify_failed_attempts(ctx.claimed, ctx.failed_attempts)
        for entry in classified:
            await self._store.store_deferred(entry.decision, entry.reason)

        result = build_pass_result(
            ctx.pass_id, ctx.claimed, delayed, classified,
            rejected_decisions(decisions),
        )
        logger.info(
            f"Dispatch pass complete: {len(result.claimed)} claimed, "
            f"{len(result.deferred)} deferred, {len(result.rejected)} rejected",
            extra={"pass_id": ctx.pass_id},
        )
        return result

    async def _process_one(self, ctx: PassContext, decision: Decision) -> None:
        log_extra = {
            "pass_id": ctx.pass_id,
            "release_title": decision.release.title,
            "protocol": decision.protocol.value,
        }

        if ctx.is_claimed(decision):
            logger.debug(
                f"Skipping '{decision.release.title}': content already claimed this pass",
                extra=log_extra,
            )
            return

        if decision.temporarily_rejected:
            await self._store.store_deferred(decision, DeferralReason.DELAY)
            ctx.defer(decision, DeferralReason.DELAY)
            return

        if ctx.is_latched(decision.protocol):
            ctx.add_failed_attempt(decision)
            if self._skip_dispatch_when_latched:
                logger.debug(
                    f"Protocol {decision.protocol.value} latched, not dispatching "
                    f"'{decision.release.title}'",
                    extra=log_extra,
                )
                return

        outcome = await self._client.dispatch(decision.remote_content)

        if outcome.status == DispatchStatus.SUCCESS:
            ctx.claim(decision)
        elif outcome.status == DispatchStatus.CLIENT_UNAVAILABLE:
            logger.debug(
                "Failed to send release to download client, storing until later",
                extra=log_extra,
            )
            ctx.add_failed_attempt(decision)
            ctx.latch(decision.protocol)
        else:
            logger.warning(
                f"Couldn't add report to download queue. {decision.remote_content}: "
                f"{outcome.detail}",
                extra=log_extra,
            )
