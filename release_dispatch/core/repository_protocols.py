"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async where the implementation does IO (dispatch, store); the prioritizer is
      a pure ordering function and stays sync
"""

from typing import Protocol

from release_dispatch.core.decisions import Decision, RemoteContent
from release_dispatch.core.dispatch_outcome import DispatchOutcome
from release_dispatch.core.domain_types import DeferralReason


class Prioritizer(Protocol):
    """Stable total order over qualified decisions. Deterministic, no side effects."""
    def __call__(self, decisions: list[Decision]) -> list[Decision]: ...


class AcquisitionClient(Protocol):
    """Submits a release to a download client; returns a tagged outcome, never raises
    for client-side failures. Must be safe to call again for the same release."""
    async def dispatch(self, remote_content: RemoteContent) -> DispatchOutcome: ...


class DeferralStore(Protocol):
    """Records deferred decisions for a later pass.

    Must tolerate repeated Fallback stores of an equivalent decision.
    """
    async def store_deferred(
        self, decision: Decision, reason: DeferralReason,
    ) -> None: ...


def preserve_order(decisions: list[Decision]) -> list[Decision]:
    """Default prioritizer: keeps upstream order."""
    return list(decisions)
