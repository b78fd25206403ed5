"""Service test fixtures — controllable fakes for the dispatch collaborators.

Invariants:
    - fake_client records every dispatch call in order (release guids)
    - fake_store records every store_deferred call in order (guid, reason)
    - Unconfigured releases dispatch successfully

Design Decisions:
    - Structural fakes, not MagicMock: the Protocols are small and the call
      order is the thing under test
"""

import pytest

from release_dispatch.core.dispatch_outcome import DispatchOutcome


class _FakeAcquisitionClient:
    def __init__(self):
        self.calls: list[str] = []
        # guid -> DispatchOutcome | Exception
        self.outcomes: dict = {}

    async def dispatch(self, remote_content):
        guid = remote_content.release.guid
        self.calls.append(guid)
        outcome = self.outcomes.get(guid, DispatchOutcome.success())
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class _FakeDeferralStore:
    def __init__(self):
        self.stored: list[tuple[str, str]] = []
        self.fail_on: set[str] = set()

    async def store_deferred(self, decision, reason):
        if decision.release.guid in self.fail_on:
            raise RuntimeError(f"store unavailable for {decision.release.guid}")
        self.stored.append((decision.release.guid, reason.value))


@pytest.fixture
def fake_client():
    return _FakeAcquisitionClient()


@pytest.fixture
def fake_store():
    return _FakeDeferralStore()
