"""Dispatch Outcome — tagged result of handing a release to an acquisition client.

Invariants:
    - Exactly one of SUCCESS / CLIENT_UNAVAILABLE / FAILED
    - detail is None on SUCCESS, a human-readable string otherwise
    - Never raised: acquisition clients RETURN an outcome, the loop matches on status
"""

from dataclasses import dataclass

from release_dispatch.core.domain_types import DispatchStatus


@dataclass(frozen=True, slots=True)
class DispatchOutcome:
    status: DispatchStatus
    detail: str | None = None

    @classmethod
    def success(cls) -> "DispatchOutcome":
        return cls(DispatchStatus.SUCCESS)

    @classmethod
    def client_unavailable(cls, detail: str = "download client unavailable") -> "DispatchOutcome":
        return cls(DispatchStatus.CLIENT_UNAVAILABLE, detail)

    @classmethod
    def failed(cls, detail: str) -> "DispatchOutcome":
        return cls(DispatchStatus.FAILED, detail)

    @property
    def succeeded(self) -> bool:
        return self.status == DispatchStatus.SUCCESS
