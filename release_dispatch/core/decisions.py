"""Decisions — releases, the content they cover, and the upstream verdict on them.

Invariants:
    - Release.protocol is always a DownloadProtocol member (strings coerced on construction)
    - RemoteContent.content_unit_ids is a tuple; order kept for display, sets used for overlap
    - Decision compares by identity: two equal-looking decisions are still two candidates
    - approved / temporarily_rejected / rejected are independent flags set upstream

Design Decisions:
    - Frozen dataclasses: a pass never mutates its input, only routes it
    - eq=False on Decision: dedup of failed attempts must not merge distinct candidates
"""

from dataclasses import dataclass, field

from release_dispatch.core.domain_types import ContentUnitId, DownloadProtocol
from release_dispatch.core.errors import InvalidDecisionError


def parse_protocol(value: DownloadProtocol | str) -> DownloadProtocol:
    """Coerce a protocol string from upstream into DownloadProtocol."""
    if isinstance(value, DownloadProtocol):
        return value
    try:
        return DownloadProtocol(str(value).lower())
    except ValueError:
        raise InvalidDecisionError(
            f"Unknown download protocol '{value}'", field="protocol",
        )


@dataclass(frozen=True)
class Release:
    """A discovered source bound to a transport protocol."""
    guid: str
    title: str
    protocol: DownloadProtocol
    indexer: str | None = None
    size: int | None = None

    def __post_init__(self):
        if not self.guid:
            raise InvalidDecisionError("Release guid must not be empty", field="guid")
        object.__setattr__(self, "protocol", parse_protocol(self.protocol))


@dataclass(frozen=True)
class RemoteContent:
    """A release plus the content units it would satisfy if acquired."""
    release: Release
    content_unit_ids: tuple[ContentUnitId, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "content_unit_ids", tuple(self.content_unit_ids))

    @property
    def unit_ids(self) -> frozenset[ContentUnitId]:
        return frozenset(self.content_unit_ids)

    def __str__(self) -> str:
        return self.release.title


@dataclass(frozen=True, eq=False)
class Decision:
    """Upstream verdict on one RemoteContent."""
    remote_content: RemoteContent
    approved: bool = False
    temporarily_rejected: bool = False
    rejected: bool = False
    rejection_reasons: tuple[str, ...] = field(default_factory=tuple)

    @property
    def release(self) -> Release:
        return self.remote_content.release

    @property
    def protocol(self) -> DownloadProtocol:
        return self.remote_content.release.protocol

    @property
    def unit_ids(self) -> frozenset[ContentUnitId]:
        return self.remote_content.unit_ids

    def __repr__(self) -> str:
        return (
            f"Decision({self.release.title!r}, protocol={self.protocol.value}, "
            f"units={sorted(self.unit_ids)})"
        )
