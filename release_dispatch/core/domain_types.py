"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ContentUnitId wraps int; never pass bare ints for content units in domain logic
    - All valid states encoded as Enums; no raw string matching
    - DeferralReason has exactly 3 members; downstream scheduling keys off them

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and DB string columns without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ContentUnitId = NewType("ContentUnitId", int)
PassId = NewType("PassId", str)


# ─── Enums ───────────────────────────────────────────────────────

class DownloadProtocol(str, Enum):
    """Transport family a release is acquired through. Circuit latch key."""
    USENET = "usenet"
    TORRENT = "torrent"
    UNKNOWN = "unknown"


class DeferralReason(str, Enum):
    """Why a decision was handed to the deferral store instead of claimed."""
    DELAY = "delay"
    FALLBACK = "fallback"
    CLIENT_UNAVAILABLE = "client_unavailable"


class DispatchStatus(str, Enum):
    """Tag of a dispatch attempt outcome."""
    SUCCESS = "success"
    CLIENT_UNAVAILABLE = "client_unavailable"
    FAILED = "failed"
