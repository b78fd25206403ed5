"""ORM Models — SQLAlchemy declarative models for persisted dispatch state.

Invariants:
    - All models inherit from Base (db/base.py)
    - Only deferred decisions are persisted; claimed/rejected are the caller's concern

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / alembic
"""

from release_dispatch.models.pending_release import PendingRelease  # noqa: F401
