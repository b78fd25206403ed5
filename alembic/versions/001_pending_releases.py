"""Pending releases — deferred dispatch decisions.

Revision ID: 001_pending_releases
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_pending_releases"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "pending_releases",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("release_guid", sa.String(500), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("protocol", sa.String(20), nullable=False),
        sa.Column("reason", sa.String(30), nullable=False),
        sa.Column("content_unit_ids", sa.JSON, nullable=False),
        sa.Column("payload", sa.JSON, nullable=True),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("release_guid", "reason", name="uq_pending_release_guid_reason"),
    )
    op.create_index(
        "ix_pending_releases_release_guid", "pending_releases", ["release_guid"],
    )


def downgrade() -> None:
    op.drop_index("ix_pending_releases_release_guid", table_name="pending_releases")
    op.drop_table("pending_releases")
