"""Add photos table (soft-deleted photo metadata for inspections and locations).

Revision ID: 20261019100000
Revises: 20261019000000
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20261019100000"
down_revision: Union[str, None] = "20261019000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "photos",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("file_url", sa.String(length=2048), nullable=False),
        sa.Column("file_name", sa.String(length=512), nullable=True),
        sa.Column("file_size", sa.Integer(), nullable=True),
        sa.Column("mime_type", sa.String(length=128), nullable=True),
        sa.Column("caption", sa.Text(), nullable=True),
        sa.Column("field_reference", sa.String(length=255), nullable=True),
        sa.Column("inspection_id", sa.String(length=36), nullable=True),
        sa.Column("location_id", sa.String(length=36), nullable=True),
        sa.Column("created_by", sa.String(length=36), nullable=True),
        sa.Column("updated_by", sa.String(length=36), nullable=True),
        sa.Column("deleted_by", sa.String(length=36), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_photos_inspection_id"), "photos", ["inspection_id"], unique=False)
    op.create_index(op.f("ix_photos_location_id"), "photos", ["location_id"], unique=False)
    op.create_index(op.f("ix_photos_is_deleted"), "photos", ["is_deleted"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_photos_is_deleted"), table_name="photos")
    op.drop_index(op.f("ix_photos_location_id"), table_name="photos")
    op.drop_index(op.f("ix_photos_inspection_id"), table_name="photos")
    op.drop_table("photos")
