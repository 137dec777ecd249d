"""create csv_uploads and csv_data_rows tables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:30:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "csv_uploads",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("row_count", sa.Integer(), nullable=False),
        sa.Column("columns", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False, comment="completed, failed"),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_csv_uploads_uploaded_at", "csv_uploads", ["uploaded_at"], unique=False)

    op.create_table(
        "csv_data_rows",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("upload_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("row_index", sa.Integer(), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.ForeignKeyConstraint(["upload_id"], ["csv_uploads.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_csv_data_rows_upload_id_row_index",
        "csv_data_rows",
        ["upload_id", "row_index"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index("ix_csv_data_rows_upload_id_row_index", table_name="csv_data_rows")
    op.drop_table("csv_data_rows")
    op.drop_index("ix_csv_uploads_uploaded_at", table_name="csv_uploads")
    op.drop_table("csv_uploads")
