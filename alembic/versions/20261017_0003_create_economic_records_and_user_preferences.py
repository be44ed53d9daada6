"""create economic record tables and user_preferences

Revision ID: 20261017_0003
Revises: 20261017_0002
Create Date: 2026-10-17 09:20:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "20261017_0003"
down_revision = "20261017_0002"
branch_labels = None
depends_on = None

_ECONOMIC_AMOUNTS = (
    "revenue",
    "financial_income",
    "asset_sales",
    "operational_costs",
    "employee_wages",
    "employee_benefits",
    "interest_payments",
    "dividends",
    "taxes",
    "community_investments",
)


def _id() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False)


def _company_id() -> sa.Column:
    return sa.Column(
        "company_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning tenant",
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "economic_data",
        _id(),
        _company_id(),
        sa.Column("period_start_date", sa.Date(), nullable=False),
        sa.Column("period_end_date", sa.Date(), nullable=False),
        *[sa.Column(name, sa.Float(), nullable=True) for name in _ECONOMIC_AMOUNTS],
        *_timestamps(),
    )
    op.create_index(
        "ix_economic_data_company_period",
        "economic_data",
        ["company_id", "period_end_date"],
        unique=False,
    )

    op.create_table(
        "revenue_records",
        _id(),
        _company_id(),
        sa.Column("product_line", sa.String(length=255), nullable=True),
        sa.Column("amount", sa.Float(), nullable=True),
        sa.Column("sustainability_category", sa.String(length=32), nullable=False,
                  server_default="none"),
        sa.Column("period_start_date", sa.Date(), nullable=False),
        sa.Column("period_end_date", sa.Date(), nullable=False),
        *_timestamps(),
    )

    for table in ("economic_data", "revenue_records"):
        op.create_index(f"ix_{table}_company_id", table, ["company_id"], unique=False)

    op.create_table(
        "user_preferences",
        _id(),
        sa.Column("user_id", sa.String(length=128), nullable=False,
                  comment="Identity-provider subject"),
        sa.Column(
            "company_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("companies.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "tour_state",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
            comment="Completed tours and the current step of the active one",
        ),
        sa.Column(
            "accessibility",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
            comment="Font scale, contrast and motion settings",
        ),
        *_timestamps(),
        sa.UniqueConstraint("user_id", name="uq_user_preferences_user_id"),
    )


def downgrade() -> None:
    op.drop_table("user_preferences")
    for table in ("revenue_records", "economic_data"):
        op.drop_index(f"ix_{table}_company_id", table_name=table)
    op.drop_index("ix_economic_data_company_period", table_name="economic_data")
    op.drop_table("revenue_records")
    op.drop_table("economic_data")
