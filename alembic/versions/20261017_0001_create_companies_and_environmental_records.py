"""create companies and environmental record tables

Revision ID: 20261017_0001
Revises:
Create Date: 2026-10-17 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


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


def _period() -> list[sa.Column]:
    return [
        sa.Column("period_start_date", sa.Date(), nullable=False),
        sa.Column("period_end_date", sa.Date(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "companies",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("sector", sa.String(length=100), nullable=True,
                  comment="Industry sector, used for benchmarks"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true(),
                  comment="Soft-disable a company without deletion"),
        *_timestamps(),
        sa.UniqueConstraint("name", name="uq_companies_name"),
    )
    op.create_index("ix_companies_is_active", "companies", ["is_active"], unique=False)

    op.create_table(
        "emission_sources",
        _id(),
        _company_id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("scope", sa.Integer(), nullable=True, comment="GHG Protocol scope 1, 2 or 3"),
        sa.Column("status", sa.String(length=50), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "licenses",
        _id(),
        _company_id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("license_type", sa.String(length=100), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=True),
        sa.Column("issue_date", sa.Date(), nullable=True),
        sa.Column("expiration_date", sa.Date(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "goals",
        _id(),
        _company_id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("metric_key", sa.String(length=100), nullable=True),
        sa.Column("target_value", sa.Float(), nullable=True),
        sa.Column("progress_percentage", sa.Float(), nullable=True, comment="0-100"),
        sa.Column("status", sa.String(length=50), nullable=True),
        sa.Column("deadline_date", sa.Date(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "water_consumption_records",
        _id(),
        _company_id(),
        sa.Column("source_type", sa.String(length=32), nullable=False),
        sa.Column("source_name", sa.String(length=255), nullable=True),
        sa.Column("withdrawal_m3", sa.Float(), nullable=True),
        sa.Column("consumption_m3", sa.Float(), nullable=True,
                  comment="Defaults to the withdrawal when not measured"),
        sa.Column("discharge_m3", sa.Float(), nullable=True),
        sa.Column("total_dissolved_solids_mg_l", sa.Float(), nullable=True),
        sa.Column("water_quality", sa.String(length=100), nullable=True),
        sa.Column("is_water_stressed_area", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reuse_application", sa.String(length=32), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_period(),
        *_timestamps(),
    )
    op.create_index(
        "ix_water_records_company_period",
        "water_consumption_records",
        ["company_id", "period_start_date"],
        unique=False,
    )

    op.create_table(
        "energy_consumption_records",
        _id(),
        _company_id(),
        sa.Column("source_name", sa.String(length=255), nullable=False,
                  comment="Fuel or supply name; drives the kWh conversion factor"),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=True),
        sa.Column("unit", sa.String(length=32), nullable=False, server_default="kWh"),
        sa.Column("is_renewable", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_period(),
        *_timestamps(),
    )
    op.create_index(
        "ix_energy_records_company_period",
        "energy_consumption_records",
        ["company_id", "period_start_date"],
        unique=False,
    )

    op.create_table(
        "operational_metrics",
        _id(),
        _company_id(),
        sa.Column("production_volume", sa.Float(), nullable=True),
        sa.Column("production_unit", sa.String(length=50), nullable=True),
        sa.Column("revenue_brl", sa.Float(), nullable=True),
        sa.Column("hours_worked", sa.Float(), nullable=True),
        *_period(),
        *_timestamps(),
    )

    for table in (
        "emission_sources",
        "licenses",
        "goals",
        "water_consumption_records",
        "energy_consumption_records",
        "operational_metrics",
    ):
        op.create_index(f"ix_{table}_company_id", table, ["company_id"], unique=False)


def downgrade() -> None:
    for table in (
        "operational_metrics",
        "energy_consumption_records",
        "water_consumption_records",
        "goals",
        "licenses",
        "emission_sources",
    ):
        op.drop_index(f"ix_{table}_company_id", table_name=table)
    op.drop_index("ix_energy_records_company_period", table_name="energy_consumption_records")
    op.drop_index("ix_water_records_company_period", table_name="water_consumption_records")
    for table in (
        "operational_metrics",
        "energy_consumption_records",
        "water_consumption_records",
        "goals",
        "licenses",
        "emission_sources",
    ):
        op.drop_table(table)
    op.drop_index("ix_companies_is_active", table_name="companies")
    op.drop_table("companies")
