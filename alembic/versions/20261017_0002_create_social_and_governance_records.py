"""create social and governance record tables

Revision ID: 20261017_0002
Revises: 20261017_0001
Create Date: 2026-10-17 09:10:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "20261017_0002"
down_revision = "20261017_0001"
branch_labels = None
depends_on = None

_TABLES = (
    "employees",
    "employee_trainings",
    "safety_incidents",
    "social_projects",
    "esg_risks",
    "non_conformities",
    "corporate_policies",
    "audits",
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
        "employees",
        _id(),
        _company_id(),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("gender", sa.String(length=32), nullable=True),
        sa.Column("department", sa.String(length=100), nullable=True),
        sa.Column("position", sa.String(length=100), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="Ativo"),
        sa.Column("hire_date", sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_employees_company_status", "employees", ["company_id", "status"], unique=False)

    op.create_table(
        "employee_trainings",
        _id(),
        _company_id(),
        sa.Column(
            "employee_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("employees.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("program_name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("duration_hours", sa.Float(), nullable=True),
        sa.Column("is_mandatory", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("completion_date", sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_employee_trainings_employee_id", "employee_trainings", ["employee_id"], unique=False
    )

    op.create_table(
        "safety_incidents",
        _id(),
        _company_id(),
        sa.Column("incident_date", sa.Date(), nullable=False),
        sa.Column("incident_type", sa.String(length=32), nullable=False),
        sa.Column("severity", sa.String(length=32), nullable=True),
        sa.Column("days_lost", sa.Integer(), nullable=True),
        sa.Column(
            "employee_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("employees.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_safety_incidents_company_date",
        "safety_incidents",
        ["company_id", "incident_date"],
        unique=False,
    )

    op.create_table(
        "social_projects",
        _id(),
        _company_id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("invested_amount", sa.Float(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "esg_risks",
        _id(),
        _company_id(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("esg_category", sa.String(length=32), nullable=True),
        sa.Column("inherent_risk_level", sa.String(length=32), nullable=True,
                  comment="Free-text level; 'Alta'/'Crítico' count as critical"),
        sa.Column("status", sa.String(length=32), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "non_conformities",
        _id(),
        _company_id(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("severity", sa.String(length=32), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("detected_date", sa.Date(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "corporate_policies",
        _id(),
        _company_id(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("effective_date", sa.Date(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "audits",
        _id(),
        _company_id(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("audit_type", sa.String(length=100), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        *_timestamps(),
    )

    for table in _TABLES:
        op.create_index(f"ix_{table}_company_id", table, ["company_id"], unique=False)


def downgrade() -> None:
    for table in _TABLES:
        op.drop_index(f"ix_{table}_company_id", table_name=table)
    op.drop_index("ix_safety_incidents_company_date", table_name="safety_incidents")
    op.drop_index("ix_employee_trainings_employee_id", table_name="employee_trainings")
    op.drop_index("ix_employees_company_status", table_name="employees")
    for table in reversed(_TABLES):
        op.drop_table(table)
