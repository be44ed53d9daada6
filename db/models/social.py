"""
db/models/social.py

Social record families: employees, trainings, safety incidents and social
projects.
"""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Boolean, Date, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.categories import IncidentType
from db.base import Base, CompanyScopedMixin, TimestampMixin, UUIDPrimaryKeyMixin, enum_column_type


class Employee(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    __tablename__ = "employees"

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[str | None] = mapped_column(String(32), nullable=True)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="Ativo")
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (Index("ix_employees_company_status", "company_id", "status"),)


class EmployeeTraining(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    __tablename__ = "employee_trainings"

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    program_name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    duration_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_mandatory: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    completion_date: Mapped[date | None] = mapped_column(Date, nullable=True)


class SafetyIncident(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    """
    Occupational safety incident. ``days_lost > 0`` marks a lost-time
    accident.
    """

    __tablename__ = "safety_incidents"

    incident_date: Mapped[date] = mapped_column(Date, nullable=False)
    incident_type: Mapped[IncidentType] = mapped_column(
        enum_column_type(IncidentType),
        nullable=False,
        default=IncidentType.OTHER,
    )
    severity: Mapped[str | None] = mapped_column(String(32), nullable=True)
    days_lost: Mapped[int | None] = mapped_column(Integer, nullable=True)
    employee_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="SET NULL"),
        nullable=True,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_safety_incidents_company_date", "company_id", "incident_date"),
    )


class SocialProject(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    __tablename__ = "social_projects"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    invested_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
