"""
db/models/governance.py

Governance record families: ESG risk register, non-conformities,
corporate policies and audits.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CompanyScopedMixin, TimestampMixin, UUIDPrimaryKeyMixin


class ESGRisk(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    __tablename__ = "esg_risks"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    esg_category: Mapped[str | None] = mapped_column(String(32), nullable=True)
    inherent_risk_level: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
        comment="Free-text level; 'Alta'/'Crítico' count as critical",
    )
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)


class NonConformity(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    __tablename__ = "non_conformities"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    severity: Mapped[str | None] = mapped_column(String(32), nullable=True)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    detected_date: Mapped[date | None] = mapped_column(Date, nullable=True)


class CorporatePolicy(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    __tablename__ = "corporate_policies"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    effective_date: Mapped[date | None] = mapped_column(Date, nullable=True)


class Audit(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    __tablename__ = "audits"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    audit_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
