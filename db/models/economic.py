"""
db/models/economic.py

Economic record families: GRI 201-1 economic data snapshots and revenue
lines tagged with a sustainability category.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Float, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.categories import RevenueSustainabilityCategory
from db.base import Base, CompanyScopedMixin, TimestampMixin, UUIDPrimaryKeyMixin, enum_column_type


class EconomicData(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    """
    One economic value snapshot for a reporting period.

    Amount columns are nullable: ``NULL`` means "never filled", which the
    compliance check and the community fallback distinguish from ``0``.
    """

    __tablename__ = "economic_data"

    period_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    period_end_date: Mapped[date] = mapped_column(Date, nullable=False)

    revenue: Mapped[float | None] = mapped_column(Float, nullable=True)
    financial_income: Mapped[float | None] = mapped_column(Float, nullable=True)
    asset_sales: Mapped[float | None] = mapped_column(Float, nullable=True)
    operational_costs: Mapped[float | None] = mapped_column(Float, nullable=True)
    employee_wages: Mapped[float | None] = mapped_column(Float, nullable=True)
    employee_benefits: Mapped[float | None] = mapped_column(Float, nullable=True)
    interest_payments: Mapped[float | None] = mapped_column(Float, nullable=True)
    dividends: Mapped[float | None] = mapped_column(Float, nullable=True)
    taxes: Mapped[float | None] = mapped_column(Float, nullable=True)
    community_investments: Mapped[float | None] = mapped_column(Float, nullable=True)

    __table_args__ = (
        Index("ix_economic_data_company_period", "company_id", "period_end_date"),
    )


class RevenueRecord(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    __tablename__ = "revenue_records"

    product_line: Mapped[str | None] = mapped_column(String(255), nullable=True)
    amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    sustainability_category: Mapped[RevenueSustainabilityCategory] = mapped_column(
        enum_column_type(RevenueSustainabilityCategory),
        nullable=False,
        default=RevenueSustainabilityCategory.NONE,
    )
    period_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    period_end_date: Mapped[date] = mapped_column(Date, nullable=False)
