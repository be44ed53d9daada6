"""
db/models/environmental.py

Environmental record families: emission inventory, licences, goals,
water, energy and operational metrics.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import Boolean, Date, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.categories import EnergyCategory, ReuseApplication, WaterSource
from db.base import Base, CompanyScopedMixin, TimestampMixin, UUIDPrimaryKeyMixin, enum_column_type


class EmissionSource(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    __tablename__ = "emission_sources"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    scope: Mapped[int | None] = mapped_column(nullable=True, comment="GHG Protocol scope 1, 2 or 3")
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)


class License(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    """Environmental licence. ``status`` is the free-text label kept by the platform."""

    __tablename__ = "licenses"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    license_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    issue_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    expiration_date: Mapped[date | None] = mapped_column(Date, nullable=True)


class Goal(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    __tablename__ = "goals"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    metric_key: Mapped[str | None] = mapped_column(String(100), nullable=True)
    target_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    progress_percentage: Mapped[float | None] = mapped_column(
        Float,
        nullable=True,
        comment="0-100",
    )
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    deadline_date: Mapped[date | None] = mapped_column(Date, nullable=True)


class WaterConsumptionRecord(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    """
    One withdrawal/consumption/discharge reading for a period.

    ``source_type`` and ``reuse_application`` are classified when the record
    is entered; the free-text ``source_name`` is kept for display only.
    """

    __tablename__ = "water_consumption_records"

    source_type: Mapped[WaterSource] = mapped_column(
        enum_column_type(WaterSource),
        nullable=False,
        default=WaterSource.OTHER,
    )
    source_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    withdrawal_m3: Mapped[float | None] = mapped_column(Float, nullable=True)
    consumption_m3: Mapped[float | None] = mapped_column(
        Float,
        nullable=True,
        comment="Defaults to the withdrawal when not measured",
    )
    discharge_m3: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_dissolved_solids_mg_l: Mapped[float | None] = mapped_column(Float, nullable=True)
    water_quality: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_water_stressed_area: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reuse_application: Mapped[ReuseApplication | None] = mapped_column(
        enum_column_type(ReuseApplication),
        nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    period_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    period_end_date: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("ix_water_records_company_period", "company_id", "period_start_date"),
    )


class EnergyConsumptionRecord(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    __tablename__ = "energy_consumption_records"

    source_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Fuel or supply name; drives the kWh conversion factor",
    )
    category: Mapped[EnergyCategory] = mapped_column(
        enum_column_type(EnergyCategory),
        nullable=False,
    )
    quantity: Mapped[float | None] = mapped_column(Float, nullable=True)
    unit: Mapped[str] = mapped_column(String(32), nullable=False, default="kWh")
    is_renewable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    period_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    period_end_date: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("ix_energy_records_company_period", "company_id", "period_start_date"),
    )


class OperationalMetric(Base, UUIDPrimaryKeyMixin, CompanyScopedMixin, TimestampMixin):
    """Denominators for intensity and frequency rates."""

    __tablename__ = "operational_metrics"

    production_volume: Mapped[float | None] = mapped_column(Float, nullable=True)
    production_unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    revenue_brl: Mapped[float | None] = mapped_column(Float, nullable=True)
    hours_worked: Mapped[float | None] = mapped_column(Float, nullable=True)
    period_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    period_end_date: Mapped[date] = mapped_column(Date, nullable=False)
