"""
db/models/company.py

Company model: the tenant. Every metric record family is scoped to one
company through ``company_id``.
"""

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Company(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    A reporting organisation. Deleting a company cascades to all of its
    records at the database level (``ondelete="CASCADE"`` on each FK).
    """

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    sector: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Industry sector, used for benchmarks",
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Soft-disable a company without deletion",
    )

    __table_args__ = (Index("ix_companies_is_active", "is_active"),)

    def __repr__(self) -> str:
        return f"<Company id={self.id} name={self.name!r} sector={self.sector!r}>"
