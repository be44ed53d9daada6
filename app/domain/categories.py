"""
app/domain/categories.py

Closed category sets for metric records.

Free-text labels typed by users (``"Poço artesiano"``, ``"Acidente com
afastamento"``...) are mapped to one of these enums once, when the record is
entered. Calculators only ever see enum members, so every aggregation is an
exhaustive walk over the enum instead of a substring test per row.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence, TypeVar

_E = TypeVar("_E", bound=Enum)

# (member, keywords) pairs are evaluated in order; first hit wins.
_KeywordRules = Sequence[tuple[_E, tuple[str, ...]]]


def _normalize(text: str | None) -> str:
    return (text or "").strip().lower()


def _match_keywords(text: str, rules: _KeywordRules, default: _E) -> _E:
    for member, keywords in rules:
        if any(keyword in text for keyword in keywords):
            return member
    return default


def _from_value(enum_cls: type[_E], text: str) -> _E | None:
    try:
        return enum_cls(text)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Water
# ---------------------------------------------------------------------------


class WaterSource(str, Enum):
    """Withdrawal source of a water consumption record (GRI 303-3)."""

    PUBLIC_NETWORK = "public_network"
    WELL = "well"
    SURFACE_WATER = "surface_water"
    RAINWATER = "rainwater"
    REUSE = "reuse"
    THIRD_PARTY = "third_party"
    OTHER = "other"

    @classmethod
    def from_label(cls, label: str | None) -> "WaterSource":
        text = _normalize(label)
        return _from_value(cls, text) or _match_keywords(text, _WATER_SOURCE_RULES, cls.OTHER)


_WATER_SOURCE_RULES: _KeywordRules = (
    (WaterSource.PUBLIC_NETWORK, ("rede pública", "concessionária")),
    (WaterSource.WELL, ("poço",)),
    (WaterSource.SURFACE_WATER, ("superficial", "rio", "lago")),
    (WaterSource.RAINWATER, ("chuva", "pluvial")),
    (WaterSource.REUSE, ("reuso", "reciclada")),
    (WaterSource.THIRD_PARTY, ("terceiros", "caminhão")),
)


class ReuseApplication(str, Enum):
    """Where reused water is applied."""

    INDUSTRIAL_PROCESS = "industrial_process"
    COOLING = "cooling"
    IRRIGATION = "irrigation"
    SANITATION = "sanitation"
    OTHER = "other"

    @classmethod
    def from_labels(cls, source_name: str | None, notes: str | None) -> "ReuseApplication":
        """Classify from the record's source name first, then its notes."""
        name = _normalize(source_name)
        note = _normalize(notes)
        for member, name_keywords, note_keywords in _REUSE_RULES:
            if any(k in name for k in name_keywords) or any(k in note for k in note_keywords):
                return member
        return cls.OTHER


_REUSE_RULES: tuple[tuple[ReuseApplication, tuple[str, ...], tuple[str, ...]], ...] = (
    (ReuseApplication.INDUSTRIAL_PROCESS, ("processo",), ("processo",)),
    (ReuseApplication.COOLING, ("resfriamento", "cooling"), ("torre",)),
    (ReuseApplication.IRRIGATION, ("irrigação", "jardim"), ("paisagismo",)),
    (ReuseApplication.SANITATION, ("sanitário", "vaso"), ("descarga",)),
)


# ---------------------------------------------------------------------------
# Energy
# ---------------------------------------------------------------------------


class EnergyCategory(str, Enum):
    """Energy consumption family (GRI 302-1)."""

    ELECTRICITY = "electricity"
    FUEL = "fuel"
    THERMAL = "thermal"

    @classmethod
    def from_label(cls, label: str | None) -> "EnergyCategory":
        """
        Raises ValueError for labels outside the three families; such rows
        are not energy consumption and must not enter the store.
        """
        text = _normalize(label)
        member = _from_value(cls, text)
        if member is not None:
            return member
        for candidate, keywords in _ENERGY_CATEGORY_RULES:
            if any(keyword in text for keyword in keywords):
                return candidate
        raise ValueError(f"Unrecognised energy category label {label!r}")


_ENERGY_CATEGORY_RULES: _KeywordRules = (
    (EnergyCategory.THERMAL, ("vapor", "térmic", "thermal", "calor")),
    (EnergyCategory.ELECTRICITY, ("eletricidade", "elétrica", "electricity")),
    (EnergyCategory.FUEL, ("combustão", "combustível", "fuel")),
)

_RENEWABLE_SOURCES: tuple[str, ...] = (
    "solar", "eólica", "hidrelétrica", "biomassa", "biogás",
    "etanol", "biodiesel", "bagaço", "lenha", "carvão vegetal",
    "bioenergia", "geotérmica", "maremotriz",
)

_RENEWABLE_FUELS: tuple[str, ...] = (
    "etanol", "biodiesel", "biogás", "biomassa", "bagaço", "lenha", "carvão vegetal",
)


def is_renewable_energy_source(source_name: str | None, category: EnergyCategory) -> bool:
    """Decide, at entry time, whether an energy source is renewable."""
    name = _normalize(source_name)
    keywords = _RENEWABLE_FUELS if category is EnergyCategory.FUEL else _RENEWABLE_SOURCES
    return any(keyword in name for keyword in keywords)


# ---------------------------------------------------------------------------
# Safety
# ---------------------------------------------------------------------------


class IncidentType(str, Enum):
    """Occupational safety incident type (GRI 403-9)."""

    ACCIDENT = "accident"
    NEAR_MISS = "near_miss"
    OCCUPATIONAL_DISEASE = "occupational_disease"
    PROPERTY_DAMAGE = "property_damage"
    OTHER = "other"

    @classmethod
    def from_label(cls, label: str | None) -> "IncidentType":
        text = _normalize(label)
        return _from_value(cls, text) or _match_keywords(text, _INCIDENT_RULES, cls.OTHER)


# near-miss first: "quase acidente" must not land in ACCIDENT.
_INCIDENT_RULES: _KeywordRules = (
    (IncidentType.NEAR_MISS, ("quase", "near miss", "incidente sem lesão")),
    (IncidentType.OCCUPATIONAL_DISEASE, ("doença", "disease")),
    (IncidentType.PROPERTY_DAMAGE, ("dano material", "patrimonial")),
    (IncidentType.ACCIDENT, ("acidente", "accident", "lesão", "ferimento")),
)


# ---------------------------------------------------------------------------
# Revenue
# ---------------------------------------------------------------------------


class RevenueSustainabilityCategory(str, Enum):
    """Sustainability classification of a revenue line."""

    RENEWABLE_ENERGY = "renewable_energy"
    CIRCULAR_ECONOMY = "circular_economy"
    ENERGY_EFFICIENCY = "energy_efficiency"
    SUSTAINABLE_PRODUCTS = "sustainable_products"
    SOCIAL_IMPACT = "social_impact"
    NONE = "none"

    @classmethod
    def from_label(cls, label: str | None) -> "RevenueSustainabilityCategory":
        text = _normalize(label)
        return _from_value(cls, text) or _match_keywords(text, _REVENUE_RULES, cls.NONE)

    @property
    def is_sustainable(self) -> bool:
        return self is not RevenueSustainabilityCategory.NONE


_REVENUE_RULES: _KeywordRules = (
    (RevenueSustainabilityCategory.RENEWABLE_ENERGY, ("renovável", "solar", "eólica")),
    (RevenueSustainabilityCategory.CIRCULAR_ECONOMY, ("reciclagem", "circular", "reuso")),
    (RevenueSustainabilityCategory.ENERGY_EFFICIENCY, ("eficiência",)),
    (RevenueSustainabilityCategory.SUSTAINABLE_PRODUCTS, ("sustentável", "verde", "orgânico")),
    (RevenueSustainabilityCategory.SOCIAL_IMPACT, ("social", "inclusão", "comunidade")),
)


# ---------------------------------------------------------------------------
# Status / severity vocabularies stored by the platform
# ---------------------------------------------------------------------------

ACTIVE_LICENSE_STATUSES: frozenset[str] = frozenset({"ativa", "vigente", "active"})
EXPIRED_LICENSE_STATUSES: frozenset[str] = frozenset({"vencida", "expirada", "expired"})
ACTIVE_STATUSES: frozenset[str] = frozenset({"ativo", "ativa", "em andamento", "active", "in_progress"})
COMPLETED_STATUSES: frozenset[str] = frozenset(
    {"concluído", "concluída", "concluido", "concluida", "completed", "fechada", "encerrada"}
)
CRITICAL_SEVERITIES: frozenset[str] = frozenset({"alta", "crítica", "crítico", "high", "critical"})
