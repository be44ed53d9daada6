from __future__ import annotations

import unittest

from app.domain.categories import (
    ACTIVE_LICENSE_STATUSES,
    ACTIVE_STATUSES,
    COMPLETED_STATUSES,
    CRITICAL_SEVERITIES,
    EXPIRED_LICENSE_STATUSES,
    EnergyCategory,
    IncidentType,
    ReuseApplication,
    RevenueSustainabilityCategory,
    WaterSource,
    is_renewable_energy_source,
)


class WaterSourceTests(unittest.TestCase):
    def test_portuguese_labels(self) -> None:
        self.assertIs(WaterSource.from_label("Poço artesiano"), WaterSource.WELL)
        self.assertIs(WaterSource.from_label("Rede Pública (Sabesp)"), WaterSource.PUBLIC_NETWORK)
        self.assertIs(WaterSource.from_label("Captação superficial"), WaterSource.SURFACE_WATER)
        self.assertIs(WaterSource.from_label("Água de chuva"), WaterSource.RAINWATER)
        self.assertIs(WaterSource.from_label("Água de reuso"), WaterSource.REUSE)
        self.assertIs(WaterSource.from_label("Caminhão pipa"), WaterSource.THIRD_PARTY)

    def test_enum_value_is_accepted(self) -> None:
        self.assertIs(WaterSource.from_label(" well "), WaterSource.WELL)

    def test_unknown_or_missing_label_is_other(self) -> None:
        self.assertIs(WaterSource.from_label("Nascente"), WaterSource.OTHER)
        self.assertIs(WaterSource.from_label(None), WaterSource.OTHER)


class ReuseApplicationTests(unittest.TestCase):
    def test_name_keywords(self) -> None:
        self.assertIs(
            ReuseApplication.from_labels("Reuso para resfriamento", None),
            ReuseApplication.COOLING,
        )
        self.assertIs(
            ReuseApplication.from_labels("Reuso no processo produtivo", None),
            ReuseApplication.INDUSTRIAL_PROCESS,
        )

    def test_notes_keywords(self) -> None:
        self.assertIs(
            ReuseApplication.from_labels("Reuso", "uso em descarga de vasos"),
            ReuseApplication.SANITATION,
        )
        self.assertIs(
            ReuseApplication.from_labels("Reuso", "paisagismo da fábrica"),
            ReuseApplication.IRRIGATION,
        )

    def test_default(self) -> None:
        self.assertIs(ReuseApplication.from_labels(None, None), ReuseApplication.OTHER)


class EnergyCategoryTests(unittest.TestCase):
    def test_labels(self) -> None:
        self.assertIs(EnergyCategory.from_label("Energia Elétrica"), EnergyCategory.ELECTRICITY)
        self.assertIs(EnergyCategory.from_label("Eletricidade adquirida"), EnergyCategory.ELECTRICITY)
        self.assertIs(EnergyCategory.from_label("Vapor de processo"), EnergyCategory.THERMAL)
        self.assertIs(EnergyCategory.from_label("Combustão estacionária"), EnergyCategory.FUEL)
        self.assertIs(EnergyCategory.from_label("fuel"), EnergyCategory.FUEL)

    def test_unknown_label_raises(self) -> None:
        with self.assertRaises(ValueError):
            EnergyCategory.from_label("Emissões fugitivas")
        with self.assertRaises(ValueError):
            EnergyCategory.from_label(None)

    def test_renewable_sources(self) -> None:
        self.assertTrue(is_renewable_energy_source("Energia Solar Fotovoltaica", EnergyCategory.ELECTRICITY))
        self.assertTrue(is_renewable_energy_source("Etanol hidratado", EnergyCategory.FUEL))
        self.assertFalse(is_renewable_energy_source("Diesel S10", EnergyCategory.FUEL))
        # "solar" is not in the renewable fuel list
        self.assertFalse(is_renewable_energy_source("Solar", EnergyCategory.FUEL))


class IncidentTypeTests(unittest.TestCase):
    def test_near_miss_wins_over_accident(self) -> None:
        self.assertIs(IncidentType.from_label("Quase acidente"), IncidentType.NEAR_MISS)

    def test_labels(self) -> None:
        self.assertIs(IncidentType.from_label("Acidente com afastamento"), IncidentType.ACCIDENT)
        self.assertIs(IncidentType.from_label("Doença ocupacional"), IncidentType.OCCUPATIONAL_DISEASE)
        self.assertIs(IncidentType.from_label("Dano material"), IncidentType.PROPERTY_DAMAGE)
        self.assertIs(IncidentType.from_label("Outro"), IncidentType.OTHER)


class RevenueCategoryTests(unittest.TestCase):
    def test_labels(self) -> None:
        self.assertIs(
            RevenueSustainabilityCategory.from_label("Energia solar"),
            RevenueSustainabilityCategory.RENEWABLE_ENERGY,
        )
        self.assertIs(
            RevenueSustainabilityCategory.from_label("Produto tradicional"),
            RevenueSustainabilityCategory.NONE,
        )

    def test_is_sustainable(self) -> None:
        self.assertTrue(RevenueSustainabilityCategory.SOCIAL_IMPACT.is_sustainable)
        self.assertFalse(RevenueSustainabilityCategory.NONE.is_sustainable)


class StatusVocabularyTests(unittest.TestCase):
    # Stored labels are lower-cased and trimmed in SQL before the lookup.
    def test_vocabularies_are_lower_case_and_trimmed(self) -> None:
        for vocabulary in (
            ACTIVE_LICENSE_STATUSES,
            ACTIVE_STATUSES,
            COMPLETED_STATUSES,
            CRITICAL_SEVERITIES,
            EXPIRED_LICENSE_STATUSES,
        ):
            for label in vocabulary:
                self.assertEqual(label, label.strip().lower())

    def test_active_and_expired_licenses_do_not_overlap(self) -> None:
        self.assertFalse(ACTIVE_LICENSE_STATUSES & EXPIRED_LICENSE_STATUSES)


if __name__ == "__main__":
    unittest.main()
