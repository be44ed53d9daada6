"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.company import Company
from db.models.economic import EconomicData, RevenueRecord
from db.models.environmental import (
    EmissionSource,
    EnergyConsumptionRecord,
    Goal,
    License,
    OperationalMetric,
    WaterConsumptionRecord,
)
from db.models.governance import Audit, CorporatePolicy, ESGRisk, NonConformity
from db.models.social import Employee, EmployeeTraining, SafetyIncident, SocialProject
from db.models.user_preferences import UserPreferencesRecord

__all__ = [
    "Company",
    "EmissionSource",
    "License",
    "Goal",
    "WaterConsumptionRecord",
    "EnergyConsumptionRecord",
    "OperationalMetric",
    "Employee",
    "EmployeeTraining",
    "SafetyIncident",
    "SocialProject",
    "ESGRisk",
    "NonConformity",
    "CorporatePolicy",
    "Audit",
    "EconomicData",
    "RevenueRecord",
    "UserPreferencesRecord",
]
