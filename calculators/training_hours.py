"""
calculators/training_hours.py

Average hours of training per employee (GRI 404-1).

Averages divide by the number of active employees, not by the number of
employees who trained. Trainings without a duration count towards the
training totals but contribute no hours; their share drives ``data_quality``.

Employee rankings break ties on employee id. The bottom ranking only lists
employees with some recorded hours; those without any are reported under
``employees_without_training``.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from typing import Any

from calculators.base import BaseMetricCalculator
from calculators.common import (
    TIER_ATTENTION,
    TIER_EXCELLENT,
    TIER_GOOD,
    classify_at_least,
    compare_periods,
    percentage,
    value_or_zero,
)
from calculators.records import EmployeeRow, TrainingRow

DEFAULT_BENCHMARK_HOURS = 40.0

# Multiples of the benchmark, inclusive lower bounds.
BENCHMARK_TIERS: tuple[tuple[float, str], ...] = (
    (1.2, TIER_EXCELLENT),
    (1.0, TIER_GOOD),
    (0.6, TIER_ATTENTION),
)

_MEN = {"masculino", "male", "m"}
_WOMEN = {"feminino", "female", "f"}
_UNSPECIFIED = "Não especificado"
_UNCATEGORISED = "Não categorizado"
RANKING_SIZE = 10

_RECOMMENDATIONS = {
    "employees": "Register the active employees of the company",
    "training_duration": "Record duration_hours on every training program",
    "employee_gender": "Fill in the gender of every employee",
    "employee_department": "Assign a department to every employee",
}


def _gender_bucket(gender: str | None) -> str:
    text = (gender or "").strip().lower()
    if text in _MEN:
        return "men"
    if text in _WOMEN:
        return "women"
    return "other"


def _data_quality(completeness: float) -> str:
    if completeness >= 90:
        return "high"
    if completeness >= 70:
        return "medium"
    return "low"


class TrainingHoursCalculator(BaseMetricCalculator):
    name = "training_hours"

    def __init__(self, benchmark_hours: float = DEFAULT_BENCHMARK_HOURS) -> None:
        self.benchmark_hours = benchmark_hours

    def calculate(
        self,
        *,
        employees: Sequence[EmployeeRow],
        trainings: Sequence[TrainingRow],
        previous_trainings: Sequence[TrainingRow] | None = None,
    ) -> dict[str, Any]:
        if not employees:
            return self.empty()

        headcount = len(employees)
        hours_by_employee: dict[str, float] = defaultdict(float)
        trainings_by_employee: dict[str, int] = defaultdict(int)
        with_duration = 0
        for training in trainings:
            hours = value_or_zero(training.duration_hours)
            hours_by_employee[training.employee_id] += hours
            trainings_by_employee[training.employee_id] += 1
            if hours > 0:
                with_duration += 1

        total_hours = sum(hours_by_employee.values())
        average = total_hours / headcount
        completeness = percentage(with_duration, len(trainings))
        quality = _data_quality(completeness)

        by_gender = _group_by_employee(employees, hours_by_employee, lambda e: _gender_bucket(e.gender))
        for bucket in ("men", "women", "other"):
            by_gender.setdefault(bucket, {"total_hours": 0.0, "employee_count": 0, "avg_hours": 0.0})
        by_department = _group_by_employee(
            employees, hours_by_employee, lambda e: e.department or _UNSPECIFIED
        )
        by_role = _group_by_employee(employees, hours_by_employee, lambda e: e.position or _UNSPECIFIED)

        trained = set(hours_by_employee)
        without_training = [employee for employee in employees if employee.id not in trained]

        previous_average = None
        if previous_trainings is not None:
            previous_average = (
                sum(value_or_zero(t.duration_hours) for t in previous_trainings) / headcount
            )

        missing = _missing_data(quality, by_gender, by_department)

        return {
            "total_training_hours": round(total_hours, 2),
            "total_employees": headcount,
            "average_hours_per_employee": round(average, 1),
            "data_quality": quality,
            "trainings_with_duration": with_duration,
            "trainings_without_duration": len(trainings) - with_duration,
            "data_completeness_percent": round(completeness, 1),
            "by_gender": {key: by_gender[key] for key in ("men", "women", "other")},
            "by_department": sorted(
                (
                    {
                        "department": name,
                        **stats,
                        "percentage_of_total": round(percentage(stats["total_hours"], total_hours), 1),
                    }
                    for name, stats in by_department.items()
                ),
                key=lambda item: (-item["avg_hours"], item["department"]),
            ),
            "by_category": _by_category(trainings, total_hours),
            "by_role": sorted(
                ({"role": name, **stats} for name, stats in by_role.items()),
                key=lambda item: (-item["avg_hours"], item["role"]),
            ),
            "mandatory_vs_optional": _mandatory_split(trainings, total_hours),
            "monthly_trend": _monthly_trend(trainings, headcount),
            "employees_without_training": {
                "count": len(without_training),
                "percentage": round(percentage(len(without_training), headcount), 1),
                "employee_list": [_employee_entry(employee) for employee in without_training[:RANKING_SIZE]],
            },
            **_rankings(employees, hours_by_employee, trainings_by_employee),
            "sector_benchmark": self.benchmark_hours,
            "performance_vs_benchmark": round((average / self.benchmark_hours - 1) * 100, 1),
            "performance_classification": classify_at_least(
                average / self.benchmark_hours, BENCHMARK_TIERS
            ),
            "comparison": compare_periods(average, previous_average, digits=1),
            "compliance": {
                "is_compliant": not missing,
                "missing_data": missing,
                "recommendations": [_RECOMMENDATIONS[key] for key in missing],
            },
        }

    def empty(self) -> dict[str, Any]:
        zero_group = {"total_hours": 0.0, "employee_count": 0, "avg_hours": 0.0}
        return {
            "total_training_hours": 0.0,
            "total_employees": 0,
            "average_hours_per_employee": 0.0,
            "data_quality": "low",
            "trainings_with_duration": 0,
            "trainings_without_duration": 0,
            "data_completeness_percent": 0.0,
            "by_gender": {key: dict(zero_group) for key in ("men", "women", "other")},
            "by_department": [],
            "by_category": [],
            "by_role": [],
            "mandatory_vs_optional": _mandatory_split((), 0.0),
            "monthly_trend": [],
            "employees_without_training": {"count": 0, "percentage": 0.0, "employee_list": []},
            "top_10_employees": [],
            "bottom_10_employees": [],
            "sector_benchmark": self.benchmark_hours,
            "performance_vs_benchmark": -100.0,
            "performance_classification": classify_at_least(0.0, BENCHMARK_TIERS),
            "comparison": compare_periods(0.0, None),
            "compliance": {
                "is_compliant": False,
                "missing_data": ["employees"],
                "recommendations": [_RECOMMENDATIONS["employees"]],
            },
        }


def _group_by_employee(employees, hours_by_employee, key) -> dict[str, dict[str, Any]]:
    groups: dict[str, dict[str, Any]] = {}
    for employee in employees:
        group = groups.setdefault(key(employee), {"total_hours": 0.0, "employee_count": 0})
        group["total_hours"] += hours_by_employee.get(employee.id, 0.0)
        group["employee_count"] += 1
    for group in groups.values():
        group["total_hours"] = round(group["total_hours"], 2)
        group["avg_hours"] = round(group["total_hours"] / group["employee_count"], 1)
    return groups


def _by_category(trainings: Sequence[TrainingRow], total_hours: float) -> list[dict[str, Any]]:
    hours: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for training in trainings:
        category = training.category or _UNCATEGORISED
        hours[category] += value_or_zero(training.duration_hours)
        counts[category] += 1
    rows = [
        {
            "category": category,
            "total_hours": round(hours[category], 2),
            "training_count": counts[category],
            "avg_hours_per_training": round(hours[category] / counts[category], 1),
            "percentage_of_total": round(percentage(hours[category], total_hours), 1),
        }
        for category in counts
    ]
    return sorted(rows, key=lambda item: (-item["total_hours"], item["category"]))


def _mandatory_split(trainings: Sequence[TrainingRow], total_hours: float) -> dict[str, dict[str, Any]]:
    split = {
        "mandatory": {"total_hours": 0.0, "training_count": 0},
        "optional": {"total_hours": 0.0, "training_count": 0},
    }
    for training in trainings:
        bucket = split["mandatory" if training.is_mandatory else "optional"]
        bucket["total_hours"] += value_or_zero(training.duration_hours)
        bucket["training_count"] += 1
    for bucket in split.values():
        bucket["total_hours"] = round(bucket["total_hours"], 2)
        bucket["percentage"] = round(percentage(bucket["total_hours"], total_hours), 1)
    return split


def _monthly_trend(trainings: Sequence[TrainingRow], headcount: int) -> list[dict[str, Any]]:
    hours: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for training in trainings:
        month = f"{training.completion_date.year:04d}-{training.completion_date.month:02d}"
        hours[month] += value_or_zero(training.duration_hours)
        counts[month] += 1
    return [
        {
            "month": month,
            "total_hours": round(hours[month], 2),
            "avg_hours_per_employee": round(hours[month] / headcount, 1),
            "trainings_completed": counts[month],
        }
        for month in sorted(counts)
    ]


def _employee_entry(employee: EmployeeRow) -> dict[str, Any]:
    return {
        "id": employee.id,
        "name": employee.name,
        "department": employee.department or _UNSPECIFIED,
        "hire_date": employee.hire_date.isoformat() if employee.hire_date else None,
    }


def _rankings(employees, hours_by_employee, trainings_by_employee) -> dict[str, list[dict[str, Any]]]:
    ranked = [
        {
            "id": employee.id,
            "name": employee.name,
            "total_hours": round(hours_by_employee.get(employee.id, 0.0), 2),
            "trainings_completed": trainings_by_employee.get(employee.id, 0),
        }
        for employee in employees
    ]
    ranked.sort(key=lambda item: item["id"])
    top = sorted(ranked, key=lambda item: -item["total_hours"])
    bottom = sorted((item for item in ranked if item["total_hours"] > 0), key=lambda item: item["total_hours"])
    return {
        "top_10_employees": top[:RANKING_SIZE],
        "bottom_10_employees": bottom[:RANKING_SIZE],
    }


def _missing_data(quality: str, by_gender: dict, by_department: dict) -> list[str]:
    missing = []
    if quality == "low":
        missing.append("training_duration")
    if by_gender["men"]["employee_count"] == 0 and by_gender["women"]["employee_count"] == 0:
        missing.append("employee_gender")
    if list(by_department) == [_UNSPECIFIED]:
        missing.append("employee_department")
    return missing
