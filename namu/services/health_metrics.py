from __future__ import annotations

import math
from dataclasses import dataclass

_ACTIVITY_MULTIPLIERS = {
    "Sedentary": 1.2,
    "Moderate": 1.55,
}
_ACTIVE_MULTIPLIER = 1.9


@dataclass(frozen=True)
class HealthMetrics:
    bmr: float
    tdee: int
    bmi: float

    @property
    def bmi_display(self) -> str:
        return f"{self.bmi:.1f}"

    @property
    def bmi_category(self) -> str:
        return bmi_category(self.bmi)


def basal_metabolic_rate(gender: str, age: float, weight: float, height: float) -> float:
    """Mifflin-St Jeor, weight in kg and height in cm."""
    base = (10 * weight) + (6.25 * height) - (5 * age)
    return base + 5 if gender == "male" else base - 161


def activity_multiplier(activity_level: str) -> float:
    return _ACTIVITY_MULTIPLIERS.get(activity_level, _ACTIVE_MULTIPLIER)


def body_mass_index(weight: float, height: float) -> float:
    return weight / ((height / 100) ** 2)


def bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def compute_metrics(
    gender: str,
    age: float,
    weight: float,
    height: float,
    activity_level: str,
) -> HealthMetrics:
    bmr = basal_metabolic_rate(gender, age, weight, height)
    # half-up, not banker's rounding
    tdee = math.floor(bmr * activity_multiplier(activity_level) + 0.5)
    return HealthMetrics(bmr=bmr, tdee=tdee, bmi=body_mass_index(weight, height))
