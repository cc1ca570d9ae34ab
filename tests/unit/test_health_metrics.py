from __future__ import annotations

import pytest

from namu.services.health_metrics import (
    activity_multiplier,
    basal_metabolic_rate,
    bmi_category,
    body_mass_index,
    compute_metrics,
)


class TestBasalMetabolicRate:
    def test_male(self) -> None:
        assert basal_metabolic_rate("male", 30, 80, 180) == 1780

    def test_female(self) -> None:
        assert basal_metabolic_rate("female", 30, 60, 165) == pytest.approx(1320.25)

    def test_any_other_gender_uses_female_offset(self) -> None:
        assert basal_metabolic_rate("other", 30, 60, 165) == basal_metabolic_rate("female", 30, 60, 165)


class TestActivityMultiplier:
    @pytest.mark.parametrize(
        "level, expected",
        [("Sedentary", 1.2), ("Moderate", 1.55), ("Active", 1.9), ("Athlete", 1.9)],
    )
    def test_levels(self, level: str, expected: float) -> None:
        assert activity_multiplier(level) == expected


class TestBodyMassIndex:
    def test_bmi(self) -> None:
        assert body_mass_index(80, 180) == pytest.approx(24.69, abs=0.01)

    @pytest.mark.parametrize(
        "bmi, category",
        [(17.0, "Underweight"), (18.5, "Normal"), (24.9, "Normal"), (25.0, "Overweight"), (30.0, "Obese")],
    )
    def test_categories(self, bmi: float, category: str) -> None:
        assert bmi_category(bmi) == category


class TestComputeMetrics:
    def test_male_moderate(self) -> None:
        metrics = compute_metrics("male", 30, 80, 180, "Moderate")

        assert metrics.tdee == 2759
        assert metrics.bmi_display == "24.7"
        assert metrics.bmi_category == "Normal"

    def test_female_sedentary(self) -> None:
        metrics = compute_metrics("female", 30, 60, 165, "Sedentary")

        assert metrics.tdee == 1584
