"""
Tests for Rider Metrics Service

Table-driven tests for BMI, total load and the weighted stamina estimate,
plus the quick stamina profile and ride success predictor.
All tests verify pure, deterministic behavior.
"""

import pytest

from planner.models import RiderProfile
from rider_metrics_service import (
    StaminaProfile,
    calculate_bmi,
    classify_bmi,
    compute_total_load,
    estimate_stamina,
    evaluate_stamina_profile,
    personalized_riding_advice,
    predict_ride_success,
    stamina_level_for,
)


class TestCalculateBmi:
    """Test BMI calculation and classification."""

    @pytest.mark.parametrize("weight,height,expected", [
        (70, 175, 22.9),
        (67.4, 175, 22.0),
        (95, 170, 32.9),
        (45, 180, 13.9),
    ])
    def test_bmi_values(self, weight, height, expected):
        assert calculate_bmi(weight, height) == expected

    @pytest.mark.parametrize("weight,height", [
        (None, 175),
        (70, None),
        (0, 175),
        (70, 0),
        (-70, 175),
    ])
    def test_missing_or_invalid_inputs(self, weight, height):
        assert calculate_bmi(weight, height) is None

    def test_height_converted_to_metres(self):
        """1.8 m and 80 kg is 24.7, not a tiny centimetre-based figure."""
        assert calculate_bmi(80, 180) == 24.7

    @pytest.mark.parametrize("bmi,expected", [
        (None, ""),
        (17.0, "Underweight"),
        (18.5, "Normal"),
        (24.9, "Normal"),
        (27.3, "Overweight"),
        (30.0, "Obese"),
    ])
    def test_classify(self, bmi, expected):
        assert classify_bmi(bmi) == expected


class TestTotalLoad:
    """Rider + pillion + luggage + hard luggage."""

    CASES = [
        # (name, profile, expected)
        ("solo", RiderProfile(weight=70), 70),
        ("male pillion", RiderProfile(weight=70, pillion=True, pillion_gender="Male"), 145),
        ("female pillion", RiderProfile(weight=70, pillion=True, pillion_gender="Female"), 125),
        ("unspecified pillion", RiderProfile(weight=70, pillion=True), 125),
        ("luggage", RiderProfile(weight=70, luggage_weight=20), 90),
        ("hard luggage", RiderProfile(weight=70, luggage_weight=10, has_hard_luggage=True), 92),
        ("gender ignored without pillion", RiderProfile(weight=70, pillion_gender="Male"), 70),
        ("missing weight", RiderProfile(luggage_weight=15), 15),
    ]

    @pytest.mark.parametrize("name,profile,expected", CASES)
    def test_total_load(self, name, profile, expected):
        assert compute_total_load(profile) == expected, f"Failed on {name}"


class TestEstimateStamina:
    """Weighted-sum stamina score and level."""

    CASES = [
        # (name, profile, expected_score, expected_level)
        (
            "defaults",
            RiderProfile(),
            65, "Moderate",  # 50 + sleep 8 + hydration 7
        ),
        (
            "senior with no habits recorded",
            RiderProfile(age=65, sleep_hours=None, hydration_litres=None),
            35, "Low",
        ),
        (
            "fatigued and unfit",
            RiderProfile(recent_fatigue="high", fitness_level="low"),
            35, "Low",
        ),
        (
            "experience bonus capped",
            RiderProfile(experience_years=20),
            80, "High",
        ),
        (
            "aggressive style",
            RiderProfile(riding_style="Aggressive"),
            60, "Moderate",
        ),
        (
            "scenic style with low terrain adaptability",
            RiderProfile(riding_style="Scenic", terrain_adaptability="low"),
            61, "Moderate",
        ),
        (
            "obese and short on sleep",
            RiderProfile(age=50, bmi=32.0, sleep_hours=4, hydration_litres=1),
            22, "Low",  # 50 - 10 - 10 - 8
        ),
        (
            "underweight poor diet",
            RiderProfile(age=35, bmi=17.0, diet_quality="poor"),
            60, "Moderate",  # 50 + 5 - 5 + 8 + 7 - 5
        ),
    ]

    @pytest.mark.parametrize("name,profile,expected_score,expected_level", CASES)
    def test_stamina(self, name, profile, expected_score, expected_level):
        result = estimate_stamina(profile)
        assert result.score == expected_score, f"Failed on {name}: score {result.score}"
        assert result.level == expected_level, f"Failed on {name}: level {result.level}"

    def test_example_rider_clamped_to_excellent(self):
        """50+10+10+8+7+7.5+0+7+10+0 = 109.5, clamped to 100."""
        rider = RiderProfile(
            age=25,
            bmi=22.0,
            sleep_hours=8,
            hydration_litres=3,
            experience_years=5,
            riding_style="Balanced",
            terrain_adaptability="high",
            recent_fatigue="none",
            fitness_level="good",
            diet_quality="good",
        )
        result = estimate_stamina(rider)
        assert result.score == 100
        assert result.level == "Excellent"

    def test_score_never_below_zero(self):
        rider = RiderProfile(
            age=70,
            bmi=35.0,
            sleep_hours=3,
            hydration_litres=0.5,
            riding_style="Aggressive",
            terrain_adaptability="low",
            recent_fatigue="high",
            fitness_level="low",
            diet_quality="poor",
        )
        result = estimate_stamina(rider)
        assert result.score == 0
        assert result.level == "Low"

    def test_deterministic(self):
        rider = RiderProfile(age=33, bmi=23.1, experience_years=3, fitness_level="athletic")
        assert estimate_stamina(rider) == estimate_stamina(rider)

    @pytest.mark.parametrize("score,expected", [
        (100, "Excellent"),
        (85, "Excellent"),
        (84.9, "High"),
        (70, "High"),
        (69, "Moderate"),
        (40, "Moderate"),
        (39.5, "Low"),
        (0, "Low"),
    ])
    def test_level_thresholds(self, score, expected):
        assert stamina_level_for(score) == expected


class TestStaminaProfile:
    """Quick stamina profile on the rider setup screen."""

    def test_defaults_are_moderate(self):
        profile = evaluate_stamina_profile()
        assert profile.bmi == 22.9
        assert profile.stamina_score == 4
        assert profile.stamina_level == "moderate"
        assert "Healthy BMI supports long rides." in profile.reason

    def test_young_active_rider_is_high(self):
        profile = evaluate_stamina_profile(
            age=25, weight=70, height=175, activity_level="high",
            sleep_hours=8, hydration_litres=3, terrain_adaptability="high",
        )
        assert profile.stamina_score == 10
        assert profile.stamina_level == "high"

    def test_older_sedentary_rider_is_low(self):
        profile = evaluate_stamina_profile(
            age=58, weight=95, height=170, activity_level="low",
            sleep_hours=4, hydration_litres=1, terrain_adaptability="low",
        )
        assert profile.stamina_score == -6
        assert profile.stamina_level == "low"
        assert "Poor sleep reduces reflexes and stamina." in profile.reason


class TestRidingAdvice:

    def test_known_bike_and_level(self):
        advice = personalized_riding_advice("high", "adventure")
        assert advice.startswith("Take the dirt.")

    def test_level_is_case_insensitive(self):
        assert personalized_riding_advice("LOW", "scooter") == "Avoid inclines and limit to 50-70 km/day."

    def test_unknown_bike_falls_back(self):
        assert personalized_riding_advice("high", "trike") == "Stay safe, gear up, and hydrate well!"


class TestPredictRideSuccess:
    """Success rate = stamina * 10 + 40 - terrain/distance penalty, clamped."""

    CASES = [
        # (name, score, terrain, elevation, distance, expected_rate, expected_risk)
        ("easy highway", 4, "highway", 500, 200, 80, "Low"),
        ("high mountain", 4, "mountain", 1500, 200, 65, "Moderate"),
        ("low mountain", 4, "mountain", 800, 200, 70, "Low"),
        ("mixed climb", 2, "mixed", 900, 200, 50, "Moderate"),
        ("long mountain day", 4, "mountain", 1500, 600, 50, "Moderate"),
        ("weak rider long mixed", 0, "mixed", 200, 400, 30, "High"),
        ("clamped high", 10, "highway", 0, 100, 100, "Low"),
        ("clamped low", -6, "mountain", 2000, 700, 0, "High"),
    ]

    @pytest.mark.parametrize("name,score,terrain,elevation,distance,expected_rate,expected_risk", CASES)
    def test_prediction(self, name, score, terrain, elevation, distance, expected_rate, expected_risk):
        profile = StaminaProfile(bmi=22.0, stamina_score=score, stamina_level="moderate", reason="")
        result = predict_ride_success(profile, terrain, elevation, distance)
        assert result.success_rate == expected_rate, f"Failed on {name}: {result.success_rate}"
        assert result.risk_level == expected_risk, f"Failed on {name}"
        assert result.stamina_level == "moderate"
