"""
Tests for Itinerary Service

Covers input validation, per-day distance/time/stops/risk rules and the
overall trip recommendation. Randomness is always seeded so plans are
reproducible.
"""

import random
import re
import uuid
from dataclasses import replace
from datetime import date, timedelta

import pytest

from itinerary_service import (
    DESTINATIONS,
    INCOMPLETE_INPUTS_MESSAGE,
    INCOMPLETE_TRIP_MESSAGE,
    INVALID_DURATION_MESSAGE,
    START_LOCATION,
    ItineraryGenerator,
    ItineraryValidationError,
    risk_level_for,
)
from planner.models import (
    CalculatedMetrics,
    ExternalFactors,
    RiderProfile,
    RiderRecommendation,
    TripPreferences,
    VehicleCondition,
    VehicleRecommendation,
    VehicleSpecs,
)


START = date(2026, 11, 1)

RIDER = RiderProfile(
    name="Meera",
    age=29,
    height=165,
    weight=58,
    bmi=21.3,
    bmi_category="Normal",
    stamina_score=65,
    stamina_level="Moderate",
    total_load=58,
)
TRIP = TripPreferences(trip_duration_days=3)
EXTERNAL = ExternalFactors()
SPECS = VehicleSpecs(
    make="Royal Enfield",
    model="Himalayan",
    year=2022,
    engine_cc=411,
    ground_clearance=220,
    vehicle_weight=199,
    fuel_tank_capacity=15,
    fuel_efficiency=30,
    brake_type="ABS",
)
CONDITION = VehicleCondition(current_odometer=12000)
METRICS = CalculatedMetrics(estimated_range=450.0, maintenance_urgency="low")
RIDER_REC = RiderRecommendation(coach_tips="Coach says hi.", risk_alert="Rider and trip conditions look good!")
VEHICLE_REC = VehicleRecommendation(performance_tips="Perf.", maintenance_tips="Maint.", safety_alerts="All clear.")


def _generate(rider=RIDER, trip=TRIP, external=EXTERNAL, specs=SPECS, metrics=METRICS,
              vehicle_rec=VEHICLE_REC, seed=7, start_date=START):
    return ItineraryGenerator.generate(
        rider=rider,
        trip=trip,
        external=external,
        specs=specs,
        condition=CONDITION,
        metrics=metrics,
        rider_rec=RIDER_REC,
        vehicle_rec=vehicle_rec,
        rng=random.Random(seed),
        start_date=start_date,
    )


class _FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


class TestValidation:

    @pytest.mark.parametrize("name,rider,specs", [
        ("no rider name", replace(RIDER, name=""), SPECS),
        ("no rider age", replace(RIDER, age=None), SPECS),
        ("no rider weight", replace(RIDER, weight=None), SPECS),
        ("no vehicle year", RIDER, replace(SPECS, year=None)),
        ("specs not loaded", RIDER, replace(SPECS, engine_cc=None)),
        ("no fuel figures", RIDER, replace(SPECS, fuel_efficiency=None)),
    ])
    def test_incomplete_inputs(self, name, rider, specs):
        with pytest.raises(ItineraryValidationError, match=re.escape(INCOMPLETE_INPUTS_MESSAGE)):
            _generate(rider=rider, specs=specs)

    @pytest.mark.parametrize("days", [0, -2])
    def test_invalid_duration(self, days):
        with pytest.raises(ItineraryValidationError, match=INVALID_DURATION_MESSAGE):
            _generate(trip=replace(TRIP, trip_duration_days=days))

    @pytest.mark.parametrize("field", ["desired_pace", "expected_terrain"])
    def test_missing_trip_choice(self, field):
        with pytest.raises(ItineraryValidationError, match=INCOMPLETE_TRIP_MESSAGE):
            _generate(trip=replace(TRIP, **{field: None}))

    def test_validation_error_is_value_error(self):
        assert issubclass(ItineraryValidationError, ValueError)


class TestDailyDistance:

    CASES = [
        # (name, pace, stamina, terrain, expected)
        ("moderate", "moderate", "Moderate", "mixed", 250),
        ("relaxed", "relaxed", "Moderate", "mixed", 200),
        ("fast and excellent", "fast", "Excellent", "highway", 330),
        ("fast and low", "fast", "Low", "highway", 210),
        ("off-road cap", "fast", "High", "off-road", 150),
        ("off-road under cap", "relaxed", "Low", "off-road", 140),
    ]

    @pytest.mark.parametrize("name,pace,stamina,terrain,expected", CASES)
    def test_distance(self, name, pace, stamina, terrain, expected):
        rider = replace(RIDER, stamina_level=stamina)
        trip = replace(TRIP, desired_pace=pace, expected_terrain=terrain)
        assert ItineraryGenerator.daily_distance(rider, trip) == pytest.approx(expected), f"Failed on {name}"


class TestRidingHours:

    @pytest.mark.parametrize("distance,terrain,expected", [
        (250, "highway", 3.6),
        (100, "highway", 3),
        (150, "off-road", 6.0),
        (200, "Winding Mountain Roads", 5.0),
        (200, "Rural Roads", 4.4),
        (220, "Coastal Highway", 4.0),
    ])
    def test_hours(self, distance, terrain, expected):
        assert ItineraryGenerator.riding_hours(distance, terrain) == expected


class TestDayTerrain:

    def test_hill_station_is_winding(self):
        assert ItineraryGenerator.day_terrain("highway", "Hill Station", random.Random(1)) == "Winding Mountain Roads"

    def test_coastal_town(self):
        assert ItineraryGenerator.day_terrain("off-road", "Coastal Town", random.Random(1)) == "Coastal Highway"

    def test_mixed_may_become_rural(self):
        assert ItineraryGenerator.day_terrain("mixed", "Historic City", _FixedRandom(0.9)) == "Rural Roads"
        assert ItineraryGenerator.day_terrain("mixed", "Historic City", _FixedRandom(0.2)) == "mixed"


class TestPickDestination:

    def test_never_repeats_current(self):
        rng = random.Random(3)
        for _ in range(50):
            name, _type = ItineraryGenerator.pick_destination("Goa", rng)
            assert name != "Goa"

    def test_from_pool(self):
        assert ItineraryGenerator.pick_destination(START_LOCATION, random.Random(3)) in DESTINATIONS


class TestPlanStops:

    def test_rest_stops_with_lunch_fallback(self):
        stops = ItineraryGenerator.plan_stops(225, 9, "Moderate", "balance", "Goa", _FixedRandom(0.1))

        assert [s.type for s in stops] == ["Rest", "Rest", "Rest", "Food"]
        assert [s.time for s in stops[:3]] == ["10:00", "13:00", "15:00"]
        assert [s.location for s in stops[:3]] == [
            "Rest Area at 62km",
            "Rest Area at 125km",
            "Rest Area at 187km",
        ]
        assert stops[-1].name == "Lunch Break"
        assert stops[-1].location == "Restaurant in Goa"
        assert stops[-1].time == "13:00"

    def test_food_roll_skips_fallback(self):
        stops = ItineraryGenerator.plan_stops(150, 4, "Low", "balance", "Jaipur", _FixedRandom(0.5))
        assert [s.type for s in stops] == ["Food"]
        assert stops[0].name == "Lunch/Snack Break"

    def test_scenery_priority_gets_viewpoints(self):
        stops = ItineraryGenerator.plan_stops(300, 7, "High", "scenery", "Leh", _FixedRandom(0.8))
        assert [s.type for s in stops] == ["Sightseeing", "Sightseeing", "Food"]

    def test_short_day_has_only_lunch(self):
        stops = ItineraryGenerator.plan_stops(100, 3, "Excellent", "balance", "Ooty", random.Random(1))
        assert len(stops) == 1
        assert stops[0].type == "Food"


class TestDayRisk:

    @pytest.mark.parametrize("score,expected", [
        (0, "Low"), (3, "Low"), (4, "Moderate"), (6, "Moderate"),
        (7, "High"), (9, "High"), (10, "Critical"), (20, "Critical"),
    ])
    def test_levels(self, score, expected):
        assert risk_level_for(score) == expected

    CASES = [
        # (name, terrain, hours, rider_changes, external, metric_changes, sentiment, expected)
        ("calm", "highway", 4, {}, ExternalFactors(), {}, "positive", 0),
        ("long day moderate stamina", "highway", 6.5, {}, ExternalFactors(), {}, "positive", 2),
        ("low stamina", "highway", 4, {"stamina_level": "Low"}, ExternalFactors(), {}, "positive", 3),
        ("tired rider bad vehicle", "highway", 4, {"recent_fatigue": "high"}, ExternalFactors(),
         {"maintenance_urgency": "critical"}, "warning", 14),
        ("off-road novice", "off-road", 4, {"terrain_adaptability": "low"}, ExternalFactors(), {}, "positive", 5),
        ("aggressive on winding roads", "Winding Mountain Roads", 4, {"riding_style": "Aggressive"},
         ExternalFactors(), {}, "positive", 3),
        ("bad conditions", "highway", 4, {"stamina_level": "Low"},
         ExternalFactors(road_conditions="patchy", weather_forecast="rainy", traffic_density="high"),
         {}, "positive", 12),
    ]

    @pytest.mark.parametrize("name,terrain,hours,rider_changes,external,metric_changes,sentiment,expected", CASES)
    def test_score(self, name, terrain, hours, rider_changes, external, metric_changes, sentiment, expected):
        score = ItineraryGenerator.day_risk_score(
            terrain,
            hours,
            replace(RIDER, **rider_changes),
            external,
            replace(METRICS, **metric_changes),
            replace(VEHICLE_REC, overall_vehicle_sentiment=sentiment),
        )
        assert score == expected, f"Failed on {name}: {score}"


class TestGenerate:

    def test_one_entry_per_day(self):
        plan = _generate()
        assert [d.day for d in plan.days] == [1, 2, 3]
        assert [d.date for d in plan.days] == ["2026-11-01", "2026-11-02", "2026-11-03"]

    def test_days_chain_locations(self):
        plan = _generate()
        assert plan.days[0].start_location == START_LOCATION
        for previous, current in zip(plan.days, plan.days[1:]):
            assert current.start_location == previous.destination
        for day in plan.days:
            assert day.destination != day.start_location

    def test_every_day_has_food_and_sorted_stops(self):
        plan = _generate(trip=replace(TRIP, trip_duration_days=6), seed=11)
        for day in plan.days:
            assert any(s.type == "Food" for s in day.stop_points), f"Day {day.day} has no food stop"
            hours = [s.hour for s in day.stop_points]
            assert hours == sorted(hours)

    def test_same_seed_same_plan(self):
        assert _generate(seed=42).to_dict() == _generate(seed=42).to_dict()

    def test_day_ids_are_unique_uuid4(self):
        plan = _generate(trip=replace(TRIP, trip_duration_days=5))
        ids = [d.id for d in plan.days]
        assert len(set(ids)) == 5
        assert all(uuid.UUID(i).version == 4 for i in ids)

    def test_small_tank_refuels_every_day(self):
        specs = replace(SPECS, fuel_tank_capacity=10, fuel_efficiency=20)
        plan = _generate(specs=specs, trip=replace(TRIP, expected_terrain="highway"))
        for day in plan.days:
            fuel = [s for s in day.stop_points if s.type == "Fuel"]
            assert len(fuel) == 1
            assert re.fullmatch(r"Fuel Station near \d+km mark", fuel[0].location)

    def test_large_tank_skips_first_day_fuel(self):
        specs = replace(SPECS, fuel_tank_capacity=20, fuel_efficiency=40)
        plan = _generate(specs=specs)
        assert not any(s.type == "Fuel" for s in plan.days[0].stop_points)

    def test_distance_rounded_to_whole_km(self):
        rider = replace(RIDER, preferred_daily_distance=237.6)
        plan = _generate(rider=rider)
        assert all(d.distance_km == 238.0 for d in plan.days)

    def test_default_start_is_tomorrow(self):
        plan = _generate(start_date=None)
        assert plan.days[0].date == (date.today() + timedelta(days=1)).isoformat()

    def test_to_dict_shape(self):
        data = _generate().to_dict()
        assert set(data) == {"generated_plan", "overall_recommendation"}
        first = data["generated_plan"][0]
        assert {"id", "day", "date", "start_location", "destination", "distance_km",
                "estimated_time_hours", "terrain", "risk_level", "risk_score",
                "stop_points", "day_tips"} <= set(first)
        assert {"name", "type", "location", "time"} == set(first["stop_points"][0])


class TestOverallRecommendation:

    def test_calm_trip_is_positive(self):
        plan = _generate()
        overall = plan.overall
        assert overall.overall_sentiment == "positive"
        assert overall.risk_alert.startswith("This trip looks good with manageable risks.")
        assert overall.total_distance_km == sum(d.distance_km for d in plan.days)
        assert overall.average_risk_score == 1.0
        assert "Your total trip distance is approximately 750 km over 3 days" in overall.coach_tips
        assert overall.coach_tips.startswith("Coach says hi. Perf. Maint.")

    def test_fast_pace_with_low_stamina_is_warning(self):
        rider = replace(RIDER, stamina_level="Low")
        trip = replace(TRIP, desired_pace="fast")
        overall = _generate(rider=rider, trip=trip).overall
        assert overall.overall_sentiment == "warning"
        assert "Mismatch between desired fast pace and low rider stamina." in overall.risk_alert

    def test_fair_weather_rider_with_bad_forecast_is_warning(self):
        trip = replace(TRIP, weather_tolerance="fair-weather-only")
        overall = _generate(trip=trip, external=ExternalFactors(weather_forecast="cold")).overall
        assert overall.overall_sentiment == "warning"
        assert "forecast is cold" in overall.risk_alert

    def test_risky_days_raise_warning(self):
        rider = replace(RIDER, stamina_level="Low", recent_fatigue="high")
        external = ExternalFactors(weather_forecast="rainy", road_conditions="rough")
        plan = _generate(rider=rider, external=external)
        assert all(d.risk_level == "Critical" for d in plan.days)
        assert plan.overall.overall_sentiment == "warning"
        assert plan.overall.average_risk_score == 4.0

    def test_pillion_note(self):
        overall = _generate(rider=replace(RIDER, pillion=True)).overall
        assert "account for the pillion and luggage" in overall.coach_tips

    def test_paved_bike_off_road_note(self):
        metrics = replace(METRICS, terrain_suitability_verdict="Primarily for paved roads. Avoid rough terrain.")
        trip = replace(TRIP, expected_terrain="off-road")
        overall = _generate(metrics=metrics, trip=trip).overall
        assert "Your bike is primarily for paved roads" in overall.coach_tips
