"""
Itinerary Service - Rule-Based Multi-Day Trip Synthesis

Builds a day-by-day riding plan from the combined rider, trip, environment
and vehicle state: destination, distance, terrain, riding time, fuel and
rest stops, a per-day risk score and day tips, plus an overall trip
recommendation.

Randomness (destination picks, terrain coin flips, stop types) comes from an
injected random.Random so a seed reproduces the same plan.

Per-day risk score (additive):
- Low stamina +3; > 6 h riding with Moderate stamina +2; high fatigue +5
- Maintenance urgency high/critical +4; vehicle sentiment warning +5
- Off-road terrain with low adaptability +5; winding terrain with aggressive style +3
- Rainy or windy +4; rough or patchy roads +3; high traffic +2
Level: >= 10 Critical, >= 7 High, >= 4 Moderate, else Low.
"""

import logging
import math
import random
import uuid
from dataclasses import asdict, dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple

from common.sentiment import Sentiment
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

logger = logging.getLogger(__name__)


class ItineraryValidationError(ValueError):
    """Raised when rider or vehicle inputs are too incomplete to plan a trip."""


INCOMPLETE_INPUTS_MESSAGE = (
    "Please ensure your Rider Profile and Vehicle Setup are fully completed and "
    "detailed specs are loaded before generating an itinerary."
)
INVALID_DURATION_MESSAGE = "Trip duration must be at least 1 day."
INCOMPLETE_TRIP_MESSAGE = "Please choose a pace and the expected terrain before generating an itinerary."

START_LOCATION = "Your Current City"

# (name, type)
DESTINATIONS: List[Tuple[str, str]] = [
    ("Shimla", "Hill Station"),
    ("Goa", "Coastal Town"),
    ("Jaipur", "Historic City"),
    ("Leh", "High Altitude Desert"),
    ("Rishikesh", "Spiritual Town"),
    ("Ooty", "Hill Station"),
    ("Pondicherry", "Coastal Town"),
    ("Udaipur", "Historic City"),
    ("Manali", "Mountain Valley"),
    ("Varanasi", "Spiritual City"),
]

# km/h keyed by the first word of the lowercased terrain label
AVERAGE_SPEED_KMH = {
    "relaxed": 40,
    "moderate": 55,
    "fast": 70,
    "highway": 70,
    "mixed": 50,
    "off-road": 25,
    "winding": 40,
    "rural": 45,
}
DEFAULT_SPEED_KMH = AVERAGE_SPEED_KMH["moderate"]

REST_INTERVAL_HOURS = {"Excellent": 3.5, "High": 3, "Moderate": 2.5, "Low": 2}

PACE_MULTIPLIERS = {"relaxed": 0.8, "fast": 1.2}
STAMINA_DISTANCE_MULTIPLIERS = {"Low": 0.7, "Excellent": 1.1}

OFF_ROAD_DAILY_CAP_KM = 150
MIN_RIDING_HOURS = 3
DAY_START_HOUR = 8
LUNCH_HOUR = 13

FUEL_STOP_THRESHOLD = 0.7  # refuel once this share of the tank is used
DEFAULT_FUEL_EFFICIENCY = 35
DEFAULT_TANK_CAPACITY = 15

RISK_LEVEL_POINTS = {"Low": 1, "Moderate": 2, "High": 3, "Critical": 4}


@dataclass(frozen=True)
class StopPoint:
    name: str
    type: str  # Fuel, Rest, Food, Sightseeing
    location: str
    time: str  # HH:MM, 24 h

    @property
    def hour(self) -> int:
        return int(self.time.split(":")[0])


@dataclass(frozen=True)
class ItineraryDay:
    id: str
    day: int
    date: str  # YYYY-MM-DD
    start_location: str
    destination: str
    distance_km: float
    estimated_time_hours: float
    terrain: str
    risk_level: str  # Low, Moderate, High, Critical
    risk_score: int
    stop_points: List[StopPoint] = field(default_factory=list)
    day_tips: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TripRecommendation:
    coach_tips: str
    risk_alert: str
    overall_sentiment: str
    total_distance_km: float
    total_riding_hours: float
    average_risk_score: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ItineraryPlan:
    days: List[ItineraryDay]
    overall: TripRecommendation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_plan": [d.to_dict() for d in self.days],
            "overall_recommendation": self.overall.to_dict(),
        }


def risk_level_for(score: int) -> str:
    if score >= 10:
        return "Critical"
    if score >= 7:
        return "High"
    if score >= 4:
        return "Moderate"
    return "Low"


def _hhmm(hour: int) -> str:
    return f"{hour:02d}:00"


class ItineraryGenerator:
    """
    Rule-based itinerary generator.

    Usage:
        plan = ItineraryGenerator.generate(rider, trip, external, specs, condition,
                                           metrics, rider_rec, vehicle_rec,
                                           rng=random.Random(42))
    """

    @staticmethod
    def validate_trip_inputs(rider: RiderProfile, specs: VehicleSpecs, trip: TripPreferences) -> None:
        """
        Check the inputs needed to plan a trip.

        Raises:
            ItineraryValidationError: With a user-facing message
        """
        rider_complete = all([rider.name, rider.age, rider.height, rider.weight])
        vehicle_complete = all([specs.make, specs.model, specs.year, specs.engine_cc])
        vehicle_calculable = all([
            specs.fuel_efficiency,
            specs.fuel_tank_capacity,
            specs.vehicle_weight,
            specs.ground_clearance,
        ])
        if not (rider_complete and vehicle_complete and vehicle_calculable):
            raise ItineraryValidationError(INCOMPLETE_INPUTS_MESSAGE)
        if not trip.trip_duration_days or trip.trip_duration_days < 1:
            raise ItineraryValidationError(INVALID_DURATION_MESSAGE)
        if not trip.desired_pace or not trip.expected_terrain:
            raise ItineraryValidationError(INCOMPLETE_TRIP_MESSAGE)

    @staticmethod
    def pick_destination(current: str, rng: random.Random) -> Tuple[str, str]:
        """Uniform pick from the pool, excluding the current location unless nothing else is left."""
        candidates = [d for d in DESTINATIONS if d[0] != current] or DESTINATIONS
        return rng.choice(candidates)

    @staticmethod
    def daily_distance(rider: RiderProfile, trip: TripPreferences) -> float:
        distance = float(rider.preferred_daily_distance or 0)
        distance *= PACE_MULTIPLIERS.get(trip.desired_pace, 1.0)
        distance *= STAMINA_DISTANCE_MULTIPLIERS.get(rider.stamina_level, 1.0)
        if trip.expected_terrain == "off-road" and distance > OFF_ROAD_DAILY_CAP_KM:
            distance = float(OFF_ROAD_DAILY_CAP_KM)
        return distance

    @staticmethod
    def day_terrain(expected_terrain: str, destination_type: str, rng: random.Random) -> str:
        terrain = expected_terrain
        if destination_type in ("Hill Station", "Mountain Valley"):
            terrain = "Winding Mountain Roads"
        if destination_type == "Coastal Town":
            terrain = "Coastal Highway"
        if terrain == "mixed" and rng.random() > 0.5:
            terrain = "Rural Roads"
        return terrain

    @staticmethod
    def riding_hours(distance_km: float, terrain: str) -> float:
        speed = AVERAGE_SPEED_KMH.get(terrain.lower().split(" ")[0], DEFAULT_SPEED_KMH)
        return max(round(distance_km / speed, 1), MIN_RIDING_HOURS)

    @staticmethod
    def plan_stops(
        distance_km: float,
        hours: float,
        stamina_level: str,
        comfort_priority: str,
        destination: str,
        rng: random.Random,
    ) -> List[StopPoint]:
        """Rest/food/sightseeing stops at the rest interval, plus a lunch fallback."""
        stops: List[StopPoint] = []
        interval = REST_INTERVAL_HOURS.get(stamina_level, REST_INTERVAL_HOURS["Moderate"])
        segment_km = distance_km / (hours / interval)
        ridden = 0.0
        covered = 0.0

        while ridden < hours:
            ridden += interval
            if ridden >= hours:
                break
            time = _hhmm(DAY_START_HOUR + math.floor(ridden))
            location = f"Rest Area at {math.floor(covered + segment_km)}km"
            roll = rng.random()
            if roll < 0.4:
                stops.append(StopPoint("Short Rest Stop", "Rest", location, time))
            elif roll < 0.7:
                stops.append(StopPoint("Lunch/Snack Break", "Food", location, time))
            elif comfort_priority == "scenery" or rng.random() > 0.5:
                stops.append(StopPoint("Scenic Viewpoint", "Sightseeing", location, time))
            covered += segment_km

        if not any(s.type == "Food" for s in stops):
            stops.append(StopPoint("Lunch Break", "Food", f"Restaurant in {destination}", _hhmm(LUNCH_HOUR)))
        return stops

    @staticmethod
    def day_risk_score(
        terrain: str,
        hours: float,
        rider: RiderProfile,
        external: ExternalFactors,
        metrics: CalculatedMetrics,
        vehicle_rec: VehicleRecommendation,
    ) -> int:
        score = 0
        if rider.stamina_level == "Low":
            score += 3
        if hours > 6 and rider.stamina_level == "Moderate":
            score += 2
        if rider.recent_fatigue == "high":
            score += 5
        if metrics.maintenance_urgency in ("high", "critical"):
            score += 4
        if vehicle_rec.overall_vehicle_sentiment == Sentiment.WARNING.value:
            score += 5
        if "off-road" in terrain and rider.terrain_adaptability == "low":
            score += 5
        if "Winding" in terrain and rider.riding_style == "Aggressive":
            score += 3
        if external.weather_forecast in ("rainy", "windy"):
            score += 4
        if external.road_conditions in ("rough", "patchy"):
            score += 3
        if external.traffic_density == "high":
            score += 2
        return score

    @staticmethod
    def day_tips(
        terrain: str,
        hours: float,
        distance_km: float,
        risk_level: str,
        rider: RiderProfile,
        external: ExternalFactors,
        specs: VehicleSpecs,
        metrics: CalculatedMetrics,
    ) -> str:
        tips = [f"Prepare for {terrain} terrain."]
        if hours > 5:
            tips.append("This is a longer riding day, ensure you take ample rest breaks.")
        if risk_level in ("High", "Critical"):
            tips.append(
                "🚨 High risk detected for this day. Exercise extreme caution, especially with "
                f"{external.weather_forecast} weather and {external.road_conditions} roads."
            )
        if "off-road" in terrain and specs.ground_clearance is not None and specs.ground_clearance < 180:
            tips.append("Your vehicle might have limited ground clearance for off-road sections. Ride carefully.")
        if "Winding" in terrain and specs.brake_type != "ABS":
            tips.append("Be extra cautious on winding roads without ABS. Maintain safe speeds.")
        if rider.hydration_litres is not None and rider.hydration_litres < 2.5:
            tips.append("Remember to hydrate frequently throughout the day.")
        if rider.sleep_hours is not None and rider.sleep_hours < 7:
            tips.append("Ensure you get enough sleep before this day's ride.")
        if metrics.estimated_range is not None and metrics.estimated_range < distance_km * 1.2:
            tips.append("Fuel stop is critical today, monitor your tank closely.")
        return " ".join(tips)

    @staticmethod
    def generate(
        rider: RiderProfile,
        trip: TripPreferences,
        external: ExternalFactors,
        specs: VehicleSpecs,
        condition: VehicleCondition,
        metrics: CalculatedMetrics,
        rider_rec: RiderRecommendation,
        vehicle_rec: VehicleRecommendation,
        rng: Optional[random.Random] = None,
        start_date: Optional[date] = None,
    ) -> ItineraryPlan:
        """
        Generate a multi-day itinerary.

        Args:
            rider, trip, external: Rider profile (with derived metrics) and trip context
            specs, condition, metrics: Loaded vehicle specs, condition and derived metrics
            rider_rec, vehicle_rec: Current rider and vehicle recommendation blocks
            rng: Random source (defaults to an unseeded random.Random)
            start_date: Date of day 1 (defaults to tomorrow)

        Returns:
            ItineraryPlan with one ItineraryDay per trip day and the overall recommendation

        Raises:
            ItineraryValidationError: If rider or vehicle inputs are incomplete
        """
        ItineraryGenerator.validate_trip_inputs(rider, specs, trip)
        rng = rng or random.Random()
        start_date = start_date or (date.today() + timedelta(days=1))

        tank = specs.fuel_tank_capacity or DEFAULT_TANK_CAPACITY
        efficiency = specs.fuel_efficiency or DEFAULT_FUEL_EFFICIENCY
        odometer = condition.current_odometer or 0
        fuel_level = float(tank)
        location = START_LOCATION
        days: List[ItineraryDay] = []

        for day_num in range(1, trip.trip_duration_days + 1):
            destination, destination_type = ItineraryGenerator.pick_destination(location, rng)
            distance = ItineraryGenerator.daily_distance(rider, trip)
            terrain = ItineraryGenerator.day_terrain(trip.expected_terrain, destination_type, rng)
            hours = ItineraryGenerator.riding_hours(distance, terrain)
            odometer += distance

            stops: List[StopPoint] = []
            fuel_level -= distance / efficiency
            if fuel_level <= tank * (1 - FUEL_STOP_THRESHOLD):
                mark = math.floor(distance * rng.random())
                fuel_time = _hhmm(DAY_START_HOUR + math.floor(hours * 0.2))
                stops.append(StopPoint("Fuel Stop", "Fuel", f"Fuel Station near {mark}km mark", fuel_time))
                fuel_level = float(tank)

            stops.extend(ItineraryGenerator.plan_stops(
                distance, hours, rider.stamina_level, trip.comfort_priority, destination, rng
            ))
            stops.sort(key=lambda s: s.hour)

            risk_score = ItineraryGenerator.day_risk_score(terrain, hours, rider, external, metrics, vehicle_rec)
            risk_level = risk_level_for(risk_score)
            tips = ItineraryGenerator.day_tips(
                terrain, hours, distance, risk_level, rider, external, specs, metrics
            )

            days.append(ItineraryDay(
                id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
                day=day_num,
                date=(start_date + timedelta(days=day_num - 1)).isoformat(),
                start_location=location,
                destination=destination,
                distance_km=float(round(distance)),
                estimated_time_hours=hours,
                terrain=terrain,
                risk_level=risk_level,
                risk_score=risk_score,
                stop_points=stops,
                day_tips=tips,
            ))
            location = destination

        overall = ItineraryGenerator.overall_recommendation(
            days, rider, trip, external, metrics, rider_rec, vehicle_rec
        )
        logger.info(
            f"Generated {len(days)}-day itinerary for {rider.name}: "
            f"{overall.total_distance_km} km, sentiment {overall.overall_sentiment}"
        )
        return ItineraryPlan(days=days, overall=overall)

    @staticmethod
    def overall_recommendation(
        days: List[ItineraryDay],
        rider: RiderProfile,
        trip: TripPreferences,
        external: ExternalFactors,
        metrics: CalculatedMetrics,
        rider_rec: RiderRecommendation,
        vehicle_rec: VehicleRecommendation,
    ) -> TripRecommendation:
        total_distance = sum(d.distance_km for d in days)
        total_hours = round(sum(d.estimated_time_hours for d in days), 1)
        average_risk = sum(RISK_LEVEL_POINTS[d.risk_level] for d in days) / len(days)

        risk_alert: List[str] = []
        if average_risk >= 3.5:
            sentiment = Sentiment.WARNING
            risk_alert.append(
                "🚨 This trip has a high overall risk profile. Reconsider sections or prepare extensively."
            )
        elif average_risk >= 2.5:
            sentiment = Sentiment.CAUTIONARY
            risk_alert.append(
                "⚠️ Be cautious! This trip has moderate risks. Pay close attention to daily alerts."
            )
        else:
            sentiment = Sentiment.POSITIVE
            risk_alert.append("This trip looks good with manageable risks. Enjoy the ride!")

        coach_tips = [rider_rec.coach_tips, vehicle_rec.performance_tips, vehicle_rec.maintenance_tips]
        risk_alert.extend([rider_rec.risk_alert, vehicle_rec.safety_alerts])

        total_km = int(total_distance) if float(total_distance).is_integer() else total_distance
        coach_tips.append(
            f"Your total trip distance is approximately {total_km} km over {len(days)} days, "
            f"with about {total_hours:.1f} hours of riding."
        )
        if rider.pillion:
            coach_tips.append("Remember to account for the pillion and luggage in your riding style and braking.")
        if "Primarily for paved roads" in metrics.terrain_suitability_verdict and "off-road" in trip.expected_terrain:
            coach_tips.append(
                "Your bike is primarily for paved roads, so exercise extreme caution on any off-road "
                "sections planned."
            )

        if trip.desired_pace == "fast" and rider.stamina_level == "Low":
            risk_alert.append(
                "Mismatch between desired fast pace and low rider stamina. This significantly increases fatigue risk."
            )
            sentiment = Sentiment.WARNING
        if trip.weather_tolerance == "fair-weather-only" and external.weather_forecast != "clear":
            risk_alert.append(
                f"Your weather tolerance is 'fair-weather-only' but the forecast is {external.weather_forecast}. "
                "Reconsider trip dates or prepare for adverse conditions."
            )
            sentiment = Sentiment.WARNING

        return TripRecommendation(
            coach_tips=" ".join(t for t in coach_tips if t),
            risk_alert=" ".join(t for t in risk_alert if t),
            overall_sentiment=sentiment.value,
            total_distance_km=total_distance,
            total_riding_hours=total_hours,
            average_risk_score=round(average_risk, 2),
        )
