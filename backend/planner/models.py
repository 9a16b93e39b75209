"""
Planner domain records.

Flat, immutable records for the rider, the trip, the environment and the
vehicle, plus the derived metric and recommendation blocks recomputed from
them. Updates never mutate a record; reducers in planner.state build new ones.
"""

from dataclasses import MISSING, dataclass, field, fields, asdict
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type, TypeVar, get_args

R = TypeVar("R", bound="_Record")


class _Record:
    """Dict conversion shared by every planner record."""

    # Fields computed by the planner; patches never set them directly.
    DERIVED_FIELDS: ClassVar[Tuple[str, ...]] = ()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls: Type[R], data: Optional[Dict[str, Any]]) -> R:
        """Build a record from a dict, ignoring keys the record does not define."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

    @classmethod
    def input_fields(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.name not in cls.DERIVED_FIELDS]

    @classmethod
    def non_nullable_defaults(cls) -> Dict[str, Any]:
        """Defaults of the input fields whose type does not admit None."""
        defaults = {}
        for f in fields(cls):
            if f.name in cls.DERIVED_FIELDS or type(None) in get_args(f.type):
                continue
            defaults[f.name] = f.default_factory() if f.default_factory is not MISSING else f.default
        return defaults


@dataclass(frozen=True)
class RiderProfile(_Record):
    """Rider attributes entered by the user, plus derived health metrics."""
    name: str = ""
    age: Optional[float] = None
    height: Optional[float] = None  # cm
    weight: Optional[float] = None  # kg
    experience_years: Optional[float] = 0
    riding_style: str = "Balanced"  # Aggressive, Scenic, Fuel-saving, Balanced
    preferred_daily_distance: float = 250  # km/day
    pillion: bool = False
    pillion_gender: str = ""  # Male, Female or ""
    luggage_weight: float = 0  # kg
    has_hard_luggage: bool = False
    sleep_hours: Optional[float] = 7
    hydration_litres: Optional[float] = 2.5
    terrain_adaptability: str = "moderate"  # low, moderate, high
    recent_fatigue: str = "none"  # none, mild, moderate, high
    fitness_level: str = "average"  # low, average, good, athletic
    diet_quality: str = "average"  # poor, average, good, excellent

    bmi: Optional[float] = None
    bmi_category: str = ""
    stamina_score: Optional[float] = None
    stamina_level: str = ""
    total_load: Optional[float] = None

    DERIVED_FIELDS: ClassVar[Tuple[str, ...]] = (
        "bmi",
        "bmi_category",
        "stamina_score",
        "stamina_level",
        "total_load",
    )


@dataclass(frozen=True)
class TripPreferences(_Record):
    desired_pace: str = "moderate"  # relaxed, moderate, fast
    trip_duration_days: int = 1
    expected_terrain: str = "mixed"  # highway, mixed, off-road
    comfort_priority: str = "balance"  # speed, comfort, scenery, balance
    weather_tolerance: str = "moderate"  # any, moderate, fair-weather-only


@dataclass(frozen=True)
class ExternalFactors(_Record):
    road_conditions: str = "good"  # good, patchy, rough, off-road
    weather_forecast: str = "clear"  # clear, rainy, windy, hot, cold
    traffic_density: str = "low"  # low, moderate, high


@dataclass(frozen=True)
class VehicleSpecs(_Record):
    """
    Vehicle specifications.

    Only make/model/year come from the user; everything else is populated by
    a specs lookup keyed on (make, model).
    """
    make: str = ""
    model: str = ""
    year: Optional[int] = None
    engine_cc: Optional[float] = None
    ground_clearance: Optional[float] = None  # mm
    vehicle_weight: Optional[float] = None  # dry weight, kg
    fuel_tank_capacity: Optional[float] = None  # litres
    fuel_efficiency: Optional[float] = None  # km per litre
    load_capacity: Optional[float] = None  # kg
    tire_type: Optional[str] = None  # road, dual-sport, off-road, sport
    brake_type: Optional[str] = None  # disc, drum, ABS
    suspension_type: Optional[str] = None  # standard, adjustable, upside-down, off-road
    cooling_system: Optional[str] = None  # air, liquid
    transmission_type: Optional[str] = None
    service_interval_km: Optional[float] = None
    service_interval_months: Optional[int] = None
    emission_standard: Optional[str] = None
    has_abs: Optional[bool] = None
    has_traction_control: Optional[bool] = None
    has_quick_shifter: Optional[bool] = None
    typical_tire_lifespan_km: Optional[float] = None
    typical_brake_pad_lifespan_km: Optional[float] = None
    typical_chain_lifespan_km: Optional[float] = None

    IDENTITY_FIELDS: ClassVar[Tuple[str, ...]] = ("make", "model", "year")

    @property
    def is_loaded(self) -> bool:
        """True once a lookup has populated the core spec fields."""
        return bool(self.engine_cc and self.vehicle_weight and self.ground_clearance)


@dataclass(frozen=True)
class VehicleCondition(_Record):
    """Current vehicle state as reported by the rider. Wear levels are % remaining."""
    current_odometer: float = 0
    tire_pressure_front: Optional[float] = None  # PSI
    tire_pressure_rear: Optional[float] = None
    tire_wear_level_front: Optional[float] = 80
    tire_wear_level_rear: Optional[float] = 80
    brake_pad_wear_front: Optional[float] = 80
    brake_pad_wear_rear: Optional[float] = 80
    brake_fluid_level: str = "good"  # good, low, critical
    chain_lube_status: str = "good"  # good, needs-lube, dry, rusty
    chain_tension_status: str = "good"  # good, loose, tight
    oil_level_status: str = "good"
    coolant_level_status: str = "good"
    battery_health: Optional[float] = 90
    headlight_function: str = "working"  # working, dim, not-working
    taillight_function: str = "working"
    turn_signal_function: str = "working"
    horn_function: str = "working"  # working, not-working
    mirror_condition: str = "good"  # good, cracked, missing
    last_tire_change_km: Optional[float] = 0
    last_oil_change_km: Optional[float] = 0
    last_brake_pad_change_km: Optional[float] = 0
    last_chain_change_km: Optional[float] = 0
    last_service_km: Optional[float] = 0
    last_service_date: Optional[str] = None  # YYYY-MM-DD
    recent_issues: List[str] = field(default_factory=list)
    customizations: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CalculatedMetrics(_Record):
    """Derived vehicle metrics. Recomputed whenever specs or condition change."""
    power_to_weight_ratio: Optional[float] = None  # HP per kg
    estimated_range: Optional[float] = None  # km on a full tank
    fuel_cost_per_100_km: Optional[float] = None
    next_service_due_km: Optional[float] = None
    next_service_due_date: Optional[str] = None
    next_tire_change_due_km: Optional[float] = None
    next_brake_pad_change_due_km: Optional[float] = None
    next_chain_change_due_km: Optional[float] = None
    remaining_tire_life_km: Optional[float] = None
    remaining_brake_pad_life_km: Optional[float] = None
    remaining_chain_life_km: Optional[float] = None
    maintenance_urgency: str = "low"  # low, moderate, high, critical
    urgency_score: int = 0
    age_of_vehicle_years: Optional[int] = None
    terrain_suitability_verdict: str = ""


@dataclass(frozen=True)
class RiderRecommendation(_Record):
    coach_tips: str = ""
    risk_alert: str = ""
    overall_sentiment: str = "neutral"


@dataclass(frozen=True)
class VehicleRecommendation(_Record):
    maintenance_tips: str = ""
    performance_tips: str = ""
    safety_alerts: str = ""
    overall_vehicle_sentiment: str = "positive"
