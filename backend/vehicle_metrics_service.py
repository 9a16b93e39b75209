"""
Vehicle Metrics Service - Pure Deterministic Performance Calculations

Derives performance figures and a terrain verdict from vehicle specs.

Following the same principles as the other services:
- Pure functions with no side effects
- No external API calls
- Fully deterministic and testable (today is injectable)

Estimates:
- Power is approximated at 1 HP per 18 cc
- Fuel cost assumes a flat price per litre (FUEL_PRICE_PER_LITRE, default 100)
"""

import os
from dataclasses import dataclass
from datetime import date
from typing import Optional

from planner.models import VehicleSpecs


DEFAULT_FUEL_PRICE_PER_LITRE = 100.0


def _fuel_price_from_env() -> float:
    raw = os.environ.get("FUEL_PRICE_PER_LITRE")
    if not raw:
        return DEFAULT_FUEL_PRICE_PER_LITRE
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_FUEL_PRICE_PER_LITRE


@dataclass(frozen=True)
class PerformanceMetrics:
    """Immutable performance figures. Fields are None when their inputs are missing."""
    power_to_weight_ratio: Optional[float]  # HP per kg
    estimated_range: Optional[float]  # km on a full tank
    fuel_cost_per_100_km: Optional[float]


class VehicleMetricsService:
    """
    Pure vehicle performance calculator.

    All methods are static; same specs always produce the same metrics.
    """

    CC_PER_HP = 18
    MIN_VALID_YEAR = 1900

    TERRAIN_INSUFFICIENT = "Insufficient data for terrain verdict."
    TERRAIN_OFF_ROAD = "Excellent for off-road and touring."
    TERRAIN_MIXED = "Good for mixed terrain and light trails."
    TERRAIN_PAVED = "Primarily for paved roads. Avoid rough terrain."
    TERRAIN_GENERAL = "Suitable for general road use."

    @staticmethod
    def calculate_vehicle_age(year: Optional[int], today: Optional[date] = None) -> Optional[int]:
        """
        Age of the vehicle in whole years.

        Args:
            year: Year of manufacture
            today: Reference date (defaults to date.today())

        Returns:
            Age in years, or None if year is missing, <= 1900 or in the future
        """
        today = today or date.today()
        if not year or year <= VehicleMetricsService.MIN_VALID_YEAR or year > today.year:
            return None
        return today.year - year

    @staticmethod
    def calculate_performance_metrics(
        specs: VehicleSpecs,
        fuel_price_per_litre: Optional[float] = None,
    ) -> PerformanceMetrics:
        """
        Power-to-weight, full-tank range and fuel cost per 100 km.

        Args:
            specs: Vehicle specs (engine_cc, vehicle_weight, fuel_tank_capacity, fuel_efficiency)
            fuel_price_per_litre: Override for the configured fuel price

        Returns:
            PerformanceMetrics with None for any figure whose inputs are missing
        """
        if fuel_price_per_litre is None:
            fuel_price_per_litre = _fuel_price_from_env()

        power_to_weight = None
        if specs.engine_cc and specs.vehicle_weight:
            estimated_hp = specs.engine_cc / VehicleMetricsService.CC_PER_HP
            power_to_weight = round(estimated_hp / specs.vehicle_weight, 2)

        estimated_range = None
        if specs.fuel_tank_capacity and specs.fuel_efficiency:
            estimated_range = float(round(specs.fuel_tank_capacity * specs.fuel_efficiency))

        fuel_cost = None
        if specs.fuel_efficiency and specs.fuel_efficiency > 0:
            fuel_cost = round((100 / specs.fuel_efficiency) * fuel_price_per_litre, 2)

        return PerformanceMetrics(
            power_to_weight_ratio=power_to_weight,
            estimated_range=estimated_range,
            fuel_cost_per_100_km=fuel_cost,
        )

    @staticmethod
    def determine_terrain_suitability(specs: VehicleSpecs) -> str:
        """
        Classify terrain suitability from clearance, tyre type and suspension.

        Tyre and suspension matching is case-insensitive substring matching,
        so "Dual-Sport Radial" counts as dual-sport.
        """
        if not specs.ground_clearance or not specs.tire_type or not specs.suspension_type:
            return VehicleMetricsService.TERRAIN_INSUFFICIENT

        clearance = specs.ground_clearance
        tire = specs.tire_type.lower()
        suspension = specs.suspension_type.lower()

        if clearance >= 200 and ("off-road" in tire or "dual-sport" in tire) and "off-road" in suspension:
            return VehicleMetricsService.TERRAIN_OFF_ROAD
        if clearance >= 160 and ("dual-sport" in tire or "road" in tire) and "adjustable" in suspension:
            return VehicleMetricsService.TERRAIN_MIXED
        if clearance < 140 and "road" in tire:
            return VehicleMetricsService.TERRAIN_PAVED
        return VehicleMetricsService.TERRAIN_GENERAL
