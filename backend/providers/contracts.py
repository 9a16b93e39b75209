from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol

from pydantic import BaseModel, ValidationError


class SpecsLookupError(Exception):
    """Raised when a specs source cannot be reached or returns garbage."""


class SpecsProvider(Protocol):
    async def get_specs(self, make: str, model: str, year: Optional[int]) -> Optional[Dict[str, Any]]:
        """Detailed spec fields for a vehicle, or None when the vehicle is unknown."""
        ...


class VehicleSpecsFields(BaseModel):
    """Lookup-populated vehicle spec fields, typed."""
    engine_cc: Optional[float] = None
    ground_clearance: Optional[float] = None  # mm
    vehicle_weight: Optional[float] = None  # kg
    fuel_tank_capacity: Optional[float] = None  # litres
    fuel_efficiency: Optional[float] = None  # km per litre
    load_capacity: Optional[float] = None
    tire_type: Optional[str] = None
    brake_type: Optional[str] = None
    suspension_type: Optional[str] = None
    cooling_system: Optional[str] = None
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


def coerce_specs(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate looked-up specs, coercing numeric strings ("411") to numbers.

    Unknown keys and nulls are dropped.

    Raises:
        SpecsLookupError: If a field holds a value of the wrong type
    """
    try:
        specs = VehicleSpecsFields.model_validate(dict(raw))
    except ValidationError as e:
        raise SpecsLookupError(f"Specs contain invalid values: {e.error_count()} field(s) rejected") from e
    return specs.model_dump(exclude_none=True)
