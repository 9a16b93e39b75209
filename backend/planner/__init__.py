"""
Planner package - rider/vehicle session state and trip library

Submodules:
- models: Immutable rider, trip, environment and vehicle records
- state: PlannerState snapshot, reducers and recompute
- session_store: In-memory registry of planner sessions
- trip_library: Saved itinerary list with current selection

Only the records are exported here; import planner.state explicitly.
"""

from .models import (
    CalculatedMetrics,
    ExternalFactors,
    RiderProfile,
    RiderRecommendation,
    TripPreferences,
    VehicleCondition,
    VehicleRecommendation,
    VehicleSpecs,
)

__all__ = [
    "CalculatedMetrics",
    "ExternalFactors",
    "RiderProfile",
    "RiderRecommendation",
    "TripPreferences",
    "VehicleCondition",
    "VehicleRecommendation",
    "VehicleSpecs",
]
