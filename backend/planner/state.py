"""
Planner State - Immutable Snapshot, Reducers and Recompute

A PlannerState holds every input record plus the blocks derived from them.
Each reducer deep-merges a partial patch into one input record and returns
a new, fully recomputed snapshot; the previous snapshot is never touched.

Reducers:
- update_rider_profile(state, patch)
- update_trip_preferences(state, patch)
- update_external_factors(state, patch)
- update_vehicle_condition(state, patch)
- update_vehicle_specs(state, patch, provider) (async; may run a specs lookup)
- reset()

generate_itinerary(state, rng, start_date) runs the itinerary generator once
over the combined state.
"""

import logging
import random
from dataclasses import asdict, dataclass, field, replace
from datetime import date
from typing import Any, Dict, Mapping, Optional, Tuple

from common.merge import deep_merge
from common.sentiment import Sentiment
from itinerary_service import ItineraryGenerator, ItineraryPlan
from maintenance_service import MaintenanceAssessor
from planner.models import (
    CalculatedMetrics,
    ExternalFactors,
    RiderProfile,
    RiderRecommendation,
    TripPreferences,
    VehicleCondition,
    VehicleRecommendation,
    VehicleSpecs,
    _Record,
)
from providers.contracts import SpecsLookupError, SpecsProvider, coerce_specs
from recommendation_service import RiderAdvisor, VehicleAdvisor
from rider_metrics_service import calculate_bmi, classify_bmi, compute_total_load, estimate_stamina
from vehicle_metrics_service import VehicleMetricsService

logger = logging.getLogger(__name__)

SPECS_NOT_FOUND_MESSAGE = (
    "Detailed specs for {make} {model} {year} not found. Please check spelling or try another vehicle."
)
SPECS_LOOKUP_FAILED_MESSAGE = (
    "Failed to fetch vehicle specs. Please check your network or backend connection."
)


@dataclass(frozen=True)
class PlannerState:
    rider: RiderProfile = field(default_factory=RiderProfile)
    trip: TripPreferences = field(default_factory=TripPreferences)
    external: ExternalFactors = field(default_factory=ExternalFactors)
    vehicle_specs: VehicleSpecs = field(default_factory=VehicleSpecs)
    vehicle_condition: VehicleCondition = field(default_factory=VehicleCondition)
    metrics: CalculatedMetrics = field(default_factory=CalculatedMetrics)
    rider_recommendation: RiderRecommendation = field(default_factory=RiderRecommendation)
    vehicle_recommendation: VehicleRecommendation = field(default_factory=VehicleRecommendation)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _merge_record(record: _Record, patch: Mapping[str, Any]):
    """
    Deep-merge a patch into a record's input fields; derived fields in the patch are dropped.

    A null clears optional fields and resets the others to their default.
    """
    allowed = set(record.input_fields())
    defaults = record.non_nullable_defaults()
    clean = {
        k: defaults[k] if v is None and k in defaults else v
        for k, v in patch.items()
        if k in allowed
    }
    return type(record).from_dict(deep_merge(record.to_dict(), clean))


def _recompute_rider(rider: RiderProfile) -> RiderProfile:
    bmi = calculate_bmi(rider.weight, rider.height)
    rider = replace(rider, bmi=bmi, bmi_category=classify_bmi(bmi))
    stamina = estimate_stamina(rider)
    return replace(
        rider,
        stamina_score=stamina.score,
        stamina_level=stamina.level,
        total_load=compute_total_load(rider),
    )


def _recompute_vehicle(
    specs: VehicleSpecs,
    condition: VehicleCondition,
    today: date,
) -> Tuple[CalculatedMetrics, VehicleRecommendation]:
    if not specs.is_loaded:
        return CalculatedMetrics(), VehicleRecommendation(overall_vehicle_sentiment=Sentiment.NEUTRAL.value)

    performance = VehicleMetricsService.calculate_performance_metrics(specs)
    maintenance = MaintenanceAssessor.assess_maintenance_needs(specs, condition, today=today)
    metrics = CalculatedMetrics(
        power_to_weight_ratio=performance.power_to_weight_ratio,
        estimated_range=performance.estimated_range,
        fuel_cost_per_100_km=performance.fuel_cost_per_100_km,
        next_service_due_km=maintenance.next_service_due_km,
        next_service_due_date=maintenance.next_service_due_date,
        next_tire_change_due_km=maintenance.next_tire_change_due_km,
        next_brake_pad_change_due_km=maintenance.next_brake_pad_change_due_km,
        next_chain_change_due_km=maintenance.next_chain_change_due_km,
        remaining_tire_life_km=maintenance.remaining_tire_life_km,
        remaining_brake_pad_life_km=maintenance.remaining_brake_pad_life_km,
        remaining_chain_life_km=maintenance.remaining_chain_life_km,
        maintenance_urgency=maintenance.maintenance_urgency,
        urgency_score=maintenance.urgency_score,
        age_of_vehicle_years=VehicleMetricsService.calculate_vehicle_age(specs.year, today=today),
        terrain_suitability_verdict=VehicleMetricsService.determine_terrain_suitability(specs),
    )

    safety = VehicleAdvisor.generate_safety_alerts(specs, condition, metrics)
    recommendation = VehicleRecommendation(
        maintenance_tips=VehicleAdvisor.generate_maintenance_tips(specs, condition, metrics, today=today),
        performance_tips=VehicleAdvisor.generate_performance_tips(specs, metrics),
        safety_alerts=safety.text,
        overall_vehicle_sentiment=VehicleAdvisor.overall_vehicle_sentiment(
            safety.sentiment, metrics.maintenance_urgency
        ).value,
    )
    return metrics, recommendation


def recompute(state: PlannerState, today: Optional[date] = None) -> PlannerState:
    """Rebuild every derived field and recommendation block from the input records."""
    today = today or date.today()
    rider = _recompute_rider(state.rider)

    risk = RiderAdvisor.generate_rider_risk_assessment(rider, state.trip, state.external)
    rider_recommendation = RiderRecommendation(
        coach_tips=RiderAdvisor.generate_personalized_recommendation(rider, state.trip, state.external),
        risk_alert=risk.text,
        overall_sentiment=risk.sentiment.value,
    )

    metrics, vehicle_recommendation = _recompute_vehicle(state.vehicle_specs, state.vehicle_condition, today)

    return replace(
        state,
        rider=rider,
        metrics=metrics,
        rider_recommendation=rider_recommendation,
        vehicle_recommendation=vehicle_recommendation,
    )


def new_state(today: Optional[date] = None) -> PlannerState:
    """Default snapshot with derived blocks filled in."""
    return recompute(PlannerState(), today=today)


def reset(today: Optional[date] = None) -> PlannerState:
    return new_state(today=today)


def update_rider_profile(state: PlannerState, patch: Mapping[str, Any], today: Optional[date] = None) -> PlannerState:
    return recompute(replace(state, rider=_merge_record(state.rider, patch)), today=today)


def update_trip_preferences(state: PlannerState, patch: Mapping[str, Any], today: Optional[date] = None) -> PlannerState:
    return recompute(replace(state, trip=_merge_record(state.trip, patch)), today=today)


def update_external_factors(state: PlannerState, patch: Mapping[str, Any], today: Optional[date] = None) -> PlannerState:
    return recompute(replace(state, external=_merge_record(state.external, patch)), today=today)


def update_vehicle_condition(
    state: PlannerState,
    patch: Mapping[str, Any],
    today: Optional[date] = None,
) -> PlannerState:
    condition = _merge_record(state.vehicle_condition, patch)
    return recompute(replace(state, vehicle_condition=condition), today=today)


def _identity_changed(current: VehicleSpecs, patch: Mapping[str, Any]) -> bool:
    return any(
        patch.get(key) and patch.get(key) != getattr(current, key)
        for key in VehicleSpecs.IDENTITY_FIELDS
    )


async def update_vehicle_specs(
    state: PlannerState,
    patch: Mapping[str, Any],
    provider: Optional[SpecsProvider],
    today: Optional[date] = None,
) -> Tuple[PlannerState, Optional[str]]:
    """
    Merge a specs patch, running a lookup when make, model or year change.

    The lookup only runs once make, model and year are all known. Looked-up
    fields override the patch.

    Returns:
        (new_state, None) on success, or (state, error_message) when the
        lookup fails or finds nothing; the prior state is kept in that case.
    """
    looked_up: Dict[str, Any] = {}
    if provider is not None and _identity_changed(state.vehicle_specs, patch):
        make = patch.get("make") or state.vehicle_specs.make
        model = patch.get("model") or state.vehicle_specs.model
        year = patch.get("year") or state.vehicle_specs.year
        if make and model and year:
            try:
                found = await provider.get_specs(make, model, year)
                looked_up = coerce_specs(found) if found else {}
            except SpecsLookupError as e:
                logger.error(f"Error fetching detailed vehicle specs for {make} {model} {year}: {e}")
                return state, SPECS_LOOKUP_FAILED_MESSAGE
            if not looked_up:
                logger.info(f"No detailed specs for {make} {model} {year}")
                return state, SPECS_NOT_FOUND_MESSAGE.format(make=make, model=model, year=year)

    specs = _merge_record(state.vehicle_specs, {**patch, **looked_up})
    return recompute(replace(state, vehicle_specs=specs), today=today), None


def generate_itinerary(
    state: PlannerState,
    rng: Optional[random.Random] = None,
    start_date: Optional[date] = None,
) -> ItineraryPlan:
    """
    Run the itinerary generator over the current snapshot.

    Raises:
        ItineraryValidationError: If rider or vehicle inputs are incomplete
    """
    return ItineraryGenerator.generate(
        rider=state.rider,
        trip=state.trip,
        external=state.external,
        specs=state.vehicle_specs,
        condition=state.vehicle_condition,
        metrics=state.metrics,
        rider_rec=state.rider_recommendation,
        vehicle_rec=state.vehicle_recommendation,
        rng=rng,
        start_date=start_date,
    )
