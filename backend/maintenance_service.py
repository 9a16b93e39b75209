"""
Maintenance Service - Pure Deterministic Maintenance Assessment

Computes due odometers/dates, remaining component life and an additive
urgency score for a vehicle from its specs and current condition.

Scoring (additive):
- Service by distance: within 500 km of due +2, overdue +5 more
- Service by date: overdue +4, due within 30 days +1
- Tyres / brake pads: within 1000 km of due or any wear <= 30% +3,
  overdue or any wear <= 10% +6 more
- Chain: within 1000 km of due, tension off or rusty +3,
  overdue or tension loose/tight +6 more
- Fluids (oil, coolant, brake fluid): any critical +10, else any low +5
- Battery <= 20% +10, <= 40% +5
- Lights/horn: any not working +8, else any dim +3
- Mirror not good +5
- Each reported issue: engine / oil leak / clutch slipping +7, others +3

Urgency level: >= 25 critical, >= 15 high, >= 7 moderate, else low.

Missing inputs (None) skip their rule.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Tuple

from planner.models import VehicleCondition, VehicleSpecs


@dataclass(frozen=True)
class MaintenanceAssessment:
    """Immutable result of a maintenance assessment."""
    next_service_due_km: Optional[float]
    next_service_due_date: Optional[str]  # YYYY-MM-DD
    next_tire_change_due_km: Optional[float]
    next_brake_pad_change_due_km: Optional[float]
    next_chain_change_due_km: Optional[float]
    remaining_tire_life_km: Optional[float]
    remaining_brake_pad_life_km: Optional[float]
    remaining_chain_life_km: Optional[float]
    urgency_score: int
    maintenance_urgency: str  # low, moderate, high, critical


def add_months(start: date, months: int) -> date:
    """Calendar month addition, clamping the day to the end of the target month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


class MaintenanceAssessor:
    """
    Pure maintenance assessor.

    The assessment is a function of (specs, condition, today) only.
    """

    SERVICE_NEAR_KM = 500
    COMPONENT_NEAR_KM = 1000
    SERVICE_SOON_DAYS = 30

    WEAR_NEAR_PCT = 30
    WEAR_CRITICAL_PCT = 10

    SEVERE_ISSUE_KEYWORDS = ("engine", "oil leak", "clutch slipping")

    @staticmethod
    def urgency_level(score: int) -> str:
        if score >= 25:
            return "critical"
        if score >= 15:
            return "high"
        if score >= 7:
            return "moderate"
        return "low"

    @staticmethod
    def _component_due(
        last_change_km: Optional[float],
        lifespan_km: Optional[float],
        odometer: float,
    ) -> Tuple[Optional[float], Optional[float]]:
        """Due odometer and remaining life for a wear component, or (None, None)."""
        if not lifespan_km or last_change_km is None:
            return None, None
        due_km = last_change_km + lifespan_km
        return due_km, due_km - odometer

    @staticmethod
    def _wear_increment(
        due_km: Optional[float],
        odometer: float,
        wear_front: Optional[float],
        wear_rear: Optional[float],
    ) -> int:
        """Tyre/brake increment. Wear thresholds apply even when the due odometer is unknown."""
        wears = [w for w in (wear_front, wear_rear) if w is not None]
        near = (
            (due_km is not None and odometer >= due_km - MaintenanceAssessor.COMPONENT_NEAR_KM)
            or any(w <= MaintenanceAssessor.WEAR_NEAR_PCT for w in wears)
        )
        if not near:
            return 0
        overdue = (
            (due_km is not None and odometer >= due_km)
            or any(w <= MaintenanceAssessor.WEAR_CRITICAL_PCT for w in wears)
        )
        return 9 if overdue else 3

    @staticmethod
    def _chain_increment(due_km: Optional[float], odometer: float, condition: VehicleCondition) -> int:
        tension_off = condition.chain_tension_status in ("loose", "tight")
        near = (
            (due_km is not None and odometer >= due_km - MaintenanceAssessor.COMPONENT_NEAR_KM)
            or condition.chain_tension_status != "good"
            or condition.chain_lube_status == "rusty"
        )
        if not near:
            return 0
        if (due_km is not None and odometer >= due_km) or tension_off:
            return 9
        return 3

    @staticmethod
    def _service_date_increment(due: date, today: date) -> int:
        if today >= due:
            return 4
        if (due - today) <= timedelta(days=MaintenanceAssessor.SERVICE_SOON_DAYS):
            return 1
        return 0

    @staticmethod
    def _condition_increment(condition: VehicleCondition) -> int:
        """Fluids, battery, lights/horn and mirror."""
        score = 0

        fluids = (condition.oil_level_status, condition.coolant_level_status, condition.brake_fluid_level)
        if "critical" in fluids:
            score += 10
        elif "low" in fluids:
            score += 5

        if condition.battery_health is not None:
            if condition.battery_health <= 20:
                score += 10
            elif condition.battery_health <= 40:
                score += 5

        lights = (condition.headlight_function, condition.taillight_function, condition.turn_signal_function)
        if "not-working" in lights or condition.horn_function == "not-working":
            score += 8
        elif "dim" in lights:
            score += 3

        if condition.mirror_condition not in (None, "good"):
            score += 5

        return score

    @staticmethod
    def _issue_increment(condition: VehicleCondition) -> int:
        score = 0
        for issue in condition.recent_issues or []:
            text = issue.lower()
            if any(keyword in text for keyword in MaintenanceAssessor.SEVERE_ISSUE_KEYWORDS):
                score += 7
            else:
                score += 3
        return score

    @staticmethod
    def assess_maintenance_needs(
        specs: VehicleSpecs,
        condition: VehicleCondition,
        today: Optional[date] = None,
    ) -> MaintenanceAssessment:
        """
        Assess maintenance needs for a vehicle.

        Args:
            specs: Vehicle specs (service intervals and typical component lifespans)
            condition: Current vehicle condition
            today: Reference date for date-based service (defaults to date.today())

        Returns:
            MaintenanceAssessment with due figures, urgency score and level
        """
        today = today or date.today()
        odometer = condition.current_odometer or 0
        score = 0

        next_service_km = None
        if specs.service_interval_km and condition.last_service_km is not None:
            next_service_km = condition.last_service_km + specs.service_interval_km
            if odometer >= next_service_km - MaintenanceAssessor.SERVICE_NEAR_KM:
                score += 2
                if odometer >= next_service_km:
                    score += 5

        next_service_date = None
        last_service = _parse_iso_date(condition.last_service_date)
        if specs.service_interval_months and last_service is not None:
            due = add_months(last_service, int(specs.service_interval_months))
            next_service_date = due.isoformat()
            score += MaintenanceAssessor._service_date_increment(due, today)

        tire_due, tire_remaining = MaintenanceAssessor._component_due(
            condition.last_tire_change_km, specs.typical_tire_lifespan_km, odometer
        )
        score += MaintenanceAssessor._wear_increment(
            tire_due, odometer, condition.tire_wear_level_front, condition.tire_wear_level_rear
        )

        brake_due, brake_remaining = MaintenanceAssessor._component_due(
            condition.last_brake_pad_change_km, specs.typical_brake_pad_lifespan_km, odometer
        )
        score += MaintenanceAssessor._wear_increment(
            brake_due, odometer, condition.brake_pad_wear_front, condition.brake_pad_wear_rear
        )

        chain_due, chain_remaining = MaintenanceAssessor._component_due(
            condition.last_chain_change_km, specs.typical_chain_lifespan_km, odometer
        )
        score += MaintenanceAssessor._chain_increment(chain_due, odometer, condition)

        score += MaintenanceAssessor._condition_increment(condition)
        score += MaintenanceAssessor._issue_increment(condition)

        return MaintenanceAssessment(
            next_service_due_km=next_service_km,
            next_service_due_date=next_service_date,
            next_tire_change_due_km=tire_due,
            next_brake_pad_change_due_km=brake_due,
            next_chain_change_due_km=chain_due,
            remaining_tire_life_km=tire_remaining,
            remaining_brake_pad_life_km=brake_remaining,
            remaining_chain_life_km=chain_remaining,
            urgency_score=score,
            maintenance_urgency=MaintenanceAssessor.urgency_level(score),
        )
