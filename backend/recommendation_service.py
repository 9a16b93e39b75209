"""
Recommendation Service - Rule-Based Rider and Vehicle Advice

Turns rider, trip, environment and vehicle records into human-readable
advice strings with a sentiment label.

Generators:
- RiderAdvisor.generate_rider_risk_assessment -> Advisory
- RiderAdvisor.generate_personalized_recommendation -> str (coach tips)
- VehicleAdvisor.generate_maintenance_tips -> str
- VehicleAdvisor.generate_performance_tips -> str
- VehicleAdvisor.generate_safety_alerts -> Advisory
- VehicleAdvisor.overall_vehicle_sentiment -> Sentiment

Each generator collects sentences in order and joins them with a single
space. Sentiment starts at positive and only escalates within one pass.
Inputs are never mutated.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from common.sentiment import Sentiment
from planner.models import (
    CalculatedMetrics,
    ExternalFactors,
    RiderProfile,
    TripPreferences,
    VehicleCondition,
    VehicleSpecs,
)


@dataclass(frozen=True)
class Advisory:
    """Advice text plus the tone it should be shown with."""
    text: str
    sentiment: Sentiment


def _fmt(value) -> str:
    """Render numbers without a trailing .0 for whole values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class RiderAdvisor:
    """Risk alerts and coach tips for the rider and trip."""

    NO_RISK = "Rider and trip conditions look good!"
    HEAVY_LOAD_KG = 200

    @staticmethod
    def generate_rider_risk_assessment(
        rider: RiderProfile,
        trip: TripPreferences,
        external: ExternalFactors,
    ) -> Advisory:
        """
        Rider/trip risk alert.

        Uses the derived stamina level and BMI category on the rider record.

        Returns:
            Advisory with "🚨 Rider/Trip Risk: ..." or the all-clear text
        """
        alerts: List[str] = []
        sentiment = Sentiment.POSITIVE

        if rider.stamina_level == "Low":
            alerts.append("Rider stamina is low, increasing fatigue risk on longer rides.")
            sentiment = sentiment.escalate(Sentiment.CAUTIONARY)
        elif rider.stamina_level == "Excellent" and rider.riding_style == "Aggressive":
            alerts.append(
                "High stamina combined with aggressive style requires extra caution on speed and braking."
            )

        if rider.bmi_category in ("Obese", "Underweight"):
            alerts.append(
                f"Rider BMI is {rider.bmi_category}, which can impact comfort and endurance."
            )
            sentiment = sentiment.escalate(Sentiment.NEUTRAL)

        if rider.recent_fatigue == "high":
            alerts.append("🚨 High rider fatigue detected. Postpone long rides or take extensive rest.")
            sentiment = sentiment.escalate(Sentiment.WARNING)
        elif rider.recent_fatigue == "moderate":
            alerts.append("Moderate rider fatigue. Plan shorter rides and frequent breaks.")
            sentiment = sentiment.escalate(Sentiment.NEUTRAL)

        short_sleep = rider.sleep_hours is not None and rider.sleep_hours < 6
        low_water = rider.hydration_litres is not None and rider.hydration_litres < 1.5
        if short_sleep or low_water:
            alerts.append(
                "Inadequate sleep or hydration can severely impair riding ability and focus. "
                "Prioritize rest and water intake."
            )
            sentiment = sentiment.escalate(Sentiment.CAUTIONARY)

        if trip.expected_terrain == "off-road" and rider.terrain_adaptability == "low":
            alerts.append(
                "Rider has low terrain adaptability for expected off-road conditions. "
                "Proceed with extreme caution or reconsider route."
            )
            sentiment = sentiment.escalate(Sentiment.CAUTIONARY)

        if external.weather_forecast == "rainy" and trip.weather_tolerance == "fair-weather-only":
            alerts.append(
                "Rainy weather forecast conflicts with rider preference. Consider rescheduling "
                "or preparing for wet conditions (appropriate gear)."
            )
            sentiment = sentiment.escalate(Sentiment.CAUTIONARY)
        elif external.weather_forecast in ("windy", "hot", "cold"):
            alerts.append(
                f"Expected weather is {external.weather_forecast}. Prepare for challenging riding "
                "conditions (e.g., wind gusts, heat exhaustion, hypothermia)."
            )
            sentiment = sentiment.escalate(Sentiment.CAUTIONARY)

        if external.traffic_density == "high" and rider.riding_style == "Aggressive":
            alerts.append(
                "High traffic combined with aggressive riding style increases accident risk. "
                "Exercise patience and defensive riding."
            )
            sentiment = sentiment.escalate(Sentiment.CAUTIONARY)

        if not alerts:
            return Advisory(text=RiderAdvisor.NO_RISK, sentiment=sentiment)
        return Advisory(text=f"🚨 Rider/Trip Risk: {' '.join(alerts)}", sentiment=sentiment)

    @staticmethod
    def generate_personalized_recommendation(
        rider: RiderProfile,
        trip: TripPreferences,
        external: ExternalFactors,
    ) -> str:
        """Coach-style tips: greeting, stamina, load, style, terrain, health, conditions, sign-off."""
        tips: List[str] = [f"Hello {rider.name or 'Rider'}! Let's get you ready for your journey."]

        if rider.stamina_level == "Low":
            tips.append(
                f"Based on your profile, your stamina seems limited. For a {trip.trip_duration_days}-day "
                "trip, I highly recommend planning shorter daily distances, perhaps around 100-150km, "
                "with frequent breaks every 1.5-2 hours. Prioritize good sleep and consistent hydration."
            )
        elif rider.stamina_level in ("High", "Excellent"):
            tips.append(
                "Your stamina is impressive! You're well-equipped to handle longer days. You can "
                f"comfortably aim for {_fmt(rider.preferred_daily_distance or 300)}km/day, but remember "
                "to still take short breaks to maintain focus."
            )
        else:
            tips.append(
                "Your stamina is moderate. Aim for a balanced approach: around 200-250km/day. Listen to "
                "your body and don't push yourself too hard, especially on the first day."
            )

        if rider.total_load is not None and rider.total_load > RiderAdvisor.HEAVY_LOAD_KG:
            tips.append(
                f"Your personal load (rider + pillion + luggage) is quite heavy at {_fmt(rider.total_load)}kg. "
                "This will impact your bike's handling. Consider offloading non-essentials if possible."
            )
        else:
            tips.append(
                "Your personal load is reasonable. Ensure luggage is securely fastened and weight is "
                "evenly distributed."
            )

        if rider.riding_style == "Aggressive":
            tips.append(
                "Your aggressive riding style can be exhilarating, but remember to always prioritize "
                "safety. Maintain ample braking distance, especially in traffic or adverse conditions. "
                "Consider a defensive riding course if you haven't already."
            )
        elif rider.riding_style == "Scenic":
            tips.append(
                "Embrace your scenic riding style! Remember to keep an eye on the road, not just the "
                "views. Plan stops at beautiful spots to fully enjoy the scenery safely."
            )
        elif rider.riding_style == "Fuel-saving":
            tips.append(
                "Your fuel-saving style is smart! Maintain steady speeds and smooth "
                "acceleration/deceleration. This also contributes to a more relaxed ride and less fatigue."
            )

        if rider.terrain_adaptability == "low":
            tips.append(
                "You've indicated low comfort with varied terrain, but your trip expects "
                f"{trip.expected_terrain} conditions. Practice on similar terrains before your trip or "
                "adjust your route to avoid overly challenging sections."
            )

        if rider.fitness_level == "low" or rider.diet_quality == "poor":
            tips.append(
                "For optimal riding performance and enjoyment, consider improving your general fitness "
                "and diet quality. Even small changes can make a big difference in your endurance and focus."
            )
        if rider.sleep_hours is not None and rider.sleep_hours < 7:
            tips.append(
                f"You're aiming for {_fmt(rider.sleep_hours)} hours of sleep. Try to get at least 7-8 hours, "
                "especially before long rides, to maximize alertness and minimize fatigue."
            )
        if rider.hydration_litres is not None and rider.hydration_litres < 2.5:
            tips.append(
                f"Your typical water intake is {_fmt(rider.hydration_litres)} litres. Aim for at least "
                "2.5-3 litres, especially on riding days, to stay well-hydrated and prevent fatigue."
            )

        if external.weather_forecast != "clear" or external.road_conditions != "good":
            tips.append(
                f"Heads up on the conditions: expect {external.weather_forecast} weather and "
                f"{external.road_conditions} roads. Dress appropriately, check your gear, and adjust "
                "your riding pace accordingly. Safety first!"
            )
        if external.traffic_density == "high":
            tips.append(
                "Anticipate high traffic. Plan your departure to avoid peak hours if possible, or be "
                "prepared for slower, stop-and-go riding. Stay patient!"
            )

        tips.append(
            "Remember, riding is about the journey as much as the destination. Stay safe, stay "
            "hydrated, and enjoy every moment!"
        )
        return " ".join(tips)


class VehicleAdvisor:
    """Maintenance tips, performance tips and safety alerts for a loaded vehicle."""

    NO_SAFETY_CONCERNS = "No immediate safety concerns detected. Your bike appears ready for the road!"
    SAFETY_ISSUE_KEYWORDS = ("engine", "brake", "steering", "suspension")
    OIL_CHANGE_REMINDER_KM = 5000

    @staticmethod
    def _min_wear(front: Optional[float], rear: Optional[float]) -> Optional[float]:
        values = [v for v in (front, rear) if v is not None]
        return min(values) if values else None

    @staticmethod
    def generate_maintenance_tips(
        specs: VehicleSpecs,
        condition: VehicleCondition,
        metrics: CalculatedMetrics,
        today: Optional[date] = None,
    ) -> str:
        today = today or date.today()
        odometer = condition.current_odometer or 0
        tips: List[str] = [
            f"Hello there! Let's take a closer look at the health of your {specs.make} {specs.model}."
        ]

        urgency = metrics.maintenance_urgency
        if urgency == "critical":
            tips.append(
                "🚨 Immediate attention required! Your bike has critical maintenance needs. Please "
                "address these before your next ride to ensure safety and prevent further damage."
            )
        elif urgency == "high":
            tips.append(
                "⚠️ Your bike needs significant attention soon. Schedule maintenance to avoid potential "
                "issues escalating and affecting your ride quality."
            )
        elif urgency == "moderate":
            tips.append(
                "Your bike is due for some checks. Plan for maintenance in the near future to keep it "
                "running smoothly."
            )
        else:
            tips.append(
                "Your bike is in great shape! Keep up the routine checks to maintain its excellent condition."
            )

        service_km = metrics.next_service_due_km
        service_date = metrics.next_service_due_date
        if service_km is not None and odometer >= service_km:
            tips.append(
                f"Your bike is overdue for service by {_fmt(odometer - service_km)} km. A full service "
                "will refresh many components."
            )
        elif service_km is not None and odometer >= service_km - 500:
            tips.append(
                f"Heads up! Service is due soon! You're within 500 km of your {_fmt(service_km)} km "
                "service mark. Time to book that appointment!"
            )
        elif service_date and today >= date.fromisoformat(service_date):
            tips.append(
                f"Your bike's service is overdue by date. It was due around {service_date}."
            )
        elif service_date:
            due_km = _fmt(service_km) if service_km is not None else "N/A"
            tips.append(
                f"Your next service is due by {service_date} or at {due_km} km, whichever comes first."
            )

        tire_life = VehicleAdvisor._min_wear(condition.tire_wear_level_front, condition.tire_wear_level_rear)
        tire_due = metrics.next_tire_change_due_km
        if tire_life is not None and tire_life <= 10:
            tips.append(
                "🚨 Your tires are critically worn (less than 10% life left). This is a major safety "
                "risk. Replace them immediately!"
            )
        elif tire_life is not None and tire_life <= 30:
            tips.append(
                "Your tires are showing significant wear (around 30% life left). Consider replacing them "
                "soon, especially before long trips or monsoon season."
            )
        elif tire_due and odometer >= tire_due - 1000:
            tips.append(
                "Your tires are approaching their typical lifespan. They're due for replacement around "
                f"{_fmt(tire_due)} km. Keep an eye on the tread."
            )
        else:
            front = _fmt(condition.tire_pressure_front) if condition.tire_pressure_front else "N/A"
            rear = _fmt(condition.tire_pressure_rear) if condition.tire_pressure_rear else "N/A"
            tips.append(
                f"Tires look good for now. Remember to check tire pressure (front: {front} PSI, rear: "
                f"{rear} PSI) regularly for optimal performance and safety!"
            )

        brake_life = VehicleAdvisor._min_wear(condition.brake_pad_wear_front, condition.brake_pad_wear_rear)
        brake_due = metrics.next_brake_pad_change_due_km
        if brake_life is not None and brake_life <= 10:
            tips.append(
                "🚨 Brake pads are critically worn (less than 10% life left). Get them replaced urgently "
                "to ensure effective stopping power!"
            )
        elif brake_life is not None and brake_life <= 30:
            tips.append(
                "Brake pads are wearing down (around 30% life left). Plan for replacement soon to "
                "maintain optimal stopping performance."
            )
        elif brake_due and odometer >= brake_due - 1000:
            tips.append(
                "Your brake pads are nearing the end of their typical lifespan, due around "
                f"{_fmt(brake_due)} km."
            )
        else:
            tips.append(
                "Brakes are in good condition. Always use both front and rear brakes effectively for "
                "balanced stopping."
            )
        if condition.brake_fluid_level == "critical":
            tips.append(
                "🚨 Brake fluid level is critically low. This can lead to brake failure. Get it checked "
                "and topped up immediately!"
            )
        elif condition.brake_fluid_level == "low":
            tips.append("Brake fluid level is low. Top it up soon to ensure consistent braking performance.")

        since_oil_change = odometer - condition.last_oil_change_km if condition.last_oil_change_km else None
        if condition.oil_level_status == "critical":
            tips.append(
                "🚨 Engine oil level is dangerously low. Do not ride until it is topped up or changed. "
                "Low oil can cause severe engine damage!"
            )
        elif condition.oil_level_status == "low":
            tips.append("Engine oil level is low. Please top it up or consider an oil change soon.")
        elif since_oil_change is not None and since_oil_change > VehicleAdvisor.OIL_CHANGE_REMINDER_KM:
            tips.append(
                f"It's been a while since your last oil change ({_fmt(since_oil_change)} km). Fresh oil "
                "keeps your engine happy!"
            )

        if specs.cooling_system == "liquid":
            if condition.coolant_level_status == "critical":
                tips.append(
                    "🚨 Coolant level is critically low. Your engine is at high risk of overheating. "
                    "Top up immediately!"
                )
            elif condition.coolant_level_status == "low":
                tips.append(
                    "Coolant level is low. Top it up to prevent overheating, especially in hot weather."
                )

        if condition.chain_lube_status == "rusty":
            tips.append(
                "🚨 Your chain is rusty! This indicates severe neglect and can lead to breakage. Get it "
                "cleaned, lubricated, and inspected immediately."
            )
        elif condition.chain_lube_status == "dry":
            tips.append(
                "Your chain is dry and needs lubrication. A dry chain can wear out faster and affect "
                "performance. Lube it up!"
            )
        elif condition.chain_lube_status == "needs-lube":
            tips.append("Remember to lube your chain soon for smooth operation and extended life.")

        chain_due = metrics.next_chain_change_due_km
        if condition.chain_tension_status == "loose":
            tips.append(
                "Your chain is too loose. This can cause erratic power delivery and potentially derail. "
                "Get it adjusted."
            )
        elif condition.chain_tension_status == "tight":
            tips.append(
                "Your chain is too tight. This puts excessive strain on the bearings and can damage "
                "components. Get it adjusted."
            )
        elif chain_due and odometer >= chain_due - 1000:
            tips.append(
                f"Your chain is nearing its typical lifespan, due around {_fmt(chain_due)} km. Consider "
                "a replacement soon."
            )

        battery = condition.battery_health
        if battery is not None and battery <= 20:
            tips.append(
                "🚨 Your battery health is critically low. This is a high risk for starting issues and "
                "breakdown. Consider replacing it immediately."
            )
        elif battery is not None and battery <= 40:
            tips.append(
                "Your battery health is low. Consider testing or replacing it to avoid unexpected "
                "starting issues, especially in cold weather."
            )
        else:
            tips.append(
                "Battery health looks good. If you don't ride often, consider a trickle charger."
            )

        lights = (condition.headlight_function, condition.taillight_function, condition.turn_signal_function)
        if "not-working" in lights or condition.horn_function == "not-working":
            tips.append(
                "🚨 Critical safety check: One or more of your lights (headlight, taillight, turn "
                "signals) or horn is not fully functional. Get this fixed immediately for your safety "
                "and visibility."
            )
        elif "dim" in lights:
            tips.append(
                "Some of your lights appear dim. Check bulbs or wiring to ensure maximum visibility, "
                "especially at night."
            )
        if condition.mirror_condition != "good":
            tips.append(
                "Your mirrors are not in good condition. Replace or repair them to ensure clear rear visibility."
            )

        if condition.recent_issues:
            tips.append(
                f"You've reported these recent issues: {', '.join(condition.recent_issues)}. It's highly "
                "recommended to get these checked by a qualified mechanic as soon as possible."
            )
        if condition.customizations:
            tips.append(
                f"Nice! Your bike has some customizations: {', '.join(condition.customizations)}. Ensure "
                "all aftermarket parts are installed correctly and are road-legal."
            )

        return " ".join(tips)

    @staticmethod
    def generate_performance_tips(specs: VehicleSpecs, metrics: CalculatedMetrics) -> str:
        tips: List[str] = ["Here are some tips to get the best out of your ride:"]

        ratio = metrics.power_to_weight_ratio
        if ratio is not None:
            if ratio > 0.15:
                tips.append(
                    f"Your {specs.make} {specs.model} has a fantastic power-to-weight ratio ({_fmt(ratio)} "
                    "HP/kg)! Enjoy its spirited performance, but always ride responsibly and within your limits."
                )
            elif ratio < 0.08:
                tips.append(
                    f"Your bike has a moderate power-to-weight ratio ({_fmt(ratio)} HP/kg). Focus on smooth "
                    "acceleration and maintaining momentum, especially during overtakes or with a "
                    "pillion/luggage."
                )

        if metrics.estimated_range is not None:
            if metrics.estimated_range < 200:
                tips.append(
                    f"With an estimated range of {_fmt(metrics.estimated_range)} km, plan your fuel stops "
                    "carefully, especially on long routes or in remote areas."
                )
            else:
                tips.append(
                    f"Your bike offers a good estimated range of {_fmt(metrics.estimated_range)} km. You can "
                    "cover significant distances between refills, giving you more freedom."
                )

        if specs.fuel_efficiency is not None:
            if specs.fuel_efficiency < 25:
                tips.append(
                    f"Your fuel efficiency is around {_fmt(specs.fuel_efficiency)} km/l. To improve it, try "
                    "maintaining consistent speeds, avoiding aggressive throttle inputs, and ensuring "
                    "proper tire pressure."
                )
            else:
                tips.append(
                    f"Great fuel efficiency at {_fmt(specs.fuel_efficiency)} km/l! Keep up the smooth riding "
                    "habits to maximize your mileage."
                )

        clearance = specs.ground_clearance
        if clearance is not None:
            if clearance < 140:
                tips.append(
                    f"Your ground clearance ({_fmt(clearance)} mm) is on the lower side. Be extra careful "
                    "over speed breakers, deep potholes, and rough terrain to avoid scraping the underbelly."
                )
            elif clearance >= 200:
                tips.append(
                    f"With {_fmt(clearance)} mm ground clearance, your bike is well-suited for varied and "
                    "even challenging terrains. Explore with confidence, but always assess the path ahead!"
                )

        if metrics.terrain_suitability_verdict:
            verdict = metrics.terrain_suitability_verdict
            tips.append(
                "Based on its design and your current setup, your bike is "
                f"{verdict[0].lower()}{verdict[1:]}"
            )

        if specs.tire_type == "off-road":
            tips.append(
                "You have off-road tires. These provide excellent grip on loose surfaces, but be aware "
                "they might affect on-road handling, cornering, and braking, especially in wet conditions."
            )
        elif specs.tire_type == "road":
            tips.append(
                "You have road tires. These are optimized for asphalt and provide good grip and handling "
                "on paved surfaces."
            )
        elif specs.tire_type == "dual-sport":
            tips.append(
                "Your dual-sport tires offer a good balance for both on-road and light off-road "
                "adventures. They are versatile for mixed terrain riding."
            )
        elif specs.tire_type == "sport":
            tips.append(
                "Your sport tires offer excellent grip for spirited riding and track days. Ensure they "
                "are at optimal temperature for maximum performance, and always be aware of road conditions."
            )

        if specs.has_abs:
            tips.append(
                "Your bike has ABS (Anti-lock Braking System), a great safety feature! It helps prevent "
                "wheel lock-up during hard braking, especially on slippery surfaces."
            )
        if specs.has_traction_control:
            tips.append(
                "Traction Control helps manage wheel spin, especially on slippery roads or during "
                "aggressive acceleration. It adds an extra layer of safety."
            )
        if specs.has_quick_shifter:
            tips.append(
                "Enjoy seamless gear changes with your quick shifter! It allows for faster acceleration "
                "and smoother downshifts without using the clutch."
            )

        age = metrics.age_of_vehicle_years
        if age is not None and age > 10:
            tips.append(
                f"Your bike is {age} years old. Older bikes might require a bit more care and attention "
                "to maintain peak performance. Regular checks are even more important."
            )

        if specs.emission_standard:
            tips.append(
                f"Your bike is a {specs.emission_standard} model. Be aware of changing emission norms in "
                "some cities or regions, which might affect future usability."
            )

        return " ".join(tips)

    @staticmethod
    def generate_safety_alerts(
        specs: VehicleSpecs,
        condition: VehicleCondition,
        metrics: CalculatedMetrics,
    ) -> Advisory:
        """
        Critical safety alerts.

        Returns:
            Advisory prefixed "Safety Alert:" with sentiment warning/cautionary,
            or the all-clear text with sentiment positive
        """
        alerts: List[str] = []
        sentiment = Sentiment.POSITIVE

        def critical(message: str) -> None:
            nonlocal sentiment
            alerts.append(f"🚨 CRITICAL: {message}")
            sentiment = sentiment.escalate(Sentiment.WARNING)

        def worn(front: Optional[float], rear: Optional[float]) -> bool:
            return any(w is not None and w <= 10 for w in (front, rear))

        if worn(condition.tire_wear_level_front, condition.tire_wear_level_rear):
            critical("Tire wear is dangerously low. Risk of loss of grip and blowouts. Replace immediately!")
        if worn(condition.brake_pad_wear_front, condition.brake_pad_wear_rear):
            critical("Brake pads are severely worn. Risk of brake failure. Replace immediately!")
        if condition.chain_lube_status == "rusty" or condition.chain_tension_status in ("loose", "tight"):
            critical(
                "Chain condition is poor (rusty/incorrect tension). Risk of chain breakage or "
                "derailment. Address immediately!"
            )

        if condition.oil_level_status == "critical":
            critical(
                "Engine oil level is dangerously low. Severe engine damage imminent. Do NOT ride until topped up!"
            )
        if specs.cooling_system == "liquid" and condition.coolant_level_status == "critical":
            critical(
                "Coolant level is dangerously low. High risk of engine overheating and damage. Top up immediately!"
            )
        if condition.brake_fluid_level == "critical":
            critical(
                "Brake fluid level is dangerously low. Risk of brake failure. Get it checked and topped "
                "up immediately!"
            )

        if condition.battery_health is not None and condition.battery_health <= 10:
            critical("Battery health is extremely poor. High risk of breakdown and starting failure.")
        lights = (
            condition.headlight_function,
            condition.taillight_function,
            condition.turn_signal_function,
            condition.horn_function,
        )
        if "not-working" in lights:
            critical(
                "Essential safety component (lights/horn) is not working. Do NOT ride, especially at "
                "night or in traffic, until fixed!"
            )
        if condition.mirror_condition == "missing":
            critical(
                "Mirror is missing. Riding without proper rear visibility is extremely dangerous and "
                "illegal. Do NOT ride until replaced!"
            )

        issues = condition.recent_issues or []
        if issues:
            listed = ", ".join(issues)
            if any(k in issue.lower() for issue in issues for k in VehicleAdvisor.SAFETY_ISSUE_KEYWORDS):
                alerts.append(
                    f"🚨 URGENT: You've reported critical issues like: {listed}. These can severely "
                    "compromise safety. Get professional diagnosis immediately."
                )
                sentiment = sentiment.escalate(Sentiment.WARNING)
            else:
                alerts.append(
                    f"⚠️ You've reported recent issues: {listed}. While not immediately critical, get "
                    "them checked soon to prevent escalation."
                )
                sentiment = sentiment.escalate(Sentiment.CAUTIONARY)

        if metrics.maintenance_urgency == "critical":
            alerts.append(
                "🚨 Overall maintenance status is CRITICAL. Riding is not recommended until all "
                "identified issues are resolved."
            )
            sentiment = sentiment.escalate(Sentiment.WARNING)

        if not alerts:
            return Advisory(text=VehicleAdvisor.NO_SAFETY_CONCERNS, sentiment=Sentiment.POSITIVE)
        return Advisory(text=f"Safety Alert: {' '.join(alerts)}", sentiment=sentiment)

    @staticmethod
    def overall_vehicle_sentiment(safety_sentiment: Sentiment, maintenance_urgency: str) -> Sentiment:
        """Combine the safety alert tone with the maintenance urgency level."""
        if safety_sentiment == Sentiment.WARNING or maintenance_urgency == "critical":
            return Sentiment.WARNING
        if safety_sentiment == Sentiment.CAUTIONARY or maintenance_urgency == "high":
            return Sentiment.CAUTIONARY
        if maintenance_urgency == "moderate":
            return Sentiment.NEUTRAL
        return Sentiment.POSITIVE
