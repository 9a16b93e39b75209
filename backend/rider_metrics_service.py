"""
Rider Metrics Service - Pure Deterministic Domain Logic

Derives health/fitness metrics from rider inputs.

Functions:
  calculate_bmi(weight_kg, height_cm) -> Optional[float]
  classify_bmi(bmi) -> str
  compute_total_load(rider) -> float
  estimate_stamina(rider) -> StaminaResult

Stamina is a weighted sum starting from a base of 50, clamped to 0-100 and
mapped to Low / Moderate / High / Excellent. Missing numeric inputs (None)
skip their adjustment instead of being compared as zero.

Also hosts the quick stamina profile, bike-type riding advice and ride success
predictor used by the rider setup screens.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from planner.models import RiderProfile


BASE_STAMINA_SCORE = 50
MAX_EXPERIENCE_BONUS = 15
EXPERIENCE_POINTS_PER_YEAR = 1.5

# Average pillion weight by gender (kg); anything other than Male uses the lighter figure
PILLION_WEIGHT_KG = {"Male": 75, "Female": 55}
HARD_LUGGAGE_WEIGHT_KG = 12

RIDING_STYLE_ADJUSTMENTS = {
    "Aggressive": -5,
    "Fuel-saving": 3,
    "Scenic": 3,
}
TERRAIN_ADAPTABILITY_ADJUSTMENTS = {"high": 7, "low": -7}
FATIGUE_ADJUSTMENTS = {"mild": -5, "moderate": -10, "high": -20}
FITNESS_ADJUSTMENTS = {"athletic": 15, "good": 10, "low": -10}
DIET_ADJUSTMENTS = {"excellent": 5, "poor": -5}


@dataclass(frozen=True)
class StaminaResult:
    """Stamina score (0-100) and its human-friendly level."""
    score: float
    level: str  # Low, Moderate, High, Excellent


@dataclass(frozen=True)
class StaminaProfile:
    """Quick stamina assessment with the reasons behind it."""
    bmi: Optional[float]
    stamina_score: int
    stamina_level: str  # low, moderate, high
    reason: str


@dataclass(frozen=True)
class RideSuccessPrediction:
    success_rate: float  # 0-100
    risk_level: str  # Low, Moderate, High
    recommendation: str
    stamina_level: str


def calculate_bmi(weight_kg: Optional[float], height_cm: Optional[float]) -> Optional[float]:
    """
    Body Mass Index from weight (kg) and height (cm).

    Height is converted to metres before squaring. Returns None when either
    input is missing or not positive.
    """
    if not weight_kg or not height_cm or weight_kg <= 0 or height_cm <= 0:
        return None
    height_m = height_cm / 100
    return round(weight_kg / (height_m * height_m), 1)


def classify_bmi(bmi: Optional[float]) -> str:
    if bmi is None:
        return ""
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def compute_total_load(rider: RiderProfile) -> float:
    """Total load on the vehicle: rider + pillion + luggage + hard luggage (kg)."""
    pillion_weight = 0
    if rider.pillion:
        pillion_weight = PILLION_WEIGHT_KG.get(rider.pillion_gender, PILLION_WEIGHT_KG["Female"])
    hard_luggage = HARD_LUGGAGE_WEIGHT_KG if rider.has_hard_luggage else 0
    return (rider.weight or 0) + pillion_weight + (rider.luggage_weight or 0) + hard_luggage


def stamina_level_for(score: float) -> str:
    if score >= 85:
        return "Excellent"
    if score >= 70:
        return "High"
    if score < 40:
        return "Low"
    return "Moderate"


def _age_adjustment(age: Optional[float]) -> float:
    if age is None:
        return 0
    if age < 30:
        return 10
    if age < 45:
        return 5
    if age > 60:
        return -15
    return 0


def _bmi_adjustment(bmi: Optional[float]) -> float:
    if bmi is None:
        return 0
    if 18.5 <= bmi <= 24.9:
        return 10
    if bmi > 30:
        return -10
    if bmi < 18.5:
        return -5
    return 0


def _sleep_adjustment(sleep_hours: Optional[float]) -> float:
    if sleep_hours is None:
        return 0
    if 7 <= sleep_hours <= 9:
        return 8
    if sleep_hours < 5:
        return -10
    return 0


def _hydration_adjustment(hydration_litres: Optional[float]) -> float:
    if hydration_litres is None:
        return 0
    if hydration_litres >= 2.5:
        return 7
    if hydration_litres < 1.5:
        return -8
    return 0


def estimate_stamina(rider: RiderProfile) -> StaminaResult:
    """
    Estimate rider stamina from the weighted rider attributes.

    Uses rider.bmi as given; callers recompute BMI first.
    """
    score = float(BASE_STAMINA_SCORE)
    score += _age_adjustment(rider.age)
    score += _bmi_adjustment(rider.bmi)
    score += _sleep_adjustment(rider.sleep_hours)
    score += _hydration_adjustment(rider.hydration_litres)
    score += min((rider.experience_years or 0) * EXPERIENCE_POINTS_PER_YEAR, MAX_EXPERIENCE_BONUS)
    score += RIDING_STYLE_ADJUSTMENTS.get(rider.riding_style, 0)
    score += TERRAIN_ADAPTABILITY_ADJUSTMENTS.get(rider.terrain_adaptability, 0)
    score += FATIGUE_ADJUSTMENTS.get(rider.recent_fatigue, 0)
    score += FITNESS_ADJUSTMENTS.get(rider.fitness_level, 0)
    score += DIET_ADJUSTMENTS.get(rider.diet_quality, 0)

    score = max(0.0, min(100.0, score))
    return StaminaResult(score=score, level=stamina_level_for(score))


def evaluate_stamina_profile(
    age: float = 30,
    weight: float = 70,
    height: float = 175,
    activity_level: str = "moderate",
    sleep_hours: float = 6,
    hydration_litres: float = 2.5,
    terrain_adaptability: str = "moderate",
) -> StaminaProfile:
    """
    Small-scale stamina assessment (roughly -3..10 points) with reasons.

    Used for the quick check on the rider setup screen before the full
    profile is filled in.
    """
    bmi = calculate_bmi(weight, height)
    score = 0
    reasons: List[str] = []

    if age < 30:
        score += 2
        reasons.append("Young age boosts endurance.")
    elif age < 50:
        score += 1
        reasons.append("Balanced maturity. Ride with breaks.")
    else:
        score -= 1
        reasons.append("Higher age. Prioritize comfort and rest.")

    if bmi is not None and 18.5 <= bmi <= 24.9:
        score += 2
        reasons.append("Healthy BMI supports long rides.")
    elif bmi is not None and bmi < 18.5:
        score -= 1
        reasons.append("Low BMI. Keep snacks handy for energy.")
    elif bmi is not None:
        score -= 1
        reasons.append("Higher BMI. Take more frequent breaks.")

    if sleep_hours >= 7:
        score += 1
        reasons.append("Good sleep restores muscle recovery.")
    elif sleep_hours < 5:
        score -= 1
        reasons.append("Poor sleep reduces reflexes and stamina.")

    if hydration_litres >= 2.5:
        score += 1
        reasons.append("Well hydrated. Less chance of cramps.")
    else:
        score -= 1
        reasons.append("Low water intake. Risk of dehydration.")

    if activity_level == "high":
        score += 2
        reasons.append("Active lifestyle enables longer rides.")
    elif activity_level == "low":
        score -= 1
        reasons.append("Sedentary lifestyle. Need breaks and training.")

    if terrain_adaptability == "high":
        score += 2
        reasons.append("Familiar with hilly/rough terrain.")
    elif terrain_adaptability == "low":
        score -= 1
        reasons.append("Needs practice with terrain transitions.")

    level = "moderate"
    if score >= 6:
        level = "high"
    elif score <= 2:
        level = "low"

    return StaminaProfile(bmi=bmi, stamina_score=score, stamina_level=level, reason=" ".join(reasons))


RIDING_ADVICE: Dict[str, Dict[str, str]] = {
    "cruiser": {
        "low": "Your comfort is key. Stick to straight, flat highways and schedule tea stops every 60-80 km.",
        "moderate": "Perfect for weekend tours. Maintain 80-100 kmph, hydrate every 2 hours.",
        "high": "Let the engine sing. Long stretches of 300+ km are within your capability. Enjoy cruising!",
    },
    "adventure": {
        "low": "Avoid steep trails. Focus on gaining experience on mild gradients and gravel roads.",
        "moderate": "You're ready to challenge hills. Moderate inclines with light luggage should be fine.",
        "high": "Take the dirt. Your stamina supports intense terrain and remote expeditions.",
    },
    "tourer": {
        "low": "Pack light. Stick to 150 km/day with frequent stops.",
        "moderate": "You're tour-ready. Explore 250 km days across mixed terrains.",
        "high": "The open road awaits. Go wild on 300-400 km ride days.",
    },
    "scooter": {
        "low": "Avoid inclines and limit to 50-70 km/day.",
        "moderate": "City tours and suburban rides of 100+ km are doable.",
        "high": "Max out potential. Long state highways are within reach with backup.",
    },
}


def personalized_riding_advice(stamina_level: str, bike_type: str = "cruiser") -> str:
    """Short advice line for a stamina level (low/moderate/high) and bike type."""
    return RIDING_ADVICE.get(bike_type, {}).get(
        stamina_level.lower(), "Stay safe, gear up, and hydrate well!"
    )


def predict_ride_success(
    profile: StaminaProfile,
    terrain_type: str = "highway",
    elevation_gain_m: float = 500,
    distance_km: float = 200,
) -> RideSuccessPrediction:
    """
    Predict the chance of completing a ride comfortably.

    Args:
        profile: Quick stamina profile from evaluate_stamina_profile
        terrain_type: 'highway', 'mountain' or 'mixed'
        elevation_gain_m: Total climb over the ride
        distance_km: Ride length

    Returns:
        Success rate (0-100) with a risk level and advice
    """
    base_success = profile.stamina_score * 10
    terrain_penalty = 0

    if terrain_type == "mountain":
        terrain_penalty = 15 if elevation_gain_m > 1000 else 10
    elif terrain_type == "mixed":
        terrain_penalty = 10 if elevation_gain_m > 500 else 5

    if distance_km > 300:
        terrain_penalty += 5
    if distance_km > 500:
        terrain_penalty += 10

    final_score = max(0, min(100, base_success + 40 - terrain_penalty))

    if final_score < 50:
        risk_level = "High"
        note = "High risk. Plan recovery halts, hydration, and don't ride alone."
    elif final_score < 70:
        risk_level = "Moderate"
        note = "Moderate risk. Carry backup gear and ride in group."
    else:
        risk_level = "Low"
        note = "Ride is feasible. Maintain discipline and breaks."

    return RideSuccessPrediction(
        success_rate=final_score,
        risk_level=risk_level,
        recommendation=note,
        stamina_level=profile.stamina_level,
    )
