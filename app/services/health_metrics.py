"""Health metrics calculation service.

BMI, BMI classification and daily calorie estimate, recomputed on every
profile save. Pure functions; no storage access.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional

from app.core.constants import (
    ACTIVITY_FACTOR,
    BMI_HEALTHY_MAX,
    BMI_OVERWEIGHT_MAX,
    BMI_UNDERWEIGHT_MAX,
    CM_HEIGHT_THRESHOLD,
    DEFAULT_AGE,
)
from app.core.enums import BmiStatus
from app.schemas.profile import HealthMetrics, Profile

logger = logging.getLogger(__name__)

# Enough digits to quantize any finite float to one decimal place
_BMI_CONTEXT = Context(prec=400)


def normalize_height_m(height: float) -> float:
    """Height in metres. Values above 3 are taken as centimetres (170 -> 1.70)."""
    if height > CM_HEIGHT_THRESHOLD:
        return height / 100
    return height


def calc_bmi(weight_kg: float, height_m: float) -> float:
    """Body Mass Index = kg / m^2 (unrounded)."""
    return weight_kg / (height_m * height_m)


def format_bmi(bmi: float) -> str:
    """One fractional digit, e.g. 22.857 -> '22.9'. Exact ties round up (22.25 -> '22.3')."""
    return str(Decimal(bmi).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP, context=_BMI_CONTEXT))


def classify_bmi(bmi: float) -> BmiStatus:
    """WHO thresholds, applied to the unrounded value."""
    if bmi < BMI_UNDERWEIGHT_MAX:
        return BmiStatus.UNDERWEIGHT
    if bmi < BMI_HEALTHY_MAX:
        return BmiStatus.HEALTHY
    if bmi < BMI_OVERWEIGHT_MAX:
        return BmiStatus.OVERWEIGHT
    return BmiStatus.OBESITY


def calc_bmr(weight_kg: float, height_cm: float, age: int) -> float:
    """Unisex basal metabolic rate (kcal/day), no sex-dependent constant."""
    return 10 * weight_kg + 6.25 * height_cm - 5 * age


def _round_half_up(value: float) -> int:
    """Nearest integer, halves rounded up. Caller ensures value is finite."""
    return int(math.floor(value + 0.5))


def _raw_daily_calories(weight_kg: float, height_m: float, age: Optional[int]) -> float:
    height_cm = height_m * 100
    return calc_bmr(weight_kg, height_cm, age or DEFAULT_AGE) * ACTIVITY_FACTOR


def calc_daily_calories(weight_kg: float, height_m: float, age: Optional[int]) -> int:
    """BMR x activity factor, rounded to the nearest kcal. Age 0/None defaults to 25."""
    return _round_half_up(_raw_daily_calories(weight_kg, height_m, age))


def has_metric_inputs(weight: Optional[float], height: Optional[float]) -> bool:
    return bool(weight) and bool(height) and weight > 0 and height > 0


def compute_metrics(
    weight: float, height: float, age: Optional[int] = None
) -> Optional[HealthMetrics]:
    """All derived metrics for one input set. Caller checks has_metric_inputs() first.

    Returns None when the inputs are too extreme to give finite results
    (e.g. weight=1e308 overflows the BMR, height=1e-200 underflows to zero).
    """
    height_m = normalize_height_m(height)
    area = height_m * height_m
    if area <= 0:
        return None
    bmi = calc_bmi(weight, height_m)
    calories = _raw_daily_calories(weight, height_m, age)
    if not (math.isfinite(bmi) and math.isfinite(calories)):
        return None
    return HealthMetrics(
        height_m=height_m,
        bmi=format_bmi(bmi),
        bmi_value=bmi,
        bmi_status=classify_bmi(bmi),
        daily_calories=_round_half_up(calories),
    )


def apply_metrics(profile: Profile) -> Profile:
    """Return profile with bmi / bmi_status / daily_calories recomputed.

    Without a positive weight and height, or when the metrics are not finite,
    the profile is returned as-is, so previously stored values survive.
    """
    if not has_metric_inputs(profile.weight, profile.height):
        return profile
    metrics = compute_metrics(profile.weight, profile.height, profile.age)
    if metrics is None:
        logger.warning("Skipping metrics for profile %s: results out of range", profile.id)
        return profile
    return profile.model_copy(
        update={
            "bmi": metrics.bmi,
            "bmi_status": metrics.bmi_status,
            "daily_calories": metrics.daily_calories,
        }
    )
