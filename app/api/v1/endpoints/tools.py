"""QoL tools: BMI / calorie calculator, password strength meter."""

from fastapi import APIRouter, HTTPException, Query

from app.schemas.profile import HealthMetrics
from app.schemas.tools import PasswordStrengthRequest, PasswordStrengthResponse
from app.services.health_metrics import compute_metrics
from app.services.password_strength import score_password, strength_label

router = APIRouter()


# ---- Metrics calculator (pure logic, no storage) ----


@router.get("/bmi", response_model=HealthMetrics)
async def bmi_calculator(
    weight: float = Query(..., allow_inf_nan=False, description="Body weight in kg"),
    height: float = Query(..., allow_inf_nan=False, description="Height in cm, or metres when <= 3"),
    age: int | None = Query(None, ge=0, le=150),
):
    """Same BMI, status and calorie figures a profile save would produce, without saving."""
    if weight <= 0 or height <= 0:
        raise HTTPException(status_code=422, detail="Weight and height must be positive.")
    metrics = compute_metrics(weight, height, age)
    if metrics is None:
        raise HTTPException(status_code=422, detail="Weight and height are out of range.")
    return metrics


# ---- Password strength ----


@router.post("/password-strength", response_model=PasswordStrengthResponse)
async def password_strength(payload: PasswordStrengthRequest):
    score = score_password(payload.password)
    return PasswordStrengthResponse(score=score, label=strength_label(score))
