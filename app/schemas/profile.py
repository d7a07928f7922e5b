"""Profile Pydantic schemas — stored record, partial update, computed metrics."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.core.enums import BmiStatus


class Profile(BaseModel):
    """Full profile record, keyed by the owning account id.

    Derived fields (bmi, bmi_status, daily_calories) are only written by the
    metrics recomputation on save.
    """

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    age: Optional[int] = None
    weight: Optional[float] = Field(None, allow_inf_nan=False, description="Body weight in kg")
    height: Optional[float] = Field(
        None, allow_inf_nan=False, description="Height in cm, or metres when <= 3"
    )
    bmi: Optional[str] = Field(None, description="BMI with one decimal, e.g. '22.9'")
    bmi_status: Optional[BmiStatus] = None
    daily_calories: Optional[int] = None
    updated_at: Optional[datetime] = None


class ProfileUpdate(BaseModel):
    """Partial update: only fields explicitly set are merged onto the stored record."""

    name: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    age: Optional[int] = Field(None, ge=0, le=150)
    weight: Optional[float] = Field(None, allow_inf_nan=False)
    height: Optional[float] = Field(None, allow_inf_nan=False)


class HealthMetrics(BaseModel):
    """Derived metrics for one (weight, height, age) input."""

    height_m: float
    bmi: str
    bmi_value: float
    bmi_status: BmiStatus
    daily_calories: int
