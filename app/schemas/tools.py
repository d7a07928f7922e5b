"""Schemas for the stateless calculator tools."""

from pydantic import BaseModel, Field

from app.core.enums import PasswordStrength


class PasswordStrengthRequest(BaseModel):
    password: str = Field(..., description="Candidate password (not stored)")


class PasswordStrengthResponse(BaseModel):
    score: int = Field(..., ge=0, le=4)
    label: PasswordStrength
