"""Shared enums for schemas and API."""

from enum import Enum


class BmiStatus(str, Enum):
    """WHO-style BMI classification."""

    UNDERWEIGHT = "Underweight"  # < 18.5
    HEALTHY = "Healthy weight"  # 18.5 – 24.9
    OVERWEIGHT = "Overweight"  # 25 – 29.9
    OBESITY = "Obesity"  # >= 30


class PasswordStrength(str, Enum):
    """Label for a password strength score (0–4)."""

    WEAK = "Weak"
    MEDIUM = "Medium"
    GOOD = "Good"
    STRONG = "Strong"
