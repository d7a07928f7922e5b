"""Password strength scoring used by the sign-up form."""

import re

from app.core.enums import PasswordStrength


def score_password(password: str) -> int:
    """One point each for: length >= 8, mixed case, a digit, a symbol."""
    score = 0
    if len(password) >= 8:
        score += 1
    if re.search(r"[a-z]", password) and re.search(r"[A-Z]", password):
        score += 1
    if re.search(r"\d", password):
        score += 1
    if re.search(r"[^a-zA-Z0-9]", password):
        score += 1
    return score


def strength_label(score: int) -> PasswordStrength:
    if score <= 1:
        return PasswordStrength.WEAK
    if score == 2:
        return PasswordStrength.MEDIUM
    if score == 3:
        return PasswordStrength.GOOD
    return PasswordStrength.STRONG
