"""Account and session Pydantic schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.core.constants import EMAIL_PATTERN, NAME_MIN_LENGTH, PASSWORD_MIN_LENGTH


# ── Stored records ───────────────────────────────────────────────────────

class Account(BaseModel):
    """A registered account as kept in the directory. Password is stored verbatim."""

    id: str
    name: str
    email: str
    password: str
    avatar: Optional[str] = None

    def to_session(self) -> ActiveSession:
        return ActiveSession(id=self.id, email=self.email, name=self.name, avatar=self.avatar)


class ActiveSession(BaseModel):
    """The currently authenticated account (no password)."""

    id: str
    email: str
    name: str
    avatar: Optional[str] = None


# ── Requests ─────────────────────────────────────────────────────────────

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=NAME_MIN_LENGTH, description="Display name")
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    confirm_password: str = Field(..., description="Must repeat password")

    @model_validator(mode="after")
    def passwords_match(self) -> RegisterRequest:
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
