"""Domain exceptions raised by the account and profile services."""


class FitProError(Exception):
    """Base exception for FitPro domain errors."""

    pass


class DuplicateAccountError(FitProError):
    """An account with this email is already registered."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


class InvalidCredentialsError(FitProError):
    """No account matches the given email and password."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class MalformedSessionError(FitProError):
    """Persisted session data could not be decoded.

    Internal only: restore_session() handles it and never lets it reach callers.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed session data: {reason}")
