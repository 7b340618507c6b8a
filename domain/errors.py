from typing import Optional


class RegistrationError(Exception):
    """Base class for every failure a registration can end in.

    Each subclass carries a ``kind`` tag so the HTTP layer can pick a status
    code without inspecting messages.
    """
    kind = "registration"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RegistrationValidationError(RegistrationError):
    """Request fields are absent, blank or unusable for hashing"""
    kind = "validation"


class StoreError(RegistrationError):
    """Store rejected the insert for a reason other than uniqueness or connectivity"""
    kind = "store"


class UniquenessViolation(StoreError):
    """Username or email already belongs to another user"""
    kind = "uniqueness"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class StoreUnavailable(StoreError):
    """Store could not be reached"""
    kind = "unavailable"


class StoreTimeout(StoreError):
    """Store call did not finish within the configured bound"""
    kind = "timeout"
