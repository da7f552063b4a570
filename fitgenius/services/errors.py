"""Domain errors raised by the service layer."""

from typing import Optional


class FitGeniusError(Exception):
    """Base class for service-layer errors."""


class RateLimited(FitGeniusError):
    """The AI backend kept answering 429 until the attempt budget ran out."""

    def __init__(self, message: str = "AI service rate limit reached", attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class Unauthorized(FitGeniusError):
    """The data backend rejected the session token (401/403)."""

    def __init__(self, message: str = "Authentication required", status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


class ValidationFailure(FitGeniusError):
    """The AI response did not match the requested schema."""

    def __init__(self, kind: str, detail: str = ""):
        super().__init__(f"Invalid {kind} response{': ' + detail if detail else ''}")
        self.kind = kind
        self.detail = detail


class StorageWriteFailure(FitGeniusError):
    """A session store could not persist a cache entry (quota, connection)."""


class BackendError(FitGeniusError):
    """Any other failed call to the data backend."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
