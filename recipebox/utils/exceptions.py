"""Custom exception classes."""

from typing import Optional


class RecipeBoxException(Exception):
    """Base exception for the Recipe Box application."""

    pass


class AuthenticationError(RecipeBoxException):
    """Raised when the caller's identity cannot be established."""

    pass


class ValidationError(RecipeBoxException):
    """Raised when input validation fails."""

    pass


class ProviderError(RecipeBoxException):
    """Raised when a text-generation provider call fails."""

    def __init__(self, message: str, *, provider: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class GenerationError(RecipeBoxException):
    """Raised when model output could not be turned into a draft."""

    def __init__(self, message: str, *, kind: str):
        super().__init__(message)
        self.kind = kind


class StoreError(RecipeBoxException):
    """Raised when the hosted data store rejects or fails a call."""

    pass
