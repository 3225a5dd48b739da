"""Exception types raised around the answer rendering core."""

from __future__ import annotations


class MealcartError(Exception):
    """Base class for application errors."""


class EmptyRequestError(MealcartError, ValueError):
    """Raised when the user submits a blank question."""

    def __init__(self, message: str = "Please enter your request.") -> None:
        super().__init__(message)


class UpstreamFailure(MealcartError):
    """Raised when the completion service cannot be reached or answers unusably."""

    def __init__(self, message: str, *, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider


class ConfigurationError(MealcartError):
    """Raised when a required setting for the selected provider is missing."""


__all__ = [
    "ConfigurationError",
    "EmptyRequestError",
    "MealcartError",
    "UpstreamFailure",
]
