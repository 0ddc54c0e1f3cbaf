"""Exception types raised by BillSage services."""

from __future__ import annotations


class BillSageError(Exception):
    """Base class for application errors."""


class PreconditionError(BillSageError, ValueError):
    """A required field is missing or a value is outside its allowed set."""


class RecordNotFoundError(BillSageError, LookupError):
    """The record does not exist or is owned by another user."""


class AuthenticationError(BillSageError):
    """Credentials or bearer token could not be verified."""


class AssistantError(BillSageError):
    """The generative endpoint failed or returned no usable output."""


class AssistantNotConfiguredError(AssistantError):
    """No API key is configured for the generative endpoint."""

    def __init__(self, message: str = "GEMINI_API_KEY not configured") -> None:
        super().__init__(message)


__all__ = [
    "AssistantError",
    "AssistantNotConfiguredError",
    "AuthenticationError",
    "BillSageError",
    "PreconditionError",
    "RecordNotFoundError",
]
