"""Error taxonomy shared by the workout slices and the HTTP boundary."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single violated rule on an input field."""

    field: str
    message: str


class WorkoutApiError(Exception):
    """Base class for errors the HTTP layer knows how to translate."""


class ValidationError(WorkoutApiError):
    """Input failed one or more rules; carries every violation found."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Validation failed: {summary}")


class AuthorizationError(WorkoutApiError):
    """Caller identity is missing or unusable."""


class PersistenceError(WorkoutApiError):
    """The store was unreachable or a transaction could not complete."""


class CancellationError(WorkoutApiError):
    """The caller aborted the request before the store operation finished."""
