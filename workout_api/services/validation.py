"""Request rules checked before a query reaches the database."""
from __future__ import annotations

from workout_api.errors import FieldError, ValidationError
from workout_api.models.schemas import GetWorkoutsQuery

MAX_PAGE_SIZE = 50


def collect_get_workouts_errors(
    query: GetWorkoutsQuery,
    max_page_size: int = MAX_PAGE_SIZE,
) -> list[FieldError]:
    """Return every rule the list-workouts query violates, in field order."""

    errors: list[FieldError] = []

    if query.page <= 0:
        errors.append(FieldError("page", "must be greater than 0"))

    if query.page_size <= 0:
        errors.append(FieldError("pageSize", "must be greater than 0"))
    elif query.page_size > max_page_size:
        errors.append(FieldError("pageSize", f"must be less than or equal to {max_page_size}"))

    if query.from_date is not None and query.to_date is not None:
        if query.to_date < query.from_date:
            errors.append(FieldError("toDate", "must be greater than or equal to fromDate"))

    return errors


def validate_get_workouts_query(
    query: GetWorkoutsQuery,
    max_page_size: int = MAX_PAGE_SIZE,
) -> None:
    """Raise ``ValidationError`` listing all violations if the query is unusable."""

    errors = collect_get_workouts_errors(query, max_page_size)
    if errors:
        raise ValidationError(errors)
