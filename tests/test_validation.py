"""Tests for list-workouts query validation."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from workout_api.errors import ValidationError
from workout_api.models.schemas import GetWorkoutsQuery
from workout_api.services.validation import (
    collect_get_workouts_errors,
    validate_get_workouts_query,
)


def _fields(query: GetWorkoutsQuery) -> list[str]:
    return [e.field for e in collect_get_workouts_errors(query)]


def test_accepts_largest_allowed_page_size():
    validate_get_workouts_query(GetWorkoutsQuery(page=1, page_size=50))


def test_defaults_are_valid():
    assert collect_get_workouts_errors(GetWorkoutsQuery()) == []


def test_rejects_page_zero():
    assert _fields(GetWorkoutsQuery(page=0)) == ["page"]


def test_rejects_negative_page():
    assert _fields(GetWorkoutsQuery(page=-3)) == ["page"]


@pytest.mark.parametrize("page_size", [0, -1, 51, 500])
def test_rejects_page_size_out_of_range(page_size):
    assert _fields(GetWorkoutsQuery(page_size=page_size)) == ["pageSize"]


def test_rejects_to_date_before_from_date():
    query = GetWorkoutsQuery(
        from_date=datetime(2025, 1, 3),
        to_date=datetime(2025, 1, 1),
    )
    errors = collect_get_workouts_errors(query)

    assert len(errors) == 1
    assert errors[0].field == "toDate"
    assert "fromDate" in errors[0].message


def test_equal_dates_are_allowed():
    day = datetime(2025, 1, 3)
    assert collect_get_workouts_errors(GetWorkoutsQuery(from_date=day, to_date=day)) == []


def test_single_date_bound_is_allowed():
    assert collect_get_workouts_errors(GetWorkoutsQuery(to_date=datetime(2025, 1, 1))) == []
    assert collect_get_workouts_errors(GetWorkoutsQuery(from_date=datetime(2025, 1, 1))) == []


def test_reports_every_violation_at_once():
    query = GetWorkoutsQuery(
        page=0,
        page_size=51,
        from_date=datetime(2025, 2, 1),
        to_date=datetime(2025, 1, 1),
    )

    with pytest.raises(ValidationError) as exc_info:
        validate_get_workouts_query(query)

    assert [e.field for e in exc_info.value.errors] == ["page", "pageSize", "toDate"]


def test_custom_max_page_size():
    query = GetWorkoutsQuery(page_size=20)
    assert collect_get_workouts_errors(query, max_page_size=10)[0].field == "pageSize"


def test_aware_and_naive_bounds_are_compared_in_utc():
    # 2025-01-02 00:30 at UTC+2 is 2025-01-01 22:30 UTC, before the naive upper bound
    query = GetWorkoutsQuery(
        from_date=datetime(2025, 1, 2, 0, 30, tzinfo=timezone(timedelta(hours=2))),
        to_date=datetime(2025, 1, 1, 23, 0),
    )

    assert query.from_date == datetime(2025, 1, 1, 22, 30)
    assert collect_get_workouts_errors(query) == []
