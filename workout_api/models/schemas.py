"""Pydantic models describing API payloads."""
from __future__ import annotations

import math
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel


T = TypeVar("T")

# Decimal would otherwise be emitted as a JSON string.
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def _utc_isoformat(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


# Stored timestamps are naive UTC; emit them with an explicit +00:00 offset.
UtcDatetime = Annotated[datetime, PlainSerializer(_utc_isoformat, return_type=str, when_used="json")]


class CamelModel(BaseModel):
    """Base schema exposing camelCase names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Query / pagination
class GetWorkoutsQuery(BaseModel):
    """Parameters of the list-workouts query, as bound from the query string."""

    search_term: str | None = None
    from_date: datetime | None = None
    to_date: datetime | None = None
    page: int = 1
    page_size: int = 10

    @field_validator("from_date", "to_date")
    @classmethod
    def to_naive_utc(cls, value: datetime | None) -> datetime | None:
        """Store timestamps are naive UTC; aware bounds are converted to match."""
        if value is None or value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)


class PaginatedList(CamelModel, Generic[T]):
    """One page of items plus the metadata needed to navigate the rest."""

    items: list[T]
    page_number: int
    total_pages: int
    total_count: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def create(
        cls,
        items: Sequence[T],
        total_count: int,
        page_number: int,
        page_size: int,
    ) -> "PaginatedList[T]":
        """Build the envelope, deriving page counts from ``total_count`` and ``page_size``."""

        total_pages = math.ceil(total_count / page_size)
        return cls(
            items=list(items),
            page_number=page_number,
            total_pages=total_pages,
            total_count=total_count,
            has_previous_page=page_number > 1,
            has_next_page=page_number < total_pages,
        )


# Workout read models
class ExerciseResponse(CamelModel):
    """Schema for an exercise inside a workout response."""

    id: uuid.UUID
    name: str
    sets: int
    reps: int
    weight: JsonDecimal


class WorkoutResponse(CamelModel):
    """Schema for a workout in the list response."""

    id: uuid.UUID
    name: str
    date: UtcDatetime
    exercises: list[ExerciseResponse] = []
    is_shared: bool


# Workout write models
class ExerciseCreate(BaseModel):
    """Schema for one exercise in a create-workout request."""

    name: str = Field(min_length=1, max_length=200)
    sets: int = Field(gt=0)
    reps: int = Field(gt=0)
    weight: Decimal = Field(ge=0, max_digits=10, decimal_places=2)

    @field_validator("name")
    @classmethod
    def reject_blank_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class WorkoutCreate(BaseModel):
    """Schema for creating a new workout with its exercises."""

    name: str = Field(min_length=1, max_length=200)
    exercises: list[ExerciseCreate] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def reject_blank_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class WorkoutCreated(BaseModel):
    """Schema returned after a workout is persisted."""

    id: uuid.UUID
