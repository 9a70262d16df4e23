"""Workout slices: the paginated list query and the create command."""
from __future__ import annotations

import logging
import threading
import uuid

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from workout_api.errors import CancellationError, PersistenceError
from workout_api.models.database_models import Exercise, Workout, utcnow
from workout_api.models.schemas import (
    GetWorkoutsQuery,
    PaginatedList,
    WorkoutCreate,
    WorkoutResponse,
)
from workout_api.services.mapping import to_workout_response
from workout_api.services.validation import MAX_PAGE_SIZE, validate_get_workouts_query


logger = logging.getLogger(__name__)


def build_workout_filters(
    query: GetWorkoutsQuery,
    user_id: uuid.UUID,
) -> list[ColumnElement[bool]]:
    """
    Translate a list query into SQL predicates, applied together with AND.

    The owner predicate always comes first; a caller can never widen the
    result set beyond their own workouts through the other parameters.
    """
    filters: list[ColumnElement[bool]] = [Workout.user_id == user_id]

    term = query.search_term
    if term and term.strip():
        filters.append(
            or_(
                Workout.name.contains(term, autoescape=True),
                Workout.exercises.any(Exercise.name.contains(term, autoescape=True)),
            )
        )

    if query.from_date is not None:
        filters.append(Workout.date >= query.from_date)

    if query.to_date is not None:
        filters.append(Workout.date <= query.to_date)

    return filters


class WorkoutService:
    """
    Runs the workout slices against one SQLAlchemy session.

    Every operation accepts an optional ``abort`` event. It is checked before
    each round trip to the database; once set, the operation stops with
    ``CancellationError`` instead of returning a partial result.
    """

    def __init__(self, session: Session, max_page_size: int = MAX_PAGE_SIZE):
        """
        Initialize the service.

        Args:
            session: SQLAlchemy database session scoped to the current request
            max_page_size: Upper bound accepted for ``page_size``
        """
        self.session = session
        self.max_page_size = max_page_size

    def _raise_if_aborted(self, abort: threading.Event | None) -> None:
        if abort is not None and abort.is_set():
            self.session.rollback()
            raise CancellationError("Request was cancelled by the caller")

    def get_workouts(
        self,
        query: GetWorkoutsQuery,
        user_id: uuid.UUID,
        abort: threading.Event | None = None,
    ) -> PaginatedList[WorkoutResponse]:
        """
        List the caller's workouts, most recent first, one page at a time.

        Args:
            query: Search term, inclusive date bounds and paging parameters
            user_id: Authenticated caller; only their workouts are visible
            abort: Optional cancellation signal

        Returns:
            PaginatedList[WorkoutResponse]: Requested page plus paging metadata

        Raises:
            ValidationError: When paging or date parameters are out of range
            CancellationError: When ``abort`` is set before the query completes
            PersistenceError: When the database cannot answer the query
        """
        validate_get_workouts_query(query, self.max_page_size)

        filters = build_workout_filters(query, user_id)
        offset = (query.page - 1) * query.page_size

        try:
            self._raise_if_aborted(abort)
            total_count = self.session.scalar(
                select(func.count()).select_from(Workout).where(*filters)
            ) or 0

            # Pages past the end are empty; this also keeps OFFSET within the
            # driver's integer range for arbitrarily large page numbers.
            workouts = []
            if offset < total_count:
                self._raise_if_aborted(abort)
                stmt = (
                    select(Workout)
                    .where(*filters)
                    .options(selectinload(Workout.exercises))
                    # id breaks ties between equal dates so pages never overlap
                    .order_by(Workout.date.desc(), Workout.id.asc())
                    .offset(offset)
                    .limit(query.page_size)
                )
                workouts = self.session.scalars(stmt).all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to list workouts for user %s", user_id)
            raise PersistenceError("Failed to load workouts") from exc

        items = [to_workout_response(w) for w in workouts]

        logger.info(
            "Listed workouts: user=%s, page=%d, page_size=%d, returned=%d, total=%d",
            user_id,
            query.page,
            query.page_size,
            len(items),
            total_count,
        )
        return PaginatedList[WorkoutResponse].create(
            items, total_count, query.page, query.page_size
        )

    def create_workout(
        self,
        command: WorkoutCreate,
        user_id: uuid.UUID,
        abort: threading.Event | None = None,
    ) -> uuid.UUID:
        """
        Persist a new workout and its exercises in a single transaction.

        Args:
            command: Workout name and its exercises, in order
            user_id: Authenticated caller, recorded as the owner
            abort: Optional cancellation signal

        Returns:
            uuid.UUID: Identity of the new workout

        Raises:
            PersistenceError: When the transaction cannot be committed
            CancellationError: When ``abort`` is set before the commit
        """
        workout = Workout(
            id=uuid.uuid4(),
            name=command.name,
            date=utcnow(),
            user_id=user_id,
            is_shared=False,
            exercises=[
                Exercise(
                    position=index,
                    name=item.name,
                    sets=item.sets,
                    reps=item.reps,
                    weight=item.weight,
                )
                for index, item in enumerate(command.exercises)
            ],
        )

        workout_id = workout.id

        self._raise_if_aborted(abort)
        self.session.add(workout)
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to save workout for user %s", user_id)
            raise PersistenceError("Failed to save workout") from exc

        logger.info(
            "Created workout: id=%s, user=%s, exercises=%d",
            workout_id,
            user_id,
            len(command.exercises),
        )
        return workout_id
