"""API endpoints for listing and recording workouts."""
from __future__ import annotations

import asyncio
import logging
import threading
import uuid
from datetime import datetime
from typing import Annotated, Any, Callable

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from workout_api.auth import get_current_user_id
from workout_api.config import get_settings
from workout_api.database import get_db
from workout_api.errors import CancellationError, WorkoutApiError
from workout_api.models.schemas import (
    GetWorkoutsQuery,
    PaginatedList,
    WorkoutCreate,
    WorkoutCreated,
    WorkoutResponse,
)
from workout_api.services.workout_service import WorkoutService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/workouts", tags=["workouts"])


async def _run_abortable(func: Callable[..., Any], *args: Any) -> Any:
    """Run a blocking service call in a worker thread, signalling it if we are cancelled."""

    abort = threading.Event()
    worker = asyncio.ensure_future(asyncio.to_thread(func, *args, abort=abort))
    try:
        return await asyncio.shield(worker)
    except asyncio.CancelledError:
        abort.set()
        # The worker still holds the request session; let it finish before
        # dependency teardown rolls back and closes that session.
        try:
            await worker
        except CancellationError:
            logger.info("Worker stopped after request cancellation")
        except Exception:
            logger.exception("Worker failed after request cancellation")
        raise


@router.get(
    "",
    response_model=PaginatedList[WorkoutResponse],
    name="GetWorkouts",
    operation_id="GetWorkouts",
)
async def get_workouts(
    db: Annotated[Session, Depends(get_db)],
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
    search_term: Annotated[str | None, Query(alias="searchTerm")] = None,
    from_date: Annotated[datetime | None, Query(alias="fromDate")] = None,
    to_date: Annotated[datetime | None, Query(alias="toDate")] = None,
    page: int = 1,
    page_size: Annotated[int | None, Query(alias="pageSize")] = None,
):
    """
    List the caller's workouts, newest first.

    Args:
        search_term: Matches workout or exercise names
        from_date: Inclusive lower bound on the workout date
        to_date: Inclusive upper bound on the workout date
        page: 1-based page number (default 1)
        page_size: Items per page (default 10, max 50)

    Returns:
        PaginatedList[WorkoutResponse]: One page of workouts with paging metadata
    """
    settings = get_settings()
    query = GetWorkoutsQuery(
        search_term=search_term,
        from_date=from_date,
        to_date=to_date,
        page=page,
        page_size=page_size if page_size is not None else settings.default_page_size,
    )

    try:
        service = WorkoutService(db, max_page_size=settings.max_page_size)
        return await _run_abortable(service.get_workouts, query, user_id)
    except WorkoutApiError:
        raise
    except Exception:
        logger.exception("Failed to list workouts for user %s", user_id)
        raise HTTPException(
            status_code=500,
            detail="Failed to list workouts"
        )


@router.post(
    "",
    response_model=WorkoutCreated,
    status_code=201,
    name="CreateWorkout",
    operation_id="CreateWorkout",
)
async def create_workout(
    workout: WorkoutCreate,
    db: Annotated[Session, Depends(get_db)],
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
):
    """
    Record a new workout with its exercises.

    Args:
        workout: Workout name and exercises (name, sets, reps, weight)

    Returns:
        WorkoutCreated: Identity of the new workout
    """
    service = WorkoutService(db)
    workout_id = await _run_abortable(service.create_workout, workout, user_id)
    return WorkoutCreated(id=workout_id)
