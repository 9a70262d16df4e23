"""Projections from ORM entities to API response schemas."""
from workout_api.models.database_models import Exercise, Workout
from workout_api.models.schemas import ExerciseResponse, WorkoutResponse


def to_exercise_response(exercise: Exercise) -> ExerciseResponse:
    return ExerciseResponse(
        id=exercise.id,
        name=exercise.name,
        sets=exercise.sets,
        reps=exercise.reps,
        weight=exercise.weight,
    )


def to_workout_response(workout: Workout) -> WorkoutResponse:
    return WorkoutResponse(
        id=workout.id,
        name=workout.name,
        date=workout.date,
        exercises=[to_exercise_response(e) for e in workout.exercises],
        is_shared=workout.is_shared,
    )
