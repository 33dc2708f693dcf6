"""Validation contract shared by the Gym Planner API and its clients.

The package depends only on pydantic so both the service and the client
can import it without pulling in each other's runtime.
"""

from .errors import ApiErrorBody, Issue
from .schemas import (
    MAX_NAME_LENGTH,
    CreateWorkout,
    ParseResult,
    Workout,
    safe_parse,
    validate_create_workout,
    validate_workout,
    validate_workouts,
)

__all__ = [
    "MAX_NAME_LENGTH",
    "ApiErrorBody",
    "CreateWorkout",
    "Issue",
    "ParseResult",
    "Workout",
    "safe_parse",
    "validate_create_workout",
    "validate_workout",
    "validate_workouts",
]
