"""Business logic services used by HTTP controllers.

Services validate input with the shared schema and persist through the
repository. Controllers only translate their return values into
responses.
"""

from typing import Any, List

from sqlmodel import Session

from gym_shared.schemas import Workout, validate_create_workout

from . import repositories
from .errors import RequestValidationFailed


class WorkoutService:
    """List and create workouts."""
    def __init__(self, session: Session):
        self.session = session
        self.workout_repo = repositories.WorkoutRepository(session)

    def list_workouts(self) -> List[Workout]:
        """Return every stored workout, newest first."""
        return [Workout.model_validate(w) for w in self.workout_repo.list()]

    def create_workout(self, payload: Any) -> Workout:
        """Validate a raw request body and persist a new workout.

        Raises `RequestValidationFailed` before touching the database when
        the body is rejected by the schema. Identical names are not
        deduplicated; every call creates a new record.
        """
        parsed = validate_create_workout(payload)
        if not parsed.success:
            raise RequestValidationFailed(parsed.issues)
        created = self.workout_repo.create(parsed.data.name)
        return Workout.model_validate(created)
