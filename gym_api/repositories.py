"""Repository classes encapsulating database operations.

`WorkoutRepository` is the only persistence accessor. Database errors are
logged here and re-raised as `StorageFault` so no driver detail reaches
the HTTP response.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from . import models
from .errors import StorageFault

logger = logging.getLogger("gym_api.repositories")


class WorkoutRepository:
    """Create and list `Workout` rows."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, name: str) -> models.Workout:
        """Persist a new workout and return the managed instance."""
        workout = models.Workout(name=name)
        try:
            self.session.add(workout)
            self.session.commit()
            self.session.refresh(workout)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("workout_create_failed")
            raise StorageFault() from exc
        return workout

    def list(self) -> List[models.Workout]:
        """Return all workouts, newest first."""
        stmt = select(models.Workout).order_by(models.Workout.created_at.desc())
        try:
            return list(self.session.exec(stmt).all())
        except SQLAlchemyError as exc:
            logger.exception("workout_list_failed")
            raise StorageFault() from exc
