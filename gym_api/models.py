"""SQLModel data models.

Gym Planner persists a single table; `Workout` rows are created once and
never updated.
"""

import uuid
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel

from gym_shared.schemas import MAX_NAME_LENGTH


class Workout(SQLModel, table=True):
    """A named workout.

    Fields:
    - `id`: UUID4 string assigned on creation
    - `name`: 1 to 120 characters, validated before it reaches the table
    - `created_at`: UTC creation time, the listing sort key
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str = Field(max_length=MAX_NAME_LENGTH, nullable=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
