"""Workout schemas.

`CreateWorkout` describes the request body for creating a workout and
`Workout` the record returned by the API. Both the service and the
client validate through `safe_parse` so they accept exactly the same
inputs. Validation never trims or otherwise rewrites the name.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic_core import PydanticCustomError

from .errors import Issue

MAX_NAME_LENGTH = 120

T = TypeVar("T")


class CreateWorkout(BaseModel):
    """Request body for `POST /workouts`."""
    name: StrictStr

    @field_validator("name")
    @classmethod
    def _check_name_length(cls, value: str) -> str:
        if len(value) < 1:
            raise PydanticCustomError("string_too_short", "Workout name is required")
        if len(value) > MAX_NAME_LENGTH:
            raise PydanticCustomError(
                "string_too_long",
                f"Workout name must be {MAX_NAME_LENGTH} characters or less",
            )
        return value


class Workout(BaseModel):
    """A persisted workout as returned by the API.

    `created_at` is exposed as `createdAt` on the wire. Timestamps without
    an offset are taken to be UTC, which is how the database stores them.
    """
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    name: str
    created_at: datetime = Field(alias="createdAt")

    @field_validator("id")
    @classmethod
    def _check_uuid(cls, value: str) -> str:
        # Only the hyphenated 8-4-4-4-12 form; no braces, urn prefix or bare hex.
        try:
            canonical = str(uuid.UUID(value))
        except ValueError:
            canonical = None
        if canonical != value.lower():
            raise PydanticCustomError("uuid_parsing", "Invalid UUID")
        return value

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


@dataclass
class ParseResult(Generic[T]):
    """Outcome of `safe_parse`: either `data` or a non-empty `issues` list."""
    success: bool
    data: Optional[T] = None
    issues: List[Issue] = field(default_factory=list)

    @property
    def first_message(self) -> Optional[str]:
        return self.issues[0].message if self.issues else None


def issues_from_error(exc: ValidationError) -> List[Issue]:
    """Flatten pydantic errors into `Issue`s with dot-joined paths."""
    return [
        Issue(path=".".join(str(part) for part in err["loc"]), message=err["msg"])
        for err in exc.errors()
    ]


def safe_parse(adapter: TypeAdapter, value: Any) -> ParseResult:
    """Validate `value` without raising; the result carries data or issues."""
    try:
        data = adapter.validate_python(value)
    except ValidationError as exc:
        return ParseResult(success=False, issues=issues_from_error(exc))
    return ParseResult(success=True, data=data)


_CREATE_WORKOUT = TypeAdapter(CreateWorkout)
_WORKOUT = TypeAdapter(Workout)
_WORKOUTS = TypeAdapter(List[Workout])


def validate_create_workout(value: Any) -> ParseResult[CreateWorkout]:
    return safe_parse(_CREATE_WORKOUT, value)


def validate_workout(value: Any) -> ParseResult[Workout]:
    return safe_parse(_WORKOUT, value)


def validate_workouts(value: Any) -> ParseResult[List[Workout]]:
    return safe_parse(_WORKOUTS, value)
