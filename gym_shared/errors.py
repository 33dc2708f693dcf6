"""Common API error shape.

Every non-2xx response from the API carries an `ApiErrorBody`. Validation
failures add the per-field `issues` list.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Issue(BaseModel):
    """A single validation violation: dot-joined field path plus message."""
    path: str
    message: str


class ApiErrorBody(BaseModel):
    """Uniform error body returned for every failed request."""
    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(alias="statusCode")
    error: str
    message: str
    issues: Optional[List[Issue]] = None

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
