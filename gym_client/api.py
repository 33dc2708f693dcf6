"""HTTP client for the Gym Planner API.

`WorkoutsClient` wraps the two workout endpoints. Any non-2xx response
becomes an `ApiRequestError` carrying the server's `message`; network
failures and undecodable bodies become a `TransportFault`. There is no
retry and no timeout policy beyond httpx's default.
"""

import logging
import os
from typing import Any, List, Mapping, Optional, Union

import httpx

from gym_shared.schemas import CreateWorkout, Workout, validate_workout, validate_workouts

logger = logging.getLogger("gym_client.api")

DEFAULT_BASE_URL = "http://localhost:3000"


class ClientConfig:
    """Where the client sends requests."""
    def __init__(self, base_url: str = DEFAULT_BASE_URL):
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Read `API_URL`, falling back to `http://localhost:3000`."""
        environ = os.environ if environ is None else environ
        return cls(environ.get("API_URL") or DEFAULT_BASE_URL)


class ClientError(Exception):
    """Base class for every failure raised by `WorkoutsClient`."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ApiRequestError(ClientError):
    """The API answered with a non-success status."""
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class TransportFault(ClientError):
    """The request never completed or the response could not be decoded."""


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    message = body.get("message") if isinstance(body, dict) else None
    if isinstance(message, str) and message:
        return message
    return f"Request failed ({response.status_code})"


class WorkoutsClient:
    """Typed access to `/workouts`.

    An `httpx.Client` can be injected (tests pass FastAPI's `TestClient`);
    otherwise one is created for `config.base_url` and closed by `close()`.
    """

    def __init__(self, config: Optional[ClientConfig] = None, http: Optional[httpx.Client] = None):
        self.config = config or ClientConfig()
        self._owns_http = http is None
        self.http = http or httpx.Client(base_url=self.config.base_url)

    def __enter__(self) -> "WorkoutsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def _request(self, method: str, path: str, payload: Any = None) -> Any:
        try:
            response = self.http.request(
                method,
                path,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            logger.warning("request_error %s %s: %s", method, path, exc)
            raise TransportFault(f"Network error: {exc}") from exc
        if not response.is_success:
            message = _error_message(response)
            logger.info("request_rejected %s %s status=%s", method, path, response.status_code)
            raise ApiRequestError(message, response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise TransportFault("Response body is not valid JSON") from exc

    def get_workouts(self) -> List[Workout]:
        """Fetch all workouts, newest first."""
        parsed = validate_workouts(self._request("GET", "/workouts"))
        if not parsed.success:
            raise TransportFault(f"Unexpected response: {parsed.first_message}")
        return parsed.data

    def create_workout(self, data: Union[CreateWorkout, Mapping[str, Any]]) -> Workout:
        """Create a workout and return the stored record."""
        payload = data.model_dump() if isinstance(data, CreateWorkout) else dict(data)
        parsed = validate_workout(self._request("POST", "/workouts", payload))
        if not parsed.success:
            raise TransportFault(f"Unexpected response: {parsed.first_message}")
        return parsed.data
