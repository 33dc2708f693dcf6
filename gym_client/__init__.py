"""Client SDK for the Gym Planner API."""

from .api import (
    ApiRequestError,
    ClientConfig,
    ClientError,
    TransportFault,
    WorkoutsClient,
)

__all__ = [
    "ApiRequestError",
    "ClientConfig",
    "ClientError",
    "TransportFault",
    "WorkoutsClient",
]
