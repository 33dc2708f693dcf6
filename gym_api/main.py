"""FastAPI application factory and HTTP controllers.

Controllers are intentionally thin: they accept requests, delegate to
`WorkoutService`, and return JSON responses.

Endpoints implemented:
- GET /health
- GET /workouts
- POST /workouts
"""

import json
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from sqlmodel import Session

from gym_shared.schemas import Workout

from . import services
from .config import Settings
from .database import build_engine, create_db_and_tables, get_session
from .errors import install_error_handlers, unexpected_error_response

logger = logging.getLogger("gym_api.api")

router = APIRouter()


@router.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/workouts", response_model=List[Workout])
def list_workouts(db: Session = Depends(get_session)):
    """List all workouts, newest first. An empty store returns `[]`."""
    return services.WorkoutService(db).list_workouts()


@router.post("/workouts", response_model=Workout, status_code=201)
def create_workout(payload: Any = Body(default=None), db: Session = Depends(get_session)):
    """Create a workout from `{name}`.

    The body is validated with the shared schema; failures return 400
    with per-field `issues`.
    """
    return services.WorkoutService(db).create_workout(payload)


async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    context = {
        "request_id": req_id,
        "path": request.url.path,
        "method": request.method,
        "client": request.client.host if request.client else "unknown",
    }
    response: Response
    try:
        response = await call_next(request)
    except Exception as exc:
        response = unexpected_error_response(exc)
        context["status_code"] = response.status_code
        context["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception("request_failed %s", json.dumps(context, ensure_ascii=True))
    else:
        context["status_code"] = response.status_code
        context["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
        logger.info("request_done %s", json.dumps(context, ensure_ascii=True))
    response.headers["X-Request-ID"] = req_id
    return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build a configured application instance.

    Tests pass their own `Settings` (usually with a temporary database);
    the server entry point builds them from the environment.
    """
    if settings is None:
        settings = Settings.from_env()

    app = FastAPI(title="Gym Planner API")
    app.state.settings = settings
    app.state.engine = build_engine(settings.DATABASE_URL)
    create_db_and_tables(app.state.engine)

    # Last added runs outermost; CORS has to wrap the request context.
    app.middleware("http")(request_context_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)
    app.include_router(router)
    return app
