"""Run the API with `python -m gym_api`."""

import logging

import uvicorn

from .config import Settings
from .main import create_app

logger = logging.getLogger("gym_api.api")


def main():
    settings = Settings.from_env()
    logging.basicConfig(level=settings.LOG_LEVEL)
    app = create_app(settings)
    logger.info("Gym Planner API (%s) running on http://%s:%s", settings.ENV, settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
