from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database import engine
from models import Base
from routes import scores as scores_routes

logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=settings.log_level)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name)

    origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(scores_routes.router)
    app.include_router(scores_routes.tickets_router)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.on_event("startup")
    def _startup() -> None:
        logger.info("APP_ENV=%s DATABASE_URL=%s", settings.env, settings.database_url)
        # Schema only: the service reads ratings, it never writes them.
        if settings.create_schema_on_startup:
            Base.metadata.create_all(bind=engine)

    return app


app = create_app()
