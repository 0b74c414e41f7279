import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seatbook.api.exception_handlers import register_exception_handlers
from seatbook.api.v1.router import api_router
from seatbook.core.config import configure_logging, settings
from seatbook.db.init_db import create_database
from seatbook.db.session import Database

logger = logging.getLogger(__name__)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the API. Pass a `Database` to run against an existing handle
    (tests do); otherwise one is opened from settings at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: open the store, ensure DB exists and create tables
        db = database or Database(settings.DATABASE_URL)
        if db.is_postgres:
            create_database()
        db.create_all()
        app.state.database = db
        logger.info("Database ready (%s)", db.engine.dialect.name)
        yield

        # Shutdown: release pooled connections
        db.dispose()
        logger.info("Database connections released")

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

    # Set all CORS enabled origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/")
    def read_root():
        return {"Hello": "Seatbook"}

    return app


configure_logging(settings.LOG_LEVEL)
app = create_app()
