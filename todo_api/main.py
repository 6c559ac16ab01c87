import logging
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import CORS_ORIGINS, DATABASE_URL, LOG_LEVEL
from .database import create_db_engine, create_session_factory, create_tables
from .errors import register_error_handlers
from .logging_setup import setup_logging
from .routers import tasks

logger = logging.getLogger(__name__)


def create_app(
    database_url: Optional[str] = None,
    cors_origins: Optional[List[str]] = None,
    configure_logging: bool = False,
) -> FastAPI:
    """Build the API with its own engine; nothing is shared between apps."""
    database_url = database_url or DATABASE_URL
    cors_origins = CORS_ORIGINS if cors_origins is None else cors_origins

    app = FastAPI(
        title="Todo API",
        description="Create, list, edit, toggle and delete tasks with an optional due date",
        version=__version__,
    )

    app.state.engine = create_db_engine(database_url)
    app.state.session_factory = create_session_factory(app.state.engine)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(tasks.router, tags=["tasks"])

    # Create tables on startup
    @app.on_event("startup")
    def on_startup():
        if configure_logging:
            setup_logging(LOG_LEVEL)
        create_tables(app.state.engine)
        logger.info("Database ready at %s", app.state.engine.url.render_as_string(hide_password=True))

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.engine.dispose()

    @app.get("/")
    def read_root():
        return {"message": "Todo API"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app(configure_logging=True)
