from contextlib import asynccontextmanager
from typing import Optional
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from infrastructure.api.errors import request_validation_handler
from infrastructure.api.routes import auth, health
from infrastructure.config import Settings, settings as default_settings
from infrastructure.container import container
from infrastructure.persistence.database import create_db_engine, init_db
from infrastructure.persistence.in_memory_repository import InMemoryUserRepository
from infrastructure.persistence.user_repository import SqlUserRepository

logger = logging.getLogger(__name__)


def _setup_dependencies(settings: Settings):
    """Build the store once and register it; returns the engine, if any, for teardown"""
    if settings.store_backend == "memory":
        container.register("user_repository", InMemoryUserRepository())
        return None
    if settings.store_backend != "sql":
        raise ValueError(f"Unknown store backend '{settings.store_backend}'")
    engine = create_db_engine(settings)
    init_db(engine)
    container.register("user_repository", SqlUserRepository(engine))
    return engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    engine = _setup_dependencies(settings)
    logger.info("Store backend '%s' ready", settings.store_backend)
    try:
        yield
    finally:
        container.clear()
        if engine is not None:
            engine.dispose()
        logger.info("Store backend '%s' shut down", settings.store_backend)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="Blog API",
        description="User registration for the blog backend",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Register routes
    app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
    app.include_router(auth.router, prefix=settings.api_prefix, tags=["auth"])
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.api_host, port=default_settings.port)
