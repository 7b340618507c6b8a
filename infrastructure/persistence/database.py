import logging
import math

from sqlalchemy.engine import Engine, make_url
from sqlmodel import SQLModel, create_engine

from infrastructure.config import Settings

# table classes must be imported before create_all
from infrastructure.persistence import user_model  # noqa: F401

logger = logging.getLogger(__name__)


def build_database_url(settings: Settings) -> str:
    """Combine the store URL with the access key, when one is configured"""
    url = make_url(settings.database_url)
    if settings.database_key:
        url = url.set(password=settings.database_key)
    return url.render_as_string(hide_password=False)


def connect_args_for(url: str, timeout: float) -> dict:
    """Driver options that keep a single store call within ``timeout`` seconds"""
    if url.startswith("sqlite"):
        # sessions are opened from worker threads; busy waits on locks stop at timeout
        return {"check_same_thread": False, "timeout": timeout}
    if url.startswith("postgresql"):
        return {
            # libpq only takes whole seconds here
            "connect_timeout": max(1, math.ceil(timeout)),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        }
    return {}


def create_db_engine(settings: Settings) -> Engine:
    url = build_database_url(settings)
    kwargs = {
        "echo": settings.database_echo,
        "connect_args": connect_args_for(url, settings.store_timeout_seconds),
    }
    if not url.startswith("sqlite"):
        kwargs["pool_timeout"] = settings.store_timeout_seconds
    engine = create_engine(url, **kwargs)
    logger.info("Database engine created for %s", make_url(url).render_as_string(hide_password=True))
    return engine


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)
