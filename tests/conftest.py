"""
Shared pytest fixtures for the blog backend tests.
"""
import time
from unittest.mock import MagicMock

import pytest
from sqlalchemy import event
from sqlmodel import Session, func, select

from domain.ports import UserRepository
from infrastructure.config import Settings
from infrastructure.persistence.database import create_db_engine, init_db
from infrastructure.persistence.in_memory_repository import InMemoryUserRepository
from infrastructure.persistence.user_model import UserTable
from infrastructure.persistence.user_repository import SqlUserRepository

# bcrypt's minimum cost keeps the suite fast; the default cost has its own tests
FAST_ROUNDS = 4


def make_settings(**overrides) -> Settings:
    """Settings isolated from any local .env file"""
    values = {"bcrypt_rounds": FAST_ROUNDS, "log_level": "WARNING"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite:///{tmp_path / 'blog.db'}"


@pytest.fixture
def sql_engine(sqlite_url):
    engine = create_db_engine(make_settings(database_url=sqlite_url))
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_repo(sql_engine):
    return SqlUserRepository(sql_engine)


@pytest.fixture
def memory_repo():
    return InMemoryUserRepository()


@pytest.fixture
def mock_user_repo():
    """UserRepository double whose insert_user behaviour each test sets"""
    return MagicMock(spec=UserRepository)


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def user_count(sql_engine):
    """Row count of the users table on the test engine"""
    def count() -> int:
        with Session(sql_engine) as session:
            return session.exec(select(func.count()).select_from(UserTable)).one()
    return count


@pytest.fixture
def slow_inserts(sql_engine):
    """Call with a delay to make every INSERT on the test engine take that long"""
    installed = []

    def install(delay: float) -> None:
        def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            if statement.lstrip().upper().startswith("INSERT"):
                time.sleep(delay)

        event.listen(sql_engine, "before_cursor_execute", before_cursor_execute)
        installed.append(before_cursor_execute)

    yield install
    for listener in installed:
        event.remove(sql_engine, "before_cursor_execute", listener)
