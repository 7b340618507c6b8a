import logging
import re
import time
from typing import Optional
from uuid import uuid4

from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlmodel import Session, select

from domain.entities.user import User
from domain.errors import StoreError, StoreTimeout, StoreUnavailable, UniquenessViolation
from domain.ports import UserRepository
from infrastructure.persistence.user_model import UserTable

logger = logging.getLogger(__name__)

# SQLite: "UNIQUE constraint failed: users.username"
# Postgres: constraint or index name ("ix_users_email") and "Key (email)=(...)"
DUPLICATE_FIELD_PATTERNS = (
    re.compile(r"users\.(username|email)\b"),
    re.compile(r"Key \((username|email)\)"),
    re.compile(r"users_(username|email)"),
)


def is_unique_violation(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "unique" in message or "duplicate" in message


def duplicate_field(error: IntegrityError) -> Optional[str]:
    """Work out which unique column an IntegrityError refers to, from the message alone"""
    message = str(error.orig)
    for pattern in DUPLICATE_FIELD_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(1)
    return None


def is_statement_timeout(error) -> bool:
    """Driver-side timeouts (Postgres statement_timeout, SQLite busy timeout)"""
    message = str(getattr(error, "orig", error)).lower()
    return "statement timeout" in message or "database is locked" in message


class SqlUserRepository(UserRepository):
    """Implements UserRepository port using SQLModel on any SQLAlchemy backend"""

    def __init__(self, engine):
        self.engine = engine

    def insert_user(self, record: dict, timeout: Optional[float] = None) -> User:
        deadline = time.monotonic() + timeout if timeout is not None else None
        row = UserTable(
            id=uuid4(),
            username=record["username"],
            email=record["email"],
            hashed_password=record["hashed_password"],
        )
        try:
            with Session(self.engine) as session:
                session.add(row)
                session.flush()
                if deadline is not None and time.monotonic() > deadline:
                    session.rollback()
                    logger.error("Insert for %s exceeded %.1fs, rolled back", record["username"], timeout)
                    raise StoreTimeout(f"User store did not respond within {timeout:g} seconds")
                session.commit()
                session.refresh(row)
                return User.model_validate(row)
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise StoreError(str(e.orig)) from e
            field = self._conflicting_field(record) or duplicate_field(e)
            message = f"A user with this {field} already exists" if field else "User already exists"
            raise UniquenessViolation(message, field=field) from e
        except (OperationalError, InterfaceError) as e:
            if is_statement_timeout(e):
                raise StoreTimeout("User store did not respond in time") from e
            logger.error("User store unreachable: %s", e.orig)
            raise StoreUnavailable("User store is unavailable") from e
        except PoolTimeoutError as e:
            raise StoreTimeout("Timed out waiting for a store connection") from e
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def _conflicting_field(self, record: dict) -> Optional[str]:
        # the failed insert is already rolled back; username wins when both clash
        if self.find_by_username(record["username"]) is not None:
            return "username"
        if self.find_by_email(record["email"]) is not None:
            return "email"
        return None

    def find_by_username(self, username: str) -> Optional[User]:
        return self._find_one(UserTable.username == username)

    def find_by_email(self, email: str) -> Optional[User]:
        return self._find_one(UserTable.email == email)

    def _find_one(self, clause) -> Optional[User]:
        try:
            with Session(self.engine) as session:
                row = session.exec(select(UserTable).where(clause)).first()
                return User.model_validate(row) if row else None
        except (OperationalError, InterfaceError) as e:
            raise StoreUnavailable("User store is unavailable") from e
