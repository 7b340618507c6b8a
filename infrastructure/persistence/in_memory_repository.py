import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from domain.entities.user import User
from domain.errors import UniquenessViolation
from domain.ports import UserRepository


class InMemoryUserRepository(UserRepository):
    """Process-local user store.

    A single lock covers the duplicate check and the insert, which gives the
    same atomicity a UNIQUE constraint gives the SQL store.
    """

    def __init__(self):
        self._users: Dict[UUID, User] = {}
        self._lock = threading.Lock()

    def insert_user(self, record: dict, timeout: Optional[float] = None) -> User:
        # nothing here blocks, so there is no bound to enforce
        with self._lock:
            for field in ("username", "email"):
                if any(getattr(u, field) == record[field] for u in self._users.values()):
                    raise UniquenessViolation(f"A user with this {field} already exists", field=field)
            user = User(
                id=uuid4(),
                username=record["username"],
                email=record["email"],
                hashed_password=record["hashed_password"],
                created_at=datetime.now(timezone.utc),
            )
            self._users[user.id] = user
            return user.model_copy()

    def find_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return next((u.model_copy() for u in self._users.values() if u.username == username), None)

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return next((u.model_copy() for u in self._users.values() if u.email == email), None)

    def all(self) -> List[User]:
        with self._lock:
            return [u.model_copy() for u in self._users.values()]
