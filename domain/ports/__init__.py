from abc import ABC, abstractmethod
from typing import Optional

from domain.entities.user import User


class UserRepository(ABC):
    """Port for user persistence.

    Implementations must make the uniqueness check and the insert a single
    atomic step and report failures through the ``domain.errors`` variants.
    """

    @abstractmethod
    def insert_user(self, record: dict, timeout: Optional[float] = None) -> User:
        """Insert one user row built from ``username``, ``email`` and ``hashed_password``.

        When ``timeout`` is given the store itself enforces it: an insert that
        overruns is rolled back, so a timeout never leaves a row behind.

        Raises:
            UniquenessViolation: username or email already taken
            StoreTimeout: the insert did not finish within ``timeout``
            StoreUnavailable: the backend could not be reached
            StoreError: any other store-level failure
        """
        pass

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        pass
