import asyncio
import logging

from domain.entities.user import User
from domain.errors import RegistrationValidationError, StoreTimeout
from domain.ports import UserRepository
from infrastructure.security import DEFAULT_ROUNDS, MAX_PASSWORD_BYTES, hash_password

logger = logging.getLogger(__name__)


def validate_registration(username, email, password) -> None:
    """Reject absent or blank fields before any hashing happens"""
    for name, value in (("username", username), ("email", email), ("password", password)):
        if not isinstance(value, str):
            raise RegistrationValidationError(f"{name} must be a string")
    if not username.strip():
        raise RegistrationValidationError("username must not be empty")
    if not email.strip():
        raise RegistrationValidationError("email must not be empty")
    if password == "":
        raise RegistrationValidationError("password must not be empty")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise RegistrationValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")


class RegisterUseCase:
    """Validate, hash, persist.

    Hashing and the store call both run in worker threads so concurrent
    requests keep being served. The store enforces ``store_timeout`` and rolls
    back on overrun, so the outcome reported here is always the committed one.
    Store failures surface unchanged as their ``domain.errors`` variant.
    """

    def __init__(self, user_repo: UserRepository, hash_rounds: int = DEFAULT_ROUNDS,
                 store_timeout: float = 5.0):
        self.user_repo = user_repo
        self.hash_rounds = hash_rounds
        self.store_timeout = store_timeout

    async def execute(self, username: str, email: str, password: str) -> User:
        validate_registration(username, email, password)

        hashed = await asyncio.to_thread(hash_password, password, self.hash_rounds)
        record = {
            "username": username,
            "email": email,
            "hashed_password": hashed,
        }
        try:
            user = await asyncio.to_thread(
                self.user_repo.insert_user, record, timeout=self.store_timeout
            )
        except StoreTimeout:
            logger.error("User store did not answer within %.1fs", self.store_timeout)
            raise

        logger.info("Registered user id=%s username=%s", user.id, user.username)
        return user
