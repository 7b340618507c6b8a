import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt ignores (or rejects) anything past this many bytes of input
MAX_PASSWORD_BYTES = 72


def hash_password(plain_password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """
    Hash a plain password using bcrypt with a fresh random salt

    Args:
        plain_password: The plain text password to hash
        rounds: bcrypt work factor (log2 of the iteration count)

    Returns:
        Hashed password string, salt and cost embedded
    """
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(plain_password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a stored bcrypt hash

    Returns:
        True if passwords match, False otherwise (including malformed hashes)
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8")
        )
    except ValueError:
        return False
