# task_manager/utils/security.py
# Password hashing helpers (bcrypt)

import secrets
from functools import lru_cache

import bcrypt

DEFAULT_ROUNDS = 12
# bcrypt ignores (newer releases reject) anything past 72 bytes
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Return a salted bcrypt hash of ``password``"""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored bcrypt hash"""
    password_bytes = plain_password.encode("utf-8")
    if len(password_bytes) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


@lru_cache(maxsize=None)
def dummy_hash(rounds: int = DEFAULT_ROUNDS) -> str:
    """A hash no password matches, for checks against an account that does not exist"""
    return hash_password(secrets.token_urlsafe(32), rounds=rounds)
