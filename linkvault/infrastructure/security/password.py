"""Password hashing: bcrypt over a SHA-256 pre-hash.

bcrypt only reads the first 72 bytes of its input; the base64 SHA-256
digest is always 44 bytes, so every character of a long password counts.
"""

import base64
import hashlib

import bcrypt

DEFAULT_ROUNDS = 12


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Return the bcrypt hash (with its salt and cost) as text."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Return True if password matches; False for a wrong password or an unreadable hash."""
    try:
        return bool(bcrypt.checkpw(_prehash(password), hashed_password.encode("utf-8")))
    except (ValueError, TypeError):
        return False
