"""Security: JWT and password hashing."""

from linkvault.infrastructure.security.jwt import (
    create_access_token,
    user_id_from_token,
    verify_token,
)
from linkvault.infrastructure.security.password import hash_password, verify_password

__all__ = [
    "create_access_token",
    "hash_password",
    "user_id_from_token",
    "verify_password",
    "verify_token",
]
