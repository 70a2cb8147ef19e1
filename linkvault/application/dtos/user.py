"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, create_user, etc.). No password."""

    id: int
    username: str
    email: str


@dataclass(frozen=True)
class UserCreate:
    """Input for registration. Password is plain text until hashed by UserService."""

    username: str
    email: str
    password: str
