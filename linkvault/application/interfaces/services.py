"""Service interfaces (ports) for the application layer.

Protocols define contracts for cache and credential backends (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol


class ICacheService(Protocol):
    """Key-value cache with TTL, exact delete and glob-pattern delete.

    Implementations report failures by returning None/False/0, never by raising.
    """

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value (JSON-decoded) or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store one JSON-serializable value with TTL. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching a glob pattern. Returns count deleted."""

    async def clear_all(self) -> bool:
        """Flush every key (tests and operations only)."""


class IAuthSecurity(Protocol):
    """Password hashing and token issuing used by UserService."""

    def hash_password(self, password: str) -> str:
        """Return a salted hash of password."""

    def verify_password(self, password: str, hashed_password: str) -> bool:
        """Return True if password matches hashed_password."""

    def create_access_token(self, data: dict[str, Any]) -> str:
        """Return a signed bearer token carrying data as claims."""
