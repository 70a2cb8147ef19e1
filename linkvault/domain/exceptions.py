"""Domain exceptions for LinkVault.

A single exception type tagged with an ErrorKind. Callers and the
presentation layer match on ``exc.kind`` (never on subclasses); each kind
carries its machine-readable code and HTTP status. Exception handlers map
them to responses.
"""

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Error variants: (error_code, http_status)."""

    VALIDATION = ("VALIDATION_ERROR", 400)
    AUTHENTICATION = ("AUTHENTICATION_ERROR", 401)
    NOT_FOUND = ("NOT_FOUND", 404)
    CONFLICT = ("CONFLICT", 409)
    STORE = ("STORE_ERROR", 500)

    def __init__(self, error_code: str, status_code: int) -> None:
        self.error_code = error_code
        self.status_code = status_code

    @property
    def is_domain(self) -> bool:
        """True for errors that reach the client unchanged (not internal)."""
        return self is not ErrorKind.STORE


class LinkVaultException(Exception):
    """Tagged error raised by services and repositories.

    Attributes:
        kind: ErrorKind variant (error code + HTTP status).
        message: Human-readable error description.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            kind: Error variant.
            message: Human-readable error description.
            details: Optional dict of extra context.
        """
        self.kind = kind
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def error_code(self) -> str:
        return self.kind.error_code

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"LinkVaultException({self.kind.name}, {self.message!r})"

    @classmethod
    def validation(cls, message: str, field: str | None = None) -> "LinkVaultException":
        """Malformed or missing input (e.g. empty title, invalid URL)."""
        details = {"field": field} if field else {}
        return cls(ErrorKind.VALIDATION, message, details)

    @classmethod
    def not_found(cls, resource_type: str, resource_id: int | str) -> "LinkVaultException":
        """Record absent or owned by someone else (reported identically)."""
        return cls(
            ErrorKind.NOT_FOUND,
            f"{resource_type} not found: {resource_id}",
            {"resource_type": resource_type, "resource_id": resource_id},
        )

    @classmethod
    def conflict(cls, message: str, field: str | None = None) -> "LinkVaultException":
        """Uniqueness violation (e.g. duplicate category name for an owner)."""
        details = {"field": field} if field else {}
        return cls(ErrorKind.CONFLICT, message, details)

    @classmethod
    def authentication(cls, message: str = "Invalid credentials") -> "LinkVaultException":
        """Credentials or token rejected."""
        return cls(ErrorKind.AUTHENTICATION, message)

    @classmethod
    def store(cls, operation: str) -> "LinkVaultException":
        """Unexpected record-store failure. Message never carries driver text."""
        return cls(
            ErrorKind.STORE,
            f"Record store failure during {operation}",
            {"operation": operation},
        )
