"""Bearer tokens: HS256 JWTs whose subject is the user id."""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from linkvault.core.config import Settings, get_settings


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """Sign data as JWT claims, adding exp (ACCESS_TOKEN_EXPIRE_MINUTES unless overridden)."""
    settings = settings or get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**data, "exp": datetime.now(UTC) + expires_delta}
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """Verify signature and expiry and return the claims.

    Raises:
        ValueError: If the token is invalid, expired, or lacks exp/sub.
    """
    settings = settings or get_settings()
    try:
        return jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e


def user_id_from_token(token: str, settings: Settings | None = None) -> int:
    """Return the user id carried in sub. Raises ValueError when absent or not an integer."""
    payload = verify_token(token, settings)
    sub = payload.get("sub")
    try:
        user_id = int(sub)
    except (TypeError, ValueError) as e:
        raise ValueError("Token subject is not a user id") from e
    if user_id <= 0:
        raise ValueError("Token subject is not a user id")
    return user_id
