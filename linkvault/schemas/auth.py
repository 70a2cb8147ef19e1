"""Auth API schemas."""

from pydantic import EmailStr, Field, model_validator

from linkvault.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Request body for POST /auth/register."""

    username: str = Field(..., min_length=1, max_length=256)
    email: EmailStr = Field(...)
    password: str = Field(..., min_length=1, description="Password (min 6 characters)")


class LoginRequest(CamelModel):
    """Request body for POST /auth/login. Identify the account by email or username."""

    email: str | None = Field(default=None, max_length=256)
    username: str | None = Field(default=None, max_length=256)
    password: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def email_or_username(self) -> "LoginRequest":
        if not self.email and not self.username:
            raise ValueError("email or username is required")
        return self


class UserResponse(CamelModel):
    """Registered user (never includes the password hash)."""

    id: int
    username: str
    email: str


class TokenResponse(CamelModel):
    """Login result: bearer token plus the authenticated user."""

    message: str = "Login successful"
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
