"""Password reset token table and request/response models."""

from datetime import datetime, timezone
from typing import Any
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PasswordResetToken(SQLModel, table=True):
    """A reset token issued for an account, usable until `expires_at`."""

    __tablename__ = "password_reset_tokens"

    id: int | None = Field(default=None, primary_key=True)
    token: str = Field(unique=True, index=True)
    email: str = Field(index=True)
    expires_at: datetime = Field(sa_type=DateTime(timezone=True), index=True)
    created_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True)
    )


class ResetTokenValidationRequest(SQLModel):
    """Request model for checking a reset token.

    Both fields accept any JSON value so that a missing or mistyped value
    surfaces as a domain error rather than a schema error.
    """

    token: Any = None
    email: Any = None


class ResetTokenValidationResponse(SQLModel):
    """Response model for a valid reset token."""

    success: bool = True
    message: str = "令牌有效"


class ErrorResponse(SQLModel):
    error: str
    details: str | None = None
