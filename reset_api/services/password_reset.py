"""Password reset token service: validation and expiry purge."""

from datetime import datetime, timezone
from typing import Any
from loguru import logger
from opentelemetry import metrics
from sqlalchemy import delete
from sqlmodel import Session, select

from reset_api.models.password_reset import PasswordResetToken
from reset_api.exceptions import MissingParameterError, TokenInvalidOrExpiredError
from reset_api.utils.validation import mask_email

meter = metrics.get_meter(__name__)
validation_counter = meter.create_counter(
    "reset_token.validations",
    unit="1",
    description="Password reset token validation attempts by outcome",
)


def validate_reset_token(
    session: Session,
    token: Any,
    email: Any,
    now: datetime | None = None,
) -> PasswordResetToken:
    """
    Check that a live reset token exists for the given email.

    The lookup is read-only: the matching record is neither consumed nor modified.

    Parameters:
        session: Database session.
        token: Reset token as received from the client.
        email: Account email the token was issued for.
        now: Reference instant for the expiry check; defaults to the current UTC time.

    Returns:
        PasswordResetToken: The matching record.

    Raises:
        MissingParameterError: If `token` or `email` is missing or falsy; no lookup is made.
        TokenInvalidOrExpiredError: If no record matches, the record has expired,
            either value is not a string, or the lookup itself failed for any reason.
    """
    if not token or not email:
        validation_counter.add(1, {"outcome": "missing_parameter"})
        raise MissingParameterError()

    if not isinstance(token, str) or not isinstance(email, str):
        # Only strings are stored, so nothing can match
        logger.info("Rejected reset token with a non-string token or email")
        validation_counter.add(1, {"outcome": "invalid"})
        raise TokenInvalidOrExpiredError()

    if now is None:
        now = datetime.now(timezone.utc)

    statement = select(PasswordResetToken).where(
        PasswordResetToken.token == token,
        PasswordResetToken.email == email,
        PasswordResetToken.expires_at > now,
    )
    try:
        record = session.exec(statement).one_or_none()
    except Exception:
        # Clients only ever see "invalid or expired"
        logger.opt(exception=True).error(
            f"Reset token lookup failed for {mask_email(email)}"
        )
        validation_counter.add(1, {"outcome": "invalid"})
        raise TokenInvalidOrExpiredError()

    if record is None:
        logger.info(f"Rejected reset token for {mask_email(email)}")
        validation_counter.add(1, {"outcome": "invalid"})
        raise TokenInvalidOrExpiredError()

    validation_counter.add(1, {"outcome": "valid"})
    return record


def purge_expired_tokens(session: Session, now: datetime | None = None) -> int:
    """
    Delete every reset token that expired before `now`.

    Parameters:
        session: Database session. The deletion is committed.
        now: Cut-off instant; defaults to the current UTC time.

    Returns:
        int: Number of deleted records.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    statement = delete(PasswordResetToken).where(
        PasswordResetToken.expires_at < now  # type: ignore[arg-type]
    )
    result = session.exec(statement)  # type: ignore[call-overload]
    session.commit()
    deleted = result.rowcount or 0
    logger.info(f"Purged {deleted} expired reset token(s)")
    return deleted
