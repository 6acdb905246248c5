"""Tests for the password reset token service."""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from reset_api.models.password_reset import PasswordResetToken
from reset_api.services import password_reset as password_reset_service
from reset_api.exceptions import MissingParameterError, TokenInvalidOrExpiredError

TEST_TOKEN = "abc123"
TEST_EMAIL = "user@example.com"
NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(name="record_at")
def record_at_fixture(session: Session):
    """
    Provide a factory persisting a token whose expiry is given as an offset from NOW.
    """

    def _create(offset: timedelta, token: str = TEST_TOKEN) -> PasswordResetToken:
        record = PasswordResetToken(
            token=token, email=TEST_EMAIL, expires_at=NOW + offset
        )
        session.add(record)
        session.commit()
        session.refresh(record)
        return record

    return _create


class TestValidateResetToken:
    """Test reset token validation."""

    def test_live_token_returns_record(self, session: Session, record_at):
        created = record_at(timedelta(minutes=1))

        record = password_reset_service.validate_reset_token(
            session, TEST_TOKEN, TEST_EMAIL, now=NOW
        )

        assert record.id == created.id
        assert record.email == TEST_EMAIL

    def test_token_expiring_now_is_rejected(self, session: Session, record_at):
        """Expiry is strict: a token is dead at its own expires_at."""
        record_at(timedelta(0))

        with pytest.raises(TokenInvalidOrExpiredError):
            password_reset_service.validate_reset_token(
                session, TEST_TOKEN, TEST_EMAIL, now=NOW
            )

    def test_expired_token_is_rejected(self, session: Session, record_at):
        record_at(timedelta(seconds=-1))

        with pytest.raises(TokenInvalidOrExpiredError) as exc_info:
            password_reset_service.validate_reset_token(
                session, TEST_TOKEN, TEST_EMAIL, now=NOW
            )

        assert str(exc_info.value) == "重置令牌无效或已过期"

    def test_unknown_token_is_rejected(self, session: Session):
        with pytest.raises(TokenInvalidOrExpiredError):
            password_reset_service.validate_reset_token(
                session, TEST_TOKEN, TEST_EMAIL, now=NOW
            )

    def test_default_now_is_current_time(self, session: Session):
        session.add(
            PasswordResetToken(
                token=TEST_TOKEN,
                email=TEST_EMAIL,
                expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
            )
        )
        session.commit()

        record = password_reset_service.validate_reset_token(
            session, TEST_TOKEN, TEST_EMAIL
        )

        assert record.token == TEST_TOKEN

    @pytest.mark.parametrize(
        "token,email",
        [
            (None, TEST_EMAIL),
            (TEST_TOKEN, None),
            ("", TEST_EMAIL),
            (TEST_TOKEN, ""),
            (0, TEST_EMAIL),
            (TEST_TOKEN, False),
        ],
    )
    def test_missing_parameter(self, mock_session, token, email):
        with pytest.raises(MissingParameterError) as exc_info:
            password_reset_service.validate_reset_token(mock_session, token, email)

        assert str(exc_info.value) == "缺少必要参数"
        mock_session.exec.assert_not_called()

    def test_lookup_failure_is_rejected_and_logged(self, mock_session):
        mock_session.exec.side_effect = OperationalError(
            "SELECT", {}, Exception("connection refused")
        )

        with patch("reset_api.services.password_reset.logger") as mock_logger:
            with pytest.raises(TokenInvalidOrExpiredError):
                password_reset_service.validate_reset_token(
                    mock_session, TEST_TOKEN, TEST_EMAIL
                )

        mock_logger.opt.assert_called_once_with(exception=True)
        logged = mock_logger.opt.return_value.error.call_args[0][0]
        # Email is masked in logs
        assert TEST_EMAIL not in logged
        assert "u***r@example.com" in logged

    def test_unexpected_lookup_error_is_rejected(self, mock_session):
        mock_session.exec.side_effect = RuntimeError("driver exploded")

        with pytest.raises(TokenInvalidOrExpiredError):
            password_reset_service.validate_reset_token(
                mock_session, TEST_TOKEN, TEST_EMAIL
            )

    @pytest.mark.parametrize(
        "token,email", [(123, TEST_EMAIL), (TEST_TOKEN, True), ({"a": 1}, TEST_EMAIL)]
    )
    def test_non_string_values_are_rejected_without_lookup(
        self, mock_session, token, email
    ):
        with pytest.raises(TokenInvalidOrExpiredError):
            password_reset_service.validate_reset_token(mock_session, token, email)

        mock_session.exec.assert_not_called()

    def test_validation_is_read_only(self, session: Session, record_at):
        record_at(timedelta(hours=1))

        password_reset_service.validate_reset_token(
            session, TEST_TOKEN, TEST_EMAIL, now=NOW
        )

        assert not session.dirty
        assert not session.new
        assert not session.deleted

    def test_outcomes_are_counted(self, session: Session, record_at):
        record_at(timedelta(hours=1))

        with patch.object(password_reset_service, "validation_counter") as counter:
            password_reset_service.validate_reset_token(
                session, TEST_TOKEN, TEST_EMAIL, now=NOW
            )
            with pytest.raises(TokenInvalidOrExpiredError):
                password_reset_service.validate_reset_token(
                    session, "other", TEST_EMAIL, now=NOW
                )
            with pytest.raises(MissingParameterError):
                password_reset_service.validate_reset_token(session, None, TEST_EMAIL)

        outcomes = [c.args[1]["outcome"] for c in counter.add.call_args_list]
        assert outcomes == ["valid", "invalid", "missing_parameter"]


class TestPurgeExpiredTokens:
    """Test deletion of expired tokens."""

    def test_purge_deletes_only_expired_tokens(self, session: Session, record_at):
        record_at(timedelta(hours=-2), token="old")
        record_at(timedelta(seconds=-1), token="just-expired")
        record_at(timedelta(hours=1), token="live")

        deleted = password_reset_service.purge_expired_tokens(session, now=NOW)

        assert deleted == 2
        remaining = session.exec(select(PasswordResetToken.token)).all()
        assert remaining == ["live"]

    def test_purge_keeps_token_expiring_now(self, session: Session, record_at):
        record_at(timedelta(0))

        deleted = password_reset_service.purge_expired_tokens(session, now=NOW)

        assert deleted == 0
        assert len(session.exec(select(PasswordResetToken)).all()) == 1

    def test_purge_on_empty_table(self, session: Session):
        assert password_reset_service.purge_expired_tokens(session) == 0
