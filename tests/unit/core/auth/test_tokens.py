"""Tests for reset token utilities."""

from datetime import UTC, datetime, timedelta

from contentdesk.core.auth.tokens import (
    RESET_TOKEN_BYTES,
    digest_reset_token,
    new_reset_token,
    reset_deadline,
    reset_window_closed,
)


class TestNewResetToken:
    def test_token_is_hex_of_expected_length(self) -> None:
        token = new_reset_token()
        assert len(token) == RESET_TOKEN_BYTES * 2
        int(token, 16)

    def test_tokens_are_unique(self) -> None:
        assert len({new_reset_token() for _ in range(20)}) == 20


class TestDigestResetToken:
    def test_digest_is_deterministic_sha256(self) -> None:
        assert digest_reset_token("abc") == digest_reset_token("abc")
        assert len(digest_reset_token("abc")) == 64

    def test_digest_differs_from_token(self) -> None:
        token = new_reset_token()
        assert digest_reset_token(token) != token


class TestResetDeadline:
    def test_default_deadline_is_one_hour(self) -> None:
        deadline = reset_deadline()
        delta = deadline - datetime.now(UTC)
        assert timedelta(minutes=59) < delta <= timedelta(hours=1)

    def test_future_deadline_is_open(self) -> None:
        assert reset_window_closed(reset_deadline()) is False

    def test_past_deadline_is_closed(self) -> None:
        assert reset_window_closed(datetime.now(UTC) - timedelta(seconds=1)) is True

    def test_missing_deadline_is_closed(self) -> None:
        assert reset_window_closed(None) is True

    def test_naive_datetime_treated_as_utc(self) -> None:
        naive_future = (datetime.now(UTC) + timedelta(hours=1)).replace(tzinfo=None)
        assert reset_window_closed(naive_future) is False
