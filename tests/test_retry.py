"""Unit tests for RetryPolicy."""

import pytest

from patient_risk.connectors.retry import RetryPolicy


class TestRetryPolicy:
    """Tests for backoff schedule and budget."""

    def test_delay_doubles_from_initial(self) -> None:
        policy = RetryPolicy(max_retries=4, initial_backoff_ms=2000)
        assert [policy.delay(i) for i in range(4)] == [2.0, 4.0, 8.0, 16.0]

    def test_zero_backoff(self) -> None:
        assert RetryPolicy(initial_backoff_ms=0).delay(5) == 0.0

    def test_attempts_matches_budget(self) -> None:
        assert list(RetryPolicy(max_retries=3).attempts()) == [0, 1, 2]

    def test_is_last(self) -> None:
        policy = RetryPolicy(max_retries=2)
        assert policy.is_last(0) is False
        assert policy.is_last(1) is True

    @pytest.mark.parametrize("status", [429, 500, 503])
    def test_retryable_statuses(self, status: int) -> None:
        assert RetryPolicy.is_retryable(status) is True

    @pytest.mark.parametrize("status", [400, 401, 404, 502])
    def test_other_statuses_not_retryable(self, status: int) -> None:
        assert RetryPolicy.is_retryable(status) is False

    def test_rejects_empty_budget(self) -> None:
        with pytest.raises(ValueError, match="max_retries"):
            RetryPolicy(max_retries=0)
