"""Retry budget and exponential backoff schedule for page requests."""

from dataclasses import dataclass

RETRYABLE_STATUS_CODES = frozenset({429, 500, 503})


@dataclass(frozen=True)
class RetryPolicy:
    """
    Attempt budget plus a doubling backoff.
    delay(0) is the initial backoff; each later attempt doubles it. No jitter, no cap.
    """

    max_retries: int = 3
    initial_backoff_ms: int = 2000

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if self.initial_backoff_ms < 0:
            raise ValueError("initial_backoff_ms cannot be negative")

    def delay(self, attempt: int) -> float:
        """Seconds to wait after the given 0-based failed attempt."""
        return self.initial_backoff_ms * (2**attempt) / 1000.0

    def attempts(self) -> range:
        return range(self.max_retries)

    def is_last(self, attempt: int) -> bool:
        return attempt >= self.max_retries - 1

    @staticmethod
    def is_retryable(status_code: int) -> bool:
        return status_code in RETRYABLE_STATUS_CODES
