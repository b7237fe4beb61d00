"""Exceptions raised at the HTTP and configuration seams."""

from typing import Optional


class FetchError(Exception):
    """A page request failed in a way that retrying will not fix."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransientFetchError(FetchError):
    """Retryable failure: rate limit, server error, network fault or garbled body."""


class SubmissionError(Exception):
    """The results POST was rejected or could not be delivered."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigError(Exception):
    """Settings are missing or unreadable."""
