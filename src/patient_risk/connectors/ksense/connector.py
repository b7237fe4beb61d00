"""Ksense patients API connector.

The patients endpoint is paged (?page=&limit=) and deliberately unreliable:
it rate-limits (429), fails intermittently (500/503) and sometimes drops the
connection. Each page is fetched with a bounded retry and doubling backoff;
a page that still fails after the budget is reported as None so pagination
can stop with whatever was gathered.
"""

import logging
import time
from typing import Any, Callable, Optional

import httpx
from pydantic import ValidationError

from patient_risk.config import DEFAULT_BASE_URL, Settings
from patient_risk.connectors.base import BaseConnector
from patient_risk.connectors.retry import RetryPolicy
from patient_risk.errors import FetchError, SubmissionError, TransientFetchError
from patient_risk.models.raw import PagePayload
from patient_risk.models.results import ResultSet

from .constants import API_KEY_HEADER, PATIENTS_PATH, SUBMIT_PATH

logger = logging.getLogger(__name__)


class KsenseConnector(BaseConnector):
    """
    Connector for the Ksense assessment API.
    Fetches patient pages with retry and submits the final result set.
    """

    source_id = "ksense"

    DEFAULT_HEADERS = {
        "User-Agent": "patient-risk/0.1",
        "Accept": "application/json",
    }

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
        timeout: float = 30.0,
    ):
        """
        Args:
            api_key: Sent as the x-api-key header on every request
            base_url: API root, without trailing slash
            retry_policy: Attempt budget and backoff; defaults to 3 attempts from 2000 ms
            client: Optional httpx client
            sleep: Called with the backoff in seconds between attempts
            timeout: Request timeout in seconds when no client is given
        """
        self._base_url = base_url.rstrip("/")
        self._retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self._client = client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )
        self._auth_headers = {API_KEY_HEADER: api_key}

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "KsenseConnector":
        """Build a connector from loaded settings; kwargs passed to __init__."""
        kwargs.setdefault(
            "retry_policy",
            RetryPolicy(
                max_retries=settings.max_retries,
                initial_backoff_ms=settings.initial_backoff_ms,
            ),
        )
        kwargs.setdefault("timeout", settings.timeout_seconds)
        return cls(settings.require_api_key(), settings.base_url, **kwargs)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "KsenseConnector":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_page(self, page: int, limit: int) -> PagePayload:
        """
        Single GET of one page.
        Raises TransientFetchError for anything worth retrying, FetchError otherwise.
        """
        url = self._base_url + PATIENTS_PATH
        try:
            resp = self._client.get(
                url,
                params={"page": page, "limit": limit},
                headers=self._auth_headers,
            )
        except httpx.RequestError as e:
            raise TransientFetchError(f"{type(e).__name__}: {e}") from e

        if resp.is_success:
            try:
                return PagePayload.model_validate(resp.json())
            except ValueError as e:
                # Covers both undecodable JSON and a body that is not a page
                raise TransientFetchError(
                    f"Malformed page body: {e}", resp.status_code
                ) from e

        if RetryPolicy.is_retryable(resp.status_code):
            raise TransientFetchError(f"HTTP {resp.status_code}", resp.status_code)
        raise FetchError(f"HTTP {resp.status_code}", resp.status_code)

    def fetch_page(
        self,
        page: int = 1,
        limit: int = 5,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> Optional[PagePayload]:
        """
        Fetch one page with retry. Returns the payload, or None when the page
        failed with a non-retryable status or the retry budget ran out.
        """
        policy = retry_policy or self._retry_policy
        for attempt in policy.attempts():
            try:
                return self._get_page(page, limit)
            except TransientFetchError as e:
                if policy.is_last(attempt):
                    logger.warning(
                        "Page %d attempt %d/%d failed: %s",
                        page, attempt + 1, policy.max_retries, e,
                    )
                    break
                delay = policy.delay(attempt)
                logger.warning(
                    "Page %d attempt %d/%d failed: %s; retrying in %.1fs",
                    page, attempt + 1, policy.max_retries, e, delay,
                )
                self._sleep(delay)
            except FetchError as e:
                logger.error("Page %d failed with non-retryable %s", page, e)
                return None

        logger.error(
            "Maximum retries (%d) reached for page %d. Unable to fetch data.",
            policy.max_retries,
            page,
        )
        return None

    def _post_results(self, body: dict[str, list]) -> dict:
        """Single POST of the result body. Raises SubmissionError on any failure."""
        url = self._base_url + SUBMIT_PATH
        try:
            resp = self._client.post(url, json=body, headers=self._auth_headers)
        except httpx.RequestError as e:
            raise SubmissionError(f"{type(e).__name__}: {e}") from e

        if not resp.is_success:
            raise SubmissionError(f"HTTP error! status: {resp.status_code}", resp.status_code)
        try:
            return resp.json()
        except ValueError:
            return {"raw": resp.text}

    def submit_results(self, results: ResultSet) -> Optional[dict]:
        """
        Submit the three patient lists once, without retry.
        Returns the server response, or None when submission failed (logged).
        """
        try:
            response = self._post_results(results.to_submission())
        except SubmissionError as e:
            logger.error("Failed to submit assessment: %s", e)
            return None
        logger.info("Assessment results submitted: %s", response)
        return response
