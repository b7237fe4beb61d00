"""Abstract base class for patient record sources."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from patient_risk.models.accumulator import RecordAccumulator
from patient_risk.models.raw import PagePayload, RawPatientRecord

logger = logging.getLogger(__name__)


class BaseConnector(ABC):
    """
    Standard interface for paged patient sources.
    Connectors implement fetch_page; pagination is shared.
    """

    source_id: str = ""

    @abstractmethod
    def fetch_page(self, page: int = 1, limit: int = 5) -> Optional[PagePayload]:
        """
        Fetch one page. Returns None when the page could not be retrieved;
        callers treat that as the end of the stream.
        """
        pass

    def fetch_all(
        self,
        page_size: int = 20,
        accumulator: Optional[RecordAccumulator] = None,
        max_pages: Optional[int] = None,
    ) -> list[RawPatientRecord]:
        """
        Walk pages from 1 until the source reports no next page or a page fails.
        A failed page ends pagination without raising; records gathered so far are kept.
        Pass an accumulator to inspect pages_fetched and whether the stream completed.
        """
        if accumulator is None:
            accumulator = RecordAccumulator()
        page = 1
        while True:
            if max_pages is not None and page > max_pages:
                logger.info("Stopping at max_pages=%d", max_pages)
                break

            payload = self.fetch_page(page, page_size)
            if payload is None:
                logger.warning(
                    "Page %d unavailable; stopping with %d records",
                    page,
                    len(accumulator.records),
                )
                accumulator.mark_incomplete()
                break

            accumulator.add_page(payload)
            logger.debug("Page %d: %d records", page, len(payload.data))

            if not payload.pagination.has_next:
                break
            page += 1

        return accumulator.records
