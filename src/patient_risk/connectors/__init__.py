"""Source connectors for patient record ingestion."""

from patient_risk.connectors.base import BaseConnector
from patient_risk.connectors.ksense import KsenseConnector
from patient_risk.connectors.retry import RetryPolicy

__all__ = ["BaseConnector", "KsenseConnector", "RetryPolicy"]
