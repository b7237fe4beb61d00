"""Pytest fixtures for patient-risk tests."""

from typing import Callable

import httpx
import pytest

from patient_risk.connectors.ksense import KsenseConnector
from patient_risk.connectors.retry import RetryPolicy
from patient_risk.models.raw import RawPatientRecord

from .helpers import RecordingSleep

BASE_URL = "https://api.test/api"


@pytest.fixture
def sample_patient() -> dict:
    """A fully valid raw patient record."""
    return {
        "patient_id": "DEMO001",
        "name": "TestPatient, John",
        "age": 45,
        "gender": "M",
        "blood_pressure": "120/80",
        "temperature": 98.6,
        "visit_date": "2024-01-15",
        "diagnosis": "Sample_Hypertension",
        "medications": ["DemoMed_A 10mg", "TestDrug_B 500mg"],
    }


@pytest.fixture
def make_raw(sample_patient: dict) -> Callable[..., RawPatientRecord]:
    """Factory: sample patient with overrides; pass a value of ... to drop a field."""

    def _make(**overrides) -> RawPatientRecord:
        data = dict(sample_patient)
        for key, value in overrides.items():
            if value is ...:
                data.pop(key, None)
            else:
                data[key] = value
        return RawPatientRecord(data=data)

    return _make


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def connector_factory(recording_sleep: RecordingSleep):
    """
    Build a KsenseConnector whose HTTP traffic goes to the given handler.
    Backoff sleeps are recorded, never slept.
    """
    created: list[KsenseConnector] = []

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        retry_policy: RetryPolicy | None = None,
    ) -> KsenseConnector:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        connector = KsenseConnector(
            "test-key",
            BASE_URL,
            retry_policy=retry_policy or RetryPolicy(max_retries=3, initial_backoff_ms=2000),
            client=client,
            sleep=recording_sleep,
        )
        created.append(connector)
        return connector

    yield _make
    for c in created:
        c.close()
