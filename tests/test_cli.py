"""Tests for the CLI entry point."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from patient_risk.cli.main import main
from patient_risk.models.raw import PagePayload, RawPatientRecord
from patient_risk.models.results import ResultSet

RECORDS = [
    {
        "patient_id": "DEMO002",
        "name": "AssessmentUser, Jane",
        "age": 67,
        "gender": "F",
        "blood_pressure": "140/90",
        "temperature": 99.6,
        "visit_date": "2024-01-16",
        "diagnosis": "Eval_Diabetes",
        "medications": ["FakeMed 500mg"],
    },
    {"patient_id": "DEMO009", "name": "Incomplete"},
]


def _run(monkeypatch, argv: list[str]) -> None:
    monkeypatch.setattr("sys.argv", ["patient-risk", *argv])
    monkeypatch.setenv("PATIENT_RISK_API_KEY", "test-key")
    main()


class TestAssessCommand:
    """Tests for the assess subcommand."""

    def test_assess_from_input_file(self, monkeypatch, capsys, tmp_path: Path) -> None:
        path = tmp_path / "records.json"
        path.write_text(json.dumps(RECORDS))
        _run(monkeypatch, ["assess", "--input", str(path)])
        out = json.loads(capsys.readouterr().out)
        assert out["high_risk_patients"] == ["DEMO002"]
        assert out["fever_patients"] == ["DEMO002"]
        assert out["data_quality_issues"] == ["DEMO009"] * 7

    def test_assess_accepts_saved_page_payload(self, monkeypatch, capsys, tmp_path: Path) -> None:
        path = tmp_path / "page.json"
        path.write_text(json.dumps({"data": RECORDS[:1], "pagination": {"hasNext": False}}))
        _run(monkeypatch, ["assess", "--input", str(path), "--show-details"])
        out = json.loads(capsys.readouterr().out)
        assert out[0]["patient_id"] == "DEMO002"
        assert out[0]["score"] == 6
        assert len(out[0]["explanations"]) == 9

    def test_assess_writes_output_file(self, monkeypatch, capsys, tmp_path: Path) -> None:
        path = tmp_path / "records.json"
        path.write_text(json.dumps(RECORDS))
        output = tmp_path / "results.json"
        _run(monkeypatch, ["assess", "--input", str(path), "--output", str(output)])
        assert "Assessed 2 patients" in capsys.readouterr().out
        assert json.loads(output.read_text())["high_risk_patients"] == ["DEMO002"]

    def test_assess_live_and_submit(self, monkeypatch, capsys) -> None:
        raw = [RawPatientRecord(data=r) for r in RECORDS]
        with patch(
            "patient_risk.connectors.ksense.connector.KsenseConnector.fetch_all",
            return_value=raw,
        ), patch(
            "patient_risk.connectors.ksense.connector.KsenseConnector.submit_results",
            return_value={"success": True},
        ) as mock_submit:
            _run(monkeypatch, ["assess", "--submit"])
        submitted = mock_submit.call_args[0][0]
        assert isinstance(submitted, ResultSet)
        assert submitted.high_risk == ("DEMO002",)
        assert '"success": true' in capsys.readouterr().out

    def test_assess_with_no_records_exits(self, monkeypatch, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        path.write_text("[]")
        with pytest.raises(SystemExit):
            _run(monkeypatch, ["assess", "--input", str(path)])

    def test_live_run_with_no_records_submits_empty_lists(self, monkeypatch, capsys) -> None:
        """Every page failing still reports and submits, then exits normally."""
        with patch(
            "patient_risk.connectors.ksense.connector.KsenseConnector.fetch_all",
            return_value=[],
        ), patch(
            "patient_risk.connectors.ksense.connector.KsenseConnector.submit_results",
            return_value={"success": True},
        ) as mock_submit:
            _run(monkeypatch, ["assess", "--submit"])
        mock_submit.assert_called_once()
        assert mock_submit.call_args[0][0].to_submission() == {
            "high_risk_patients": [],
            "fever_patients": [],
            "data_quality_issues": [],
        }
        assert "high_risk_patients" in capsys.readouterr().out

    def test_live_run_without_api_key_exits(self, monkeypatch) -> None:
        monkeypatch.setattr("sys.argv", ["patient-risk", "assess"])
        monkeypatch.delenv("PATIENT_RISK_API_KEY", raising=False)
        with pytest.raises(SystemExit, match="No API key"):
            main()


class TestFetchCommand:
    def test_fetch_single_page(self, monkeypatch, capsys) -> None:
        payload = PagePayload.model_validate({"data": RECORDS, "pagination": {"hasNext": True}})
        with patch(
            "patient_risk.connectors.ksense.connector.KsenseConnector.fetch_page",
            return_value=payload,
        ) as mock_fetch:
            _run(monkeypatch, ["fetch", "--page", "2"])
        mock_fetch.assert_called_once_with(2, 5)
        out = json.loads(capsys.readouterr().out)
        assert [r["patient_id"] for r in out] == ["DEMO002", "DEMO009"]

    def test_fetch_single_page_failure_exits(self, monkeypatch) -> None:
        with patch(
            "patient_risk.connectors.ksense.connector.KsenseConnector.fetch_page",
            return_value=None,
        ):
            with pytest.raises(SystemExit):
                _run(monkeypatch, ["fetch", "--page", "1"])
