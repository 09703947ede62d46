"""CLI behavior tests."""

import json

import shipment_card.cli as cli
from shipment_card.api.shipments_api import FAILURE, SUCCESS, ShipmentFetchOutcome
from shipment_card.parsing.projector import project


def _stub_run_fetch(monkeypatch, outcome_factory):
    calls = []

    def fake_run_fetch(company_id, token=None, *, config=None, fetcher=None):
        calls.append((company_id, token))
        return outcome_factory(company_id)

    monkeypatch.setattr(cli, "run_fetch", fake_run_fetch)
    return calls


def _success(payload):
    def factory(company_id):
        return ShipmentFetchOutcome(
            company_id=company_id,
            fetched_at_utc="2024-01-01T00:00:00Z",
            status=SUCCESS,
            shipments=project(payload),
        )
    return factory


def test_fetch_prints_markdown(monkeypatch, tmp_path, capsys, sample_payload):
    monkeypatch.chdir(tmp_path)
    calls = _stub_run_fetch(monkeypatch, _success(sample_payload))

    exit_code = cli.main(["fetch", "--company-id", "42", "--token", "t"])

    assert exit_code == 0
    assert calls == [("42", "t")]
    out = capsys.readouterr().out
    assert "## Shipments" in out
    assert "#A2" in out


def test_fetch_prints_json(monkeypatch, tmp_path, capsys, sample_payload):
    monkeypatch.chdir(tmp_path)
    _stub_run_fetch(monkeypatch, _success(sample_payload))

    exit_code = cli.main(["fetch", "--company-id", "42", "--token", "t", "--format", "json"])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert [s["id"] for s in data["shipments"]] == ["101", "102", "103"]


def test_fetch_failure_exits_nonzero(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)

    def failure(company_id):
        return ShipmentFetchOutcome(
            company_id=company_id,
            fetched_at_utc="2024-01-01T00:00:00Z",
            status=FAILURE,
            error="Collector returned HTTP 401",
            error_kind="UpstreamError",
            status_code=401,
        )

    _stub_run_fetch(monkeypatch, failure)

    exit_code = cli.main(["fetch", "--company-id", "42", "--token", "t"])

    assert exit_code == 1
    assert "UpstreamError" in capsys.readouterr().err


def test_details_prints_kits(monkeypatch, tmp_path, capsys, sample_payload):
    monkeypatch.chdir(tmp_path)
    _stub_run_fetch(monkeypatch, _success(sample_payload))

    exit_code = cli.main(["details", "--company-id", "42", "--token", "t", "--shipment-id", "101"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "A1 Order Details" in out
    assert "Awaiting stock" in out


def test_details_unknown_shipment(monkeypatch, tmp_path, capsys, sample_payload):
    monkeypatch.chdir(tmp_path)
    _stub_run_fetch(monkeypatch, _success(sample_payload))

    exit_code = cli.main(["details", "--company-id", "42", "--token", "t", "--shipment-id", "999"])

    assert exit_code == 2
    assert "Shipment not found." in capsys.readouterr().out


def test_missing_token_reports_error(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PRIVATE_APP_ACCESS_TOKEN", raising=False)

    exit_code = cli.main(["fetch", "--company-id", "42"])

    assert exit_code == 2
    assert "PRIVATE_APP_ACCESS_TOKEN" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "shipment-card" in capsys.readouterr().out
