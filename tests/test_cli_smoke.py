"""Smoke tests for the CLI entry point."""
from __future__ import annotations

import json

import pytest

from lead_extractor import __main__, cli
from lead_extractor.errors import Timeout
from lead_extractor.models import LeadRecord


class StubPipeline:
    def __init__(self, records=None, error=None) -> None:
        self.records = records or []
        self.error = error
        self.requests = []

    def run(self, request, *, timer=None):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.records


@pytest.fixture()
def stub_pipeline(monkeypatch):
    pipeline = StubPipeline([LeadRecord(lead="Jane Doe", emails=("jane@example.com",))])
    monkeypatch.setattr(cli, "build_pipeline", lambda settings: pipeline)
    monkeypatch.setattr(cli, "load_settings", lambda path=None: None)
    return pipeline


def test_cli_run_prints_json(stub_pipeline, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["run", "@janedoe", "--platform", "Twitter", "--max-leads", "5"])

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output[0]["lead"] == "Jane Doe"
    request = stub_pipeline.requests[0]
    assert request.keyword == "@janedoe"
    assert request.platform == "twitter"
    assert request.max_leads == 5


def test_cli_run_writes_output_file(stub_pipeline, tmp_path) -> None:
    output_path = tmp_path / "leads.csv"

    exit_code = cli.main(["run", "growth", "--output", str(output_path)])

    assert exit_code == 0
    assert "jane@example.com" in output_path.read_text(encoding="utf-8")


def test_cli_run_reports_pipeline_errors(stub_pipeline, capsys: pytest.CaptureFixture[str]) -> None:
    stub_pipeline.error = Timeout(30, "RUNNING")

    exit_code = cli.main(["run", "growth"])

    assert exit_code == 1
    assert "timed out after 30 attempts" in capsys.readouterr().err


def test_module_entry_point_delegates_to_cli(stub_pipeline, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = __main__.main(["run", "growth"])

    assert exit_code == 0
    assert "Jane Doe" in capsys.readouterr().out


def test_module_entry_point_without_arguments_shows_help(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = __main__.main([])

    captured = capsys.readouterr()
    assert "python -m lead_extractor" in captured.out
    assert exit_code == 2


def test_subcommand_is_required() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args([])
