"""CLI tests (typer CliRunner, fake transport)."""

from __future__ import annotations

import json
from datetime import timedelta

import httpx
import pytest
from typer.testing import CliRunner

from adapters.timeular import exit_on_failure
from cli import main as cli_main
from cli.ui_components import format_elapsed
from core.services.time_tracking import TimeularApi

from conftest import activity_record, entry_record

runner = CliRunner()

ENTRIES_ENDPOINT = "time-entries/2024-03-01T00:00:00.000/2024-03-02T00:00:00.000"


@pytest.fixture
def credentials(monkeypatch) -> None:
    monkeypatch.setenv("TIMEULAR_API_KEY", "cli-key")
    monkeypatch.setenv("TIMEULAR_API_SECRET", "cli-secret")


@pytest.fixture
def wired_api(monkeypatch, fake_api):
    fake_api.add(
        "GET",
        "activities",
        json={"activities": [activity_record("a1", "Coding"), activity_record("a2", "Calls")]},
    )
    fake_api.add(
        "GET",
        ENTRIES_ENDPOINT,
        json={
            "timeEntries": [
                entry_record("e2", "a2", "2024-03-01T14:00:00.000", "2024-03-01T14:30:00.000"),
                entry_record("e1", "a1", "2024-03-01T09:00:00.000", "2024-03-01T11:00:00.000", text="api"),
            ]
        },
    )

    def build_api(settings):
        api = TimeularApi(
            settings,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(fake_api)),
            on_failure=exit_on_failure,
        )
        api.debug(settings.debug)
        return api

    monkeypatch.setattr(cli_main, "_build_api", build_api)
    return fake_api


def test_missing_credentials_exit_code(monkeypatch) -> None:
    monkeypatch.setenv("TIMEULAR_API_KEY", "")
    monkeypatch.setenv("TIMEULAR_API_SECRET", "")

    result = runner.invoke(cli_main.app, ["activities"])

    assert result.exit_code == 2
    assert "Missing credentials" in result.output


def test_activities_json(credentials, wired_api) -> None:
    result = runner.invoke(cli_main.app, ["activities", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [a["id"] for a in data] == ["a1", "a2"]
    assert wired_api.count("POST", "developer/sign-in") == 1


def test_activities_table(credentials, wired_api) -> None:
    result = runner.invoke(cli_main.app, ["activities"])

    assert result.exit_code == 0, result.output
    assert "Coding" in result.output
    assert "Calls" in result.output


def test_entries_json_is_chronological(credentials, wired_api) -> None:
    result = runner.invoke(
        cli_main.app,
        ["entries", "--start", "2024-03-01", "--end", "2024-03-02", "--json"],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [e["id"] for e in data] == ["e1", "e2"]
    assert [e["activity"]["name"] for e in data] == ["Coding", "Calls"]


def test_entries_table_and_export(credentials, wired_api, tmp_path) -> None:
    target = tmp_path / "entries.json"

    result = runner.invoke(
        cli_main.app,
        ["entries", "--start", "2024-03-01", "--end", "2024-03-02", "--export", str(target)],
    )

    assert result.exit_code == 0, result.output
    assert result.output.index("Coding") < result.output.index("Calls")
    assert "2:30:00" in result.output
    exported = json.loads(target.read_text(encoding="utf-8"))
    assert [e["id"] for e in exported] == ["e1", "e2"]


def test_entries_rejects_bad_date(credentials, wired_api) -> None:
    result = runner.invoke(cli_main.app, ["entries", "--start", "soon", "--end", "2024-03-02"])

    assert result.exit_code == 2
    assert wired_api.requests == []


def test_entries_rejects_inverted_range(credentials, wired_api) -> None:
    result = runner.invoke(cli_main.app, ["entries", "--start", "2024-03-02", "--end", "2024-03-01"])

    assert result.exit_code == 2


def test_entries_accepts_offset_dates(credentials, wired_api) -> None:
    result = runner.invoke(
        cli_main.app,
        ["entries", "--start", "2024-03-01T02:00:00+02:00", "--end", "2024-03-02", "--json"],
    )

    assert result.exit_code == 0, result.output
    assert [e["id"] for e in json.loads(result.output)] == ["e1", "e2"]
    assert wired_api.count("GET", ENTRIES_ENDPOINT) == 1


def test_entries_rejects_inverted_range_across_offsets(credentials, wired_api) -> None:
    result = runner.invoke(
        cli_main.app,
        ["entries", "--start", "2024-03-01T00:00:00+00:00", "--end", "2024-03-01T01:00:00+05:00"],
    )

    assert result.exit_code == 2
    assert wired_api.requests == []


def test_request_failure_terminates_with_status_1(credentials, wired_api) -> None:
    wired_api.add("GET", "activities", status=503)

    result = runner.invoke(cli_main.app, ["activities"])

    assert result.exit_code == 1


@pytest.mark.parametrize(
    ("elapsed", "expected"),
    [
        (timedelta(0), "0:00:00"),
        (timedelta(minutes=90, seconds=5), "1:30:05"),
        (timedelta(hours=27), "27:00:00"),
        (timedelta(minutes=-5), "-0:05:00"),
    ],
)
def test_format_elapsed(elapsed, expected) -> None:
    assert format_elapsed(elapsed) == expected
