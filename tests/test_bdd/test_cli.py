from __future__ import annotations

import json
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from testserver_bdd import cli
from testserver_bdd.bdd import scenario_executor
from testserver_bdd.client.errors import ApiException
from testserver_bdd.execution.recipe_executor import RecipeExecutor


@pytest.fixture()
def cli_env(monkeypatch, fake_api, recording_logger):
    monkeypatch.setattr(scenario_executor, "build_default_executor", lambda config: RecipeExecutor(fake_api, logger=recording_logger))
    monkeypatch.setattr(cli, "configure_logging", lambda level="INFO", log_format="json": None)
    with capture_logs():
        yield fake_api


def _write_case(tmp_path: Path, payload: dict) -> Path:
    path = tmp_path / "case.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_prints_execution_summary(tmp_path, cli_env, test_case_payload, capsys):
    exit_code = cli.main([str(_write_case(tmp_path, test_case_payload)), "--har"])

    summary = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert summary["execution_id"] == "exec-1"
    assert summary["status"] == "FINISHED"
    assert summary["errors"] == ["Expected 201 but got 500"]
    assert summary["steps"][0]["har_entry"]["request"]["method"] == "GET"
    assert cli_env.posted[0][2] is False


def test_async_flag_submits(tmp_path, cli_env, test_case_payload, capsys):
    exit_code = cli.main([str(_write_case(tmp_path, test_case_payload)), "--async"])

    summary = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert summary["status"] == "RUNNING"
    assert "har_entry" not in summary["steps"][0]
    assert cli_env.posted[0][2] is True


def test_invalid_test_case_file(tmp_path, cli_env):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    assert cli.main([str(path)]) == 2
    assert cli_env.posted == []


def test_backend_failure_exit_code(tmp_path, cli_env, test_case_payload):
    cli_env.post_result = ApiException(502, "bad gateway")

    assert cli.main([str(_write_case(tmp_path, test_case_payload))]) == 1


def test_backend_is_closed_after_run(tmp_path, cli_env, test_case_payload, capsys):
    cli.main([str(_write_case(tmp_path, test_case_payload)), "--har"])

    capsys.readouterr()
    assert cli_env.closed is True


def test_backend_is_closed_after_failure(tmp_path, cli_env, test_case_payload):
    cli_env.post_result = ApiException(503, "unavailable")

    cli.main([str(_write_case(tmp_path, test_case_payload))])

    assert cli_env.closed is True
