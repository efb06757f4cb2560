from __future__ import annotations

from typing import Any

import pytest

from testserver_bdd.client.errors import ApiException
from testserver_bdd.config.settings import Settings
from testserver_bdd.execution.recipe_executor import RecipeExecutor
from testserver_bdd.schemas.recipe_schemas import TestCase, TestRecipe
from testserver_bdd.schemas.result_schemas import HarLogRoot, ProjectResultReport


class RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def _record(self, level: str, event: str, **kwargs: Any) -> None:
        self.records.append((level, event, kwargs))

    def debug(self, event: str, **kwargs: Any) -> None:
        self._record("debug", event, **kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        self._record("info", event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._record("warning", event, **kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        self._record("error", event, **kwargs)

    def levels(self) -> list[str]:
        return [level for level, _event, _kwargs in self.records]

    def events(self, level: str | None = None) -> list[str]:
        return [event for lvl, event, _kwargs in self.records if level is None or lvl == level]


def project_report(execution_id: str = "exec-1", status: str = "FINISHED", steps: list[dict] | None = None) -> ProjectResultReport:
    step_reports = steps if steps is not None else [
        {"testStepName": "GET /pets", "assertionStatus": "OK", "timeTaken": 12, "transactionId": "tx-1"},
        {
            "testStepName": "POST /pets",
            "assertionStatus": "FAILED",
            "timeTaken": 30,
            "messages": ["Expected 201 but got 500"],
            "transactionId": "tx-2",
        },
    ]
    return ProjectResultReport.model_validate(
        {
            "executionID": execution_id,
            "status": status,
            "timeTaken": 42,
            "testSuiteResultReports": [
                {
                    "testSuiteName": "suite",
                    "testCaseResultReports": [{"testCaseName": "case", "testStepResultReports": step_reports}],
                }
            ],
        }
    )


def har_log(entry_count: int = 1) -> HarLogRoot:
    entries = [
        {
            "startedDateTime": "2026-01-01T00:00:00Z",
            "time": 12.5,
            "request": {"method": "GET", "url": f"http://petstore/pets/{idx}"},
            "response": {"status": 200},
        }
        for idx in range(entry_count)
    ]
    return HarLogRoot.model_validate({"log": {"version": "1.2", "entries": entries}})


class FakeTestServerApi:
    __test__ = False

    def __init__(self) -> None:
        self.posted: list[tuple[dict[str, Any], Any, bool]] = []
        self.transaction_log_calls: list[tuple[str, str, Any]] = []
        self.status_calls: list[str] = []
        self.cancel_calls: list[str] = []
        self.post_result: ProjectResultReport | ApiException | None = None
        self.status_result: ProjectResultReport | ApiException | None = None
        self.transaction_log_result: HarLogRoot | Exception | None = har_log()
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def post_execution(self, recipe: TestRecipe, auth=None, *, run_async: bool = False) -> ProjectResultReport:
        self.posted.append((recipe.to_payload(), auth, run_async))
        result = self.post_result
        if isinstance(result, Exception):
            raise result
        if result is None:
            return project_report(status="RUNNING" if run_async else "FINISHED")
        return result

    def get_execution_status(self, execution_id: str, auth=None) -> ProjectResultReport:
        self.status_calls.append(execution_id)
        result = self.status_result
        if isinstance(result, Exception):
            raise result
        return result or project_report(execution_id=execution_id)

    def cancel_execution(self, execution_id: str, auth=None) -> ProjectResultReport:
        self.cancel_calls.append(execution_id)
        return project_report(execution_id=execution_id, status="CANCELED")

    def get_transaction_log(self, execution_id: str, transaction_id: str, auth=None) -> HarLogRoot:
        self.transaction_log_calls.append((execution_id, transaction_id, auth))
        result = self.transaction_log_result
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture()
def fake_api() -> FakeTestServerApi:
    return FakeTestServerApi()


@pytest.fixture()
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture()
def recipe_executor(fake_api: FakeTestServerApi, recording_logger: RecordingLogger) -> RecipeExecutor:
    return RecipeExecutor(fake_api, auth=None, logger=recording_logger)


@pytest.fixture()
def test_case_payload() -> dict[str, Any]:
    return {
        "name": "Find pets",
        "testSteps": [
            {
                "type": "REST Request",
                "name": "GET /pets",
                "method": "GET",
                "URI": "http://petstore.swagger.io/v2/pet/findByStatus",
                "assertions": [{"type": "Valid HTTP Status Codes", "validStatusCodes": ["200"]}],
            }
        ],
    }


@pytest.fixture()
def sample_test_case(test_case_payload: dict[str, Any]) -> TestCase:
    return TestCase.model_validate(test_case_payload)


@pytest.fixture()
def make_settings():
    def _make(**overrides: Any) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture()
def report_factory():
    return project_report


@pytest.fixture()
def har_log_factory():
    return har_log
