from __future__ import annotations

import httpx

from testserver_bdd.client.base import TestServerApi
from testserver_bdd.execution.step_result import TestServerTestStepResult
from testserver_bdd.schemas.result_schemas import ExecutionStatus, ProjectResultReport


class TestServerExecution:
    __test__ = False

    def __init__(self, api: TestServerApi, auth: httpx.Auth | None, report: ProjectResultReport):
        self.api = api
        self.auth = auth
        self._report = report
        self._step_results: list[TestServerTestStepResult] | None = None

    @property
    def id(self) -> str:
        return self._report.execution_id

    @property
    def status(self) -> ExecutionStatus:
        return self._report.status

    @property
    def current_report(self) -> ProjectResultReport:
        return self._report

    @property
    def is_finished(self) -> bool:
        return self._report.status.is_terminal

    @property
    def errors(self) -> list[str]:
        messages: list[str] = []
        for step in self._report.step_reports():
            if step.failed:
                messages.extend(step.messages)
        return messages

    def add_result_report(self, report: ProjectResultReport) -> None:
        self._report = report
        self._step_results = None

    def get_test_step_results(self) -> list[TestServerTestStepResult]:
        if self._step_results is None:
            self._step_results = [TestServerTestStepResult(step, self) for step in self._report.step_reports()]
        return list(self._step_results)

    def __repr__(self) -> str:
        return f"TestServerExecution(id={self.id!r}, status={self.status.value!r})"
