from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ExecutionStatus(str, Enum):
    PENDING = "PENDING"
    INITIALIZED = "INITIALIZED"
    RUNNING = "RUNNING"
    CANCELED = "CANCELED"
    FINISHED = "FINISHED"
    FAILED = "FAILED"
    WARNING = "WARNING"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {ExecutionStatus.CANCELED, ExecutionStatus.FINISHED, ExecutionStatus.FAILED, ExecutionStatus.WARNING}
)


class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class TestStepResultReport(_ReportModel):
    __test__ = False
    test_step_name: str | None = None
    assertion_status: str | None = None
    time_taken: int = 0
    messages: list[str] = Field(default_factory=list)
    transaction_id: str | None = None

    @property
    def failed(self) -> bool:
        return str(self.assertion_status or "").upper() == "FAILED"


class TestCaseResultReport(_ReportModel):
    __test__ = False
    test_case_name: str | None = None
    test_case_status: str | None = None
    test_step_result_reports: list[TestStepResultReport] = Field(default_factory=list)


class TestSuiteResultReport(_ReportModel):
    __test__ = False
    test_suite_name: str | None = None
    test_case_result_reports: list[TestCaseResultReport] = Field(default_factory=list)


class ProjectResultReport(_ReportModel):
    execution_id: str = Field(alias="executionID")
    status: ExecutionStatus = ExecutionStatus.PENDING
    time_taken: int = 0
    test_suite_result_reports: list[TestSuiteResultReport] = Field(default_factory=list)

    def step_reports(self) -> list[TestStepResultReport]:
        return [
            step
            for suite in self.test_suite_result_reports
            for case in suite.test_case_result_reports
            for step in case.test_step_result_reports
        ]


class HarEntry(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    started_date_time: str | None = None
    time: float | None = None
    request: dict[str, Any] = Field(default_factory=dict)
    response: dict[str, Any] = Field(default_factory=dict)


class HarLog(BaseModel):
    model_config = ConfigDict(extra="allow")

    version: str | None = None
    entries: list[HarEntry] | None = None


class HarLogRoot(BaseModel):
    model_config = ConfigDict(extra="allow")

    log: HarLog | None = None

    def first_entry(self) -> HarEntry | None:
        if self.log is None or not self.log.entries:
            return None
        return self.log.entries[0]
