from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from testserver_bdd.client.errors import ApiException
from testserver_bdd.core.logger import get_logger
from testserver_bdd.schemas.result_schemas import HarEntry, TestStepResultReport

if TYPE_CHECKING:
    from testserver_bdd.execution.execution import TestServerExecution


class LookupState(str, Enum):
    UNCHECKED = "unchecked"
    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class TransactionLogLookup:
    state: LookupState
    entry: HarEntry | None = None

    @classmethod
    def unchecked(cls) -> TransactionLogLookup:
        return cls(LookupState.UNCHECKED)

    @classmethod
    def found(cls, entry: HarEntry) -> TransactionLogLookup:
        return cls(LookupState.FOUND, entry)

    @classmethod
    def not_found(cls) -> TransactionLogLookup:
        return cls(LookupState.NOT_FOUND)


class TestServerTestStepResult:
    """Result of one executed test step.

    The HAR entry for the step's transaction is fetched from the server the first
    time it is asked for. Whatever that lookup yields, including nothing, is kept
    and returned on every later call.
    """

    __test__ = False

    def __init__(self, report: TestStepResultReport, execution: TestServerExecution, logger=None):
        self.report = report
        self.execution = execution
        self.logger = logger if logger is not None else get_logger(__name__)
        self._lookup = TransactionLogLookup.unchecked()

    @property
    def test_step_name(self) -> str | None:
        return self.report.test_step_name

    @property
    def assertion_status(self) -> str | None:
        return self.report.assertion_status

    @property
    def time_taken(self) -> int:
        return self.report.time_taken

    @property
    def messages(self) -> list[str]:
        return list(self.report.messages)

    @property
    def transaction_id(self) -> str | None:
        return self.report.transaction_id

    @property
    def lookup_state(self) -> LookupState:
        return self._lookup.state

    @property
    def har_entry(self) -> HarEntry | None:
        return self.get_har_entry()

    def get_har_entry(self) -> HarEntry | None:
        if self._lookup.state is LookupState.UNCHECKED:
            self._lookup = self._fetch_har_entry()
        return self._lookup.entry

    def _fetch_har_entry(self) -> TransactionLogLookup:
        execution_id = self.execution.id
        if not self.transaction_id:
            self.logger.info("transaction_log.no_transaction_id", execution_id=execution_id, step=self.test_step_name)
            return TransactionLogLookup.not_found()

        try:
            log_root = self.execution.api.get_transaction_log(execution_id, self.transaction_id, self.execution.auth)
        except ApiException as exc:
            if exc.is_not_found:
                self.logger.info("transaction_log.not_found", execution_id=execution_id, transaction_id=self.transaction_id)
            else:
                self.logger.error(
                    "transaction_log.fetch_failed",
                    execution_id=execution_id,
                    transaction_id=self.transaction_id,
                    status_code=exc.status_code,
                    error=str(exc),
                )
            return TransactionLogLookup.not_found()
        except Exception as exc:
            self.logger.error(
                "transaction_log.fetch_failed",
                execution_id=execution_id,
                transaction_id=self.transaction_id,
                error=str(exc),
            )
            return TransactionLogLookup.not_found()

        entry = log_root.first_entry() if log_root is not None else None
        if entry is None:
            return TransactionLogLookup.not_found()
        return TransactionLogLookup.found(entry)

    def __repr__(self) -> str:
        return (
            f"TestServerTestStepResult(step={self.test_step_name!r}, "
            f"status={self.assertion_status!r}, transaction_id={self.transaction_id!r})"
        )
