from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from testserver_bdd.execution.execution import TestServerExecution


class ExecutionListener:
    """Receives execution events from a RecipeExecutor. Override what you need."""

    def request_sent(self, execution: TestServerExecution) -> None:
        return None

    def execution_finished(self, execution: TestServerExecution) -> None:
        return None

    def error_occurred(self, exc: Exception) -> None:
        return None
