from __future__ import annotations

import httpx

from testserver_bdd.client.base import TestServerApi
from testserver_bdd.client.errors import ApiException
from testserver_bdd.client.testserver_api import HttpTestServerApi
from testserver_bdd.config.settings import Settings, settings
from testserver_bdd.core.logger import get_logger
from testserver_bdd.execution.execution import TestServerExecution
from testserver_bdd.execution.listeners import ExecutionListener
from testserver_bdd.schemas.recipe_schemas import TestRecipe


class RecipeExecutor:
    """Runs recipes on a TestServer and reports progress to execution listeners."""

    def __init__(self, api: TestServerApi, auth: httpx.Auth | None = None, logger=None):
        self.api = api
        self.auth = auth
        self.logger = logger if logger is not None else get_logger(__name__)
        self._listeners: list[ExecutionListener] = []

    def close(self) -> None:
        close = getattr(self.api, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> RecipeExecutor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def listeners(self) -> list[ExecutionListener]:
        return list(self._listeners)

    def add_execution_listener(self, listener: ExecutionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_execution_listener(self, listener: ExecutionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def submit_recipe(self, recipe: TestRecipe) -> TestServerExecution:
        execution = self._post(recipe, run_async=True)
        self.logger.info("recipe.submitted", execution_id=execution.id, status=execution.status.value)
        self._notify("request_sent", execution)
        return execution

    def execute_recipe(self, recipe: TestRecipe) -> TestServerExecution:
        execution = self._post(recipe, run_async=False)
        self.logger.info("recipe.executed", execution_id=execution.id, status=execution.status.value)
        self._notify("request_sent", execution)
        self._notify("execution_finished", execution)
        return execution

    def refresh_execution(self, execution: TestServerExecution) -> TestServerExecution:
        was_finished = execution.is_finished
        try:
            report = self.api.get_execution_status(execution.id, self.auth)
        except ApiException as exc:
            self._notify("error_occurred", exc)
            raise
        execution.add_result_report(report)
        if execution.is_finished and not was_finished:
            self._notify("execution_finished", execution)
        return execution

    def cancel_execution(self, execution: TestServerExecution) -> TestServerExecution:
        try:
            report = self.api.cancel_execution(execution.id, self.auth)
        except ApiException as exc:
            self._notify("error_occurred", exc)
            raise
        execution.add_result_report(report)
        self.logger.info("recipe.canceled", execution_id=execution.id, status=execution.status.value)
        return execution

    def _post(self, recipe: TestRecipe, *, run_async: bool) -> TestServerExecution:
        try:
            report = self.api.post_execution(recipe, self.auth, run_async=run_async)
        except ApiException as exc:
            self.logger.error("recipe.execution_failed", status_code=exc.status_code, error=str(exc))
            self._notify("error_occurred", exc)
            raise
        return TestServerExecution(self.api, self.auth, report)

    def _notify(self, event: str, payload: object) -> None:
        for listener in list(self._listeners):
            try:
                getattr(listener, event)(payload)
            except Exception as exc:
                self.logger.error("listener.failed", listener_event=event, listener=type(listener).__name__, error=str(exc))


def build_default_executor(config: Settings | None = None, logger=None) -> RecipeExecutor:
    config = config or settings
    credentials = config.backend_credentials
    auth = httpx.BasicAuth(*credentials) if credentials else None
    return RecipeExecutor(HttpTestServerApi.from_settings(config), auth=auth, logger=logger)
