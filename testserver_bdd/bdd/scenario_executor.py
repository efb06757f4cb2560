from __future__ import annotations

from pathlib import Path
from typing import Any

from testserver_bdd.bdd.scenario_paths import ensure_within_folder, scenario_identifier, scenario_log_path
from testserver_bdd.config.settings import Settings, settings
from testserver_bdd.core.logger import get_logger
from testserver_bdd.execution.execution import TestServerExecution
from testserver_bdd.execution.listeners import ExecutionListener
from testserver_bdd.execution.recipe_executor import RecipeExecutor, build_default_executor
from testserver_bdd.schemas.recipe_schemas import TestCase, TestRecipe


class ScenarioRecipeExecutor:
    """Executes test cases generated from BDD scenarios on a TestServer.

    When ``DEBUG_LOGFOLDER`` is configured and a scenario is given, the generated
    recipe is also written to a JSON file under that folder, named after the
    scenario id.
    """

    def __init__(
        self,
        executor: RecipeExecutor | None = None,
        *,
        config: Settings | None = None,
        async_mode: bool = False,
        logger=None,
    ):
        self.config = config or settings
        self.logger = logger if logger is not None else get_logger(__name__)
        self.executor = executor or build_default_executor(self.config)
        self.async_mode = async_mode

    def is_async(self) -> bool:
        return self.async_mode

    def set_async(self, async_mode: bool) -> None:
        self.async_mode = bool(async_mode)

    def run_test_case(self, test_case: TestCase | dict[str, Any] | None, scenario: Any = None) -> TestServerExecution:
        recipe = TestRecipe.from_test_case(test_case)
        self.logger.debug("recipe.built", recipe=recipe)

        scenario_id = scenario_identifier(scenario)
        log_folder = self.config.debug_log_folder
        if scenario_id and log_folder is not None:
            self.log_scenario_to_file(recipe, scenario_id, log_folder)

        if self.config.DEBUG_SILENT:
            self.logger.warning("recipe.silent_not_supported", scenario=scenario_id)

        if self.async_mode:
            return self.executor.submit_recipe(recipe)
        return self.executor.execute_recipe(recipe)

    def log_scenario_to_file(self, recipe: TestRecipe, scenario_id: str, log_folder: str | Path) -> Path | None:
        try:
            target = ensure_within_folder(scenario_log_path(log_folder, scenario_id), log_folder)
            target.parent.mkdir(parents=True, exist_ok=True)
            self.logger.info("recipe.log.writing", path=str(target))
            target.write_text(recipe.to_json(), encoding="utf-8")
            return target
        except Exception as exc:
            self.logger.error("recipe.log.write_failed", log_folder=str(log_folder), scenario=scenario_id, error=str(exc))
            return None

    def add_execution_listener(self, listener: ExecutionListener) -> None:
        self.executor.add_execution_listener(listener)

    def remove_execution_listener(self, listener: ExecutionListener) -> None:
        self.executor.remove_execution_listener(listener)

    def close(self) -> None:
        close = getattr(self.executor, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> ScenarioRecipeExecutor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
