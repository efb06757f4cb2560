from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from testserver_bdd.bdd.scenario_executor import ScenarioRecipeExecutor
from testserver_bdd.client.errors import ApiException
from testserver_bdd.config.settings import settings
from testserver_bdd.core.logger import get_logger
from testserver_bdd.core.logging import configure_logging
from testserver_bdd.execution.execution import TestServerExecution
from testserver_bdd.schemas.recipe_schemas import TestCase

logger = get_logger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a TestServer test case recipe from a JSON file.")
    parser.add_argument("test_case", type=Path, help="JSON file holding the test case")
    parser.add_argument("--scenario", default=None, help="scenario id used to name the debug recipe dump")
    parser.add_argument("--async", dest="async_mode", action="store_true", help="submit without waiting for the result")
    parser.add_argument("--har", action="store_true", help="include transaction log entries for each step")
    return parser.parse_args(argv)


def execution_summary(execution: TestServerExecution, include_har: bool = False) -> dict[str, Any]:
    steps: list[dict[str, Any]] = []
    for result in execution.get_test_step_results():
        item: dict[str, Any] = {
            "name": result.test_step_name,
            "status": result.assertion_status,
            "time_taken": result.time_taken,
            "messages": result.messages,
        }
        if include_har:
            entry = result.get_har_entry()
            item["har_entry"] = entry.model_dump(mode="json", by_alias=True) if entry is not None else None
        steps.append(item)
    return {
        "execution_id": execution.id,
        "status": execution.status.value,
        "time_taken": execution.current_report.time_taken,
        "errors": execution.errors,
        "steps": steps,
    }


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    try:
        test_case = TestCase.model_validate(json.loads(args.test_case.read_text(encoding="utf-8")))
    except (OSError, ValueError, ValidationError) as exc:
        logger.error("cli.test_case_invalid", path=str(args.test_case), error=str(exc))
        return 2

    with ScenarioRecipeExecutor(config=settings, async_mode=args.async_mode) as runner:
        try:
            execution = runner.run_test_case(test_case, args.scenario)
        except ApiException as exc:
            logger.error("cli.execution_failed", status_code=exc.status_code, error=str(exc))
            return 1

        print(json.dumps(execution_summary(execution, include_har=args.har), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
