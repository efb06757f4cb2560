from __future__ import annotations

from typing import Protocol

import httpx

from testserver_bdd.schemas.recipe_schemas import TestRecipe
from testserver_bdd.schemas.result_schemas import HarLogRoot, ProjectResultReport


class TestServerApi(Protocol):
    __test__ = False

    def post_execution(
        self,
        recipe: TestRecipe,
        auth: httpx.Auth | None = None,
        *,
        run_async: bool = False,
    ) -> ProjectResultReport: ...

    def get_execution_status(self, execution_id: str, auth: httpx.Auth | None = None) -> ProjectResultReport: ...

    def cancel_execution(self, execution_id: str, auth: httpx.Auth | None = None) -> ProjectResultReport: ...

    def get_transaction_log(
        self,
        execution_id: str,
        transaction_id: str,
        auth: httpx.Auth | None = None,
    ) -> HarLogRoot: ...
