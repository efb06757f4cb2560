from __future__ import annotations

from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from testserver_bdd.client.errors import ApiException
from testserver_bdd.config.settings import Settings
from testserver_bdd.core.logger import get_logger
from testserver_bdd.schemas.recipe_schemas import TestRecipe
from testserver_bdd.schemas.result_schemas import HarLogRoot, ProjectResultReport

_ModelT = TypeVar("_ModelT", bound=BaseModel)

EXECUTIONS_PATH = "/readyapi/executions"


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    text = response.text.strip()
    return text[:500] if text else response.reason_phrase or "request failed"


class HttpTestServerApi:
    """httpx-backed client for the TestServer execution endpoints."""

    __test__ = False

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
        logger=None,
    ):
        self.base_url = base_url.rstrip("/")
        self.logger = logger if logger is not None else get_logger(__name__)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_settings(cls, config: Settings, **kwargs: Any) -> HttpTestServerApi:
        return cls(config.backend_base_url, timeout=max(1, int(config.BACKEND_TIMEOUT or 60)), **kwargs)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpTestServerApi:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def post_execution(
        self,
        recipe: TestRecipe,
        auth: httpx.Auth | None = None,
        *,
        run_async: bool = False,
    ) -> ProjectResultReport:
        body = self._request(
            "POST",
            EXECUTIONS_PATH,
            auth=auth,
            params={"async": "true" if run_async else "false"},
            json=recipe.to_payload(),
        )
        return self._parse(ProjectResultReport, body)

    def get_execution_status(self, execution_id: str, auth: httpx.Auth | None = None) -> ProjectResultReport:
        body = self._request("GET", f"{EXECUTIONS_PATH}/{_segment(execution_id)}/status", auth=auth)
        return self._parse(ProjectResultReport, body)

    def cancel_execution(self, execution_id: str, auth: httpx.Auth | None = None) -> ProjectResultReport:
        body = self._request("DELETE", f"{EXECUTIONS_PATH}/{_segment(execution_id)}", auth=auth)
        return self._parse(ProjectResultReport, body)

    def get_transaction_log(
        self,
        execution_id: str,
        transaction_id: str,
        auth: httpx.Auth | None = None,
    ) -> HarLogRoot:
        body = self._request(
            "GET",
            f"{EXECUTIONS_PATH}/{_segment(execution_id)}/transactions/{_segment(transaction_id)}",
            auth=auth,
        )
        return self._parse(HarLogRoot, body)

    def _request(self, method: str, path: str, *, auth: httpx.Auth | None = None, **kwargs: Any) -> Any:
        self.logger.debug("testserver.request", method=method, path=path)
        try:
            response = self._client.request(method, path, auth=auth, **kwargs)
        except httpx.RequestError as exc:
            raise ApiException(0, f"{method} {path} failed: {exc}") from exc

        if not response.is_success:
            raise ApiException(response.status_code, _error_message(response), body=response.text)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ApiException(response.status_code, "response is not valid JSON", body=response.text) from exc

    @staticmethod
    def _parse(model: type[_ModelT], body: Any) -> _ModelT:
        try:
            return model.model_validate(body)
        except ValidationError as exc:
            raise ApiException(0, f"unexpected {model.__name__} payload: {exc}", body=body) from exc
