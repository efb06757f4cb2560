from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TestStep(BaseModel):
    __test__ = False
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    type: str = Field(min_length=1)
    name: str | None = None


class TestCase(BaseModel):
    __test__ = False
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow", frozen=True)

    name: str | None = None
    test_steps: list[TestStep] = Field(default_factory=list)
    properties: dict[str, Any] | None = None
    timeout: int | None = Field(default=None, ge=0)
    client_cert_file_name: str | None = None


class TestRecipe:
    """Serializable execution request built from a single TestCase."""

    __test__ = False

    def __init__(self, test_case: TestCase):
        self.test_case = test_case

    @classmethod
    def from_test_case(cls, test_case: TestCase | dict[str, Any] | None) -> TestRecipe:
        if test_case is None:
            raise ValueError("test_case is required")
        if not isinstance(test_case, TestCase):
            test_case = TestCase.model_validate(test_case)
        return cls(test_case)

    def to_payload(self) -> dict[str, Any]:
        return self.test_case.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.test_case.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return f"TestRecipe({self.test_case.model_dump_json(by_alias=True, exclude_none=True)})"
