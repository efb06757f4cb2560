from __future__ import annotations

from typing import Any

NOT_FOUND_STATUS = 404


class ApiException(RuntimeError):
    """Raised for failed TestServer calls. ``status_code`` is 0 when no usable HTTP response was received."""

    def __init__(self, status_code: int, message: str, body: Any = None):
        super().__init__(f"[{status_code}] {message}" if status_code else message)
        self.status_code = status_code
        self.message = message
        self.body = body

    @property
    def is_not_found(self) -> bool:
        return self.status_code == NOT_FOUND_STATUS
