"""Uniform response envelope returned by every command."""

from typing import Any, Literal

from filtered_test_runner.models.base import Model


class Response(Model):
    """Status, human readable message and optional structured data."""

    status: Literal["success", "error"]
    message: str
    data: Any = None

    @classmethod
    def success(cls, message: str, data: Any = None) -> "Response":
        return cls(status="success", message=message, data=data)

    @classmethod
    def error(cls, message: str, data: Any = None) -> "Response":
        return cls(status="error", message=message, data=data)

    @property
    def ok(self) -> bool:
        return self.status == "success"
