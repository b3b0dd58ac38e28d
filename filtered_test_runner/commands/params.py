"""Typed access to loosely-typed command parameters."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import StrictBool, StrictStr, TypeAdapter, ValidationError

from filtered_test_runner.errors import InvalidArgumentError

# bool must come before int since bool is a subclass of int
JSON_TYPE_NAMES: Mapping[type, str] = {
    bool: "Boolean",
    int: "Integer",
    float: "Float",
    str: "String",
    list: "Array",
    tuple: "Array",
    dict: "Object",
}

_BOOL = TypeAdapter(StrictBool)
_STR = TypeAdapter(StrictStr)
_STR_LIST = TypeAdapter(list[StrictStr])


def json_type_name(value: Any) -> str:
    """Name the JSON type of a decoded value, for error messages."""
    if value is None:
        return "Null"
    for python_type, name in JSON_TYPE_NAMES.items():
        if isinstance(value, python_type):
            return name
    return type(value).__name__


@dataclass(frozen=True)
class Params:
    """Validating accessors over a decoded parameter object.

    A parameter explicitly set to null is treated as absent.
    """

    raw: Mapping[str, Any]

    def require_bool(self, name: str) -> bool:
        if self.raw.get(name) is None:
            raise InvalidArgumentError(f"Required parameter '{name}' (bool) is missing")
        return self._validate(name, _BOOL, "a boolean")

    def optional_bool(self, name: str, default: bool = False) -> bool:
        if self.raw.get(name) is None:
            return default
        return self._validate(name, _BOOL, "a boolean")

    def require_str(self, name: str) -> str:
        if self.raw.get(name) is None:
            raise InvalidArgumentError(
                f"Required parameter '{name}' (string) is missing"
            )
        value: str = self._validate(name, _STR, "a string")
        if not value:
            raise InvalidArgumentError(f"Parameter '{name}' cannot be empty")
        return value

    def optional_str(self, name: str) -> str | None:
        if self.raw.get(name) is None:
            return None
        return self._validate(name, _STR, "a string")

    def optional_str_list(self, name: str) -> list[str] | None:
        if self.raw.get(name) is None:
            return None
        return self._validate(name, _STR_LIST, "an array of strings")

    def _validate(self, name: str, adapter: TypeAdapter[Any], expected: str) -> Any:
        value = self.raw[name]
        try:
            return adapter.validate_python(value)
        except ValidationError as e:
            raise InvalidArgumentError(
                f"Parameter '{name}' must be {expected}, got: {json_type_name(value)}"
            ) from e
