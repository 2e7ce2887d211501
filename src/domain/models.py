from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class StoreOutcome(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"


class InvalidParameterValueError(ValueError):
    """Raised when a profile write carries values that are not booleans."""

    def __init__(self, values: Iterable[Any]):
        self.values = list(values)
        super().__init__(f"Inputs are invalid: {', '.join(repr(v) for v in self.values)}")


@dataclass
class Profile:
    name: str
    parameters: dict[str, str] = field(default_factory=dict)

    def copy(self) -> "Profile":
        return Profile(name=self.name, parameters=dict(self.parameters))


def parse_bool(value: Any) -> bool | None:
    if not isinstance(value, str):
        return None
    text = value.strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    return None


def format_bool(flag: bool) -> str:
    return "true" if flag else "false"


DEFAULT_PROFILES: dict[str, dict[str, str]] = {
    "Admin": {"CanEdit": "true", "CanDelete": "true"},
    "User": {"CanEdit": "false", "CanDelete": "false"},
}
