from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ServiceError(Exception):
    """Base class for every failure the router turns into an error envelope."""

    @property
    def message(self) -> str:
        return str(self)


class MissingField(ServiceError):
    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field


class MissingInstructor(ServiceError):
    def __init__(self):
        super().__init__("At least one instructor must be specified")


class InvalidRating(ServiceError):
    def __init__(self, field: str):
        super().__init__(f"Invalid rating for {field}: must be 1-5")
        self.field = field


class InvalidInput(ServiceError):
    pass


class UnknownAction(ServiceError):
    def __init__(self, action: str):
        super().__init__(f"Unknown action: {action}")
        self.action = action


class ParseError(ServiceError):
    def __init__(self, detail: str):
        super().__init__(f"Invalid JSON format: {detail}")


class StoreError(ServiceError):
    pass


class TableNotFound(StoreError):
    def __init__(self, table_name: str):
        super().__init__(f"Table not found: {table_name}")
        self.table_name = table_name


class WriteError(StoreError):
    pass


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Tagged outcome of a validation or action step.

    Exactly one of `value` / `error` is meaningful: `ok` tells which.
    """

    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def succeed(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, error: ServiceError) -> Result[T]:
        return cls(error=error)
