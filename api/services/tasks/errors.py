"""Task operation results and error kinds."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import ValidationError

T = TypeVar("T")


class TaskErrorKind(str, Enum):
    """Closed set of failures a task operation reports to its caller."""

    VALIDATION = "validation-error"
    UNAUTHORIZED = "not-authorized"
    NOT_FOUND = "not-found"


@dataclass(frozen=True)
class TaskError:
    kind: TaskErrorKind
    message: str


@dataclass(frozen=True)
class TaskResult(Generic[T]):
    """
    Outcome of a task operation.

    Exactly one of ``value`` (possibly None for operations with no result)
    or ``error`` is meaningful; check ``ok`` first.
    """

    value: Optional[T] = None
    error: Optional[TaskError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "TaskResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: TaskErrorKind, message: str) -> "TaskResult[T]":
        return cls(error=TaskError(kind=kind, message=message))


def unauthorized(message: str = "not-authorized") -> TaskResult:
    return TaskResult.failure(TaskErrorKind.UNAUTHORIZED, message)


def not_found(task_id: str) -> TaskResult:
    return TaskResult.failure(TaskErrorKind.NOT_FOUND, f"Task {task_id} not found")


def invalid(exc: ValidationError) -> TaskResult:
    """Flatten a pydantic validation error into a VALIDATION result."""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "params"
        problems.append(f"{location}: {err.get('msg')}")
    return TaskResult.failure(TaskErrorKind.VALIDATION, "; ".join(problems))
