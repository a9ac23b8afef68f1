"""
Blog Backend - Store Outcomes
===============================

What:  The typed result every BlogStore operation returns, and the single
       table that turns a non-OK outcome into an application exception.
How:   BlogStore classifies ORM errors once, at its own boundary, into a
       StoreOutcome. Services call unwrap(result, "Post") and either get the
       value back or an exception the global handlers know how to render.

Outcome table:
    OK                   → value returned
    NOT_FOUND            → NotFoundError            (404 "<Entity> not found")
    CONFLICT             → ConflictError            (400 "<Entity> with this name already exists")
    REFERENCE_VIOLATION  → ReferenceViolationError  (400 "Category not found")
    OTHER                → UnhandledStoreError      (500 store message or "Server error")
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Generic, Optional, TypeVar

from app.exceptions import (
    BlogError,
    ConflictError,
    NotFoundError,
    ReferenceViolationError,
    UnhandledStoreError,
)

T = TypeVar("T")


class StoreOutcome(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    REFERENCE_VIOLATION = "reference_violation"
    OTHER = "other"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """
    Outcome of one store operation.

    value is set only for OK; message carries the store's error text for
    OTHER (and is informational for the other failure outcomes).
    """

    outcome: StoreOutcome
    value: Optional[T] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "StoreResult[T]":
        return cls(StoreOutcome.OK, value=value)

    @classmethod
    def not_found(cls) -> "StoreResult[T]":
        return cls(StoreOutcome.NOT_FOUND)

    @classmethod
    def failure(cls, outcome: StoreOutcome, message: Optional[str] = None) -> "StoreResult[T]":
        return cls(outcome, message=message)

    @property
    def is_ok(self) -> bool:
        return self.outcome is StoreOutcome.OK


_OUTCOME_ERRORS: Dict[StoreOutcome, Callable[[str, Optional[str]], BlogError]] = {
    StoreOutcome.NOT_FOUND: lambda entity, message: NotFoundError(resource=entity),
    StoreOutcome.CONFLICT: lambda entity, message: ConflictError(resource=entity),
    StoreOutcome.REFERENCE_VIOLATION: lambda entity, message: ReferenceViolationError(),
    StoreOutcome.OTHER: lambda entity, message: UnhandledStoreError(
        message, context={"resource": entity}
    ),
}


def unwrap(result: StoreResult[T], entity: str) -> T:
    """
    Return the value of an OK result, or raise the exception its outcome maps to.

    Args:
        result: What the store returned
        entity: Display name used in messages ("Post", "Category")

    Raises:
        NotFoundError, ConflictError, ReferenceViolationError, UnhandledStoreError
    """
    if result.is_ok:
        return result.value
    raise _OUTCOME_ERRORS[result.outcome](entity, result.message)
