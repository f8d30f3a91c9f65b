"""Tagged outcome of a create operation."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    """The operation did not produce a value.

    ``error`` is None when the server answered but the body could not be read.
    """

    error: Exception | None = None


CreateResult = Success[int] | Failure
