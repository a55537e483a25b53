from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a service operation.

    A successful result may carry a value; a failed one carries a single
    human-readable error message that routers pass through verbatim.
    """
    is_success: bool
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(is_success=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "Result[T]":
        return cls(is_success=False, error=error)
