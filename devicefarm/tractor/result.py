"""Tagged union used by fallible constructors."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful value."""

    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failure carrying the error instead of raising it."""

    error: E


Result = Ok[T] | Err[E]
