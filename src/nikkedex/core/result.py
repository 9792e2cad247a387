# ABOUTME: Two-variant Result type used by every field-level extraction step
# ABOUTME: Ok/Err frozen dataclasses with map, flat_map, map_err and fallback helpers

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never

type ValueOrGetter[T] = T | Callable[[], T]


class UnwrapError(Exception):
    """Raised when a Result is unwrapped on the wrong variant."""

    pass


def _resolve[T](value_or_getter: ValueOrGetter[T]) -> T:
    if callable(value_or_getter):
        return value_or_getter()
    return value_or_getter


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome carrying a value.

    Supports structural pattern matching::

        match result:
            case Ok(value): ...
            case Err(error): ...
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> Never:
        raise UnwrapError(f"called unwrap_err on Ok({self.value!r})")

    def unwrap_or(self, fallback: ValueOrGetter[T]) -> T:
        return self.value

    def map[U](self, mapper: Callable[[T], U]) -> "Ok[U]":
        return Ok(mapper(self.value))

    def map_err(self, mapper: Callable[[Any], Any]) -> "Ok[T]":
        return self

    def flat_map[U, E](self, mapper: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        return mapper(self.value)

    def or_else(self, fallback: Callable[[Any], "Result[T, Any]"]) -> "Ok[T]":
        return self


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed outcome carrying an error value (usually a human-readable message)."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Never:
        raise UnwrapError(f"called unwrap on Err({self.error!r})")

    def unwrap_err(self) -> E:
        return self.error

    def unwrap_or[T](self, fallback: ValueOrGetter[T]) -> T:
        return _resolve(fallback)

    def map(self, mapper: Callable[[Any], Any]) -> "Err[E]":
        return self

    def map_err[F](self, mapper: Callable[[E], F]) -> "Err[F]":
        return Err(mapper(self.error))

    def flat_map(self, mapper: Callable[[Any], Any]) -> "Err[E]":
        return self

    def or_else[T, F](self, fallback: Callable[[E], "Result[T, F]"]) -> "Result[T, F]":
        return fallback(self.error)


type Result[T, E] = Ok[T] | Err[E]


def from_optional[T, E](value: T | None, error: ValueOrGetter[E]) -> Result[T, E]:
    """Wrap a nullable value: None becomes Err(error), anything else Ok(value).

    The error may be given as a zero-argument callable so that expensive messages
    are only built on the failure path.
    """
    if value is None:
        return Err(_resolve(error))
    return Ok(value)
