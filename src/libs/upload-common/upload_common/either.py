# src/libs/upload-common/upload_common/either.py
"""
Two-variant result type for operations whose expected failures are part of
their contract.

A result is either ``Ok(value)`` or ``Err(error)``. Only ``Ok`` carries a
``value`` and only ``Err`` carries an ``error``, so reading the wrong side
fails with an AttributeError (or UnwrapError through the helpers) instead of
yielding None.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


class UnwrapError(RuntimeError):
    """Raised when a result is unwrapped on the side it does not hold."""


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err[E]]


def is_ok(result: Result) -> bool:
    return isinstance(result, Ok)


def is_err(result: Result) -> bool:
    return isinstance(result, Err)


def unwrap(result: Result[T, E]) -> T:
    """Returns the success value, or raises UnwrapError if the result is an Err."""
    if isinstance(result, Ok):
        return result.value
    if isinstance(result, Err):
        raise UnwrapError(f"Called unwrap on an Err result: {result.error!r}")
    raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")


def unwrap_err(result: Result[T, E]) -> E:
    """Returns the error, or raises UnwrapError if the result is an Ok."""
    if isinstance(result, Err):
        return result.error
    if isinstance(result, Ok):
        raise UnwrapError("Called unwrap_err on an Ok result.")
    raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")
