"""Lightweight, typed Result container for explicit success/failure returns.

Motivation
----------
The date engine is total: every resolution and layout call returns a value.
The one place where malformed input has to be *reported* rather than clamped
is the boundary where persisted JSON is turned back into typed date values.
That boundary returns a `Result[T, E]` instead of raising, so callers that
iterate over a whole export can keep going and collect the failures.

- `Ok(value)` / `Err(error)` variants,
- checks: `is_ok`, `is_err`,
- accessors: `unwrap`, `unwrap_err`.

Example
-------
>>> from todate.core.result import ok, err, Result
>>> def parse_year(x: str) -> Result[int, str]:
...     return ok(int(x)) if x.isdigit() else err("not a year")
>>> parse_year("2004").unwrap()
2004
>>> parse_year("soon").unwrap_err()
'not a year'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, cast

T = TypeVar("T")
E = TypeVar("E")


class Result(Generic[T, E]):
    """Sum type representing either success (`Ok[T]`) or failure (`Err[E]`)."""

    def is_ok(self) -> bool:
        """Return ``True`` if this is an :class:`Ok` value."""
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` if this is an :class:`Err` value."""
        return isinstance(self, Err)

    def unwrap(self) -> T:
        """Return the inner value if ``Ok``.

        Raises
        ------
        RuntimeError
            If this is ``Err``.
        """
        if isinstance(self, Ok):
            return cast(Ok[T, E], self).value
        raise RuntimeError(f"Attempted to unwrap Err: {self!r}")

    def unwrap_err(self) -> E:
        """Return the error value if ``Err``, else raise."""
        if isinstance(self, Err):
            return cast(Err[T, E], self).error
        raise RuntimeError(f"Attempted to unwrap_err on Ok: {self!r}")

    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        if isinstance(self, Ok):
            return f"Ok({cast(Ok[T, E], self).value!r})"
        if isinstance(self, Err):
            return f"Err({cast(Err[T, E], self).error!r})"
        return "Result(?)"


@dataclass(frozen=True)
class Ok(Result[T, E]):
    """Successful result wrapping a value of type ``T``."""

    value: T


@dataclass(frozen=True)
class Err(Result[T, E]):
    """Failed result wrapping an error payload of type ``E``."""

    error: E


def ok(value: T) -> Result[T, E]:
    """Construct :class:`Ok` with better type inference at call sites."""
    return Ok(value)


def err(error: E) -> Result[T, E]:
    """Construct :class:`Err` with better type inference at call sites."""
    return Err(error)
