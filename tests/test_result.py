"""Unit tests for the lightweight Result utilities."""

from __future__ import annotations

import pytest

from todate.core.result import Err, Ok, Result, err, ok


def test_ok_reports_success() -> None:
    """`Ok` should report success and hand back its value."""
    r: Result[int, str] = ok(10)
    assert r.is_ok() and not r.is_err()
    assert r.unwrap() == 10


def test_err_reports_failure() -> None:
    """`Err` should report failure and hand back its error payload."""
    r: Result[int, str] = err("boom")
    assert r.is_err() and not r.is_ok()
    assert r.unwrap_err() == "boom"


def test_unwrapping_the_wrong_variant_raises() -> None:
    """Asking an `Err` for a value (or an `Ok` for an error) is a RuntimeError."""
    with pytest.raises(RuntimeError, match="unwrap Err"):
        err("e").unwrap()
    with pytest.raises(RuntimeError, match="unwrap_err on Ok"):
        ok(1).unwrap_err()


def test_ok_and_err_are_value_objects() -> None:
    """Ok/Err compare by payload."""
    assert ok(3) == Ok(3)
    assert err("x") == Err("x")
    assert ok(3) != err(3)
