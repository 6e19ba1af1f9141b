"""Classification of database errors."""

from __future__ import annotations

from typing import Optional


class _NoRowsError(LookupError):
    """A query that should return a row returned none."""


ERR_NO_ROWS = _NoRowsError("sql: no rows in result set")


def _contains_all(err: Optional[BaseException], *fragments: str) -> bool:
    if err is None:
        return False
    text = str(err).lower()
    return all(fragment in text for fragment in fragments)


def is_not_found(err: Optional[BaseException]) -> bool:
    """Return True when ``err`` signals that no row was found."""
    return isinstance(err, _NoRowsError)


def is_bind_parameter_mismatch(err: Optional[BaseException]) -> bool:
    """Return True when the server rejected the number of bound parameters."""
    return _contains_all(err, "bind message supplies", "prepared statement", "requires")


def is_fixture_result_format_mismatch(err: Optional[BaseException]) -> bool:
    """Return True when the server rejected the number of result formats."""
    return _contains_all(err, "bind message has", "result formats", "query has")