"""Database URL adjustments."""

from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_FLAG = "disable_prepared_binary_result"


def normalize_db_url(raw: str, disable_prepared_binary_result: bool) -> str:
    """Add ``disable_prepared_binary_result=yes`` to the URL unless a value is already set.

    The URL is returned unchanged when the option is off, when it cannot be
    parsed, or when the parameter already has a non-empty value.
    """
    if not disable_prepared_binary_result:
        return raw

    try:
        parts = urlsplit(raw)
        pairs = parse_qsl(parts.query, keep_blank_values=True)
    except ValueError:
        return raw

    query: dict[str, list[str]] = {}
    for key, value in pairs:
        query.setdefault(key, []).append(value)

    if query.get(_FLAG, [""])[0]:
        return raw

    query[_FLAG] = ["yes"]
    encoded = urlencode(sorted(query.items()), doseq=True)
    return urlunsplit(parts._replace(query=encoded))