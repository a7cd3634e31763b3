"""
Filesystem-safe filename prefixes for saved assets.

- Pattern:  ``<hostname>_YYYY-MM-DD_HH-MM-SS``
- Clock:    local time, 24-hour, zero padded
- Safety:   every character in ``/ ? < > \\ : * | "`` becomes ``-``

Formatting goes through ``strftime`` with numeric directives only, so the
result does not depend on the host locale and sorts by date then time.

Usage
-----
>>> get_filename_prefix({"url": "https://example.com/a", "generatedTime": "2017-01-31T18:47:05"})
'example.com_2017-01-31_18-47-05'
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any
from urllib.parse import urlsplit

from pydantic import ValidationError

from .contracts.screenshot import ResultIdentity
from .errors import InvalidResultError

_UNSAFE_CHARS = re.compile(r'[/?<>\\:*|"]')


def _hostname(url: str) -> str:
    """Return the hostname of an absolute URL or raise `InvalidResultError`."""
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except ValueError as exc:
        raise InvalidResultError(f"invalid url: {url!r}") from exc
    if not parts.scheme or not hostname:
        raise InvalidResultError(f"invalid url: {url!r}")
    if ":" in hostname:
        # IPv6 literal; keep the brackets the URL carried
        return f"[{hostname}]"
    return hostname


def _local_time(when: datetime | None) -> datetime:
    """Return `when` in local time; naive values are already local."""
    if when is None:
        return datetime.now()
    if when.tzinfo is not None:
        return when.astimezone()
    return when


def get_filename_prefix(result: ResultIdentity | Mapping[str, Any]) -> str:
    """Build ``hostname_YYYY-MM-DD_HH-MM-SS`` for an audit result.

    Parameters
    ----------
    result:
        A :class:`ResultIdentity` or a mapping with ``url`` and an optional
        ``generatedTime`` (ISO string, epoch number, or ``datetime``).

    Raises
    ------
    InvalidResultError
        If the record does not validate or its URL is not absolute.
    """
    if not isinstance(result, ResultIdentity):
        try:
            result = ResultIdentity.model_validate(result)
        except ValidationError as exc:
            raise InvalidResultError(f"invalid result record: {exc}") from exc

    hostname = _hostname(result.url)
    when = _local_time(result.generated_time)
    prefix = f"{hostname}_{when:%Y-%m-%d}_{when:%H:%M:%S}"
    return _UNSAFE_CHARS.sub("-", prefix)


__all__ = ["get_filename_prefix"]
