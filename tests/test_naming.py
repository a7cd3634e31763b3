"""Unit tests for filename prefix derivation."""

from __future__ import annotations

import re
from datetime import UTC, datetime

import pytest

from auditsave.core.contracts.screenshot import ResultIdentity
from auditsave.core.errors import InvalidResultError
from auditsave.core.naming import get_filename_prefix

_PATTERN = re.compile(r"^(?P<host>[^_]+)_\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}$")
_UNSAFE = set('/?<>\\:*|"')


def test_prefix_from_naive_iso_timestamp() -> None:
    """Naive timestamps are local already and are formatted as-is."""
    result = {"url": "https://www.example.com/path?q=1", "generatedTime": "2017-01-31T18:47:05"}
    assert get_filename_prefix(result) == "www.example.com_2017-01-31_18-47-05"


def test_prefix_zero_pads_fields() -> None:
    """Single-digit months, days and clock fields are zero padded."""
    result = ResultIdentity(url="http://example.org", generated_time=datetime(2020, 3, 4, 5, 6, 7))
    assert get_filename_prefix(result) == "example.org_2020-03-04_05-06-07"


def test_prefix_converts_aware_timestamp_to_local_time() -> None:
    """Aware timestamps are shown in the host's local timezone."""
    when = datetime(2021, 6, 1, 12, 0, 0, tzinfo=UTC)
    local = when.astimezone()
    expected = f"example.com_{local:%Y-%m-%d}_{local:%H-%M-%S}"
    assert get_filename_prefix({"url": "https://example.com", "generatedTime": when}) == expected


def test_prefix_defaults_to_now() -> None:
    """Without a generation time the current clock is used."""
    prefix = get_filename_prefix({"url": "https://example.com"})
    match = _PATTERN.match(prefix)
    assert match is not None
    assert match.group("host") == "example.com"


@pytest.mark.parametrize("when", ["", 0, None])  # type: ignore[misc]
def test_prefix_treats_empty_time_as_now(when: object) -> None:
    """An empty or zero generation time falls back to the current clock."""
    prefix = get_filename_prefix({"url": "https://example.com", "generatedTime": when})
    match = _PATTERN.match(prefix)
    assert match is not None
    assert match.group("host") == "example.com"


def test_prefix_drops_port_and_lowercases_host() -> None:
    """Only the hostname is used, lowercased, without the port."""
    result = {"url": "https://Example.COM:8443/x", "generatedTime": "2019-12-31T23:59:59"}
    assert get_filename_prefix(result) == "example.com_2019-12-31_23-59-59"


def test_prefix_replaces_unsafe_characters() -> None:
    """IPv6 hosts keep their brackets; their colons become dashes."""
    result = {"url": "http://[::1]:8080/", "generatedTime": "2018-05-06T07:08:09"}
    prefix = get_filename_prefix(result)
    assert prefix == "[--1]_2018-05-06_07-08-09"
    assert not _UNSAFE & set(prefix)


@pytest.mark.parametrize(  # type: ignore[misc]
    "url",
    [
        "https://example.com",
        "http://a.b.c.example.net/deep/path/?x=<y>&z=*|",
        "https://xn--bcher-kva.example/",
        "http://192.168.0.1:3000",
    ],
)
def test_prefix_is_always_filename_safe(url: str) -> None:
    """Output never contains a filesystem-unfriendly character."""
    prefix = get_filename_prefix({"url": url, "generatedTime": "2017-01-31T18:47:05"})
    assert not _UNSAFE & set(prefix)
    assert _PATTERN.match(prefix)


@pytest.mark.parametrize("url", ["not a url", "", "example.com/path", "/relative"])  # type: ignore[misc]
def test_invalid_url_raises(url: str) -> None:
    """URLs that are not absolute are an invalid-input error."""
    with pytest.raises(InvalidResultError):
        get_filename_prefix({"url": url})


def test_missing_url_raises() -> None:
    """A record without a url never validates."""
    with pytest.raises(InvalidResultError):
        get_filename_prefix({"generatedTime": "2017-01-31T18:47:05"})
