from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, timezone
from unittest import mock

import pytest
import requests

from brewmap.version import (
    UNKNOWN_VERSION_LABEL,
    DataVersion,
    VersionBadge,
    VersionLookupError,
    describe_data_version,
    fetch_data_version,
    relative_time,
)

NOW = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)

COMMITS = [
    {
        "sha": "0123456789abcdef",
        "html_url": "https://github.com/piersondarren/brewmap/commit/0123456",
        "commit": {
            "committer": {"date": "2024-06-07T09:30:00Z"},
            "author": {"date": "2024-06-01T00:00:00Z"},
        },
    }
]


def _response(payload=None, status=200):
    response = mock.Mock(status_code=status)
    response.json.return_value = payload
    return response


def test_fetch_data_version_reads_latest_commit():
    with mock.patch("brewmap.version.requests.get", return_value=_response(COMMITS)) as get:
        version = fetch_data_version("piersondarren/brewmap", "data/na_breweries_combined.csv")
    args, kwargs = get.call_args
    assert args[0] == "https://api.github.com/repos/piersondarren/brewmap/commits"
    assert kwargs["params"] == {"path": "data/na_breweries_combined.csv", "per_page": 1}
    assert version.sha == "0123456"
    assert version.committed_at == datetime(2024, 6, 7, 9, 30, tzinfo=timezone.utc)
    assert version.url.endswith("/commit/0123456")


def test_author_date_and_default_url_are_fallbacks():
    payload = [{"sha": "abc", "commit": {"author": {"date": "2024-06-01T00:00:00Z"}}}]
    with mock.patch("brewmap.version.requests.get", return_value=_response(payload)):
        version = fetch_data_version("owner/repo", "data/file.csv")
    assert version.committed_at.day == 1
    assert version.url == "https://github.com/owner/repo/commits/main/data/file.csv"


def test_describe_formats_badge():
    with mock.patch("brewmap.version.requests.get", return_value=_response(COMMITS)):
        badge = describe_data_version("piersondarren/brewmap", "data/x.csv", now=NOW)
    local_day = datetime(2024, 6, 7, 9, 30, tzinfo=timezone.utc).astimezone().strftime("%Y-%m-%d")
    assert badge.text == f"Data updated: {local_day} (3 days ago) · 0123456"
    assert badge.url == "https://github.com/piersondarren/brewmap/commit/0123456"


@pytest.mark.parametrize(
    "response",
    [
        _response([], 200),
        _response({"message": "Not Found"}, 200),
        _response(None, 403),
        _response([{"sha": "abc", "commit": "broken"}], 200),
        _response([{"sha": "abc", "commit": {"committer": {"date": "yesterday"}}}], 200),
    ],
)
def test_bad_responses_degrade_to_placeholder(response, caplog):
    with mock.patch("brewmap.version.requests.get", return_value=response):
        with caplog.at_level(logging.WARNING, logger="brewmap.version"):
            assert describe_data_version("o/r", "data/x.csv") == VersionBadge(UNKNOWN_VERSION_LABEL, "")
    assert "lookup" in caplog.text


def test_invalid_json_degrades():
    response = mock.Mock(status_code=200)
    response.json.side_effect = ValueError("no json")
    with mock.patch("brewmap.version.requests.get", return_value=response):
        with pytest.raises(VersionLookupError):
            fetch_data_version("o/r", "data/x.csv")
        assert describe_data_version("o/r", "data/x.csv") == VersionBadge(UNKNOWN_VERSION_LABEL, "")


def test_network_failure_degrades():
    with mock.patch("brewmap.version.requests.get", side_effect=requests.Timeout("slow")):
        assert describe_data_version("o/r", "data/x.csv") == VersionBadge(UNKNOWN_VERSION_LABEL, "")


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=0), "just now"),
        (timedelta(seconds=-30), "just now"),
        (timedelta(seconds=1), "1 second ago"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(hours=1), "1 hour ago"),
        (timedelta(days=45), "1 month ago"),
        (timedelta(days=800), "2 years ago"),
    ],
)
def test_relative_time(delta, expected):
    assert relative_time(NOW - delta, NOW) == expected


def test_label_without_sha():
    version = DataVersion(committed_at=NOW, sha="", url="")
    local_day = NOW.astimezone().strftime("%Y-%m-%d")
    assert version.label(NOW) == f"Data updated: {local_day} (just now)"


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="time.tzset is not available")
def test_label_uses_local_calendar_day(monkeypatch):
    monkeypatch.setenv("TZ", "America/Chicago")
    time.tzset()
    try:
        late_evening = DataVersion(
            committed_at=datetime(2024, 6, 8, 2, 0, tzinfo=timezone.utc), sha="abc1234", url=""
        )
        assert late_evening.label(NOW).startswith("Data updated: 2024-06-07 (")
    finally:
        monkeypatch.undo()
        time.tzset()
