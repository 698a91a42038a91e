"""Look up when the brewery data file was last committed."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import requests

logger = logging.getLogger(__name__)

UNKNOWN_VERSION_LABEL = "Data updated: unknown"
GITHUB_API = "https://api.github.com"

_UNITS = (
    ("year", 31536000),
    ("month", 2592000),
    ("day", 86400),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


class VersionLookupError(RuntimeError):
    """Raised when the commit metadata cannot be retrieved."""


@dataclass(frozen=True)
class VersionBadge:
    """Badge text plus the commit page it links to (empty when unknown)."""

    text: str = UNKNOWN_VERSION_LABEL
    url: str = ""


@dataclass(frozen=True)
class DataVersion:
    committed_at: datetime
    sha: str
    url: str

    def badge(self, now: Optional[datetime] = None) -> VersionBadge:
        return VersionBadge(text=self.label(now), url=self.url)

    def label(self, now: Optional[datetime] = None) -> str:
        when = self.committed_at.astimezone().strftime("%Y-%m-%d")
        text = f"Data updated: {when} ({relative_time(self.committed_at, now)})"
        if self.sha:
            text += f" · {self.sha}"
        return text


def relative_time(then: datetime, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    seconds = int((now - then).total_seconds())
    for name, size in _UNITS:
        value = seconds // size
        if value >= 1:
            return f"{value} {name}{'s' if value > 1 else ''} ago"
    return "just now"


def _as_dict(value: object) -> dict:
    return value if isinstance(value, dict) else {}


def _parse_timestamp(raw: object) -> datetime:
    if not isinstance(raw, str) or not raw:
        raise VersionLookupError("Commit has no timestamp")
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise VersionLookupError(f"Unreadable commit timestamp: {raw!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def fetch_data_version(repo: str, path: str, *, timeout: int = 10) -> DataVersion:
    """Return the latest commit touching ``path`` in the GitHub ``repo``."""

    url = f"{GITHUB_API}/repos/{repo}/commits"
    try:
        response = requests.get(
            url,
            params={"path": path, "per_page": 1},
            headers={"Accept": "application/vnd.github+json"},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise VersionLookupError(f"Request failed: {exc}") from exc
    if response.status_code != 200:
        raise VersionLookupError(f"HTTP {response.status_code}")
    try:
        payload = response.json()
    except ValueError as exc:
        raise VersionLookupError("Response is not JSON") from exc

    if not isinstance(payload, list) or not payload or not isinstance(payload[0], dict):
        raise VersionLookupError("No commit found")
    entry = payload[0]
    commit = _as_dict(entry.get("commit"))
    committer = _as_dict(commit.get("committer"))
    author = _as_dict(commit.get("author"))
    committed_at = _parse_timestamp(committer.get("date") or author.get("date"))

    sha = str(entry.get("sha") or "")[:7]
    html_url = entry.get("html_url") or f"https://github.com/{repo}/commits/main/{path}"
    return DataVersion(committed_at=committed_at, sha=sha, url=str(html_url))


def describe_data_version(
    repo: str, path: str, *, timeout: int = 10, now: Optional[datetime] = None
) -> VersionBadge:
    """Version badge; never raises, falls back to ``UNKNOWN_VERSION_LABEL`` without a link."""

    try:
        version = fetch_data_version(repo, path, timeout=timeout)
    except VersionLookupError as exc:
        logger.warning("Data version lookup for %s failed: %s", repo, exc)
        return VersionBadge()
    return version.badge(now)
