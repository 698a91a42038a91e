"""Application configuration utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

DEFAULT_DATA_FILENAME = "na_breweries_combined.csv"
DEFAULT_MAP_FILENAME = "brewery_map.html"
DEFAULT_GITHUB_REPO = "piersondarren/brewmap"
DEFAULT_DEBOUNCE_MS = 120
DEFAULT_REQUEST_TIMEOUT = 10


@dataclass(frozen=True)
class AppConfig:
    """Configuration container for the brewery map application."""

    data_source: str = "file"
    data_path: Path = Path("data") / DEFAULT_DATA_FILENAME
    data_url: str = ""
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    version_lookup_enabled: bool = True
    github_repo: str = DEFAULT_GITHUB_REPO
    map_output: Path = Path(DEFAULT_MAP_FILENAME)
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    initial_center: Tuple[float, float] = (45.3, -93.3)
    initial_zoom: int = 4

    @property
    def use_http(self) -> bool:
        return self.data_source.lower() == "http"

    @property
    def data_file_repo_path(self) -> str:
        """Path of the data file inside the GitHub repository."""

        return f"data/{self.data_path.name}"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def load_config(base_dir: Path | None = None) -> AppConfig:
    """Load configuration from environment variables."""

    base_dir = base_dir or Path.cwd()
    data_source = os.getenv("BREWMAP_DATA_SOURCE", "file")

    data_override = os.getenv("BREWMAP_DATA_PATH")
    if data_override:
        data_path = Path(data_override)
    else:
        data_path = base_dir / "data" / DEFAULT_DATA_FILENAME

    map_override = os.getenv("BREWMAP_MAP_OUTPUT")
    map_output = Path(map_override) if map_override else base_dir / DEFAULT_MAP_FILENAME

    version_flag = os.getenv("BREWMAP_VERSION_LOOKUP", "true").lower() in {"1", "true", "yes"}

    return AppConfig(
        data_source=data_source,
        data_path=data_path,
        data_url=os.getenv("BREWMAP_DATA_URL", ""),
        debounce_ms=_int_env("BREWMAP_DEBOUNCE_MS", DEFAULT_DEBOUNCE_MS),
        version_lookup_enabled=version_flag,
        github_repo=os.getenv("BREWMAP_GITHUB_REPO", DEFAULT_GITHUB_REPO),
        map_output=map_output,
        request_timeout=_int_env("BREWMAP_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
    )
