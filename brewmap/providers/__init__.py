"""Data providers for the brewery map."""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
import requests

logger = logging.getLogger(__name__)


class DataLoadError(RuntimeError):
    """Raised when the brewery data cannot be fetched or parsed."""


@dataclass
class TabularData:
    """Parsed rows together with the header names actually present."""

    rows: List[Dict[str, Any]] = field(default_factory=list)
    fields: List[str] = field(default_factory=list)


def parse_csv(buffer: Any) -> TabularData:
    """Parse delimited text with a header row; every column stays a string.

    Rows with more values than the header keep their leading values and
    drop the surplus; short rows are padded.
    """

    try:
        text = buffer.read() if hasattr(buffer, "read") else str(buffer)
        width = len(pd.read_csv(io.StringIO(text), nrows=0).columns)
        frame = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
            engine="python",
            on_bad_lines=lambda values: values[:width],
        )
    except pd.errors.EmptyDataError as exc:
        raise DataLoadError("The brewery data file is empty.") from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"The brewery data could not be parsed: {exc}") from exc
    fields = [str(column).strip() for column in frame.columns]
    frame.columns = fields
    return TabularData(rows=frame.to_dict(orient="records"), fields=fields)


class BaseDataProvider(ABC):
    """Abstract interface for provider implementations."""

    @abstractmethod
    def load(self) -> TabularData:
        """Return all rows of the data source."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human readable location of the data, used in error messages."""


class CsvFileProvider(BaseDataProvider):
    """Read brewery rows from a local CSV file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def description(self) -> str:
        return str(self.path)

    def load(self) -> TabularData:
        if not self.path.exists():
            raise DataLoadError(f"Data file not found: {self.path}")
        try:
            with self.path.open("r", encoding="utf-8", newline="") as fh:
                data = parse_csv(fh)
        except OSError as exc:
            raise DataLoadError(f"Data file could not be opened: {exc}") from exc
        logger.info("Loaded %d rows from %s", len(data.rows), self.path)
        return data


class HttpCsvProvider(BaseDataProvider):
    """Download brewery rows from a CSV URL."""

    def __init__(self, url: str, *, timeout: int = 10) -> None:
        self.url = url
        self.timeout = timeout

    @property
    def description(self) -> str:
        return self.url

    def load(self) -> TabularData:
        try:
            response = requests.get(self.url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise DataLoadError(f"Download failed: {exc}") from exc
        if response.status_code != 200:
            raise DataLoadError(
                f"Download failed: {response.status_code} {response.reason}"
            )
        data = parse_csv(io.StringIO(response.text))
        logger.info("Downloaded %d rows from %s", len(data.rows), self.url)
        return data


def create_provider(config) -> BaseDataProvider:
    """Create the appropriate provider based on configuration."""

    if config.use_http:
        if not config.data_url:
            raise DataLoadError(
                "HTTP data source selected but BREWMAP_DATA_URL is not set."
            )
        return HttpCsvProvider(config.data_url, timeout=config.request_timeout)

    return CsvFileProvider(config.data_path)
