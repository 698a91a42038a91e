"""Brewery map application package."""

from .config import AppConfig, load_config
from .controller import BrewMapController, Debouncer
from .filters import FilterCriteria, apply_filters, fold
from .models import BreweryRecord
from .normalize import normalize_rows
from .providers import DataLoadError, create_provider

__all__ = [
    "AppConfig",
    "BrewMapController",
    "BreweryRecord",
    "DataLoadError",
    "Debouncer",
    "FilterCriteria",
    "apply_filters",
    "create_provider",
    "fold",
    "load_config",
    "normalize_rows",
]
