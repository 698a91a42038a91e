"""Curated brewery-type palette shared by markers, clusters and the legend."""

from __future__ import annotations

from typing import Dict, List, Tuple

UNKNOWN_CATEGORY = "unknown"

# Legend order; never re-sorted by frequency.
CATEGORY_ORDER: Tuple[str, ...] = (
    "brewpub",
    "taproom",
    "micro",
    "nano",
    "meadery",
    "cidery",
    "location",
    "bar",
    "proprietor",
    "regional",
    "contract",
    "large",
    "planning",
    "closed",
    UNKNOWN_CATEGORY,
)

CATEGORY_COLORS: Dict[str, str] = {
    "brewpub": "#ff4d4d",
    "taproom": "#ff7043",
    "micro": "#ffa726",
    "nano": "#ffcc80",
    "meadery": "#ffd54f",
    "cidery": "#ffeb3b",
    "location": "#cddc39",
    "bar": "#66bb6a",
    "proprietor": "#26a69a",
    "regional": "#29b6f6",
    "contract": "#1e88e5",
    "large": "#1976d2",
    "planning": "#546e7a",
    "closed": "#455a64",
    UNKNOWN_CATEGORY: "#000000",
}


def category_key(category: str | None) -> str:
    """Normalize a category label for color lookups and cluster counting."""

    return (category or UNKNOWN_CATEGORY).lower()


def color_for(category: str | None) -> str:
    return CATEGORY_COLORS.get(category_key(category), CATEGORY_COLORS[UNKNOWN_CATEGORY])


def legend_entries() -> List[Tuple[str, str]]:
    return [(category, color_for(category)) for category in CATEGORY_ORDER]
