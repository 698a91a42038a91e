"""Data models for the brewery map."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_NAME = "Brewery"

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_coordinate(value: object) -> Optional[float]:
    """Return ``value`` as a finite float or ``None`` when it cannot be used.

    Text is read like JavaScript's ``parseFloat``: the leading number is
    used and anything after it is ignored.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if match is None:
            return None
        number = float(match.group(0))
    if not math.isfinite(number):
        return None
    return number


@dataclass(frozen=True, slots=True)
class BreweryRecord:
    id: str = ""
    name: str = ""
    category: str = ""
    address_1: str = ""
    city: str = ""
    region: str = ""
    postal_code: str = ""
    country: str = ""
    latitude: object = None
    longitude: object = None
    phone: str = ""
    website_url: str = ""
    source: str = ""
    source_state: str = ""
    source_state_code: str = ""

    def display_name(self) -> str:
        return self.name or DEFAULT_NAME

    def address_line(self) -> str:
        """Return the postal address with empty parts left out."""

        return ", ".join(
            part for part in (self.address_1, self.city, self.region, self.postal_code) if part
        )

    def coordinates(self) -> Optional[Tuple[float, float]]:
        lat = parse_coordinate(self.latitude)
        lon = parse_coordinate(self.longitude)
        if lat is None or lon is None:
            return None
        return lat, lon

    @property
    def is_renderable(self) -> bool:
        return self.coordinates() is not None
