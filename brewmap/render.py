"""Build the clustered brewery map with folium."""

from __future__ import annotations

import html
import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

import folium
from folium.plugins import MarkerCluster

from .clusters import ClusterMember, cluster_color
from .colors import CATEGORY_COLORS, UNKNOWN_CATEGORY, category_key, color_for, legend_entries
from .models import BreweryRecord

CLUSTER_ICON_SIZE = 38
MARKER_SIZE = 18

CLUSTER_OPTIONS: Dict[str, object] = {
    "chunkedLoading": True,
    "spiderfyOnMaxZoom": True,
    "disableClusteringAtZoom": 12,
    "maxClusterRadius": 60,
}

_NON_DIGITS = re.compile(r"\D")
_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


def normalize_url(url: str | None) -> str:
    if not url:
        return ""
    text = str(url).strip()
    if _SCHEME.match(text):
        return text
    return "https://" + text.lstrip("/")


def format_phone(phone: str | None) -> Tuple[str, str]:
    """Return ``(display, tel_uri)`` for North American numbers, raw text otherwise."""

    if not phone:
        return "", ""
    digits = _NON_DIGITS.sub("", str(phone))
    if len(digits) == 11 and digits.startswith("1"):
        return f"({digits[1:4]}) {digits[4:7]}-{digits[7:]}", f"tel:+{digits}"
    if len(digits) == 10:
        return f"({digits[0:3]}) {digits[3:6]}-{digits[6:]}", f"tel:+1{digits}"
    return str(phone), f"tel:{digits}"


def popup_html(record: BreweryRecord) -> str:
    esc = html.escape
    parts = [f"<strong>{esc(record.display_name())}</strong>"]
    if record.category:
        parts.append(f"<div>Type: {esc(record.category)}</div>")
    parts.append(f"<div>{esc(record.address_line())}</div>")
    if record.phone:
        display, tel = format_phone(record.phone)
        parts.append(f'<div>📞 <a href="{esc(tel)}">{esc(display)}</a></div>')
    if record.website_url:
        url = normalize_url(record.website_url)
        parts.append(
            f'<div>🔗 <a href="{esc(url)}" target="_blank" rel="noopener">Website</a></div>'
        )
    return f'<div class="popup">{"".join(parts)}</div>'


@dataclass(frozen=True)
class MapPoint:
    """A renderable record with its resolved color and category tag."""

    record: BreweryRecord
    latitude: float
    longitude: float
    category: str
    color: str

    @property
    def title(self) -> str:
        return self.record.name


def build_points(records: Iterable[BreweryRecord]) -> List[MapPoint]:
    """Points for every record with valid coordinates, in record order."""

    points: List[MapPoint] = []
    for record in records:
        coords = record.coordinates()
        if coords is None:
            continue
        points.append(
            MapPoint(
                record=record,
                latitude=coords[0],
                longitude=coords[1],
                category=category_key(record.category),
                color=color_for(record.category),
            )
        )
    return points


def cluster_bubble_html(color: str, count: int, size: int = CLUSTER_ICON_SIZE) -> str:
    return (
        f'<div class="cluster-bubble" style="--c:{color}; width:{size}px; height:{size}px;">'
        f"<span>{count}</span></div>"
    )


def cluster_icon(members: Sequence[ClusterMember]) -> folium.DivIcon:
    """Icon for a group of members handed over by the clustering layer."""

    return folium.DivIcon(
        html=cluster_bubble_html(cluster_color(members), len(members)),
        icon_size=(CLUSTER_ICON_SIZE, CLUSTER_ICON_SIZE),
        class_name="cluster-icon",
    )


def cluster_icon_function() -> str:
    """JavaScript twin of ``cluster_color`` for Leaflet.markercluster."""

    colors = json.dumps(CATEGORY_COLORS)
    return (
        "function(cluster) {"
        f" var colors = {colors};"
        " var counts = {};"
        " cluster.getAllChildMarkers().forEach(function(m) {"
        f"   var t = (m.options.ftype || '{UNKNOWN_CATEGORY}').toLowerCase();"
        "   counts[t] = (counts[t] || 0) + 1;"
        " });"
        f" var top = '{UNKNOWN_CATEGORY}', max = 0;"
        " Object.keys(counts).forEach(function(t) { if (counts[t] > max) { max = counts[t]; top = t; } });"
        f" var color = colors[top] || colors['{UNKNOWN_CATEGORY}'];"
        f" var size = {CLUSTER_ICON_SIZE};"
        " return L.divIcon({"
        "   html: '<div class=\"cluster-bubble\" style=\"--c:' + color + '; width:' + size + 'px; height:' + size + 'px;\"><span>' + cluster.getChildCount() + '</span></div>',"
        "   className: 'cluster-icon',"
        "   iconSize: [size, size]"
        " });"
        "}"
    )


def legend_html() -> str:
    items = "".join(
        '<li class="legend-item">'
        f'<span class="legend-swatch" style="background:{color}"></span>'
        f'<span class="legend-label">{html.escape(label)}</span></li>'
        for label, color in legend_entries()
    )
    return (
        '<div class="legend legend--types" style="position:fixed; top:80px; right:10px; '
        'z-index:9999; background:#fff; padding:6px 10px; border-radius:4px;">'
        '<div class="legend-title">Types</div>'
        f'<ul class="legend-list" style="list-style:none; margin:0; padding:0;">{items}</ul></div>'
    )


_MAP_CSS = """
<style>
.marker-dot { display:block; width:14px; height:14px; border-radius:50%;
  background:var(--dot); border:2px solid #fff; box-shadow:0 0 2px rgba(0,0,0,.6); }
.cluster-bubble { display:flex; align-items:center; justify-content:center; border-radius:50%;
  background:var(--c); color:#fff; font-weight:bold; border:2px solid #fff; }
.legend-swatch { display:inline-block; width:12px; height:12px; margin-right:6px; border-radius:50%; }
</style>
"""


def build_map(
    points: Iterable[MapPoint],
    *,
    center: Tuple[float, float] = (45.3, -93.3),
    zoom: int = 4,
) -> folium.Map:
    fmap = folium.Map(location=list(center), zoom_start=zoom, tiles="OpenStreetMap")
    fmap.get_root().header.add_child(folium.Element(_MAP_CSS))

    cluster = MarkerCluster(
        name="Breweries",
        options=dict(CLUSTER_OPTIONS),
        icon_create_function=cluster_icon_function(),
    )
    cluster.add_to(fmap)

    for point in points:
        icon = folium.DivIcon(
            html=f'<span class="marker-dot" style="--dot:{point.color}"></span>',
            icon_size=(MARKER_SIZE, MARKER_SIZE),
            icon_anchor=(MARKER_SIZE // 2, MARKER_SIZE // 2),
            popup_anchor=(0, -(MARKER_SIZE // 2)),
            class_name="",
        )
        folium.Marker(
            location=[point.latitude, point.longitude],
            popup=folium.Popup(popup_html(point.record), max_width=300),
            icon=icon,
            title=point.title,
            ftype=point.category,
        ).add_to(cluster)

    fmap.get_root().html.add_child(folium.Element(legend_html()))
    return fmap


def export_map(
    records: Iterable[BreweryRecord],
    output: Path,
    *,
    center: Tuple[float, float] = (45.3, -93.3),
    zoom: int = 4,
) -> Path:
    """Write an HTML map of the renderable ``records`` and return its path."""

    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    build_map(build_points(records), center=center, zoom=zoom).save(str(output))
    return output
