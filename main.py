"""Entry point for the brewery map application."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from brewmap import BrewMapController, DataLoadError, create_provider, load_config
from brewmap.render import export_map

try:  # pragma: no cover - imported for exception handling
    from tkinter import TclError as TkinterError
except ImportError:  # pragma: no cover - tkinter might be unavailable in headless tests
    TkinterError = RuntimeError  # type: ignore[assignment,misc]

_TKINTER_ERROR_MESSAGE = (
    "The Tkinter interface could not be started. "
    "Make sure a graphical environment (DISPLAY) is available, or use --export."
)


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Filterable map of U.S. and Canadian breweries.")
    parser.add_argument("--export", type=Path, help="write the map HTML to this path and exit")
    parser.add_argument("--category", default="", help="brewery type, e.g. micro")
    parser.add_argument("--country", default="", help="country, e.g. United States")
    parser.add_argument("--region", default="", help="state or province")
    parser.add_argument("--query", default="", help="search name, city or postal code")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def export(controller: BrewMapController, args: argparse.Namespace, config) -> Path:
    controller.load()
    controller.select_category(args.category)
    controller.select_country(args.country)
    controller.select_region(args.region)
    state = controller.apply_query(args.query)
    path = export_map(state.active, args.export, center=config.initial_center, zoom=config.initial_zoom)
    print(f"{state.count_label} breweries matched, {len(state.renderable):,} mapped -> {path}")
    return path


def main(argv=None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    base_dir = Path(__file__).parent
    config = load_config(base_dir)
    try:
        provider = create_provider(config)
    except DataLoadError as exc:
        raise SystemExit(str(exc)) from exc
    controller = BrewMapController(provider, debounce_ms=config.debounce_ms)

    if args.export:
        try:
            export(controller, args, config)
        except DataLoadError as exc:
            raise SystemExit(f"Failed to load brewery data: {exc}") from exc
        return

    try:
        from brewmap.ui import run_app
    except ImportError as exc:  # pragma: no cover - defensive guard
        raise SystemExit(_TKINTER_ERROR_MESSAGE) from exc

    try:
        run_app(config, controller)
    except TkinterError as exc:
        raise SystemExit(_TKINTER_ERROR_MESSAGE) from exc


if __name__ == "__main__":
    main()
