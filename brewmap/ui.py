"""Tkinter control panel for the brewery map."""

from __future__ import annotations

import queue
import threading
import tkinter as tk
import webbrowser
from tkinter import messagebox, ttk

from .config import AppConfig
from .controller import BrewMapController
from .facets import ANY_OPTION, option_value, with_any_option
from .providers import DataLoadError
from .render import export_map
from .state import SessionState
from .version import VersionBadge, describe_data_version

_RESULT_COLUMNS = (
    ("name", "Name", 220),
    ("category", "Type", 90),
    ("city", "City", 130),
    ("region", "State / Province", 120),
    ("country", "Country", 110),
)


class BrewMapApp:
    """Filter controls, result list and map export."""

    def __init__(self, root: tk.Tk, controller: BrewMapController, config: AppConfig) -> None:
        self.root = root
        self.controller = controller
        self.config = config
        self._version_generation = 0
        self.version_url = ""

        self.category_var = tk.StringVar(value=ANY_OPTION)
        self.country_var = tk.StringVar(value=ANY_OPTION)
        self.region_var = tk.StringVar(value=ANY_OPTION)
        self.search_var = tk.StringVar()
        self.count_var = tk.StringVar(value="0")
        self.version_var = tk.StringVar(value="Data updated: …")
        self.status_var = tk.StringVar(value="Ready.")

        self.controller.set_scheduler(root, config.debounce_ms)
        self._build_ui()
        self.controller.subscribe(self._render_state)
        self._load_initial()

    def _build_ui(self) -> None:
        self.root.title("Brewery Map - U.S. and Canada")
        self.root.geometry("900x560")
        self.root.minsize(760, 420)
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(1, weight=1)

        controls = ttk.Frame(self.root, padding="12")
        controls.grid(row=0, column=0, sticky="we")
        for col in range(4):
            controls.columnconfigure(col, weight=1)

        ttk.Label(controls, text="Type").grid(row=0, column=0, sticky="w")
        self.category_combo = ttk.Combobox(controls, textvariable=self.category_var, state="readonly")
        self.category_combo.grid(row=1, column=0, sticky="we", padx=(0, 8))
        self.category_combo.bind("<<ComboboxSelected>>", lambda _e: self._on_category())

        ttk.Label(controls, text="Country").grid(row=0, column=1, sticky="w")
        self.country_combo = ttk.Combobox(controls, textvariable=self.country_var, state="readonly")
        self.country_combo.grid(row=1, column=1, sticky="we", padx=(0, 8))
        self.country_combo.bind("<<ComboboxSelected>>", lambda _e: self._on_country())

        ttk.Label(controls, text="State / Province").grid(row=0, column=2, sticky="w")
        self.region_combo = ttk.Combobox(controls, textvariable=self.region_var, state="readonly")
        self.region_combo.grid(row=1, column=2, sticky="we", padx=(0, 8))
        self.region_combo.bind("<<ComboboxSelected>>", lambda _e: self._on_region())

        ttk.Label(controls, text="Search name, city or postal code").grid(row=0, column=3, sticky="w")
        self.search_entry = ttk.Entry(controls, textvariable=self.search_var)
        self.search_entry.grid(row=1, column=3, sticky="we")
        self.search_entry.bind("<KeyRelease>", lambda _e: self.controller.update_query(self.search_var.get()))

        actions = ttk.Frame(controls)
        actions.grid(row=2, column=0, columnspan=4, sticky="we", pady=(8, 0))
        actions.columnconfigure(2, weight=1)
        ttk.Button(actions, text="Reset", command=self.on_reset).grid(row=0, column=0, sticky="w")
        ttk.Button(actions, text="Open map", command=self.on_open_map).grid(
            row=0, column=1, sticky="w", padx=(8, 0)
        )
        ttk.Label(actions, text="Results:").grid(row=0, column=3, sticky="e")
        ttk.Label(actions, textvariable=self.count_var, font=("Segoe UI", 10, "bold")).grid(
            row=0, column=4, sticky="e", padx=(4, 0)
        )

        table_frame = ttk.Frame(self.root, padding=(12, 0, 12, 0))
        table_frame.grid(row=1, column=0, sticky="nsew")
        table_frame.columnconfigure(0, weight=1)
        table_frame.rowconfigure(0, weight=1)
        self.results = ttk.Treeview(
            table_frame, columns=[key for key, _label, _width in _RESULT_COLUMNS], show="headings"
        )
        for key, label, width in _RESULT_COLUMNS:
            self.results.heading(key, text=label)
            self.results.column(key, width=width, anchor="w")
        self.results.grid(row=0, column=0, sticky="nsew")
        scrollbar = ttk.Scrollbar(table_frame, orient="vertical", command=self.results.yview)
        scrollbar.grid(row=0, column=1, sticky="ns")
        self.results.configure(yscrollcommand=scrollbar.set)

        footer = ttk.Frame(self.root, padding="12")
        footer.grid(row=2, column=0, sticky="we")
        footer.columnconfigure(0, weight=1)
        ttk.Label(footer, textvariable=self.status_var, foreground="#555555").grid(row=0, column=0, sticky="w")
        self.version_label = ttk.Label(footer, textvariable=self.version_var, foreground="#555555")
        self.version_label.grid(row=0, column=1, sticky="e")
        self.version_label.bind("<Button-1>", lambda _e: self.on_open_version())

    def _update_status(self, text: str) -> None:
        self.status_var.set(text)

    def _load_initial(self) -> None:
        try:
            self._update_status("Loading data …")
            state = self.controller.load()
        except DataLoadError as exc:
            messagebox.showerror(
                "Loading failed",
                f"Failed to load brewery data. Please check {self.controller.provider.description}.\n\n{exc}",
            )
            self._update_status("Loading failed.")
        else:
            self._update_status(
                f"{state.count_label} breweries loaded, {len(state.renderable):,} on the map."
            )
        self._start_version_lookup()

    def _render_state(self, state: SessionState) -> None:
        self.category_combo["values"] = with_any_option(state.category_options)
        self.country_combo["values"] = with_any_option(state.country_options)
        self.region_combo["values"] = with_any_option(state.region_options)
        self.count_var.set(state.count_label)

        self.results.delete(*self.results.get_children())
        for index, record in enumerate(state.active):
            self.results.insert(
                "",
                "end",
                iid=str(index),
                values=(record.display_name(), record.category, record.city, record.region, record.country),
            )

    def _on_category(self) -> None:
        self.controller.select_category(option_value(self.category_var.get()))

    def _on_country(self) -> None:
        self.controller.select_country(option_value(self.country_var.get()))

    def _on_region(self) -> None:
        self.controller.select_region(option_value(self.region_var.get()))

    def on_reset(self) -> None:
        self.category_var.set(ANY_OPTION)
        self.country_var.set(ANY_OPTION)
        self.region_var.set(ANY_OPTION)
        self.search_var.set("")
        self.controller.reset()
        self._update_status("Filters reset.")

    def on_open_map(self) -> None:
        state = self.controller.state
        try:
            path = export_map(
                state.active,
                self.config.map_output,
                center=self.config.initial_center,
                zoom=self.config.initial_zoom,
            )
        except OSError as exc:
            messagebox.showerror("Map", f"The map could not be written: {exc}")
            return
        webbrowser.open(path.resolve().as_uri())
        self._update_status(f"Map with {len(state.renderable):,} breweries written to {path}.")

    def _start_version_lookup(self) -> None:
        if not self.config.version_lookup_enabled:
            self._apply_version(VersionBadge())
            return
        self._version_generation += 1
        generation = self._version_generation
        results: queue.Queue[VersionBadge] = queue.Queue(maxsize=1)

        def worker() -> None:
            results.put(
                describe_data_version(
                    self.config.github_repo,
                    self.config.data_file_repo_path,
                    timeout=self.config.request_timeout,
                )
            )

        threading.Thread(target=worker, name="data-version", daemon=True).start()
        self._poll_version(generation, results)

    def _poll_version(self, generation: int, results: "queue.Queue[VersionBadge]") -> None:
        try:
            badge = results.get_nowait()
        except queue.Empty:
            self.root.after(100, lambda: self._poll_version(generation, results))
            return
        if generation == self._version_generation:
            self._apply_version(badge)

    def _apply_version(self, badge: VersionBadge) -> None:
        self.version_var.set(badge.text)
        self.version_url = badge.url
        self.version_label.configure(
            cursor="hand2" if badge.url else "",
            foreground="#1a5fb4" if badge.url else "#555555",
        )

    def on_open_version(self) -> None:
        if self.version_url:
            webbrowser.open(self.version_url)


def run_app(config: AppConfig, controller: BrewMapController) -> None:
    root = tk.Tk()
    BrewMapApp(root, controller, config)
    root.mainloop()
