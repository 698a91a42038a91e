"""Tests for the CLI entry point."""

from __future__ import annotations

import builtins
from types import ModuleType

import pytest

import main
from conftest import SAMPLE_CSV


@pytest.fixture(autouse=True)
def _sample_data(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BREWMAP_DATA_SOURCE", "file")
    monkeypatch.setenv("BREWMAP_DATA_PATH", str(SAMPLE_CSV))


def test_main_exits_with_helpful_message(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure a helpful error is shown when the Tk UI cannot be imported."""

    original_import = builtins.__import__

    def fake_import(name, globals=None, locals=None, fromlist=(), level=0):  # type: ignore[override]
        if name == "brewmap.ui":
            raise ImportError("DISPLAY is required")
        return original_import(name, globals, locals, fromlist, level)

    monkeypatch.setattr(builtins, "__import__", fake_import)

    with pytest.raises(SystemExit) as excinfo:
        main.main([])

    assert "graphical environment" in str(excinfo.value)


def test_main_exits_when_tkinter_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    """The UI should surface a friendly message when Tk initialisation fails."""

    dummy_module = ModuleType("brewmap.ui")

    def fake_run_app(config, controller):  # type: ignore[no-untyped-def]
        raise main.TkinterError("no display")

    dummy_module.run_app = fake_run_app  # type: ignore[attr-defined]

    original_import = builtins.__import__

    def fake_import(name, globals=None, locals=None, fromlist=(), level=0):  # type: ignore[override]
        if name == "brewmap.ui":
            return dummy_module
        return original_import(name, globals, locals, fromlist, level)

    monkeypatch.setattr(builtins, "__import__", fake_import)

    with pytest.raises(SystemExit) as excinfo:
        main.main([])

    assert "graphical environment" in str(excinfo.value)


def test_main_export_writes_filtered_map(tmp_path, capsys) -> None:
    output = tmp_path / "map.html"
    main.main(["--export", str(output), "--country", "Canada", "--query", "montreal"])
    assert output.exists()
    assert "1 breweries matched, 1 mapped" in capsys.readouterr().out


def test_main_export_reports_load_failure(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BREWMAP_DATA_PATH", str(tmp_path / "missing.csv"))
    with pytest.raises(SystemExit) as excinfo:
        main.main(["--export", str(tmp_path / "map.html")])
    assert "Failed to load brewery data" in str(excinfo.value)
