"""Header bar for the sleep charts page: app title, loaded dataset, theme toggle."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from nicegui import app, ui

THEME_STORAGE_KEY = "sleepcharts_dark_mode"


def dataset_caption(csv_path: Optional[Path], n_records: Optional[int] = None) -> str:
    """Short text naming the dataset, e.g. 'Sleep_Efficiency.csv (452 records)'."""
    if csv_path is None:
        return "no dataset"
    if n_records is None:
        return csv_path.name
    return f"{csv_path.name} ({n_records} records)"


def build_header(
    title: str = "Sleep Charts",
    *,
    csv_path: Optional[Path] = None,
    n_records: Optional[int] = None,
) -> ui.dark_mode:
    """Build the header row.

    Left: title. Right: dataset caption (full path as tooltip) and a
    dark/light toggle whose state is kept in app.storage.user.

    Returns:
        Dark mode controller for the page.
    """
    dark_mode = ui.dark_mode()
    dark_mode.value = app.storage.user.get(THEME_STORAGE_KEY, False)

    def _theme_icon() -> str:
        return "light_mode" if dark_mode.value else "dark_mode"

    def _toggle_theme() -> None:
        dark_mode.value = not dark_mode.value
        app.storage.user[THEME_STORAGE_KEY] = dark_mode.value
        theme_btn.props(f"icon={_theme_icon()}")

    with ui.header().classes("items-center justify-between").props("dense").style(
        "min-height: 36px; height: 36px; padding: 0 8px;"
    ):
        ui.label(title).classes("!text-lg font-bold italic text-white")

        with ui.row().classes("items-center gap-3"):
            caption = ui.label(dataset_caption(csv_path, n_records)).classes("text-sm text-white")
            if csv_path is not None:
                caption.tooltip(str(csv_path))
            theme_btn = ui.button(icon=_theme_icon(), on_click=_toggle_theme).props(
                "flat round dense text-color=white"
            ).tooltip("Toggle dark / light mode")

    return dark_mode
