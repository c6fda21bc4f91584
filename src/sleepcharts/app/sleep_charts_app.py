"""Sleep charts app: standalone NiceGUI application.

Loads the sleep efficiency CSV once per page visit, aggregates it and shows
the scatter, bar and box charts. Uses @ui.page("/") pattern.

Run:
    python -m sleepcharts.app.sleep_charts_app

Env vars:
    SLEEPCHARTS_GUI_NATIVE: 1/0 (default 0)
    SLEEPCHARTS_GUI_RELOAD: 1/0 (default 0)
    SLEEPCHARTS_CSV: CSV path (default: chart config csv_path)
    HOST: bind host (default 127.0.0.1 native, 0.0.0.0 web)
    PORT: bind port (default find_open_port native, 8080 web)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from multiprocessing import freeze_support
from pathlib import Path
from typing import Optional

from nicegui import ui

from sleepcharts.app.header import build_header
from sleepcharts.chart_config import ChartConfig
from sleepcharts.chart_state import ChartOptions
from sleepcharts.chart_summary import ChartSummary, build_summary
from sleepcharts.data_loader import load_sleep_csv
from sleepcharts.figure_generator import FigureGenerator
from sleepcharts.sleep_record import SleepRecord
from sleepcharts.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

STORAGE_SECRET = "sleepcharts-session-secret"
CSV_ENV = "SLEEPCHARTS_CSV"


def _env_bool(name: str, default: bool) -> bool:
    """Parse env var as bool; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    """Parse env var as int; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def resolve_csv_path(config: ChartConfig) -> Path:
    """SLEEPCHARTS_CSV if set, else the config's csv_path."""
    raw = os.getenv(CSV_ENV)
    if raw:
        return Path(raw)
    return config.get_csv_path()


@dataclass
class ChartPanel:
    """Everything one chart card shows."""
    options: ChartOptions
    figure: dict
    summary: ChartSummary


def build_chart_panels(
    records: list[SleepRecord],
    options_list: list[ChartOptions],
    generator: Optional[FigureGenerator] = None,
) -> list[ChartPanel]:
    """Figure and summary table for every chart, in options_list order."""
    generator = generator or FigureGenerator()
    return [
        ChartPanel(
            options=opts,
            figure=generator.make_figure(records, opts),
            summary=build_summary(records, opts),
        )
        for opts in options_list
    ]


def _build_chart_card(panel: ChartPanel) -> None:
    with ui.card().classes("w-full"):
        ui.plotly(panel.figure).classes("w-full").style(f"height: {panel.options.height}px")
        with ui.expansion("Summary table").classes("w-full"):
            if panel.summary.summary_table.empty:
                ui.label("(none)")
            else:
                ui.table.from_pandas(panel.summary.summary_table).classes("w-full")


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@ui.page("/")
def home() -> None:
    """Home page: header + one card per chart."""
    ui.page_title("Sleep Charts")

    config = ChartConfig.load()
    csv_path = resolve_csv_path(config)
    error: Optional[str] = None
    records: list[SleepRecord] = []
    panels: list[ChartPanel] = []
    try:
        records = load_sleep_csv(csv_path, efficiency_scale=config.data.efficiency_scale)
        panels = build_chart_panels(records, config.get_chart_options())
    except FileNotFoundError:
        logger.error("CSV not found: %s", csv_path)
        error = f"{csv_path} not found."
    except Exception as e:
        logger.exception("Failed to load %s: %s", csv_path, e)
        error = f"Failed to load: {e}"

    build_header(csv_path=csv_path, n_records=None if error else len(records))

    with ui.column().classes("w-full gap-4 p-4"):
        if error:
            ui.label(error).classes("text-negative")
            return
        for panel in panels:
            _build_chart_card(panel)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(*, reload: bool | None = None, native_bool: bool | None = None) -> None:
    """Start the sleep charts application.

    Env vars (used when arg is None):
      - SLEEPCHARTS_GUI_NATIVE: 1/0
      - SLEEPCHARTS_GUI_RELOAD: 1/0
      - HOST: bind host
      - PORT: bind port
    """
    configure_logging()

    native_bool = _env_bool("SLEEPCHARTS_GUI_NATIVE", False) if native_bool is None else native_bool
    reload = _env_bool("SLEEPCHARTS_GUI_RELOAD", False) if reload is None else reload

    from nicegui import native as native_module
    if native_bool:
        port = _env_int("PORT", native_module.find_open_port())
    else:
        port = _env_int("PORT", 8080)

    default_host = "127.0.0.1" if native_bool else "0.0.0.0"
    host = os.getenv("HOST", default_host)

    logger.info(
        "Starting Sleep Charts app: port=%s reload=%s native=%s",
        port,
        reload,
        native_bool,
    )

    run_kwargs: dict = {
        "host": host,
        "port": port,
        "reload": reload,
        "native": native_bool,
        "storage_secret": STORAGE_SECRET,
        "title": "Sleep Charts",
    }
    if native_bool:
        run_kwargs["window_size"] = (1000, 900)
    ui.run(**run_kwargs)


if __name__ in {"__main__", "__mp_main__"}:
    freeze_support()
    main()
