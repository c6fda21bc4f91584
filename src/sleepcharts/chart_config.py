"""
Chart config persistence for sleepcharts (platformdirs + JSON).

Persisted items:
- csv_path: dataset to load at startup
- efficiency_scale: how the loader reads "Sleep efficiency"
- chart_options: list of ChartOptions dicts

Loading never fails: a missing or unusable file, or one written with another
SCHEMA_VERSION, gives the defaults. Unknown keys are ignored with a warning.
The file is only written by an explicit save().
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from sleepcharts.chart_state import ChartOptions, ChartType, default_chart_options, find_options
from sleepcharts.data_loader import EFFICIENCY_SCALES
from sleepcharts.utils.logging import get_logger

logger = get_logger(__name__)

# Increment when you make a breaking change to the on-disk JSON schema.
SCHEMA_VERSION: int = 1

DEFAULT_CSV_PATH = "data/Sleep_Efficiency.csv"


@dataclass
class ChartConfigData:
    """
    JSON-serializable config payload.

    Keep fields JSON-friendly: primitives, lists, dicts.
    """
    schema_version: int = SCHEMA_VERSION
    csv_path: str = DEFAULT_CSV_PATH
    efficiency_scale: str = "auto"
    chart_options: list[Dict[str, Any]] = field(default_factory=list)

    def to_json_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "schema_version": self.schema_version,
            "csv_path": self.csv_path,
            "efficiency_scale": self.efficiency_scale,
            "chart_options": self.chart_options,
        }

    @classmethod
    def from_json_dict(cls, d: Dict[str, Any]) -> "ChartConfigData":
        """
        Tolerant loader:
        - ignores unknown keys
        - tolerates partially missing values
        """
        schema_version = int(d.get("schema_version", -1))
        csv_path = str(d.get("csv_path", DEFAULT_CSV_PATH))

        efficiency_scale = str(d.get("efficiency_scale", "auto"))
        if efficiency_scale not in EFFICIENCY_SCALES:
            logger.warning(f"Unknown efficiency_scale {efficiency_scale!r}, using 'auto'")
            efficiency_scale = "auto"

        chart_options: list[Dict[str, Any]] = []
        raw = d.get("chart_options", [])
        if isinstance(raw, list):
            chart_options = [c for c in raw if isinstance(c, dict)]
        else:
            logger.warning("chart_options is not a list, using empty list")

        known_keys = {"schema_version", "csv_path", "efficiency_scale", "chart_options"}
        for key in d.keys():
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in chart config, ignoring")

        return cls(
            schema_version=schema_version,
            csv_path=csv_path,
            efficiency_scale=efficiency_scale,
            chart_options=chart_options,
        )


class ChartConfig:
    """
    Manager for loading/saving ChartConfigData to disk.
    """

    def __init__(self, *, path: Path, data: Optional[ChartConfigData] = None):
        self.path = path
        self.data = data if data is not None else ChartConfigData()

    # -----------------------------
    # Construction / persistence
    # -----------------------------
    @staticmethod
    def default_config_path(
        app_name: str = "sleepcharts",
        filename: str = "chart_config.json",
        app_author: str | None = None,
    ) -> Path:
        """
        Determine OS-appropriate per-user config path.

        macOS:   ~/Library/Application Support/sleepcharts/chart_config.json
        Linux:   ~/.config/sleepcharts/chart_config.json
        Windows: %APPDATA%\\sleepcharts\\chart_config.json
        """
        d = Path(user_config_dir(app_name, app_author))
        d.mkdir(parents=True, exist_ok=True)
        return d / filename

    @classmethod
    def load(
        cls,
        *,
        config_path: Optional[Path] = None,
        app_name: str = "sleepcharts",
        filename: str = "chart_config.json",
        app_author: str | None = None,
    ) -> "ChartConfig":
        """
        Read the config at config_path (default: default_config_path()).

        Any file that cannot be used falls back to ChartConfigData() with a
        warning: missing, unreadable, not JSON, not a JSON object, or written
        with a different SCHEMA_VERSION. Nothing is written here.
        """
        path = config_path or cls.default_config_path(app_name=app_name, filename=filename, app_author=app_author)
        data = cls._read(path)
        if data is not None and data.schema_version != SCHEMA_VERSION:
            logger.warning(
                f"Chart config {path} has schema_version={data.schema_version}, "
                f"expected {SCHEMA_VERSION}, using defaults"
            )
            data = None
        return cls(path=path, data=data)

    @staticmethod
    def _read(path: Path) -> Optional[ChartConfigData]:
        if not path.exists():
            logger.debug(f"No chart config at {path}, using defaults")
            return None
        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning(f"Chart config {path} is not valid JSON ({e}), using defaults")
            return None
        except OSError as e:
            logger.warning(f"Could not read chart config {path} ({e}), using defaults")
            return None
        if not isinstance(parsed, dict):
            logger.warning(f"Chart config {path} is not a JSON object, using defaults")
            return None
        try:
            return ChartConfigData.from_json_dict(parsed)
        except (TypeError, ValueError) as e:
            logger.warning(f"Chart config {path} has invalid values ({e}), using defaults")
            return None

    def save(self) -> None:
        """Write the config as indented JSON, creating the parent directory."""
        payload = json.dumps(self.data.to_json_dict(), indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not write chart config {self.path}: {e}")
            raise
        logger.info(f"Saved chart config to {self.path}")

    def get_csv_path(self) -> Path:
        return Path(self.data.csv_path)

    def set_csv_path(self, csv_path: str | Path) -> None:
        self.data.csv_path = str(csv_path)

    def get_chart_options(self) -> list[ChartOptions]:
        """One ChartOptions per ChartType, in enum order.

        Stored options that fail to deserialize are logged and replaced by defaults.
        """
        stored: list[ChartOptions] = []
        for opts_dict in self.data.chart_options:
            try:
                stored.append(ChartOptions.from_dict(opts_dict))
            except (ValueError, TypeError) as e:
                logger.warning(f"Error deserializing ChartOptions from config: {e}")

        result = []
        for chart_type in ChartType:
            opts = find_options(stored, chart_type)
            result.append(opts if opts is not None else default_chart_options(chart_type))
        return result

    def set_chart_options(self, options: list[ChartOptions]) -> None:
        self.data.chart_options = [o.to_dict() for o in options]
