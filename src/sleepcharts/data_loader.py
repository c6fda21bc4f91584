"""CSV loading for the sleep efficiency dataset.

Reads the CSV with pandas, coerces every column to its SleepRecord type and
returns a list of frozen records. Coercion rules:

- numeric columns go through pd.to_numeric(errors="coerce");
- caffeine, alcohol, exercise and sleep duration default to 0 when missing;
- other numeric columns stay NaN when missing;
- "Smoking status" is True only for "Yes";
- "Sleep efficiency" is stored as a percentage (see efficiency_scale).
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import pandas as pd

from sleepcharts.sleep_record import CSV_COLUMNS, SleepRecord
from sleepcharts.utils.logging import get_logger

logger = get_logger(__name__)

EFFICIENCY_SCALES = ("auto", "fraction", "percent")

# Columns whose missing values become 0 instead of NaN.
_ZERO_FILL_COLUMNS = [
    "Caffeine consumption",
    "Alcohol consumption",
    "Exercise frequency",
    "Sleep duration",
]

_NAN_NUMERIC_COLUMNS = [
    "Age",
    "Sleep efficiency",
    "REM sleep percentage",
    "Deep sleep percentage",
    "Light sleep percentage",
]


def _efficiency_is_fraction(values: pd.Series, efficiency_scale: str) -> bool:
    if efficiency_scale not in EFFICIENCY_SCALES:
        raise ValueError(
            f"efficiency_scale must be one of {EFFICIENCY_SCALES}, got {efficiency_scale!r}"
        )
    if efficiency_scale == "fraction":
        return True
    if efficiency_scale == "percent":
        return False
    present = values.dropna()
    return len(present) > 0 and bool((present <= 1.0).all())


def normalize_frame(df: pd.DataFrame, *, efficiency_scale: str = "auto") -> pd.DataFrame:
    """Return a copy of df with typed columns renamed to SleepRecord field names.

    Raises:
        ValueError: If required columns are missing or efficiency_scale is unknown.
    """
    missing = [c for c in CSV_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing required column(s): {', '.join(missing)}")

    out = df[list(CSV_COLUMNS)].copy()
    for col in _NAN_NUMERIC_COLUMNS:
        out[col] = pd.to_numeric(out[col], errors="coerce")
    for col in _ZERO_FILL_COLUMNS:
        out[col] = pd.to_numeric(out[col], errors="coerce").fillna(0)
    out["ID"] = pd.to_numeric(out["ID"], errors="coerce")
    out["Gender"] = out["Gender"].fillna("").astype(str)
    out["Smoking status"] = out["Smoking status"].astype(str).str.strip() == "Yes"

    if _efficiency_is_fraction(out["Sleep efficiency"], efficiency_scale):
        out["Sleep efficiency"] = (out["Sleep efficiency"] * 100).round(2)

    return out.rename(columns=CSV_COLUMNS)


def records_from_frame(df: pd.DataFrame, *, efficiency_scale: str = "auto") -> list[SleepRecord]:
    """Build SleepRecords from a raw (CSV-shaped) dataframe."""
    typed = normalize_frame(df, efficiency_scale=efficiency_scale)
    records = []
    for row in typed.itertuples(index=False):
        rid = row.id
        records.append(SleepRecord(
            id=int(rid) if pd.notna(rid) else -1,
            age=float(row.age),
            gender=row.gender,
            sleep_efficiency=float(row.sleep_efficiency),
            rem_sleep=float(row.rem_sleep),
            deep_sleep=float(row.deep_sleep),
            light_sleep=float(row.light_sleep),
            caffeine_consumption=float(row.caffeine_consumption),
            alcohol_consumption=float(row.alcohol_consumption),
            smoking_status=bool(row.smoking_status),
            exercise_frequency=float(row.exercise_frequency),
            sleep_duration=float(row.sleep_duration),
        ))
    return records


def load_sleep_csv(
    path: Union[str, Path],
    *,
    efficiency_scale: str = "auto",
) -> list[SleepRecord]:
    """Load the sleep efficiency CSV into SleepRecords.

    Args:
        path: CSV file path.
        efficiency_scale: "fraction" multiplies sleep efficiency by 100,
            "percent" keeps it, "auto" picks "fraction" when every value is <= 1.

    Raises:
        FileNotFoundError: If path does not exist.
        ValueError: If required columns are missing.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Sleep data CSV not found: {path}")
    df = pd.read_csv(path)
    records = records_from_frame(df, efficiency_scale=efficiency_scale)
    logger.info(f"Loaded {len(records)} sleep records from {path}")
    return records


def records_to_frame(records: list[SleepRecord]) -> pd.DataFrame:
    """Records as a dataframe with one column per SleepRecord field."""
    if not records:
        return pd.DataFrame(columns=list(CSV_COLUMNS.values()))
    return pd.DataFrame([r.to_dict() for r in records])

