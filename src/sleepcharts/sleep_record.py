"""Typed sleep-study record.

One SleepRecord per subject row of the sleep efficiency CSV. Records are
frozen; the loader builds them once and every later step only reads them.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

# CSV header -> SleepRecord field
CSV_COLUMNS: dict[str, str] = {
    "ID": "id",
    "Age": "age",
    "Gender": "gender",
    "Sleep efficiency": "sleep_efficiency",
    "REM sleep percentage": "rem_sleep",
    "Deep sleep percentage": "deep_sleep",
    "Light sleep percentage": "light_sleep",
    "Caffeine consumption": "caffeine_consumption",
    "Alcohol consumption": "alcohol_consumption",
    "Smoking status": "smoking_status",
    "Exercise frequency": "exercise_frequency",
    "Sleep duration": "sleep_duration",
}


@dataclass(frozen=True)
class SleepRecord:
    """One subject's measurements.

    Percentages (sleep_efficiency, rem/deep/light sleep) are on a 0-100 scale.
    Missing numeric values are NaN, except the consumption/exercise/duration
    fields which default to 0 at load time.
    """
    id: int
    age: float
    gender: str
    sleep_efficiency: float
    rem_sleep: float
    deep_sleep: float
    light_sleep: float
    caffeine_consumption: float = 0.0
    alcohol_consumption: float = 0.0
    smoking_status: bool = False
    exercise_frequency: float = 0.0
    sleep_duration: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a plain dict keyed by field name."""
        return asdict(self)
