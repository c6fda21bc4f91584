"""Shared pytest configuration and fixtures."""
from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import pytest


def pytest_configure() -> None:
    # Ensure `src/` is importable when running tests from the repo root.
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


def _make_record(**overrides):
    """SleepRecord with neutral defaults; override any field by keyword."""
    from sleepcharts.sleep_record import SleepRecord

    fields = dict(
        id=1,
        age=30.0,
        gender="Male",
        sleep_efficiency=80.0,
        rem_sleep=20.0,
        deep_sleep=50.0,
        light_sleep=30.0,
        caffeine_consumption=0.0,
        alcohol_consumption=0.0,
        smoking_status=False,
        exercise_frequency=0.0,
        sleep_duration=7.0,
    )
    fields.update(overrides)
    return SleepRecord(**fields)


@pytest.fixture
def make_record():
    """Factory fixture: make_record(age=40, ...) -> SleepRecord."""
    return _make_record


@pytest.fixture
def sample_records():
    """Eight subjects across three decades, two genders and three alcohol levels."""
    return [
        _make_record(id=1, age=23, gender="Male", sleep_efficiency=90.0, deep_sleep=60.0,
                     alcohol_consumption=0, sleep_duration=7.0),
        _make_record(id=2, age=23, gender="Female", sleep_efficiency=80.0, deep_sleep=50.0,
                     alcohol_consumption=1, sleep_duration=8.0),
        _make_record(id=3, age=27, gender="Male", sleep_efficiency=70.0, deep_sleep=40.0,
                     alcohol_consumption=0, sleep_duration=6.0),
        _make_record(id=4, age=35, gender="Female", sleep_efficiency=60.0, deep_sleep=30.0,
                     alcohol_consumption=3, sleep_duration=7.5),
        _make_record(id=5, age=38, gender="Male", sleep_efficiency=85.0, deep_sleep=55.0,
                     alcohol_consumption=1, sleep_duration=7.0),
        _make_record(id=6, age=41, gender="Female", sleep_efficiency=75.0, deep_sleep=45.0,
                     alcohol_consumption=3, sleep_duration=9.0),
        _make_record(id=7, age=23, gender="Male", sleep_efficiency=70.0, deep_sleep=20.0,
                     alcohol_consumption=0, sleep_duration=5.0),
        _make_record(id=8, age=45, gender="Female", sleep_efficiency=65.0, deep_sleep=35.0,
                     alcohol_consumption=0, sleep_duration=8.0),
    ]


@pytest.fixture
def raw_sleep_df():
    """CSV-shaped dataframe as it comes out of pd.read_csv (fractional efficiency)."""
    return pd.DataFrame({
        "ID": [1, 2, 3],
        "Age": [65, 69, 40],
        "Gender": ["Female", "Male", "Female"],
        "Bedtime": ["2021-03-06 01:00:00"] * 3,
        "Wakeup time": ["2021-03-06 07:00:00"] * 3,
        "Sleep duration": [6.0, 7.0, None],
        "Sleep efficiency": [0.88, 0.66, 0.895],
        "REM sleep percentage": [18, 19, 20],
        "Deep sleep percentage": [70, 28, 70],
        "Light sleep percentage": [12, 53, 10],
        "Awakenings": [0.0, 3.0, 1.0],
        "Caffeine consumption": [0.0, None, 0.0],
        "Alcohol consumption": [0.0, 3.0, None],
        "Smoking status": ["Yes", "Yes", "No"],
        "Exercise frequency": [3.0, 3.0, None],
    })


@pytest.fixture
def sleep_csv(tmp_path, raw_sleep_df):
    """raw_sleep_df written to a CSV file; returns its path."""
    path = tmp_path / "Sleep_Efficiency.csv"
    raw_sleep_df.to_csv(path, index=False)
    return path
