"""Unit tests for CSV loading and type coercion."""

from __future__ import annotations

import math

import pandas as pd
import pytest

from sleepcharts.data_loader import (
    load_sleep_csv,
    normalize_frame,
    records_from_frame,
    records_to_frame,
)
from sleepcharts.sleep_record import CSV_COLUMNS, SleepRecord


def test_load_sleep_csv_returns_typed_records(sleep_csv):
    records = load_sleep_csv(sleep_csv)
    assert len(records) == 3
    assert all(isinstance(r, SleepRecord) for r in records)
    first = records[0]
    assert first.id == 1
    assert first.age == 65.0
    assert first.gender == "Female"
    assert first.rem_sleep == 18.0
    assert first.deep_sleep == 70.0
    assert first.light_sleep == 12.0


def test_load_sleep_csv_auto_scales_fractional_efficiency(sleep_csv):
    records = load_sleep_csv(sleep_csv)
    assert [r.sleep_efficiency for r in records] == [88.0, 66.0, 89.5]


def test_percent_scale_keeps_values(raw_sleep_df):
    records = records_from_frame(raw_sleep_df, efficiency_scale="percent")
    assert records[0].sleep_efficiency == pytest.approx(0.88)


def test_auto_scale_keeps_percentages(raw_sleep_df):
    raw_sleep_df["Sleep efficiency"] = [88.0, 66.0, 89.5]
    records = records_from_frame(raw_sleep_df)
    assert [r.sleep_efficiency for r in records] == [88.0, 66.0, 89.5]


def test_fraction_scale_rounds_to_two_decimals(raw_sleep_df):
    raw_sleep_df["Sleep efficiency"] = [0.12344, 0.5, 0.999]
    records = records_from_frame(raw_sleep_df, efficiency_scale="fraction")
    assert [r.sleep_efficiency for r in records] == [12.34, 50.0, 99.9]


def test_unknown_efficiency_scale_raises(raw_sleep_df):
    with pytest.raises(ValueError) as exc_info:
        records_from_frame(raw_sleep_df, efficiency_scale="ratio")
    assert "efficiency_scale" in str(exc_info.value)


def test_missing_consumption_values_default_to_zero(sleep_csv):
    records = load_sleep_csv(sleep_csv)
    assert records[1].caffeine_consumption == 0.0
    assert records[2].alcohol_consumption == 0.0
    assert records[2].exercise_frequency == 0.0
    assert records[2].sleep_duration == 0.0
    assert records[1].alcohol_consumption == 3.0


def test_missing_percentages_stay_nan(raw_sleep_df):
    raw_sleep_df["Deep sleep percentage"] = [70, None, "n/a"]
    records = records_from_frame(raw_sleep_df)
    assert records[0].deep_sleep == 70.0
    assert math.isnan(records[1].deep_sleep)
    assert math.isnan(records[2].deep_sleep)


def test_smoking_status_is_yes_only(sleep_csv):
    records = load_sleep_csv(sleep_csv)
    assert [r.smoking_status for r in records] == [True, True, False]


def test_missing_column_raises(raw_sleep_df):
    df = raw_sleep_df.drop(columns=["Alcohol consumption", "Gender"])
    with pytest.raises(ValueError) as exc_info:
        records_from_frame(df)
    assert "Alcohol consumption" in str(exc_info.value)
    assert "Gender" in str(exc_info.value)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_sleep_csv(tmp_path / "nope.csv")


def test_normalize_frame_renames_to_record_fields(raw_sleep_df):
    typed = normalize_frame(raw_sleep_df)
    assert list(typed.columns) == list(CSV_COLUMNS.values())
    assert "Bedtime" not in typed.columns


def test_records_are_frozen(sleep_csv):
    record = load_sleep_csv(sleep_csv)[0]
    with pytest.raises(AttributeError):
        record.age = 10.0


def test_records_to_frame(sleep_csv):
    records = load_sleep_csv(sleep_csv)
    df = records_to_frame(records)
    assert len(df) == 3
    assert df["sleep_efficiency"].tolist() == [88.0, 66.0, 89.5]


def test_records_to_frame_empty():
    df = records_to_frame([])
    assert isinstance(df, pd.DataFrame)
    assert df.empty
    assert list(df.columns) == list(CSV_COLUMNS.values())
