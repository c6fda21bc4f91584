"""Group-by statistics over sleep records.

Pure functions that partition a sequence of records by a key and reduce each
group to summary statistics:

  1. group_records() partitions records by key_fn (first-appearance order).
  2. group_by_mean() reduces each group to the mean of value_fn.
  3. group_by_quantiles() reduces each group to box-plot statistics:
     R-7 quartiles, 1.5 x IQR fences and the values outside them.

Nothing here keeps state between calls; every call recomputes from the input.
NaN values propagate into means. Quantiles skip NaN values, so a group whose
values are all NaN has no box statistics.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, Optional, TypeVar

import numpy as np

from sleepcharts.sleep_record import SleepRecord

R = TypeVar("R")

# Multiplier on the interquartile range for the outlier fences.
IQR_FENCE_FACTOR = 1.5

# Fixed age ranges (inclusive) used to label box plot categories.
AGE_CATEGORIES: list[tuple[str, float, float]] = [
    ("Under 18", 0, 17),
    ("18-24", 18, 24),
    ("25-34", 25, 34),
    ("35-44", 35, 44),
    ("45-54", 45, 54),
    ("55-64", 55, 64),
    ("65+", 65, math.inf),
]


@dataclass(frozen=True)
class GroupMean:
    """Mean of one group."""
    key: Any
    mean: float

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "mean": self.mean}


@dataclass(frozen=True)
class GroupQuantiles:
    """Box plot statistics of one group.

    min and max are the outlier fences (q1 - 1.5*iqr, q3 + 1.5*iqr), not the
    smallest/largest observed values.
    """
    key: Any
    q1: float
    median: float
    q3: float
    min: float
    max: float
    outliers: tuple[float, ...] = ()

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "q1": self.q1,
            "median": self.median,
            "q3": self.q3,
            "min": self.min,
            "max": self.max,
            "outliers": list(self.outliers),
        }


def group_records(
    records: Iterable[R],
    key_fn: Callable[[R], Hashable],
) -> dict[Hashable, list[R]]:
    """Partition records by key_fn(record).

    Every record lands in exactly one group. Groups are ordered by the first
    record that produced their key.
    """
    groups: dict[Hashable, list[R]] = {}
    for record in records:
        groups.setdefault(key_fn(record), []).append(record)
    return groups


def group_by_mean(
    records: Iterable[R],
    key_fn: Callable[[R], Hashable],
    value_fn: Callable[[R], Optional[float]],
) -> list[GroupMean]:
    """Arithmetic mean of value_fn per group.

    None/NaN values make the group mean NaN. An empty input gives an empty list.
    """
    out: list[GroupMean] = []
    for key, members in group_records(records, key_fn).items():
        if not members:
            continue
        values = np.asarray([value_fn(r) for r in members], dtype=float)
        out.append(GroupMean(key=key, mean=float(np.mean(values))))
    return out


def quantile_r7(sorted_values, p: float) -> float:
    """Quantile by linear interpolation between order statistics (R-7).

    The rank is p * (n - 1); values must already be sorted ascending.

    Raises:
        ValueError: If sorted_values is empty or p is outside [0, 1].
    """
    values = np.asarray(sorted_values, dtype=float)
    if values.size == 0:
        raise ValueError("quantile of an empty sequence is undefined")
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"p must be within [0, 1], got {p}")
    rank = p * (values.size - 1)
    lo = int(math.floor(rank))
    hi = min(lo + 1, values.size - 1)
    frac = rank - lo
    return float(values[lo] + (values[hi] - values[lo]) * frac)


def summarize_values(key: Any, values) -> Optional[GroupQuantiles]:
    """Box plot statistics for one group of values, or None if no value is a number.

    NaN values are dropped before the quartiles are taken.
    """
    arr = np.asarray(values, dtype=float)
    sorted_values = np.sort(arr[~np.isnan(arr)])
    if sorted_values.size == 0:
        return None
    q1 = quantile_r7(sorted_values, 0.25)
    median = quantile_r7(sorted_values, 0.5)
    q3 = quantile_r7(sorted_values, 0.75)
    iqr = q3 - q1
    low = q1 - IQR_FENCE_FACTOR * iqr
    high = q3 + IQR_FENCE_FACTOR * iqr
    outliers = sorted_values[(sorted_values < low) | (sorted_values > high)]
    return GroupQuantiles(
        key=key,
        q1=q1,
        median=median,
        q3=q3,
        min=float(low),
        max=float(high),
        outliers=tuple(float(v) for v in outliers),
    )


def group_by_quantiles(
    records: Iterable[R],
    key_fn: Callable[[R], Hashable],
    value_fn: Callable[[R], Optional[float]],
) -> list[GroupQuantiles]:
    """Quartiles, fences and outliers of value_fn per group.

    A group of one value gives q1 == median == q3 == min == max == value and
    no outliers. NaN values are ignored; groups left with no values are skipped.
    """
    out: list[GroupQuantiles] = []
    for key, members in group_records(records, key_fn).items():
        summary = summarize_values(key, [value_fn(r) for r in members])
        if summary is not None:
            out.append(summary)
    return out


def bin_decile(record: SleepRecord) -> int:
    """Age bucket of width 10 labeled by its lower bound, e.g. 23 -> 20.

    Raises ValueError for a NaN age.
    """
    return int(math.floor(record.age / 10)) * 10


def bin_age_category(record: SleepRecord) -> Optional[str]:
    """Label of the AGE_CATEGORIES range containing record.age, or None."""
    age = record.age
    for label, lo, hi in AGE_CATEGORIES:
        if lo <= age <= hi:
            return label
    return None


def age_category_order() -> list[str]:
    """Category labels in ascending age order."""
    return [label for label, _, _ in AGE_CATEGORIES]
