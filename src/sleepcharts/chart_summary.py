"""Per-chart summary records and tables.

Each chart draws a fixed reduction of the sleep records:

  scatter -> mean sleep efficiency per (age, gender)
  bar     -> mean sleep efficiency and mean deep sleep per alcohol level
  box     -> sleep duration quartiles/fences/outliers per age group

The functions here compute those reductions (via sleepcharts.aggregator) in
display order. FigureGenerator draws from them; build_summary() turns them into
a pandas table for inspection or copy/paste. Nothing here depends on Plotly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import pandas as pd

from sleepcharts.aggregator import (
    GroupMean,
    GroupQuantiles,
    age_category_order,
    bin_age_category,
    bin_decile,
    group_by_mean,
    group_by_quantiles,
)
from sleepcharts.chart_state import ChartOptions, ChartType
from sleepcharts.sleep_record import SleepRecord
from sleepcharts.utils.logging import get_logger

logger = get_logger(__name__)


def _with_age(records: list[SleepRecord]) -> list[SleepRecord]:
    """Records whose age is a number; the rest are dropped with a warning."""
    with_age = [r for r in records if not math.isnan(r.age)]
    if len(with_age) < len(records):
        logger.warning(f"Skipping {len(records) - len(with_age)} record(s) with missing age")
    return with_age


def scatter_means(records: list[SleepRecord]) -> list[GroupMean]:
    """Mean sleep efficiency per (age, gender), sorted by age then gender.

    Records with a missing age are left out.
    """
    means = group_by_mean(
        _with_age(records),
        key_fn=lambda r: (r.age, r.gender),
        value_fn=lambda r: r.sleep_efficiency,
    )
    return sorted(means, key=lambda m: (m.key[0], m.key[1]))


def alcohol_means(records: list[SleepRecord]) -> dict[str, list[GroupMean]]:
    """Mean sleep efficiency and mean deep sleep per alcohol level (ascending)."""
    def _by_level(means: list[GroupMean]) -> list[GroupMean]:
        return sorted(means, key=lambda m: m.key)

    return {
        "sleep_efficiency": _by_level(group_by_mean(
            records,
            key_fn=lambda r: r.alcohol_consumption,
            value_fn=lambda r: r.sleep_efficiency,
        )),
        "deep_sleep": _by_level(group_by_mean(
            records,
            key_fn=lambda r: r.alcohol_consumption,
            value_fn=lambda r: r.deep_sleep,
        )),
    }


def decile_label(lower: int) -> str:
    """Axis label for a decile bin, e.g. 20 -> '20-29'."""
    return f"{lower}-{lower + 9}"


def age_quantiles(records: list[SleepRecord], age_grouping: str = "decile") -> list[GroupQuantiles]:
    """Sleep duration box statistics per age group, in ascending age order.

    age_grouping "decile" keys groups by bin_decile (int); "category" keys them
    by the AGE_CATEGORIES label. Records without a valid age group are left out.
    """
    with_age = _with_age(records)

    if age_grouping == "category":
        labelled = [r for r in with_age if bin_age_category(r) is not None]
        if len(labelled) < len(with_age):
            logger.debug(f"{len(with_age) - len(labelled)} record(s) fall outside every age category")
        stats = group_by_quantiles(labelled, bin_age_category, lambda r: r.sleep_duration)
        order = {label: i for i, label in enumerate(age_category_order())}
        return sorted(stats, key=lambda s: order[s.key])

    if age_grouping != "decile":
        raise ValueError(f"Unknown age_grouping {age_grouping!r}")
    stats = group_by_quantiles(with_age, bin_decile, lambda r: r.sleep_duration)
    return sorted(stats, key=lambda s: s.key)


def format_key(value: Any) -> Any:
    """Whole-number floats as int (2.0 -> 2) so tables and axis labels stay tidy."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass
class ChartSummary:
    """What a chart plots, as a table.

    Attributes:
        params: ChartOptions as dict (options.to_dict()).
        summary_table: One row per group; key column(s) followed by statistics.
    """
    params: dict[str, Any]
    summary_table: pd.DataFrame


def build_summary(records: list[SleepRecord], options: ChartOptions) -> ChartSummary:
    """Summary table of the groups drawn by the chart described by options."""
    if options.chart_type == ChartType.SCATTER:
        rows = [
            {"age": format_key(m.key[0]), "gender": m.key[1], "sleep_efficiency_mean": m.mean}
            for m in scatter_means(records)
        ]
        columns = ["age", "gender", "sleep_efficiency_mean"]
    elif options.chart_type == ChartType.BAR:
        means = alcohol_means(records)
        deep = {m.key: m.mean for m in means["deep_sleep"]}
        rows = [
            {
                "alcohol_consumption": format_key(m.key),
                "sleep_efficiency_mean": m.mean,
                "deep_sleep_mean": deep.get(m.key, float("nan")),
            }
            for m in means["sleep_efficiency"]
        ]
        columns = ["alcohol_consumption", "sleep_efficiency_mean", "deep_sleep_mean"]
    else:
        rows = []
        for s in age_quantiles(records, options.age_grouping):
            label = decile_label(s.key) if options.age_grouping == "decile" else s.key
            rows.append({
                "age_group": label,
                "q1": s.q1,
                "median": s.median,
                "q3": s.q3,
                "iqr": s.iqr,
                "min": s.min,
                "max": s.max,
                "n_outliers": len(s.outliers),
            })
        columns = ["age_group", "q1", "median", "q3", "iqr", "min", "max", "n_outliers"]

    table = pd.DataFrame(rows, columns=columns)
    return ChartSummary(params=options.to_dict(), summary_table=table)


def format_summary_tsv(summary: ChartSummary, float_format: str = "{:.2f}") -> str:
    """Tab-separated text of the summary table (header row first).

    Returns "(none)" when the table has no rows.
    """
    table = summary.summary_table
    if table.empty:
        return "(none)"

    def _cell(v: Any) -> str:
        if isinstance(v, float):
            return "" if math.isnan(v) else float_format.format(v)
        return str(v)

    lines = ["\t".join(str(c) for c in table.columns)]
    for row in table.itertuples(index=False):
        lines.append("\t".join(_cell(v) for v in row))
    return "\n".join(lines)
