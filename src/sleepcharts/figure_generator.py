"""Plotly figure generation for the sleep charts.

This module provides the FigureGenerator class, which turns summary records
(see sleepcharts.chart_summary) plus ChartOptions into Plotly figure
dictionaries. Hover templates stand in for tooltips.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import plotly.graph_objects as go

from sleepcharts.aggregator import GroupMean, GroupQuantiles
from sleepcharts.chart_state import ChartOptions, ChartType, default_chart_options_list
from sleepcharts.chart_summary import (
    age_quantiles,
    alcohol_means,
    decile_label,
    format_key,
    scatter_means,
)
from sleepcharts.sleep_record import SleepRecord
from sleepcharts.utils.logging import get_logger

logger = get_logger(__name__)

# Fixed axis domains from the dataset's value ranges.
SCATTER_AGE_RANGE = (0, 70)
PERCENT_RANGE = (0, 100)


class FigureGenerator:
    """Generates Plotly figure dictionaries for the scatter, bar and box charts.

    make_figure() reduces the records for the requested chart and draws the
    result; the _figure_* methods only draw already-computed summaries.
    """

    def make_figure(self, records: list[SleepRecord], options: ChartOptions) -> dict:
        """Generate the Plotly figure dictionary for options.chart_type.

        Args:
            records: Loaded sleep records.
            options: Display options (also selects the chart).

        Returns:
            Plotly figure dictionary.
        """
        logger.info(
            f"FigureGenerator.make_figure: chart_type={options.chart_type.value}, "
            f"records={len(records)}"
        )
        if not records:
            logger.warning(f"No records for {options.chart_type.value} chart, drawing empty figure")

        if options.chart_type == ChartType.SCATTER:
            result = self._figure_scatter(scatter_means(records), options)
        elif options.chart_type == ChartType.BAR:
            means = alcohol_means(records)
            result = self._figure_bar(means["sleep_efficiency"], means["deep_sleep"], options)
        elif options.chart_type == ChartType.BOX:
            stats = age_quantiles(records, options.age_grouping)
            durations = [r.sleep_duration for r in records]
            y_max = float(np.nanmax(durations)) + 1 if durations else 1.0
            result = self._figure_box(stats, options, y_max=y_max)
        else:
            raise ValueError(f"Unknown chart type: {options.chart_type}")

        logger.debug(f"Figure generated: {len(result.get('data', []))} traces")
        return result

    def build_all(
        self,
        records: list[SleepRecord],
        options_list: Optional[list[ChartOptions]] = None,
    ) -> dict[ChartType, dict]:
        """Figures for every chart in options_list (defaults: all three charts)."""
        if options_list is None:
            options_list = default_chart_options_list()
        return {opts.chart_type: self.make_figure(records, opts) for opts in options_list}

    def _base_layout(self, options: ChartOptions) -> dict:
        m = options.margin
        title = options.title
        if options.subtitle:
            title = f"{title}<br><sup>{options.subtitle}</sup>"
        return dict(
            width=options.width,
            height=options.height,
            margin=dict(l=m["left"], r=m["right"], t=m["top"], b=m["bottom"]),
            title=dict(text=title, x=0.5, xanchor="center"),
            showlegend=options.show_legend,
            plot_bgcolor="white",
            uirevision="keep",
        )

    def _figure_scatter(self, means: list[GroupMean], options: ChartOptions) -> dict:
        """Mean sleep efficiency by age, one marker trace per gender.

        Args:
            means: GroupMean records keyed by (age, gender).
            options: Display options.
        """
        by_gender: dict[str, list[GroupMean]] = {}
        for m in means:
            by_gender.setdefault(m.key[1], []).append(m)

        # Configured genders first (legend order), then anything else seen in the data.
        genders = [g for g in options.gender_colors if g in by_gender]
        genders += sorted(g for g in by_gender if g not in options.gender_colors)

        fig = go.Figure()
        for gender in genders:
            points = by_gender[gender]
            fig.add_trace(go.Scatter(
                x=[p.key[0] for p in points],
                y=[p.mean for p in points],
                mode="markers",
                name=gender,
                marker=dict(
                    size=options.point_size,
                    color=options.gender_color(gender),
                    opacity=options.opacity,
                ),
                hovertemplate=(
                    "Age: %{x}<br>"
                    "Sleep Efficiency: %{y:.2f}%<br>"
                    f"Gender: {gender}<extra></extra>"
                ),
            ))

        layout = self._base_layout(options)
        layout.update(
            xaxis=dict(title=options.xaxis_title, range=list(SCATTER_AGE_RANGE), nticks=10, showline=True, linecolor="black"),
            yaxis=dict(title=options.yaxis_title, range=list(PERCENT_RANGE), showline=True, linecolor="black"),
            legend=dict(x=0.01, y=0.99, bordercolor="black", borderwidth=1, bgcolor="white"),
        )
        fig.update_layout(**layout)
        return fig.to_dict()

    def _figure_bar(
        self,
        efficiency: list[GroupMean],
        deep_sleep: list[GroupMean],
        options: ChartOptions,
    ) -> dict:
        """Grouped bars of mean sleep efficiency and mean deep sleep per alcohol level.

        Args:
            efficiency: GroupMean of sleep efficiency keyed by alcohol consumption (sorted).
            deep_sleep: GroupMean of deep sleep keyed by alcohol consumption (sorted).
            options: Display options.
        """
        fig = go.Figure()
        fig.add_trace(go.Bar(
            x=[str(format_key(m.key)) for m in efficiency],
            y=[m.mean for m in efficiency],
            name="Sleep Efficiency",
            marker_color=options.efficiency_color,
            hovertemplate=(
                "Alcohol Consumption: %{x} drinks<br>"
                "Sleep Efficiency: %{y:.2f}%<extra></extra>"
            ),
        ))
        fig.add_trace(go.Bar(
            x=[str(format_key(m.key)) for m in deep_sleep],
            y=[m.mean for m in deep_sleep],
            name="Deep Sleep Percentage",
            marker_color=options.deep_sleep_color,
            hovertemplate=(
                "Alcohol Consumption: %{x} drinks<br>"
                "Deep Sleep Percentage: %{y:.2f}%<extra></extra>"
            ),
        ))

        layout = self._base_layout(options)
        layout.update(
            barmode="group",
            bargap=0.1,
            xaxis=dict(title=options.xaxis_title, type="category", tickangle=-65, showline=True, linecolor="black"),
            yaxis=dict(title=options.yaxis_title, range=list(PERCENT_RANGE), showline=True, linecolor="black"),
            legend=dict(
                x=0.99, y=0.99, xanchor="right",
                bordercolor="black", borderwidth=1, bgcolor="white",
            ),
        )
        fig.update_layout(**layout)
        return fig.to_dict()

    def _figure_box(
        self,
        stats: list[GroupQuantiles],
        options: ChartOptions,
        *,
        y_max: float = 1.0,
    ) -> dict:
        """Box per age group from precomputed quartiles; whiskers end at the 1.5 x IQR fences.

        Args:
            stats: GroupQuantiles of sleep duration, in display order.
            options: Display options (age_grouping selects the axis labels).
            y_max: Upper end of the y axis.
        """
        fig = go.Figure()
        outlier_x: list[str] = []
        outlier_y: list[float] = []

        for s in stats:
            label = decile_label(s.key) if options.age_grouping == "decile" else str(s.key)
            fig.add_trace(go.Box(
                x=[label],
                q1=[s.q1],
                median=[s.median],
                q3=[s.q3],
                lowerfence=[s.min],
                upperfence=[s.max],
                name=label,
                fillcolor=options.box_color,
                line=dict(color="black", width=1),
                boxpoints=False,
                showlegend=False,
                hoveron="boxes",
                hovertemplate=(
                    f"Age Group: {label}<br>"
                    f"Median: {s.median:.2f} hours<br>"
                    f"IQR: {s.iqr:.2f} hours<extra></extra>"
                ),
            ))
            outlier_x.extend([label] * len(s.outliers))
            outlier_y.extend(s.outliers)

        if outlier_y:
            fig.add_trace(go.Scatter(
                x=outlier_x,
                y=outlier_y,
                mode="markers",
                name="Outliers",
                marker=dict(size=4, color=options.outlier_color),
                showlegend=False,
                hovertemplate="Outlier: %{y:.2f} hours<extra></extra>",
            ))

        layout = self._base_layout(options)
        layout.update(
            xaxis=dict(
                title=options.xaxis_title,
                type="category",
                categoryorder="array",
                categoryarray=[t.name for t in fig.data if isinstance(t, go.Box)],
                showline=True,
                linecolor="black",
            ),
            yaxis=dict(title=options.yaxis_title, range=[0, y_max], ticksuffix=" hours", nticks=10, showline=True, linecolor="black"),
            hoverlabel=dict(bgcolor="rgba(0, 0, 0, 0.8)", font=dict(color="white", family="Arial, sans-serif")),
            annotations=[dict(
                text=(
                    "Median: 50th percentile<br>"
                    "IQR: 25th to 75th percentile<br>"
                    "Outliers: &lt; Q1 - 1.5 IQR or &gt; Q3 + 1.5 IQR"
                ),
                xref="paper", yref="paper",
                x=0.99, y=0.99, xanchor="right", yanchor="top",
                align="left",
                showarrow=False,
                bordercolor="black", borderwidth=1, bgcolor="white",
                font=dict(size=12),
            )],
        )
        fig.update_layout(**layout)
        return fig.to_dict()
