"""Chart display options.

This module defines the ChartType enum and the ChartOptions dataclass that
holds everything the figure generator needs besides the data: dimensions,
margins, titles and colors.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional


class ChartType(Enum):
    """Enumeration of available charts."""
    SCATTER = "scatter"
    BAR = "bar"
    BOX = "box"


AGE_GROUPINGS = ("decile", "category")

DEFAULT_GENDER_COLORS: dict[str, str] = {"Male": "blue", "Female": "pink"}
UNKNOWN_GENDER_COLOR = "gray"


def _default_margin() -> dict[str, int]:
    return {"top": 50, "right": 50, "bottom": 50, "left": 50}


@dataclass
class ChartOptions:
    """Display configuration for a single chart."""
    chart_type: ChartType = ChartType.SCATTER
    width: int = 900
    height: int = 600
    margin: dict[str, int] = field(default_factory=_default_margin)
    title: str = ""
    subtitle: str = ""
    xaxis_title: str = ""
    yaxis_title: str = ""
    gender_colors: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_GENDER_COLORS))
    efficiency_color: str = "steelblue"   # bar: sleep efficiency bars
    deep_sleep_color: str = "darkgreen"   # bar: deep sleep bars
    box_color: str = "#1f77b4"
    outlier_color: str = "red"
    point_size: int = 10                  # scatter marker diameter (px)
    opacity: float = 0.8
    age_grouping: str = "decile"          # box: "decile" or "category"
    show_legend: bool = True

    def gender_color(self, gender: str) -> str:
        return self.gender_colors.get(gender, UNKNOWN_GENDER_COLOR)

    def to_dict(self) -> dict[str, Any]:
        """Serialize ChartOptions to a JSON-friendly dictionary."""
        return {
            "chart_type": self.chart_type.value,
            "width": self.width,
            "height": self.height,
            "margin": dict(self.margin),
            "title": self.title,
            "subtitle": self.subtitle,
            "xaxis_title": self.xaxis_title,
            "yaxis_title": self.yaxis_title,
            "gender_colors": dict(self.gender_colors),
            "efficiency_color": self.efficiency_color,
            "deep_sleep_color": self.deep_sleep_color,
            "box_color": self.box_color,
            "outlier_color": self.outlier_color,
            "point_size": self.point_size,
            "opacity": self.opacity,
            "age_grouping": self.age_grouping,
            "show_legend": self.show_legend,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartOptions":
        """Deserialize ChartOptions; missing keys take the chart type's defaults.

        Raises:
            ValueError: If chart_type or age_grouping is not a known value.
        """
        chart_type = ChartType(data.get("chart_type", ChartType.SCATTER.value))
        base = default_chart_options(chart_type)

        margin = dict(base.margin)
        raw_margin = data.get("margin")
        if isinstance(raw_margin, dict):
            for side in margin:
                if side in raw_margin:
                    margin[side] = int(raw_margin[side])

        gender_colors = data.get("gender_colors")
        if not isinstance(gender_colors, dict):
            gender_colors = base.gender_colors

        age_grouping = str(data.get("age_grouping", base.age_grouping))
        if age_grouping not in AGE_GROUPINGS:
            raise ValueError(f"age_grouping must be one of {AGE_GROUPINGS}, got {age_grouping!r}")

        return cls(
            chart_type=chart_type,
            width=int(data.get("width", base.width)),
            height=int(data.get("height", base.height)),
            margin=margin,
            title=str(data.get("title", base.title)),
            subtitle=str(data.get("subtitle", base.subtitle)),
            xaxis_title=str(data.get("xaxis_title", base.xaxis_title)),
            yaxis_title=str(data.get("yaxis_title", base.yaxis_title)),
            gender_colors={str(k): str(v) for k, v in gender_colors.items()},
            efficiency_color=str(data.get("efficiency_color", base.efficiency_color)),
            deep_sleep_color=str(data.get("deep_sleep_color", base.deep_sleep_color)),
            box_color=str(data.get("box_color", base.box_color)),
            outlier_color=str(data.get("outlier_color", base.outlier_color)),
            point_size=int(data.get("point_size", base.point_size)),
            opacity=float(data.get("opacity", base.opacity)),
            age_grouping=age_grouping,
            show_legend=bool(data.get("show_legend", base.show_legend)),
        )


_SCATTER_DEFAULTS = ChartOptions(
    chart_type=ChartType.SCATTER,
    title="Sleep Efficiency by Age and Gender",
    xaxis_title="Age (Years)",
    yaxis_title="Sleep Efficiency (%)",
)

_BAR_DEFAULTS = ChartOptions(
    chart_type=ChartType.BAR,
    margin={"top": 50, "right": 50, "bottom": 100, "left": 80},
    title="Effect of alcohol consumption on sleep quality",
    xaxis_title="Alcohol Consumption (drinks)",
    yaxis_title="Average Value (%)",
)

_BOX_DEFAULTS = ChartOptions(
    chart_type=ChartType.BOX,
    margin={"top": 100, "right": 50, "bottom": 100, "left": 80},
    title="Sleep Duration Distribution by Age Group",
    subtitle="Insights into sleep patterns across different age groups",
    xaxis_title="Age Group",
    yaxis_title="Sleep Duration",
)

_DEFAULTS: dict[ChartType, ChartOptions] = {
    ChartType.SCATTER: _SCATTER_DEFAULTS,
    ChartType.BAR: _BAR_DEFAULTS,
    ChartType.BOX: _BOX_DEFAULTS,
}


def default_chart_options(chart_type: ChartType, **overrides: Any) -> ChartOptions:
    """Fresh default options for chart_type, with optional field overrides."""
    base = _DEFAULTS[chart_type]
    opts = replace(
        base,
        margin=dict(base.margin),
        gender_colors=dict(base.gender_colors),
    )
    if overrides:
        opts = replace(opts, **overrides)
    return opts


def default_chart_options_list() -> list[ChartOptions]:
    """Default options for every chart, in display order."""
    return [default_chart_options(ct) for ct in ChartType]


def find_options(options_list: list[ChartOptions], chart_type: ChartType) -> Optional[ChartOptions]:
    """First options in options_list for chart_type, or None."""
    for opts in options_list:
        if opts.chart_type == chart_type:
            return opts
    return None
