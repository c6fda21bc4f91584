"""Unit tests for ChartOptions defaults and serialization."""

import pytest

from sleepcharts.chart_state import (
    ChartOptions,
    ChartType,
    default_chart_options,
    default_chart_options_list,
    find_options,
)


def test_default_options_per_chart_type():
    scatter = default_chart_options(ChartType.SCATTER)
    bar = default_chart_options(ChartType.BAR)
    box = default_chart_options(ChartType.BOX)
    assert scatter.title == "Sleep Efficiency by Age and Gender"
    assert bar.margin == {"top": 50, "right": 50, "bottom": 100, "left": 80}
    assert box.subtitle == "Insights into sleep patterns across different age groups"
    assert box.age_grouping == "decile"
    assert (scatter.width, scatter.height) == (900, 600)


def test_default_options_are_independent_copies():
    """Mutating one default instance must not leak into the next."""
    a = default_chart_options(ChartType.SCATTER)
    a.margin["top"] = 999
    a.gender_colors["Other"] = "green"
    b = default_chart_options(ChartType.SCATTER)
    assert b.margin["top"] == 50
    assert "Other" not in b.gender_colors


def test_default_options_overrides():
    opts = default_chart_options(ChartType.BOX, age_grouping="category", width=400)
    assert opts.age_grouping == "category"
    assert opts.width == 400
    assert opts.chart_type == ChartType.BOX


def test_default_options_list_covers_every_chart():
    assert [o.chart_type for o in default_chart_options_list()] == list(ChartType)


def test_gender_color_falls_back_to_gray():
    opts = default_chart_options(ChartType.SCATTER)
    assert opts.gender_color("Male") == "blue"
    assert opts.gender_color("Female") == "pink"
    assert opts.gender_color("Other") == "gray"


def test_to_dict_uses_enum_value():
    d = default_chart_options(ChartType.BAR).to_dict()
    assert d["chart_type"] == "bar"
    assert d["efficiency_color"] == "steelblue"
    assert d["deep_sleep_color"] == "darkgreen"


def test_from_dict_round_trip():
    opts = default_chart_options(
        ChartType.BOX,
        width=700,
        title="Custom",
        age_grouping="category",
        margin={"top": 1, "right": 2, "bottom": 3, "left": 4},
    )
    restored = ChartOptions.from_dict(opts.to_dict())
    assert restored == opts


def test_from_dict_missing_keys_use_chart_defaults():
    restored = ChartOptions.from_dict({"chart_type": "bar", "height": 300})
    assert restored.height == 300
    assert restored.title == "Effect of alcohol consumption on sleep quality"
    assert restored.margin["bottom"] == 100


def test_from_dict_partial_margin():
    restored = ChartOptions.from_dict({"chart_type": "scatter", "margin": {"left": 10}})
    assert restored.margin == {"top": 50, "right": 50, "bottom": 50, "left": 10}


def test_from_dict_unknown_chart_type_raises():
    with pytest.raises(ValueError):
        ChartOptions.from_dict({"chart_type": "pie"})


def test_from_dict_unknown_age_grouping_raises():
    with pytest.raises(ValueError) as exc_info:
        ChartOptions.from_dict({"chart_type": "box", "age_grouping": "quintile"})
    assert "age_grouping" in str(exc_info.value)


def test_find_options():
    options = default_chart_options_list()
    assert find_options(options, ChartType.BAR).chart_type == ChartType.BAR
    assert find_options(options[:1], ChartType.BOX) is None
