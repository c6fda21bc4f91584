"""
sleepcharts: exploratory charts for a sleep-study dataset.

This package provides:
- load_sleep_csv: CSV -> typed SleepRecord list
- aggregator: group-by means, R-7 quartiles and 1.5 x IQR outliers
- FigureGenerator: Plotly scatter / bar / box figures from the aggregates
- A NiceGUI app (sleepcharts.app.sleep_charts_app) showing the charts

For logging configuration in standalone scripts:
    ```python
    from sleepcharts.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from sleepcharts.aggregator import (
    GroupMean,
    GroupQuantiles,
    bin_decile,
    group_by_mean,
    group_by_quantiles,
)
from sleepcharts.chart_state import ChartOptions, ChartType
from sleepcharts.data_loader import load_sleep_csv
from sleepcharts.figure_generator import FigureGenerator
from sleepcharts.sleep_record import SleepRecord
from sleepcharts.utils.logging import configure_logging, get_logger

# NullHandler so logs don't reach the root logger until configure_logging()
# (or a host application) sets up real handlers.
_logger = logging.getLogger("sleepcharts")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ChartOptions",
    "ChartType",
    "FigureGenerator",
    "GroupMean",
    "GroupQuantiles",
    "SleepRecord",
    "bin_decile",
    "configure_logging",
    "get_logger",
    "group_by_mean",
    "group_by_quantiles",
    "load_sleep_csv",
]

__version__ = "0.1.0"
