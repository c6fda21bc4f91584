"""
Logging utilities for the sleepcharts package.

Library code only asks for a logger; applications and scripts decide where
the output goes.

1. **Library modules never call configure_logging()** - they use get_logger(__name__).
2. **The app and standalone scripts call configure_logging()** to get console output.
3. When sleepcharts is imported by a host application that configured logging,
   all sleepcharts logs go to that application's handlers.

sleepcharts does NOT write any log files.

Example Usage
-------------
In library code (aggregator.py, figure_generator.py, etc.):
    ```python
    from sleepcharts.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.info("loaded %d records", n)
    ```

In the app or a script:
    ```python
    from sleepcharts.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "sleepcharts"
LOG_LEVEL_ENV = "SLEEPCHARTS_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the sleepcharts logger only (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to the SLEEPCHARTS_LOG_LEVEL
        env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to DEFAULT_FMT.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        If True, remove existing handlers before adding a new one. If False,
        do nothing when a stderr StreamHandler is already attached.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    If name is None, returns the 'sleepcharts' package logger.
    """
    if name is None:
        name = LOGGER_NAME
    return logging.getLogger(name)
