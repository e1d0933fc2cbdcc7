"""
Logging and Warning Configuration Utilities

This module provides centralized control over log output, warning messages
and progress bars for the histogramming driver.

Usage:
    from jetperf.utils.logging_config import setup_logging, suppress_warnings
    logger = setup_logging(verbose=True)
    suppress_warnings()  # Suppress all warnings by default

    # Via environment variable:
    export JETPERF_WARNINGS=on  # Show warnings
    export JETPERF_WARNINGS=off  # Suppress warnings (default)
    export JETPERF_PROGRESS=off  # No progress bars
"""

from __future__ import annotations

import logging
import os
import warnings
from typing import Literal

import numpy as np


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure logging level"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return logging.getLogger("JetPerf")


def suppress_warnings(level: Literal["off", "error", "default", "all"] = "off") -> None:
    """
    Configure warning levels.

    Args:
        level: Warning level to set
            - 'off': Suppress all warnings (default for the driver)
            - 'error': Turn warnings into errors
            - 'default': Show important warnings but filter common noise
            - 'all': Show everything, including numpy floating point warnings

    Environment variable JETPERF_WARNINGS overrides the level parameter.
    """
    env_level = os.environ.get("JETPERF_WARNINGS", "").lower()
    if env_level in ["on", "yes", "true", "1"]:
        level = "all"
    elif env_level in ["off", "no", "false", "0"]:
        level = "off"
    elif env_level in ["error", "default"]:
        level = env_level

    if level == "off":
        warnings.filterwarnings("ignore")
        np.seterr(all="ignore")

    elif level == "error":
        warnings.filterwarnings("error")
        warnings.filterwarnings("ignore", category=DeprecationWarning)
        warnings.filterwarnings("ignore", category=FutureWarning)

    elif level == "default":
        warnings.filterwarnings("default")
        warnings.filterwarnings("ignore", category=DeprecationWarning)
        warnings.filterwarnings("ignore", module="h5py.*")

    elif level == "all":
        warnings.filterwarnings("default")
        np.seterr(all="warn")


def enable_progress_bars() -> bool:
    """
    Check if progress bars should be enabled.

    Can be controlled via JETPERF_PROGRESS environment variable.
    """
    env_progress = os.environ.get("JETPERF_PROGRESS", "on").lower()
    return env_progress in ["on", "yes", "true", "1"]


def get_tqdm_kwargs(desc: str = "", **kwargs) -> dict:
    """
    Get standard kwargs for tqdm progress bars with consistent styling.

    Args:
        desc: Description for the progress bar
        **kwargs: Additional tqdm parameters

    Returns:
        Dictionary of tqdm parameters
    """
    default_kwargs = {
        "desc": desc,
        "unit": "jet",
        "ncols": 80,
        "bar_format": "{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]",
        "disable": not enable_progress_bars(),
    }
    default_kwargs.update(kwargs)
    return default_kwargs
