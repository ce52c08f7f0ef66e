"""
Chart Settings Package
=======================
Styles, colours and YAML board configuration.
"""

from .models import (
    ChartStyle,
    ChartKind,
    ChartColors,
    ChartConfig,
    LoggingConfig,
    BoardConfig,
)
from .loader import DEFAULT_CONFIG_PATH, load_board_config

__all__ = [
    "ChartStyle",
    "ChartKind",
    "ChartColors",
    "ChartConfig",
    "LoggingConfig",
    "BoardConfig",
    "DEFAULT_CONFIG_PATH",
    "load_board_config",
]
