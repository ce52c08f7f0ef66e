"""
Chart Settings - Data Models
=============================
Pydantic models for chart styles, colours and board configuration.

These models validate everything read from YAML before a widget is built.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator


_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class ChartStyle(int, Enum):
    """How strip chart samples are drawn."""
    LINE = 0
    SOLID = 1

    @classmethod
    def parse(cls, value: Union["ChartStyle", int, str]) -> "ChartStyle":
        """
        Resolve a style from an enum member, its integer value or its name.

        Raises:
            ValueError: If the value names no style
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown chart style: {value!r}") from None
        if isinstance(value, bool):
            raise ValueError(f"Unknown chart style: {value!r}")
        return cls(value)


class ChartKind(str, Enum):
    """Supported widget types."""
    SPARKLINE = "sparkline"
    STRIP = "strip"
    STACKED = "stacked"


# =============================================================================
# COLOURS
# =============================================================================

class ChartColors(BaseModel):
    """
    Colours used by a chart.

    ``secondary`` is only drawn by the stacked strip chart.
    """
    background: str = Field("#0000ff", description="Panel fill")
    foreground: str = Field("#ff0000", description="First data series")
    secondary: str = Field("#ffff00", description="Second data series")

    @field_validator("background", "foreground", "secondary")
    @classmethod
    def check_hex(cls, v: str) -> str:
        if not _HEX_COLOR.match(v):
            raise ValueError(f"Colour must look like #rrggbb, got {v!r}")
        return v.lower()


# =============================================================================
# CONFIGURATION MODELS
# =============================================================================

class ChartConfig(BaseModel):
    """Configuration for a single chart on the board."""
    name: str = Field(..., min_length=1, description="Chart label, also the CSV column")
    kind: ChartKind = ChartKind.STRIP
    width: int = Field(80, ge=1, description="Preferred width, also the sample capacity")
    height: int = Field(80, ge=1)
    style: ChartStyle = ChartStyle.LINE
    fixed_max: Optional[float] = Field(None, gt=0, description="Pinned scale; autoscale when unset")
    colors: ChartColors = Field(default_factory=ChartColors)

    @field_validator("style", mode="before")
    @classmethod
    def parse_style(cls, v):  # type: ignore[no-untyped-def]
        return ChartStyle.parse(v)


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    log_dir: str = "logs"

    @field_validator("level")
    @classmethod
    def check_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v!r}")
        return level


def _default_charts() -> List[ChartConfig]:
    return [
        ChartConfig(name="cpu", kind=ChartKind.STRIP, style=ChartStyle.SOLID),
        ChartConfig(name="load", kind=ChartKind.SPARKLINE),
        ChartConfig(name="net", kind=ChartKind.STACKED, style=ChartStyle.SOLID),
    ]


class BoardConfig(BaseModel):
    """
    Top-level configuration: a grid of charts rendered into one snapshot.
    """
    title: str = "Strip Charts"
    columns: int = Field(3, ge=1)
    dpi: int = Field(150, ge=10)
    charts: List[ChartConfig] = Field(default_factory=_default_charts)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def check_unique_names(self) -> "BoardConfig":
        names = [chart.name for chart in self.charts]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate chart names: {', '.join(duplicates)}")
        return self
