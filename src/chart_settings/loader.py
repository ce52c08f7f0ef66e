"""
Configuration loader for chart boards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from loguru import logger
from pydantic import ValidationError

from .models import BoardConfig


DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "board.yaml"


def load_board_config(config_path: Optional[Path] = None) -> BoardConfig:
    """
    Load board configuration from YAML.

    An explicit path must exist. Without one, ``config/board.yaml`` is used
    if present, otherwise the built-in defaults.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Validated BoardConfig

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If the file content is invalid
    """
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            logger.warning(f"Config file not found: {DEFAULT_CONFIG_PATH}, using defaults")
            return BoardConfig()
        config_path = DEFAULT_CONFIG_PATH

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config {path}: top level must be a mapping")

    try:
        config = BoardConfig(**raw)
    except ValidationError as ve:
        raise ValueError(f"Invalid config {path}: {ve}") from ve

    logger.info(f"Configuration loaded from {path}")
    return config
