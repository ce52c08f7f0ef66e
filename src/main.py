"""
Strip Chart Toolkit - Application Entry Point
==============================================
Builds the charts listed in a board configuration, feeds them samples and
writes a snapshot image.

Samples come either from a CSV file (one column per chart, named after the
chart; stacked charts also read ``<name>_secondary``) or from a seeded
synthetic generator.

Usage:
    python src/main.py --samples 200 --output board.png
    python src/main.py --config config/board.yaml --input metrics.csv
"""

from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple, Union

import numpy as np
from loguru import logger

# Add src to path for imports
SRC_DIR = Path(__file__).parent
PROJECT_ROOT = SRC_DIR.parent
sys.path.insert(0, str(SRC_DIR))

from chart_settings import BoardConfig, ChartKind, load_board_config
from visualization import ChartBoard


Sample = Union[float, Tuple[float, float]]
SECONDARY_SUFFIX = "_secondary"


class StripChartApplication:
    """
    Main application class.

    Owns the board and the sample sources feeding it.
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[BoardConfig] = None):
        """
        Initialize application.

        Args:
            config: Board configuration (defaults to the built-in board)
        """
        self.config = config or BoardConfig()
        self.board = ChartBoard(self.config)
        self.samples_fed = 0

        logger.info(f"Strip Chart Toolkit v{self.VERSION} initialized")

    def synthetic_samples(self, count: int, seed: int = 0) -> Iterator[Dict[str, Sample]]:
        """
        Generate reproducible demo samples.

        Strip charts get a positive random walk, sparklines a noisy sine
        wave and stacked charts two independent uniform loads.

        Args:
            count: Number of rows to generate
            seed: Random seed
        """
        rng = np.random.default_rng(seed)
        walks = {name: 50.0 for name in self.board.charts}

        for step in range(count):
            row: Dict[str, Sample] = {}
            for chart in self.config.charts:
                if chart.kind == ChartKind.SPARKLINE:
                    row[chart.name] = float(10.0 + 8.0 * np.sin(step / 8.0) + rng.normal(0.0, 0.5))
                elif chart.kind == ChartKind.STACKED:
                    row[chart.name] = (float(rng.uniform(0, 40)), float(rng.uniform(0, 20)))
                else:
                    walks[chart.name] = max(0.0, walks[chart.name] + float(rng.normal(0.0, 5.0)))
                    row[chart.name] = walks[chart.name]
            yield row

    def csv_samples(self, csv_path: Path) -> Iterator[Dict[str, Sample]]:
        """
        Read samples from a CSV file.

        Columns not matching a chart are ignored; empty cells are skipped.

        Raises:
            ValueError: If a cell cannot be parsed as a number
        """
        with open(csv_path, "r", newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for line_no, record in enumerate(reader, start=2):
                row: Dict[str, Sample] = {}
                for chart in self.config.charts:
                    cell = (record.get(chart.name) or "").strip()
                    if not cell:
                        continue
                    try:
                        value = float(cell)
                        if chart.kind == ChartKind.STACKED:
                            second = (record.get(chart.name + SECONDARY_SUFFIX) or "").strip()
                            row[chart.name] = (value, float(second) if second else 0.0)
                        else:
                            row[chart.name] = value
                    except ValueError:
                        raise ValueError(f"{csv_path}:{line_no}: bad value for '{chart.name}'") from None
                yield row

    def feed(self, rows: Iterator[Dict[str, Sample]]) -> int:
        """
        Push rows of samples into the board.

        Returns:
            Number of rows fed
        """
        count = 0
        for row in rows:
            self.board.update(row)
            count += 1
        self.samples_fed += count
        logger.debug(f"Fed {count} rows")
        return count

    def save_snapshot(self, filepath: Path) -> None:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        self.board.save_snapshot(filepath)

    def _print_status(self) -> None:
        """Print current application status."""
        print("\n" + "=" * 60)
        print(f"  Strip Chart Toolkit v{self.VERSION}")
        print("=" * 60)
        for name, chart in self.board.charts.items():
            scale = "auto" if chart.series.autoscale else "fixed"
            print(f"  {name:<16} {len(chart.series):>5} samples  max {chart.series.current_max:10.4g} ({scale})")
        print("=" * 60 + "\n")


def setup_logging(verbose: bool = False, log_dir: Optional[Path] = None, level: str = "INFO") -> None:
    """Configure logging."""
    logger.remove()  # Remove default handler

    level = "DEBUG" if verbose else level

    # Console handler with custom format
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True
    )

    # File handler for debug logs
    log_dir = log_dir or PROJECT_ROOT / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_dir / "stripchart_{time}.log",
        rotation="10 MB",
        retention="7 days",
        level="DEBUG"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Strip Chart Toolkit - render rolling strip charts and sparklines to an image"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to board configuration file"
    )
    parser.add_argument(
        "--input", "-i",
        type=Path,
        default=None,
        help="CSV file with one column per chart (default: synthetic samples)"
    )
    parser.add_argument(
        "--samples", "-n",
        type=int,
        default=120,
        help="Number of synthetic samples to generate"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for synthetic samples"
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=PROJECT_ROOT / "snapshots" / "board.png",
        help="Snapshot image path"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_board_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    setup_logging(args.verbose, Path(config.logging.log_dir), config.logging.level)

    if args.samples < 0:
        logger.error(f"--samples must not be negative, got {args.samples}")
        return 1

    app = StripChartApplication(config)

    try:
        if args.input is not None:
            rows = app.csv_samples(args.input)
        else:
            rows = app.synthetic_samples(args.samples, seed=args.seed)
        app.feed(rows)
        app.save_snapshot(args.output)
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    app._print_status()
    return 0


if __name__ == "__main__":
    sys.exit(main())
