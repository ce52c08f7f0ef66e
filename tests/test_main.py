"""
Test Suite for the Application
===============================
Sample sources and the command line entry point.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import main as app_main
from main import StripChartApplication
from chart_settings import BoardConfig


def write_config(path, log_dir):
    path.write_text(
        "title: Test\n"
        "logging:\n"
        f"  log_dir: {log_dir.as_posix()}\n"
        "charts:\n"
        "  - name: cpu\n"
        "    kind: strip\n"
        "    width: 20\n"
        "    height: 10\n"
        "  - name: net\n"
        "    kind: stacked\n"
        "    width: 20\n"
        "    height: 10\n"
    )
    return path


class TestSampleSources:
    """Tests for synthetic and CSV samples."""

    def setup_method(self):
        """Setup test fixtures."""
        self.app = StripChartApplication(BoardConfig())

    def test_synthetic_rows(self):
        rows = list(self.app.synthetic_samples(25, seed=1))

        assert len(rows) == 25
        assert set(rows[0]) == {"cpu", "load", "net"}
        assert isinstance(rows[0]["net"], tuple)
        assert all(row["cpu"] >= 0.0 for row in rows)

    def test_synthetic_is_reproducible(self):
        first = list(self.app.synthetic_samples(10, seed=42))
        second = list(self.app.synthetic_samples(10, seed=42))
        assert first == second

    def test_feed(self):
        assert self.app.feed(self.app.synthetic_samples(100)) == 100
        assert self.app.samples_fed == 100
        assert len(self.app.board["cpu"].series) == 80
        assert self.app.board["cpu"].series.wrapped is True

    def test_csv_rows(self, tmp_path):
        path = tmp_path / "metrics.csv"
        path.write_text(
            "cpu,load,net,net_secondary,other\n"
            "10,1.5,3,4,x\n"
            "20,,5,,y\n"
        )

        rows = list(self.app.csv_samples(path))

        assert rows[0] == {"cpu": 10.0, "load": 1.5, "net": (3.0, 4.0)}
        assert rows[1] == {"cpu": 20.0, "net": (5.0, 0.0)}

    def test_csv_bad_value(self, tmp_path):
        path = tmp_path / "metrics.csv"
        path.write_text("cpu\n10\nabc\n")

        with pytest.raises(ValueError, match=":3:"):
            list(self.app.csv_samples(path))


class TestCommandLine:
    """Tests for the main entry point."""

    def test_synthetic_snapshot(self, tmp_path):
        config = write_config(tmp_path / "board.yaml", tmp_path / "logs")
        out = tmp_path / "out" / "board.png"

        code = app_main.main(["--config", str(config), "--samples", "30", "--output", str(out)])

        assert code == 0
        assert out.exists()

    def test_csv_snapshot(self, tmp_path):
        config = write_config(tmp_path / "board.yaml", tmp_path / "logs")
        data = tmp_path / "data.csv"
        data.write_text("cpu,net,net_secondary\n1,2,3\n4,5,6\n")
        out = tmp_path / "board.png"

        code = app_main.main(["-c", str(config), "-i", str(data), "-o", str(out)])

        assert code == 0
        assert out.exists()

    def test_missing_config(self, tmp_path):
        code = app_main.main(["--config", str(tmp_path / "missing.yaml")])
        assert code == 1

    def test_missing_input(self, tmp_path):
        config = write_config(tmp_path / "board.yaml", tmp_path / "logs")
        code = app_main.main([
            "-c", str(config),
            "-i", str(tmp_path / "missing.csv"),
            "-o", str(tmp_path / "board.png"),
        ])
        assert code == 1

    def test_negative_samples(self, tmp_path):
        config = write_config(tmp_path / "board.yaml", tmp_path / "logs")
        code = app_main.main(["-c", str(config), "-n", "-5"])
        assert code == 1
