"""
Pytest configuration and shared fixtures for the reswatch test suite.

This module provides common fixtures, fake collaborators and report builders
for all test modules.
"""

import io
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")


# ============================================================================
# Report Builders
# ============================================================================


def make_free_output(swap: int = 0, cache: int = 0, used: int = 0, free: int = 0) -> str:
    """Build a `free -L` style report: four 20-character blocks and a newline."""
    blocks = [("SwapUse", swap), ("CachUse", cache), ("MemUse", used), ("MemFree", free)]
    return "".join(f"{header:<9}{value:>10} " for header, value in blocks) + "\n"


def make_sar_output(idle: str = " 96", prefix: str = "12:00:01        CPU     %user") -> str:
    """Build a `sar --dec=0 1 1 | tail -n 3` style report with ``idle`` under %idle."""
    header = f"{prefix}     %idle\n"
    idle_offset = header.index("%idle")
    data_prefix = "12:00:02        all         3"
    data = data_prefix.ljust(idle_offset + 2) + idle + "\n"
    average = "Average:        all         3".ljust(idle_offset + 2) + idle + "\n"
    return header + data + average


# ============================================================================
# Fake Collaborators
# ============================================================================


class FakeRunner:
    """
    In-memory stand-in for CommandRunner.

    Outputs and exit codes are looked up by exact command string; every call
    is recorded.
    """

    def __init__(
        self,
        outputs: Optional[Dict[str, str]] = None,
        exit_codes: Optional[Dict[str, int]] = None,
        failing_files: Tuple[str, ...] = (),
    ):
        self.outputs = outputs or {}
        self.exit_codes = exit_codes or {}
        self.failing_files = failing_files
        self.run_calls: List[str] = []
        self.file_calls: List[Tuple[str, Path]] = []
        self.execute_calls: List[str] = []

    def run(self, command: str, buffer: Optional[io.StringIO] = None):
        self.run_calls.append(command)
        if buffer is None:
            buffer = io.StringIO()
        buffer.seek(0)
        buffer.truncate()
        if command not in self.outputs:
            return "", False
        buffer.write(self.outputs[command])
        return buffer.getvalue(), True

    def run_to_file(self, command: str, path) -> bool:
        self.file_calls.append((command, Path(path)))
        return command not in self.failing_files

    def execute(self, command: str) -> int:
        self.execute_calls.append(command)
        for prefix, code in self.exit_codes.items():
            if command.startswith(prefix):
                return code
        return 0


class FakeClock:
    """Manually advanced time source returning seconds since the epoch."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def fake_runner():
    """A FakeRunner serving a 30% memory report and a 35% idle CPU report."""
    from reswatch.collectors import CpuSampler, MemorySampler

    return FakeRunner(
        outputs={
            MemorySampler.command: make_free_output(used=30, free=70),
            CpuSampler.command: make_sar_output(idle=" 35"),
        }
    )


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def read_buffer():
    return io.StringIO()


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data():
    """Sample `[watchdog]` table for testing."""
    return {
        "mem_threshold_pct": 80.0,
        "cpu_threshold_pct": 90,
        "interval_seconds": 30,
        "notify_command": "notify-send",
        "throttle_seconds": 600,
        "command_timeout_seconds": 10.0,
        "report_dir": "/tmp/reswatch-reports",
        "log_level": "debug",
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write a temporary config.toml holding ``sample_config_data``."""
    import toml

    config_path = temp_dir / "config.toml"
    with open(config_path, "w") as f:
        toml.dump({"watchdog": sample_config_data}, f)
    return config_path


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    yield

    from reswatch.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(None)
