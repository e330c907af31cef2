"""
End-to-end tests running the watchdog against scripted stand-ins for the
system tools.

Each test puts executable `free`, `sar`, `ps` and `top` scripts first on
PATH, so the real command runner, parsers, snapshot capture and notifier are
exercised through the command-line entry point.
"""

import os
import stat
from pathlib import Path

import pytest
import toml

from conftest import make_free_output, make_sar_output
from reswatch.cli import main as cli_main


def _write_script(path: Path, body: str) -> None:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


@pytest.fixture
def fake_tools(temp_dir, monkeypatch):
    """Install fake system tools and a notification script; return their paths."""
    bin_dir = temp_dir / "bin"
    bin_dir.mkdir()
    data_dir = temp_dir / "data"
    data_dir.mkdir()

    tools = {
        "bin_dir": bin_dir,
        "free_output": data_dir / "free.txt",
        "sar_output": data_dir / "sar.txt",
        "notifications": temp_dir / "notifications.txt",
        "notify_script": bin_dir / "record-notification",
        "report_dir": temp_dir / "reports",
    }

    _write_script(bin_dir / "free", f'cat "{tools["free_output"]}"\n')
    # `sar` output goes through `tail -n 3`; the preamble must be cut off
    _write_script(
        bin_dir / "sar",
        f'echo "Linux 6.1.0 (testhost)  10/19/24  _x86_64_  (8 CPU)"\necho\ncat "{tools["sar_output"]}"\n',
    )
    _write_script(bin_dir / "ps", 'echo "USER PID %CPU %MEM COMMAND"\necho "root 1 99.0 80.0 hog"\n')
    _write_script(bin_dir / "top", 'echo "top - 14:25:01 up 1 day"\n')
    _write_script(tools["notify_script"], f'printf "%s\\n" "$1" >> "{tools["notifications"]}"\n')

    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.setattr(cli_main, "install_signal_handlers", lambda: None)
    return tools


def _set_usage(tools, used, free, idle):
    tools["free_output"].write_text(make_free_output(swap=0, cache=1000, used=used, free=free))
    tools["sar_output"].write_text(make_sar_output(idle=idle))


def _write_config(temp_dir: Path, tools, **overrides) -> Path:
    data = {
        "mem_threshold_pct": 70,
        "cpu_threshold_pct": 70,
        "notify_command": str(tools["notify_script"]),
        "throttle_seconds": 1200,
        "command_timeout_seconds": 10.0,
        "report_dir": str(tools["report_dir"]),
    }
    data.update(overrides)
    config_path = temp_dir / "config.toml"
    with open(config_path, "w") as f:
        toml.dump({"watchdog": data}, f)
    return config_path


@pytest.mark.e2e
class TestWatchdogWorkflow:
    """Full single-cycle runs through main_cli."""

    def test_quiet_system_produces_nothing(self, temp_dir, fake_tools):
        _set_usage(fake_tools, used=300, free=700, idle=" 80")
        config_path = _write_config(temp_dir, fake_tools)

        cli_main.main_cli(["--config", str(config_path), "--once"])

        assert not fake_tools["notifications"].exists()
        assert not fake_tools["report_dir"].exists()

    def test_memory_breach_writes_reports_and_notifies(self, temp_dir, fake_tools):
        _set_usage(fake_tools, used=900, free=100, idle=" 80")
        config_path = _write_config(temp_dir, fake_tools)

        cli_main.main_cli(["--config", str(config_path), "--once"])

        reports = sorted(p.name for p in fake_tools["report_dir"].iterdir())
        assert len(reports) == 2
        assert reports[0].startswith("mem_report_ps_") and reports[0].endswith("_90.txt")
        assert reports[1].startswith("mem_report_top_") and reports[1].endswith("_90.txt")

        ps_report = fake_tools["report_dir"] / reports[0]
        assert "hog" in ps_report.read_text()

        assert fake_tools["notifications"].read_text() == (
            "Memory consumption is high. Consumption is 90.00%\n"
        )

    def test_cpu_breach_with_flag_overrides(self, temp_dir, fake_tools):
        _set_usage(fake_tools, used=100, free=900, idle=" 20")
        config_path = _write_config(temp_dir, fake_tools, cpu_threshold_pct=90)

        cli_main.main_cli(["--config", str(config_path), "--once", "-c", "75"])

        reports = list(fake_tools["report_dir"].iterdir())
        assert len(reports) == 1
        assert reports[0].name.startswith("cpu_report_")
        assert reports[0].name.endswith("_80.txt")
        assert fake_tools["notifications"].read_text() == (
            "CPU consumption is high. Consumption is 80.00%\n"
        )

    def test_failing_notification_script_does_not_stop_cycle(self, temp_dir, fake_tools):
        _set_usage(fake_tools, used=950, free=50, idle="  2")
        config_path = _write_config(temp_dir, fake_tools, notify_command="false")

        cli_main.main_cli(["--config", str(config_path), "--once"])

        names = sorted(p.name for p in fake_tools["report_dir"].iterdir())
        assert [name.split("_")[0] for name in names] == ["cpu", "mem", "mem"]
