"""
Diagnostic snapshots taken when a threshold is breached.

Every breach, throttled or not, writes the output of the diagnostic commands
for its alert kind to report files named like::

    mem_report_ps_241019_142501.123456_85.txt
    cpu_report_241019_142502.654321_91.txt
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from ..models.runtime import AlertKind, Sample
from ..system.commands import CommandRunner
from ..validation import (
    CommandTimeoutError,
    ErrorSeverity,
    handle_file_error,
    handle_subprocess_error,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiagnosticCommand:
    """A command whose output is saved in a snapshot."""

    command: str
    # Name inserted in the report file name; None leaves it out.
    tool: Optional[str] = None


DEFAULT_DIAGNOSTICS: Dict[AlertKind, Sequence[DiagnosticCommand]] = {
    AlertKind.MEMORY: (
        DiagnosticCommand("ps aux --sort=-%mem", tool="ps"),
        DiagnosticCommand("top -b -n 1 -o %MEM", tool="top"),
    ),
    AlertKind.CPU: (
        DiagnosticCommand("ps aux --sort=-%cpu"),
    ),
}


def build_report_name(kind: AlertKind, tool: Optional[str], timestamp: datetime, percent: float) -> str:
    """
    Build the file name of a snapshot report.

    The name embeds the alert kind, the tool (if any), the timestamp with
    microseconds and the usage percentage truncated to an integer.
    """
    tool_part = f"{tool}_" if tool else ""
    time_part = f"{timestamp:%y%m%d_%H%M%S}.{timestamp.microsecond:06d}"
    return f"{kind.report_prefix}_report_{tool_part}{time_part}_{int(percent)}.txt"


class SnapshotCapturer:
    """
    Saves the output of diagnostic commands into uniquely named files.

    A failing command is logged and does not prevent the remaining commands
    from running.
    """

    def __init__(
        self,
        runner: CommandRunner,
        report_dir: Path,
        diagnostics: Optional[Dict[AlertKind, Sequence[DiagnosticCommand]]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.runner = runner
        self.report_dir = Path(report_dir)
        self.diagnostics = DEFAULT_DIAGNOSTICS if diagnostics is None else diagnostics
        self.clock = clock

    def _ensure_report_dir(self) -> None:
        try:
            self.report_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            handle_file_error(e, f"creating report directory '{self.report_dir}'",
                              severity=ErrorSeverity.ERROR, reraise=False, logger=logger)

    def capture(self, sample: Sample) -> List[Path]:
        """
        Run every diagnostic command registered for ``sample.kind``.

        All reports of one capture share the same timestamp.

        Returns:
            Paths of the reports that were written successfully.
        """
        commands = self.diagnostics.get(sample.kind, ())
        if not commands:
            return []

        self._ensure_report_dir()
        timestamp = self.clock()
        saved: List[Path] = []

        for diagnostic in commands:
            path = self.report_dir / build_report_name(
                sample.kind, diagnostic.tool, timestamp, sample.percent
            )
            try:
                could_save = self.runner.run_to_file(diagnostic.command, path)
            except CommandTimeoutError as e:
                handle_subprocess_error(e, diagnostic.command, severity=ErrorSeverity.CRITICAL,
                                        reraise=False, logger=logger)
                could_save = False

            if could_save:
                logger.info(f"Saved {sample.kind.value} report to {path}")
                saved.append(path)
            else:
                source = diagnostic.tool or diagnostic.command
                logger.error(f"Could not save {sample.kind.value} report from {source} to file")

        return saved
