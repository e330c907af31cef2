"""
Command execution utilities.

This module provides the CommandRunner used by the samplers, the snapshot
capturer and the notifier to run shell commands, plus helpers to check that
the external tools the watchdog relies on are installed.
"""

import io
import logging
import os
import shutil
import subprocess
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import psutil

from ..validation import (
    CommandTimeoutError,
    ErrorSeverity,
    handle_file_error,
    handle_subprocess_error,
)

logger = logging.getLogger(__name__)

# Tools whose output format the samplers and snapshots depend on.
REQUIRED_TOOLS = ("free", "sar", "ps", "top")


def terminate_process_tree(pid: int, name: str, wait_timeout: float = 3.0) -> None:
    """
    Kill a process and all of its descendants.

    Shell commands run through ``/bin/sh``, so killing only the shell would
    leave pipeline members such as ``sar`` running.

    Args:
        pid: PID of the root process.
        name: Human-readable name for log messages.
        wait_timeout: Seconds to wait for the killed processes to exit.
    """
    try:
        parent = psutil.Process(pid)
        children = parent.children(recursive=True)
    except psutil.NoSuchProcess:
        logger.debug(f"Process {name} (PID: {pid}) already terminated")
        return

    processes = children + [parent]
    for process in processes:
        try:
            process.kill()
        except psutil.NoSuchProcess:
            continue
        except psutil.AccessDenied:
            logger.warning(f"Access denied killing PID {process.pid} of {name}")

    _, still_alive = psutil.wait_procs(processes, timeout=wait_timeout)
    if still_alive:
        logger.error(
            f"{len(still_alive)} processes of {name} still alive after kill: "
            f"{[p.pid for p in still_alive]}"
        )
    else:
        logger.info(f"Killed {name} (PID: {pid}) and {len(children)} children")


class _Deadline:
    """Kills a process tree if it is still running after ``timeout`` seconds."""

    def __init__(self, process: subprocess.Popen, command: str, timeout: Optional[float]):
        self.process = process
        self.command = command
        self.expired = False
        self._timer: Optional[threading.Timer] = None
        if timeout:
            self._timer = threading.Timer(timeout, self._expire)
            self._timer.daemon = True

    def _expire(self) -> None:
        self.expired = True
        terminate_process_tree(self.process.pid, f"command '{self.command}'")

    def __enter__(self) -> "_Deadline":
        if self._timer is not None:
            self._timer.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if self._timer is not None:
            self._timer.cancel()
        return False


class CommandRunner:
    """
    Runs shell commands and collects their output.

    Every call blocks until the command exits. When ``timeout`` is set, a
    command still running after that many seconds has its process tree killed
    and ``CommandTimeoutError`` is raised.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        executable_shell: Optional[str] = None,
        env_overrides: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            timeout: Maximum run time in seconds; None or 0 waits forever.
            executable_shell: Specific shell executable path (e.g., '/bin/bash').
            env_overrides: Environment variables set for every command.
                Defaults to ``LC_ALL=C`` so tool output is formatted
                consistently for parsing.
        """
        self.timeout = timeout or None
        self.executable_shell = executable_shell
        self.env_overrides = {"LC_ALL": "C"} if env_overrides is None else env_overrides

    def _popen(self, command: str, stdout) -> subprocess.Popen:
        env = os.environ.copy()
        env.update(self.env_overrides)
        return subprocess.Popen(
            command,
            shell=True,
            stdout=stdout,
            text=True,
            encoding="utf-8",
            errors="replace",
            executable=self.executable_shell,
            env=env,
        )

    def _wait(self, process: subprocess.Popen, command: str) -> int:
        try:
            return process.wait(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            terminate_process_tree(process.pid, f"command '{command}'")
            process.wait()
            raise CommandTimeoutError(command, self.timeout)

    def run(self, command: str, buffer: Optional[io.StringIO] = None) -> Tuple[str, bool]:
        """
        Run ``command`` and capture its standard output.

        Output is read line by line into ``buffer``, which is cleared first so
        the same buffer can be reused across calls.

        Args:
            command: Shell command to execute.
            buffer: Optional reusable buffer receiving the output.

        Returns:
            Tuple of (output_text, ok). ok is False if the command could not
            be started; the output is then empty.

        Raises:
            CommandTimeoutError: If the command exceeded the timeout.
        """
        if buffer is None:
            buffer = io.StringIO()
        else:
            buffer.seek(0)
            buffer.truncate()

        logger.debug(f"Executing command: '{command}'")
        try:
            process = self._popen(command, subprocess.PIPE)
        except OSError as e:
            handle_subprocess_error(e, command, severity=ErrorSeverity.ERROR, reraise=False, logger=logger)
            return "", False

        with _Deadline(process, command, self.timeout) as deadline:
            for line in process.stdout:
                buffer.write(line)
            process.stdout.close()
            returncode = process.wait()

        if deadline.expired:
            raise CommandTimeoutError(command, self.timeout)
        if returncode != 0:
            logger.warning(f"Command '{command}' exited with code {returncode}")

        return buffer.getvalue(), True

    def run_to_file(self, command: str, path: Union[str, Path]) -> bool:
        """
        Run ``command`` with its standard output written to ``path``.

        The output streams straight into the file, so large process listings
        are never held in memory.

        Returns:
            True if the command ran and its output was written, False if the
            file could not be opened or the command could not be started.

        Raises:
            CommandTimeoutError: If the command exceeded the timeout.
        """
        logger.debug(f"Executing command: '{command}' > '{path}'")
        try:
            with open(path, "w") as output_file:
                try:
                    process = self._popen(command, output_file)
                except OSError as e:
                    handle_subprocess_error(e, command, severity=ErrorSeverity.ERROR, reraise=False, logger=logger)
                    return False
                returncode = self._wait(process, command)
        except OSError as e:
            handle_file_error(e, f"writing '{path}'", severity=ErrorSeverity.ERROR, reraise=False, logger=logger)
            return False

        if returncode != 0:
            logger.warning(f"Command '{command}' exited with code {returncode}")
        return True

    def execute(self, command: str) -> int:
        """
        Run ``command`` without capturing its output.

        Returns:
            The exit code of the command, or -1 if it could not be started.

        Raises:
            CommandTimeoutError: If the command exceeded the timeout.
        """
        logger.debug(f"Executing command: '{command}'")
        try:
            process = self._popen(command, None)
        except OSError as e:
            handle_subprocess_error(e, command, severity=ErrorSeverity.ERROR, reraise=False, logger=logger)
            return -1
        return self._wait(process, command)


def check_command_installed(name: str) -> bool:
    """
    Check if a command is available on the system PATH.

    Returns:
        True if the command is found, False otherwise.
    """
    return shutil.which(name) is not None


def find_missing_tools(tools: Iterable[str] = REQUIRED_TOOLS) -> List[str]:
    """
    Return the tools from ``tools`` that are not installed.

    Note:
        ``free`` comes with procps; ``sar`` is part of the sysstat package.
    """
    return [tool for tool in tools if not check_command_installed(tool)]
