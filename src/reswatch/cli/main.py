"""
Command-line interface for the reswatch resource watchdog.

This module maps command-line flags onto the watchdog configuration, sets up
logging and signal handling, and starts the monitoring loop.

Usage:
    reswatch [-m PCT] [-c PCT] [-t SECONDS] [-r COMMAND] [-n SECONDS]
             [--config PATH] [--timeout SECONDS] [--report-dir DIR]
             [--log-level LEVEL] [--once]

Example:
    reswatch -m 80 -c 90 -t 30 -r notify-send -n 600

Exit codes:
    1: unknown argument, or missing configuration file
    2: missing or invalid value for a recognized argument or config key
"""

import argparse
import logging
import signal
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import get_config, merge_config_overrides, set_config_path
from ..models.config import WatchdogConfig
from ..monitoring import MonitorLoop
from ..parsing import parse_int
from ..system import find_missing_tools
from ..validation import (
    VALID_LOG_LEVELS,
    ValidationError,
    handle_cli_error,
    validate_positive_float,
    validate_threshold_pct,
)

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

EXIT_UNKNOWN_ARGUMENT = 1
EXIT_INVALID_VALUE = 2


def _integer_value(text: str) -> int:
    try:
        return parse_int(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _unsigned_value(text: str) -> int:
    value = _integer_value(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {text!r}")
    return value


def _threshold_value(text: str) -> float:
    try:
        return validate_threshold_pct(_integer_value(text), field_name="threshold")
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e))


def _timeout_value(text: str) -> float:
    try:
        return validate_positive_float(text, min_value=0.0, field_name="timeout")
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser. Flags left unset are None."""
    parser = argparse.ArgumentParser(
        prog="reswatch",
        description="Watch memory and CPU usage; save process reports and notify on high usage.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-m",
        dest="mem_threshold_pct",
        type=_threshold_value,
        metavar="PCT",
        help="Memory usage percentage that triggers an alert (default: 70).",
    )
    parser.add_argument(
        "-c",
        dest="cpu_threshold_pct",
        type=_threshold_value,
        metavar="PCT",
        help="CPU usage percentage that triggers an alert (default: 70).",
    )
    parser.add_argument(
        "-t",
        dest="interval_seconds",
        type=_unsigned_value,
        metavar="SECONDS",
        help="Seconds between two checks (default: 60).",
    )
    parser.add_argument(
        "-r",
        dest="notify_command",
        type=str,
        metavar="COMMAND",
        help="Command run on an alert, with the message appended as one argument.",
    )
    parser.add_argument(
        "-n",
        dest="throttle_seconds",
        type=_unsigned_value,
        metavar="SECONDS",
        help="Minimum seconds between two notifications of the same kind (default: 1200).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="TOML configuration file with a [watchdog] table.",
    )
    parser.add_argument(
        "--timeout",
        dest="command_timeout_seconds",
        type=_timeout_value,
        metavar="SECONDS",
        help="Kill external commands running longer than this; 0 waits forever (default: 30).",
    )
    parser.add_argument(
        "--report-dir",
        dest="report_dir",
        type=str,
        metavar="DIR",
        help="Directory for the process reports saved on alerts (default: current directory).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=VALID_LOG_LEVELS,
        help="Logging level (default: INFO).",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single check and exit.",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    An unknown argument exits with code 1; argparse itself exits with code 2
    for a missing or invalid value.
    """
    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)
    if unknown:
        handle_cli_error(
            error=ValueError(f"Unknown argument '{unknown[0]}'"),
            context="argument parsing",
            exit_code=EXIT_UNKNOWN_ARGUMENT,
            logger=logger,
        )
    return args


def _collect_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "mem_threshold_pct": args.mem_threshold_pct,
        "cpu_threshold_pct": args.cpu_threshold_pct,
        "interval_seconds": args.interval_seconds,
        "notify_command": args.notify_command,
        "throttle_seconds": args.throttle_seconds,
        "command_timeout_seconds": args.command_timeout_seconds,
        "report_dir": args.report_dir,
        "log_level": args.log_level,
    }


def build_config(args: argparse.Namespace) -> WatchdogConfig:
    """
    Build the effective configuration: defaults, then the TOML file, then flags.
    """
    if args.config is not None:
        set_config_path(args.config)

    try:
        config = get_config()
    except FileNotFoundError as e:
        handle_cli_error(error=e, context="configuration loading",
                         exit_code=EXIT_UNKNOWN_ARGUMENT, logger=logger)
    except (ValidationError, tomllib.TOMLDecodeError, TypeError) as e:
        handle_cli_error(error=e, context="configuration validation",
                         exit_code=EXIT_INVALID_VALUE, logger=logger)

    try:
        return merge_config_overrides(config, _collect_overrides(args))
    except ValidationError as e:
        handle_cli_error(error=e, context="argument validation",
                         exit_code=EXIT_INVALID_VALUE, logger=logger)


def install_signal_handlers() -> None:
    """Exit cleanly on SIGINT and SIGTERM."""

    def shutdown_handler(signum, frame):
        logger.info(f"Signal {signal.strsignal(signum)} received. Stopping watchdog.")
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown_handler)
    signal.signal(signal.SIGTERM, shutdown_handler)


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line entry point.

    Parses arguments, builds the configuration, warns about missing tools
    and runs the monitoring loop until the process is stopped.

    Raises:
        SystemExit: On invalid arguments or configuration, or on SIGINT/SIGTERM.
    """
    args = parse_args(argv)
    config = build_config(args)

    logging.getLogger().setLevel(config.log_level)

    missing_tools = find_missing_tools()
    if missing_tools:
        logger.warning(
            f"Not found on PATH: {', '.join(missing_tools)}. Checks depending on them will "
            "fail (install procps and sysstat, e.g. 'sudo apt-get install procps sysstat')."
        )

    install_signal_handlers()
    loop = MonitorLoop(config)

    if args.once:
        samples = loop.run_cycle()
        for sample in samples:
            logger.info(f"{sample.kind.value} usage: {sample.percent:.2f}%")
        return

    loop.run_forever()


if __name__ == "__main__":
    main_cli()
