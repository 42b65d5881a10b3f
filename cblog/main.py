"""
cblog - Main Entry Point

Reads lines from a file or stdin and reports each one as a unit of progress:
1. Print the line on a progress console (optionally in place, rate limited,
   with throughput)
2. Log the line through the configured log destinations
"""

import sys
import logging
from contextlib import ExitStack
from typing import Iterable, List, Optional

from cblog.cli.config import parse_arguments
from cblog.exceptions import LoggerCloseError, LoggerSetupError
from cblog.logging import Logger, LoggerConfig
from cblog.progress import ProgressConsole, create_progress_console

logger = logging.getLogger(__name__)


def process_lines(lines: Iterable[str], console: ProgressConsole, log: Logger) -> int:
    """
    Report every line as one completed unit.

    Returns:
        Number of lines processed
    """
    count = 0
    for line in lines:
        line = line.rstrip("\n")
        log.debug("INPUT", "%s", line)
        console.print("%s", line)
        count += 1
    return count


def build_logger_config(args) -> LoggerConfig:
    return LoggerConfig(
        log_level=args.log_level_resolved,
        log_to_file=args.log_file is not None,
        file_path=args.log_file,
        log_to_stdout=args.log_stdout,
        stdout_color=args.log_color_resolved,
        log_to_unix_socket=args.log_socket is not None,
        unix_socket_path=args.log_socket,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - parse config and report input lines.

    Returns:
        Exit code: 0 for success, 2 for fatal errors, 130 when interrupted
    """
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s - %(message)s')

    # Parse arguments and load configuration
    args = parse_arguments(argv)

    try:
        with ExitStack() as stack:
            log = stack.enter_context(Logger(build_logger_config(args)))
            source = stack.enter_context(args.input.open(encoding='utf-8')) if args.input else sys.stdin

            console = create_progress_console(
                args.mode,
                limit=args.limit,
                track_progress=args.track,
            )
            console.start(args.prefix)
            if args.auto_print:
                console.auto_print()

            count = process_lines(source, console, log)

            console.finish(not args.no_stats)
            log.info("CLI", "Processed %d lines", count)

        return 0

    except LoggerSetupError as e:
        logger.error(f"Cannot set up logging: {e}")
        return 2

    except LoggerCloseError as e:
        logger.error(f"Failed to close log destinations: {e}")
        return 2

    except FileNotFoundError as e:
        logger.error(f"Input file not found: {e}")
        return 2

    except PermissionError as e:
        logger.error(f"Permission denied: {e}")
        return 2

    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C)")
        return 130  # Standard exit code for SIGINT

    except Exception as e:
        logger.error(f"Unexpected error occurred: {e}")
        logger.debug("Full error details:", exc_info=True)
        return 2


if __name__ == '__main__':
    sys.exit(main())
