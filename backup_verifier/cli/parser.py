"""
Command line argument parser.

Handles parsing and validation of CLI arguments. Options that are not
given stay None so that values from a settings file are not overridden.
"""

import argparse
import sys
from typing import List, Optional

from backup_verifier.config.constants import AUTHOR, HELP_TEXT, PROGRAM_NAME, VERSION
from backup_verifier.utils.parsers import (
    parse_attempt_limit,
    parse_non_negative_float,
    parse_non_negative_int,
    parse_optional_text,
)

# dest -> label for the integer options
_INT_OPTIONS = {
    "seconds": "seconds",
    "loop_threshold": "loop threshold",
    "file_threshold": "file threshold",
    "smtp_port": "SMTP port",
}

_TEXT_OPTIONS = ("path", "log_path", "log_folder", "to", "from_addr", "smtp")


class ArgumentParser:
    """Custom argument parser for Backup Verifier."""

    def __init__(self):
        """Initialize argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create and configure the argument parser."""
        parser = argparse.ArgumentParser(
            prog=PROGRAM_NAME,
            description="Wait for backup files to arrive and become readable",
            add_help=False,  # We'll handle help ourselves
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "-h", "--help", action="store_true", help="Show this help"
        )

        parser.add_argument(
            "-v", "--version", action="store_true", help="Show version"
        )

        parser.add_argument(
            "-p", "--path", type=str, metavar="PATH", help="Directory to monitor"
        )

        parser.add_argument(
            "-s",
            "--seconds",
            type=str,
            metavar="N",
            help="Seconds between polls",
        )

        parser.add_argument(
            "-l",
            "--loop-threshold",
            type=str,
            metavar="N",
            help="Maximum number of polls",
        )

        parser.add_argument(
            "-f",
            "--file-threshold",
            type=str,
            metavar="N",
            help="Minimum number of entries",
        )

        parser.add_argument(
            "--log-path", type=str, metavar="FILE", help="Log file"
        )

        parser.add_argument(
            "--log-folder",
            type=str,
            metavar="DIR",
            help="Folder for the derived log file",
        )

        parser.add_argument(
            "--to", type=str, metavar="ADDRESSES", help="Notification recipients"
        )

        parser.add_argument(
            "--from",
            type=str,
            dest="from_addr",
            metavar="ADDRESS",
            help="Notification sender",
        )

        parser.add_argument("--smtp", type=str, metavar="HOST", help="SMTP server")

        parser.add_argument("--smtp-port", type=str, metavar="N", help="SMTP port")

        parser.add_argument(
            "--subject", type=str, metavar="TEXT", help="Notification subject"
        )

        parser.add_argument(
            "--success-first",
            action="store_true",
            help="Check the file threshold before the loop threshold",
        )

        parser.add_argument(
            "--lock-retry-delay",
            type=str,
            metavar="SECONDS",
            help="Delay between lock probes",
        )

        parser.add_argument(
            "--lock-max-attempts",
            type=str,
            metavar="N",
            help="Give up after N lock probes",
        )

        parser.add_argument(
            "--config", type=str, metavar="FILE", help="JSON settings file"
        )

        parser.add_argument(
            "-q", "--quiet", action="store_true", help="No console output"
        )

        parser.add_argument(
            "--verbose", action="store_true", help="Debug logging on the console"
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command line arguments.

        Args:
            args: Optional list of arguments (for testing)

        Returns:
            Parsed arguments namespace
        """
        parsed = self.parser.parse_args(args)

        if parsed.help:
            self.print_help()
            sys.exit(0)

        if parsed.version:
            self.print_version()
            sys.exit(0)

        # Blank values count as not given
        for dest in _TEXT_OPTIONS:
            setattr(parsed, dest, parse_optional_text(getattr(parsed, dest)))

        try:
            for dest, label in _INT_OPTIONS.items():
                value = getattr(parsed, dest)
                if value is not None:
                    setattr(parsed, dest, parse_non_negative_int(value, label))
            if parsed.lock_retry_delay is not None:
                parsed.lock_retry_delay = parse_non_negative_float(
                    parsed.lock_retry_delay, "lock retry delay"
                )
            parsed.lock_max_attempts = parse_attempt_limit(
                parsed.lock_max_attempts, "lock max attempts"
            )
        except ValueError as e:
            self.parser.error(str(e))

        return parsed

    def print_help(self) -> None:
        """Print custom help text."""
        print(HELP_TEXT)

    def print_version(self) -> None:
        """Print version information."""
        print(f"{PROGRAM_NAME} {VERSION}")
        print(f"By {AUTHOR}")


def create_parser() -> ArgumentParser:
    """Create and return a configured argument parser."""
    return ArgumentParser()
