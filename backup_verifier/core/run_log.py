"""Append-only run log shared by every stage of a verification run.

Each line carries the run-start timestamp from the RunContext rather than
the time of the individual event, so all lines of one run share a prefix.
Messages are mirrored to the standard logging module.
"""

import logging
from pathlib import Path
from typing import Union

from backup_verifier.config.constants import LOG_FILE_SUFFIX
from backup_verifier.core.models import RunContext

logger = logging.getLogger(__name__)


def default_log_path(log_folder: Union[str, Path], context: RunContext) -> Path:
    """Derive `<log_folder>/<program_name>_<date>.log` for a run.

    Args:
        log_folder: Folder that holds run logs.
        context: Run context supplying program name and start date.

    Returns:
        Path of the log file for this run.
    """
    filename = f"{context.program_name}_{context.date_stamp}{LOG_FILE_SUFFIX}"
    return Path(log_folder) / filename


class RunLogger:
    """Write timestamped lines to the run log file.

    Attributes:
        log_path: Destination file, created on first write.
        context: Run context providing the shared timestamp.
    """

    def __init__(self, log_path: Union[str, Path], context: RunContext) -> None:
        self.log_path = Path(log_path)
        self.context = context

    def format_line(self, message: str) -> str:
        return f"{self.context.timestamp} {message}"

    def write(self, message: str) -> None:
        """Append one line to the log file.

        Write failures are reported through logging and never raised, so the
        poll and lock loops keep running when the log destination is broken.
        """
        logger.info(message)
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(self.format_line(message) + "\n")
        except OSError as e:
            logger.warning(f"Could not write to log file {self.log_path}: {e}")

    def read(self) -> str:
        """Return the log contents written so far."""
        try:
            return self.log_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
