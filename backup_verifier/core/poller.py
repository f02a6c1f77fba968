"""Directory threshold polling.

The DirectoryPoller counts the top-level entries of a directory on every
iteration until either the loop budget runs out or the count reaches the
file threshold. On success it returns a recursive listing of the files,
which can differ from the top-level count used for the threshold check.
"""

import logging
import os
import time
from pathlib import Path
from typing import Callable, List

from backup_verifier.config.constants import LOG_MESSAGES
from backup_verifier.core.models import (
    FileRef,
    PollConfig,
    PollResult,
    PollSuccess,
    PollTimedOut,
)
from backup_verifier.core.run_log import RunLogger

logger = logging.getLogger(__name__)


def count_entries(directory: Path) -> int:
    """Count files and folders directly inside `directory`.

    Raises:
        OSError: If the directory cannot be listed.
    """
    with os.scandir(directory) as entries:
        return sum(1 for _ in entries)


def list_files_recursive(directory: Path) -> List[FileRef]:
    """List every regular file below `directory`, sorted per level.

    Raises:
        OSError: If any directory in the tree cannot be listed.
    """

    def _raise(error: OSError) -> None:
        raise error

    files = []
    for root, dirs, filenames in os.walk(directory, onerror=_raise):
        dirs.sort()
        for filename in sorted(filenames):
            files.append(FileRef.from_path(Path(root) / filename))
    return files


class DirectoryPoller:
    """Poll a directory until enough entries appear or the loop budget ends.

    Attributes:
        run_log: Run logger receiving one line per event.
        sleep: Callable used to wait between polls (time.sleep by default).
    """

    def __init__(
        self,
        run_log: RunLogger,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.run_log = run_log
        self.sleep = sleep

    def poll(self, config: PollConfig) -> PollResult:
        """Run the poll loop.

        Every iteration sleeps, counts, then checks the loop budget before
        the file threshold (unless `config.check_timeout_first` is False).
        The body always runs at least once, so a zero loop threshold still
        performs one sleep and one count.

        Args:
            config: Polling parameters.

        Returns:
            PollSuccess with the recursive file listing, or PollTimedOut.

        Raises:
            OSError: If the target directory cannot be listed.
        """
        loops = 0
        while True:
            loops += 1
            self.run_log.write(LOG_MESSAGES["LOOPED"].format(count=loops))
            self.sleep(config.interval_seconds)

            count = count_entries(config.target_path)
            self.run_log.write(
                LOG_MESSAGES["ENTRIES_FOUND"].format(
                    count=count, path=config.target_path
                )
            )

            timed_out = loops >= config.loop_threshold
            threshold_met = count >= config.file_threshold

            if config.check_timeout_first:
                if timed_out:
                    return self._timed_out(config, loops)
                if threshold_met:
                    return self._success(config, count)
            else:
                if threshold_met:
                    return self._success(config, count)
                if timed_out:
                    return self._timed_out(config, loops)

            logger.debug(
                f"Loop {loops}: {count}/{config.file_threshold} entries, "
                f"{config.loop_threshold - loops} loops left"
            )

    def _timed_out(self, config: PollConfig, loops: int) -> PollTimedOut:
        self.run_log.write(
            LOG_MESSAGES["LOOP_THRESHOLD_REACHED"].format(
                threshold=config.loop_threshold
            )
        )
        return PollTimedOut(loops_performed=loops)

    def _success(self, config: PollConfig, count: int) -> PollSuccess:
        self.run_log.write(
            LOG_MESSAGES["FILE_THRESHOLD_MET"].format(threshold=config.file_threshold)
        )
        files = list_files_recursive(config.target_path)
        return PollSuccess(file_count=count, files=tuple(files))
