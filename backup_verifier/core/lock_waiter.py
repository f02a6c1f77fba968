"""Exclusive-lock probing for discovered files.

A file counts as ready once this process can open it read/write and take
an exclusive, non-blocking OS lock on it. Probing opens with
create-if-missing, so probing a path that does not exist leaves a
zero-byte file behind.

By default the waiter re-probes immediately and without limit. A retry
delay and an attempt cap can be configured.
"""

import logging
import os
import time
from typing import Callable, Iterable, Optional

from backup_verifier.config.constants import LOG_MESSAGES
from backup_verifier.core.errors import LockWaitTimeout
from backup_verifier.core.models import FileRef, LockProbeResult
from backup_verifier.core.run_log import RunLogger

logger = logging.getLogger(__name__)

if os.name == "nt":  # pragma: no cover (Windows only)
    import msvcrt

    def _lock(fd: int) -> None:
        msvcrt.locking(fd, msvcrt.LK_NBLCK, 1)

    def _unlock(fd: int) -> None:
        os.lseek(fd, 0, os.SEEK_SET)
        msvcrt.locking(fd, msvcrt.LK_UNLCK, 1)

else:
    import fcntl

    def _lock(fd: int) -> None:
        fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)

    def _unlock(fd: int) -> None:
        fcntl.flock(fd, fcntl.LOCK_UN)


def probe_file(path) -> LockProbeResult:
    """Attempt one exclusive open of `path`.

    Any OSError while opening or locking means another holder has the
    file. The descriptor is closed on every path.
    """
    try:
        fd = os.open(path, os.O_RDWR | os.O_CREAT)
    except OSError as e:
        logger.debug(f"Open failed for {path}: {e}")
        return LockProbeResult.LOCKED

    try:
        _lock(fd)
    except OSError as e:
        logger.debug(f"Lock failed for {path}: {e}")
        return LockProbeResult.LOCKED
    else:
        _unlock(fd)
        return LockProbeResult.UNLOCKED
    finally:
        os.close(fd)


class LockWaiter:
    """Block until files can be opened exclusively.

    Attributes:
        run_log: Run logger for lock state lines.
        retry_delay: Seconds to wait between probes (0 = spin).
        max_attempts: Probe cap per file, None for no cap.
        sleep: Callable used for the retry delay.
    """

    def __init__(
        self,
        run_log: RunLogger,
        retry_delay: float = 0.0,
        max_attempts: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.run_log = run_log
        self.retry_delay = retry_delay
        self.max_attempts = max_attempts
        self.sleep = sleep

    def probe(self, file: FileRef) -> LockProbeResult:
        return probe_file(file.path)

    def wait_until_unlocked(self, file: FileRef) -> int:
        """Probe `file` until it reports unlocked.

        Args:
            file: File to wait for.

        Returns:
            Number of probes performed (1 if the file was never locked).

        Raises:
            LockWaitTimeout: If `max_attempts` probes all found it locked.
        """
        attempts = 1
        result = self.probe(file)
        if result is LockProbeResult.UNLOCKED:
            self.run_log.write(LOG_MESSAGES["UNLOCKED_FILE"].format(name=file.name))
            return attempts

        self.run_log.write(LOG_MESSAGES["LOCKED_FILE"].format(name=file.name))
        while result is LockProbeResult.LOCKED:
            if self.max_attempts is not None and attempts >= self.max_attempts:
                raise LockWaitTimeout(file.path, attempts)
            if self.retry_delay > 0:
                self.sleep(self.retry_delay)
            attempts += 1
            result = self.probe(file)

        self.run_log.write(LOG_MESSAGES["FILE_RELEASED"].format(name=file.name))
        logger.debug(f"{file.path} released after {attempts} probes")
        return attempts

    def wait_for_all(self, files: Iterable[FileRef]) -> None:
        """Wait for each file in order."""
        for file in files:
            self.wait_until_unlocked(file)
