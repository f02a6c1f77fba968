"""
Verification run orchestration.

Composes the poller, the lock waiter and the notifier: poll first, then
either wait for every discovered file to be released or, on timeout,
notify the operator and stop.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from backup_verifier.config.constants import (
    DEFAULT_SUBJECT,
    EXIT_TIMED_OUT,
    EXIT_VERIFIED,
    LOG_MESSAGES,
)
from backup_verifier.core.lock_waiter import LockWaiter
from backup_verifier.core.models import FileRef, PollConfig, PollTimedOut
from backup_verifier.core.notifier import EmailNotifier
from backup_verifier.core.poller import DirectoryPoller
from backup_verifier.core.run_log import RunLogger

logger = logging.getLogger(__name__)


class VerificationStatus(Enum):
    VERIFIED = EXIT_VERIFIED
    TIMED_OUT = EXIT_TIMED_OUT

    @property
    def exit_code(self) -> int:
        return self.value


@dataclass
class VerificationOutcome:
    """Result of one verification run."""

    status: VerificationStatus
    loops_performed: Optional[int] = None
    file_count: Optional[int] = None
    files: Tuple[FileRef, ...] = field(default_factory=tuple)
    notification_sent: bool = False

    @property
    def exit_code(self) -> int:
        return self.status.exit_code


class BackupVerification:
    """One verification run over a target directory."""

    def __init__(
        self,
        config: PollConfig,
        run_log: RunLogger,
        poller: DirectoryPoller,
        lock_waiter: LockWaiter,
        notifier: EmailNotifier,
        subject: str = DEFAULT_SUBJECT,
    ) -> None:
        self.config = config
        self.run_log = run_log
        self.poller = poller
        self.lock_waiter = lock_waiter
        self.notifier = notifier
        self.subject = subject

    def run(self) -> VerificationOutcome:
        """Poll, then wait for locks or notify.

        Returns:
            VerificationOutcome; TIMED_OUT runs never reach the lock waiter.

        Raises:
            OSError: If the target directory cannot be enumerated.
        """
        self.run_log.write(
            LOG_MESSAGES["STARTED"].format(path=self.config.target_path)
        )
        result = self.poller.poll(self.config)

        if isinstance(result, PollTimedOut):
            self.run_log.write(
                LOG_MESSAGES["TIMED_OUT"].format(count=result.loops_performed)
            )
            request = self.notifier.build_request(self.subject, self.run_log.log_path)
            sent = self.notifier.notify(
                request.subject, self.run_log.read(), request.attachment_path
            )
            return VerificationOutcome(
                status=VerificationStatus.TIMED_OUT,
                loops_performed=result.loops_performed,
                notification_sent=sent,
            )

        logger.debug(f"Waiting on {len(result.files)} files")
        self.lock_waiter.wait_for_all(result.files)
        self.run_log.write(LOG_MESSAGES["VERIFICATION_COMPLETE"])
        return VerificationOutcome(
            status=VerificationStatus.VERIFIED,
            file_count=result.file_count,
            files=result.files,
        )
