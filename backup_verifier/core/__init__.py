"""
Core polling, lock probing and notification logic for Backup Verifier.
"""

from .errors import ConfigurationError, LockWaitTimeout, VerifierError
from .lock_waiter import LockWaiter, probe_file
from .models import (
    FileRef,
    LockProbeResult,
    NotificationRequest,
    PollConfig,
    PollResult,
    PollSuccess,
    PollTimedOut,
    RunContext,
)
from .notifier import EmailNotifier
from .poller import DirectoryPoller
from .run_log import RunLogger, default_log_path
from .verifier import BackupVerification, VerificationOutcome, VerificationStatus
