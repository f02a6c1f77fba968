"""Unit tests for verification run orchestration."""

from unittest.mock import MagicMock

import pytest

from backup_verifier.core.lock_waiter import LockWaiter
from backup_verifier.core.models import FileRef, PollConfig, PollSuccess, PollTimedOut
from backup_verifier.core.notifier import EmailNotifier
from backup_verifier.core.poller import DirectoryPoller
from backup_verifier.core.verifier import BackupVerification, VerificationStatus


@pytest.fixture
def parts(backup_dir, run_log):
    config = PollConfig(
        target_path=backup_dir,
        interval_seconds=1,
        loop_threshold=3,
        file_threshold=2,
    )
    poller = MagicMock(spec=DirectoryPoller)
    lock_waiter = MagicMock(spec=LockWaiter)
    notifier = EmailNotifier(run_log, to_addrs=["ops@example.com"])
    return config, poller, lock_waiter, notifier


def make_verification(parts, run_log, **kwargs):
    config, poller, lock_waiter, notifier = parts
    return BackupVerification(config, run_log, poller, lock_waiter, notifier, **kwargs)


class TestBackupVerification:
    """Tests for BackupVerification.run."""

    def test_success_waits_for_every_file(self, parts, run_log, log_lines):
        _, poller, lock_waiter, _ = parts
        files = (FileRef.from_path("/x/a.bak"), FileRef.from_path("/x/b.bak"))
        poller.poll.return_value = PollSuccess(file_count=2, files=files)

        outcome = make_verification(parts, run_log).run()

        lock_waiter.wait_for_all.assert_called_once_with(files)
        assert outcome.status is VerificationStatus.VERIFIED
        assert outcome.exit_code == 0
        assert outcome.files == files
        assert log_lines()[-1] == "Verification Complete."

    def test_timeout_notifies_and_skips_lock_waiter(self, parts, run_log, log_lines):
        _, poller, lock_waiter, notifier = parts
        poller.poll.return_value = PollTimedOut(loops_performed=3)
        notifier.notify = MagicMock(return_value=True)

        outcome = make_verification(parts, run_log).run()

        lock_waiter.wait_for_all.assert_not_called()
        notifier.notify.assert_called_once()
        subject, body, attachment = notifier.notify.call_args[0]
        assert subject == ""
        assert "Timed out after 3 loops" in body
        assert attachment == run_log.log_path
        assert outcome.status is VerificationStatus.TIMED_OUT
        assert outcome.exit_code == 2
        assert outcome.loops_performed == 3
        assert outcome.notification_sent is True
        assert "Verification Complete." not in log_lines()

    def test_timeout_with_incomplete_mail_settings(self, parts, run_log, log_lines):
        _, poller, _, _ = parts
        poller.poll.return_value = PollTimedOut(loops_performed=3)

        outcome = make_verification(parts, run_log).run()

        assert outcome.notification_sent is False
        assert log_lines()[-1] == "Sender address not specified"

    def test_custom_subject_passed_through(self, parts, run_log):
        _, poller, _, notifier = parts
        poller.poll.return_value = PollTimedOut(loops_performed=1)
        notifier.notify = MagicMock(return_value=True)

        make_verification(parts, run_log, subject="Backup late").run()

        assert notifier.notify.call_args[0][0] == "Backup late"

    def test_enumeration_error_propagates(self, parts, run_log):
        _, poller, lock_waiter, _ = parts
        poller.poll.side_effect = PermissionError("denied")

        with pytest.raises(PermissionError):
            make_verification(parts, run_log).run()

        lock_waiter.wait_for_all.assert_not_called()
