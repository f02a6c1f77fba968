"""
CLI application.

Coordinates argument parsing, settings, the run log and the verification
run, and maps the outcome to the process exit code.
"""

import logging
import sys
from typing import Optional

from backup_verifier.cli.interface import create_console_interface
from backup_verifier.cli.parser import create_parser
from backup_verifier.config.constants import EXIT_ERROR, LOG_MESSAGES, MESSAGES
from backup_verifier.config.settings import Settings, configure_from_args
from backup_verifier.core.lock_waiter import LockWaiter
from backup_verifier.core.models import RunContext
from backup_verifier.core.notifier import EmailNotifier
from backup_verifier.core.poller import DirectoryPoller
from backup_verifier.core.run_log import RunLogger, default_log_path
from backup_verifier.core.security import load_smtp_credentials
from backup_verifier.core.verifier import BackupVerification

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Set up console logging for the CLI process."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


class BackupVerifierCLI:
    """CLI application for a single verification run."""

    def __init__(self):
        """Initialize CLI application."""
        self.parser = create_parser()
        self.interface = create_console_interface()

    def run(self, args: Optional[list] = None) -> int:
        """Run the CLI application.

        Args:
            args: Optional command line arguments

        Returns:
            Exit code (0 verified, 2 timed out, 1 error)
        """
        try:
            parsed_args = self.parser.parse_args(args)
            configured = configure_from_args(parsed_args)

            configure_logging(configured.get("verbose", False))
            self.interface.quiet = configured.get("quiet", False)

            context = RunContext()
            log_path = configured.log_path or default_log_path(
                configured.log_folder, context
            )
            run_log = RunLogger(log_path, context)

            self.interface.show_welcome()
            return self._execute_verification(configured, run_log)

        except KeyboardInterrupt:
            print(MESSAGES["OPERATION_CANCELLED"])
            return EXIT_ERROR

        except Exception as e:
            self.interface.show_message(f"Error: {str(e)}", message_type="error")
            return EXIT_ERROR

    def _build_verification(
        self, configured: Settings, run_log: RunLogger
    ) -> BackupVerification:
        """Wire the poller, lock waiter and notifier for one run."""
        credentials = load_smtp_credentials() if configured.smtp else None
        notifier = EmailNotifier(
            run_log,
            to_addrs=configured.to,
            from_addr=configured.from_addr,
            smtp_server=configured.smtp,
            smtp_port=configured.smtp_port,
            credentials=credentials,
        )
        return BackupVerification(
            config=configured.to_poll_config(),
            run_log=run_log,
            poller=DirectoryPoller(run_log),
            lock_waiter=LockWaiter(
                run_log,
                retry_delay=configured.lock_retry_delay,
                max_attempts=configured.lock_max_attempts,
            ),
            notifier=notifier,
            subject=configured.subject,
        )

    def _execute_verification(self, configured: Settings, run_log: RunLogger) -> int:
        """Execute the verification run.

        Errors and Ctrl+C are recorded in the run log before they propagate.

        Returns:
            Exit code of the outcome
        """
        verification = self._build_verification(configured, run_log)
        self.interface.show_run_start(verification.config, run_log.log_path)

        try:
            outcome = verification.run()
        except KeyboardInterrupt:
            run_log.write(LOG_MESSAGES["CANCELLED"])
            raise
        except Exception as e:
            run_log.write(LOG_MESSAGES["ERROR"].format(error=e))
            logger.debug("Verification failed", exc_info=True)
            raise

        self.interface.show_summary(outcome)
        return outcome.exit_code


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Optional command line arguments

    Returns:
        Exit code
    """
    app = BackupVerifierCLI()
    return app.run(args)


if __name__ == "__main__":
    sys.exit(main())
