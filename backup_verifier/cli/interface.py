"""
Command line interface module.

Handles console output for a verification run. The run log file is the
record of a run; the console only mirrors the main milestones.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from rich.console import Console
from rich.style import Style

from backup_verifier.config.constants import MESSAGES, VERSION
from backup_verifier.core.models import PollConfig
from backup_verifier.core.verifier import VerificationOutcome, VerificationStatus


class IUserInterface(ABC):
    """Interface for user interaction."""

    @abstractmethod
    def show_welcome(self) -> None:
        """Show welcome message."""
        pass

    @abstractmethod
    def show_message(self, message: str, message_type: str = "info") -> None:
        """Show a message to the user."""
        pass

    @abstractmethod
    def show_run_start(self, config: PollConfig, log_path: Union[str, Path]) -> None:
        """Show what the run is about to do."""
        pass

    @abstractmethod
    def show_summary(self, outcome: VerificationOutcome) -> None:
        """Show run outcome."""
        pass


class ConsoleInterface(IUserInterface):
    """Console-based user interface implementation."""

    def __init__(self, quiet: bool = False, console: Console = None):
        """Initialize console interface.

        Args:
            quiet: Suppress all output
            console: Optional rich Console (for testing)
        """
        self.quiet = quiet
        self.console = console or Console()

        # Theme styles (minimalist - no bold/dim modifiers)
        self.success_style = Style(color="green")
        self.error_style = Style(color="red")
        self.warning_style = Style(color="yellow")
        self.info_style = Style(color="white")
        self.highlight_style = Style(color="blue")

    def _print(self, renderable, style=None) -> None:
        """Print directly to console."""
        if style:
            self.console.print(renderable, style=style)
        else:
            self.console.print(renderable)

    def show_welcome(self) -> None:
        """Show welcome message in minimalist Unix style."""
        if self.quiet:
            return
        self.console.print(MESSAGES["WELCOME"].format(version=VERSION), style="blue")

    def show_message(self, message: str, message_type: str = "info") -> None:
        """Show a message to the user.

        Args:
            message: Message to display
            message_type: Type of message (info, success, error, warning)
        """
        if self.quiet:
            return

        if message_type == "success":
            self._print(message, style=self.success_style)
        elif message_type == "error":
            self._print(message, style=self.error_style)
        elif message_type == "warning":
            self._print(message, style=self.warning_style)
        elif message_type == "info":
            self._print(message, style=self.info_style)
        else:
            # Unknown message types - print without styling
            self._print(message)

    def show_run_start(self, config: PollConfig, log_path: Union[str, Path]) -> None:
        """Show polling parameters and log destination."""
        self.show_message(
            MESSAGES["WATCHING"].format(
                path=config.target_path,
                seconds=config.interval_seconds,
                loops=config.loop_threshold,
                files=config.file_threshold,
            )
        )
        self.show_message(MESSAGES["LOG_FILE"].format(path=log_path))

    def show_summary(self, outcome: VerificationOutcome) -> None:
        """Show run outcome.

        Args:
            outcome: Result of the verification run
        """
        if outcome.status is VerificationStatus.VERIFIED:
            self.show_message(
                MESSAGES["VERIFIED"].format(count=len(outcome.files)),
                message_type="success",
            )
            return

        self.show_message(
            MESSAGES["TIMED_OUT"].format(count=outcome.loops_performed),
            message_type="error",
        )
        if outcome.notification_sent:
            self.show_message(MESSAGES["NOTIFICATION_SENT"], message_type="info")
        else:
            self.show_message(
                MESSAGES["NOTIFICATION_SKIPPED"], message_type="warning"
            )


def create_console_interface(quiet: bool = False) -> ConsoleInterface:
    """Create and return a console interface."""
    return ConsoleInterface(quiet=quiet)
