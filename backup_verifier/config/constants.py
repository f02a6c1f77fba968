"""
Constants and configuration values for Backup Verifier.

This module centralizes all constants, making them easy to modify
and test. Defaults for every invocation parameter live here.
"""

from pathlib import Path

# Version Information
VERSION = "1.0.0"
AUTHOR = "Backup Verifier Contributors"
PROGRAM_NAME = "backup-verifier"


# Invocation Defaults
DEFAULT_BACKUP_PATH = Path("/var/backups")
DEFAULT_LOG_FOLDER = Path.home() / "Logs"
DEFAULT_POLL_SECONDS = 60
DEFAULT_LOOP_THRESHOLD = 5
DEFAULT_FILE_THRESHOLD = 1
DEFAULT_SMTP_PORT = 25
DEFAULT_SUBJECT = ""

# Lock probing (0 delay and no cap keep the busy-wait behavior)
DEFAULT_LOCK_RETRY_DELAY = 0.0
DEFAULT_LOCK_MAX_ATTEMPTS = None


# Log File Format
# Run-start timestamp, e.g. "10.19.2026 09:05:00 AM"
LOG_TIMESTAMP_FORMAT = "%m.%d.%Y %I:%M:%S %p"
# Date component of the derived log file name
LOG_DATE_FORMAT = "%m-%d-%Y"
LOG_FILE_SUFFIX = ".log"


# Environment variables for SMTP credentials
SMTP_USERNAME_ENV = "SMTP_USERNAME"
SMTP_PASSWORD_ENV = "SMTP_PASSWORD"


# Exit Codes
EXIT_VERIFIED = 0
EXIT_ERROR = 1
EXIT_TIMED_OUT = 2


# Run log messages
LOG_MESSAGES = {
    "STARTED": "Started verification of {path}",
    "LOOPED": "Looped {count} times",
    "ENTRIES_FOUND": "Found {count} entries in {path}",
    "LOOP_THRESHOLD_REACHED": "Loop threshold of {threshold} reached",
    "FILE_THRESHOLD_MET": "File threshold of {threshold} met",
    "TIMED_OUT": "Timed out after {count} loops",
    "LOCKED_FILE": "Locked file found: {name}",
    "UNLOCKED_FILE": "Unlocked file found: {name}",
    "FILE_RELEASED": "File unlocked: {name}",
    "VERIFICATION_COMPLETE": "Verification Complete.",
    "NO_RECIPIENT": "Recipient address not specified",
    "NO_SENDER": "Sender address not specified",
    "NO_SMTP": "SMTP server not specified",
    "NOTIFICATION_SENT": "Notification sent to {to}",
    "ERROR": "Error: {error}",
    "CANCELLED": "Error: Verification cancelled",
}


# Console messages
MESSAGES = {
    "WELCOME": "Backup Verifier v{version}\n-----------------------",
    "WATCHING": "Watching {path} (every {seconds}s, at most {loops} loops, need {files} entries)",
    "LOG_FILE": "Log file: {path}",
    "VERIFIED": "Verification complete: {count} files ready.",
    "TIMED_OUT": "Timed out after {count} loops.",
    "NOTIFICATION_SKIPPED": "Notification not sent, see log for details.",
    "NOTIFICATION_SENT": "Notification sent.",
    "OPERATION_CANCELLED": "\nOperation cancelled.",
}


HELP_TEXT = """
Backup Verifier - wait for backup files to arrive and become readable

Usage:
    backup-verifier [OPTIONS]

Options:
    -h, --help                  Show this help
    -v, --version               Show version
    -p, --path PATH             Directory to monitor (default: /var/backups)
    -s, --seconds N             Seconds between polls (default: 60)
    -l, --loop-threshold N      Maximum number of polls (default: 5)
    -f, --file-threshold N      Minimum number of entries (default: 1)
    --log-path FILE             Log file (default: <log folder>/backup-verifier_<date>.log)
    --log-folder DIR            Folder for the derived log file (default: ~/Logs)
    --to ADDRESSES              Notification recipients, comma separated
    --from ADDRESS              Notification sender
    --smtp HOST                 SMTP server
    --smtp-port N               SMTP port (default: 25)
    --subject TEXT              Notification subject (default: empty)
    --success-first             Check the file threshold before the loop threshold
    --lock-retry-delay SECONDS  Delay between lock probes (default: 0)
    --lock-max-attempts N       Give up after N >= 1 lock probes (default: unlimited)
    --config FILE               Load settings from a JSON file
    -q, --quiet                 No console output
    --verbose                   Debug logging on the console

Notification is sent only on timeout, and only when --to, --from and --smtp
are all given. SMTP credentials are read from SMTP_USERNAME / SMTP_PASSWORD
(environment or .env file).

Exit codes:
    0  all files present and unlocked
    1  error
    2  timed out waiting for files

Examples:
    # Wait up to 5 minutes for at least 3 backup files
    backup-verifier --path /data/incoming --file-threshold 3

    # Poll every 10 seconds and mail the operator on timeout
    backup-verifier -p /data/incoming -s 10 --to ops@example.com \\
        --from backup@example.com --smtp mail.example.com
"""
