"""
Runtime settings and configuration management.

Settings are layered: built-in defaults, then an optional JSON settings
file, then command line arguments. The result is frozen into a PollConfig
for the run.
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from backup_verifier.config.constants import (
    DEFAULT_BACKUP_PATH,
    DEFAULT_FILE_THRESHOLD,
    DEFAULT_LOCK_MAX_ATTEMPTS,
    DEFAULT_LOCK_RETRY_DELAY,
    DEFAULT_LOG_FOLDER,
    DEFAULT_LOOP_THRESHOLD,
    DEFAULT_POLL_SECONDS,
    DEFAULT_SMTP_PORT,
    DEFAULT_SUBJECT,
)
from backup_verifier.core.errors import ConfigurationError
from backup_verifier.core.models import PollConfig
from backup_verifier.utils.parsers import (
    parse_addresses,
    parse_attempt_limit,
    parse_non_negative_float,
    parse_non_negative_int,
    parse_optional_text,
)


def _parse_path(value: Any) -> Path:
    text = parse_optional_text(value)
    if text is None:
        raise ValueError("Path must not be empty")
    return Path(text).expanduser()


def _parse_optional_path(value: Any) -> Optional[Path]:
    text = parse_optional_text(value)
    return Path(text).expanduser() if text is not None else None


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ValueError(f"Expected true or false, got '{value}'")


# Normalizer per setting; also the list of accepted keys
_PARSERS: Dict[str, Callable[[Any], Any]] = {
    "path": _parse_path,
    "seconds": lambda v: parse_non_negative_int(v, "seconds"),
    "loop_threshold": lambda v: parse_non_negative_int(v, "loop threshold"),
    "file_threshold": lambda v: parse_non_negative_int(v, "file threshold"),
    "log_path": _parse_optional_path,
    "log_folder": _parse_path,
    "to": parse_addresses,
    "from_addr": parse_optional_text,
    "smtp": parse_optional_text,
    "smtp_port": lambda v: parse_non_negative_int(v, "SMTP port"),
    "subject": lambda v: "" if v is None else str(v),
    "check_timeout_first": _parse_bool,
    "lock_retry_delay": lambda v: parse_non_negative_float(v, "lock retry delay"),
    "lock_max_attempts": lambda v: parse_attempt_limit(v, "lock max attempts"),
    "quiet": _parse_bool,
    "verbose": _parse_bool,
}


class Settings:
    """Runtime settings manager."""

    def __init__(self):
        """Initialize default settings."""
        self.reset_to_defaults()

    def reset_to_defaults(self):
        """Reset all settings to default values."""
        self._settings = {
            # Polling
            "path": DEFAULT_BACKUP_PATH,
            "seconds": DEFAULT_POLL_SECONDS,
            "loop_threshold": DEFAULT_LOOP_THRESHOLD,
            "file_threshold": DEFAULT_FILE_THRESHOLD,
            "check_timeout_first": True,
            # Lock probing
            "lock_retry_delay": DEFAULT_LOCK_RETRY_DELAY,
            "lock_max_attempts": DEFAULT_LOCK_MAX_ATTEMPTS,
            # Logging
            "log_path": None,
            "log_folder": DEFAULT_LOG_FOLDER,
            # Notification
            "to": None,
            "from_addr": None,
            "smtp": None,
            "smtp_port": DEFAULT_SMTP_PORT,
            "subject": DEFAULT_SUBJECT,
            # Output
            "quiet": False,
            "verbose": False,
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value."""
        return self._settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value, normalizing it.

        Raises:
            ConfigurationError: If the key is unknown or the value invalid.
        """
        if key not in _PARSERS:
            raise ConfigurationError(f"Unknown setting: '{key}'")
        try:
            self._settings[key] = _PARSERS[key](value)
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for '{key}': {e}") from e

    def update(self, settings: Dict[str, Any]) -> None:
        """Update multiple settings at once."""
        for key, value in settings.items():
            self.set(key, value)

    def to_dict(self) -> Dict[str, Any]:
        """Export settings as dictionary."""
        return self._settings.copy()

    def from_dict(self, settings: Dict[str, Any]) -> None:
        """Import settings from dictionary on top of the defaults."""
        self.reset_to_defaults()
        self.update(settings)

    def save_to_file(self, filepath: Path) -> None:
        """Save settings to JSON file."""
        data = {
            key: str(value) if isinstance(value, Path) else value
            for key, value in self._settings.items()
        }
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def load_from_file(self, filepath: Path) -> None:
        """Merge settings from a JSON file.

        Raises:
            ConfigurationError: If the file is missing, not valid JSON, or
                holds unknown keys or invalid values.
        """
        filepath = Path(filepath)
        try:
            with open(filepath, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Settings file not found: {filepath}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid settings file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {filepath} must hold an object")
        self.update(data)

    def to_poll_config(self) -> PollConfig:
        """Freeze the polling settings for a run."""
        return PollConfig(
            target_path=self.path,
            interval_seconds=self.seconds,
            loop_threshold=self.loop_threshold,
            file_threshold=self.file_threshold,
            check_timeout_first=self.check_timeout_first,
        )

    @property
    def path(self) -> Path:
        return self._settings["path"]

    @property
    def seconds(self) -> int:
        return self._settings["seconds"]

    @property
    def loop_threshold(self) -> int:
        return self._settings["loop_threshold"]

    @property
    def file_threshold(self) -> int:
        return self._settings["file_threshold"]

    @property
    def check_timeout_first(self) -> bool:
        return self._settings["check_timeout_first"]

    @property
    def log_path(self) -> Optional[Path]:
        return self._settings["log_path"]

    @property
    def log_folder(self) -> Path:
        return self._settings["log_folder"]

    @property
    def to(self) -> Optional[List[str]]:
        return self._settings["to"]

    @property
    def from_addr(self) -> Optional[str]:
        return self._settings["from_addr"]

    @property
    def smtp(self) -> Optional[str]:
        return self._settings["smtp"]

    @property
    def smtp_port(self) -> int:
        return self._settings["smtp_port"]

    @property
    def subject(self) -> str:
        return self._settings["subject"]

    @property
    def lock_retry_delay(self) -> float:
        return self._settings["lock_retry_delay"]

    @property
    def lock_max_attempts(self) -> Optional[int]:
        return self._settings["lock_max_attempts"]


# Global settings instance
settings = Settings()


# Options that map one-to-one onto settings
_ARG_SETTINGS = (
    "path",
    "seconds",
    "loop_threshold",
    "file_threshold",
    "log_path",
    "log_folder",
    "to",
    "from_addr",
    "smtp",
    "smtp_port",
    "subject",
    "lock_retry_delay",
    "lock_max_attempts",
)


def configure_from_args(args, target: Optional[Settings] = None) -> Settings:
    """Configure settings from command line arguments.

    Arguments left at None keep the value from the settings file or the
    defaults.
    """
    target = settings if target is None else target
    target.reset_to_defaults()

    config_file = getattr(args, "config", None)
    if config_file:
        target.load_from_file(Path(config_file))

    for key in _ARG_SETTINGS:
        value = getattr(args, key, None)
        if value is not None:
            target.set(key, value)

    if getattr(args, "success_first", False):
        target.set("check_timeout_first", False)
    if getattr(args, "quiet", False):
        target.set("quiet", True)
    if getattr(args, "verbose", False):
        target.set("verbose", True)

    return target
