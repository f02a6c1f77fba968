"""
Value types shared by the poller, the lock waiter and the notifier.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Tuple, Union

from backup_verifier.config.constants import (
    LOG_DATE_FORMAT,
    LOG_TIMESTAMP_FORMAT,
    PROGRAM_NAME,
)


@dataclass(frozen=True)
class PollConfig:
    """Immutable polling parameters for one run.

    Attributes:
        target_path: Directory to monitor.
        interval_seconds: Sleep before each count.
        loop_threshold: Number of polls after which the run times out.
        file_threshold: Minimum number of top-level entries for success.
        check_timeout_first: Evaluate the loop budget before the file count.
    """

    target_path: Path
    interval_seconds: int
    loop_threshold: int
    file_threshold: int
    check_timeout_first: bool = True

    def __post_init__(self):
        object.__setattr__(self, "target_path", Path(self.target_path))
        for name in ("interval_seconds", "loop_threshold", "file_threshold"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")


@dataclass(frozen=True)
class FileRef:
    """A file discovered by a successful poll."""

    path: Path
    name: str = field(compare=False)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "FileRef":
        path = Path(path)
        return cls(path=path, name=path.name)


@dataclass(frozen=True)
class PollSuccess:
    """File threshold met; `files` is the recursive listing."""

    file_count: int
    files: Tuple[FileRef, ...]


@dataclass(frozen=True)
class PollTimedOut:
    """Loop budget exhausted."""

    loops_performed: int


PollResult = Union[PollSuccess, PollTimedOut]


class LockProbeResult(Enum):
    LOCKED = "locked"
    UNLOCKED = "unlocked"


@dataclass(frozen=True)
class NotificationRequest:
    subject: str
    body_source_path: Path
    attachment_path: Path


@dataclass(frozen=True)
class RunContext:
    """Run-scoped values captured once at start.

    Every log line of a run carries the same `timestamp`.
    """

    program_name: str = PROGRAM_NAME
    started_at: datetime = field(default_factory=datetime.now)

    @property
    def timestamp(self) -> str:
        return self.started_at.strftime(LOG_TIMESTAMP_FORMAT)

    @property
    def date_stamp(self) -> str:
        return self.started_at.strftime(LOG_DATE_FORMAT)
