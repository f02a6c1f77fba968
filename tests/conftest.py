"""
Pytest configuration and shared fixtures
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest
from faker import Faker

# Add parent directory to path so we can import backup_verifier
sys.path.insert(0, str(Path(__file__).parent.parent))

from backup_verifier.config.settings import settings  # noqa: E402
from backup_verifier.core.models import RunContext  # noqa: E402
from backup_verifier.core.run_log import RunLogger  # noqa: E402


@pytest.fixture
def backup_dir(tmp_path):
    """Create an empty directory to monitor."""
    target = tmp_path / "incoming"
    target.mkdir()
    return target


@pytest.fixture
def run_context():
    """Run context with a fixed start time."""
    return RunContext(
        program_name="backup-verifier",
        started_at=datetime(2026, 10, 19, 14, 5, 9),
    )


@pytest.fixture
def run_log(tmp_path, run_context):
    """Run logger writing into the test's temp directory."""
    return RunLogger(tmp_path / "logs" / "run.log", run_context)


@pytest.fixture
def log_lines(run_log):
    """Return a callable reading the run log without timestamps."""

    def _read():
        prefix = run_log.context.timestamp + " "
        return [line[len(prefix):] for line in run_log.read().splitlines()]

    return _read


class FakeSleep:
    """Record sleep calls and optionally run an action per call."""

    def __init__(self, actions=None):
        self.calls = []
        self.actions = dict(actions or {})

    def __call__(self, seconds):
        self.calls.append(seconds)
        action = self.actions.get(len(self.calls))
        if action is not None:
            action()


@pytest.fixture
def fake_sleep():
    """Factory for FakeSleep instances.

    Usage:
        sleep = fake_sleep({3: lambda: make_files()})  # runs during 3rd sleep
    """

    def _make(actions=None):
        return FakeSleep(actions)

    return _make


# =============================================================================
# Faker Fixtures for Reproducible Test Data
# =============================================================================


@pytest.fixture(scope="session")
def faker_seed():
    """
    Provide a Faker instance with a fixed seed for reproducible test data.

    Session-scoped to maintain consistent sequences across all tests in a run.
    """
    fake = Faker()
    Faker.seed(42)
    return fake


@pytest.fixture
def random_filename(faker_seed):
    """
    Generate realistic random backup filenames.

    Usage:
        filename = random_filename()  # e.g. "approach.bak"
    """

    def _generate(extension: str = ".bak") -> str:
        return f"{faker_seed.unique.word()}{extension}"

    return _generate


@pytest.fixture(autouse=True)
def reset_global_settings():
    """Reset the global Settings before and after each test."""
    settings.reset_to_defaults()
    yield
    settings.reset_to_defaults()
