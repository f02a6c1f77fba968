"""
Unit tests for conftest fixtures.

These tests document and verify the behavior of shared test fixtures.
"""

from backup_verifier.config.constants import DEFAULT_POLL_SECONDS
from backup_verifier.config.settings import settings


class TestRandomFilenameFixture:
    """Test random_filename fixture generates usable backup names."""

    def test_default_extension(self, random_filename):
        filename = random_filename()
        assert filename.endswith(".bak")
        assert len(filename) > 4

    def test_custom_extension(self, random_filename):
        assert random_filename(extension=".trn").endswith(".trn")

    def test_names_are_unique_and_valid(self, random_filename):
        names = [random_filename() for _ in range(10)]
        assert len(set(names)) == 10
        for name in names:
            assert "/" not in name
            assert "\\" not in name


class TestFakeSleepFixture:
    """Test fake_sleep records calls and runs scheduled actions."""

    def test_records_calls(self, fake_sleep):
        sleep = fake_sleep()
        sleep(1)
        sleep(2.5)
        assert sleep.calls == [1, 2.5]

    def test_runs_action_on_matching_call(self, fake_sleep):
        ran = []
        sleep = fake_sleep({2: lambda: ran.append("second")})

        sleep(0)
        assert ran == []
        sleep(0)
        assert ran == ["second"]


class TestRunLogFixtures:
    def test_log_lines_strip_timestamp(self, run_log, log_lines):
        run_log.write("Looped 1 times")
        assert log_lines() == ["Looped 1 times"]


class TestResetGlobalSettings:
    """The autouse fixture gives every test default settings."""

    def test_modify_settings(self):
        settings.set("seconds", 1)
        assert settings.seconds == 1

    def test_settings_are_reset(self):
        assert settings.seconds == DEFAULT_POLL_SECONDS
