#!/usr/bin/env python3
"""
Test runner for Backup Verifier.

Usage:
    python run_tests.py                  # Run all tests
    python run_tests.py unit             # Run only unit tests
    python run_tests.py integration      # Run only integration tests
    python run_tests.py locks            # Run the lock probing and waiting tests
    python run_tests.py coverage         # Run with coverage report
    python run_tests.py unit -x -k poll  # Extra arguments go to pytest
"""

import os
import subprocess
import sys
from pathlib import Path

SUITES = {
    "unit": (["tests/unit"], "Running Unit Tests"),
    "integration": (["tests/integration"], "Running Integration Tests"),
    "locks": (
        [
            "tests/unit/test_lock_waiter.py",
            "tests/integration/test_verification_workflow.py::TestLockedFiles",
        ],
        "Running Lock Tests",
    ),
    "coverage": (
        [
            "tests",
            "--cov=backup_verifier",
            "--cov-report=html",
            "--cov-report=term-missing",
        ],
        "Running Tests with Coverage",
    ),
}


def run_pytest(pytest_args, description):
    """Run pytest with the current interpreter and return its exit code."""
    print(f"\n{'=' * 60}")
    print(f"{description}")
    print(f"{'=' * 60}\n")

    result = subprocess.run([sys.executable, "-m", "pytest", "-v", *pytest_args])
    return result.returncode


def main():
    """Main test runner."""
    project_dir = Path(__file__).parent
    os.chdir(project_dir)

    test_type = sys.argv[1].lower() if len(sys.argv) > 1 else "all"
    extra_args = sys.argv[2:]

    if test_type != "all" and test_type not in SUITES:
        print(f"Unknown test type: {test_type}")
        print(__doc__)
        return 1

    # pip skips packages that are already installed
    print("Installing test dependencies...")
    subprocess.run(
        [sys.executable, "-m", "pip", "install", "-e", ".[test]"],
        capture_output=True,
    )

    selected = ["unit", "integration"] if test_type == "all" else [test_type]

    exit_code = 0
    for name in selected:
        paths, description = SUITES[name]
        code = run_pytest(paths + extra_args, description)
        if code != 0:
            exit_code = code

    if test_type == "coverage":
        print("\nCoverage report generated in htmlcov/index.html")

    print(f"\n{'=' * 60}")
    if exit_code == 0:
        print("All tests passed!")
    else:
        print("Some tests failed!")
    print(f"{'=' * 60}\n")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
