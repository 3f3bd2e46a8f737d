#!/usr/bin/env python3
# backend/run_tests.py
"""
Test runner script for the photo CDN pipeline.

Provides convenient commands to run different test suites.
"""

import subprocess
import sys
from pathlib import Path
from typing import List, Optional

BACKEND_DIR = Path(__file__).parent


def run_command(cmd: List[str], cwd: Optional[Path] = None) -> int:
    """Run a command and return the exit code."""
    print(f"🏃 Running: {' '.join(cmd)}")
    if cwd:
        print(f"📁 Working directory: {cwd}")

    result = subprocess.run(cmd, cwd=cwd)
    return result.returncode


def pytest_command(*args: str) -> List[str]:
    return [sys.executable, "-m", "pytest", *args, "-v", "--tb=short"]


def run_all_tests() -> int:
    return run_command(pytest_command("tests/"), BACKEND_DIR)


def run_unit_tests() -> int:
    return run_command(pytest_command("tests/unit/", "-m", "unit"), BACKEND_DIR)


def run_marked_tests(marker: str) -> int:
    """Run every test carrying the given marker."""
    return run_command(pytest_command("tests/", "-m", marker), BACKEND_DIR)


def run_integration_tests() -> int:
    return run_command(
        pytest_command("tests/integration/", "-m", "integration"), BACKEND_DIR
    )


def run_tests_with_coverage() -> int:
    """Run tests with coverage report."""
    cmd = pytest_command(
        "tests/",
        "--cov=photo_cdn",
        "--cov-report=term-missing",
        "--cov-report=html:htmlcov",
    )
    return run_command(cmd, BACKEND_DIR)


def install_test_dependencies() -> int:
    """Install the package with its test extra."""
    cmd = [sys.executable, "-m", "pip", "install", "-e", ".[test]"]
    return run_command(cmd, BACKEND_DIR.parent)


COMMANDS = {
    "all": ("Run all tests", run_all_tests),
    "unit": ("Run unit tests only", run_unit_tests),
    "integration": ("Run integration tests", run_integration_tests),
    "variants": ("Run variant generation tests", lambda: run_marked_tests("variants")),
    "exif": ("Run EXIF extraction tests", lambda: run_marked_tests("exif")),
    "upload": ("Run upload/rollback tests", lambda: run_marked_tests("upload")),
    "coverage": ("Run tests with coverage report", run_tests_with_coverage),
    "install": ("Install test dependencies", install_test_dependencies),
}


def main():
    """Main test runner."""
    if len(sys.argv) < 2:
        print(f"Usage: python run_tests.py [{'|'.join(COMMANDS)}]")
        print()
        print("Commands:")
        for name, (description, _) in COMMANDS.items():
            print(f"  {name:<12} - {description}")
        sys.exit(1)

    command = sys.argv[1]
    if command not in COMMANDS:
        print(f"❌ Unknown command: {command}")
        sys.exit(1)

    exit_code = COMMANDS[command][1]()

    if exit_code == 0:
        print("✅ Tests completed successfully!")
    else:
        print("❌ Tests failed!")

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
