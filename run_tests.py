#!/usr/bin/env python3
"""
Test runner script for the hostdesk backend.
"""
import sys
import subprocess
import argparse


def run_tests(test_type="all", coverage=True, verbose=False):
    """
    Run the test suite.

    Args:
        test_type: Type of tests to run ('all', 'unit', 'api')
        coverage: Whether to run with coverage
        verbose: Whether to run with verbose output
    """
    cmd = [sys.executable, "-m", "pytest"]

    if test_type == "unit":
        cmd.extend(["-m", "not api"])
    elif test_type == "api":
        cmd.extend(["-m", "api"])

    if coverage:
        cmd.extend(["--cov=hostdesk", "--cov=config", "--cov-report=term-missing"])

    if verbose:
        cmd.append("-v")

    cmd.append("tests/")

    print(f"Running tests: {' '.join(cmd)}")
    print("=" * 60)

    try:
        subprocess.run(cmd, check=True)
        print("\n" + "=" * 60)
        print("✅ All tests passed!")
        return 0
    except subprocess.CalledProcessError as e:
        print("\n" + "=" * 60)
        print(f"❌ Tests failed with exit code {e.returncode}")
        return e.returncode


def main():
    """Main function."""
    parser = argparse.ArgumentParser(description="Test runner for hostdesk")
    parser.add_argument(
        "--type",
        choices=["all", "unit", "api"],
        default="all",
        help="Type of tests to run"
    )
    parser.add_argument(
        "--no-coverage",
        action="store_true",
        help="Run tests without coverage"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Run with verbose output"
    )

    args = parser.parse_args()

    return run_tests(
        test_type=args.type,
        coverage=not args.no_coverage,
        verbose=args.verbose
    )


if __name__ == "__main__":
    sys.exit(main())
