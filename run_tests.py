#!/usr/bin/env python3
# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Test runner for the Sentry issues CLI unit tests.

Usage:
    python run_tests.py                     # Run all tests
    python run_tests.py -v                  # Run with verbose output
    python run_tests.py cli                 # Run one suite (cli, utils, core)
    python run_tests.py cli utils -x        # Run several suites, stop on first failure
    python run_tests.py tests/cli/test_issue_commands.py::TestDelete  # Run specific class
    python run_tests.py -k "pagination"     # Run tests matching pattern
    python run_tests.py --lf                # Run last failed tests
"""

import subprocess
import sys

# Suite name -> test paths
SUITES = {
    'cli': ['tests/cli'],
    'utils': ['tests/utils'],
    'core': ['tests/test_classes.py', 'tests/test_config.py'],
}


def build_command(args):
    """Expand suite names into paths and default to the whole tests/ tree."""
    cmd = [sys.executable, '-m', 'pytest']
    passthrough = []
    paths = []

    for arg in args:
        if arg in SUITES:
            paths.extend(SUITES[arg])
        elif not arg.startswith('-') and (arg.startswith('tests') or '.py' in arg):
            paths.append(arg)
        else:
            passthrough.append(arg)

    cmd.extend(paths or ['tests/'])
    cmd.extend(passthrough)
    return cmd


def main():
    result = subprocess.run(build_command(sys.argv[1:]))
    sys.exit(result.returncode)


if __name__ == '__main__':
    main()
