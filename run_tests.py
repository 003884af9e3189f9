#!/usr/bin/env python3
"""
Test runner for the SVG Theme Merger project.

This script runs the unit and integration tests for the light/dark SVG merger.
"""

import unittest
import sys
import os
import argparse

# Add the project root directory to the Python path
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)


def create_test_suite(module_name=None):
    """Create a test suite for all tests, or for the 'unit' or 'integration' tests only."""
    loader = unittest.TestLoader()

    start_dir = os.path.join(project_root, 'tests')
    if module_name:
        start_dir = os.path.join(start_dir, module_name)

    return loader.discover(start_dir, pattern='test_*.py', top_level_dir=project_root)


def run_tests(module_name=None, verbosity=2):
    """Run the tests and return True if all of them passed."""
    suite = create_test_suite(module_name)

    runner = unittest.TextTestRunner(
        verbosity=verbosity,
        stream=sys.stdout,
        buffer=True  # Capture stdout/stderr during tests
    )

    result = runner.run(suite)
    return result.wasSuccessful()


def main():
    """Main function to run the test suite."""
    parser = argparse.ArgumentParser(description='Run tests for the SVG Theme Merger project')
    parser.add_argument(
        '--module',
        '-m',
        choices=['unit', 'integration'],
        help='Run tests from a specific module (unit or integration)'
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Run tests with verbose output'
    )

    args = parser.parse_args()

    print("SVG Theme Merger - Test Runner")
    print("=" * 40)

    verbosity = 2 if args.verbose or args.module else 1
    success = run_tests(args.module, verbosity=verbosity)

    print("\n" + "=" * 40)
    if success:
        print("All tests passed! ✓")
        sys.exit(0)
    else:
        print("Some tests failed! ✗")
        sys.exit(1)


if __name__ == '__main__':
    main()
