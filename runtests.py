#! /usr/bin/env python
"""Run the rbac_auth test suite, then lint it.

    ./runtests.py                    # tests + flake8
    ./runtests.py --fast             # quiet tests, no lint
    ./runtests.py --nolint TestRole  # tests matching an expression
    ./runtests.py --lintonly
    ./runtests.py --coverage
"""
import os
import subprocess
import sys

import pytest

APP_NAME = 'rbac_auth'
TESTS = 'tests'
SETTINGS = 'tests.settings'

sys.path.append(os.path.dirname(os.path.abspath(__file__)))


def pop_flag(args, flag):
    if flag in args:
        args.remove(flag)
        return True
    return False


def pytest_arguments(args, fast=False, coverage=False):
    pytest_args = [TESTS, '--tb=short', '-rw', '--ds=%s' % SETTINGS]
    if fast:
        pytest_args.append('-q')
    if coverage:
        pytest_args += ['--cov-report', 'xml', '--cov', APP_NAME]
    for arg in args:
        if arg.startswith('-'):
            pytest_args.append(arg)
        else:
            # `TestCase.test_function` selects both names
            pytest_args += ['-k', ' and '.join(arg.split('.', 1))]
    return pytest_args


def main(argv):
    args = list(argv)
    fast = pop_flag(args, '--fast')
    run_flake8 = not (pop_flag(args, '--nolint') or fast)
    run_tests = not pop_flag(args, '--lintonly')
    coverage = pop_flag(args, '--coverage')

    if run_tests:
        ret = pytest.main(pytest_arguments(args, fast, coverage))
        if ret:
            return ret

    if run_flake8:
        print('Running flake8 code linting')
        ret = subprocess.call(['flake8', APP_NAME, TESTS])
        print('flake8 failed' if ret else 'flake8 passed')
        return ret
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
