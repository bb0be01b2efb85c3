#!/usr/bin/env python3
"""
Walks the py/tests/ directory and runs every python test file contained within, each in its own
process.
"""
import argparse
import os
import subprocess
import sys

from termcolor import colored

from sparseset.repo_util import Repo


def get_args():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('-k', '--keyword', default='',
                        help='only run test files whose name contains this substring')
    return parser.parse_args()


def find_test_files(tests_dir, keyword=''):
    for root, dirs, files in os.walk(tests_dir):
        dirs.sort()
        for file in sorted(files):
            if file.startswith('test_') and file.endswith('.py') and keyword in file:
                yield os.path.join(root, file)


def run_py_tests(tests_dir, keyword=''):
    py_dir = os.path.dirname(os.path.abspath(__file__))
    env = dict(os.environ)
    env['PYTHONPATH'] = os.pathsep.join(filter(None, [py_dir, env.get('PYTHONPATH')]))

    pass_count = 0
    fail_count = 0
    failed_tests = []

    for full_file in find_test_files(tests_dir, keyword):
        print(f'Running: {full_file}')
        proc = subprocess.run([sys.executable, full_file], env=env, capture_output=True,
                              encoding='utf-8')
        if proc.returncode:
            print(colored(f'FAILURE in {full_file}!', 'red'))
            print('stdout:')
            print(proc.stdout)
            print('stderr:')
            print(proc.stderr)
            fail_count += 1
            failed_tests.append(full_file)
        else:
            pass_count += 1

    if fail_count == 0:
        print(colored(f'All {pass_count} python tests passed!', 'green'))
    else:
        print(colored(f'Failed {fail_count} of {fail_count + pass_count} python tests!', 'red'))
        for filename in failed_tests:
            print(colored(f"❌ {filename}", 'red'))
    return fail_count


def main():
    args = get_args()
    tests_dir = Repo.tests_dir()
    if tests_dir is None:
        print(colored('Could not locate the repo root (missing REPO_ROOT_MARKER)', 'red'))
        sys.exit(1)

    if run_py_tests(tests_dir, args.keyword):
        sys.exit(1)


if __name__ == '__main__':
    main()
