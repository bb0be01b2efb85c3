#!/usr/bin/env python3
"""
Runs a randomized differential test of SparseSet against a list-based reference model, and prints
per-operation timings.

Defaults can be overridden in config.txt at the repo root (keys: fuzz.length, fuzz.num_ops,
fuzz.seed).
"""
import argparse
import logging
import sys

from termcolor import colored

from sparseset.fuzz import FuzzMismatch, FuzzParams, run_fuzz
from sparseset.logging_util import LoggingParams, configure_logger
from sparseset.profiling import ProfilerRegistry


logger = logging.getLogger(__name__)


def get_args():
    parser = argparse.ArgumentParser(description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    FuzzParams.add_args(parser)
    LoggingParams.add_args(parser)
    parser.add_argument('-p', '--profile', action='store_true',
                        help='print per-operation timings')
    return parser.parse_args()


def main():
    args = get_args()
    configure_logger(params=LoggingParams.create(args))
    params = FuzzParams.create(args)

    profilers = ProfilerRegistry()
    try:
        report = run_fuzz(params, profilers)
    except FuzzMismatch as e:
        logger.error('Mismatch: %s', e)
        print(colored(f'FAILURE! seed={params.seed} step={e.step}', 'red'))
        sys.exit(1)

    if args.profile:
        profilers.dump()

    ops = ', '.join(f'{op}={n}' for op, n in sorted(report.op_counts.items()))
    print(colored(f'All {report.num_ops} operations agreed with the reference model!', 'green'))
    print(f'ops: {ops}')
    print(f'out-of-bounds inserts: {report.out_of_bounds_count}')
    print(f'max count: {report.max_count}, final count: {report.final_count}')


if __name__ == '__main__':
    main()
