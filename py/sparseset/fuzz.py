"""
Randomized differential testing of SparseSet.

run_fuzz() applies a random sequence of operations to a SparseSet and to a ReferenceSparseSet, and
checks after every step that both agree on the operation's result, on the iteration order, and that
SparseSet's internal invariants hold.
"""
from dataclasses import dataclass, field
import logging
from typing import Dict, List, Optional

import numpy as np

from sparseset.config import Config
from sparseset.profiling import ProfilerRegistry
from sparseset.reference import ReferenceSparseSet
from sparseset.sparse_set import OutOfBoundsError, SparseSet


logger = logging.getLogger(__name__)


OPS = ['insert', 'contains', 'unordered_remove', 'ordered_remove', 'clear', 'iterate']
DEFAULT_OP_WEIGHTS = [40, 25, 15, 15, 1, 4]


class FuzzMismatch(Exception):
    """
    Raised when SparseSet and ReferenceSparseSet disagree.
    """
    def __init__(self, step: int, op: str, x: Optional[int], expected, actual):
        super().__init__(f'step={step} op={op} x={x}: expected {expected!r}, got {actual!r}')
        self.step = step
        self.op = op
        self.x = x
        self.expected = expected
        self.actual = actual


@dataclass
class FuzzParams:
    length: int = 100
    num_ops: int = 10000
    seed: int = 0
    op_weights: List[int] = field(default_factory=lambda: list(DEFAULT_OP_WEIGHTS))

    # fraction of operands drawn from beyond length, to exercise out-of-range handling
    overflow_frac: float = 0.1

    @staticmethod
    def create(args) -> 'FuzzParams':
        return FuzzParams(
            length=int(args.length),
            num_ops=int(args.num_ops),
            seed=int(args.seed),
        )

    @staticmethod
    def add_args(parser, cfg: Optional[Config] = None):
        cfg = Config.instance() if cfg is None else cfg
        defaults = FuzzParams()
        group = parser.add_argument_group('Fuzz options')
        cfg.add_parser_argument('fuzz.length', group, '-n', '--length', type=int,
                                default=defaults.length, help='length of the fuzzed set')
        cfg.add_parser_argument('fuzz.num_ops', group, '-k', '--num-ops', type=int,
                                default=defaults.num_ops, help='number of random operations')
        cfg.add_parser_argument('fuzz.seed', group, '-s', '--seed', type=int,
                                default=defaults.seed, help='random seed')


@dataclass
class FuzzReport:
    num_ops: int = 0
    op_counts: Dict[str, int] = field(default_factory=dict)
    out_of_bounds_count: int = 0
    max_count: int = 0
    final_count: int = 0


def run_fuzz(params: FuzzParams, profilers: Optional[ProfilerRegistry] = None) -> FuzzReport:
    assert len(params.op_weights) == len(OPS), params.op_weights
    rng = np.random.default_rng(params.seed)
    weights = np.array(params.op_weights, dtype=float)
    probs = weights / weights.sum()
    max_operand = params.length + max(1, int(params.length * params.overflow_frac))

    s = SparseSet(params.length)
    ref = ReferenceSparseSet(params.length)
    profilers = ProfilerRegistry() if profilers is None else profilers
    report = FuzzReport()

    logger.info('Fuzzing SparseSet: length=%s num_ops=%s seed=%s',
                params.length, params.num_ops, params.seed)

    ops = rng.choice(len(OPS), size=params.num_ops, p=probs)
    operands = rng.integers(1, max_operand, endpoint=True, size=params.num_ops)
    for step, (op_index, x) in enumerate(zip(ops, operands)):
        op = OPS[op_index]
        x = int(x)
        report.op_counts[op] = report.op_counts.get(op, 0) + 1
        profiler = profilers[op]

        if op == 'clear':
            profiler.start()
            s.clear()
            profiler.stop()
            ref.clear()
            x = None
        elif op == 'iterate':
            profiler.start()
            actual = list(s.iterate())
            profiler.stop()
            expected = list(enumerate(ref.to_list(), start=1))
            if actual != expected:
                raise FuzzMismatch(step, op, None, expected, actual)
            x = None
        else:
            expected = _apply(getattr(ref, op), x, IndexError)
            profiler.start()
            actual = _apply(getattr(s, op), x, OutOfBoundsError)
            profiler.stop()
            if actual != expected:
                raise FuzzMismatch(step, op, x, expected, actual)
            if actual == 'out-of-bounds':
                report.out_of_bounds_count += 1

        s.check_invariants()
        if s.to_list() != ref.to_list():
            raise FuzzMismatch(step, op, x, ref.to_list(), s.to_list())
        report.max_count = max(report.max_count, s.count())

    report.num_ops = params.num_ops
    report.final_count = s.count()
    logger.info('Fuzzing complete: %s ops, max_count=%s, final_count=%s',
                report.num_ops, report.max_count, report.final_count)
    return report


def _apply(fn, x: int, out_of_bounds_type):
    try:
        return fn(x)
    except out_of_bounds_type:
        return 'out-of-bounds'
