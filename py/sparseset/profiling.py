from collections import defaultdict
import time
from typing import Callable


class Profiler:
    """
    Accumulates wall-clock timings of repeated calls to one operation.
    """
    __slots__ = ['_total_sec', '_count', '_start_t', '_min', '_max']

    def __init__(self):
        self._total_sec = 0.0
        self._count = 0
        self._start_t = 0.0
        self._min = float('inf')
        self._max = 0.0

    def start(self):
        self._start_t = time.perf_counter()

    def stop(self):
        delta = time.perf_counter() - self._start_t
        self._total_sec += delta
        self._count += 1
        self._min = min(self._min, delta)
        self._max = max(self._max, delta)

    def get_total_sec(self) -> float:
        return self._total_sec

    def get_count(self) -> int:
        return self._count

    def get_avg_sec(self) -> float:
        return self._total_sec / self._count if self._count else 0.0

    @staticmethod
    def header() -> str:
        return '%-18s %12s %8s %12s %12s %12s' % (
            'Name', 'Total(s)', 'Count', 'Min(us)', 'Avg(us)', 'Max(us)')

    def row(self, name: str) -> str:
        lo = self._min if self._count else 0.0
        return '%-18s %12.3f %8d %12.3f %12.3f %12.3f' % (
            name, self._total_sec, self._count, lo * 1e6, self.get_avg_sec() * 1e6,
            self._max * 1e6)


class ProfilerRegistry(defaultdict):
    """
    Maps operation names to Profilers, creating them on first access.
    """
    def __init__(self):
        super().__init__(Profiler)

    def dump(self, print_fn: Callable[[str], None] = print):
        print_fn(Profiler.header())
        for name in sorted(self):
            print_fn(self[name].row(name))
