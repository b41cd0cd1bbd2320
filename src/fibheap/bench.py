import heapq
import logging
import os
import time
from typing import Callable, Final, NamedTuple

import numpy as np

from .heap import FibHeap

_logger = logging.getLogger(__name__)

HEAP_ADD_SIZE: Final = int(os.getenv("FIBHEAP_BENCH_ADD_SIZE", "200000"))
HEAP_LOOP: Final = int(os.getenv("FIBHEAP_BENCH_LOOP", "200000"))
SEED: Final = 99


class BenchResult(NamedTuple):
    name: str
    size: int
    seconds: float

    @property
    def ops_per_second(self) -> float:
        if self.seconds == 0:
            return float("inf")
        return self.size / self.seconds


def fib_push(priorities: list[float]):
    h = FibHeap()
    for p in priorities:
        h.enqueue(None, p)
    return h


def heapq_push(priorities: list[float]):
    pq = []
    for i, p in enumerate(priorities):
        heapq.heappush(pq, (p, i))
    return pq


def fib_push_pop(priorities: list[float]):
    h = fib_push(priorities)
    while len(h) > 0:
        h.dequeue_min()


def heapq_push_pop(priorities: list[float]):
    pq = heapq_push(priorities)
    while pq:
        heapq.heappop(pq)


def _timed(name: str, fn: Callable[[list[float]], object], priorities: list[float]):
    start = time.perf_counter()
    fn(priorities)
    result = BenchResult(name, len(priorities), time.perf_counter() - start)

    _logger.info(
        "%s: %d ops in %.3fs (%.0f ops/s)",
        result.name,
        result.size,
        result.seconds,
        result.ops_per_second,
    )
    return result


def run_benchmarks(add_size: int = HEAP_ADD_SIZE, loop: int = HEAP_LOOP):
    rng = np.random.default_rng(SEED)
    # Plain floats, numpy scalars are much slower to compare.
    push_priorities = rng.random(add_size).tolist()
    loop_priorities = rng.random(loop).tolist()

    return [
        _timed("fib_push", fib_push, push_priorities),
        _timed("heapq_push", heapq_push, push_priorities),
        _timed("fib_push_pop", fib_push_pop, loop_priorities),
        _timed("heapq_push_pop", heapq_push_pop, loop_priorities),
    ]


def main():
    logging.basicConfig(level=logging.INFO)
    run_benchmarks()


if __name__ == "__main__":
    main()
