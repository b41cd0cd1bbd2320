import logging

import numpy as np

from .heap import FibHeap

_logger = logging.getLogger(__name__)


def dequeue_order(count: int = 20, seed: int = 22) -> list[int]:
    rng = np.random.default_rng(seed)
    h: FibHeap[int] = FibHeap()
    for i in range(count):
        h.enqueue(i, float(rng.random()))

    _logger.info("Enqueued %d elements", len(h))

    order = []
    x = h.dequeue_min()
    while x is not None:
        order.append(x.element)
        x = h.dequeue_min()
    return order


def main():
    logging.basicConfig(level=logging.INFO)
    for element in dequeue_order():
        print("Min", element)


if __name__ == "__main__":
    main()
