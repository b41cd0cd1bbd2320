from typing import Generic, NamedTuple, TypeVar

from .heap import Entry, FibHeap

V = TypeVar("V")
K = TypeVar("K")


class HeapNode(NamedTuple, Generic[V, K]):
    priority: float
    item: V
    key: K


class PriorityQueue(Generic[V, K]):
    """Keyed priority queue; at most one entry per key."""

    heap: FibHeap[tuple[V, K]]
    handles: dict[K, Entry[tuple[V, K]]]

    def __init__(self):
        self.heap = FibHeap()
        self.handles = {}

    def __len__(self):
        return len(self.heap)

    def put(self, item: V, key: K, priority: float):
        if key in self.handles:
            self.update(key, item, priority)
            return

        self.handles[key] = self.heap.enqueue((item, key), priority)

    def update(self, key: K, item: V, priority: float):
        handle = self.handles[key]

        if priority <= handle.priority:
            self.heap.decrease_key(handle, priority)
            handle.element = (item, key)
        else:
            # Fibonacci heaps can only lower a key.
            self.handles[key] = self.heap.enqueue((item, key), priority)
            self.heap.delete(handle)

    def update_if_less(self, item: V, key: K, priority: float):
        if self.contains(key):
            old_item = self.get(key)
            if old_item.priority > priority:
                self.update(key, item, priority)
        else:
            self.put(item, key, priority)

    def pop(self) -> HeapNode[V, K]:
        head = self.heap.dequeue_min()
        if head is None:
            raise IndexError("pop from empty priority queue")

        item, key = head.element
        del self.handles[key]

        return HeapNode(head.priority, item, key)

    def contains(self, key: K):
        return key in self.handles

    def get(self, key: K) -> HeapNode[V, K]:
        handle = self.handles[key]
        item, _ = handle.element
        return HeapNode(handle.priority, item, key)

    def all(self):
        x = []
        while len(self) > 0:
            x.append(self.pop())

        return x
