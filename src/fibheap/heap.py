import logging
import math
import os
from typing import Final, Generic, Optional, TypeVar

V = TypeVar("V")

_logger = logging.getLogger(__name__)

DEBUG: Final = bool(os.getenv("FIBHEAP_DEBUG"))


class FibHeapError(Exception):
    pass


class ExceedsPriorityError(FibHeapError, ValueError):
    def __init__(self, priority: float, new_priority: float):
        super().__init__(f"New priority {new_priority} exceeds old priority {priority}")
        self.priority = priority
        self.new_priority = new_priority


class InvalidPriorityError(FibHeapError, ValueError):
    def __init__(self, priority: float):
        super().__init__(f"{priority} is not a valid priority")
        self.priority = priority


class HeapInvariantError(FibHeapError, AssertionError):
    pass


class Entry(Generic[V]):
    """A single node of a Fibonacci heap.

    Entries double as handles: ``enqueue`` hands one out, and the same object
    is passed back to ``decrease_key`` or ``delete``. Only ``element`` and
    ``priority`` are meant to be read by callers.
    """

    __slots__ = ("element", "priority", "degree", "marked", "next", "prev", "parent", "child")

    element: V
    priority: float
    degree: int
    marked: bool
    next: "Entry[V]"
    prev: "Entry[V]"
    parent: Optional["Entry[V]"]
    child: Optional["Entry[V]"]

    def __init__(self, element: V, priority: float):
        self.element = element
        self.priority = priority
        self._reset()

    def _reset(self):
        self.degree = 0
        self.marked = False
        self.next = self
        self.prev = self
        self.parent = None
        self.child = None

    def __repr__(self):
        return f"Entry(element={self.element!r}, priority={self.priority!r})"


def merge_lists(one: Optional[Entry[V]], two: Optional[Entry[V]]) -> Optional[Entry[V]]:
    """Splice two disjoint circular lists together in O(1).

    Both arguments are assumed to be the minimum of their own list. The
    result is whichever of the two is smaller, and is the only reference
    guaranteed to point into the combined list.
    """
    if one is None:
        return two
    if two is None:
        return one

    one_next = one.next
    one.next = two.next
    one.next.prev = one
    two.next = one_next
    two.next.prev = two

    if one.priority < two.priority:
        return one
    return two


def _siblings(entry: Entry[V]) -> list[Entry[V]]:
    result = [entry]
    curr = entry.next
    while curr is not entry:
        result.append(curr)
        curr = curr.next
    return result


def _check_priority(priority: float):
    if math.isnan(priority) or math.isinf(priority):
        raise InvalidPriorityError(priority)


class FibHeap(Generic[V]):
    """Priority queue backed by a Fibonacci heap.

    ``enqueue``, ``min`` and ``decrease_key`` run in amortized O(1),
    ``dequeue_min`` and ``delete`` in amortized O(log n).

    ``decrease_key`` and ``delete`` assume the entry they are given belongs
    to this heap. This is not checked; passing an entry from another heap,
    or one that was already removed, leaves the heap in an unspecified
    state. Set ``FIBHEAP_DEBUG`` to run ``validate`` after each mutation.

    Not safe for concurrent use.
    """

    _min: Optional[Entry[V]]
    _size: int

    def __init__(self):
        self._min = None
        self._size = 0

    def __len__(self):
        return self._size

    def __repr__(self):
        if self._min is None:
            return "FibHeap(size=0)"
        return f"FibHeap(size={self._size}, min_priority={self._min.priority!r})"

    def min(self) -> Optional[Entry[V]]:
        return self._min

    def enqueue(self, element: V, priority: float) -> Entry[V]:
        _check_priority(priority)

        entry = Entry(element, priority)
        self._min = merge_lists(self._min, entry)
        self._size += 1

        if DEBUG:
            self.validate()
        return entry

    def dequeue_min(self) -> Optional[Entry[V]]:
        if self._size == 0:
            return None
        self._size -= 1

        min_entry = self._min

        # Unlink the minimum from the root list, leaving an arbitrary root
        # as a placeholder min until consolidation picks the real one.
        if min_entry.next is min_entry:
            self._min = None
        else:
            min_entry.prev.next = min_entry.next
            min_entry.next.prev = min_entry.prev
            self._min = min_entry.next

        if min_entry.child is not None:
            for child in _siblings(min_entry.child):
                child.parent = None

        self._min = merge_lists(self._min, min_entry.child)

        if self._min is not None:
            self._consolidate()

        min_entry._reset()

        if DEBUG:
            self.validate()
        return min_entry

    def _consolidate(self):
        tree_table: list[Optional[Entry[V]]] = []

        # Ring membership changes while linking, so capture it up front.
        to_visit = _siblings(self._min)

        for curr in to_visit:
            while True:
                while curr.degree >= len(tree_table):
                    tree_table.append(None)

                other = tree_table[curr.degree]
                if other is None:
                    tree_table[curr.degree] = curr
                    break

                tree_table[curr.degree] = None

                if other.priority < curr.priority:
                    smaller, larger = other, curr
                else:
                    smaller, larger = curr, other

                larger.next.prev = larger.prev
                larger.prev.next = larger.next

                larger.next = larger
                larger.prev = larger
                smaller.child = merge_lists(smaller.child, larger)

                larger.parent = smaller
                larger.marked = False
                smaller.degree += 1

                curr = smaller

            # <= so that after linking two equal roots the min still ends up
            # on the one that stayed in the root list.
            if curr.priority <= self._min.priority:
                self._min = curr

        _logger.debug(
            "Consolidated %d roots, max degree %d", len(to_visit), len(tree_table) - 1
        )

    def decrease_key(self, entry: Entry[V], new_priority: float):
        """Lower the priority of ``entry`` to ``new_priority``.

        Raises ``ExceedsPriorityError`` if ``new_priority`` is larger than the
        current priority and ``InvalidPriorityError`` for NaN or infinite
        values. In both cases the heap is left untouched.

        ``entry`` must belong to this heap.
        """
        _check_priority(new_priority)
        if new_priority > entry.priority:
            raise ExceedsPriorityError(entry.priority, new_priority)

        self._decrease_key_unchecked(entry, new_priority)

        if DEBUG:
            self.validate()

    def delete(self, entry: Entry[V]):
        """Remove ``entry`` from the heap. ``entry`` must belong to this heap."""
        # -inf guarantees a cut and makes the entry the global minimum.
        self._decrease_key_unchecked(entry, -math.inf)
        self.dequeue_min()

    def _decrease_key_unchecked(self, entry: Entry[V], priority: float):
        entry.priority = priority

        if entry.parent is not None and entry.priority <= entry.parent.priority:
            self._cut(entry)

        if entry.priority <= self._min.priority:
            self._min = entry

    def _cut(self, entry: Entry[V]):
        entry.marked = False

        while entry.parent is not None:
            parent = entry.parent

            if entry.next is not entry:
                entry.next.prev = entry.prev
                entry.prev.next = entry.next

            if parent.child is entry:
                if entry.next is not entry:
                    parent.child = entry.next
                else:
                    parent.child = None

            parent.degree -= 1

            entry.next = entry
            entry.prev = entry
            entry.parent = None
            self._min = merge_lists(self._min, entry)

            # Roots stay unmarked, so the cascade always stops at the root list.
            if not parent.marked:
                if parent.parent is not None:
                    parent.marked = True
                return

            _logger.debug("Cascading cut at priority %s", parent.priority)
            parent.marked = False
            entry = parent

    def validate(self):
        """Walk the whole heap and check its structural invariants.

        Raises ``HeapInvariantError`` on the first violation. Runs in O(n);
        intended for tests and debugging.
        """
        if self._min is None:
            if self._size != 0:
                raise HeapInvariantError(f"Empty heap reports size {self._size}")
            return

        stack = []
        for root in self._walk_ring(self._min):
            if root.parent is not None:
                raise HeapInvariantError(f"Root {root!r} has a parent")
            if root.marked:
                raise HeapInvariantError(f"Root {root!r} is marked")
            if root.priority < self._min.priority:
                raise HeapInvariantError(
                    f"Root {root!r} is smaller than min {self._min!r}"
                )
            stack.append(root)

        count = 0
        while stack:
            node = stack.pop()
            count += 1

            if node.child is None:
                if node.degree != 0:
                    raise HeapInvariantError(f"Childless {node!r} has degree {node.degree}")
                continue

            children = self._walk_ring(node.child)
            if len(children) != node.degree:
                raise HeapInvariantError(
                    f"{node!r} has {len(children)} children but degree {node.degree}"
                )
            for child in children:
                if child.parent is not node:
                    raise HeapInvariantError(f"{child!r} does not point back to {node!r}")
                if child.priority < node.priority:
                    raise HeapInvariantError(f"{child!r} is smaller than parent {node!r}")
            stack.extend(children)

        if count != self._size:
            raise HeapInvariantError(f"Counted {count} entries, size is {self._size}")

    def _walk_ring(self, start: Entry[V]) -> list[Entry[V]]:
        members = [start]
        curr = start
        while True:
            if curr.next.prev is not curr or curr.prev.next is not curr:
                raise HeapInvariantError(f"Broken sibling links at {curr!r}")
            curr = curr.next
            if curr is start:
                return members
            members.append(curr)
            if len(members) > self._size:
                raise HeapInvariantError("Sibling ring does not close")


def merge(one: FibHeap[V], two: FibHeap[V]) -> FibHeap[V]:
    """Union of two heaps. Both inputs are emptied."""
    result: FibHeap[V] = FibHeap()
    result._min = merge_lists(one._min, two._min)
    result._size = one._size + two._size

    one._min = None
    two._min = None
    one._size = 0
    two._size = 0

    if DEBUG:
        result.validate()
    return result
