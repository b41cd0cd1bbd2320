import logging
from typing import Generic, Hashable, Iterable, Mapping, NamedTuple, Optional, TypeVar

from .heap import Entry, FibHeap

K = TypeVar("K", bound=Hashable)

Graph = Mapping[K, Iterable[tuple[K, float]]]

_logger = logging.getLogger(__name__)


class ShortestPaths(NamedTuple, Generic[K]):
    source: K
    distances: dict[K, float]
    previous: dict[K, Optional[K]]


def _edges(graph: Graph, node: K) -> Iterable[tuple[K, float]]:
    for neighbor, weight in graph.get(node, ()):
        if weight < 0:
            raise ValueError(f"Negative edge weight {weight} between {node!r} and {neighbor!r}")
        yield neighbor, weight


def dijkstra(graph: Graph, source: K) -> ShortestPaths[K]:
    """Single-source shortest paths with non-negative edge weights.

    Nodes that only appear as edge targets are handled; unreachable nodes are
    absent from the result.
    """
    heap: FibHeap[K] = FibHeap()
    handles: dict[K, Entry[K]] = {source: heap.enqueue(source, 0.0)}
    distances: dict[K, float] = {}
    previous: dict[K, Optional[K]] = {source: None}

    while len(heap) > 0:
        entry = heap.dequeue_min()
        node = entry.element
        distances[node] = entry.priority

        for neighbor, weight in _edges(graph, node):
            if neighbor in distances:
                continue

            candidate = entry.priority + weight
            handle = handles.get(neighbor)
            if handle is None:
                handles[neighbor] = heap.enqueue(neighbor, candidate)
                previous[neighbor] = node
            elif candidate < handle.priority:
                heap.decrease_key(handle, candidate)
                previous[neighbor] = node

    _logger.debug("Settled %d nodes from %r", len(distances), source)

    return ShortestPaths(source, distances, previous)


def shortest_path(paths: ShortestPaths[K], target: K) -> list[K]:
    if target not in paths.distances:
        return []

    result = [target]
    while paths.previous[result[-1]] is not None:
        result.append(paths.previous[result[-1]])
    return result[::-1]


def prim(graph: Graph, root: Optional[K] = None) -> list[tuple[K, K, float]]:
    """Minimum spanning tree of the component containing ``root``.

    Edges are treated as undirected, so ``graph`` should list each edge from
    both ends. Returns ``(parent, child, weight)`` triples in the order they
    were added.
    """
    if root is None:
        if len(graph) == 0:
            return []
        root = next(iter(graph))

    heap: FibHeap[K] = FibHeap()
    handles: dict[K, Entry[K]] = {root: heap.enqueue(root, 0.0)}
    parents: dict[K, Optional[K]] = {root: None}
    in_tree: set[K] = set()
    tree: list[tuple[K, K, float]] = []

    while len(heap) > 0:
        entry = heap.dequeue_min()
        node = entry.element
        in_tree.add(node)
        if parents[node] is not None:
            tree.append((parents[node], node, entry.priority))

        for neighbor, weight in _edges(graph, node):
            if neighbor in in_tree:
                continue

            handle = handles.get(neighbor)
            if handle is None:
                handles[neighbor] = heap.enqueue(neighbor, weight)
                parents[neighbor] = node
            elif weight < handle.priority:
                heap.decrease_key(handle, weight)
                parents[neighbor] = node

    return tree
