import logging
import math
from typing import NamedTuple, Optional

import numpy as np

from .pqueue import PriorityQueue

GridIndex = tuple[int, int]

_logger = logging.getLogger(__name__)


class Node(NamedTuple):
    ix: GridIndex
    ref: Optional[GridIndex]
    distance: float


class SearchState(NamedTuple):
    explored: dict[GridIndex, Node]
    queue: PriorityQueue[Node, GridIndex]

    def put_node(self, node: Node):
        self.queue.update_if_less(node, node.ix, node.distance)


class SearchConfig(NamedTuple):
    # Cost of entering each cell. Non-finite cells cannot be entered.
    costs: np.ndarray
    cell_size: float = 1.0


def get_neighbor_indices(ix: GridIndex, grid: np.ndarray) -> list[GridIndex]:
    x, y = ix
    neighbors_indices = [(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)]
    neighbors_indices = [
        (a, b)
        for (a, b) in neighbors_indices
        if a >= 0 and a < grid.shape[0] and b >= 0 and b < grid.shape[1]
    ]
    return neighbors_indices


def is_passable(ix: GridIndex, config: SearchConfig) -> bool:
    return math.isfinite(config.costs[ix[0], ix[1]])


def update_node(ix: GridIndex, ref: Node, config: SearchConfig, state: SearchState):
    if not is_passable(ix, config):
        return

    distance = ref.distance + float(config.costs[ix[0], ix[1]]) * config.cell_size
    state.put_node(Node(ix, ref.ix, distance))


def search(start: GridIndex, config: SearchConfig) -> SearchState:
    if config.costs.ndim != 2:
        raise ValueError(f"Expected a 2D cost grid, got shape {config.costs.shape}")
    if np.any(config.costs < 0):
        raise ValueError("Cell costs must not be negative")
    if not is_passable(start, config):
        _logger.warning("Start cell %s is impassable", start)

    state = SearchState({}, PriorityQueue())
    state.put_node(Node(start, None, 0.0))

    i = 0

    while len(state.queue) > 0:
        if i % 500 == 0:
            _logger.info(
                "Explored %d, queue size %d", len(state.explored), len(state.queue)
            )
        first = state.queue.pop()
        state.explored[first.key] = first.item

        neighbors = get_neighbor_indices(first.key, config.costs)
        neighbors = [
            neighbor for neighbor in neighbors if neighbor not in state.explored
        ]

        for neighbor in neighbors:
            update_node(neighbor, first.item, config, state)

        i = i + 1

    return state


def distances(state: SearchState, shape: tuple[int, int]) -> np.ndarray:
    result = np.full(shape, np.inf)
    for (a, b), node in state.explored.items():
        result[a, b] = node.distance
    return result


def path(ix: GridIndex, explored: dict[GridIndex, Node]):
    node = explored[ix]
    result = [node]
    while node.ref is not None:
        result.append(explored[node.ref])
        node = explored[node.ref]
    return result


def path_length(ix: GridIndex, explored: dict[GridIndex, Node]):
    return len(path(ix, explored)) - 1
