import pytest

from fibheap.graph import dijkstra, prim, shortest_path


GRAPH = {
    "a": [("b", 7), ("c", 9), ("f", 14)],
    "b": [("a", 7), ("c", 10), ("d", 15)],
    "c": [("a", 9), ("b", 10), ("d", 11), ("f", 2)],
    "d": [("b", 15), ("c", 11), ("e", 6)],
    "e": [("d", 6), ("f", 9)],
    "f": [("a", 14), ("c", 2), ("e", 9)],
}


def test_dijkstra_distances():
    paths = dijkstra(GRAPH, "a")
    assert paths.distances == {"a": 0, "b": 7, "c": 9, "d": 20, "e": 20, "f": 11}


def test_shortest_path():
    paths = dijkstra(GRAPH, "a")
    assert shortest_path(paths, "e") == ["a", "c", "f", "e"]
    assert shortest_path(paths, "a") == ["a"]


def test_unreachable():
    graph = {"a": [("b", 1)], "c": [("a", 1)]}
    paths = dijkstra(graph, "a")

    assert paths.distances == {"a": 0, "b": 1}
    assert shortest_path(paths, "c") == []


def test_negative_weight():
    with pytest.raises(ValueError):
        dijkstra({"a": [("b", -1)]}, "a")


def test_prim():
    tree = prim(GRAPH, "a")

    assert len(tree) == len(GRAPH) - 1
    assert sum(w for _, _, w in tree) == 33
    assert {child for _, child, _ in tree} == set(GRAPH) - {"a"}


def test_prim_default_root():
    graph = {1: [(2, 3.0)], 2: [(1, 3.0)]}
    assert prim(graph) == [(1, 2, 3.0)]
    assert prim({}) == []


def test_shortest_paths_record():
    paths = dijkstra(GRAPH, "a")
    assert paths.source == "a"
    assert paths.previous["a"] is None
    assert paths.previous["f"] == "c"
