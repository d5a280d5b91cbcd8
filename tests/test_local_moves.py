import pytest

from commdetect.graph import Graph
from commdetect.local_moves import (
    Community,
    LocalMap,
    apply_move,
    best_move,
    build_local_map_counter,
)


def _degrees(g):
    return [sum(e.weight for e in g.neighbors(v)) for v in range(g.num_vertices)]


def _singletons(degrees):
    return [Community(degree=d, size=1) for d in degrees]


def test_local_map_own_community_first():
    g = Graph.from_edge_list(3, [(0, 1), (0, 2)])
    local = build_local_map_counter(g, 0, [2, 1, 0])
    assert local.own_community == 2
    assert list(local.counters) == [2, 1, 0]
    assert local.counters[2] == 0.0


def test_local_map_weights_sum_to_degree():
    g = Graph.from_edge_list(4, [(0, 1, 2.0), (0, 2, 3.0), (0, 3, 0.5), (0, 0, 1.5)])
    assignment = [0, 1, 1, 0]
    local = build_local_map_counter(g, 0, assignment)
    assert sum(local.counters.values()) == pytest.approx(_degrees(g)[0])
    assert local.self_loop == 1.5
    assert local.eix == pytest.approx(local.counters[0] - local.self_loop)


def test_isolated_vertex_map():
    g = Graph.from_edge_list(2, [])
    local = build_local_map_counter(g, 1, [0, 1])
    assert local.counters == {1: 0.0}
    assert local.eix == 0.0


def test_best_move_joins_neighbour():
    g = Graph.from_edge_list(2, [(0, 1)])
    degrees = _degrees(g)
    info = _singletons(degrees)
    assignment = [0, 1]
    constant = 1.0 / sum(degrees)
    local = build_local_map_counter(g, 0, assignment)
    assert best_move(0, local, info, assignment, constant, degrees) == 1


def test_best_move_ties_go_to_smaller_id():
    g = Graph.from_edge_list(3, [(0, 1), (1, 2)])
    degrees = _degrees(g)
    info = _singletons(degrees)
    assignment = [0, 1, 2]
    constant = 1.0 / sum(degrees)
    local = build_local_map_counter(g, 1, assignment)
    assert best_move(1, local, info, assignment, constant, degrees) == 0


def test_best_move_stays_without_neighbours():
    info = [Community(degree=1.0, size=1)]
    local = LocalMap(counters={0: 0.0})
    assert best_move(0, local, info, [0], 0.5, [1.0]) == 0


def test_apply_move_preserves_totals():
    g = Graph.from_edge_list(3, [(0, 1), (1, 2), (0, 2)])
    degrees = _degrees(g)
    info = _singletons(degrees)
    assignment = [0, 1, 2]
    total_degree = sum(c.degree for c in info)
    total_size = sum(c.size for c in info)
    assert apply_move(0, 1, info, assignment, degrees) is True
    assert assignment == [1, 1, 2]
    assert info[0].size == 0
    assert info[0].degree == pytest.approx(0.0)
    assert info[1].size == 2
    assert sum(c.degree for c in info) == pytest.approx(total_degree)
    assert sum(c.size for c in info) == total_size


def test_apply_move_to_same_community_is_noop():
    info = [Community(degree=2.0, size=1)]
    assignment = [0]
    assert apply_move(0, 0, info, assignment, [2.0]) is False
    assert assignment == [0]
    assert info[0] == Community(degree=2.0, size=1)