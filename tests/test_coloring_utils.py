import pytest

from commdetect.coloring_utils import (
    MAX_DEGREE,
    ColorLimitError,
    ColoringConflictError,
    compute_bin_sizes,
    count_conflicts,
    distance_one_checked,
    distance_one_conf_resolution,
    distance_one_mark_array,
)
from commdetect.graph import Graph


@pytest.fixture
def triangle():
    return Graph.from_edge_list(3, [(0, 1), (1, 2), (0, 2)])


@pytest.fixture
def path():
    return Graph.from_edge_list(2, [(0, 1)])


def test_mark_array_collects_neighbour_colors(triangle):
    marked, max_color = distance_one_mark_array(triangle, 2, [0, 1, -1])
    assert marked == {0, 1}
    assert max_color == 1


def test_mark_array_ignores_uncolored_and_self_loops():
    graph = Graph.from_edge_list(2, [(0, 0), (0, 1)])
    marked, max_color = distance_one_mark_array(graph, 0, [3, -1])
    assert marked == set()
    assert max_color == -1


def test_mark_array_color_limit(path):
    with pytest.raises(ColorLimitError):
        distance_one_mark_array(path, 0, [0, MAX_DEGREE])


def test_compute_bin_sizes():
    colors = [0, 1, 1, 2]
    sizes = compute_bin_sizes(colors, 3)
    assert sizes == [1, 2, 1]
    assert sum(sizes) == len(colors)


def test_compute_bin_sizes_rejects_out_of_range():
    with pytest.raises(ValueError):
        compute_bin_sizes([0, 5], 3)


def test_conf_resolution_lower_random_loses(path):
    colors = [0, 0]
    queue = []
    freq = [2]
    assert distance_one_conf_resolution(path, 0, colors, [0.1, 0.5], queue, freq, 1)
    assert queue == [0]
    assert colors == [-1, 0]
    assert freq == [1]


def test_conf_resolution_winner_keeps_color(path):
    colors = [0, 0]
    queue = []
    freq = [2]
    assert not distance_one_conf_resolution(path, 1, colors, [0.1, 0.5], queue, freq, 1)
    assert queue == []
    assert colors == [0, 0]
    assert freq == [2]


def test_conf_resolution_tie_breaks_on_index(path):
    colors = [0, 0]
    queue = []
    freq = [2]
    distance_one_conf_resolution(path, 1, colors, [0.3, 0.3], queue, freq, 0)
    distance_one_conf_resolution(path, 0, colors, [0.3, 0.3], queue, freq, 0)
    assert queue == [0]
    assert freq == [2]


def test_checked_accepts_proper_coloring(triangle):
    assert distance_one_checked(triangle, [0, 1, 2]) is True


def test_checked_raises_on_conflict(triangle):
    with pytest.raises(ColoringConflictError):
        distance_one_checked(triangle, [0, 1, 0])


def test_checked_ignores_self_loop():
    graph = Graph.from_edge_list(2, [(0, 0), (0, 1)])
    assert distance_one_checked(graph, [0, 1]) is True


def test_count_conflicts(triangle):
    assert count_conflicts(triangle, [0, 0, 0]) == 3
    assert count_conflicts(triangle, [0, 1, 2]) == 0
    assert count_conflicts(triangle, [0, 1, 0]) == 1