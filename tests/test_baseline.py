import pytest

from tour_ga.base import is_permutation, tour_length
from tour_ga.baseline import christofides_tour, nearest_neighbor_tour, solve_baseline, to_graph
from tour_ga.data import SAMPLE_CITIES


def test_graph_is_complete(square):
    graph = to_graph(square)
    assert graph.number_of_nodes() == 4
    assert graph.number_of_edges() == 6
    assert graph[0][2]["weight"] == pytest.approx(2 ** 0.5)


def test_nearest_neighbor_on_square(square):
    tour = nearest_neighbor_tour(to_graph(square))
    assert tour == [0, 1, 2, 3]
    assert tour_length(square, tour) == pytest.approx(4.0)


def test_christofides_is_valid():
    tour = christofides_tour(to_graph(SAMPLE_CITIES))
    assert is_permutation(tour, len(SAMPLE_CITIES))


@pytest.mark.parametrize("method", ["nearest_neighbor", "christofides"])
def test_solve_baseline(method):
    result = solve_baseline(SAMPLE_CITIES, method)
    assert result.solver_name == method
    assert result.length == pytest.approx(tour_length(SAMPLE_CITIES, result.tour))


def test_unknown_baseline(square):
    with pytest.raises(ValueError):
        solve_baseline(square, "simulated_annealing")
