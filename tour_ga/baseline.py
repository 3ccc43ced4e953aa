"""Constructive reference tours, for judging how far the GA lands from a quick heuristic."""

from typing import Sequence

import networkx as nx

from .base import City, SolveResult, Tour, euclidean, tour_length


METHODS = ("nearest_neighbor", "christofides")


def to_graph(cities: Sequence[City]) -> nx.Graph:
    graph = nx.Graph()
    graph.add_nodes_from(range(len(cities)))
    for i in range(len(cities)):
        for j in range(i + 1, len(cities)):
            graph.add_edge(i, j, weight=euclidean(cities[i], cities[j]))
    return graph


def nearest_neighbor_tour(graph: nx.Graph, start: int = 0) -> Tour:
    tour = [start]
    unvisited = set(graph.nodes())
    unvisited.remove(start)
    current = start
    while unvisited:
        nxt = min(unvisited, key=lambda node: (graph[current][node]["weight"], node))
        tour.append(nxt)
        unvisited.remove(nxt)
        current = nxt
    return tour


def christofides_tour(graph: nx.Graph) -> Tour:
    cycle = nx.approximation.christofides(graph, weight="weight")
    # networkx closes the cycle by repeating the first node.
    return list(cycle[:-1])


def solve_baseline(cities: Sequence[City], method: str = "nearest_neighbor") -> SolveResult:
    graph = to_graph(cities)
    if method == "nearest_neighbor":
        tour = nearest_neighbor_tour(graph)
    elif method == "christofides":
        tour = christofides_tour(graph)
    else:
        raise ValueError(f"unknown baseline method {method!r}; choose from {', '.join(METHODS)}")
    return SolveResult(tour=tour, length=tour_length(cities, tour), solver_name=method)
