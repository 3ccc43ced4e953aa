import math
from dataclasses import dataclass
from typing import List, Optional, Sequence


Tour = List[int]


class ConfigError(ValueError):
    """Invalid search configuration."""


class DegenerateTourError(ValueError):
    """A tour of zero length, i.e. every city sits on the same point."""


@dataclass(frozen=True)
class City:
    x: float
    y: float
    name: Optional[str] = None


def euclidean(a: City, b: City) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(dx * dx + dy * dy)


def tour_length(cities: Sequence[City], tour: Sequence[int]) -> float:
    dist = 0.0
    n = len(tour)
    for i in range(n):
        a = cities[tour[i]]
        b = cities[tour[(i + 1) % n]]
        dist += euclidean(a, b)
    return float(dist)


def fitness_from_length(length: float) -> float:
    if length == 0.0:
        raise DegenerateTourError("tour has zero length; fitness is undefined")
    return 1.0 / length


def fitness(cities: Sequence[City], tour: Sequence[int]) -> float:
    return fitness_from_length(tour_length(cities, tour))


def is_permutation(tour: Sequence[int], num_cities: int) -> bool:
    return len(tour) == num_cities and sorted(tour) == list(range(num_cities))


@dataclass
class SolveResult:
    tour: Tour
    length: float
    solver_name: str = "genetic"
    optimum: Optional[float] = None

    @property
    def fitness(self) -> float:
        return fitness_from_length(self.length)

    @property
    def gap(self) -> Optional[float]:
        if self.optimum is None or math.isclose(self.optimum, 0.0):
            return None
        return (self.length - self.optimum) / self.optimum
