"""
Variation and selection operators over permutation tours.

Every operator takes an explicit ``random.Random`` so a seeded run is
reproducible draw for draw.
"""

import math
import random
from typing import List, Sequence, Tuple

from .base import Tour


def create_individual(num_cities: int, rng: random.Random) -> Tour:
    tour = list(range(num_cities))
    # Fisher-Yates: i from n-1 down to 1, swap with a uniform j in [0, i].
    rng.shuffle(tour)
    return tour


def create_population(num_cities: int, size: int, rng: random.Random) -> List[Tour]:
    return [create_individual(num_cities, rng) for _ in range(size)]


def elite_count(population_size: int, elite_fraction: float) -> int:
    return int(math.floor(population_size * elite_fraction))


def select_parents(population: Sequence[Tour], rng: random.Random) -> Tuple[Tour, Tour]:
    """Draw two parents uniformly from the whole population (with replacement)."""
    size = len(population)
    parent_a = population[rng.randrange(size)]
    parent_b = population[rng.randrange(size)]
    return parent_a, parent_b


def ordered_crossover(parent_a: Sequence[int], parent_b: Sequence[int], start: int, end: int) -> Tour:
    """
    Keep ``parent_a[start:end]`` as a block, then append the remaining cities
    in the order they appear in ``parent_b``.

    When ``end <= start`` the block is empty and the child is a copy of
    ``parent_b``.
    """
    child = list(parent_a[start:end])
    taken = set(child)
    for city in parent_b:
        if city not in taken:
            child.append(city)
            taken.add(city)
    return child


def crossover(parent_a: Sequence[int], parent_b: Sequence[int], rng: random.Random) -> Tour:
    n = len(parent_a)
    start = rng.randrange(n)
    end = rng.randrange(n)
    return ordered_crossover(parent_a, parent_b, start, end)


def swap_mutation(tour: Tour, rng: random.Random) -> Tour:
    n = len(tour)
    i = rng.randrange(n)
    j = rng.randrange(n)
    tour[i], tour[j] = tour[j], tour[i]
    return tour


def maybe_mutate(tour: Tour, rate: float, rng: random.Random) -> Tour:
    if rng.random() < rate:
        swap_mutation(tour, rng)
    return tour


def breed(population: Sequence[Tour], count: int, mutation_rate: float, rng: random.Random) -> List[Tour]:
    children: List[Tour] = []
    for _ in range(count):
        parent_a, parent_b = select_parents(population, rng)
        child = crossover(parent_a, parent_b, rng)
        children.append(maybe_mutate(child, mutation_rate, rng))
    return children
