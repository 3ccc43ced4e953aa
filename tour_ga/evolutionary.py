import concurrent.futures
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

import numpy as np

from .base import City, ConfigError, DegenerateTourError, SolveResult, Tour, fitness_from_length
from .evaluation import distance_matrix, is_degenerate, population_lengths
from .operators import breed, create_population, elite_count


@dataclass(frozen=True)
class EvolutionConfig:
    num_cities: int = 10
    population_size: int = 100
    mutation_rate: float = 0.02
    generations: int = 500
    elite_fraction: float = 0.1
    random_seed: Optional[int] = None
    workers: int = 1

    def __post_init__(self):
        if self.num_cities < 2:
            raise ConfigError(f"num_cities must be at least 2, got {self.num_cities}")
        if self.population_size < 2:
            raise ConfigError(f"population_size must be at least 2, got {self.population_size}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ConfigError(f"mutation_rate must be in [0, 1], got {self.mutation_rate}")
        if self.generations < 0:
            raise ConfigError(f"generations must be non-negative, got {self.generations}")
        if not 0.0 <= self.elite_fraction < 1.0:
            raise ConfigError(f"elite_fraction must be in [0, 1), got {self.elite_fraction}")
        if self.workers < 1:
            raise ConfigError(f"workers must be at least 1, got {self.workers}")

    @property
    def elite_size(self) -> int:
        return elite_count(self.population_size, self.elite_fraction)


@dataclass
class GenerationStats:
    generation: int
    best_length: float
    mean_length: float

    @property
    def best_fitness(self) -> float:
        return fitness_from_length(self.best_length)


class EvolutionarySearch:
    def __init__(
        self,
        config: EvolutionConfig,
        cities: Sequence[City],
        rng: random.Random = None,
        device=None,
    ):
        if len(cities) != config.num_cities:
            raise ConfigError(
                f"config expects {config.num_cities} cities but {len(cities)} were given"
            )
        self.cfg = config
        self.cities = tuple(cities)
        self.rng = rng or random.Random(config.random_seed)
        self.dist = distance_matrix(self.cities, device=device)
        if is_degenerate(self.dist):
            raise DegenerateTourError("all cities coincide; every tour has zero length")
        self.generation = 0
        self.history: List[GenerationStats] = []
        self.population: List[Tour] = []
        self.lengths: List[float] = []
        self._rank(create_population(config.num_cities, config.population_size, self.rng))
        self.record_stats()

    def _rank(self, population: List[Tour]) -> None:
        # Shortest first is fittest first: every length is positive here.
        lengths = population_lengths(self.dist, population)
        order = sorted(range(len(population)), key=lengths.__getitem__)
        self.population = [population[i] for i in order]
        self.lengths = [lengths[i] for i in order]
        for prev, cur in zip(self.lengths, self.lengths[1:]):
            if cur < prev:
                raise RuntimeError("population is not ranked by descending fitness")

    def record_stats(self) -> GenerationStats:
        stats = GenerationStats(
            generation=self.generation,
            best_length=self.lengths[0],
            mean_length=float(np.mean(self.lengths)),
        )
        self.history.append(stats)
        return stats

    def _breed(self, count: int) -> List[Tour]:
        workers = min(self.cfg.workers, count)
        if workers <= 1:
            return breed(self.population, count, self.cfg.mutation_rate, self.rng)
        # Fixed shares and per-worker seeds keep the result independent of scheduling.
        seeds = [self.rng.getrandbits(64) for _ in range(workers)]
        base, extra = divmod(count, workers)
        shares = [base + (1 if i < extra else 0) for i in range(workers)]

        def worker(share_seed):
            share, seed = share_seed
            return breed(self.population, share, self.cfg.mutation_rate, random.Random(seed))

        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
            batches = list(ex.map(worker, zip(shares, seeds)))
        return [child for batch in batches for child in batch]

    def step(self) -> GenerationStats:
        n_elite = self.cfg.elite_size
        new_pop: List[Tour] = [list(t) for t in self.population[:n_elite]]
        new_pop.extend(self._breed(self.cfg.population_size - n_elite))
        self._rank(new_pop)
        self.generation += 1
        return self.record_stats()

    def run(self, callback: Callable[[GenerationStats], None] = None) -> SolveResult:
        for _ in range(self.cfg.generations):
            stats = self.step()
            if callback is not None:
                callback(stats)
        return self.best()

    def best(self) -> SolveResult:
        best_idx = 0
        best_fit = fitness_from_length(self.lengths[0])
        for i in range(1, len(self.population)):
            fit = fitness_from_length(self.lengths[i])
            if fit > best_fit:
                best_idx = i
                best_fit = fit
        return SolveResult(tour=list(self.population[best_idx]), length=self.lengths[best_idx])

    def set_population(self, tours: Sequence[Tour]) -> None:
        if len(tours) != self.cfg.population_size:
            raise ValueError(
                f"expected {self.cfg.population_size} tours, got {len(tours)}"
            )
        self._rank([list(t) for t in tours])

    def replace_worst(self, tours: Sequence[Tour]) -> None:
        if not tours:
            return
        if len(tours) > len(self.population):
            raise ValueError("more incoming tours than population slots")
        population = self.population[: len(self.population) - len(tours)]
        population.extend(list(t) for t in tours)
        self._rank(population)
