import random
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence

from .base import City, ConfigError, SolveResult, Tour
from .evolutionary import EvolutionConfig, EvolutionarySearch


@dataclass(frozen=True)
class IslandConfig(EvolutionConfig):
    islands: int = 2
    migration_interval: int = 5
    migrants: int = 2

    def __post_init__(self):
        super().__post_init__()
        if self.islands < 1:
            raise ConfigError(f"islands must be at least 1, got {self.islands}")
        if self.migration_interval < 1:
            raise ConfigError(
                f"migration_interval must be at least 1, got {self.migration_interval}"
            )
        if not 0 <= self.migrants < self.population_size:
            raise ConfigError(
                f"migrants must be in [0, population_size), got {self.migrants}"
            )


def _island_rng(cfg: IslandConfig, index: int) -> random.Random:
    if cfg.random_seed is None:
        return random.Random()
    return random.Random(cfg.random_seed + index)


class IslandModel:
    def __init__(self, cfg: IslandConfig, cities: Sequence[City]):
        self.cfg = cfg
        self.cities = tuple(cities)
        self.islands: List[EvolutionarySearch] = [
            EvolutionarySearch(cfg, self.cities, rng=_island_rng(cfg, i))
            for i in range(cfg.islands)
        ]
        self.generation = 0

    def migrate(self) -> None:
        if self.cfg.migrants == 0 or len(self.islands) < 2:
            return
        # Populations are ranked, so the head holds the emigrants.
        migrants: List[List[Tour]] = [
            [list(t) for t in island.population[: self.cfg.migrants]] for island in self.islands
        ]
        for i, island in enumerate(self.islands):
            island.replace_worst(migrants[(i - 1) % len(self.islands)])

    def step(self) -> None:
        for island in self.islands:
            island.step()
        self.generation += 1
        if self.generation % self.cfg.migration_interval == 0:
            self.migrate()

    def run(self, generations: Optional[int] = None, callback=None) -> SolveResult:
        remaining = self.cfg.generations - self.generation if generations is None else generations
        for _ in range(max(0, remaining)):
            self.step()
            if callback is not None:
                callback(self)
        return self.best()

    def best(self) -> SolveResult:
        best_result = None
        for island in self.islands:
            result = island.best()
            if best_result is None or result.fitness > best_result.fitness:
                best_result = result
        return best_result

    def to_state(self) -> Dict:
        return {
            "cfg": asdict(self.cfg),
            "generation": self.generation,
            "cities": [[c.x, c.y, c.name] for c in self.cities],
            "islands": [
                {
                    "generation": island.generation,
                    "population": [list(t) for t in island.population],
                    "rng": _dump_rng(island.rng),
                }
                for island in self.islands
            ],
        }

    @classmethod
    def from_state(cls, state: Dict) -> "IslandModel":
        cfg = IslandConfig(**state["cfg"])
        cities = [City(x=x, y=y, name=name) for x, y, name in state["cities"]]
        model = cls(cfg, cities)
        model.generation = state.get("generation", 0)
        for island, island_state in zip(model.islands, state.get("islands", [])):
            population = island_state.get("population", [])
            if population:
                island.set_population(population)
            island.generation = island_state.get("generation", model.generation)
            island.history = []
            island.record_stats()
            if "rng" in island_state:
                island.rng.setstate(_load_rng(island_state["rng"]))
        return model


def _dump_rng(rng: random.Random) -> List:
    version, internal, gauss_next = rng.getstate()
    return [version, list(internal), gauss_next]


def _load_rng(data: List):
    version, internal, gauss_next = data
    return (version, tuple(internal), gauss_next)
