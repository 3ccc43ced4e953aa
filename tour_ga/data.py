from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import numpy as np
import tsplib95

from .base import City, tour_length


SAMPLE_CITIES: Tuple[City, ...] = (
    City(0, 0),
    City(1, 2),
    City(3, 1),
    City(4, 6),
    City(2, 3),
    City(5, 5),
    City(7, 8),
    City(6, 2),
    City(9, 1),
    City(8, 4),
)


@dataclass
class Instance:
    name: str
    path: Optional[Path]
    cities: Tuple[City, ...]
    optimum: Optional[float] = None


def random_cities(n: int, seed: Optional[int] = None, scale: float = 100.0) -> Tuple[City, ...]:
    rng = np.random.default_rng(seed)
    points = rng.uniform(0.0, scale, size=(n, 2))
    return tuple(City(float(x), float(y)) for x, y in points)


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _load_optimum(path: Path, cities: Tuple[City, ...], index: Dict[int, int]) -> Optional[float]:
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        tour_file = tsplib95.parse(candidate.read_text())
        if not tour_file.tours:
            continue
        unknown = [node for node in tour_file.tours[0] if node not in index]
        if unknown:
            raise ValueError(f"{candidate} visits nodes missing from {path.name}: {unknown}")
        tour = [index[node] for node in tour_file.tours[0]]
        return tour_length(cities, tour)
    return None


def load_instance(path: Path) -> Instance:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"TSPLIB file not found: {path}")
    problem = tsplib95.load(path)
    coords = problem.node_coords or problem.display_data
    if not coords:
        raise ValueError(f"{path} has no node coordinates")
    nodes = sorted(coords)
    index = {node: i for i, node in enumerate(nodes)}
    cities = tuple(
        City(x=float(coords[node][0]), y=float(coords[node][1]), name=str(node)) for node in nodes
    )
    optimum = _load_optimum(path, cities, index)
    return Instance(name=problem.name or path.stem, path=path, cities=cities, optimum=optimum)


def sample_instance() -> Instance:
    return Instance(name="sample10", path=None, cities=SAMPLE_CITIES)


def random_instance(n: int, seed: Optional[int] = None) -> Instance:
    return Instance(name=f"random{n}", path=None, cities=random_cities(n, seed=seed))
