"""
Genetic-algorithm search for short closed tours over a fixed set of 2D cities.
"""

from .base import City, ConfigError, DegenerateTourError, SolveResult, Tour, fitness, tour_length
from .evolutionary import EvolutionConfig, EvolutionarySearch, GenerationStats
from .island import IslandConfig, IslandModel

__all__ = [
    "City",
    "ConfigError",
    "DegenerateTourError",
    "SolveResult",
    "Tour",
    "fitness",
    "tour_length",
    "EvolutionConfig",
    "EvolutionarySearch",
    "GenerationStats",
    "IslandConfig",
    "IslandModel",
]
