from typing import List, Sequence

import numpy as np
import torch

from .base import City


def distance_matrix(cities: Sequence[City], device=None) -> torch.Tensor:
    coords = np.array([[c.x, c.y] for c in cities], dtype=np.float64)
    diff = coords[:, None, :] - coords[None, :, :]
    dist = np.sqrt((diff * diff).sum(axis=-1))
    return torch.from_numpy(dist).to(device or "cpu")


def population_lengths(dist: torch.Tensor, tours: Sequence[Sequence[int]]) -> List[float]:
    if not tours:
        return []
    idx = torch.tensor(tours, device=dist.device, dtype=torch.long)
    a = idx
    b = idx.roll(-1, dims=1)
    return dist[a, b].sum(dim=1).tolist()


def is_degenerate(dist: torch.Tensor) -> bool:
    return not bool((dist > 0).any())
