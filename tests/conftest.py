import random

import pytest

from tour_ga.base import City


@pytest.fixture
def square():
    return (City(0, 0), City(0, 1), City(1, 1), City(1, 0))


@pytest.fixture
def rng():
    return random.Random(1234)
