import random

import pytest

from zarankiewicz.distance_map import DistanceMap, build_distance_map
from zarankiewicz.letters import N, Letter
from zarankiewicz.scoring import Scorer
from zarankiewicz.search.checks import Checker


@pytest.fixture(scope="session")
def distance_map() -> DistanceMap:
    return build_distance_map(N)


@pytest.fixture(scope="session")
def scorer(distance_map: DistanceMap) -> Scorer:
    return Scorer(distance_map)


@pytest.fixture(scope="session")
def checker(scorer: Scorer) -> Checker:
    return Checker(scorer)


@pytest.fixture(scope="session")
def small_checker() -> Checker:
    return Checker(Scorer(build_distance_map(5)))


@pytest.fixture
def random_letters() -> list[Letter]:
    rng = random.Random(2024)
    letters = []
    for _ in range(25):
        letter = list(range(N))
        rng.shuffle(letter)
        letters.append(tuple(letter))
    return letters
