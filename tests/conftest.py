import random

import pytest

from config_parsing import GameConfig


@pytest.fixture
def cfg():
    return GameConfig()


@pytest.fixture
def rng():
    return random.Random(1234)
