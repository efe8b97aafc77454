import random

import pytest

from battlesnake import BattlesnakeLogic


@pytest.fixture
def logic():
    return BattlesnakeLogic(rng=random.Random(1234))
