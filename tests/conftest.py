import random

import pytest

MASTER_KEY = [0x1234, 0x5678, 0x9ABC, 0xDEF0, 0x1111, 0x2222, 0x3333, 0x4444]
PLAINTEXT = [0xAAAA, 0xBBBB, 0xCCCC, 0xDDDD, 0x1111, 0x2222, 0x3333, 0x4444]


@pytest.fixture
def rng():
    return random.Random(0x5EED)


@pytest.fixture
def master_key():
    return list(MASTER_KEY)


@pytest.fixture
def plaintext():
    return list(PLAINTEXT)
