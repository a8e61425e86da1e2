"""Shared test setup."""

import matplotlib

matplotlib.use("Agg")

import pytest

from iso_terrain.core.alea_prng import AleaPRNG


class ScriptedPRNG:
    """Replays a fixed list of random() values."""

    def __init__(self, values):
        self.values = list(values)
        self.call_count = 0

    def random(self):
        value = self.values[self.call_count % len(self.values)]
        self.call_count += 1
        return value

    def uniform(self, low, high):
        return low + self.random() * (high - low)

    def randint(self, low, high):
        return int(self.random() * (high - low + 1)) + low


@pytest.fixture
def prng():
    return AleaPRNG("test123")


@pytest.fixture
def scripted_prng():
    return ScriptedPRNG
