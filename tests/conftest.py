"""Pytest fixtures for baccarat tracker tests."""

from random import Random

import pytest

from core.outcomes import Outcome
from core.staking import StakingPolicy


class ScriptedRandom:
    """Random source that replays fixed uniform values, cycling at the end."""

    def __init__(self, values):
        self._values = list(values)
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


# Uniform values that land on each outcome under the theoretical prior
DRAW = {
    Outcome.BANKER: 0.1,
    Outcome.PLAYER: 0.6,
    Outcome.TIE: 0.95,
}


def scripted(*outcomes: Outcome) -> ScriptedRandom:
    """Build a random source that deals the given outcomes in order."""
    return ScriptedRandom([DRAW[o] for o in outcomes])


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def flat_policy():
    """Flat staking at 10 per hand."""
    return StakingPolicy.flat(10)


@pytest.fixture
def martingale_policy():
    """Martingale staking with a base unit of 10."""
    return StakingPolicy.martingale(10)


@pytest.fixture
def sample_shoe():
    """The fixed sequence B,B,B,P,P,T."""
    B, P, T = Outcome.BANKER, Outcome.PLAYER, Outcome.TIE
    return [B, B, B, P, P, T]


@pytest.fixture
def deal():
    """Factory for random sources that deal a scripted sequence of outcomes."""
    return scripted
