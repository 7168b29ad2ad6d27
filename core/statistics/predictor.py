"""Next-hand recommendation from blended probabilities."""

from dataclasses import dataclass
from typing import Mapping

from core.outcomes import Outcome


@dataclass(frozen=True)
class Prediction:
    """Recommended side for the next hand."""

    side: Outcome
    probability: float
    tie_probability: float


def predict(probabilities: Mapping[Outcome, float]) -> Prediction:
    """
    Pick the more likely of Banker and Player.

    Tie is never recommended; most tables push Tie for side bets, so its
    probability is only reported alongside the pick. Equal probabilities
    go to Banker.
    """
    banker = probabilities[Outcome.BANKER]
    player = probabilities[Outcome.PLAYER]
    side = Outcome.BANKER if banker >= player else Outcome.PLAYER
    return Prediction(
        side=side,
        probability=max(banker, player),
        tie_probability=probabilities[Outcome.TIE],
    )
