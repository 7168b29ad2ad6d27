"""Baccarat outcomes and reference probabilities."""

from enum import Enum
from typing import Iterable, Mapping


class Outcome(Enum):
    """Result of a single baccarat hand."""

    BANKER = "B"
    PLAYER = "P"
    TIE = "T"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Return the display name of the outcome."""
        return self.name.title()

    @property
    def is_side(self) -> bool:
        """Check if this outcome is a bettable side (Banker or Player)."""
        return self is not Outcome.TIE

    @classmethod
    def from_string(cls, s: str) -> "Outcome":
        """Create an outcome from a letter like 'B', 'p' or 't'."""
        letter = s.strip().upper()
        for outcome in cls:
            if outcome.value == letter:
                return outcome
        raise ValueError(f"Invalid outcome: {s!r}")


# Standard theoretical hand frequencies, ignoring cut-card and late-shoe effects
THEORETICAL_PRIOR: Mapping[Outcome, float] = {
    Outcome.BANKER: 0.4586,
    Outcome.PLAYER: 0.4462,
    Outcome.TIE: 0.0952,
}

# Approximate house edge per bet (Banker after 5% commission)
HOUSE_EDGE: Mapping[Outcome, float] = {
    Outcome.BANKER: 0.0106,
    Outcome.PLAYER: 0.0124,
    Outcome.TIE: 0.1436,
}


def parse_outcomes(text: str) -> list[Outcome]:
    """
    Parse a string of outcome letters such as "BPPBT" or "b p t".

    Whitespace is ignored; any other character raises ValueError.

    Args:
        text: Outcome letters, oldest first

    Returns:
        Outcomes in chronological order
    """
    return [Outcome.from_string(ch) for ch in text if not ch.isspace()]


def format_outcomes(outcomes: Iterable[Outcome]) -> str:
    """Join outcomes into a plain letter string."""
    return "".join(o.value for o in outcomes)
