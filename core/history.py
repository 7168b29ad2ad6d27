"""Outcome history store and its run-length text format."""

import re
from itertools import groupby
from typing import Any, Iterable, Iterator

from core.outcomes import Outcome

_RUN_PATTERN = re.compile(r"(\d*)([BPT])")

# Upper bound on outcomes decoded from one piece of text
DEFAULT_MAX_OUTCOMES = 10_000


def encode_run_length(outcomes: Iterable[Outcome]) -> str:
    """
    Encode outcomes as runs, e.g. B,B,B,P,P,T -> "3B2PT".

    A run of length one is written as the bare letter.
    """
    parts = []
    for outcome, run in groupby(outcomes):
        length = sum(1 for _ in run)
        parts.append(f"{length}{outcome.value}" if length > 1 else outcome.value)
    return "".join(parts)


def decode_run_length(text: str, max_outcomes: int = DEFAULT_MAX_OUTCOMES) -> list[Outcome]:
    """
    Decode run-length or plain outcome text.

    Accepts "3B2PT", "BBBPPT" or "b b b p p t"; whitespace is ignored.

    Args:
        text: Outcome text
        max_outcomes: Largest number of outcomes the text may expand to

    Raises:
        ValueError: On characters that are not counts or outcome letters,
            or when the text expands past max_outcomes
    """
    cleaned = "".join(text.split()).upper()
    outcomes: list[Outcome] = []
    pos = 0
    while pos < len(cleaned):
        match = _RUN_PATTERN.match(cleaned, pos)
        if match is None:
            raise ValueError(f"Invalid outcome text at position {pos}: {text!r}")
        count = int(match.group(1)) if match.group(1) else 1
        if count < 1:
            raise ValueError(f"Run length must be positive: {match.group(0)!r}")
        if len(outcomes) + count > max_outcomes:
            raise ValueError(f"Outcome text expands past {max_outcomes} outcomes")
        outcomes.extend([Outcome(match.group(2))] * count)
        pos = match.end()
    return outcomes


class OutcomeHistory:
    """
    Canonical record of observed outcomes, oldest first.

    Estimation code only reads `outcomes`, which is an immutable snapshot.
    """

    def __init__(self, outcomes: Iterable[Outcome] | None = None) -> None:
        self._outcomes: list[Outcome] = list(outcomes or [])

    def __len__(self) -> int:
        return len(self._outcomes)

    def __iter__(self) -> Iterator[Outcome]:
        return iter(self._outcomes)

    @property
    def outcomes(self) -> tuple[Outcome, ...]:
        """Return a snapshot of the history in chronological order."""
        return tuple(self._outcomes)

    @property
    def last(self) -> Outcome | None:
        """Return the most recent outcome, if any."""
        return self._outcomes[-1] if self._outcomes else None

    def append(self, outcome: Outcome) -> None:
        """Record one new outcome."""
        self._outcomes.append(outcome)

    def extend(self, outcomes: Iterable[Outcome]) -> None:
        """Record several outcomes in order."""
        self._outcomes.extend(outcomes)

    def undo(self) -> Outcome | None:
        """Remove and return the most recent outcome."""
        if not self._outcomes:
            return None
        return self._outcomes.pop()

    def clear(self) -> None:
        """Forget every outcome."""
        self._outcomes.clear()

    def import_string(self, text: str, max_outcomes: int = DEFAULT_MAX_OUTCOMES) -> int:
        """
        Append outcomes parsed from text.

        Args:
            text: Run-length or plain outcome text
            max_outcomes: Largest the whole history may grow to

        Returns:
            Number of outcomes imported

        Raises:
            ValueError: On malformed text or when the history would exceed max_outcomes
        """
        imported = decode_run_length(text, max_outcomes - len(self._outcomes))
        self._outcomes.extend(imported)
        return len(imported)

    def export_string(self) -> str:
        """Export the history in run-length form."""
        return encode_run_length(self._outcomes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for session storage."""
        return {"outcomes": self.export_string()}

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], max_outcomes: int = DEFAULT_MAX_OUTCOMES
    ) -> "OutcomeHistory":
        """Restore a history serialized with to_dict."""
        return cls(decode_run_length(data.get("outcomes", ""), max_outcomes))
