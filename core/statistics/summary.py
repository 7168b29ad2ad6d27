"""Outcome summarization: smoothed probabilities, confidence and alternation."""

import math
from dataclasses import dataclass
from typing import Mapping, Sequence

from core.outcomes import Outcome, THEORETICAL_PRIOR

LAPLACE_ALPHA = 1.0
EMPIRICAL_WEIGHT = 0.7
PRIOR_WEIGHT = 0.3
CONFIDENCE_SCALE = 12.0

# Largest float below 1.0; confidence never reaches certainty
_CONFIDENCE_CEILING = math.nextafter(1.0, 0.0)


@dataclass(frozen=True)
class OutcomeSummary:
    """Derived statistics for an outcome sequence."""

    counts: Mapping[Outcome, int]
    probabilities: Mapping[Outcome, float]
    confidence: float
    alt_rate: float

    @property
    def total(self) -> int:
        """Return the number of outcomes summarized."""
        return sum(self.counts.values())


def count_outcomes(sequence: Sequence[Outcome]) -> dict[Outcome, int]:
    """Tally each outcome in the sequence."""
    counts = {outcome: 0 for outcome in Outcome}
    for outcome in sequence:
        counts[outcome] += 1
    return counts


def laplace_smoothing(
    counts: Mapping[Outcome, int],
    alpha: float = LAPLACE_ALPHA,
) -> dict[Outcome, float]:
    """
    Apply additive smoothing to outcome counts.

    Every outcome gets a strictly positive probability, even with no
    observations at all.

    Args:
        counts: Observed count per outcome
        alpha: Pseudo-count added to each outcome

    Returns:
        Smoothed probability per outcome
    """
    total = sum(counts.get(o, 0) for o in Outcome) + alpha * len(Outcome)
    return {o: (counts.get(o, 0) + alpha) / total for o in Outcome}


def blend_with_prior(
    smoothed: Mapping[Outcome, float],
    prior: Mapping[Outcome, float] = THEORETICAL_PRIOR,
    empirical_weight: float = EMPIRICAL_WEIGHT,
    prior_weight: float = PRIOR_WEIGHT,
) -> dict[Outcome, float]:
    """
    Blend an empirical distribution with the theoretical prior.

    Each blended value is clamped to [0, 1] and the result is normalized
    so that it sums to 1.
    """
    blended = {
        o: min(1.0, max(0.0, empirical_weight * smoothed[o] + prior_weight * prior[o]))
        for o in Outcome
    }
    total = sum(blended.values())
    return {o: value / total for o, value in blended.items()}


def confidence_score(n: int, scale: float = CONFIDENCE_SCALE) -> float:
    """
    Saturating sample-size signal: 1 - e^(-n/scale).

    This is a display heuristic, not a statistical confidence interval.
    It depends only on how many outcomes were observed (about 0.92 at 30).
    With the default scale the value rises strictly up to a few hundred
    observations; past roughly 440 the float result plateaus at the
    largest value below 1.0.
    """
    if n <= 0:
        return 0.0
    return min(-math.expm1(-n / scale), _CONFIDENCE_CEILING)


def alternation_rate(sequence: Sequence[Outcome]) -> float:
    """
    Fraction of consecutive Banker/Player pairs that switch sides.

    Pairs involving a Tie are skipped. Returns 0.0 when there is no
    qualifying pair.
    """
    pairs = 0
    switches = 0
    for previous, current in zip(sequence, sequence[1:]):
        if not (previous.is_side and current.is_side):
            continue
        pairs += 1
        if previous is not current:
            switches += 1
    if pairs == 0:
        return 0.0
    return switches / pairs


def summarize(
    sequence: Sequence[Outcome],
    alpha: float = LAPLACE_ALPHA,
    empirical_weight: float = EMPIRICAL_WEIGHT,
    prior_weight: float = PRIOR_WEIGHT,
    confidence_scale: float = CONFIDENCE_SCALE,
) -> OutcomeSummary:
    """
    Summarize an outcome sequence.

    An empty sequence falls back to the theoretical prior with zero
    confidence and zero alternation rate.

    Args:
        sequence: Outcomes in chronological order (not modified)
        alpha: Laplace pseudo-count per outcome
        empirical_weight: Weight of the smoothed observations in the blend
        prior_weight: Weight of the theoretical prior in the blend
        confidence_scale: Sample size at which confidence reaches 1 - 1/e

    Returns:
        OutcomeSummary with counts, blended probabilities, confidence
        and alternation rate
    """
    sequence = tuple(sequence)
    counts = count_outcomes(sequence)

    if not sequence:
        probabilities = dict(THEORETICAL_PRIOR)
    else:
        probabilities = blend_with_prior(
            laplace_smoothing(counts, alpha),
            empirical_weight=empirical_weight,
            prior_weight=prior_weight,
        )

    return OutcomeSummary(
        counts=counts,
        probabilities=probabilities,
        confidence=confidence_score(len(sequence), confidence_scale),
        alt_rate=alternation_rate(sequence),
    )
