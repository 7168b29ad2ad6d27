"""Single-shoe Monte Carlo simulation with an adaptive bettor."""

import logging
from dataclasses import dataclass
from random import Random
from typing import Callable, Protocol

from core.errors import InvalidConfigurationError
from core.outcomes import Outcome, THEORETICAL_PRIOR
from core.staking import RoundResult, StakeTracker, StakingPolicy, StakingSystem, resolve_round
from core.statistics.summary import summarize

logger = logging.getLogger(__name__)

# Net profit per unit wagered on a winning side (Banker pays 5% commission)
PAYOUT: dict[Outcome, float] = {
    Outcome.BANKER: 0.95,
    Outcome.PLAYER: 1.0,
}


class RandomSource(Protocol):
    """Anything that produces uniform floats in [0, 1)."""

    def random(self) -> float:
        ...


@dataclass(frozen=True)
class OutcomeDistribution:
    """Fixed three-way distribution hands are drawn from."""

    banker: float = THEORETICAL_PRIOR[Outcome.BANKER]
    player: float = THEORETICAL_PRIOR[Outcome.PLAYER]
    tie: float = THEORETICAL_PRIOR[Outcome.TIE]

    def __post_init__(self) -> None:
        """Validate the probabilities."""
        if min(self.banker, self.player, self.tie) < 0:
            raise InvalidConfigurationError("Outcome probabilities must not be negative")
        total = self.banker + self.player + self.tie
        if abs(total - 1.0) > 1e-6:
            raise InvalidConfigurationError(
                f"Outcome probabilities must sum to 1.0, got {total}"
            )

    @classmethod
    def with_bias(
        cls,
        banker: float | None = None,
        player: float | None = None,
        tie: float | None = None,
    ) -> "OutcomeDistribution":
        """
        Override some probabilities and rescale the rest.

        Outcomes left unspecified share the remaining mass in proportion
        to the theoretical prior.

        Args:
            banker: Banker probability override
            player: Player probability override
            tie: Tie probability override

        Returns:
            A validated distribution
        """
        overrides = {
            Outcome.BANKER: banker,
            Outcome.PLAYER: player,
            Outcome.TIE: tie,
        }
        fixed = {o: p for o, p in overrides.items() if p is not None}
        free = [o for o in Outcome if o not in fixed]
        remaining = 1.0 - sum(fixed.values())
        if free:
            if remaining < 0:
                raise InvalidConfigurationError("Outcome probability overrides exceed 1.0")
            prior_mass = sum(THEORETICAL_PRIOR[o] for o in free)
            for o in free:
                fixed[o] = remaining * THEORETICAL_PRIOR[o] / prior_mass
        return cls(fixed[Outcome.BANKER], fixed[Outcome.PLAYER], fixed[Outcome.TIE])

    def as_dict(self) -> dict[Outcome, float]:
        """Return probabilities keyed by outcome."""
        return {
            Outcome.BANKER: self.banker,
            Outcome.PLAYER: self.player,
            Outcome.TIE: self.tie,
        }

    def draw(self, rng: RandomSource) -> Outcome:
        """Draw one outcome using a single uniform value."""
        r = rng.random()
        if r < self.banker:
            return Outcome.BANKER
        if r < self.banker + self.player:
            return Outcome.PLAYER
        return Outcome.TIE


@dataclass(frozen=True)
class RoundRecord:
    """One simulated hand as seen by the bettor."""

    index: int
    outcome: Outcome
    side: Outcome
    wager: float
    result: RoundResult
    bankroll: float
    next_stake: float


@dataclass(frozen=True)
class ShoeRunResult:
    """Outcome of one simulated shoe."""

    outcomes: tuple[Outcome, ...]
    final_bankroll: float
    bust: bool
    peak_bankroll: float

    @property
    def hands_played(self) -> int:
        """Return the number of hands dealt before the shoe ended."""
        return len(self.outcomes)


def choose_side(outcomes: list[Outcome]) -> Outcome:
    """Pick the side with the higher blended probability (Banker on ties)."""
    probs = summarize(outcomes).probabilities
    if probs[Outcome.BANKER] >= probs[Outcome.PLAYER]:
        return Outcome.BANKER
    return Outcome.PLAYER


class ShoeSimulator:
    """
    Simulates a bettor chasing the current blended recommendation.

    After every hand the bettor recomputes the Banker/Player probabilities
    over everything seen so far in the shoe and backs the stronger side.
    Stake and bankroll state live only for the duration of one run.
    """

    def __init__(
        self,
        policy: StakingPolicy,
        distribution: OutcomeDistribution | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        """
        Initialize the simulator.

        Args:
            policy: Staking policy; its base unit is the bet unit
            distribution: Distribution hands are drawn from (prior by default)
            rng: Uniform random source, injectable for reproducible runs
        """
        self.policy = policy
        self.distribution = distribution or OutcomeDistribution()
        self._rng = rng or Random()

    def run(
        self,
        hand_count: int,
        starting_bankroll: float,
        on_round: Callable[[RoundRecord], None] | None = None,
    ) -> ShoeRunResult:
        """
        Play up to hand_count hands.

        The shoe ends early as a bust when the bankroll is at or below zero
        at the start of a hand.

        Args:
            hand_count: Maximum number of hands
            starting_bankroll: Bankroll at the start of the shoe
            on_round: Optional callback receiving each RoundRecord

        Returns:
            ShoeRunResult for this shoe
        """
        if hand_count < 0:
            raise InvalidConfigurationError("hand_count must not be negative")
        if starting_bankroll < 0:
            raise InvalidConfigurationError("starting_bankroll must not be negative")

        tracker = StakeTracker(self.policy)
        bankroll = starting_bankroll
        peak = starting_bankroll
        outcomes: list[Outcome] = []
        bust = False

        for index in range(hand_count):
            if bankroll <= 0:
                bust = True
                break

            outcome = self.distribution.draw(self._rng)
            outcomes.append(outcome)

            # Side is re-derived every hand from all outcomes so far
            side = choose_side(outcomes)
            wager = min(tracker.stake, bankroll)
            bankroll -= wager

            result = resolve_round(side, outcome)
            if result is RoundResult.WIN:
                bankroll += wager + wager * PAYOUT[side]
            elif result is RoundResult.PUSH:
                bankroll += wager

            tracker.record(result, wager)
            peak = max(peak, bankroll)

            if on_round is not None:
                on_round(
                    RoundRecord(
                        index=index,
                        outcome=outcome,
                        side=side,
                        wager=wager,
                        result=result,
                        bankroll=bankroll,
                        next_stake=tracker.stake,
                    )
                )

        logger.debug(
            "Shoe finished: %d hands, final=%.2f, peak=%.2f, bust=%s",
            len(outcomes),
            bankroll,
            peak,
            bust,
        )
        return ShoeRunResult(
            outcomes=tuple(outcomes),
            final_bankroll=bankroll,
            bust=bust,
            peak_bankroll=peak,
        )


def run_shoe(
    hand_count: int,
    bet_unit: float,
    starting_bankroll: float,
    system: StakingSystem | str = StakingSystem.FLAT,
    distribution: OutcomeDistribution | None = None,
    rng: RandomSource | None = None,
) -> ShoeRunResult:
    """Run one shoe with a freshly built staking policy."""
    policy = StakingPolicy(StakingSystem(system), bet_unit)
    return ShoeSimulator(policy, distribution, rng).run(hand_count, starting_bankroll)
