"""Staking systems: stake progression between rounds."""

from dataclasses import dataclass
from enum import Enum, auto

from transitions import Machine

from core.errors import InvalidConfigurationError
from core.outcomes import Outcome


class StakingSystem(Enum):
    """Supported staking systems."""

    FLAT = "flat"
    MARTINGALE = "martingale"

    def __str__(self) -> str:
        return self.name.title()


class RoundResult(Enum):
    """How a wager on one side was settled."""

    WIN = auto()
    LOSS = auto()
    PUSH = auto()


def resolve_round(side: Outcome, outcome: Outcome) -> RoundResult:
    """
    Settle a Banker/Player wager against the hand outcome.

    A Tie pushes a side wager; the stake is refunded.
    """
    if outcome is side:
        return RoundResult.WIN
    if outcome is Outcome.TIE:
        return RoundResult.PUSH
    return RoundResult.LOSS


@dataclass(frozen=True)
class StakingPolicy:
    """
    Maps (stake, round result, amount wagered) to the next stake.

    No upper bound is applied: unbounded Martingale escalation is
    exactly what the simulator is meant to expose.
    """

    system: StakingSystem = StakingSystem.FLAT
    base_unit: float = 10.0

    def __post_init__(self) -> None:
        """Validate the base unit."""
        if self.base_unit < 0:
            raise InvalidConfigurationError("base_unit must not be negative")

    @classmethod
    def flat(cls, base_unit: float) -> "StakingPolicy":
        """Flat betting: always wager one unit."""
        return cls(StakingSystem.FLAT, base_unit)

    @classmethod
    def martingale(cls, base_unit: float) -> "StakingPolicy":
        """Martingale: double after each loss, reset after a win."""
        return cls(StakingSystem.MARTINGALE, base_unit)

    def next_stake(self, stake: float, result: RoundResult, wagered: float) -> float:
        """
        Compute the stake for the next round.

        Args:
            stake: Nominal stake for the round just played
            result: How the round was settled
            wagered: Amount actually put at risk (may be capped by bankroll)

        Returns:
            Stake for the next round
        """
        if result is RoundResult.WIN:
            return self.base_unit
        if result is RoundResult.PUSH:
            return stake
        if self.system is StakingSystem.MARTINGALE:
            # Double what was really at risk, not the nominal stake
            return 2 * wagered
        return self.base_unit


class StakeTracker:
    """
    Current stake for one shoe, driven by a small state machine.

    Entering ``base`` puts the stake back at the policy's unit; a loss under
    an escalating system moves to ``progressing`` and doubles what was
    wagered. Owned by exactly one shoe run.
    """

    STATES = [
        {"name": "base", "on_enter": "_reset_stake"},
        {"name": "progressing"},
    ]

    TRANSITIONS = [
        {"trigger": "win", "source": "*", "dest": "base"},
        {"trigger": "push", "source": "*", "dest": None},
        {
            "trigger": "loss",
            "source": "*",
            "dest": "progressing",
            "conditions": "_escalates",
            "after": "_escalate",
        },
        {"trigger": "loss", "source": "*", "dest": "base"},
    ]

    def __init__(self, policy: StakingPolicy) -> None:
        """
        Initialize the tracker at the policy's base unit.

        Args:
            policy: Staking policy driving the progression
        """
        self.policy = policy
        self.stake = policy.base_unit

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="base",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def phase(self) -> str:
        """Get the progression phase: ``base`` or ``progressing``."""
        return self._machine_state  # type: ignore[attr-defined]

    def _reset_stake(self, wagered: float) -> None:
        self.stake = self.policy.base_unit

    def _escalates(self, wagered: float) -> bool:
        return self.policy.system is StakingSystem.MARTINGALE

    def _escalate(self, wagered: float) -> None:
        self.stake = self.policy.next_stake(self.stake, RoundResult.LOSS, wagered)

    def record(self, result: RoundResult, wagered: float) -> float:
        """
        Apply a settled round to the progression.

        Args:
            result: How the round was settled
            wagered: Amount actually wagered this round

        Returns:
            The new current stake
        """
        self.trigger(result.name.lower(), wagered=wagered)  # type: ignore[attr-defined]
        return self.stake
