"""Core baccarat estimation and simulation engine - 100% UI-agnostic."""

from core.errors import BatchAbortedError, InvalidConfigurationError
from core.history import OutcomeHistory
from core.outcomes import HOUSE_EDGE, THEORETICAL_PRIOR, Outcome, parse_outcomes
from core.staking import RoundResult, StakingPolicy, StakingSystem

__all__ = [
    "BatchAbortedError",
    "InvalidConfigurationError",
    "OutcomeHistory",
    "HOUSE_EDGE",
    "THEORETICAL_PRIOR",
    "Outcome",
    "parse_outcomes",
    "RoundResult",
    "StakingPolicy",
    "StakingSystem",
]
