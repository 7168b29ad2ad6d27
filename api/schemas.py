"""Pydantic schemas for API requests and responses."""

from typing import Literal

from pydantic import BaseModel, Field

from config import config

OutcomeLetter = Literal["B", "P", "T"]
Side = Literal["B", "P"]


# Analysis schemas
class OutcomesRequest(BaseModel):
    """Outcome sequence as text, oldest first."""

    outcomes: str = Field(default="", description="Letters B/P/T or run-length text like 3B2PT")


class ProbabilitiesResponse(BaseModel):
    """Per-outcome probabilities."""

    B: float
    P: float
    T: float


class CountsResponse(BaseModel):
    """Per-outcome counts."""

    B: int
    P: int
    T: int


class PredictionResponse(BaseModel):
    """Recommended side for the next hand."""

    side: Side
    probability: float
    tie_probability: float


class SummaryResponse(BaseModel):
    """Estimation results for an outcome sequence."""

    hands: int
    counts: CountsResponse
    probabilities: ProbabilitiesResponse
    confidence: float
    alternation_rate: float
    prediction: PredictionResponse
    house_edge: ProbabilitiesResponse


# History schemas
class AddOutcomeRequest(BaseModel):
    """Record one outcome."""

    outcome: OutcomeLetter


class ImportRequest(BaseModel):
    """Bulk import of outcome text."""

    text: str
    replace: bool = False


class HistoryResponse(BaseModel):
    """Current outcome history."""

    outcomes: list[OutcomeLetter]
    encoded: str
    hands: int


class RoadsResponse(BaseModel):
    """Scoreboard grids, indexed [row][col]."""

    bead_plate: list[list[OutcomeLetter | None]]
    streak_columns: list[list[Side | None]]


# Simulation schemas
class DistributionRequest(BaseModel):
    """Optional outcome bias; unspecified outcomes share the rest."""

    B: float | None = Field(default=None, ge=0.0, le=1.0)
    P: float | None = Field(default=None, ge=0.0, le=1.0)
    T: float | None = Field(default=None, ge=0.0, le=1.0)


class ShoeRequest(BaseModel):
    """Request to simulate one shoe."""

    hands: int = Field(default=config.simulation.hands_per_shoe, ge=0, le=config.simulation.max_hands)
    bet_unit: float = Field(default=config.simulation.bet_unit, ge=0)
    bankroll: float = Field(default=config.simulation.starting_bankroll, ge=0)
    system: Literal["flat", "martingale"] = config.simulation.system
    bias: DistributionRequest | None = None
    seed: int | None = None


class ShoeResponse(BaseModel):
    """Result of one simulated shoe."""

    outcomes: list[OutcomeLetter]
    hands_played: int
    final_bankroll: float
    peak_bankroll: float
    bust: bool


class BatchRequest(ShoeRequest):
    """Request to simulate many shoes."""

    runs: int = Field(default=config.simulation.runs, ge=0, le=config.simulation.max_runs)


class BatchResponse(BaseModel):
    """Aggregated batch result."""

    runs: int
    busts: int
    bust_rate: float
    average_final: float
    best_final: float
    worst_final: float
