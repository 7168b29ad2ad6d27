"""Monte Carlo simulation endpoints."""

from random import Random

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from api.schemas import BatchRequest, BatchResponse, DistributionRequest, ShoeRequest, ShoeResponse
from config import config
from core.simulation import BatchSimulator, OutcomeDistribution, ShoeSimulator
from core.staking import StakingPolicy, StakingSystem

router = APIRouter()


def _distribution(bias: DistributionRequest | None) -> OutcomeDistribution:
    if bias is None:
        return OutcomeDistribution()
    return OutcomeDistribution.with_bias(banker=bias.B, player=bias.P, tie=bias.T)


def _policy(request: ShoeRequest) -> StakingPolicy:
    return StakingPolicy(StakingSystem(request.system), request.bet_unit)


@router.post("/shoe")
async def simulate_shoe(request: ShoeRequest) -> ShoeResponse:
    """Simulate a single shoe."""
    simulator = ShoeSimulator(
        _policy(request),
        _distribution(request.bias),
        Random(request.seed),
    )
    result = simulator.run(request.hands, request.bankroll)
    return ShoeResponse(
        outcomes=[o.value for o in result.outcomes],
        hands_played=result.hands_played,
        final_bankroll=result.final_bankroll,
        peak_bankroll=result.peak_bankroll,
        bust=result.bust,
    )


@router.post("/batch")
async def simulate_batch(request: BatchRequest) -> BatchResponse:
    """Simulate many shoes and aggregate the results."""
    simulator = BatchSimulator(
        _policy(request),
        _distribution(request.bias),
        Random(request.seed),
        workers=config.simulation.workers,
    )
    result = await run_in_threadpool(simulator.run, request.runs, request.hands, request.bankroll)
    return BatchResponse(
        runs=result.runs,
        busts=result.busts,
        bust_rate=result.bust_rate,
        average_final=result.average_final,
        best_final=result.best_final,
        worst_final=result.worst_final,
    )
