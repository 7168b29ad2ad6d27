"""Batch Monte Carlo simulation across many independent shoes."""

import logging
from concurrent.futures import FIRST_COMPLETED, ProcessPoolExecutor, wait
from dataclasses import dataclass
from random import Random
from typing import Callable, Iterable

from core.errors import BatchAbortedError, InvalidConfigurationError
from core.simulation.shoe import OutcomeDistribution, ShoeRunResult, ShoeSimulator
from core.staking import StakingPolicy, StakingSystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    """Summary statistics over a set of completed shoes."""

    runs: int
    busts: int
    average_final: float
    best_final: float
    worst_final: float
    bust_rate: float


def aggregate(results: Iterable[ShoeRunResult]) -> BatchResult:
    """
    Aggregate completed shoe results.

    Raises:
        InvalidConfigurationError: If there are no results to aggregate
    """
    runs = 0
    busts = 0
    total_final = 0.0
    best = float("-inf")
    worst = float("inf")

    for result in results:
        runs += 1
        if result.bust:
            busts += 1
        total_final += result.final_bankroll
        best = max(best, result.final_bankroll)
        worst = min(worst, result.final_bankroll)

    if runs == 0:
        raise InvalidConfigurationError("Cannot aggregate a batch with no runs")

    return BatchResult(
        runs=runs,
        busts=busts,
        average_final=total_final / runs,
        best_final=best,
        worst_final=worst,
        bust_rate=busts / runs,
    )


def _run_seeded_shoe(
    seed: int,
    policy: StakingPolicy,
    distribution: OutcomeDistribution,
    hand_count: int,
    starting_bankroll: float,
) -> ShoeRunResult:
    """Run one shoe on its own random stream (picklable for worker processes)."""
    simulator = ShoeSimulator(policy, distribution, Random(seed))
    return simulator.run(hand_count, starting_bankroll)


class BatchSimulator:
    """
    Runs many independent shoes and aggregates the outcome.

    Every shoe gets its own Random seeded from the batch generator, so runs
    never share a random stream and a seeded batch is reproducible whether
    it runs sequentially or on worker processes.
    """

    def __init__(
        self,
        policy: StakingPolicy,
        distribution: OutcomeDistribution | None = None,
        rng: Random | None = None,
        workers: int = 1,
    ) -> None:
        """
        Initialize the batch simulator.

        Args:
            policy: Staking policy applied in every shoe
            distribution: Distribution hands are drawn from (prior by default)
            rng: Generator used to seed each shoe
            workers: Number of worker processes (1 runs in-process)
        """
        if workers < 1:
            raise InvalidConfigurationError("workers must be at least 1")
        self.policy = policy
        self.distribution = distribution or OutcomeDistribution()
        self.workers = workers
        self._rng = rng or Random()

    def simulate(
        self,
        run_count: int,
        hand_count: int,
        starting_bankroll: float,
        should_stop: Callable[[], bool] | None = None,
    ) -> list[ShoeRunResult]:
        """
        Run the shoes and return every completed result.

        should_stop is polled between shoes; once it returns True no new
        shoe is started and only fully completed shoes are returned.

        Args:
            run_count: Number of shoes to run
            hand_count: Hands per shoe
            starting_bankroll: Bankroll at the start of every shoe
            should_stop: Optional early-abort predicate

        Returns:
            Completed ShoeRunResults
        """
        if run_count <= 0:
            raise InvalidConfigurationError("run_count must be at least 1")
        if hand_count < 0:
            raise InvalidConfigurationError("hand_count must not be negative")
        if starting_bankroll < 0:
            raise InvalidConfigurationError("starting_bankroll must not be negative")

        seeds = [self._rng.getrandbits(64) for _ in range(run_count)]
        args = (self.policy, self.distribution, hand_count, starting_bankroll)

        if self.workers == 1:
            results = []
            for seed in seeds:
                if should_stop is not None and should_stop():
                    break
                results.append(_run_seeded_shoe(seed, *args))
        else:
            results = self._simulate_parallel(seeds, args, should_stop)

        if len(results) < run_count:
            logger.info("Batch stopped early after %d of %d runs", len(results), run_count)
        return results

    def _simulate_parallel(
        self,
        seeds: list[int],
        args: tuple,
        should_stop: Callable[[], bool] | None,
    ) -> list[ShoeRunResult]:
        results: list[ShoeRunResult] = []
        with ProcessPoolExecutor(max_workers=self.workers) as executor:
            pending = {executor.submit(_run_seeded_shoe, seed, *args) for seed in seeds}
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                results.extend(future.result() for future in done)
                if pending and should_stop is not None and should_stop():
                    for future in pending:
                        future.cancel()
                    # Shoes already running finish; their results are kept
                    finished, _ = wait(pending)
                    results.extend(
                        f.result() for f in finished if not f.cancelled()
                    )
                    break
        return results

    def run(
        self,
        run_count: int,
        hand_count: int,
        starting_bankroll: float,
        should_stop: Callable[[], bool] | None = None,
    ) -> BatchResult:
        """
        Run a batch and aggregate the completed shoes.

        Raises:
            InvalidConfigurationError: If run_count <= 0 or other inputs are negative
            BatchAbortedError: If should_stop ends the batch before any shoe completes
        """
        results = self.simulate(run_count, hand_count, starting_bankroll, should_stop)
        if not results:
            raise BatchAbortedError("Batch stopped before any shoe completed")
        batch = aggregate(results)
        logger.info(
            "Batch %s x%d: busts=%d (%.1f%%), avg final=%.2f",
            self.policy.system,
            batch.runs,
            batch.busts,
            batch.bust_rate * 100,
            batch.average_final,
        )
        return batch


def run_batch(
    run_count: int,
    hand_count: int,
    bet_unit: float,
    starting_bankroll: float,
    system: StakingSystem | str = StakingSystem.FLAT,
    distribution: OutcomeDistribution | None = None,
    rng: Random | None = None,
    workers: int = 1,
) -> BatchResult:
    """Run and aggregate a batch with a freshly built staking policy."""
    if run_count <= 0:
        raise InvalidConfigurationError("run_count must be at least 1")
    policy = StakingPolicy(StakingSystem(system), bet_unit)
    simulator = BatchSimulator(policy, distribution, rng, workers)
    return simulator.run(run_count, hand_count, starting_bankroll)
