"""simulated judges and a benchmark of scorers on simulated ranking sessions"""
import argparse
import logging
import math
import time
from typing import Optional
import numpy as np
from cjrank.metrics import ranking_metrics_suite
from cjrank.models.baselines import WinCount
from cjrank.models.thurstone import ThurstoneCaseV
from cjrank.scheduler import SchedulerState, initialize
from cjrank.utils.log_utils import setup_logging

logger = logging.getLogger(__name__)


class ThurstonianJudge:
    """
    An automated judge following Thurstone's Case V model: on each comparison it perceives every item as its
    latent strength plus independent gaussian noise and prefers the item perceived as stronger.
    """

    def __init__(self, strengths, noise_scale: float = 1.0, seed: int = 0):
        self.strengths = np.asarray(strengths, dtype=np.float64)
        if noise_scale < 0.0:
            raise ValueError(f'noise_scale must be non-negative, got {noise_scale}')
        self.noise_scale = noise_scale
        self.rng = np.random.default_rng(seed=seed)

    def __call__(self, first: int, second: int) -> int:
        perceived = self.strengths[[first, second]] + self.rng.normal(loc=0.0, scale=self.noise_scale, size=2)
        return first if perceived[0] >= perceived[1] else second


def run_session(state: SchedulerState, judge) -> SchedulerState:
    """ask judge about every remaining pair of state, judge maps (first, second) to the winner"""
    pair = state.current_pair()
    while pair is not None:
        state.record_winner(judge(*pair))
        pair = state.current_pair()
    return state


def simulate_ranking(
    num_items: int = 10,
    noise_scale: float = 1.0,
    strength_var: float = 1.0,
    seed: int = 0,
    rng: Optional[np.random.Generator] = None,
):
    """
    Draws latent strengths for num_items items and runs one full session judged by a ThurstonianJudge.

    Returns:
        tuple of (strengths, SchedulerState)
    """
    if rng is None:
        rng = np.random.default_rng(seed=seed)
    strengths = rng.normal(loc=0.0, scale=math.sqrt(strength_var), size=num_items)
    state = initialize(num_items, rng=rng)
    judge = ThurstonianJudge(strengths, noise_scale=noise_scale, seed=int(rng.integers(0, 2**31)))
    run_session(state, judge)
    return strengths, state


def run_benchmark(num_items: int = 10, num_sessions: int = 100, noise_scale: float = 1.0, seed: int = 0):
    """average ranking metrics of each scorer over num_sessions simulated sessions"""
    rng = np.random.default_rng(seed=seed)
    competitors = [f'item_{idx}' for idx in range(num_items)]
    scorers = {
        'thurstone': ThurstoneCaseV(competitors),
        'wins': WinCount(competitors, mode='wins'),
    }
    totals = {name: {} for name in scorers}
    start_time = time.time()
    for _ in range(num_sessions):
        strengths, state = simulate_ranking(num_items=num_items, noise_scale=noise_scale, rng=rng)
        for name, scorer in scorers.items():
            scores = scorer.fit(state.win_matrix)
            for metric, val in ranking_metrics_suite(scores, strengths).items():
                totals[name][metric] = totals[name].get(metric, 0.0) + val
    logger.info('ran %d sessions of %d items in %.3fs', num_sessions, num_items, time.time() - start_time)
    return {
        name: {metric: val / num_sessions for metric, val in metrics.items()}
        for name, metrics in totals.items()
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description='compare scorers on simulated comparative judgment sessions')
    parser.add_argument('--num-items', type=int, default=10)
    parser.add_argument('--num-sessions', type=int, default=100)
    parser.add_argument('--noise', type=float, default=1.0)
    parser.add_argument('--seed', type=int, default=0)
    parser.add_argument('--log-level', default='INFO')
    args = parser.parse_args(argv)
    setup_logging(args.log_level.upper())

    results = run_benchmark(
        num_items=args.num_items,
        num_sessions=args.num_sessions,
        noise_scale=args.noise,
        seed=args.seed,
    )
    for scorer_name, metrics in results.items():
        for metric, val in metrics.items():
            print(f'{scorer_name:<12}{metric:<16}: {val:.6f}')
    return results


if __name__ == '__main__':
    main()
