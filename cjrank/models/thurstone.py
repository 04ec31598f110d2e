"""Thurstone's Law of Comparative Judgment, Case V"""
import numpy as np
from cjrank.core.base import PairwiseScorer, RankedResult, build_ranked_result
from cjrank.errors import InsufficientItemsError
from cjrank.utils.constants import DEFAULT_P_MIN, DEFAULT_P_MAX
from cjrank.utils.data_utils import validate_win_matrix
from cjrank.utils.math_utils import norm_ppf


def _check_bounds(p_min: float, p_max: float):
    if not 0.0 < p_min < 0.5 < p_max < 1.0:
        raise ValueError(f'clip bounds must satisfy 0 < p_min < 0.5 < p_max < 1, got ({p_min}, {p_max})')


def thurstone_scores(win_matrix, p_min: float = DEFAULT_P_MIN, p_max: float = DEFAULT_P_MAX) -> np.ndarray:
    """
    Computes mean centered Thurstone Case V scores from a win matrix.

    For every pair (i, j) that was compared at least once, the empirical probability that i beats j is
    clipped into [p_min, p_max] and mapped to a z-score with the standard normal quantile function.
    An item's raw score is the mean z-score over the items it was compared with, or 0 if it was never
    compared. Raw scores are then shifted to have mean 0.

    Parameters:
        win_matrix (array-like of shape (n, n)): win_matrix[i, j] counts how often item i beat item j
        p_min (float, optional): lower clip bound on win probabilities. Defaults to 0.01.
        p_max (float, optional): upper clip bound on win probabilities. Defaults to 0.99.

    Returns:
        np.ndarray of shape (n,): scores which sum to 0, higher is better
    """
    _check_bounds(p_min, p_max)
    win_matrix = validate_win_matrix(win_matrix)
    num_items = win_matrix.shape[0]
    if num_items < 2:
        raise InsufficientItemsError(num_items, action='score')

    totals = win_matrix + win_matrix.T
    compared = totals > 0  # diagonal is always False
    probs = np.full(shape=win_matrix.shape, fill_value=0.5)
    probs[compared] = win_matrix[compared] / totals[compared]
    probs = np.clip(probs, p_min, p_max)

    z_scores = np.where(compared, norm_ppf(probs), 0.0)
    num_compared = compared.sum(axis=1)
    raw_scores = np.divide(
        z_scores.sum(axis=1),
        num_compared,
        out=np.zeros(num_items, dtype=np.float64),
        where=num_compared > 0,
    )
    return raw_scores - raw_scores.mean()


def rank_items(items: list, win_matrix, p_min: float = DEFAULT_P_MIN, p_max: float = DEFAULT_P_MAX) -> RankedResult:
    """score a win matrix and return the items with their scores and win counts, best first"""
    win_matrix = validate_win_matrix(win_matrix)
    if len(items) != win_matrix.shape[0]:
        raise ValueError(f'got {len(items)} items for a win matrix of shape {win_matrix.shape}')
    scores = thurstone_scores(win_matrix, p_min=p_min, p_max=p_max)
    return build_ranked_result(list(items), scores, win_matrix)


class ThurstoneCaseV(PairwiseScorer):
    """
    Thurstone's Case V model: every item has a normally distributed discriminal process with equal,
    uncorrelated dispersions, so the probit of the probability that i beats j estimates the
    difference of their scale values.
    """

    def __init__(
        self,
        competitors: list,
        p_min: float = DEFAULT_P_MIN,
        p_max: float = DEFAULT_P_MAX,
    ):
        """
        Parameters:
            competitors (list): The items to be ranked.
            p_min (float, optional): Lower clip bound on empirical win probabilities. Defaults to 0.01.
            p_max (float, optional): Upper clip bound on empirical win probabilities. Defaults to 0.99.
        """
        super().__init__(competitors)
        _check_bounds(p_min, p_max)
        self.p_min = p_min
        self.p_max = p_max

    def compute_scores(self, win_matrix: np.ndarray) -> np.ndarray:
        return thurstone_scores(win_matrix, p_min=self.p_min, p_max=self.p_max)
