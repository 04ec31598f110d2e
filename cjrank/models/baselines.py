"""Baseline scorers"""
from typing import Literal
import numpy as np
from cjrank.core.base import PairwiseScorer
from cjrank.utils.data_utils import win_counts, comparison_counts


class WinCount(PairwiseScorer):
    """Scores items by count statistics of their judgments, ignoring who they beat"""

    def __init__(
        self,
        competitors: list,
        mode: Literal['wins', 'win_rate'] = 'wins',
    ):
        super().__init__(competitors)
        if mode not in ('wins', 'win_rate'):
            raise ValueError(f'Invalid mode {mode}')
        self.mode = mode

    def compute_scores(self, win_matrix: np.ndarray) -> np.ndarray:
        """
        wins: number of judgments won
        win_rate: judgments won over judgments taken part in, 0 for items never compared
        """
        wins = win_counts(win_matrix).astype(np.float64)
        if self.mode == 'wins':
            return wins
        appearances = comparison_counts(win_matrix)
        return np.divide(wins, appearances, out=np.zeros_like(wins), where=appearances > 0)
