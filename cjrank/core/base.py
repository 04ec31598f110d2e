"""base class for batch scorers of pairwise comparison data"""
from abc import ABC, abstractmethod
from typing import List, NamedTuple
import numpy as np
from cjrank.errors import InsufficientItemsError
from cjrank.utils.constants import TIE_DECIMALS
from cjrank.utils.data_utils import validate_win_matrix, win_counts


class RankedItem(NamedTuple):
    item: object
    score: float
    win_count: int


RankedResult = List[RankedItem]


def ranking_order(scores: np.ndarray, decimals: int = TIE_DECIMALS) -> np.ndarray:
    """
    Indices that sort scores from best to worst.
    Scores equal after rounding to `decimals` places keep their input order, earlier first.
    """
    scores = np.asarray(scores, dtype=np.float64)
    rounded = np.round(scores, decimals=decimals) + 0.0  # folds -0.0 into 0.0
    return np.lexsort((np.arange(scores.shape[0]), -rounded))


def build_ranked_result(items: list, scores: np.ndarray, win_matrix: np.ndarray) -> RankedResult:
    """pair each item with its score and win count, best first"""
    wins = win_counts(win_matrix)
    return [RankedItem(items[idx], float(scores[idx]), int(wins[idx])) for idx in ranking_order(scores)]


class PairwiseScorer(ABC):
    """
    Base class for scorers which turn a matrix of pairwise win counts into one real valued score per item.

    Unlike online rating systems there is no notion of time: the whole win matrix is scored at once
    and fitting twice on the same matrix gives the same scores.

    Attributes:
        competitors (list): The items being ranked, addressed by their position in this list.
        num_competitors (int): The number of items.
        ratings (np.ndarray): Scores from the most recent call to fit(), None before that.
        win_matrix (np.ndarray): The win matrix from the most recent call to fit().
    """

    def __init__(self, competitors):
        """
        Parameters:
            competitors (list): The items to be ranked. Their order defines the rows and columns of the
                                win matrix and breaks ties between equal scores.
        """
        self.competitors = list(competitors)
        self.num_competitors = len(self.competitors)
        if self.num_competitors < 2:
            raise InsufficientItemsError(self.num_competitors, action='score')
        self.ratings = None
        self.win_matrix = None

    @abstractmethod
    def compute_scores(self, win_matrix: np.ndarray) -> np.ndarray:
        """map a validated win matrix to an array of scores, higher is better"""
        raise NotImplementedError

    def fit(self, win_matrix) -> np.ndarray:
        """
        Scores every item from a win matrix.

        Parameters:
            win_matrix (array-like of shape (n, n)): win_matrix[i, j] counts how often item i beat item j

        Returns:
            np.ndarray of shape (n,): the scores, also stored in self.ratings
        """
        win_matrix = validate_win_matrix(win_matrix)
        if win_matrix.shape[0] != self.num_competitors:
            raise ValueError(
                f'win matrix has {win_matrix.shape[0]} rows but the scorer has {self.num_competitors} competitors'
            )
        self.win_matrix = win_matrix
        self.ratings = self.compute_scores(win_matrix)
        return self.ratings

    def rank(self) -> RankedResult:
        """the competitors with their scores and win counts, best first"""
        if self.ratings is None:
            raise RuntimeError('call fit() before rank()')
        return build_ranked_result(self.competitors, self.ratings, self.win_matrix)

    def print_leaderboard(self, num_places=None):
        """
        Prints the leaderboard of the scorer.

        Parameters:
            num_places int: The number of top places to display on the leaderboard. Defaults to all.
        """
        ranked = self.rank()[:num_places]
        max_len = min(max([len(str(entry.item)) for entry in ranked] + [10]), 25)
        print(f'{"competitor": <{max_len}}\t{"score": <10}\twins')
        for entry in ranked:
            print(f'{str(entry.item)[:max_len]: <{max_len}}\t{entry.score: <10.6f}\t{entry.win_count}')
