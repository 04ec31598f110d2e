"""
Single round-robin scheduling of pairwise comparisons.

Every unordered pair of items is presented exactly once, in an order fixed by a seedable Fisher-Yates
shuffle at initialization. Each judgment is written into a win matrix which can be handed to a scorer
once the schedule is exhausted, or at any point before that.
"""
import logging
import operator
from typing import Optional, Tuple
import numpy as np
from cjrank.errors import InsufficientItemsError, InvalidJudgmentError
from cjrank.utils.data_utils import validate_win_matrix

logger = logging.getLogger(__name__)


def all_pairs(num_items: int) -> np.ndarray:
    """every unordered pair (i, j) with i < j in lexicographic order, shape (n * (n - 1) / 2, 2)"""
    firsts, seconds = np.triu_indices(num_items, k=1)
    return np.column_stack((firsts, seconds)).astype(np.int64)


def fisher_yates_shuffle(pairs: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """shuffle the rows of pairs in place and return it"""
    for idx in range(pairs.shape[0] - 1, 0, -1):
        swap_idx = int(rng.integers(0, idx + 1))
        if swap_idx != idx:
            pairs[[idx, swap_idx]] = pairs[[swap_idx, idx]]
    return pairs


class SchedulerState:
    """
    The resumable state of one ranking session.

    Attributes:
        num_items (int): number of items being compared
        pairs (np.ndarray of shape (num_pairs, 2)): pairs in presentation order
        cursor (int): index into pairs of the next pair to judge
        win_matrix (np.ndarray of shape (num_items, num_items)): win_matrix[i, j] counts how often i beat j
        first_wins (int): judgments won by the first presented item of the pair
        second_wins (int): judgments won by the second presented item of the pair
    """

    def __init__(
        self,
        num_items: int,
        pairs: np.ndarray,
        cursor: int = 0,
        win_matrix: Optional[np.ndarray] = None,
        first_wins: int = 0,
        second_wins: int = 0,
    ):
        self.num_items = num_items
        self.pairs = pairs
        self.cursor = cursor
        if win_matrix is None:
            win_matrix = np.zeros(shape=(num_items, num_items), dtype=np.int64)
        self.win_matrix = win_matrix
        self.first_wins = first_wins
        self.second_wins = second_wins

    @property
    def num_pairs(self) -> int:
        return self.pairs.shape[0]

    @property
    def num_judged(self) -> int:
        return self.cursor

    @property
    def num_remaining(self) -> int:
        return max(self.num_pairs - self.cursor, 0)

    @property
    def progress(self) -> float:
        """fraction of pairs judged so far"""
        return min(self.cursor / self.num_pairs, 1.0)

    def is_complete(self) -> bool:
        return self.cursor >= self.num_pairs

    def current_pair(self) -> Optional[Tuple[int, int]]:
        """the pair awaiting judgment, or None once every pair has been judged"""
        if self.is_complete():
            return None
        first, second = self.pairs[self.cursor]
        return int(first), int(second)

    def record_winner(self, winner: int) -> 'SchedulerState':
        """
        Records that winner beat the other item of the current pair and advances to the next pair.

        Parameters:
            winner (int): index of the winning item, must belong to the current pair

        Returns:
            SchedulerState: self, mutated

        Raises:
            InvalidJudgmentError: if winner is not an integer index, the session is complete
                                  or winner is not in the current pair
        """
        if isinstance(winner, (bool, np.bool_)):
            raise InvalidJudgmentError(f'record_winner({winner!r}) called with a boolean, expected an item index')
        try:
            winner = operator.index(winner)
        except TypeError as err:
            raise InvalidJudgmentError(f'record_winner({winner!r}) called with a non-integer item index') from err
        pair = self.current_pair()
        if pair is None:
            raise InvalidJudgmentError(
                f'record_winner({winner}) called after all {self.num_pairs} pairs were judged'
            )
        first, second = pair
        if winner == first:
            loser = second
            self.first_wins += 1
        elif winner == second:
            loser = first
            self.second_wins += 1
        else:
            raise InvalidJudgmentError(
                f'record_winner({winner}) called but the current pair is ({first}, {second})'
            )
        self.win_matrix[winner, loser] += 1
        self.cursor += 1
        logger.debug('pair %d/%d: %d beat %d', self.cursor, self.num_pairs, winner, loser)
        if self.is_complete():
            logger.info('all %d pairs judged', self.num_pairs)
        return self

    def record_judgment(self, pair_index: int, winner: int) -> 'SchedulerState':
        """record_winner for a judgment event which names the pair it refers to"""
        if pair_index != self.cursor:
            raise InvalidJudgmentError(
                f'record_judgment({pair_index}, {winner}) called but the current pair index is {self.cursor}'
            )
        return self.record_winner(winner)

    def to_dict(self) -> dict:
        """plain python representation, suitable for json"""
        return {
            'num_items': self.num_items,
            'pairs': self.pairs.tolist(),
            'cursor': self.cursor,
            'win_matrix': self.win_matrix.tolist(),
            'first_wins': self.first_wins,
            'second_wins': self.second_wins,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SchedulerState':
        """
        inverse of to_dict

        Raises:
            InsufficientItemsError: if the state covers fewer than 2 items
            ValueError: if the pairs are not a single round-robin over the items,
                        the win matrix is invalid or the cursor is out of range
        """
        num_items = int(data['num_items'])
        if num_items < 2:
            raise InsufficientItemsError(num_items)
        num_pairs = num_items * (num_items - 1) // 2
        pairs = np.asarray(data['pairs'], dtype=np.int64)
        if pairs.shape != (num_pairs, 2):
            raise ValueError(f'expected pairs of shape ({num_pairs}, 2) for {num_items} items, got {pairs.shape}')
        if pairs.min() < 0 or pairs.max() >= num_items:
            raise ValueError(f'pair indices must lie in [0, {num_items})')
        if (pairs[:, 0] == pairs[:, 1]).any():
            raise ValueError('an item cannot be paired with itself')
        if np.unique(np.sort(pairs, axis=1), axis=0).shape[0] != num_pairs:
            raise ValueError('every unordered pair must appear exactly once')
        win_matrix = validate_win_matrix(data['win_matrix'])
        if win_matrix.shape != (num_items, num_items):
            raise ValueError(f'expected a win matrix of shape ({num_items}, {num_items}), got {win_matrix.shape}')
        cursor = int(data['cursor'])
        if not 0 <= cursor <= pairs.shape[0]:
            raise ValueError(f'cursor {cursor} out of range for {pairs.shape[0]} pairs')
        return cls(
            num_items=num_items,
            pairs=pairs,
            cursor=cursor,
            win_matrix=win_matrix,
            first_wins=int(data.get('first_wins', 0)),
            second_wins=int(data.get('second_wins', 0)),
        )


def initialize(
    num_items: int,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    randomize_sides: bool = False,
) -> SchedulerState:
    """
    Creates a fresh ranking session over num_items items.

    Parameters:
        num_items (int): number of items to rank
        seed (int, optional): seed for the pair order, ignored when rng is given
        rng (np.random.Generator, optional): source of randomness for the pair order
        randomize_sides (bool, optional): also shuffle which item of each pair is presented first. Defaults to False.

    Raises:
        ValueError: if num_items is negative
        InsufficientItemsError: if num_items is less than 2
    """
    if num_items < 0:
        raise ValueError(f'num_items must be non-negative, got {num_items}')
    if num_items < 2:
        raise InsufficientItemsError(num_items)
    if rng is None:
        rng = np.random.default_rng(seed=seed)
    pairs = fisher_yates_shuffle(all_pairs(num_items), rng)
    if randomize_sides:
        flip_mask = rng.random(pairs.shape[0]) < 0.5
        pairs[flip_mask] = pairs[flip_mask, ::-1]
    logger.info('scheduled %d pairs for %d items', pairs.shape[0], num_items)
    return SchedulerState(num_items=num_items, pairs=pairs)


def current_pair(state: SchedulerState) -> Optional[Tuple[int, int]]:
    return state.current_pair()


def record_winner(state: SchedulerState, winner: int) -> SchedulerState:
    return state.record_winner(winner)


def is_complete(state: SchedulerState) -> bool:
    return state.is_complete()
