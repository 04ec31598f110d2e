"""Classes and functions for working with judgment data and win matrices"""

from typing import List, Optional
import numpy as np
import polars as pl


def validate_win_matrix(win_matrix) -> np.ndarray:
    """
    Checks that win_matrix is a square matrix of non-negative integer counts with a zero diagonal.

    Parameters:
        win_matrix (array-like of shape (n, n)): win_matrix[i, j] is the number of times i beat j

    Returns:
        np.ndarray: the matrix as an int64 array
    """
    win_matrix = np.asarray(win_matrix)
    if win_matrix.ndim != 2 or win_matrix.shape[0] != win_matrix.shape[1]:
        raise ValueError(f'win matrix must be square, got shape {win_matrix.shape}')
    if win_matrix.size and not np.all(np.equal(np.mod(win_matrix, 1), 0)):
        raise ValueError('win matrix must contain integer counts')
    win_matrix = win_matrix.astype(np.int64)
    if (win_matrix < 0).any():
        raise ValueError('win matrix counts must be non-negative')
    if np.diagonal(win_matrix).any():
        raise ValueError('win matrix diagonal must be zero, an item cannot beat itself')
    return win_matrix


def win_matrix_from_judgments(winners, losers, num_items: int) -> np.ndarray:
    """build an (num_items, num_items) win matrix from parallel arrays of winner and loser indices"""
    winners = np.asarray(winners, dtype=np.int64)
    losers = np.asarray(losers, dtype=np.int64)
    if winners.shape != losers.shape:
        raise ValueError('winners and losers must have the same shape')
    if winners.size:
        if min(winners.min(), losers.min()) < 0 or max(winners.max(), losers.max()) >= num_items:
            raise ValueError(f'item indices must lie in [0, {num_items})')
        if (winners == losers).any():
            raise ValueError('an item cannot be judged against itself')
    win_matrix = np.zeros(shape=(num_items, num_items), dtype=np.int64)
    np.add.at(win_matrix, (winners, losers), 1)
    return win_matrix


def win_counts(win_matrix: np.ndarray) -> np.ndarray:
    """total wins per item"""
    return win_matrix.sum(axis=1)


def comparison_counts(win_matrix: np.ndarray) -> np.ndarray:
    """total comparisons each item took part in"""
    return win_matrix.sum(axis=1) + win_matrix.sum(axis=0)


class JudgmentDataset:
    """A table of recorded pairwise judgments, one row per judgment naming the winner and the loser."""

    def __init__(
        self,
        df: pl.DataFrame,
        winner_col: str = 'winner',
        loser_col: str = 'loser',
        items: Optional[List[str]] = None,
        verbose: bool = False,
    ):
        self._init_items(df, [winner_col, loser_col], items)
        self._init_judgments(df, winner_col, loser_col)
        if verbose:
            self._print_stats()

    def _init_items(self, df: pl.DataFrame, item_cols: List[str], items: Optional[List[str]]):
        """Initialize item metadata, items that were never judged may be supplied explicitly."""
        item_series = pl.concat([df[col].cast(pl.Utf8) for col in item_cols])
        seen = item_series.unique().to_list()
        if items is None:
            self.items = sorted(seen)
        else:
            self.items = [str(item) for item in items]
            if len(set(self.items)) != len(self.items):
                raise ValueError('items must be unique')
            unknown = set(seen) - set(self.items)
            if unknown:
                raise ValueError(f'judgments reference unknown items: {sorted(unknown)}')
        self.num_items = len(self.items)
        self.item_to_idx = dict(zip(self.items, range(self.num_items)))

    def _init_judgments(self, df: pl.DataFrame, winner_col: str, loser_col: str):
        """Create numerical winner and loser indices."""
        self.winners = np.array(
            [self.item_to_idx[item] for item in df[winner_col].cast(pl.Utf8).to_list()], dtype=np.int64
        )
        self.losers = np.array(
            [self.item_to_idx[item] for item in df[loser_col].cast(pl.Utf8).to_list()], dtype=np.int64
        )

    def _print_stats(self):
        """Print dataset statistics."""
        print('Loaded judgments with:')
        print(f'{len(self)} judgments')
        print(f'{self.num_items} unique items')

    def __len__(self):
        return self.winners.shape[0]

    def win_matrix(self) -> np.ndarray:
        return win_matrix_from_judgments(self.winners, self.losers, self.num_items)

    @classmethod
    def init_from_arrays(cls, winners: np.ndarray, losers: np.ndarray, items: list):
        """Factory method for creating datasets from index arrays."""
        dataset = cls.__new__(cls)
        dataset.winners = np.asarray(winners, dtype=np.int64)
        dataset.losers = np.asarray(losers, dtype=np.int64)
        dataset.items = list(items)
        dataset.num_items = len(items)
        dataset.item_to_idx = dict(zip(dataset.items, range(dataset.num_items)))
        return dataset
