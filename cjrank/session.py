"""Ranking sessions over caller supplied items"""
import logging
from typing import NamedTuple, Optional, Tuple
import numpy as np
from cjrank.core.base import PairwiseScorer, RankedResult
from cjrank.errors import InsufficientItemsError, InvalidJudgmentError
from cjrank.models.thurstone import ThurstoneCaseV
from cjrank.scheduler import SchedulerState, initialize

logger = logging.getLogger(__name__)


class SessionStats(NamedTuple):
    total_comparisons: int
    first_shown_wins: int
    second_shown_wins: int
    remaining: int


class RankingSession:
    """
    Binds a list of item identifiers to a comparison schedule and a scorer.

    Items are addressed by identifier; their position in the list is their index in the win matrix.
    Scores can be requested at any time, pairs that have not been judged yet are simply left out.
    """

    def __init__(
        self,
        items: list,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        scorer: Optional[PairwiseScorer] = None,
        randomize_sides: bool = False,
        state: Optional[SchedulerState] = None,
    ):
        self.items = list(items)
        if len(self.items) < 2:
            raise InsufficientItemsError(len(self.items))
        if len(set(self.items)) != len(self.items):
            raise ValueError('item identifiers must be unique')
        self.item_to_idx = {item: idx for idx, item in enumerate(self.items)}
        if state is None:
            state = initialize(len(self.items), seed=seed, rng=rng, randomize_sides=randomize_sides)
        elif state.num_items != len(self.items):
            raise ValueError(f'state covers {state.num_items} items but {len(self.items)} items were given')
        self.state = state
        if scorer is None:
            scorer = ThurstoneCaseV(self.items)
        elif scorer.num_competitors != len(self.items):
            raise ValueError(f'scorer has {scorer.num_competitors} competitors but {len(self.items)} items were given')
        self.scorer = scorer

    @property
    def progress(self) -> float:
        return self.state.progress

    def is_complete(self) -> bool:
        return self.state.is_complete()

    def current_pair(self) -> Optional[Tuple[object, object]]:
        """the identifiers of the pair awaiting judgment, or None when done"""
        pair = self.state.current_pair()
        if pair is None:
            return None
        return self.items[pair[0]], self.items[pair[1]]

    def judge(self, winner) -> 'RankingSession':
        """record that the item identified by winner beat the other item of the current pair"""
        if winner not in self.item_to_idx:
            raise InvalidJudgmentError(f'judge({winner!r}) called with an unknown item')
        self.state.record_winner(self.item_to_idx[winner])
        return self

    def stats(self) -> SessionStats:
        return SessionStats(
            total_comparisons=self.state.num_judged,
            first_shown_wins=self.state.first_wins,
            second_shown_wins=self.state.second_wins,
            remaining=self.state.num_remaining,
        )

    def result(self) -> RankedResult:
        """score the judgments made so far, best item first"""
        self.scorer.fit(self.state.win_matrix)
        ranked = self.scorer.rank()
        if self.is_complete():
            logger.info('ranked %d items, top item: %r', len(ranked), ranked[0].item)
        return ranked

    def to_dict(self) -> dict:
        return {'items': list(self.items), 'state': self.state.to_dict()}

    @classmethod
    def from_dict(cls, data: dict, scorer: Optional[PairwiseScorer] = None) -> 'RankingSession':
        return cls(items=data['items'], scorer=scorer, state=SchedulerState.from_dict(data['state']))
